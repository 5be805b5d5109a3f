from __future__ import annotations

from typing import Any

import pytest

from drill_stats.core.config import merge_config
from drill_stats.core.ingest import parse_daily_stats, parse_problems, parse_sessions
from drill_stats.core.storage import MemoryRowStore
from drill_stats.core.types import Snapshot

SESSION_HEADERS = [
    "timestamp",
    "localDate",
    "localHour",
    "timeOfDay",
    "userId",
    "sitdownId",
    "attempt",
    "score",
    "pageUrl",
    "gameKey",
    "duration",
    "scorePerSec",
    "stdScore",
    "problemCount",
]

PROBLEM_HEADERS = [
    "timestamp",
    "userId",
    "gameKey",
    "duration",
    "index",
    "operator",
    "operandA",
    "operandB",
    "latencyMs",
    "cumulativeMs",
    "third",
    "decile",
    "correctAnswer",
    "finalAnswer",
    "wrongFullAttempts",
]

DAILY_HEADERS = ["date", "sessions", "totalDurationSeconds", "stdDurSum", "weightedAvgStdScore"]


def session_row(
    timestamp: str,
    local_date: str,
    *,
    game_key: str = "g1",
    duration: float = 60,
    score_per_sec: float = 0.5,
    std_score: float = 100,
    score: float = 30,
) -> list[Any]:
    return [
        timestamp,
        local_date,
        9,
        "morning",
        "u1",
        "sit-1",
        1,
        score,
        "https://example.test/drill",
        game_key,
        duration,
        score_per_sec,
        std_score,
        10,
    ]


def problem_row(
    timestamp: str,
    operator: str,
    a: Any,
    b: Any,
    latency: float,
    *,
    third: Any = 0,
    decile: Any = 0,
    index: int = 1,
) -> list[Any]:
    return [
        timestamp,
        "u1",
        "g1",
        60,
        index,
        operator,
        a,
        b,
        latency,
        latency,
        third,
        decile,
        "",
        "",
    ]


def daily_row(day: str, sessions: int, duration: float, std_dur_sum: float) -> list[Any]:
    return [day, sessions, duration, std_dur_sum, 0]


def sample_sessions() -> list[list[Any]]:
    return [
        SESSION_HEADERS,
        session_row("1001", "2024-01-01", game_key="g1", duration=60, score_per_sec=0.5, std_score=100),
        session_row("1002", "2024-01-01", game_key="g2", duration=120, score_per_sec=1.0, std_score=110),
        session_row("1003", "2024-01-02", game_key="g1", duration=90, score_per_sec=0.8, std_score=90),
    ]


def sample_problems() -> list[list[Any]]:
    return [
        PROBLEM_HEADERS,
        problem_row("1001", "+", 3, 4, 1000, third=1, decile=1, index=1),
        problem_row("1001", "+", 5, 6, 2000, third=2, decile=5, index=2),
        problem_row("1001", "*", 7, 8, 3000, third=3, decile=10, index=3),
        problem_row("1002", "*", 12, 3, 4000, third=1, decile=2, index=1),
        problem_row("1002", "/", 24, 6, 5000, third=2, decile=6, index=2),
        problem_row("1002", "x", 2, 2, 100, index=3),
        problem_row("1003", "+", 3, 4, 1500, third=1, decile=1, index=1),
        problem_row("9999", "-", 10, 5, 800, third=1, decile=3, index=1),
    ]


def sample_daily_stats() -> list[list[Any]]:
    return [
        DAILY_HEADERS,
        daily_row("2024-01-01", 2, 180, 18600),
        daily_row("2024-01-02", 1, 90, 8100),
        daily_row("2024-01-08", 3, 300, 30000),
    ]


def make_snapshot(
    sessions: list[list[Any]] | None = None,
    problems: list[list[Any]] | None = None,
    daily_stats: list[list[Any]] | None = None,
) -> Snapshot:
    return Snapshot(
        sessions=parse_sessions(sessions),
        problems=parse_problems(problems),
        daily_stats=parse_daily_stats(daily_stats),
    )


@pytest.fixture()
def config() -> dict[str, Any]:
    return merge_config(None)


@pytest.fixture()
def snapshot() -> Snapshot:
    return make_snapshot(sample_sessions(), sample_problems(), sample_daily_stats())


@pytest.fixture()
def store(config) -> MemoryRowStore:
    sources = config["sources"]
    return MemoryRowStore(
        {
            sources["sessions"]: sample_sessions(),
            sources["problems"]: sample_problems(),
            sources["daily_stats"]: sample_daily_stats(),
        }
    )
