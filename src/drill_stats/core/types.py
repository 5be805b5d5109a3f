from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol


@dataclass(frozen=True)
class Session:
    timestamp: str
    local_date: str = ""
    local_hour: int = 0
    time_of_day: str = ""
    user_id: str = ""
    sitdown_id: str = ""
    attempt: int = 0
    score: float = 0
    page_url: str = ""
    game_key: str = ""
    duration: float = 0
    score_per_sec: float = 0
    std_score: float = 0
    problem_count: int = 0


@dataclass(frozen=True)
class Problem:
    timestamp: str
    user_id: str = ""
    game_key: str = ""
    duration: float = 0
    index: int = 0
    operator: str = ""
    operand_a: float = 0
    operand_b: float = 0
    latency_ms: float = 0
    cumulative_ms: float = 0
    # 0 means the problem was not assigned a segment.
    third: int = 0
    decile: int = 0
    correct_answer: str = ""
    final_answer: str = ""
    wrong_full_attempts: int | None = None


@dataclass(frozen=True)
class DailyStat:
    date: str
    sessions: int = 0
    total_duration_seconds: float = 0
    std_dur_sum: float = 0
    weighted_avg_std_score: float = 0


@dataclass(frozen=True)
class Snapshot:
    sessions: tuple[Session, ...] = ()
    problems: tuple[Problem, ...] = ()
    daily_stats: tuple[DailyStat, ...] = ()


@dataclass
class Table:
    name: str
    headers: list[str]
    rows: list[list[Any]] = field(default_factory=list)


@dataclass
class RunSummary:
    run_id: str
    started_at: str
    finished_at: str | None = None
    sources: dict[str, int] = field(default_factory=dict)
    tables: dict[str, int] = field(default_factory=dict)


Logger = Callable[[str], None]


class RowStore(Protocol):
    def read_table(self, name: str) -> list[list[Any]] | None:  # pragma: no cover - protocol
        ...

    def write_table(
        self, name: str, headers: list[str], rows: list[list[Any]]
    ) -> None:  # pragma: no cover - protocol
        ...
