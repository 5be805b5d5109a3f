from __future__ import annotations

from typing import Any

from .. import stats
from ..types import Snapshot, Table
from .grouping import group_values, latency

KEY = "session_aggregates"

HEADERS = [
    "timestamp",
    "local_date",
    "user_id",
    "game_key",
    "attempt",
    "score",
    "duration_s",
    "score_per_sec",
    "std_score",
    "mean_ms",
    "p90_ms",
    "p95_ms",
    "problems",
]


def build(snapshot: Snapshot, config: dict[str, Any]) -> Table:
    latencies = group_values(snapshot.problems, lambda p: p.timestamp, latency)
    table = Table(name=config["destinations"][KEY], headers=list(HEADERS))
    # One row per session row, duplicates included.
    for session in snapshot.sessions:
        values = latencies.get(session.timestamp, [])
        table.rows.append(
            [
                session.timestamp,
                session.local_date,
                session.user_id,
                session.game_key,
                session.attempt,
                session.score,
                session.duration,
                session.score_per_sec,
                session.std_score,
                stats.mean(values),
                stats.percentile(values, 0.9),
                stats.percentile(values, 0.95),
                len(values),
            ]
        )
    return table
