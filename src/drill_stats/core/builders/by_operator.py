from __future__ import annotations

from typing import Any

from ..types import Snapshot, Table
from .grouping import latency, operator_durations, rate, summarize, summarize_groups, summary_cells

KEY = "by_operator"

HEADERS = [
    "operator",
    "count",
    "share",
    "mean_ms",
    "median_ms",
    "p90_ms",
    "p95_ms",
    "session_duration_s",
    "problems_per_sec",
    "std_score_contribution",
]


def build(snapshot: Snapshot, config: dict[str, Any]) -> Table:
    operators = list(config["operators"])
    scale = float(config["normalization_seconds"])
    problems = snapshot.problems
    total = len(problems)
    groups = summarize_groups(
        problems,
        lambda p: p.operator if p.operator in operators else None,
        latency,
    )
    table = Table(name=config["destinations"][KEY], headers=list(HEADERS))
    if not problems:
        return table
    durations = operator_durations(problems, snapshot.sessions, operators)
    # Every fixed operator gets a row; one with no problems reports zeros.
    for operator in operators:
        summary = groups.get(operator) or summarize(())
        seconds = durations.get(operator, 0.0)
        per_second = rate(summary.count, seconds)
        table.rows.append(
            [
                operator,
                summary.count,
                summary.count / total if total else 0.0,
                *summary_cells(summary),
                seconds,
                per_second,
                per_second * scale,
            ]
        )
    return table
