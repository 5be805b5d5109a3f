from __future__ import annotations

from typing import Any

from ..types import Snapshot, Table
from .grouping import operator_durations, rate, session_durations

KEY = "throughput"

OVERALL = "overall"

HEADERS = ["scope", "problems", "duration_s", "problems_per_sec", "std_score_contribution"]


def build(snapshot: Snapshot, config: dict[str, Any]) -> Table:
    operators = list(config["operators"])
    scale = float(config["normalization_seconds"])
    problems = snapshot.problems
    table = Table(name=config["destinations"][KEY], headers=list(HEADERS))
    if not problems and not snapshot.sessions:
        return table

    def row(scope: str, count: int, seconds: float) -> list[Any]:
        per_second = rate(count, seconds)
        return [scope, count, seconds, per_second, per_second * scale]

    total_seconds = float(sum(session_durations(snapshot.sessions).values()))
    table.rows.append(row(OVERALL, len(problems), total_seconds))

    counts: dict[str, int] = {}
    for problem in problems:
        if problem.operator in operators:
            counts[problem.operator] = counts.get(problem.operator, 0) + 1
    durations = operator_durations(problems, snapshot.sessions, operators)
    for operator in operators:
        table.rows.append(row(operator, counts.get(operator, 0), durations.get(operator, 0.0)))
    return table
