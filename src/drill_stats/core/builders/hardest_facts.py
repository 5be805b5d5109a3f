from __future__ import annotations

from typing import Any

from ..types import Problem, Snapshot, Table
from .grouping import latency, summarize_groups

KEY = "hardest_facts"

HEADERS = ["operator", "a", "b", "mean_ms", "count"]


def fact_key(problem: Problem) -> tuple[str, float, float]:
    return (problem.operator, problem.operand_a, problem.operand_b)


def build(snapshot: Snapshot, config: dict[str, Any]) -> Table:
    top_k = int(config["top_k"])
    groups = summarize_groups(snapshot.problems, fact_key, latency)
    # Stable sort: groups tied on mean and count keep first-seen order.
    ranked = sorted(
        groups.items(), key=lambda item: (-item[1].mean, -item[1].count)
    )
    table = Table(name=config["destinations"][KEY], headers=list(HEADERS))
    for (operator, a, b), summary in ranked[:top_k]:
        table.rows.append([operator, a, b, summary.mean, summary.count])
    return table
