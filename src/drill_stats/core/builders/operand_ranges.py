from __future__ import annotations

from typing import Any

from ..buckets import bucket, bucket_rank
from ..types import Problem, Snapshot, Table
from .grouping import latency, summarize_groups, summary_cells

KEY = "operand_ranges"

HEADERS = ["operator", "range_a", "range_b", "count", "mean_ms", "median_ms", "p90_ms", "p95_ms"]


def range_key(problem: Problem) -> tuple[str, str, str]:
    return (problem.operator, bucket(problem.operand_a), bucket(problem.operand_b))


def build(snapshot: Snapshot, config: dict[str, Any]) -> Table:
    groups = summarize_groups(snapshot.problems, range_key, latency)
    table = Table(name=config["destinations"][KEY], headers=list(HEADERS))
    ordered = sorted(
        groups.items(),
        key=lambda item: (item[0][0], bucket_rank(item[0][1]), bucket_rank(item[0][2])),
    )
    for (operator, range_a, range_b), summary in ordered:
        table.rows.append(
            [operator, range_a, range_b, summary.count, *summary_cells(summary)]
        )
    return table
