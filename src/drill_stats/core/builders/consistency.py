from __future__ import annotations

from typing import Any

from .. import stats
from ..types import Snapshot, Table
from .grouping import group_values, latency

KEY = "consistency"

HEADERS = ["operator", "count", "mean_ms", "stddev_ms", "mad_ms", "cv"]


def build(snapshot: Snapshot, config: dict[str, Any]) -> Table:
    operators = list(config["operators"])
    groups = group_values(
        snapshot.problems,
        lambda p: p.operator if p.operator in operators else None,
        latency,
    )
    table = Table(name=config["destinations"][KEY], headers=list(HEADERS))
    if not snapshot.problems:
        return table
    for operator in operators:
        values = groups.get(operator, [])
        table.rows.append(
            [
                operator,
                len(values),
                stats.mean(values),
                stats.stddev(values),
                stats.mad(values),
                stats.coefficient_of_variation(values),
            ]
        )
    return table
