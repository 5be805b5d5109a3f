"""Mean latency grids by operand range for the two heatmap operators.

Rows are the range of operand A, columns the range of operand B, both in
``BUCKET_ORDER``. Problems with an operand in the empty bucket are left out.
A cell with no problems is written as ``""`` so it reads differently from a
measured zero.
"""

from __future__ import annotations

from typing import Any

from .. import stats
from ..buckets import BUCKET_ORDER
from ..types import Snapshot, Table
from .grouping import group_values, latency
from .operand_ranges import range_key

BLANK_CELL = ""


def build_heatmap(snapshot: Snapshot, operator: str, name: str) -> Table:
    table = Table(name=name, headers=[f"{operator} A\\B", *BUCKET_ORDER])
    problems = [p for p in snapshot.problems if p.operator == operator]
    if not problems:
        return table
    cells = group_values(problems, range_key, latency)
    for range_a in BUCKET_ORDER:
        row: list[Any] = [range_a]
        for range_b in BUCKET_ORDER:
            values = cells.get((operator, range_a, range_b))
            row.append(stats.mean(values) if values else BLANK_CELL)
        table.rows.append(row)
    return table


def build_multiplication(snapshot: Snapshot, config: dict[str, Any]) -> Table:
    operator = config["heatmap_operators"][0]
    return build_heatmap(snapshot, operator, config["destinations"]["heatmap_mul"])


def build_division(snapshot: Snapshot, config: dict[str, Any]) -> Table:
    operator = config["heatmap_operators"][1]
    return build_heatmap(snapshot, operator, config["destinations"]["heatmap_div"])
