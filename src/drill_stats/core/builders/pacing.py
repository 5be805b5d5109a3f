from __future__ import annotations

from typing import Any, Callable

from ..types import Problem, Snapshot, Table
from .grouping import latency, summarize_groups, summary_cells

HEADERS_THIRD = ["third", "count", "mean_ms", "median_ms", "p90_ms", "p95_ms"]
HEADERS_DECILE = ["decile", "count", "mean_ms", "median_ms", "p90_ms", "p95_ms"]


def _segment_table(
    snapshot: Snapshot,
    name: str,
    headers: list[str],
    segment: Callable[[Problem], int],
) -> Table:
    groups = summarize_groups(
        snapshot.problems, lambda p: segment(p) or None, latency
    )
    table = Table(name=name, headers=list(headers))
    for key in sorted(groups):
        summary = groups[key]
        table.rows.append([key, summary.count, *summary_cells(summary)])
    return table


def build_by_third(snapshot: Snapshot, config: dict[str, Any]) -> Table:
    return _segment_table(
        snapshot,
        config["destinations"]["pacing_third"],
        HEADERS_THIRD,
        lambda p: p.third,
    )


def build_by_decile(snapshot: Snapshot, config: dict[str, Any]) -> Table:
    return _segment_table(
        snapshot,
        config["destinations"]["pacing_decile"],
        HEADERS_DECILE,
        lambda p: p.decile,
    )
