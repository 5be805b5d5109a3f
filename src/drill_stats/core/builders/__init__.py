"""Derived-table builders, in the order a run writes them.

Every builder takes the same read-only snapshot and the run config and returns
one ``Table``. Builders never see each other's output.
"""

from __future__ import annotations

from typing import Any, Callable

from ..types import Snapshot, Table
from . import (
    by_game_key,
    by_operator,
    consistency,
    hardest_facts,
    heatmap,
    operand_ranges,
    pacing,
    session_aggregates,
    throughput,
    trend,
    weekly,
)

Builder = Callable[[Snapshot, dict[str, Any]], Table]

BUILDERS: tuple[tuple[str, Builder], ...] = (
    ("by_operator", by_operator.build),
    ("operand_ranges", operand_ranges.build),
    ("heatmap_mul", heatmap.build_multiplication),
    ("heatmap_div", heatmap.build_division),
    ("hardest_facts", hardest_facts.build),
    ("pacing_third", pacing.build_by_third),
    ("pacing_decile", pacing.build_by_decile),
    ("std_score_trend", trend.build),
    ("consistency", consistency.build),
    ("throughput", throughput.build),
    ("session_aggregates", session_aggregates.build),
    ("by_game_key", by_game_key.build),
    ("weekly", weekly.build),
)

__all__ = ["BUILDERS", "Builder"]
