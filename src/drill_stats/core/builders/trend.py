"""Standardized-score trend with a trailing rolling mean.

The window counts dates present in the data, not calendar days: with gaps in
the log, seven entries can span more than a week.
"""

from __future__ import annotations

from typing import Any

import pandas as pd

from ..types import Snapshot, Table

KEY = "std_score_trend"

HEADERS = ["date", "avg_std_score", "rolling_avg_std_score"]


def daily_averages(snapshot: Snapshot) -> pd.Series:
    frame = pd.DataFrame(
        {
            "date": [s.local_date for s in snapshot.sessions],
            "std_score": [float(s.std_score) for s in snapshot.sessions],
        }
    )
    # ISO dates are zero padded, so lexicographic order is date order.
    return frame.groupby("date", sort=True)["std_score"].mean()


def build(snapshot: Snapshot, config: dict[str, Any]) -> Table:
    table = Table(name=config["destinations"][KEY], headers=list(HEADERS))
    if not snapshot.sessions:
        return table
    window = int(config["rolling_window"])
    averages = daily_averages(snapshot)
    values = [float(v) for v in averages.to_list()]
    for idx, (day, avg) in enumerate(zip(averages.index, values)):
        trailing = values[max(0, idx - window + 1) : idx + 1]
        table.rows.append([str(day), avg, sum(trailing) / len(trailing)])
    return table
