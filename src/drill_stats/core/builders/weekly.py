from __future__ import annotations

import re
from datetime import date
from typing import Any

import pandas as pd

from ..types import Snapshot, Table

KEY = "weekly"

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")

HEADERS = [
    "week",
    "sessions",
    "total_duration_s",
    "std_dur_sum",
    "weighted_avg_std_score",
]


def iso_week_key(text: str) -> str:
    """``YYYY-WW`` for an ISO date string.

    The ISO year is the year of the Thursday in the date's Monday-based week,
    so late December can land in week 01 of the next year and early January in
    week 52/53 of the previous one. Text that is not an ISO date comes back
    unchanged, including compact (``20240105``) and week-date (``2024-W01-3``)
    forms.
    """

    if not isinstance(text, str) or not _ISO_DATE.fullmatch(text):
        return text
    try:
        day = date.fromisoformat(text)
    except ValueError:
        return text
    iso_year, iso_week, _ = day.isocalendar()
    return f"{iso_year:04d}-{iso_week:02d}"


def build(snapshot: Snapshot, config: dict[str, Any]) -> Table:
    table = Table(name=config["destinations"][KEY], headers=list(HEADERS))
    if not snapshot.daily_stats:
        return table
    frame = pd.DataFrame(
        {
            "week": [iso_week_key(d.date) for d in snapshot.daily_stats],
            "sessions": [int(d.sessions) for d in snapshot.daily_stats],
            "total_duration_s": [float(d.total_duration_seconds) for d in snapshot.daily_stats],
            "std_dur_sum": [float(d.std_dur_sum) for d in snapshot.daily_stats],
        }
    )
    weeks = frame.groupby("week", sort=True)[["sessions", "total_duration_s", "std_dur_sum"]].sum()
    for week, row in weeks.iterrows():
        duration = float(row["total_duration_s"])
        std_dur_sum = float(row["std_dur_sum"])
        table.rows.append(
            [
                str(week),
                int(row["sessions"]),
                duration,
                std_dur_sum,
                std_dur_sum / duration if duration else 0.0,
            ]
        )
    return table
