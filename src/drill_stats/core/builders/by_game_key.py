from __future__ import annotations

from typing import Any

import pandas as pd

from ..types import Snapshot, Table

KEY = "by_game_key"

HEADERS = ["game_key", "sessions", "avg_score_per_sec", "avg_std_score"]


def build(snapshot: Snapshot, config: dict[str, Any]) -> Table:
    table = Table(name=config["destinations"][KEY], headers=list(HEADERS))
    if not snapshot.sessions:
        return table
    frame = pd.DataFrame(
        {
            "game_key": [s.game_key for s in snapshot.sessions],
            "score_per_sec": [float(s.score_per_sec) for s in snapshot.sessions],
            "std_score": [float(s.std_score) for s in snapshot.sessions],
        }
    )
    grouped = frame.groupby("game_key", sort=True).agg(
        sessions=("score_per_sec", "size"),
        avg_score_per_sec=("score_per_sec", "mean"),
        avg_std_score=("std_score", "mean"),
    )
    for game_key, row in grouped.iterrows():
        table.rows.append(
            [
                str(game_key),
                int(row["sessions"]),
                float(row["avg_score_per_sec"]),
                float(row["avg_std_score"]),
            ]
        )
    return table
