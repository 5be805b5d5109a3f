from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any

import yaml
from jsonschema import validate

DEFAULT_CONFIG: dict[str, Any] = {
    "sources": {
        "sessions": "Sessions",
        "problems": "Problems",
        "daily_stats": "DailyStats",
    },
    # Destination table names, keyed by builder id.
    "destinations": {
        "by_operator": "Stats_ByOperator",
        "operand_ranges": "Stats_OperandRanges",
        "heatmap_mul": "Heatmap_Multiplication",
        "heatmap_div": "Heatmap_Division",
        "hardest_facts": "Stats_HardestFacts",
        "pacing_third": "Pacing_ByThird",
        "pacing_decile": "Pacing_ByDecile",
        "std_score_trend": "Trend_StdScore",
        "consistency": "Stats_Consistency",
        "throughput": "Stats_Throughput",
        "session_aggregates": "Session_Aggregates",
        "by_game_key": "Stats_ByGameKey",
        "weekly": "Stats_Weekly",
    },
    "top_k": 20,
    "rolling_window": 7,
    # Throughput is scaled to problems per this many seconds.
    "normalization_seconds": 120,
    "operators": ["+", "-", "*", "/"],
    # Multiplication first, division second.
    "heatmap_operators": ["*", "/"],
    "strict": False,
    "log_path": None,
}

_SCHEMA_PATH = Path(__file__).resolve().parents[1] / "schemas" / "config.schema.json"
_schema_cache: dict[str, Any] | None = None


def config_schema() -> dict[str, Any]:
    global _schema_cache
    if _schema_cache is None:
        _schema_cache = json.loads(_SCHEMA_PATH.read_text(encoding="utf-8"))
    return _schema_cache


def merge_config(config: dict[str, Any] | None) -> dict[str, Any]:
    merged = deepcopy(DEFAULT_CONFIG)
    if config:
        _deep_merge(merged, config)
    validate(instance=merged, schema=config_schema())
    return merged


def _deep_merge(target: dict[str, Any], incoming: dict[str, Any]) -> None:
    for key, value in incoming.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = value


def load_settings(path: str | Path | None) -> dict[str, Any]:
    if not path:
        return {}
    path = Path(path)
    content = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        return json.loads(content)
    return yaml.safe_load(content) or {}
