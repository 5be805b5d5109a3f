from __future__ import annotations

from typing import Any, Callable

from .coercion import is_blank, parse_number, to_int, to_number, to_optional_int, to_text
from .errors import CellParseError
from .logs import null_logger
from .types import DailyStat, Logger, Problem, RowStore, Session, Snapshot

# Source column order is fixed; each entry maps a column position to a field
# and the coercion kind applied to it.
SESSION_COLUMNS: tuple[tuple[str, str], ...] = (
    ("timestamp", "key"),
    ("local_date", "text"),
    ("local_hour", "int"),
    ("time_of_day", "text"),
    ("user_id", "text"),
    ("sitdown_id", "text"),
    ("attempt", "int"),
    ("score", "number"),
    ("page_url", "text"),
    ("game_key", "text"),
    ("duration", "number"),
    ("score_per_sec", "number"),
    ("std_score", "number"),
    ("problem_count", "int"),
)

PROBLEM_COLUMNS: tuple[tuple[str, str], ...] = (
    ("timestamp", "key"),
    ("user_id", "text"),
    ("game_key", "text"),
    ("duration", "number"),
    ("index", "int"),
    ("operator", "text"),
    ("operand_a", "number"),
    ("operand_b", "number"),
    ("latency_ms", "number"),
    ("cumulative_ms", "number"),
    ("third", "int"),
    ("decile", "int"),
    ("correct_answer", "text"),
    ("final_answer", "text"),
    ("wrong_full_attempts", "optional_int"),
)

DAILY_STAT_COLUMNS: tuple[tuple[str, str], ...] = (
    ("date", "text"),
    ("sessions", "int"),
    ("total_duration_seconds", "number"),
    ("std_dur_sum", "number"),
    ("weighted_avg_std_score", "number"),
)

_LENIENT: dict[str, Callable[[Any], Any]] = {
    "key": to_text,
    "text": to_text,
    "int": to_int,
    "number": to_number,
    "optional_int": to_optional_int,
}

_NUMERIC_KINDS = {"int", "number", "optional_int"}


def data_rows(raw: list[list[Any]] | None) -> list[list[Any]]:
    """Strip the header row; a missing source or blank leading cell means no data."""

    if not raw or len(raw) < 2:
        return []
    rows = [list(row) for row in raw[1:]]
    if not rows[0] or is_blank(rows[0][0]):
        return []
    return rows


def _coerce_row(
    row: list[Any],
    columns: tuple[tuple[str, str], ...],
    *,
    source: str,
    row_number: int,
    strict: bool,
) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for position, (field_name, kind) in enumerate(columns):
        cell = row[position] if position < len(row) else None
        if strict and kind in _NUMERIC_KINDS and not is_blank(cell):
            try:
                parse_number(cell)
            except ValueError as exc:
                raise CellParseError(source, row_number, field_name, cell) from exc
        values[field_name] = _LENIENT[kind](cell)
    return values


def parse_records(
    raw: list[list[Any]] | None,
    columns: tuple[tuple[str, str], ...],
    factory: Callable[..., Any],
    *,
    source: str = "",
    strict: bool = False,
) -> tuple[Any, ...]:
    records = []
    # Row numbers are 1-based and count the header row, as a sheet shows them.
    for offset, row in enumerate(data_rows(raw), start=2):
        values = _coerce_row(
            row, columns, source=source, row_number=offset, strict=strict
        )
        records.append(factory(**values))
    return tuple(records)


def parse_sessions(raw, *, strict: bool = False) -> tuple[Session, ...]:
    return parse_records(raw, SESSION_COLUMNS, Session, source="sessions", strict=strict)


def parse_problems(raw, *, strict: bool = False) -> tuple[Problem, ...]:
    return parse_records(raw, PROBLEM_COLUMNS, Problem, source="problems", strict=strict)


def parse_daily_stats(raw, *, strict: bool = False) -> tuple[DailyStat, ...]:
    return parse_records(
        raw, DAILY_STAT_COLUMNS, DailyStat, source="daily_stats", strict=strict
    )


def read_snapshot(
    store: RowStore, config: dict[str, Any], logger: Logger | None = None
) -> Snapshot:
    logger = logger or null_logger
    sources = config["sources"]
    strict = bool(config.get("strict", False))
    snapshot = Snapshot(
        sessions=parse_sessions(store.read_table(sources["sessions"]), strict=strict),
        problems=parse_problems(store.read_table(sources["problems"]), strict=strict),
        daily_stats=parse_daily_stats(
            store.read_table(sources["daily_stats"]), strict=strict
        ),
    )
    logger(
        f"ingest: sessions={len(snapshot.sessions)} problems={len(snapshot.problems)} "
        f"daily_stats={len(snapshot.daily_stats)}"
    )
    return snapshot
