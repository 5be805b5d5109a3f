from datetime import date, datetime

import pytest

from drill_stats.core.coercion import to_number, to_optional_int, to_text
from drill_stats.core.errors import CellParseError
from drill_stats.core.ingest import data_rows, parse_daily_stats, parse_problems, parse_sessions, read_snapshot
from drill_stats.core.storage import MemoryRowStore
from tests.conftest import PROBLEM_HEADERS, SESSION_HEADERS, problem_row, session_row


def test_coercion_defaults():
    assert to_number(None) == 0
    assert to_number("") == 0
    assert to_number("n/a") == 0
    assert to_number("1,200") == 1200
    assert to_number("2.5") == 2.5
    assert isinstance(to_number(3.0), int)
    assert to_optional_int("") is None
    assert to_optional_int("2") == 2
    assert to_text(None) == ""
    assert to_text(1700000000000.0) == "1700000000000"
    assert to_text(date(2024, 1, 5)) == "2024-01-05"
    assert to_text(datetime(2024, 1, 5)) == "2024-01-05"


def test_data_rows_missing_or_blank_leading_cell():
    assert data_rows(None) == []
    assert data_rows([]) == []
    assert data_rows([["timestamp"]]) == []
    assert data_rows([["timestamp", "x"], ["", "1"], ["1001", "2"]]) == []
    assert data_rows([["timestamp", "x"], ["1001", "2"]]) == [["1001", "2"]]


def test_parse_sessions_maps_fixed_columns():
    sessions = parse_sessions([SESSION_HEADERS, session_row("1001", "2024-01-01", duration=75)])
    assert len(sessions) == 1
    session = sessions[0]
    assert session.timestamp == "1001"
    assert session.local_date == "2024-01-01"
    assert session.duration == 75
    assert session.game_key == "g1"
    assert session.problem_count == 10


def test_parse_problems_optional_trailing_column():
    rows = [PROBLEM_HEADERS, problem_row("1001", "+", 3, 4, 900), problem_row("1001", "-", 9, 2, 700) + [2]]
    problems = parse_problems(rows)
    assert problems[0].wrong_full_attempts is None
    assert problems[1].wrong_full_attempts == 2
    assert problems[0].operand_a == 3
    assert problems[0].third == 0


def test_short_rows_default_missing_cells():
    problems = parse_problems([PROBLEM_HEADERS, ["1001", "u1"]])
    assert problems[0].operator == ""
    assert problems[0].latency_ms == 0
    assert problems[0].wrong_full_attempts is None


def test_malformed_numbers_coerce_to_zero_by_default():
    problems = parse_problems([PROBLEM_HEADERS, problem_row("1001", "+", "three", 4, "slow")])
    assert problems[0].operand_a == 0
    assert problems[0].latency_ms == 0


def test_strict_mode_raises_cell_parse_error():
    rows = [PROBLEM_HEADERS, problem_row("1001", "+", 3, 4, 100), problem_row("1001", "+", 3, 4, "slow")]
    with pytest.raises(CellParseError) as excinfo:
        parse_problems(rows, strict=True)
    assert excinfo.value.row == 3
    assert excinfo.value.column == "latency_ms"
    assert excinfo.value.value == "slow"


def test_strict_mode_still_defaults_blank_cells():
    problems = parse_problems([PROBLEM_HEADERS, problem_row("1001", "+", 3, "", 100)], strict=True)
    assert problems[0].operand_b == 0


def test_malformed_date_passes_through():
    daily = parse_daily_stats([["date", "sessions"], ["last tuesday", "3"]])
    assert daily[0].date == "last tuesday"
    assert daily[0].sessions == 3
    assert daily[0].total_duration_seconds == 0


def test_read_snapshot_missing_sources_are_empty(config):
    messages = []
    snapshot = read_snapshot(MemoryRowStore(), config, messages.append)
    assert snapshot.sessions == ()
    assert snapshot.problems == ()
    assert snapshot.daily_stats == ()
    assert messages == ["ingest: sessions=0 problems=0 daily_stats=0"]


def test_read_snapshot_strict_from_config(config, store):
    store.tables[config["sources"]["sessions"]][1][10] = "ninety"
    config["strict"] = True
    with pytest.raises(CellParseError):
        read_snapshot(store, config)
