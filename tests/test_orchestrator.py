import copy

import pytest

from drill_stats.core import orchestrator as orchestrator_mod
from drill_stats.core.builders import BUILDERS
from drill_stats.core.errors import RunInProgressError
from drill_stats.core.orchestrator import Orchestrator, build_tables, single_flight
from drill_stats.core.storage import MemoryRowStore
from drill_stats.core.types import Snapshot
from tests.conftest import sample_daily_stats, sample_problems, sample_sessions


def test_run_writes_every_destination(store, config):
    messages = []
    summary = Orchestrator(store, logger=messages.append).run()
    destinations = config["destinations"]
    assert len(BUILDERS) == len(destinations) == 13
    for key, _ in BUILDERS:
        name = destinations[key]
        assert name in store.tables
        assert summary.tables[name] == len(store.tables[name]) - 1
    assert summary.sources == {"sessions": 3, "problems": 8, "daily_stats": 3}
    assert summary.finished_at is not None
    assert messages[0].endswith("recompute started")
    assert any("wrote Stats_ByOperator rows=4" in msg for msg in messages)
    assert messages[-1].endswith("recompute finished tables=13")


def test_run_replaces_existing_tables(store, config):
    name = config["destinations"]["hardest_facts"]
    store.tables[name] = [["stale"], ["row"]] * 50
    Orchestrator(store).run()
    assert store.tables[name][0] == ["operator", "a", "b", "mean_ms", "count"]
    assert len(store.tables[name]) == 8


def test_recompute_is_idempotent(store):
    orchestrator = Orchestrator(store)
    orchestrator.run()
    first = copy.deepcopy(store.tables)
    orchestrator.run()
    assert store.tables == first
    assert repr(store.tables) == repr(first)


def test_empty_input_writes_header_only_tables(config):
    store = MemoryRowStore()
    summary = Orchestrator(store).run()
    assert set(summary.tables.values()) == {0}
    for name in config["destinations"].values():
        assert len(store.tables[name]) == 1
        assert store.tables[name][0]


def test_header_only_sources_are_empty(config):
    sources = config["sources"]
    store = MemoryRowStore(
        {
            sources["sessions"]: sample_sessions()[:1],
            sources["problems"]: sample_problems()[:1],
            sources["daily_stats"]: sample_daily_stats()[:1],
        }
    )
    summary = Orchestrator(store).run()
    assert set(summary.tables.values()) == {0}


def test_source_and_destination_names_come_from_config():
    store = MemoryRowStore(
        {
            "raw_sessions": sample_sessions(),
            "raw_problems": sample_problems(),
            "raw_daily": sample_daily_stats(),
        }
    )
    config = {
        "sources": {"sessions": "raw_sessions", "problems": "raw_problems", "daily_stats": "raw_daily"},
        "destinations": {"weekly": "Weekly Rollup"},
    }
    summary = Orchestrator(store, config).run()
    assert summary.sources["problems"] == 8
    assert len(store.tables["Weekly Rollup"]) == 3


def test_builder_failure_aborts_remaining_sequence(store, config, monkeypatch):
    def explode(snapshot, cfg):
        raise ZeroDivisionError("boom")

    sequence = list(BUILDERS)
    sequence[2] = ("heatmap_mul", explode)
    monkeypatch.setattr(orchestrator_mod, "BUILDERS", tuple(sequence))
    later = config["destinations"]["weekly"]
    store.tables[later] = [["previous"], ["run"]]
    messages = []
    with pytest.raises(ZeroDivisionError):
        Orchestrator(store, logger=messages.append).run()
    assert config["destinations"]["by_operator"] in store.tables
    assert config["destinations"]["operand_ranges"] in store.tables
    assert store.tables[later] == [["previous"], ["run"]]
    assert any("[ERROR] heatmap_mul: ZeroDivisionError: boom" in msg for msg in messages)


def test_overlapping_run_is_rejected(store):
    with single_flight("test"):
        with pytest.raises(RunInProgressError):
            Orchestrator(store).run()
    Orchestrator(store).run()


def test_build_tables_does_not_touch_snapshot(snapshot, config):
    before = copy.deepcopy(snapshot)
    tables = build_tables(snapshot, config)
    assert len(tables) == 13
    assert snapshot == before


def test_build_tables_on_empty_snapshot(config):
    tables = build_tables(Snapshot(), config)
    assert all(table.rows == [] for table in tables)
    assert all(table.headers for table in tables)
