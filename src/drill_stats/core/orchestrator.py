from __future__ import annotations

from contextlib import contextmanager
from threading import Lock
from typing import Any, Iterator

from .builders import BUILDERS
from .config import merge_config
from .errors import RunInProgressError
from .ingest import read_snapshot
from .logs import logger_from_config
from .types import Logger, RowStore, RunSummary, Snapshot, Table
from .utils import make_run_id, now_iso

# Process-local: runs clear and rewrite shared destination tables, so only one
# may be in flight at a time.
_RUN_LOCK = Lock()


@contextmanager
def single_flight(reason: str = "") -> Iterator[None]:
    if not _RUN_LOCK.acquire(blocking=False):
        raise RunInProgressError(f"a recompute is already running{': ' + reason if reason else ''}")
    try:
        yield
    finally:
        _RUN_LOCK.release()


def build_tables(snapshot: Snapshot, config: dict[str, Any]) -> list[Table]:
    return [build(snapshot, config) for _, build in BUILDERS]


class Orchestrator:
    """Full recompute of every derived table from one ingested snapshot.

    Tables are written one at a time in ``BUILDERS`` order. If a builder or a
    write fails the run stops there: earlier tables keep their new contents and
    later ones keep whatever the previous run left.
    """

    def __init__(
        self,
        store: RowStore,
        config: dict[str, Any] | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.store = store
        self.config = merge_config(config)
        self.logger = logger or logger_from_config(self.config)

    def run(self) -> RunSummary:
        with single_flight():
            summary = RunSummary(run_id=make_run_id(), started_at=now_iso())
            self.logger(f"[{summary.run_id}] recompute started")
            snapshot = read_snapshot(self.store, self.config, self.logger)
            summary.sources = {
                "sessions": len(snapshot.sessions),
                "problems": len(snapshot.problems),
                "daily_stats": len(snapshot.daily_stats),
            }
            for key, build in BUILDERS:
                try:
                    table = build(snapshot, self.config)
                    self.store.write_table(table.name, table.headers, table.rows)
                except Exception as exc:
                    self.logger(f"[{summary.run_id}] [ERROR] {key}: {type(exc).__name__}: {exc}")
                    raise
                summary.tables[table.name] = len(table.rows)
                self.logger(f"[{summary.run_id}] wrote {table.name} rows={len(table.rows)}")
            summary.finished_at = now_iso()
            self.logger(f"[{summary.run_id}] recompute finished tables={len(summary.tables)}")
            return summary
