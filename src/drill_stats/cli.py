from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path

from drill_stats.core.config import load_settings, merge_config
from drill_stats.core.logs import file_logger
from drill_stats.core.orchestrator import Orchestrator
from drill_stats.core.storage import SqliteRowStore, import_csv
from drill_stats.core.utils import json_dumps


def cmd_recompute(db_path: str, settings_path: str | None, log_path: str | None) -> None:
    config = merge_config(load_settings(settings_path))
    logger = file_logger(log_path) if log_path else None
    store = SqliteRowStore(Path(db_path))
    summary = Orchestrator(store, config, logger=logger).run()
    print(
        json_dumps(
            {
                "run_id": summary.run_id,
                "started_at": summary.started_at,
                "finished_at": summary.finished_at,
                "sources": summary.sources,
                "tables": summary.tables,
            }
        )
    )


def cmd_import_csv(db_path: str, table: str, file_path: str) -> None:
    store = SqliteRowStore(Path(db_path))
    count = import_csv(store, table, Path(file_path))
    print(f"{table}: {count} rows")


def cmd_show(db_path: str, table: str) -> None:
    store = SqliteRowStore(Path(db_path))
    rows = store.read_table(table)
    if rows is None:
        raise SystemExit(f"Unknown table: {table}")
    writer = csv.writer(sys.stdout)
    for row in rows:
        writer.writerow(["" if value is None else value for value in row])


def cmd_list_tables(db_path: str) -> None:
    store = SqliteRowStore(Path(db_path))
    for name in store.list_tables():
        print(name)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="drill-stats")
    sub = parser.add_subparsers(dest="command", required=True)

    recompute_parser = sub.add_parser("recompute")
    recompute_parser.add_argument("--db", required=True)
    recompute_parser.add_argument("--settings")
    recompute_parser.add_argument("--log")

    import_parser = sub.add_parser("import-csv")
    import_parser.add_argument("--db", required=True)
    import_parser.add_argument("--table", required=True)
    import_parser.add_argument("file")

    show_parser = sub.add_parser("show")
    show_parser.add_argument("--db", required=True)
    show_parser.add_argument("table")

    list_parser = sub.add_parser("list-tables")
    list_parser.add_argument("--db", required=True)

    args = parser.parse_args(argv)

    if args.command == "recompute":
        cmd_recompute(args.db, args.settings, args.log)
    elif args.command == "import-csv":
        cmd_import_csv(args.db, args.table, args.file)
    elif args.command == "show":
        cmd_show(args.db, args.table)
    elif args.command == "list-tables":
        cmd_list_tables(args.db)
    else:
        raise SystemExit(2)


if __name__ == "__main__":
    main()
