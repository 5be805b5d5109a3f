from __future__ import annotations

from typing import Any


class DrillStatsError(Exception):
    pass


class CellParseError(DrillStatsError, ValueError):
    """Raised by strict-mode ingest when a numeric cell cannot be parsed."""

    def __init__(self, source: str, row: int, column: str, value: Any) -> None:
        self.source = source
        self.row = row
        self.column = column
        self.value = value
        super().__init__(
            f"{source} row {row}: column {column!r} is not numeric: {value!r}"
        )


class RunInProgressError(DrillStatsError, RuntimeError):
    pass
