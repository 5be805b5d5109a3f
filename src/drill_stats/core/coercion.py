"""Cell coercion rules shared by every ingest path.

Lenient rules (the default):
- blank cells (None, NaN, whitespace) become the type default
- numeric cells that do not parse become 0
- dates and anything else that is not numeric pass through as text, unvalidated

``parse_number`` is the strict primitive; it raises ``ValueError`` on text
that does not parse so callers can surface the failure.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def _normalize(number: float) -> int | float:
    if math.isnan(number) or math.isinf(number):
        return 0
    if number.is_integer():
        return int(number)
    return number


def parse_number(value: Any) -> int | float:
    if is_blank(value):
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        text = value.strip().replace(",", "")
        return _normalize(float(text))
    try:
        return _normalize(float(value))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"not numeric: {value!r}") from exc


def to_number(value: Any) -> int | float:
    try:
        return parse_number(value)
    except ValueError:
        return 0


def to_int(value: Any) -> int:
    return int(to_number(value))


def to_optional_int(value: Any) -> int | None:
    if is_blank(value):
        return None
    return to_int(value)


def to_text(value: Any) -> str:
    if is_blank(value):
        return ""
    if isinstance(value, datetime):
        if value.time() == datetime.min.time():
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
