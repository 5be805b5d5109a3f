from __future__ import annotations

from typing import Any

from .coercion import is_blank, parse_number

EMPTY_BUCKET = ""

# Upper bounds are inclusive; anything above the last bound is ">100".
_BOUNDS: tuple[tuple[float, str], ...] = (
    (10, "2–10"),
    (20, "11–20"),
    (50, "21–50"),
    (100, "51–100"),
)
OVERFLOW_BUCKET = ">100"

BUCKET_ORDER: tuple[str, ...] = tuple(label for _, label in _BOUNDS) + (OVERFLOW_BUCKET,)


def bucket(value: Any) -> str:
    if is_blank(value):
        return EMPTY_BUCKET
    try:
        number = parse_number(value)
    except ValueError:
        return EMPTY_BUCKET
    if number <= 0:
        return EMPTY_BUCKET
    for upper, label in _BOUNDS:
        if number <= upper:
            return label
    return OVERFLOW_BUCKET


def bucket_rank(label: str) -> int:
    """Sort position of a bucket label; the empty bucket sorts first."""

    if label in BUCKET_ORDER:
        return BUCKET_ORDER.index(label)
    return -1
