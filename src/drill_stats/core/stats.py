from __future__ import annotations

from typing import Iterable

import numpy as np


def _array(values: Iterable[float]) -> np.ndarray:
    return np.asarray(list(values), dtype=float)


def mean(values: Iterable[float]) -> float:
    arr = _array(values)
    if arr.size == 0:
        return 0.0
    return float(arr.mean())


def stddev(values: Iterable[float]) -> float:
    """Sample standard deviation (n - 1 denominator); 0 below two values."""

    arr = _array(values)
    if arr.size < 2:
        return 0.0
    return float(arr.std(ddof=1))


def percentile(values: Iterable[float], p: float) -> float:
    """Inclusive percentile with linear interpolation.

    The 1-based rank is ``1 + (n - 1) * p`` clamped to ``[1, n]``; the result
    interpolates between the order statistics either side of that rank.
    """

    arr = np.sort(_array(values))
    n = arr.size
    if n == 0:
        return 0.0
    rank = min(max(1.0 + (n - 1) * float(p), 1.0), float(n))
    lower = int(np.floor(rank))
    frac = rank - lower
    if lower >= n:
        return float(arr[n - 1])
    return float(arr[lower - 1] + (arr[lower] - arr[lower - 1]) * frac)


def median(values: Iterable[float]) -> float:
    return percentile(values, 0.5)


def mad(values: Iterable[float]) -> float:
    arr = _array(values)
    if arr.size == 0:
        return 0.0
    center = median(arr)
    return median(np.abs(arr - center))


def coefficient_of_variation(values: Iterable[float]) -> float:
    arr = _array(values)
    avg = mean(arr)
    if avg == 0:
        return 0.0
    return stddev(arr) / avg
