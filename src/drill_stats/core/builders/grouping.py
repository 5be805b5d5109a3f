from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Hashable, Iterable, TypeVar

from .. import stats
from ..types import Problem, Session

T = TypeVar("T")


@dataclass(frozen=True)
class GroupSummary:
    count: int
    mean: float
    median: float
    p90: float
    p95: float


def summarize(values: Iterable[float]) -> GroupSummary:
    vals = tuple(float(v) for v in values)
    return GroupSummary(
        count=len(vals),
        mean=stats.mean(vals),
        median=stats.median(vals),
        p90=stats.percentile(vals, 0.9),
        p95=stats.percentile(vals, 0.95),
    )


def group_values(
    records: Iterable[T],
    key_fn: Callable[[T], Hashable | None],
    value_fn: Callable[[T], float],
) -> dict[Hashable, list[float]]:
    """Partition values by key in first-seen order; a ``None`` key drops the record."""

    groups: dict[Hashable, list[float]] = {}
    for record in records:
        key = key_fn(record)
        if key is None:
            continue
        groups.setdefault(key, []).append(value_fn(record))
    return groups


def summarize_groups(
    records: Iterable[T],
    key_fn: Callable[[T], Hashable | None],
    value_fn: Callable[[T], float],
) -> dict[Hashable, GroupSummary]:
    return {
        key: summarize(values)
        for key, values in group_values(records, key_fn, value_fn).items()
    }


def latency(problem: Problem) -> float:
    return problem.latency_ms


def summary_cells(summary: GroupSummary) -> list[float]:
    return [summary.mean, summary.median, summary.p90, summary.p95]


def session_durations(sessions: Iterable[Session]) -> dict[str, float]:
    """Session id -> duration; the first row wins when an id repeats."""

    durations: dict[str, float] = {}
    for session in sessions:
        durations.setdefault(session.timestamp, session.duration)
    return durations


def operator_session_ids(
    problems: Iterable[Problem], operators: Iterable[str]
) -> dict[str, dict[str, None]]:
    wanted = set(operators)
    ids: dict[str, dict[str, None]] = {}
    for problem in problems:
        if problem.operator in wanted:
            ids.setdefault(problem.operator, {})[problem.timestamp] = None
    return ids


def operator_durations(
    problems: Iterable[Problem],
    sessions: Iterable[Session],
    operators: Iterable[str],
) -> dict[str, float]:
    """Sum of distinct session durations per operator.

    Sessions are deduplicated within each operator only, so a session that mixes
    operators contributes its full duration to each of them. Problems whose
    session id matches no session contribute nothing.
    """

    durations = session_durations(sessions)
    return {
        operator: float(sum(durations.get(sid, 0) for sid in ids))
        for operator, ids in operator_session_ids(problems, operators).items()
    }


def rate(count: int, seconds: float) -> float:
    if not seconds:
        return 0.0
    return count / seconds
