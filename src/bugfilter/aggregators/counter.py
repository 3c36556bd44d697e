"""Count bugs by state and by time bucket."""
from __future__ import annotations

from collections import Counter as _Counter
from datetime import datetime
from typing import Callable, Iterable

import pytz

from ..models import Bug, State, TimeRange
from ..search.time_filter import classify

KeyFunc = Callable[[Bug], str]


class Counter:
    """Count occurrences of a derived key across bugs."""

    def __init__(self, key: KeyFunc) -> None:
        self._key = key
        self._counts: _Counter[str] = _Counter()

    def add(self, bug: Bug) -> None:
        self._counts[self._key(bug)] += 1

    def update(self, bugs: Iterable[Bug]) -> "Counter":
        for bug in bugs:
            self.add(bug)
        return self

    def top(self, n: int = 10) -> list[tuple[str, int]]:
        return self._counts.most_common(n)


def by_state() -> Counter:
    return Counter(lambda bug: bug.state.value)


def by_time_range(now: datetime, tz: pytz.BaseTzInfo | None = None) -> Counter:
    return Counter(lambda bug: classify(bug.timestamp, now, tz).value)


def state_range_matrix(
    bugs: Iterable[Bug],
    now: datetime,
    tz: pytz.BaseTzInfo | None = None,
) -> dict[State, dict[TimeRange, int]]:
    """Return counts for every (state, time range) pair, zeros included."""
    matrix = {s: {r: 0 for r in TimeRange} for s in State}
    for bug in bugs:
        matrix[bug.state][classify(bug.timestamp, now, tz)] += 1
    return matrix
