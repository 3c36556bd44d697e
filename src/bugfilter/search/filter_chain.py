"""Composable filter chain for bugs.

Filters are callables that accept a Bug and return bool.
Chains short-circuit on the first failing predicate (AND semantics).
"""
from __future__ import annotations

from typing import Callable, Iterable, Iterator

from ..models import Bug

Predicate = Callable[[Bug], bool]


class FilterChain:
    """Apply multiple predicates in sequence (logical AND).

    Usage::

        chain = FilterChain()
        chain.add(StateFilter(State.OPEN).matches)
        chain.add(TimeRangeFilter(TimeRange.PAST_DAY, now).matches)

        results = list(chain.apply(bugs))
    """

    def __init__(self) -> None:
        self._predicates: list[Predicate] = []

    def add(self, predicate: Predicate) -> "FilterChain":
        """Append a predicate and return self for chaining."""
        self._predicates.append(predicate)
        return self

    def matches(self, bug: Bug) -> bool:
        """Return True if all predicates accept the bug."""
        return all(p(bug) for p in self._predicates)

    def apply(self, bugs: Iterable[Bug]) -> Iterator[Bug]:
        """Yield bugs that pass every predicate, in source order."""
        for bug in bugs:
            if self.matches(bug):
                yield bug
