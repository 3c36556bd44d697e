"""Query engine — find bugs by state and relative time bucket."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

import pytz

from .config import settings
from .models import Bug, State, TimeRange
from .search.filter_chain import FilterChain
from .search.state_filter import StateFilter
from .search.time_filter import TimeRangeFilter

logger = logging.getLogger(__name__)


def find_bugs(
    bugs: Iterable[Bug],
    state: State,
    time_range: TimeRange,
    now: datetime,
    tz: pytz.BaseTzInfo | None = None,
) -> list[Bug]:
    """Return the bugs in ``state`` whose timestamp falls in ``time_range``.

    Order follows ``bugs``. The source is only read.

    Raises:
        InvalidQuery: ``state`` is not a State (``None`` included) or
                      ``time_range`` is not a TimeRange.
    """
    chain = (
        FilterChain()
        .add(StateFilter(state).matches)
        .add(TimeRangeFilter(time_range, now, tz).matches)
    )
    return list(chain.apply(bugs))


class Application:
    """Owns an ordered, read-only collection of bugs and answers queries over it.

    Usage::

        app = Application([Bug(State.OPEN, datetime.now(timezone.utc), "Bug 1")])
        app.find_bugs(State.OPEN, TimeRange.PAST_DAY)
    """

    def __init__(self, bugs: Iterable[Bug], tz: pytz.BaseTzInfo | None = None) -> None:
        self._bugs: tuple[Bug, ...] = tuple(bugs)
        self._tz = tz if tz is not None else settings.tzinfo()

    @property
    def bugs(self) -> tuple[Bug, ...]:
        return self._bugs

    def find_bugs(
        self,
        state: State,
        time_range: TimeRange,
        now: datetime | None = None,
    ) -> list[Bug]:
        """Query the collection. ``now`` defaults to the current UTC instant."""
        if now is None:
            now = datetime.now(timezone.utc)
        found = find_bugs(self._bugs, state, time_range, now, self._tz)
        logger.debug(
            "find_bugs(state=%s, range=%s) matched %d of %d",
            state.value, time_range.value, len(found), len(self._bugs),
        )
        return found

    def __len__(self) -> int:
        return len(self._bugs)

    def __repr__(self) -> str:
        return f"Application(bugs={len(self._bugs)})"
