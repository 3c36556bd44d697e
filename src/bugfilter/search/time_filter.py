"""Relative time buckets for bug timestamps."""
from __future__ import annotations

from datetime import datetime, timezone

import pytz

from ..errors import InvalidQuery
from ..models import Bug, TimeRange

# Day differences up to and including this count as PAST_WEEK
_WEEK_DAYS = 7


def _as_aware(ts: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts


def day_difference(
    timestamp: datetime,
    now: datetime,
    tz: pytz.BaseTzInfo | None = None,
) -> int:
    """Whole calendar days from the day containing ``timestamp`` to the day containing ``now``.

    Day boundaries are midnight in ``tz`` (UTC when omitted). The result is
    negative when ``timestamp`` falls on a later day than ``now``.
    """
    if tz is None:
        tz = pytz.UTC
    start = _as_aware(timestamp).astimezone(tz).date()
    end = _as_aware(now).astimezone(tz).date()
    return (end - start).days


def classify(
    timestamp: datetime,
    now: datetime,
    tz: pytz.BaseTzInfo | None = None,
) -> TimeRange:
    """Bucket ``timestamp`` relative to ``now``.

    Same calendar day is PAST_DAY, up to seven days back is PAST_WEEK and
    anything older is PAST_MONTH. Timestamps on a later day than ``now``
    have a negative difference and therefore land in PAST_WEEK.
    """
    days = day_difference(timestamp, now, tz)
    if days == 0:
        return TimeRange.PAST_DAY
    if days <= _WEEK_DAYS:
        return TimeRange.PAST_WEEK
    return TimeRange.PAST_MONTH


class TimeRangeFilter:
    """Accept bugs whose timestamp classifies into ``time_range`` relative to ``now``.

    ``time_range`` must be a TimeRange member, anything else raises InvalidQuery.
    """

    def __init__(
        self,
        time_range: TimeRange,
        now: datetime,
        tz: pytz.BaseTzInfo | None = None,
    ) -> None:
        if not isinstance(time_range, TimeRange):
            raise InvalidQuery(
                f"time_range must be one of {[r.value for r in TimeRange]}, got {time_range!r}"
            )
        self.time_range = time_range
        self.now = now
        self._tz = tz

    def matches(self, bug: Bug) -> bool:
        return classify(bug.timestamp, self.now, self._tz) is self.time_range
