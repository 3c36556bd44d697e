"""Bug record and the enumerations used to query it."""
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class State(Enum):
    """Lifecycle state of a bug report."""

    OPEN = "open"
    CLOSED = "closed"

    @classmethod
    def from_wire(cls, value: str) -> "State":
        """Map a wire string to a State. Only an exact ``"open"`` is OPEN."""
        return cls.OPEN if value == cls.OPEN.value else cls.CLOSED


class TimeRange(Enum):
    """Coarse bucket for how long ago a timestamp occurred.

    PAST_MONTH is a catch-all for anything older than a week; it is not
    bounded at thirty days.
    """

    PAST_DAY = "past-day"
    PAST_WEEK = "past-week"
    PAST_MONTH = "past-month"


@dataclass(frozen=True)
class Bug:
    """An immutable bug report.

    Attributes:
        state:      OPEN or CLOSED.
        timestamp:  When the bug was reported. Stored as an aware UTC
                    datetime truncated to whole seconds; naive values are
                    taken to be UTC already.
        comment:    Free text, kept verbatim.
    """

    state: State
    timestamp: datetime
    comment: str

    def __post_init__(self) -> None:
        ts = self.timestamp
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        ts = ts.astimezone(timezone.utc).replace(microsecond=0)
        object.__setattr__(self, "timestamp", ts)

    @classmethod
    def from_epoch(cls, state: State, epoch_seconds: int, comment: str) -> "Bug":
        return cls(state, datetime.fromtimestamp(epoch_seconds, tz=timezone.utc), comment)

    @property
    def epoch_seconds(self) -> int:
        return int(self.timestamp.timestamp())

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation: state string, epoch seconds, comment."""
        return {
            "state": self.state.value,
            "timestamp": self.epoch_seconds,
            "comment": self.comment,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
