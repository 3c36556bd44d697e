"""Match bugs on their lifecycle state."""
from __future__ import annotations

from ..errors import InvalidQuery
from ..models import Bug, State


class StateFilter:
    """Accept bugs in exactly one state.

    There is no wildcard: ``state`` must be a State member, anything else
    (including ``None``) raises InvalidQuery.
    """

    def __init__(self, state: State) -> None:
        if not isinstance(state, State):
            raise InvalidQuery(f"state must be one of {[s.value for s in State]}, got {state!r}")
        self.state = state

    def matches(self, bug: Bug) -> bool:
        return bug.state is self.state
