"""QueryState - Lifecycle states of one route query session."""

from enum import Enum


class QueryState(Enum):
    """States of the request coordinator.

    Values double as python-statemachine state values, so the session
    model stores a QueryState member directly.
    """

    IDLE = "idle"
    PARTIAL_SELECTION = "partial_selection"
    READY_TO_QUERY = "ready_to_query"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    EMPTY_RESULT = "empty_result"
    FAILED = "failed"

    @property
    def accepts_query(self) -> bool:
        """True if a new query may be issued from this state."""
        return self not in (QueryState.IDLE, QueryState.PARTIAL_SELECTION)
