"""Message - User-facing banners for the route planner UI.

At most ONE banner is visible at any time. The query session holds a single
banner slot, so entering a new outcome replaces the previous banner instead of
stacking another one on top.

Banners:
- SelectStartAndEndMessage: query attempted without both endpoints
- InvalidRequestMessage: routing service failed or answered garbage
- NoPathFoundMessage: routing service found no route
- RouteResultMessage: shortest route summary after a successful query
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class MessageLevel(Enum):
    """Display level for UI messages."""

    INFO = "info"  # Blue - results
    WARNING = "warning"  # Yellow - action instructions
    ERROR = "error"  # Red - failures


@dataclass(frozen=True)
class Message(ABC):
    """Abstract base class for banners displayed under the map."""

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for display in Streamlit."""
        raise NotImplementedError

    @property
    @abstractmethod
    def level(self) -> MessageLevel:
        """Display level."""
        raise NotImplementedError

    def display(self) -> None:
        """Render this message using the appropriate Streamlit function."""
        import streamlit as st

        render_fn = {
            MessageLevel.INFO: st.info,
            MessageLevel.WARNING: st.warning,
            MessageLevel.ERROR: st.error,
        }[self.level]
        render_fn(self.message)


@dataclass(frozen=True)
class SelectStartAndEndMessage(Message):
    """Query attempted while start or end point is missing."""

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.WARNING

    @property
    def message(self) -> str:
        return "Please select a start and an end point on the map first."


@dataclass(frozen=True)
class InvalidRequestMessage(Message):
    """Routing service could not answer the query."""

    reason: str

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.ERROR

    @property
    def message(self) -> str:
        return f"Invalid request: {self.reason}"


@dataclass(frozen=True)
class NoPathFoundMessage(Message):
    """Routing service answered with zero candidates."""

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.WARNING

    @property
    def message(self) -> str:
        return "No path found between the selected points for these restrictions."


@dataclass(frozen=True)
class RouteResultMessage(Message):
    """Summary of a successful query."""

    min_distance: float
    distance_unit: str
    candidate_count: int

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        text = f"Shortest path for elevation restriction has {self.min_distance} {self.distance_unit}"
        if self.candidate_count > 1:
            text += f" ({self.candidate_count} routes found)"
        return text
