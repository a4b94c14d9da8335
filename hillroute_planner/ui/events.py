"""Typed events emitted by the RequestCoordinator.

The presentation layer subscribes with coordinator.subscribe(callback) and
receives one of these frozen dataclasses per notification.
"""

from collections.abc import Callable
from dataclasses import dataclass

from hillroute_planner.model.geo_point import GeoPoint
from hillroute_planner.model.query_state import QueryState


@dataclass(frozen=True)
class SelectionChanged:
    """Start or end point was (re)selected."""

    start_point: GeoPoint | None
    end_point: GeoPoint | None


@dataclass(frozen=True)
class QueryStateChanged:
    """The coordinator moved between states."""

    previous: QueryState
    current: QueryState
    event: str
    sequence_id: int


@dataclass(frozen=True)
class CandidateHovered:
    """A candidate's elevation profile is being shown."""

    index: int
    climb_m: float
    color: str | None


CoordinatorEvent = SelectionChanged | QueryStateChanged | CandidateHovered
EventCallback = Callable[[CoordinatorEvent], None]
