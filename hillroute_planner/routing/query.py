"""Routing query and outcome types.

A query travels to the routing service tagged with the sequence id the
coordinator assigned when issuing it. The outcome carries the same id back,
so the coordinator can discard answers to superseded queries.
"""

from dataclasses import dataclass, field
from typing import Any

from hillroute_planner.constants import RoutingConfig
from hillroute_planner.model.geo_point import GeoPoint
from hillroute_planner.model.path_candidate import WeightedPathCandidate


@dataclass(frozen=True)
class QueryOptions:
    """User-selected routing restrictions.

    Attributes:
        travel_type: One of RoutingConfig.TRAVEL_TYPES
        by_distance: True to optimize distance (km), False for travel time
        max_ele_rise: Maximum allowed climb in meters
        all_paths: True to return every Pareto candidate, not just the best
    """

    travel_type: str = RoutingConfig.DEFAULT_TRAVEL_TYPE
    by_distance: bool = RoutingConfig.DEFAULT_OPTIMIZATION == "distance"
    max_ele_rise: int = RoutingConfig.DEFAULT_MAX_ELE_RISE
    all_paths: bool = False

    def __post_init__(self) -> None:
        if self.travel_type not in RoutingConfig.TRAVEL_TYPES:
            raise ValueError(f"Unknown travel type '{self.travel_type}'. Valid: {RoutingConfig.TRAVEL_TYPES}")
        if self.max_ele_rise < 0:
            raise ValueError(f"max_ele_rise cannot be negative: {self.max_ele_rise}")


@dataclass(frozen=True)
class RouteQuery:
    """Request body for one routing call."""

    start: GeoPoint
    end: GeoPoint
    options: QueryOptions = field(default_factory=QueryOptions)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the routing service JSON body."""
        return {
            "start": self.start.to_request(),
            "end": self.end.to_request(),
            "travel_type": self.options.travel_type,
            "by_distance": self.options.by_distance,
            "max_ele_rise": int(self.options.max_ele_rise),
            "all_paths": self.options.all_paths,
        }


@dataclass(frozen=True)
class QueryTicket:
    """An issued query together with its sequence id."""

    sequence_id: int
    query: RouteQuery


@dataclass(frozen=True)
class RouteSuccess:
    """Service answered with at least one candidate."""

    sequence_id: int
    candidates: tuple[WeightedPathCandidate, ...]

    def __post_init__(self) -> None:
        if not self.candidates:
            raise ValueError("RouteSuccess needs at least one candidate; use RouteEmpty")


@dataclass(frozen=True)
class RouteEmpty:
    """Service answered successfully but found no path."""

    sequence_id: int


@dataclass(frozen=True)
class RouteFailure:
    """Transport error, non-success status, or malformed payload."""

    sequence_id: int
    reason: str


RoutingOutcome = RouteSuccess | RouteEmpty | RouteFailure
