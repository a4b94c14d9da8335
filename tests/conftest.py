"""Shared pytest fixtures for hillroute_planner tests.

Provides recording fakes for the map and chart surfaces, a scripted routing
client and factories for routing service payloads.

COORDINATES:
    Tests use points around Munich (lat~48, lon~11), inside the routing area.
    START is (48.0, 11.0), END is (48.1, 11.2).
"""

from typing import Any

import pytest

from hillroute_planner.model.geo_point import GeoPoint, PathNode
from hillroute_planner.model.path_candidate import WeightedPathCandidate
from hillroute_planner.routing.query import (
    QueryTicket,
    RouteEmpty,
    RouteFailure,
    RouteSuccess,
    RoutingOutcome,
)
from hillroute_planner.ui.state_machine import QuerySession, RequestCoordinator
from hillroute_planner.ui.surfaces import (
    ChartHandle,
    ChartSeries,
    ChartSurface,
    MapSurface,
    OverlayHandle,
    OverlayStyle,
)

START = GeoPoint(lat=48.0, lon=11.0)
END = GeoPoint(lat=48.1, lon=11.2)


# =============================================================================
# RECORDING SURFACES
# =============================================================================


class RecordingMapSurface(MapSurface):
    """Map surface that keeps live overlays in a dict and logs every call.

    calls holds tuples like ("add", handle), ("remove", handle), ("fit", points)
    in the order they happened, so tests can assert teardown ordering.
    """

    def __init__(self, calls: list[tuple[str, Any]] | None = None) -> None:
        self.calls: list[tuple[str, Any]] = [] if calls is None else calls
        self.live: dict[OverlayHandle, tuple[list[GeoPoint], OverlayStyle]] = {}
        self.fit_calls: list[list[GeoPoint]] = []
        self._next_handle = 100

    def add_overlay(self, geometry: list[GeoPoint], style: OverlayStyle) -> OverlayHandle:
        handle = self._next_handle
        self._next_handle += 1
        self.live[handle] = (list(geometry), style)
        self.calls.append(("add", handle))
        return handle

    def remove_overlay(self, handle: OverlayHandle) -> None:
        if handle not in self.live:
            raise KeyError(f"Unknown overlay handle {handle}")
        del self.live[handle]
        self.calls.append(("remove", handle))

    def fit_bounds(self, points: list[GeoPoint]) -> None:
        self.fit_calls.append(list(points))
        self.calls.append(("fit", list(points)))


class FailingMapSurface(RecordingMapSurface):
    """Recording map surface whose Nth add_overlay call (1-based) raises."""

    def __init__(self, fail_on_add: int, calls: list[tuple[str, Any]] | None = None) -> None:
        super().__init__(calls=calls)
        self.fail_on_add = fail_on_add
        self.add_attempts = 0

    def add_overlay(self, geometry: list[GeoPoint], style: OverlayStyle) -> OverlayHandle:
        self.add_attempts += 1
        if self.add_attempts == self.fail_on_add:
            raise RuntimeError("Map widget rejected the overlay")
        return super().add_overlay(geometry, style)


class RecordingChartSurface(ChartSurface):
    """Chart surface that keeps live series in a dict and logs every call."""

    def __init__(self, calls: list[tuple[str, Any]] | None = None) -> None:
        self.calls: list[tuple[str, Any]] = [] if calls is None else calls
        self.live: dict[ChartHandle, ChartSeries] = {}
        self._next_handle = 1

    def render_series(self, series: ChartSeries) -> ChartHandle:
        handle = self._next_handle
        self._next_handle += 1
        self.live[handle] = series
        self.calls.append(("render_chart", handle))
        return handle

    def destroy(self, handle: ChartHandle) -> None:
        if handle not in self.live:
            raise KeyError(f"Unknown chart handle {handle}")
        del self.live[handle]
        self.calls.append(("destroy_chart", handle))


class ScriptedRoutingClient:
    """Stand-in for RoutingClient that answers from a list of payloads.

    Each fetch() pops the next scripted answer. A payload list becomes
    RouteSuccess/RouteEmpty, a string becomes RouteFailure.
    """

    def __init__(self, answers: list[list[dict[str, Any]] | str]) -> None:
        self.answers = list(answers)
        self.tickets: list[QueryTicket] = []

    def fetch(self, ticket: QueryTicket) -> RoutingOutcome:
        self.tickets.append(ticket)
        answer = self.answers.pop(0)
        if isinstance(answer, str):
            return RouteFailure(sequence_id=ticket.sequence_id, reason=answer)
        candidates = tuple(
            WeightedPathCandidate.from_dict(entry, default_travel_type=ticket.query.options.travel_type, index=i)
            for i, entry in enumerate(answer)
        )
        if not candidates:
            return RouteEmpty(sequence_id=ticket.sequence_id)
        return RouteSuccess(sequence_id=ticket.sequence_id, candidates=candidates)


# =============================================================================
# PAYLOAD FACTORIES
# =============================================================================


def make_candidate_dict(
    elevations: list[float],
    distance: float = 5.2,
    distance_type: str = "km",
    travel_type: str | None = "car",
    elevation: float | None = None,
) -> dict[str, Any]:
    """One routing service response entry along the line START -> END.

    Nodes are spread evenly between START and END so the path has a real
    geometry for cumulative distances.
    """
    n = len(elevations)
    path = []
    for i, ele in enumerate(elevations):
        t = i / (n - 1) if n > 1 else 0.0
        path.append(
            {
                "latitude": START.lat + t * (END.lat - START.lat),
                "longitude": START.lon + t * (END.lon - START.lon),
                "elevation": ele,
            }
        )
    data: dict[str, Any] = {"path": path, "distance": distance, "distance_type": distance_type}
    if travel_type is not None:
        data["travel_type"] = travel_type
    if elevation is not None:
        data["elevation"] = elevation
    return data


def make_candidate(
    elevations: list[float],
    distance: float = 5.2,
    distance_unit: str = "km",
    travel_type: str = "car",
    elevation_gain: float | None = None,
) -> WeightedPathCandidate:
    """Build a candidate directly (no response parsing)."""
    n = len(elevations)
    nodes = tuple(
        PathNode(
            point=GeoPoint(
                lat=START.lat + (i / (n - 1) if n > 1 else 0.0) * (END.lat - START.lat),
                lon=START.lon + (i / (n - 1) if n > 1 else 0.0) * (END.lon - START.lon),
            ),
            elevation=ele,
        )
        for i, ele in enumerate(elevations)
    )
    return WeightedPathCandidate(
        nodes=nodes,
        distance=distance,
        distance_unit=distance_unit,
        travel_type=travel_type,
        elevation_gain=elevation_gain,
    )


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def call_log() -> list[tuple[str, Any]]:
    """Shared call log of map and chart surface, in call order."""
    return []


@pytest.fixture
def map_surface(call_log: list[tuple[str, Any]]) -> RecordingMapSurface:
    return RecordingMapSurface(calls=call_log)


@pytest.fixture
def chart_surface(call_log: list[tuple[str, Any]]) -> RecordingChartSurface:
    return RecordingChartSurface(calls=call_log)


@pytest.fixture
def session() -> QuerySession:
    return QuerySession()


@pytest.fixture
def coordinator(
    map_surface: RecordingMapSurface,
    chart_surface: RecordingChartSurface,
    session: QuerySession,
) -> RequestCoordinator:
    """Fresh coordinator in IDLE with recording surfaces."""
    return RequestCoordinator(map_surface=map_surface, chart_surface=chart_surface, session=session)


@pytest.fixture
def ready_coordinator(coordinator: RequestCoordinator) -> RequestCoordinator:
    """Coordinator with START and END selected (READY_TO_QUERY)."""
    coordinator.select_start(point=START)
    coordinator.select_end(point=END)
    return coordinator


@pytest.fixture
def two_candidate_payload() -> list[dict[str, Any]]:
    """Shortest route first: 5.2km climbing 20m, then 6.0km climbing 5m."""
    return [
        make_candidate_dict(elevations=[500.0, 520.0, 510.0], distance=5.2),
        make_candidate_dict(elevations=[500.0, 505.0, 505.0], distance=6.0),
    ]
