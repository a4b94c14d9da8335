"""Request coordinator state machine for the route planner.

Uses python-statemachine for the query session lifecycle with:
- Clear state definitions (values are QueryState members)
- Guarded transitions (conditions)
- Entry hooks and before_* actions for overlay/chart side effects
- Explicit event-driven transitions

States:
    IDLE: Nothing selected (initial)
    PARTIAL_SELECTION: Exactly one of start/end selected
    READY_TO_QUERY: Start and end selected, no query issued yet
    PENDING: Query issued, waiting for the routing service
    SUCCEEDED: Result set populated, overlays on the map
    EMPTY_RESULT: Routing service found no path
    FAILED: Transport error, error status or malformed response

Transitions:
    any -> PARTIAL_SELECTION / READY_TO_QUERY: select_start, select_end
        (READY_TO_QUERY once the other endpoint is set)
    READY_TO_QUERY / PENDING / SUCCEEDED / EMPTY_RESULT / FAILED -> PENDING: send_query
    PENDING -> SUCCEEDED: receive_candidates
    PENDING -> EMPTY_RESULT: receive_empty
    PENDING -> FAILED: receive_failure
    any -> IDLE: reset_session

Sequence ids
------------
Every query and every selection change increments current_sequence_id. A
routing outcome is applied only if it carries the current id while the machine
is PENDING; anything else is a stale response and is dropped without a state
change or banner. In-flight requests are never cancelled on the transport.

Teardown order
--------------
Overlays are removed before charts are destroyed and before the result set is
replaced, so the map never shows overlays of two different queries.
"""

import logging
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from hillroute_planner.constants import RoutingConfig
from hillroute_planner.core.color_assigner import ColorAssigner
from hillroute_planner.core.elevation_profile import ElevationProfileCalculator
from hillroute_planner.core.geo_calculator import GeoCalculator
from hillroute_planner.model.geo_point import GeoPoint
from hillroute_planner.model.message import (
    InvalidRequestMessage,
    Message,
    NoPathFoundMessage,
    RouteResultMessage,
    SelectStartAndEndMessage,
)
from hillroute_planner.model.path_candidate import WeightedPathCandidate
from hillroute_planner.model.query_state import QueryState
from hillroute_planner.model.result_set import ResultSet
from hillroute_planner.routing.client import RoutingClient
from hillroute_planner.routing.query import (
    QueryOptions,
    QueryTicket,
    RouteEmpty,
    RouteQuery,
    RouteSuccess,
    RoutingOutcome,
)
from hillroute_planner.ui.events import (
    CandidateHovered,
    CoordinatorEvent,
    EventCallback,
    QueryStateChanged,
    SelectionChanged,
)
from hillroute_planner.ui.overlay_manager import OverlayManager
from hillroute_planner.ui.surfaces import (
    ChartHandle,
    ChartKind,
    ChartSeries,
    ChartSurface,
    LabeledPoint,
    MapSurface,
)

logger = logging.getLogger(__name__)


@dataclass
class QuerySession:
    """Shared model for the coordinator state machine.

    Holds the selected points, the current query's sequence id and result
    set, the single visible banner and the live chart handles.

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the model. It stores a QueryState member.
    """

    # State managed by python-statemachine (model pattern)
    state: QueryState | None = None

    start_point: GeoPoint | None = None
    end_point: GeoPoint | None = None
    options: QueryOptions = field(default_factory=QueryOptions)

    current_sequence_id: int = 0
    pending_ticket: QueryTicket | None = None

    # Session-wide: not reset between queries
    color_assigner: ColorAssigner = field(default_factory=ColorAssigner)
    result_set: ResultSet = field(init=False)

    # Exactly one banner slot keeps banners mutually exclusive
    banner: Message | None = None

    hovered_index: int | None = None
    profile_chart: ChartHandle | None = None
    scatter_chart: ChartHandle | None = None

    def __post_init__(self) -> None:
        self.result_set = ResultSet(color_assigner=self.color_assigner)

    def next_sequence_id(self) -> int:
        self.current_sequence_id += 1
        return self.current_sequence_id

    def replace_result_set(self) -> None:
        """Swap in a fresh, empty result set (never mutate the old one)."""
        self.result_set = ResultSet(color_assigner=self.color_assigner)

    def selection_text(self, decimals: int = RoutingConfig.DISPLAY_DECIMALS) -> tuple[str, str]:
        """Display text for (start, end) selection summaries."""
        start = self.start_point.display_text(decimals) if self.start_point else "not selected"
        end = self.end_point.display_text(decimals) if self.end_point else "not selected"
        return start, end

    def __repr__(self) -> str:
        return (
            f"QuerySession(state={self.state}, start={self.start_point}, end={self.end_point}, "
            f"seq={self.current_sequence_id}, candidates={len(self.result_set)})"
        )


class RequestCoordinator(StateMachine):
    """State machine driving selection, queries, results and overlays.

    See module docstring for the full transition table.

    Example:
        coordinator = RequestCoordinator(map_surface=surface, chart_surface=charts)
        coordinator.select_start(point=GeoPoint(lat=48.0, lon=11.0))
        coordinator.select_end(point=GeoPoint(lat=48.1, lon=11.2))
        coordinator.run_query(client=RoutingClient())
    """

    # ==========================================================================
    # State Definitions
    # ==========================================================================

    idle = State("Idle", value=QueryState.IDLE, initial=True)
    partial_selection = State("PartialSelection", value=QueryState.PARTIAL_SELECTION)
    ready_to_query = State("ReadyToQuery", value=QueryState.READY_TO_QUERY)
    pending = State("Pending", value=QueryState.PENDING)
    succeeded = State("Succeeded", value=QueryState.SUCCEEDED)
    empty_result = State("EmptyResult", value=QueryState.EMPTY_RESULT)
    failed = State("Failed", value=QueryState.FAILED)

    # ==========================================================================
    # Transitions: selection (accepted in every state)
    # ==========================================================================

    select_start = ready_to_query.from_(
        idle, partial_selection, ready_to_query, pending, succeeded, empty_result, failed, cond="has_end_point"
    ) | partial_selection.from_(
        idle, partial_selection, ready_to_query, pending, succeeded, empty_result, failed, unless="has_end_point"
    )
    select_end = ready_to_query.from_(
        idle, partial_selection, ready_to_query, pending, succeeded, empty_result, failed, cond="has_start_point"
    ) | partial_selection.from_(
        idle, partial_selection, ready_to_query, pending, succeeded, empty_result, failed, unless="has_start_point"
    )

    # ==========================================================================
    # Transitions: query lifecycle
    # ==========================================================================

    # PENDING -> PENDING supersedes the in-flight query
    send_query = pending.from_(ready_to_query, pending, succeeded, empty_result, failed)
    receive_candidates = pending.to(succeeded)
    receive_empty = pending.to(empty_result)
    receive_failure = pending.to(failed)

    reset_session = idle.from_(idle, partial_selection, ready_to_query, pending, succeeded, empty_result, failed)

    # ==========================================================================
    # Initialization
    # ==========================================================================

    def __init__(
        self,
        map_surface: MapSurface,
        chart_surface: ChartSurface,
        session: QuerySession | None = None,
    ) -> None:
        """Initialize state machine with model pattern.

        Args:
            map_surface: Map widget the overlays are drawn on
            chart_surface: Chart widget for profile and scatter charts
            session: Shared session model (creates new if None)
        """
        self.overlay_manager = OverlayManager(map_surface=map_surface)
        self.chart_surface = chart_surface
        self._subscribers: list[EventCallback] = []
        super().__init__(model=session or QuerySession())

    @property
    def session(self) -> QuerySession:
        """Alias for model."""
        return self.model

    @property
    def query_state(self) -> QueryState:
        return self.current_state.value

    @property
    def overlay_count(self) -> int:
        return self.overlay_manager.overlay_count

    # ==========================================================================
    # Guards (Conditions)
    # ==========================================================================

    def has_start_point(self) -> bool:
        return self.model.start_point is not None

    def has_end_point(self) -> bool:
        return self.model.end_point is not None

    # ==========================================================================
    # Event subscription
    # ==========================================================================

    def subscribe(self, callback: EventCallback) -> None:
        """Register a callback for SelectionChanged/QueryStateChanged/CandidateHovered."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: EventCallback) -> None:
        self._subscribers.remove(callback)

    def _notify(self, event: CoordinatorEvent) -> None:
        for callback in list(self._subscribers):
            callback(event)

    # ==========================================================================
    # Teardown
    # ==========================================================================

    def _discard_results(self) -> None:
        """Tear down overlays, then charts, then replace the result set."""
        self.overlay_manager.teardown()
        self._destroy_profile_chart()
        if self.model.scatter_chart is not None:
            self.chart_surface.destroy(self.model.scatter_chart)
            self.model.scatter_chart = None
        self.model.replace_result_set()
        self.model.pending_ticket = None

    def _destroy_profile_chart(self) -> None:
        if self.model.profile_chart is not None:
            self.chart_surface.destroy(self.model.profile_chart)
            self.model.profile_chart = None
        self.model.hovered_index = None

    # ==========================================================================
    # Transition Actions (before_* hooks)
    # ==========================================================================

    def before_select_start(self, point: GeoPoint) -> None:
        """Replace the start point; results of the old selection are dropped."""
        self._discard_results()
        self.model.banner = None
        self.model.start_point = point
        self.model.next_sequence_id()

    def before_select_end(self, point: GeoPoint) -> None:
        """Replace the end point; results of the old selection are dropped."""
        self._discard_results()
        self.model.banner = None
        self.model.end_point = point
        self.model.next_sequence_id()

    def before_send_query(self, options: QueryOptions | None = None) -> None:
        """Drop the previous query's results and tag the new query."""
        self._discard_results()
        self.model.banner = None
        if options is not None:
            self.model.options = options
        ticket = QueryTicket(
            sequence_id=self.model.next_sequence_id(),
            query=RouteQuery(start=self.model.start_point, end=self.model.end_point, options=self.model.options),
        )
        self.model.pending_ticket = ticket
        logger.info(f"Issuing query #{ticket.sequence_id}: {ticket.query.to_dict()}")

    def before_receive_candidates(self, candidates: tuple[WeightedPathCandidate, ...]) -> None:
        """Populate the result set; colors are assigned on insertion."""
        for candidate in candidates:
            self.model.result_set.add_candidate(candidate)

    def before_receive_failure(self, reason: str) -> None:
        self.model.banner = InvalidRequestMessage(reason=reason)

    def before_reset_session(self) -> None:
        self._discard_results()
        self.model.banner = None
        self.model.start_point = None
        self.model.end_point = None
        self.model.next_sequence_id()

    # ==========================================================================
    # Entry Hooks
    # ==========================================================================

    def on_enter_succeeded(self) -> None:
        """Hook: Draw overlays and the candidate scatter chart."""
        result_set = self.model.result_set
        try:
            self.overlay_manager.render_result_set(
                result_set=result_set,
                start_point=self.model.start_point,
                end_point=self.model.end_point,
            )
            self.model.scatter_chart = self.chart_surface.render_series(self._candidate_scatter_series(result_set))
        except Exception:
            # State is already SUCCEEDED here; no overlay may outlive the error
            self.overlay_manager.teardown()
            raise
        self.model.banner = RouteResultMessage(
            min_distance=result_set.min_distance,
            distance_unit=result_set.distance_unit or "",
            candidate_count=len(result_set),
        )

    def on_enter_empty_result(self) -> None:
        """Hook: No path found."""
        self.model.banner = NoPathFoundMessage()

    # ==========================================================================
    # After Hooks (notifications)
    # ==========================================================================

    def after_select_start(self) -> None:
        self._notify(SelectionChanged(start_point=self.model.start_point, end_point=self.model.end_point))

    def after_select_end(self) -> None:
        self._notify(SelectionChanged(start_point=self.model.start_point, end_point=self.model.end_point))

    def after_transition(self, event: str, source: State, target: State) -> None:
        """Log every transition and notify subscribers."""
        if source is None:
            return
        logger.info(f"[STATE] {source.name} --({event})--> {target.name}")
        self._notify(
            QueryStateChanged(
                previous=source.value,
                current=target.value,
                event=str(event),
                sequence_id=self.model.current_sequence_id,
            )
        )

    # ==========================================================================
    # Public API
    # ==========================================================================

    def select_point(self, point: GeoPoint) -> None:
        """Fill start first, then end; further clicks replace the end point."""
        if self.model.start_point is None:
            self.select_start(point=point)
        else:
            self.select_end(point=point)

    def request_query(self, options: QueryOptions | None = None) -> QueryTicket | None:
        """Issue a new query, superseding any in-flight one.

        Returns:
            The ticket to send to the routing service, or None if start or
            end is missing (a selection prompt banner is shown instead).
        """
        if not self.query_state.accepts_query:
            logger.info(f"Query rejected in state {self.current_state.name}: start and end point must both be selected")
            self.model.banner = SelectStartAndEndMessage()
            return None
        self.send_query(options=options)
        return self.model.pending_ticket

    def apply_outcome(self, outcome: RoutingOutcome) -> bool:
        """Apply a routing outcome if it answers the current query.

        Returns:
            True if applied, False if discarded as stale.
        """
        if outcome.sequence_id != self.model.current_sequence_id or not self.pending.is_active:
            logger.debug(
                f"Discarding stale response #{outcome.sequence_id} "
                f"(current #{self.model.current_sequence_id}, state {self.current_state.name})"
            )
            return False

        if isinstance(outcome, RouteSuccess):
            self.receive_candidates(candidates=outcome.candidates)
        elif isinstance(outcome, RouteEmpty):
            self.receive_empty()
        else:
            self.receive_failure(reason=outcome.reason)
        return True

    def run_query(self, client: RoutingClient, options: QueryOptions | None = None) -> bool:
        """Issue a query, wait for the routing service and apply the answer.

        Returns:
            True if an outcome was applied, False if the query was rejected.
        """
        ticket = self.request_query(options=options)
        if ticket is None:
            return False
        return self.apply_outcome(client.fetch(ticket))

    def submit_query(
        self,
        client: RoutingClient,
        options: QueryOptions | None = None,
    ) -> "Future[RoutingOutcome] | None":
        """Issue a query and fetch it in the background.

        The caller passes the future's result to apply_outcome() on the UI
        thread; the worker never touches session state.
        """
        ticket = self.request_query(options=options)
        if ticket is None:
            return None
        return client.submit(ticket)

    def hover_candidate(self, index: int) -> float:
        """Show the elevation profile of one candidate.

        Returns:
            The candidate's climb in meters.

        Raises:
            ValueError: If no result is shown or the index is out of range.
        """
        if not self.succeeded.is_active:
            raise ValueError(f"No route candidates to show in state {self.current_state.name}")
        result_set = self.model.result_set
        if not 0 <= index < len(result_set):
            raise ValueError(f"Candidate index {index} out of range (0..{len(result_set) - 1})")

        candidate = result_set[index]
        climb = candidate.climb_m
        self._destroy_profile_chart()
        self.model.profile_chart = self.chart_surface.render_series(self._profile_series(candidate, climb))
        self.model.hovered_index = index
        logger.info(f"Showing profile of candidate {index} (climb {climb:.1f}m)")
        self._notify(CandidateHovered(index=index, climb_m=climb, color=candidate.color))
        return climb

    def clear_hover(self) -> None:
        """Remove the elevation profile chart."""
        self._destroy_profile_chart()

    def reset(self) -> None:
        """Return to IDLE with no selection, results or banner."""
        self.reset_session()

    # ==========================================================================
    # Chart series
    # ==========================================================================

    @staticmethod
    def _profile_series(candidate: WeightedPathCandidate, climb: float) -> ChartSeries:
        distances_m = GeoCalculator.cumulative_distances_m([node.point.lat_lon for node in candidate.nodes])
        color = candidate.color or "#000000"
        descent = ElevationProfileCalculator.total_descent(candidate.elevations)
        return ChartSeries(
            kind=ChartKind.PROFILE,
            title=f"Total: {climb:.2f}m (descent {descent:.2f}m)",
            x_label="Distance (km)",
            y_label="Elevation in m",
            points=tuple(
                LabeledPoint(x=d / 1000.0, y=node.elevation, label=f"{node.elevation:.0f}m", color=color)
                for d, node in zip(distances_m, candidate.nodes)
            ),
        )

    @staticmethod
    def _candidate_scatter_series(result_set: ResultSet) -> ChartSeries:
        return ChartSeries(
            kind=ChartKind.SCATTER,
            title="Route candidates",
            x_label=f"distance in {result_set.distance_unit}",
            y_label="elevation in m",
            points=tuple(
                LabeledPoint(
                    x=candidate.distance,
                    y=candidate.climb_m,
                    label=f"Route {i + 1}",
                    color=candidate.color or "#000000",
                )
                for i, candidate in enumerate(result_set)
            ),
        )

    # ==========================================================================
    # Utility Methods
    # ==========================================================================

    def get_state_name(self) -> str:
        """Get current state name for display."""
        return self.current_state.name

    def try_transition(self, event: str, **kwargs: Any) -> bool:
        """Attempt a transition, returning success/failure.

        Args:
            event: Transition event name
            **kwargs: Arguments for transition

        Returns:
            True if transition succeeded, False otherwise.
        """
        try:
            self.send(event, **kwargs)
            return True
        except TransitionNotAllowed:
            logger.warning(f"Transition '{event}' not allowed from {self.get_state_name()}")
            return False

    def __repr__(self) -> str:
        return f"RequestCoordinator(state={self.get_state_name()}, model={self.model!r})"

    @staticmethod
    def create(map_surface: MapSurface, chart_surface: ChartSurface) -> tuple["RequestCoordinator", QuerySession]:
        """Factory method to create the coordinator with a fresh session.

        Returns:
            Tuple of (RequestCoordinator, QuerySession)
        """
        session = QuerySession()
        coordinator = RequestCoordinator(map_surface=map_surface, chart_surface=chart_surface, session=session)
        logger.info("Created RequestCoordinator")
        return coordinator, session
