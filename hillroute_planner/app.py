"""Hill Route Planner - Interactive route comparison by distance and climb.

Select a start and an end point on the map, query the routing service and
compare every returned route by distance, climb and elevation profile.

Run: streamlit run hillroute_planner/app.py
"""

import logging
import traceback

import streamlit as st

from hillroute_planner.constants import AppConfig, ChartConfig, MapConfig, RoutingConfig
from hillroute_planner.routing.client import RoutingClient
from hillroute_planner.ui import MapRenderer, ProfileChart, RequestCoordinator
from hillroute_planner.ui.left_panel import (
    render_click_target,
    render_query_options,
    render_selection_summary,
)
from hillroute_planner.ui.pydeck_click_handler import MapClick, is_within_bounds, render_route_map
from hillroute_planner.ui.surfaces import ChartKind

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# SESSION STATE
# =============================================================================


def init_session_state() -> None:
    """Initialize session state with coordinator, surfaces and routing client."""
    if "map_renderer" not in st.session_state:
        st.session_state.map_renderer = MapRenderer(
            center_lat=MapConfig.START_CENTER_LAT,
            center_lon=MapConfig.START_CENTER_LON,
            zoom=MapConfig.DEFAULT_ZOOM,
        )

    if "profile_chart" not in st.session_state:
        st.session_state.profile_chart = ProfileChart(width=ChartConfig.DEFAULT_WIDTH, height=ChartConfig.PROFILE_HEIGHT)

    if "coordinator" not in st.session_state:
        coordinator, session = RequestCoordinator.create(
            map_surface=st.session_state.map_renderer,
            chart_surface=st.session_state.profile_chart,
        )
        st.session_state.coordinator = coordinator
        st.session_state.session = session

    if "routing_client" not in st.session_state:
        st.session_state.routing_client = RoutingClient(base_url=RoutingConfig.BASE_URL)


def reset_ui_state() -> None:
    """Reset the query session after an unexpected error."""
    logger.info("Resetting UI state due to error recovery")
    coordinator: RequestCoordinator = st.session_state.coordinator
    coordinator.reset()


# =============================================================================
# CLICK HANDLING
# =============================================================================


def dispatch_click(click: MapClick, click_target: str) -> bool:
    """Apply a map click to the coordinator. Returns True if state changed."""
    coordinator: RequestCoordinator = st.session_state.coordinator

    candidate_index = click.candidate_index
    if candidate_index is not None:
        coordinator.hover_candidate(candidate_index)
        return True

    point = click.to_geo_point()
    if point is None:
        return False
    if not is_within_bounds(point):
        st.toast("⚠️ Point is outside the routing area")
        return False

    if click_target == "Start":
        coordinator.select_start(point=point)
    elif click_target == "End":
        coordinator.select_end(point=point)
    else:
        coordinator.select_point(point)
    return True


# =============================================================================
# RENDERING
# =============================================================================


def render_sidebar() -> None:
    coordinator: RequestCoordinator = st.session_state.coordinator
    client: RoutingClient = st.session_state.routing_client

    options = render_query_options()
    st.session_state.click_target = render_click_target()
    render_selection_summary(coordinator.session)

    col_query, col_reset = st.sidebar.columns(2)
    if col_query.button("Find route", type="primary", use_container_width=True):
        with st.spinner("Querying routing service..."):
            coordinator.run_query(client=client, options=options)
    if col_reset.button("Reset", use_container_width=True):
        coordinator.reset()
        st.rerun()


def render_main() -> None:
    coordinator: RequestCoordinator = st.session_state.coordinator
    renderer: MapRenderer = st.session_state.map_renderer
    chart: ProfileChart = st.session_state.profile_chart
    session = coordinator.session

    logger.debug(f"[RENDER] state={coordinator.get_state_name()}")

    deck = renderer.render(start_point=session.start_point, end_point=session.end_point)
    click = render_route_map(deck=deck, key="route_map")
    if click is not None and dispatch_click(click=click, click_target=st.session_state.get("click_target", "Auto")):
        st.rerun()

    if session.banner is not None:
        session.banner.display()

    col_profile, col_scatter = st.columns(2)
    profile_fig = chart.latest_figure(ChartKind.PROFILE)
    if profile_fig is not None:
        col_profile.plotly_chart(profile_fig, use_container_width=True)
    elif coordinator.succeeded.is_active:
        col_profile.caption("Click a route on the map to see its elevation profile.")

    scatter_fig = chart.latest_figure(ChartKind.SCATTER)
    if scatter_fig is not None:
        col_scatter.plotly_chart(scatter_fig, use_container_width=True)


def main() -> None:
    st.set_page_config(page_title=AppConfig.TITLE, page_icon=AppConfig.ICON, layout=AppConfig.LAYOUT)
    st.title(f"{AppConfig.ICON} {AppConfig.TITLE}")

    init_session_state()
    try:
        render_sidebar()
        render_main()
    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        logger.error(f"[RENDER] Error caught: {error_msg}\n{traceback.format_exc()}")
        st.error(f"⚠️ Something went wrong: {error_msg}")
        reset_ui_state()
        if st.button("🔄 Reset and Continue", type="primary"):
            st.rerun()


if __name__ == "__main__":
    main()
