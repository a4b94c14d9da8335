"""Sidebar: query options and selection summary."""

import logging

import streamlit as st

from hillroute_planner.constants import RoutingConfig
from hillroute_planner.routing.query import QueryOptions
from hillroute_planner.ui.state_machine import QuerySession

logger = logging.getLogger(__name__)

# Which endpoint a map click sets
CLICK_TARGETS = ["Auto", "Start", "End"]


def render_query_options() -> QueryOptions:
    """Render routing restriction widgets and return the chosen options."""
    st.sidebar.subheader("Routing options")
    travel_type = st.sidebar.selectbox(
        "Travel type",
        options=RoutingConfig.TRAVEL_TYPES,
        index=RoutingConfig.TRAVEL_TYPES.index(RoutingConfig.DEFAULT_TRAVEL_TYPE),
    )
    optimization = st.sidebar.radio(
        "Optimize for",
        options=RoutingConfig.OPTIMIZATIONS,
        index=RoutingConfig.OPTIMIZATIONS.index(RoutingConfig.DEFAULT_OPTIMIZATION),
        horizontal=True,
    )
    max_ele_rise = st.sidebar.number_input(
        "Max elevation rise (m)",
        min_value=0,
        value=RoutingConfig.DEFAULT_MAX_ELE_RISE,
        step=RoutingConfig.MAX_ELE_RISE_STEP,
    )
    all_paths = st.sidebar.checkbox("Show all paths", value=False)
    return QueryOptions(
        travel_type=travel_type,
        by_distance=optimization == "distance",
        max_ele_rise=int(max_ele_rise),
        all_paths=all_paths,
    )


def render_click_target() -> str:
    """Let the user choose which endpoint the next map click sets."""
    return st.sidebar.radio("Map click sets", options=CLICK_TARGETS, horizontal=True)


def render_selection_summary(session: QuerySession) -> None:
    """Show the selected start/end coordinates."""
    start_text, end_text = session.selection_text()
    st.sidebar.subheader("Selection")
    st.sidebar.markdown(f"**Start:** {start_text}")
    st.sidebar.markdown(f"**End:** {end_text}")
