"""UI components: coordinator state machine, overlay lifecycle, map and charts.

Streamlit-bound modules (pydeck_click_handler, left_panel) are imported
directly by app.py so the core can be used without a running Streamlit app.
"""

from hillroute_planner.ui.bottom_chart import ProfileChart
from hillroute_planner.ui.center_map import MapRenderer
from hillroute_planner.ui.events import (
    CandidateHovered,
    CoordinatorEvent,
    QueryStateChanged,
    SelectionChanged,
)
from hillroute_planner.ui.overlay_manager import Overlay, OverlayManager
from hillroute_planner.ui.state_machine import QuerySession, RequestCoordinator
from hillroute_planner.ui.surfaces import (
    ChartKind,
    ChartSeries,
    ChartSurface,
    LabeledPoint,
    MapSurface,
    OverlayStyle,
    SegmentRole,
)

__all__ = [
    "RequestCoordinator",
    "QuerySession",
    "OverlayManager",
    "Overlay",
    "MapRenderer",
    "ProfileChart",
    "MapSurface",
    "ChartSurface",
    "OverlayStyle",
    "SegmentRole",
    "ChartKind",
    "ChartSeries",
    "LabeledPoint",
    "SelectionChanged",
    "QueryStateChanged",
    "CandidateHovered",
    "CoordinatorEvent",
]
