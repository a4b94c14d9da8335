"""Integration and smoke tests to ensure the app works on first try.

These tests verify:
1. All module imports work without errors
2. Configuration constants are consistent
3. The coordinator drives the real pydeck and Plotly surfaces end-to-end
4. A patched routing service answer flows from HTTP to overlays and banner

Run these before deploying to catch issues early.
"""

from unittest.mock import MagicMock, patch

import pytest

from hillroute_planner.constants import MapConfig, RoutingConfig, StyleConfig
from hillroute_planner.model.message import NoPathFoundMessage, RouteResultMessage
from hillroute_planner.model.query_state import QueryState
from hillroute_planner.routing.client import RoutingClient
from hillroute_planner.ui.bottom_chart import ProfileChart
from hillroute_planner.ui.center_map import MapRenderer
from hillroute_planner.ui.pydeck_click_handler import MapClick
from hillroute_planner.ui.state_machine import RequestCoordinator
from hillroute_planner.ui.surfaces import ChartKind

from conftest import END, START, make_candidate_dict

POST = "hillroute_planner.routing.client.requests.post"


def _ok(payload: object) -> MagicMock:
    response = MagicMock()
    response.ok = True
    response.status_code = 200
    response.json.return_value = payload
    return response


@pytest.fixture
def app_parts() -> tuple[RequestCoordinator, MapRenderer, ProfileChart]:
    renderer = MapRenderer()
    chart = ProfileChart()
    coordinator, _ = RequestCoordinator.create(map_surface=renderer, chart_surface=chart)
    return coordinator, renderer, chart


# =============================================================================
# IMPORT SMOKE TESTS
# =============================================================================


class TestImportSmoke:
    def test_package_imports(self) -> None:
        import hillroute_planner.core
        import hillroute_planner.model
        import hillroute_planner.routing
        import hillroute_planner.ui

        assert hillroute_planner.ui.RequestCoordinator is RequestCoordinator


class TestConfig:
    def test_start_center_inside_bounds(self) -> None:
        south, west = MapConfig.MAX_BOUNDS_SOUTH_WEST
        north, east = MapConfig.MAX_BOUNDS_NORTH_EAST
        assert south <= MapConfig.START_CENTER_LAT <= north
        assert west <= MapConfig.START_CENTER_LON <= east

    def test_palette_colors_are_hex(self) -> None:
        for color in StyleConfig.CANDIDATE_PALETTE:
            assert len(StyleConfig.hex_to_rgba(color)) == 4

    def test_default_travel_type_is_known(self) -> None:
        assert RoutingConfig.DEFAULT_TRAVEL_TYPE in RoutingConfig.TRAVEL_TYPES


# =============================================================================
# END-TO-END
# =============================================================================


class TestEndToEnd:
    def test_single_route(self, app_parts: tuple[RequestCoordinator, MapRenderer, ProfileChart]) -> None:
        """Start (48.0, 11.0), end (48.1, 11.2), one 5.2km route over 100m, 120m, 110m."""
        coordinator, renderer, chart = app_parts
        coordinator.select_start(point=START)
        coordinator.select_end(point=END)

        payload = [
            {
                "path": [
                    {"latitude": 48.0, "longitude": 11.0, "elevation": 100},
                    {"latitude": 48.05, "longitude": 11.1, "elevation": 120},
                    {"latitude": 48.1, "longitude": 11.2, "elevation": 110},
                ],
                "distance": 5.2,
                "distance_type": "km",
            }
        ]
        with patch(POST, return_value=_ok(payload)):
            assert coordinator.run_query(client=RoutingClient())

        result_set = coordinator.session.result_set
        assert coordinator.query_state == QueryState.SUCCEEDED
        assert len(result_set) == 1
        assert result_set[0].elevations == [100.0, 120.0, 110.0]
        assert result_set[0].climb_m == pytest.approx(20.0)
        assert result_set.min_distance == result_set.max_distance == 5.2
        assert renderer.overlay_count == 3
        assert coordinator.session.banner.message == "Shortest path for elevation restriction has 5.2 km"
        assert chart.latest_figure(ChartKind.SCATTER) is not None

        deck = renderer.render(start_point=START, end_point=END)
        assert len(deck.layers) == 4  # approach, main, departure, markers

    def test_empty_answer(self, app_parts: tuple[RequestCoordinator, MapRenderer, ProfileChart]) -> None:
        coordinator, renderer, chart = app_parts
        coordinator.select_start(point=START)
        coordinator.select_end(point=END)

        with patch(POST, return_value=_ok([])):
            coordinator.run_query(client=RoutingClient())

        assert coordinator.query_state == QueryState.EMPTY_RESULT
        assert renderer.overlay_count == 0
        assert chart.chart_count == 0
        assert isinstance(coordinator.session.banner, NoPathFoundMessage)

    def test_click_on_route_shows_profile(
        self,
        app_parts: tuple[RequestCoordinator, MapRenderer, ProfileChart],
    ) -> None:
        coordinator, renderer, chart = app_parts
        for click in ([11.0, 48.0], [11.2, 48.1]):
            point = MapClick.from_event({"coordinate": click, "eventType": "click"}).to_geo_point()
            coordinator.select_point(point)

        payload = [
            make_candidate_dict(elevations=[500.0, 520.0, 510.0], distance=5.2),
            make_candidate_dict(elevations=[500.0, 505.0], distance=6.0),
        ]
        with patch(POST, return_value=_ok(payload)):
            coordinator.run_query(client=RoutingClient())

        # Main segment of the second candidate as st_deckgl reports it
        main_layer = renderer.get_ordered_layers()[4]
        event = {**main_layer.data[0], "coordinate": [11.1, 48.05], "eventType": "click"}
        index = MapClick.from_event(event).candidate_index
        assert index == 1

        assert coordinator.hover_candidate(index) == pytest.approx(5.0)
        fig = chart.latest_figure(ChartKind.PROFILE)
        assert fig is not None
        assert fig.layout.title.text.startswith("Total: 5.00m")

    def test_new_selection_clears_real_surfaces(
        self,
        app_parts: tuple[RequestCoordinator, MapRenderer, ProfileChart],
    ) -> None:
        coordinator, renderer, chart = app_parts
        coordinator.select_start(point=START)
        coordinator.select_end(point=END)
        with patch(POST, return_value=_ok([make_candidate_dict(elevations=[500.0, 520.0])])):
            coordinator.run_query(client=RoutingClient())
        coordinator.hover_candidate(0)
        assert isinstance(coordinator.session.banner, RouteResultMessage)

        coordinator.select_end(point=END)

        assert coordinator.query_state == QueryState.READY_TO_QUERY
        assert renderer.overlay_count == 0
        assert chart.chart_count == 0
        assert coordinator.session.banner is None
