"""Tests for MapRenderer - pydeck map surface and deck assembly."""

import pydeck as pdk
import pytest

from hillroute_planner.constants import MapConfig, StyleConfig
from hillroute_planner.ui.center_map import CANDIDATE_PATH_TYPE, MapRenderer
from hillroute_planner.ui.surfaces import OverlayStyle, SegmentRole

from conftest import END, START


@pytest.fixture
def renderer() -> MapRenderer:
    return MapRenderer()


def main_style(index: int = 0) -> OverlayStyle:
    return OverlayStyle(
        color="#FF0000",
        width_px=StyleConfig.PATH_WIDTH_PX,
        role=SegmentRole.MAIN,
        candidate_index=index,
        tooltip="length: 5.2km\nelevation: 20.00m",
    )


def dashed_style(role: SegmentRole = SegmentRole.APPROACH) -> OverlayStyle:
    return OverlayStyle(
        color=StyleConfig.OFF_TRACK_COLOR,
        width_px=StyleConfig.OFF_TRACK_WIDTH_PX,
        role=role,
        candidate_index=0,
        dashed=True,
    )


class TestOverlays:
    def test_add_overlay_creates_path_layer(self, renderer: MapRenderer) -> None:
        handle = renderer.add_overlay([START, END], main_style(index=3))
        (layer,) = renderer.get_ordered_layers()
        (datum,) = layer.data

        assert layer.type == "PathLayer"
        assert layer.id == f"overlay_{handle}"
        assert datum["type"] == CANDIDATE_PATH_TYPE
        assert datum["candidate_index"] == 3
        assert datum["path"] == [[11.0, 48.0], [11.2, 48.1]]
        assert datum["color"] == [255, 0, 0, 255]
        assert datum["name"] == "length: 5.2km\nelevation: 20.00m"

    def test_off_track_segments_use_role_type(self, renderer: MapRenderer) -> None:
        renderer.add_overlay([START, END], dashed_style(SegmentRole.DEPARTURE))
        (layer,) = renderer.get_ordered_layers()
        assert layer.data[0]["type"] == "departure"
        assert layer.data[0]["name"] == ""

    def test_handles_are_unique_and_removable(self, renderer: MapRenderer) -> None:
        first = renderer.add_overlay([START, END], main_style())
        second = renderer.add_overlay([START, END], dashed_style())
        assert first != second
        renderer.remove_overlay(first)
        assert renderer.overlay_count == 1
        assert [layer.id for layer in renderer.get_ordered_layers()] == [f"overlay_{second}"]

    def test_remove_unknown_handle(self, renderer: MapRenderer) -> None:
        with pytest.raises(KeyError):
            renderer.remove_overlay(999)

    def test_empty_geometry_rejected(self, renderer: MapRenderer) -> None:
        with pytest.raises(ValueError):
            renderer.add_overlay([], main_style())


class TestViewport:
    def test_initial_view_is_config_center(self, renderer: MapRenderer) -> None:
        view = renderer.get_view_state()
        assert view.latitude == MapConfig.START_CENTER_LAT
        assert view.longitude == MapConfig.START_CENTER_LON

    def test_fit_bounds_centers_between_points(self, renderer: MapRenderer) -> None:
        renderer.fit_bounds([START, END])
        assert START.lat <= renderer.center_lat <= END.lat
        assert START.lon <= renderer.center_lon <= END.lon
        assert MapConfig.MIN_ZOOM <= renderer.zoom <= MapConfig.MAX_ZOOM

    def test_fit_bounds_needs_points(self, renderer: MapRenderer) -> None:
        with pytest.raises(ValueError):
            renderer.fit_bounds([])


class TestRender:
    def test_render_puts_markers_on_top(self, renderer: MapRenderer) -> None:
        renderer.add_overlay([START, END], main_style())
        deck = renderer.render(start_point=START, end_point=END)

        assert isinstance(deck, pdk.Deck)
        assert len(deck.layers) == 2
        markers = deck.layers[-1]
        assert markers.id == "selection_markers"
        assert [d["type"] for d in markers.data] == ["start_marker", "end_marker"]

    def test_selection_layer_with_only_start(self, renderer: MapRenderer) -> None:
        layer = renderer.create_selection_layer(start_point=START, end_point=None)
        assert [d["name"] for d in layer.data] == ["Start"]


class TestHexToRgba:
    @pytest.mark.parametrize(
        "hex_color,expected",
        [("#000000", [0, 0, 0, 255]), ("#FFA500", [255, 165, 0, 255]), ("6B8E23", [107, 142, 35, 255])],
    )
    def test_conversion(self, hex_color: str, expected: list[int]) -> None:
        assert StyleConfig.hex_to_rgba(hex_color) == expected

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            StyleConfig.hex_to_rgba("#FFF")
