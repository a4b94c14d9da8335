"""MapRenderer - Pydeck map surface for route candidates.

Implements the MapSurface interface on top of deck.gl:
- Each overlay segment is one PathLayer (approach/departure dashed)
- Start/end selections as ScatterplotLayer markers
- fit_bounds() recomputes the view state from the given points
- render() assembles a pdk.Deck with an OpenStreetMap raster basemap

Key differences from Leaflet-style maps:
- Uses [lon, lat] coordinate order (GeoJSON standard)
- Colors as RGBA lists [R, G, B, A] (0-255)
- Data prepared as list[dict] for GPU streaming
- pickable=True enables click detection on main path segments
"""

import logging

import pydeck as pdk

from hillroute_planner.constants import MapConfig, StyleConfig
from hillroute_planner.model.geo_point import GeoPoint
from hillroute_planner.ui.surfaces import MapSurface, OverlayHandle, OverlayStyle, SegmentRole

logger = logging.getLogger(__name__)

# Clickable object type for candidate paths (read back by the click handler)
CANDIDATE_PATH_TYPE = "candidate_path"

# Mapbox GL style for XYZ raster tiles (no API key required)
OSM_RASTER_STYLE: dict[str, object] = {
    "version": 8,
    "sources": {
        "osm": {
            "type": "raster",
            "tiles": [MapConfig.TILE_URL],
            "tileSize": 256,
            "attribution": '© <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors',
        }
    },
    "layers": [
        {
            "id": "osm",
            "type": "raster",
            "source": "osm",
            "minzoom": 0,
            "maxzoom": 19,
        }
    ],
}


class MapRenderer(MapSurface):
    """Pydeck implementation of the map surface.

    Example:
        renderer = MapRenderer()
        handle = renderer.add_overlay(geometry=[a, b], style=style)
        deck = renderer.render(start_point=a, end_point=b)
        st.pydeck_chart(deck)
    """

    def __init__(
        self,
        center_lat: float = MapConfig.START_CENTER_LAT,
        center_lon: float = MapConfig.START_CENTER_LON,
        zoom: float = MapConfig.DEFAULT_ZOOM,
    ) -> None:
        self.center_lat = center_lat
        self.center_lon = center_lon
        self.zoom = zoom
        self._layers: dict[OverlayHandle, pdk.Layer] = {}
        self._next_handle: OverlayHandle = 1

    @property
    def overlay_count(self) -> int:
        return len(self._layers)

    def get_view_state(self) -> pdk.ViewState:
        """Create Pydeck ViewState from current settings."""
        return pdk.ViewState(
            latitude=self.center_lat,
            longitude=self.center_lon,
            zoom=self.zoom,
            min_zoom=MapConfig.MIN_ZOOM,
            max_zoom=MapConfig.MAX_ZOOM,
            pitch=0,
            bearing=0,
        )

    # =========================================================================
    # MAP SURFACE
    # =========================================================================

    def add_overlay(self, geometry: list[GeoPoint], style: OverlayStyle) -> OverlayHandle:
        if len(geometry) < 1:
            raise ValueError("Overlay geometry needs at least one point")

        handle = self._next_handle
        self._next_handle += 1

        data = [
            {
                "type": CANDIDATE_PATH_TYPE if style.role == SegmentRole.MAIN else style.role.value,
                "id": f"overlay_{handle}",
                "candidate_index": style.candidate_index,
                "path": [point.lon_lat for point in geometry],
                "color": StyleConfig.hex_to_rgba(style.color),
                "width": style.width_px,
                "name": style.tooltip or "",
            }
        ]
        layer_kwargs: dict[str, object] = {}
        if style.dashed:
            dash, gap = StyleConfig.OFF_TRACK_DASH
            layer_kwargs = {
                "get_dash_array": [dash, gap],
                "dash_justified": True,
                "extensions": [{"@@type": "PathStyleExtension", "dash": True}],
            }

        self._layers[handle] = pdk.Layer(
            "PathLayer",
            data,
            id=f"overlay_{handle}",
            get_path="path",
            get_color="color",
            get_width="width",
            width_units="pixels",
            cap_rounded=True,
            joint_rounded=True,
            pickable=style.role == SegmentRole.MAIN,
            auto_highlight=style.role == SegmentRole.MAIN,
            **layer_kwargs,
        )
        return handle

    def remove_overlay(self, handle: OverlayHandle) -> None:
        if handle not in self._layers:
            raise KeyError(f"Unknown overlay handle {handle}")
        del self._layers[handle]

    def fit_bounds(self, points: list[GeoPoint]) -> None:
        """Center and zoom on the points, clamped to the allowed zoom range."""
        if not points:
            raise ValueError("fit_bounds needs at least one point")
        view = pdk.data_utils.compute_view([point.lon_lat for point in points], view_proportion=1)
        self.center_lat = view.latitude
        self.center_lon = view.longitude
        self.zoom = min(max(view.zoom, MapConfig.MIN_ZOOM), MapConfig.MAX_ZOOM)
        logger.debug(f"Fit view to {len(points)} points: ({self.center_lat:.4f}, {self.center_lon:.4f}) z{self.zoom}")

    # =========================================================================
    # DECK ASSEMBLY
    # =========================================================================

    def create_selection_layer(self, start_point: GeoPoint | None, end_point: GeoPoint | None) -> pdk.Layer:
        """Markers for the selected start (green) and end (red) points."""
        data = []
        if start_point is not None:
            data.append(
                {
                    "type": "start_marker",
                    "position": start_point.lon_lat,
                    "color": StyleConfig.hex_to_rgba(StyleConfig.START_MARKER_COLOR),
                    "name": "Start",
                }
            )
        if end_point is not None:
            data.append(
                {
                    "type": "end_marker",
                    "position": end_point.lon_lat,
                    "color": StyleConfig.hex_to_rgba(StyleConfig.END_MARKER_COLOR),
                    "name": "End",
                }
            )
        return pdk.Layer(
            "ScatterplotLayer",
            data,
            id="selection_markers",
            get_position="position",
            get_fill_color="color",
            get_line_color=[255, 255, 255, 255],
            get_radius=StyleConfig.MARKER_RADIUS_PX,
            radius_units="pixels",
            stroked=True,
            line_width_min_pixels=2,
        )

    def get_ordered_layers(self) -> list[pdk.Layer]:
        """Overlay layers in creation order (first candidate at the bottom)."""
        return [self._layers[handle] for handle in sorted(self._layers)]

    def render(self, start_point: GeoPoint | None = None, end_point: GeoPoint | None = None) -> pdk.Deck:
        """Assemble the deck: overlays first, selection markers on top."""
        layers = self.get_ordered_layers()
        layers.append(self.create_selection_layer(start_point=start_point, end_point=end_point))
        return pdk.Deck(
            map_style=OSM_RASTER_STYLE,
            map_provider="mapbox",  # Required when map_style is a dict
            initial_view_state=self.get_view_state(),
            layers=layers,
            tooltip=self._create_tooltip_config(),
        )

    def _create_tooltip_config(self) -> dict[str, str | dict[str, str]]:
        """Tooltip shows the candidate popup text."""
        return {
            "html": "<b>{name}</b>",
            "style": {
                "backgroundColor": "rgba(255, 255, 255, 0.95)",
                "color": "#333",
                "padding": "6px 10px",
                "borderRadius": "4px",
                "whiteSpace": "pre-line",
            },
        }

    def __repr__(self) -> str:
        return f"MapRenderer(overlays={len(self._layers)}, center=({self.center_lat:.4f}, {self.center_lon:.4f}))"
