"""Configuration constants for Hill Route Planner.

All configurable parameters are centralized here for easy tuning.

Classes:
    AppConfig: UI application settings
    MapConfig: Default map view parameters and bounds
    RoutingConfig: Routing service endpoint and query defaults
    StyleConfig: Candidate palette and overlay styling
    ChartConfig: Chart rendering dimensions
"""


class AppConfig:
    """UI application settings."""

    TITLE = "Hill Route Planner - Routes With Elevation"
    ICON = "⛰️"
    LAYOUT = "wide"


class MapConfig:
    """Default map view parameters."""

    # Initial center: geographic center of Germany
    START_CENTER_LAT = 51.1657
    START_CENTER_LON = 10.4515
    DEFAULT_ZOOM = 6

    # Routing graph coverage (lat, lon) corners
    MAX_BOUNDS_SOUTH_WEST = (47.3, 5.9)
    MAX_BOUNDS_NORTH_EAST = (54.9, 16.9512215)

    MIN_ZOOM = 6
    MAX_ZOOM = 18

    # Height of the map component in pixels
    MAP_HEIGHT_PX = 550

    # Public raster basemap, usable without a Mapbox token
    TILE_URL = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"


assert MapConfig.MIN_ZOOM <= MapConfig.DEFAULT_ZOOM <= MapConfig.MAX_ZOOM


class RoutingConfig:
    """Routing service endpoint and query defaults."""

    BASE_URL = "http://localhost:8080/"
    ENDPOINT = "dijkstra"

    # Transport timeout in seconds (surfaced as a failed query, never retried)
    REQUEST_TIMEOUT_S = 30

    TRAVEL_TYPES = ["car", "bicycle", "foot"]
    DEFAULT_TRAVEL_TYPE = "car"

    OPTIMIZATIONS = ["distance", "time"]
    DEFAULT_OPTIMIZATION = "distance"

    # Maximum allowed elevation rise per route (meters)
    DEFAULT_MAX_ELE_RISE = 10_000
    MAX_ELE_RISE_STEP = 50

    # Decimal places for displaying selected coordinates
    DISPLAY_DECIMALS = 3

    # Background workers for non-blocking queries
    MAX_WORKERS = 2


assert RoutingConfig.DEFAULT_TRAVEL_TYPE in RoutingConfig.TRAVEL_TYPES
assert RoutingConfig.DEFAULT_OPTIMIZATION in RoutingConfig.OPTIMIZATIONS


class StyleConfig:
    """Visual colors and styling."""

    # Cyclic palette for route candidates (first candidate = shortest route)
    CANDIDATE_PALETTE = [
        "#000000",  # black
        "#FF0000",  # red
        "#008000",  # green
        "#0000FF",  # blue
        "#FFA500",  # orange
        "#FFFF00",  # yellow
        "#800080",  # purple
        "#FFC0CB",  # pink
        "#FFD700",  # gold
        "#FF6347",  # tomato
        "#6B8E23",  # olivedrab
    ]
    assert len(set(CANDIDATE_PALETTE)) == len(CANDIDATE_PALETTE), "Palette colors must be distinct"

    # Main path line
    PATH_WIDTH_PX = 4

    # Approach/departure "off track" segments between clicked point and graph
    OFF_TRACK_COLOR = "#3388FF"
    OFF_TRACK_WIDTH_PX = 2
    OFF_TRACK_DASH = (10, 10)  # (dash, gap) in pixels

    # Selection markers
    START_MARKER_COLOR = "#22C55E"  # green-500
    END_MARKER_COLOR = "#EF4444"  # red-500
    MARKER_RADIUS_PX = 8

    @staticmethod
    def hex_to_rgba(hex_color: str, alpha: int = 255) -> list[int]:
        """Convert '#RRGGBB' to a Pydeck [R, G, B, A] list (0-255)."""
        value = hex_color.lstrip("#")
        if len(value) != 6:
            raise ValueError(f"Expected #RRGGBB color, got '{hex_color}'")
        return [int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16), alpha]


class ChartConfig:
    """Chart rendering dimensions and settings."""

    PROFILE_HEIGHT = 320
    SCATTER_HEIGHT = 320
    DEFAULT_WIDTH = 800

    # Y-axis padding settings
    ELEVATION_PADDING_FACTOR = 0.1  # 10% padding above/below
    ELEVATION_PADDING_MIN_M = 20  # Minimum padding in meters

    SCATTER_MARKER_SIZE = 12
