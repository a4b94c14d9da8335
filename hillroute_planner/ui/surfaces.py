"""Presentation surfaces consumed by the overlay and chart lifecycle.

The core never talks to pydeck or Plotly directly. It draws through two narrow
interfaces:

    MapSurface:   add_overlay(geometry, style) -> handle, remove_overlay(handle),
                  fit_bounds(points)
    ChartSurface: render_series(series) -> handle, destroy(handle)

Handles are opaque integers issued by the surface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from hillroute_planner.model.geo_point import GeoPoint

OverlayHandle = int
ChartHandle = int


class SegmentRole(Enum):
    """Which part of a candidate overlay a map line represents."""

    APPROACH = "approach"  # Selected start -> first path node (off track)
    MAIN = "main"  # The routed path itself
    DEPARTURE = "departure"  # Last path node -> selected end (off track)


@dataclass(frozen=True)
class OverlayStyle:
    """Line style for one overlay segment.

    Attributes:
        color: Hex color '#RRGGBB'
        width_px: Line width in pixels
        role: Segment role within the candidate overlay
        candidate_index: Index of the candidate in the result set
        dashed: Draw as dashed line
        tooltip: Popup text, or None for no popup
    """

    color: str
    width_px: int
    role: SegmentRole
    candidate_index: int
    dashed: bool = False
    tooltip: str | None = None


class ChartKind(Enum):
    """Chart types rendered on the chart surface."""

    PROFILE = "profile"  # Elevation along one candidate
    SCATTER = "scatter"  # Distance vs climb across candidates


@dataclass(frozen=True)
class LabeledPoint:
    """One chart sample."""

    x: float
    y: float
    label: str
    color: str


@dataclass(frozen=True)
class ChartSeries:
    """A labeled series plus the axis texts to draw it with."""

    kind: ChartKind
    title: str
    x_label: str
    y_label: str
    points: tuple[LabeledPoint, ...]


class MapSurface(ABC):
    """Map widget that draws line overlays."""

    @abstractmethod
    def add_overlay(self, geometry: list[GeoPoint], style: OverlayStyle) -> OverlayHandle:
        """Draw a polyline and return its handle."""
        raise NotImplementedError

    @abstractmethod
    def remove_overlay(self, handle: OverlayHandle) -> None:
        """Remove a previously added polyline."""
        raise NotImplementedError

    @abstractmethod
    def fit_bounds(self, points: list[GeoPoint]) -> None:
        """Move the viewport so all points are visible."""
        raise NotImplementedError


class ChartSurface(ABC):
    """Chart widget that draws labeled series."""

    @abstractmethod
    def render_series(self, series: ChartSeries) -> ChartHandle:
        """Draw a series and return its handle."""
        raise NotImplementedError

    @abstractmethod
    def destroy(self, handle: ChartHandle) -> None:
        """Remove a previously rendered chart."""
        raise NotImplementedError
