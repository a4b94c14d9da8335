"""GeoPoint and PathNode - The geometry atoms of route display.

A GeoPoint is a clicked or computed WGS84 location. A PathNode adds the
elevation sampled by the routing service at that location.

Used by:
- QuerySession (start and end points)
- WeightedPathCandidate (ordered PathNodes of one route)
- OverlayManager (segment geometry)
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 location. Immutable once created.

    Attributes:
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees

    Example:
        point = GeoPoint(lat=48.0, lon=11.0)
    """

    lat: float
    lon: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not (np.isfinite(self.lat) and np.isfinite(self.lon)):
            raise ValueError(f"GeoPoint needs finite coordinates, got ({self.lat}, {self.lon})")
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"Longitude out of range: {self.lon}")

    @property
    def lat_lon(self) -> tuple[float, float]:
        """Return (lat, lon) tuple - standard geographic order."""
        return (self.lat, self.lon)

    @property
    def lon_lat(self) -> list[float]:
        """Return [lon, lat] list - GeoJSON/Pydeck order."""
        return [self.lon, self.lat]

    def to_request(self) -> dict[str, float]:
        """Serialize for the routing request body."""
        return {"latitude": self.lat, "longitude": self.lon}

    def display_text(self, decimals: int) -> str:
        """Rounded coordinates for the selection summary."""
        return f"latitude: {round(self.lat, decimals)}, longitude: {round(self.lon, decimals)}"

    def __repr__(self) -> str:
        return f"GeoPoint(lat={self.lat:.5f}, lon={self.lon:.5f})"


@dataclass(frozen=True)
class PathNode:
    """A point on a route with its elevation.

    Attributes:
        point: Location of the node
        elevation: Elevation in meters above sea level
    """

    point: GeoPoint
    elevation: float

    def __post_init__(self) -> None:
        if not np.isfinite(self.elevation):
            raise ValueError(f"PathNode elevation must be finite, got {self.elevation} at {self.point!r}")

    @property
    def lat(self) -> float:
        return self.point.lat

    @property
    def lon(self) -> float:
        return self.point.lon

    def __repr__(self) -> str:
        return f"PathNode(lat={self.lat:.5f}, lon={self.lon:.5f}, elev={self.elevation:.1f}m)"
