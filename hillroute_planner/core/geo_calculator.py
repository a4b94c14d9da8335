"""Great-circle helpers for route display.

Used for the x-axis of the elevation profile (distance along the route) and
for viewport math. A spherical Earth with mean radius 6,371 km is accurate
enough for chart labels.
"""

from collections.abc import Sequence
from math import atan2, cos, radians, sin, sqrt

EARTH_RADIUS_M = 6_371_000


class GeoCalculator:
    """Static helpers over (lat, lon) pairs in decimal degrees; results in meters."""

    EARTH_RADIUS_M = EARTH_RADIUS_M

    @staticmethod
    def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Great-circle distance between two WGS84 positions in meters."""
        phi1, phi2 = radians(lat1), radians(lat2)
        half_dphi = radians(lat2 - lat1) / 2
        half_dlambda = radians(lon2 - lon1) / 2
        h = sin(half_dphi) ** 2 + cos(phi1) * cos(phi2) * sin(half_dlambda) ** 2
        return 2 * EARTH_RADIUS_M * atan2(sqrt(h), sqrt(1 - h))

    @staticmethod
    def cumulative_distances_m(lat_lons: Sequence[tuple[float, float]]) -> list[float]:
        """Running distance from the first position to each position of a polyline.

        Args:
            lat_lons: Ordered (lat, lon) tuples

        Returns:
            One value per input position, beginning with 0.0 ([] for no input).
        """
        if not lat_lons:
            return []
        distances = [0.0]
        for (lat1, lon1), (lat2, lon2) in zip(lat_lons, lat_lons[1:]):
            distances.append(distances[-1] + GeoCalculator.haversine_distance_m(lat1, lon1, lat2, lon2))
        return distances

