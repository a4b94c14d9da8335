"""Elevation profile metrics.

Climb is the cumulative positive elevation change along a path:

    total_climb = sum(max(0, e[i] - e[i-1]) for i in 1..n-1)

Descents are ignored entirely, so a path going 100m up and 100m down climbs
100m even though its net elevation change is zero.
"""

from collections.abc import Iterable


class ElevationProfileCalculator:
    """Static methods for elevation profile metrics.

    Example:
        ElevationProfileCalculator.total_climb([10, 12, 9, 15])  # 8.0
    """

    @staticmethod
    def total_climb(elevations: Iterable[float]) -> float:
        """Sum of all positive elevation steps in meters.

        Args:
            elevations: Ordered elevation samples along a path (meters)

        Returns:
            Total climb in meters, 0.0 for sequences with fewer than two samples.
        """
        climb = 0.0
        previous: float | None = None
        for elevation in elevations:
            if previous is not None and elevation > previous:
                climb += elevation - previous
            previous = elevation
        return climb

    @staticmethod
    def total_descent(elevations: Iterable[float]) -> float:
        """Sum of all negative elevation steps as a positive number of meters."""
        descent = 0.0
        previous: float | None = None
        for elevation in elevations:
            if previous is not None and elevation < previous:
                descent += previous - elevation
            previous = elevation
        return descent
