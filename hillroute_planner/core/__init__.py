"""Core calculations for route result aggregation.

- ElevationProfileCalculator: Cumulative climb along an elevation sequence
- ColorAssigner: Cyclic palette allocator for route candidates
- GeoCalculator: Geodesic distances for profile chart axes
"""

from hillroute_planner.core.color_assigner import ColorAssigner
from hillroute_planner.core.elevation_profile import ElevationProfileCalculator
from hillroute_planner.core.geo_calculator import GeoCalculator

__all__ = [
    "ColorAssigner",
    "ElevationProfileCalculator",
    "GeoCalculator",
]
