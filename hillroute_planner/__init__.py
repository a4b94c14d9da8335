"""Hill Route Planner - Compare routes between two points by distance and climb.

Pick a start and an end point on the map, query an external routing service,
and inspect every returned route candidate with its distance, cumulative climb
and elevation profile.

Modules:
    core: Pure calculations (climb, geodesic distance, candidate colors)
    model: Data structures (GeoPoint, PathNode, WeightedPathCandidate, ResultSet)
    routing: HTTP client for the external routing service
    ui: State machine, overlay lifecycle, pydeck map and Plotly charts

Example:
    from hillroute_planner.core import ElevationProfileCalculator
    from hillroute_planner.ui import RequestCoordinator
"""
