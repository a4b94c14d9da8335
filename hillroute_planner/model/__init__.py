"""Data model classes for route query results.

- GeoPoint: Geometry atom (lat, lon)
- PathNode: GeoPoint plus elevation
- WeightedPathCandidate: One route from the routing service
- ResultSet: Ordered candidates of one query with aggregates
- QueryState: Lifecycle states of a query session
- Message: User-facing banners
"""

from hillroute_planner.model.geo_point import GeoPoint, PathNode
from hillroute_planner.model.message import (
    InvalidRequestMessage,
    Message,
    MessageLevel,
    NoPathFoundMessage,
    RouteResultMessage,
    SelectStartAndEndMessage,
)
from hillroute_planner.model.path_candidate import (
    ResponseFormatError,
    WeightedPathCandidate,
    parse_candidates,
)
from hillroute_planner.model.query_state import QueryState
from hillroute_planner.model.result_set import ResultSet

__all__ = [
    "GeoPoint",
    "PathNode",
    "WeightedPathCandidate",
    "ResponseFormatError",
    "parse_candidates",
    "ResultSet",
    "QueryState",
    "Message",
    "MessageLevel",
    "SelectStartAndEndMessage",
    "InvalidRequestMessage",
    "NoPathFoundMessage",
    "RouteResultMessage",
]
