"""Routing service access: query types, tagged outcomes and the HTTP client."""

from hillroute_planner.routing.client import RoutingClient, RoutingError
from hillroute_planner.routing.query import (
    QueryOptions,
    QueryTicket,
    RouteEmpty,
    RouteFailure,
    RouteQuery,
    RouteSuccess,
    RoutingOutcome,
)

__all__ = [
    "RoutingClient",
    "RoutingError",
    "QueryOptions",
    "QueryTicket",
    "RouteQuery",
    "RouteSuccess",
    "RouteEmpty",
    "RouteFailure",
    "RoutingOutcome",
]
