"""Routing module - Route table, matching and dispatch."""

from fotoroute_core.routing.router import (
    HTTPMethod,
    Route,
    RouteDefinitionError,
    RouteTable,
)
from fotoroute_core.routing.matcher import (
    HandlerResolutionError,
    Matched,
    MatchResult,
    NotFound,
    RouteMatcher,
)
from fotoroute_core.routing.dispatcher import Dispatcher, NOT_FOUND_BODY

__all__ = [
    "HTTPMethod",
    "Route",
    "RouteDefinitionError",
    "RouteTable",
    "HandlerResolutionError",
    "Matched",
    "MatchResult",
    "NotFound",
    "RouteMatcher",
    "Dispatcher",
    "NOT_FOUND_BODY",
]
