"""Route Matcher - Request matching and match outcomes.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from fotoroute_core.routing.router import Route, RouteTable
from fotoroute_core.utils.helpers import normalize_path, request_path


@dataclass(frozen=True)
class NotFound:
    """No route matches the request method and path."""

    method: str
    path: str


@dataclass(frozen=True)
class HandlerResolutionError:
    """A matched route's handler identifier did not resolve.

    ``reason`` is one of ``CONTROLLER_NOT_FOUND``, ``METHOD_NOT_FOUND``
    or ``MALFORMED_HANDLER``; ``name`` is the identifier that failed.
    """

    CONTROLLER_NOT_FOUND = "controller not found"
    METHOD_NOT_FOUND = "method not found"
    MALFORMED_HANDLER = "malformed handler"

    reason: str
    name: str


@dataclass(frozen=True)
class Matched:
    """A route matched; ``params`` are in pattern order."""

    route: Route
    params: Tuple[str, ...] = ()

    @property
    def handler(self) -> str:
        return self.route.handler


MatchResult = Union[NotFound, HandlerResolutionError, Matched]


class RouteMatcher:
    """First-match route matcher.

    Matching is a pure function of the route table, the request method
    and the request path.
    """

    def __init__(self, routes: RouteTable):
        self.routes = routes

    def match(self, raw_uri: str, method: str) -> Union[Matched, NotFound]:
        """Match a request to a route.

        Args:
            raw_uri: Request URI, may include query string and fragment
            method: HTTP method

        Returns:
            Matched for the first route in registration order, else NotFound
        """
        path = normalize_path(request_path(raw_uri))

        for route in self.routes.all_routes():
            params = route.matches(path, method)
            if params is not None:
                return Matched(route=route, params=params)

        return NotFound(method=method, path=path)


__all__ = [
    "HandlerResolutionError",
    "Matched",
    "MatchResult",
    "NotFound",
    "RouteMatcher",
]
