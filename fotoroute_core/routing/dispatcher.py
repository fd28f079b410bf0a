"""Dispatcher - Resolve a request to a controller action.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from fotoroute_core.app.request import Request, Response
from fotoroute_core.routing.matcher import (
    HandlerResolutionError,
    MatchResult,
    NotFound,
    RouteMatcher,
)
from fotoroute_core.routing.router import RouteTable

if TYPE_CHECKING:
    from fotoroute_core.controllers.base import ControllerRegistry

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = "404 - Page not found"


class Dispatcher:
    """Request dispatcher.

    Dispatch flow:
    ┌────────────────────────────────────────────────────────────┐
    │  Idle ──▶ Matching ──┬──▶ Invoking ──────────┐             │
    │                      ├──▶ RespondingNotFound ─┼──▶ Done     │
    │                      └──▶ RespondingError ────┘             │
    └────────────────────────────────────────────────────────────┘

    No matching route answers 404 with a fixed body; a handler that does
    not resolve answers 500 naming the missing controller or method.
    A resolved action writes the response itself.

    Usage:
        dispatcher = Dispatcher(routes, registry)
        response = dispatcher.dispatch("/photos/42?size=large", "GET")
    """

    def __init__(
        self,
        routes: RouteTable,
        registry: "ControllerRegistry",
        db: Optional[Any] = None,
    ):
        self.routes = routes
        self.registry = registry
        self.db = db
        self._matcher = RouteMatcher(routes)

    def match(self, raw_uri: str, method: str) -> MatchResult:
        """Match and resolve without invoking anything.

        Returns:
            Matched, NotFound or HandlerResolutionError
        """
        result = self._matcher.match(raw_uri, method)
        if isinstance(result, NotFound):
            return result

        found = self.registry.lookup(result.handler)
        if isinstance(found, HandlerResolutionError):
            return found
        return result

    def dispatch(
        self,
        raw_uri: str,
        method: str,
        request: Optional[Request] = None,
        response: Optional[Response] = None,
    ) -> Response:
        """Dispatch a request.

        Args:
            raw_uri: Request URI as received
            method: HTTP method
            request: Request handed to the controller
            response: Response to write to (default: a new one)

        Returns:
            The response written by the action or by the router
        """
        if response is None:
            response = Response()

        result = self._matcher.match(raw_uri, method)
        if isinstance(result, NotFound):
            logger.warning(f"No route for {method} {result.path}")
            return self._respond(response, 404, NOT_FOUND_BODY)

        handler = self.registry.resolve(
            result.handler, request=request, response=response, db=self.db
        )
        if isinstance(handler, HandlerResolutionError):
            logger.warning(
                f"Cannot resolve {result.handler!r} for {method} {result.route.pattern}: "
                f"{handler.reason}"
            )
            return self._respond(response, 500, self._error_body(handler))

        handler(*result.params)
        return response

    def _error_body(self, error: HandlerResolutionError) -> str:
        if error.reason == HandlerResolutionError.CONTROLLER_NOT_FOUND:
            return f"Controller not found: {error.name}"
        if error.reason == HandlerResolutionError.METHOD_NOT_FOUND:
            return f"Method not found: {error.name}"
        return f"Malformed handler: {error.name}"

    def _respond(self, response: Response, status: int, message: str) -> Response:
        response.status = status
        response.headers["Content-Type"] = "text/plain; charset=utf-8"
        response.body = message.encode()
        return response


__all__ = [
    "Dispatcher",
    "NOT_FOUND_BODY",
]
