"""Router - Route definitions and the route table.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from fotoroute_core.utils.helpers import normalize_path

logger = logging.getLogger(__name__)

# A whole segment written {name}
PARAM_SEGMENT = re.compile(r"^\{([^{}/]+)\}$")


class HTTPMethod(str, Enum):
    """HTTP methods a route can be registered for."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class RouteDefinitionError(ValueError):
    """Raised when a route cannot be registered."""


def compile_pattern(pattern: str) -> Tuple[re.Pattern, Tuple[str, ...]]:
    """Compile a normalized path pattern.

    ``{name}`` segments match one or more characters other than ``/``.
    Everything else is matched literally.

    Returns:
        Tuple of (anchored regex, parameter names in pattern order)
    """
    param_names: List[str] = []
    regex_parts = []

    for segment in pattern.split("/"):
        param = PARAM_SEGMENT.match(segment)
        if param:
            name = param.group(1)
            if name in param_names:
                raise RouteDefinitionError(
                    f"Duplicate parameter {{{name}}} in pattern {pattern!r}"
                )
            param_names.append(name)
            regex_parts.append("([^/]+)")
        else:
            regex_parts.append(re.escape(segment))

    # \Z, unlike $, does not match before a trailing newline
    regex = re.compile("^" + "/".join(regex_parts) + r"\Z")
    return regex, tuple(param_names)


@dataclass(frozen=True)
class Route:
    """Route definition.

    The pattern is normalized and compiled once, when the route is created.
    """

    method: str
    pattern: str
    handler: str

    # Compiled pattern
    _regex: re.Pattern = field(init=False, repr=False, compare=False)
    _param_names: Tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        method = self.method.upper()
        try:
            HTTPMethod(method)
        except ValueError:
            raise RouteDefinitionError(f"Unsupported HTTP method: {self.method!r}")

        if not self.pattern.startswith("/"):
            raise RouteDefinitionError(
                f"Path must start with '/', got {self.pattern!r}"
            )

        pattern = normalize_path(self.pattern)
        regex, param_names = compile_pattern(pattern)

        object.__setattr__(self, "method", method)
        object.__setattr__(self, "pattern", pattern)
        object.__setattr__(self, "_regex", regex)
        object.__setattr__(self, "_param_names", param_names)

    @property
    def param_names(self) -> Tuple[str, ...]:
        """Parameter names in the order they appear in the pattern."""
        return self._param_names

    def matches(self, path: str, method: str = "GET") -> Optional[Tuple[str, ...]]:
        """Check if route matches a normalized path and method.

        Returns:
            Tuple of parameter values in pattern order if match, None otherwise
        """
        if method.upper() != self.method:
            return None

        match = self._regex.fullmatch(path)
        if match:
            return match.groups()

        return None


class RouteTable:
    """Ordered, append-only route table.

    Routes are scanned in registration order and the first match wins.
    Registration is closed by ``freeze()``; after that the table is only
    read, and reads take no lock.

    Usage:
        routes = RouteTable()
        routes.get("/", "HomeController@index")
        routes.get("/photos/{id}", "PhotoController@show")
        routes.freeze()
    """

    def __init__(self):
        self._routes: List[Route] = []
        self._frozen = False
        self._lock = threading.Lock()

    def register(self, method: str, path: str, handler: str) -> Route:
        """Add a route.

        Args:
            method: HTTP method
            path: URL pattern, e.g. "/photos/{id}"
            handler: Handler identifier, e.g. "PhotoController@show"

        Raises:
            RouteDefinitionError: the method or pattern is invalid
            RuntimeError: the table is frozen
        """
        route = Route(method=method, pattern=path, handler=handler)

        with self._lock:
            if self._frozen:
                raise RuntimeError("Cannot register routes after the table is frozen")
            self._routes.append(route)

        logger.debug(f"Registered {route.method} {route.pattern} -> {handler}")
        return route

    def all_routes(self) -> Tuple[Route, ...]:
        """Get all routes in registration order."""
        return tuple(self._routes)

    def freeze(self) -> None:
        """Close registration. Idempotent."""
        with self._lock:
            if not self._frozen:
                self._frozen = True
                logger.debug(f"Route table frozen with {len(self._routes)} routes")

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def get(self, path: str, handler: str) -> Route:
        """Add GET route."""
        return self.register(HTTPMethod.GET.value, path, handler)

    def post(self, path: str, handler: str) -> Route:
        """Add POST route."""
        return self.register(HTTPMethod.POST.value, path, handler)

    def put(self, path: str, handler: str) -> Route:
        """Add PUT route."""
        return self.register(HTTPMethod.PUT.value, path, handler)

    def delete(self, path: str, handler: str) -> Route:
        """Add DELETE route."""
        return self.register(HTTPMethod.DELETE.value, path, handler)

    def patch(self, path: str, handler: str) -> Route:
        """Add PATCH route."""
        return self.register(HTTPMethod.PATCH.value, path, handler)

    def __iter__(self) -> Iterator[Route]:
        return iter(self.all_routes())

    def __len__(self) -> int:
        return len(self._routes)


__all__ = [
    "HTTPMethod",
    "Route",
    "RouteDefinitionError",
    "RouteTable",
    "compile_pattern",
]
