"""Controller Base - Controllers and the controller registry.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import inspect
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, Union

from fotoroute_core.app.request import Request, Response
from fotoroute_core.routing.matcher import HandlerResolutionError
from fotoroute_core.utils.helpers import split_handler

logger = logging.getLogger(__name__)


class Controller:
    """Base controller.

    A controller is constructed per dispatch with the current request,
    the response it writes to, and the shared database pool (if any).
    Its public methods are actions addressable as ``Name@action``.

    Architecture:
    ┌────────────────────────────────────────────────────────────┐
    │                       Dispatch                              │
    ├────────────────────────────────────────────────────────────┤
    │                                                             │
    │  "PhotoController@show" ──▶ Registry ──▶ PhotoController    │
    │                                              │              │
    │                              show("42") ◀────┘              │
    │                                  │                          │
    │                                  ▼                          │
    │                              Response                       │
    └────────────────────────────────────────────────────────────┘
    """

    name: str = ""

    def __init__(
        self,
        request: Optional[Request] = None,
        response: Optional[Response] = None,
        db: Optional[Any] = None,
    ):
        self.request = request
        self.response = response if response is not None else Response()
        self.db = db

    def write(self, text: str) -> None:
        """Append text to the response body."""
        self.response.write(text)

    def html(self, markup: str) -> None:
        """Append HTML to the response body."""
        self.response.headers.setdefault("Content-Type", "text/html; charset=utf-8")
        self.response.write(markup)

    def status(self, code: int) -> None:
        """Set the response status code."""
        self.response.status = code


# Helpers on the base class are not actions
_RESERVED = frozenset(
    name for name, _ in inspect.getmembers(Controller, inspect.isfunction)
)


def find_actions(cls: Type[Controller]) -> Dict[str, Callable]:
    """Public functions of a controller class, excluding base helpers."""
    return {
        name: func
        for name, func in inspect.getmembers(cls, inspect.isfunction)
        if not name.startswith("_") and name not in _RESERVED
    }


@dataclass(frozen=True)
class ControllerEntry:
    """A registered controller and its action table."""

    name: str
    controller_class: Type[Controller]
    actions: Dict[str, Callable]


@dataclass(frozen=True)
class ResolvedHandler:
    """A handler bound to a fresh controller instance."""

    controller: Controller
    action: Callable

    def __call__(self, *params: str) -> Any:
        return self.action(*params)


class ControllerRegistry:
    """Registry of controllers by identifier.

    Built at startup. Resolving a handler identifier is a pair of dict
    lookups against the registered classes and their action tables.

    Usage:
        registry = ControllerRegistry()
        registry.register(PhotoController)

        handler = registry.resolve("PhotoController@show", request, response)
        if isinstance(handler, ResolvedHandler):
            handler("42")
    """

    def __init__(self):
        self._controllers: Dict[str, ControllerEntry] = {}
        self._lock = threading.Lock()

    def register(
        self,
        controller_class: Type[Controller],
        name: Optional[str] = None,
    ) -> ControllerEntry:
        """Register a controller class.

        Args:
            controller_class: Controller subclass
            name: Identifier (default: the class ``name`` attribute or class name)
        """
        if not (isinstance(controller_class, type) and issubclass(controller_class, Controller)):
            raise TypeError(f"{controller_class!r} is not a Controller subclass")

        name = name or controller_class.__dict__.get("name") or controller_class.__name__
        entry = ControllerEntry(
            name=name,
            controller_class=controller_class,
            actions=find_actions(controller_class),
        )

        with self._lock:
            existing = self._controllers.get(name)
            if existing is not None:
                if existing.controller_class is controller_class:
                    return existing
                raise ValueError(f"Controller {name!r} is already registered")
            self._controllers[name] = entry

        logger.debug(f"Registered controller {name} with actions {sorted(entry.actions)}")
        return entry

    def get(self, name: str) -> Optional[ControllerEntry]:
        """Get a registered controller by identifier."""
        return self._controllers.get(name)

    def lookup(
        self, handler: str
    ) -> Union[Tuple[ControllerEntry, str], HandlerResolutionError]:
        """Look up a ``Controller@action`` identifier without instantiating.

        Returns:
            Tuple of (controller entry, action name), or the resolution error
        """
        parts = split_handler(handler)
        if parts is None:
            return HandlerResolutionError(
                HandlerResolutionError.MALFORMED_HANDLER, handler
            )
        controller_name, action_name = parts

        entry = self._controllers.get(controller_name)
        if entry is None:
            return HandlerResolutionError(
                HandlerResolutionError.CONTROLLER_NOT_FOUND, controller_name
            )

        if action_name not in entry.actions:
            return HandlerResolutionError(
                HandlerResolutionError.METHOD_NOT_FOUND, action_name
            )

        return entry, action_name

    def resolve(
        self,
        handler: str,
        request: Optional[Request] = None,
        response: Optional[Response] = None,
        db: Optional[Any] = None,
    ) -> Union[ResolvedHandler, HandlerResolutionError]:
        """Resolve a ``Controller@action`` identifier.

        A new controller is constructed for the request once the identifier
        is known to resolve.
        """
        found = self.lookup(handler)
        if isinstance(found, HandlerResolutionError):
            return found
        entry, action_name = found

        controller = entry.controller_class(request=request, response=response, db=db)
        return ResolvedHandler(
            controller=controller,
            action=getattr(controller, action_name),
        )

    def names(self) -> List[str]:
        """Get registered controller identifiers."""
        return sorted(self._controllers)

    def __contains__(self, name: str) -> bool:
        return name in self._controllers

    def __len__(self) -> int:
        return len(self._controllers)


__all__ = [
    "Controller",
    "ControllerEntry",
    "ControllerRegistry",
    "ResolvedHandler",
    "find_actions",
]
