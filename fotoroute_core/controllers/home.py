"""Home controller.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from fotoroute_core.controllers.base import Controller


class HomeController(Controller):
    """Landing page."""

    def index(self) -> None:
        self.html("<h1>Welcome to Servicio Fotografía</h1>")
        self.html("<p>Photography service application is running!</p>")


__all__ = [
    "HomeController",
]
