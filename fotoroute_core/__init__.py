"""Fotoroute - Request router for the photo service.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Fotoroute maps HTTP requests to controller actions:
- Method + path route registration with {param} segments
- First-match dispatch in registration order
- Positional parameter passing to controller actions
- Controller registry built at startup
- Shared, injected database connection pool

Architecture Overview:
┌─────────────────────────────────────────────────────────────────────────────┐
│                               Fotoroute                                      │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                              │
│  ┌───────────────────────────────────────────────────────────────────────┐  │
│  │                        Request Pipeline                                │  │
│  │  Client ──▶ Server ──▶ Application ──▶ Dispatcher ──▶ Action ──▶ Client│  │
│  └───────────────────────────────────────────────────────────────────────┘  │
│                                                                              │
│  ┌─────────────────┐  ┌─────────────────┐  ┌─────────────────────────────┐ │
│  │    Routing      │  │   Controllers   │  │        App                  │ │
│  │                 │  │                 │  │                             │ │
│  │ - Route table   │  │ - Base class    │  │ - Request / Response        │ │
│  │ - Matcher       │  │ - Registry      │  │ - asyncio server            │ │
│  │ - Dispatcher    │  │ - Module loader │  │ - Bootstrap                 │ │
│  └─────────────────┘  └─────────────────┘  └─────────────────────────────┘ │
│                                                                              │
│  ┌─────────────────┐  ┌─────────────────────────────────────────────────┐  │
│  │    Database     │  │                  Utils                           │  │
│  │                 │  │                                                  │  │
│  │ - Connection    │  │ - Config (file, env)                             │  │
│  │   pool          │  │ - Logging setup                                  │  │
│  └─────────────────┘  └─────────────────────────────────────────────────┘  │
│                                                                              │
└─────────────────────────────────────────────────────────────────────────────┘

Request Flow:
1. Server reads the request and hands it to the Application
2. Dispatcher normalizes the path and scans routes in registration order
3. First route matching method and path wins; parameters are captured
4. Handler "Controller@action" resolves through the controller registry
5. A new controller writes the response; 404/500 are written otherwise

Usage:
    from fotoroute_core import Application, Controller

    class PhotoController(Controller):
        def show(self, photo_id):
            self.write(f"Showing photo with ID: {photo_id}")

    app = Application()
    app.controller(PhotoController)
    app.get("/photos/{id}", "PhotoController@show")

    app.run(host="127.0.0.1", port=8000)
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# App
from fotoroute_core.app.request import Request, Response
from fotoroute_core.app.server import Application
from fotoroute_core.app.bootstrap import create_app

# Routing
from fotoroute_core.routing.router import (
    HTTPMethod,
    Route,
    RouteDefinitionError,
    RouteTable,
)
from fotoroute_core.routing.matcher import (
    HandlerResolutionError,
    Matched,
    NotFound,
    RouteMatcher,
)
from fotoroute_core.routing.dispatcher import Dispatcher

# Controllers
from fotoroute_core.controllers.base import Controller, ControllerRegistry
from fotoroute_core.controllers.loader import ModuleControllerLoader

# Database
from fotoroute_core.database.pool import ConnectionPool, DatabaseConfig

# Utils
from fotoroute_core.utils.config import Config, load_config
from fotoroute_core.utils.logging import configure_logging

__all__ = [
    # Version
    "__version__",
    # App
    "Application",
    "Request",
    "Response",
    "create_app",
    # Routing
    "HTTPMethod",
    "Route",
    "RouteDefinitionError",
    "RouteTable",
    "HandlerResolutionError",
    "Matched",
    "NotFound",
    "RouteMatcher",
    "Dispatcher",
    # Controllers
    "Controller",
    "ControllerRegistry",
    "ModuleControllerLoader",
    # Database
    "ConnectionPool",
    "DatabaseConfig",
    # Utils
    "Config",
    "load_config",
    "configure_logging",
]
