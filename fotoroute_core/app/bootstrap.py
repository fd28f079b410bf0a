"""Bootstrap - Build the default photo service application.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fotoroute_core.app.server import Application
from fotoroute_core.controllers.loader import ModuleControllerLoader
from fotoroute_core.database.pool import ConnectionPool, DatabaseConfig
from fotoroute_core.utils.config import Config

logger = logging.getLogger(__name__)

DEFAULT_ROUTES = [
    ("GET", "/", "HomeController@index"),
    ("GET", "/photos", "PhotoController@index"),
    ("GET", "/photos/{id}", "PhotoController@show"),
]


def create_app(config: Optional[Config] = None, db: Optional[Any] = None) -> Application:
    """Create the photo service application.

    Controllers are loaded from ``config.controller_modules`` and the
    default routes are registered. A connection pool is opened when
    ``config.database`` is set and no ``db`` is passed in.
    """
    config = config or Config()

    if db is None and config.database:
        db = ConnectionPool(
            DatabaseConfig(database=config.database, pool_size=config.db_pool_size)
        )

    app = Application(config, db=db)
    ModuleControllerLoader(config.controller_modules).load(app.registry)

    for method, path, handler in DEFAULT_ROUTES:
        app.route(method, path, handler)

    return app


__all__ = [
    "DEFAULT_ROUTES",
    "create_app",
]
