"""App module - HTTP objects, application server and bootstrap."""

from fotoroute_core.app.request import Request, Response
from fotoroute_core.app.server import Application
from fotoroute_core.app.bootstrap import create_app

__all__ = [
    "Application",
    "Request",
    "Response",
    "create_app",
]
