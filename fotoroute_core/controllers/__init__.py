"""Controllers module - Controller base, registry and application controllers."""

from fotoroute_core.controllers.base import (
    Controller,
    ControllerRegistry,
    ResolvedHandler,
)
from fotoroute_core.controllers.loader import ModuleControllerLoader
from fotoroute_core.controllers.home import HomeController
from fotoroute_core.controllers.photo import PhotoController

__all__ = [
    "Controller",
    "ControllerRegistry",
    "ResolvedHandler",
    "ModuleControllerLoader",
    "HomeController",
    "PhotoController",
]
