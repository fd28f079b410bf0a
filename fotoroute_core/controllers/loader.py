"""Controller Loader - Populate the registry from modules.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import importlib
import logging
from typing import List, Type

from fotoroute_core.controllers.base import Controller, ControllerRegistry

logger = logging.getLogger(__name__)


class ModuleControllerLoader:
    """Load controllers from Python modules.

    Every ``Controller`` subclass defined in or exported by a module is
    registered under its identifier. Runs once, at startup.
    """

    def __init__(self, modules: List[str]):
        self.modules = modules

    def find(self) -> List[Type[Controller]]:
        """Import the configured modules and collect controller classes."""
        found = []

        for module_name in self.modules:
            try:
                module = importlib.import_module(module_name)
            except ImportError as e:
                logger.error(f"Failed to load controller module {module_name}: {e}")
                continue

            # Find Controller subclasses
            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, Controller)
                    and attr is not Controller
                    and attr not in found
                ):
                    found.append(attr)

        return found

    def load(self, registry: ControllerRegistry) -> ControllerRegistry:
        """Register every controller found."""
        for controller_class in self.find():
            registry.register(controller_class)
        logger.info(f"Loaded {len(registry)} controllers: {', '.join(registry.names())}")
        return registry


__all__ = [
    "ModuleControllerLoader",
]
