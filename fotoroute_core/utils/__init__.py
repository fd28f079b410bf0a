"""Utils module - Utility functions."""

from fotoroute_core.utils.config import Config, load_config
from fotoroute_core.utils.helpers import (
    normalize_path,
    request_path,
    split_handler,
)
from fotoroute_core.utils.logging import configure_logging

__all__ = [
    "Config",
    "load_config",
    "configure_logging",
    "normalize_path",
    "request_path",
    "split_handler",
]
