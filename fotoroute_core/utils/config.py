"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Sources, highest priority first:
- ``FOTOROUTE_*`` environment variables (``FOTOROUTE_PORT=9000``)
- a JSON or YAML file
- the dataclass defaults
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Config")

ENV_PREFIX = "FOTOROUTE_"


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Not a boolean: {value!r}")


# Field annotation -> parser for environment strings
_ENV_PARSERS: Dict[str, Callable[[str], Any]] = {
    "bool": _parse_bool,
    "int": int,
    "float": float,
    "str": str,
    "List[str]": str,  # split by from_dict
}


@dataclass
class Config:
    """Application configuration."""

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    timeout: float = 30.0
    max_request_size: int = 1024 * 1024  # 1MB

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"
    access_log: bool = True

    # Modules scanned for Controller subclasses
    controller_modules: List[str] = field(
        default_factory=lambda: ["fotoroute_core.controllers"]
    )

    # Database (empty disables the pool)
    database: str = ""
    db_pool_size: int = 5

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Create config from a dictionary. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}

        modules = values.get("controller_modules")
        if isinstance(modules, str):
            values["controller_modules"] = [m.strip() for m in modules.split(",") if m.strip()]

        return cls(**values)

    @classmethod
    def from_json(cls: Type[T], path: str) -> T:
        """Load config from JSON file."""
        with open(path, "r") as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def from_yaml(cls: Type[T], path: str) -> T:
        """Load config from YAML file."""
        try:
            import yaml
        except ImportError:
            raise ImportError("PyYAML required for YAML config")
        with open(path, "r") as f:
            return cls.from_dict(yaml.safe_load(f) or {})

    @classmethod
    def from_env(cls: Type[T], prefix: str = ENV_PREFIX) -> T:
        """Load config from environment variables."""
        return cls.from_dict(cls.env_values(prefix))

    @classmethod
    def env_values(cls, prefix: str = ENV_PREFIX) -> Dict[str, Any]:
        """Fields set in the environment, parsed by field type.

        Each field is read from ``{prefix}{FIELD_NAME}``. Only variables
        that are present (and parse) appear in the result.
        """
        data = {}
        for f in fields(cls):
            raw = os.environ.get(f"{prefix}{f.name.upper()}")
            if raw is None:
                continue
            parse = _ENV_PARSERS.get(str(f.type), str)
            try:
                data[f.name] = parse(raw)
            except ValueError:
                logger.warning(f"Ignoring {prefix}{f.name.upper()}={raw!r}: expected {f.type}")
        return data

    @classmethod
    def from_file(cls: Type[T], path: str) -> Optional[T]:
        """Load config from a .json, .yaml or .yml file.

        Returns None when the file is missing or its format is unknown.
        """
        suffix = Path(path).suffix.lower()
        loaders = {
            ".json": cls.from_json,
            ".yaml": cls.from_yaml,
            ".yml": cls.from_yaml,
        }
        if suffix not in loaders:
            logger.warning(f"Unknown config format: {path}")
            return None
        if not Path(path).exists():
            logger.warning(f"Config file not found: {path}")
            return None
        return loaders[suffix](path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def explicit_fields(self) -> Dict[str, Any]:
        """Fields whose values differ from the defaults."""
        defaults = type(self)().to_dict()
        return {k: v for k, v in self.to_dict().items() if defaults[k] != v}

    def merge(self, other: "Config") -> "Config":
        """Merge with another config (other's non-default values take precedence)."""
        data = self.to_dict()
        data.update(other.explicit_fields())
        return type(self).from_dict(data)


def load_config(path: Optional[str] = None, env_prefix: str = ENV_PREFIX) -> Config:
    """Load configuration: environment over file over defaults."""
    config = Config()
    if path:
        config = Config.from_file(path) or config
    data = config.to_dict()
    data.update(Config.env_values(env_prefix))
    return Config.from_dict(data)


__all__ = [
    "Config",
    "ENV_PREFIX",
    "load_config",
]
