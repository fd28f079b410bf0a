"""Helper utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Optional, Tuple
from urllib.parse import urlsplit

HANDLER_SEPARATOR = "@"


def request_path(uri: str) -> str:
    """Return the path component of a raw request URI.

    Query string and fragment are dropped. Absolute URIs
    (``http://host/photos``) yield their path. An origin-form target
    never carries an authority, so leading slashes collapse to one
    (``//photos/42`` is ``/photos/42``).
    """
    if not uri:
        return ""
    if uri.startswith("/"):
        path = uri.split("?", 1)[0].split("#", 1)[0]
        return "/" + path.lstrip("/")
    return urlsplit(uri).path


def normalize_path(path: str) -> str:
    """Normalize URL path.

    Trailing slashes are removed unless the path is exactly ``/``.
    The empty path normalizes to ``/``.
    """
    return path.rstrip("/") or "/"


def split_handler(handler: str) -> Optional[Tuple[str, str]]:
    """Split a ``Controller@action`` identifier.

    Returns None when the identifier is malformed.
    """
    controller, sep, action = handler.partition(HANDLER_SEPARATOR)
    if not sep or not controller or not action or HANDLER_SEPARATOR in action:
        return None
    return controller, action


def parse_query(query_string: str) -> dict:
    """Parse a query string into a flat dict (last value wins)."""
    query = {}
    for param in query_string.split("&"):
        if not param:
            continue
        if "=" in param:
            key, value = param.split("=", 1)
        else:
            key, value = param, ""
        query[key] = value
    return query


__all__ = [
    "HANDLER_SEPARATOR",
    "request_path",
    "normalize_path",
    "split_handler",
    "parse_query",
]
