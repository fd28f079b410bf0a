"""Request/Response - HTTP request and response objects.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Dict, Optional, Union

from fotoroute_core.utils.helpers import parse_query, request_path


@dataclass
class Request:
    """HTTP Request object.

    ``uri`` is the request target exactly as received; routing works on
    it directly, ``path`` and ``query`` are conveniences for handlers.
    """

    method: str
    uri: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    remote_addr: str = ""
    protocol: str = "HTTP/1.1"
    timestamp: float = field(default_factory=time.time)

    @property
    def path(self) -> str:
        return request_path(self.uri)

    @property
    def query(self) -> Dict[str, str]:
        _, _, rest = self.uri.partition("?")
        return parse_query(rest.partition("#")[0])

    @property
    def content_length(self) -> int:
        try:
            return int(self.get_header("Content-Length", "0"))
        except ValueError:
            return 0

    def text(self) -> str:
        """Get body as text."""
        return self.body.decode()

    def get_header(self, name: str, default: str = "") -> str:
        """Get header value (case-insensitive)."""
        wanted = name.lower()
        return next(
            (value for key, value in self.headers.items() if key.lower() == wanted),
            default,
        )

    @classmethod
    def from_raw(cls, data: bytes, remote_addr: str = "") -> "Request":
        """Parse a request from its raw bytes.

        Raises:
            ValueError: the request line has no method or target, or the
                target contains control characters
        """
        head, _, body = data.partition(b"\r\n\r\n")
        request_line, *header_lines = head.decode("latin-1").split("\r\n")

        method, _, rest = request_line.partition(" ")
        uri, _, protocol = rest.partition(" ")
        if not method or not uri or any(ord(c) < 0x21 or c == "\x7f" for c in uri):
            raise ValueError(f"Malformed request line: {request_line!r}")

        headers = {}
        for line in header_lines:
            key, sep, value = line.partition(":")
            if sep:
                headers[key.strip()] = value.strip()

        return cls(
            method=method,
            uri=uri,
            headers=headers,
            body=body,
            remote_addr=remote_addr,
            protocol=protocol or "HTTP/1.1",
        )


@dataclass
class Response:
    """HTTP Response object.

    Actions write to the response they are given; nothing is buffered or
    rewritten on the way out.
    """

    status: int = 200
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def status_message(self) -> str:
        try:
            return HTTPStatus(self.status).phrase
        except ValueError:
            return "Unknown"

    @property
    def is_error(self) -> bool:
        """Check if response is error (4xx or 5xx)."""
        return self.status >= 400

    def text(self) -> str:
        """Get body as text."""
        return self.body.decode()

    def set_header(self, name: str, value: str) -> "Response":
        self.headers[name] = value
        return self

    def write(self, data: Union[str, bytes]) -> "Response":
        """Append to the body."""
        self.body += data.encode() if isinstance(data, str) else data
        return self

    def to_bytes(self) -> bytes:
        """Serialize as an HTTP/1.1 response."""
        headers = {**self.headers}
        headers.setdefault("Content-Length", str(len(self.body)))

        head = f"HTTP/1.1 {self.status} {self.status_message}\r\n"
        head += "".join(f"{key}: {value}\r\n" for key, value in headers.items())
        return head.encode("latin-1") + b"\r\n" + self.body

    @classmethod
    def text_response(
        cls,
        text: str,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """Create plain text response."""
        resp_headers = dict(headers or {})
        resp_headers["Content-Type"] = "text/plain; charset=utf-8"
        return cls(status=status, body=text.encode(), headers=resp_headers)


__all__ = [
    "Request",
    "Response",
]
