"""Application Server - Serve routed requests over HTTP.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
import uuid
from typing import Any, Dict, Optional, Type

from fotoroute_core.app.request import Request, Response
from fotoroute_core.controllers.base import Controller, ControllerEntry, ControllerRegistry
from fotoroute_core.routing.dispatcher import Dispatcher
from fotoroute_core.routing.router import Route, RouteTable
from fotoroute_core.utils.config import Config

logger = logging.getLogger(__name__)


class BadRequest(Exception):
    """Raised when a request cannot be read."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status


class Application:
    """Routing application.

    Features:
    - Route registration
    - Controller registry
    - Access logging
    - asyncio HTTP/1.1 server (one request per connection)

    Routes must all be registered before the first request is handled;
    the route table is frozen at that point and shared read-only by
    concurrent dispatches.

    Usage:
        app = Application()
        app.controller(PhotoController)
        app.get("/photos/{id}", "PhotoController@show")
        app.run()
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        routes: Optional[RouteTable] = None,
        registry: Optional[ControllerRegistry] = None,
        db: Optional[Any] = None,
    ):
        self.config = config or Config()
        self.routes = routes if routes is not None else RouteTable()
        self.registry = registry if registry is not None else ControllerRegistry()
        self.db = db
        self.dispatcher = Dispatcher(self.routes, self.registry, db=db)
        self._server: Optional[asyncio.AbstractServer] = None
        self._requests = 0
        self._lock = threading.Lock()

    def route(self, method: str, path: str, handler: str) -> Route:
        """Add a route.

        Args:
            method: HTTP method
            path: URL pattern (e.g., "/photos/{id}")
            handler: Handler identifier (e.g., "PhotoController@show")
        """
        return self.routes.register(method, path, handler)

    def get(self, path: str, handler: str) -> Route:
        """Add GET route."""
        return self.routes.get(path, handler)

    def post(self, path: str, handler: str) -> Route:
        """Add POST route."""
        return self.routes.post(path, handler)

    def put(self, path: str, handler: str) -> Route:
        """Add PUT route."""
        return self.routes.put(path, handler)

    def delete(self, path: str, handler: str) -> Route:
        """Add DELETE route."""
        return self.routes.delete(path, handler)

    def controller(
        self,
        controller_class: Type[Controller],
        name: Optional[str] = None,
    ) -> ControllerEntry:
        """Register a controller class."""
        return self.registry.register(controller_class, name=name)

    def handle(self, request: Request) -> Response:
        """Handle a request.

        Args:
            request: Incoming request

        Returns:
            Response written by the matched action or by the router
        """
        self.routes.freeze()
        with self._lock:
            self._requests += 1

        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()
        if self.config.access_log:
            logger.info(f"[{request_id}] --> {request.method} {request.uri}")

        try:
            response = self.dispatcher.dispatch(request.uri, request.method, request=request)
        except Exception:
            logger.exception(f"[{request_id}] Unhandled error in {request.method} {request.uri}")
            response = Response.text_response("Internal Server Error", status=500)

        if self.config.access_log:
            duration_ms = (time.time() - start_time) * 1000
            logger.info(f"[{request_id}] <-- {response.status} ({duration_ms:.2f}ms)")

        return response

    async def start(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
    ) -> asyncio.AbstractServer:
        """Start listening. Returns the asyncio server."""
        host = host if host is not None else self.config.host
        port = port if port is not None else self.config.port

        self.routes.freeze()
        self._server = await asyncio.start_server(
            self._handle_connection,
            host,
            port,
            limit=self.config.max_request_size,
        )
        for sock in self._server.sockets:
            logger.info(f"Serving {len(self.routes)} routes on {sock.getsockname()}")
        return self._server

    async def serve(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
    ) -> None:
        """Start listening and serve until cancelled."""
        server = await self.start(host, port)
        async with server:
            await server.serve_forever()

    async def stop(self) -> None:
        """Stop listening."""
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()
            self._server = None
            logger.info("Server stopped")

    def run(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
    ) -> None:
        """Serve until interrupted.

        Args:
            host: Override host
            port: Override port
        """
        try:
            asyncio.run(self.serve(host, port))
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            self.close()

    def close(self) -> None:
        """Release the database pool, if any."""
        if self.db is not None and hasattr(self.db, "close"):
            self.db.close()

    async def _handle_connection(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> None:
        peer = writer.get_extra_info("peername")
        remote_addr = peer[0] if peer else ""

        try:
            try:
                data = await asyncio.wait_for(
                    self._read_request(reader), timeout=self.config.timeout
                )
                request = Request.from_raw(data, remote_addr=remote_addr)
            except asyncio.TimeoutError:
                response = Response.text_response("Request Timeout", status=408)
            except BadRequest as e:
                response = Response.text_response(str(e), status=e.status)
            except ValueError as e:
                response = Response.text_response(str(e), status=400)
            else:
                loop = asyncio.get_running_loop()
                response = await loop.run_in_executor(None, self.handle, request)

            response.set_header("Connection", "close")
            try:
                payload = response.to_bytes()
            except (TypeError, ValueError):
                logger.exception(f"Cannot serialize {response.status} response for {remote_addr}")
                payload = Response.text_response(
                    "Internal Server Error", status=500, headers={"Connection": "close"}
                ).to_bytes()
            writer.write(payload)
            await writer.drain()
        except ConnectionError as e:
            logger.debug(f"Connection from {remote_addr} dropped: {e}")
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError:
                pass

    async def _read_request(self, reader: asyncio.StreamReader) -> bytes:
        """Read one request: the head, then a Content-Length body."""
        try:
            head = await reader.readuntil(b"\r\n\r\n")
        except asyncio.LimitOverrunError:
            raise BadRequest(413, "Request head too large")
        except asyncio.IncompleteReadError:
            raise BadRequest(400, "Incomplete request")

        length = 0
        for line in head.split(b"\r\n")[1:]:
            name, _, value = line.partition(b":")
            if name.strip().lower() == b"content-length":
                try:
                    length = int(value.strip())
                except ValueError:
                    raise BadRequest(400, "Invalid Content-Length")

        if length < 0:
            raise BadRequest(400, "Invalid Content-Length")
        if len(head) + length > self.config.max_request_size:
            raise BadRequest(413, "Request too large")

        body = b""
        if length:
            try:
                body = await reader.readexactly(length)
            except asyncio.IncompleteReadError:
                raise BadRequest(400, "Incomplete request body")

        return head + body

    def get_stats(self) -> Dict[str, Any]:
        """Get application statistics."""
        return {
            "routes": len(self.routes),
            "controllers": len(self.registry),
            "requests": self._requests,
            "running": self._server is not None,
        }


__all__ = [
    "Application",
    "BadRequest",
]
