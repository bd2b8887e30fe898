"""The bridge API server."""

from __future__ import annotations

import logging
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from .errors import InternalError
from .handlers import ApiState
from .models import ApiConfig
from .routes import (
    _state_scope,
    create_api_routes,
    create_metrics_routes,
    create_websocket_routes,
)
from .web import AuthMiddleware, Handler, Request, RequestIdMiddleware, Response, Router

logger = logging.getLogger(__name__)

_CORS_METHODS = "GET,POST,PUT,DELETE"
_CORS_HEADERS = "content-type,authorization"
_CORS_VARY = "origin, access-control-request-method, access-control-request-headers"


def _trace(request: Request, call_next: Handler) -> Response:
    started = time.perf_counter()
    response = call_next(request)
    elapsed = (time.perf_counter() - started) * 1000
    logger.debug(
        "%s %s -> %d in %.1f ms", request.method, request.path, response.status, elapsed
    )
    return response


def _is_preflight(request: Request) -> bool:
    return (
        request.method == "OPTIONS"
        and "origin" in request.headers
        and "access-control-request-method" in request.headers
    )


class ApiServer:
    """Serves the bridge REST, WebSocket and metrics endpoints."""

    def __init__(self, config: ApiConfig, coordinator: Any) -> None:
        self.config = config
        self.state = ApiState(coordinator)
        self._app: Router | None = None

    def create_app(self) -> Router:
        """Assemble the routes and middleware into one router."""
        app = Router().merge(create_api_routes()).merge(create_websocket_routes())
        app.add_middleware(AuthMiddleware())
        app.add_middleware(RequestIdMiddleware())
        app.add_middleware(_trace)
        if self.config.enable_metrics:
            app.merge(create_metrics_routes())
        return app

    def handle(self, request: Request) -> Response:
        """Answer one request, applying the cross-origin policy."""
        if self._app is None:
            self._app = self.create_app()
        if _is_preflight(request):
            return Response(
                status=200,
                headers={
                    "access-control-allow-origin": "*",
                    "access-control-allow-methods": _CORS_METHODS,
                    "access-control-allow-headers": _CORS_HEADERS,
                    "vary": _CORS_VARY,
                },
            )
        with _state_scope(self.state):
            response = self._app.dispatch(request)
        response.headers.setdefault("access-control-allow-origin", "*")
        response.headers.setdefault("vary", _CORS_VARY)
        return response

    def start(self) -> None:
        """Bind to the configured address and serve until interrupted."""
        self._app = self.create_app()
        addr = f"{self.config.host}:{self.config.port}"
        logger.info("Starting API server on %s", addr)
        try:
            httpd = _HttpServer((self.config.host, self.config.port), _handler_class(self))
        except OSError as exc:
            raise InternalError(f"Failed to bind to {addr}: {exc}") from exc
        with httpd:
            try:
                httpd.serve_forever()
            except Exception as exc:
                raise InternalError(f"Server error: {exc}") from exc


class _HttpServer(ThreadingHTTPServer):
    daemon_threads = True


def _handler_class(server: ApiServer) -> type[BaseHTTPRequestHandler]:
    class _RequestHandler(BaseHTTPRequestHandler):
        protocol_version = "HTTP/1.1"
        server_version = "bridgeapi"

        def _serve(self) -> None:
            try:
                length = int(self.headers.get("content-length") or 0)
            except ValueError:
                self.send_error(400, "invalid content-length")
                return
            body = self.rfile.read(length) if length > 0 else b""
            request = Request(
                self.command, self.path, headers=dict(self.headers.items()), body=body
            )
            response = server.handle(request)
            self.send_response(response.status)
            for name, value in response.headers.items():
                self.send_header(name, value)
            self.send_header("content-length", str(len(response.body)))
            self.end_headers()
            if self.command != "HEAD":
                self.wfile.write(response.body)

        do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_HEAD = do_OPTIONS = _serve

        def log_message(self, format: str, *args: Any) -> None:
            logger.debug("%s - %s", self.address_string(), format % args)

    return _RequestHandler