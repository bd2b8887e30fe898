"""Requests, responses, path routing and middleware."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Callable
from urllib.parse import parse_qsl

Handler = Callable[["Request"], "Response"]
Middleware = Callable[["Request", Handler], "Response"]

REQUEST_ID_HEADER = "x-request-id"


@dataclass
class Request:
    """An incoming HTTP request. Header names are kept in lower case."""

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    query: dict[str, str] = field(default_factory=dict)
    path_params: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        self.headers = {name.lower(): value for name, value in self.headers.items()}
        path, sep, query_string = self.path.partition("?")
        if sep:
            self.path = path
            self.query = {**dict(parse_qsl(query_string, keep_blank_values=True)), **self.query}
        if isinstance(self.body, str):
            self.body = self.body.encode()


@dataclass
class Response:
    """An outgoing HTTP response. Header names are kept in lower case."""

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self) -> None:
        self.headers = {name.lower(): value for name, value in self.headers.items()}
        if isinstance(self.body, str):
            self.body = self.body.encode()

    def json(self) -> Any:
        return json.loads(self.body)


def json_response(data: Any, status: int = 200) -> Response:
    """Build a response holding ``data`` as compact JSON."""
    body = json.dumps(data, separators=(",", ":")).encode()
    return Response(status=status, headers={"content-type": "application/json"}, body=body)


def text_response(
    body: str, status: int = 200, content_type: str = "text/plain; charset=utf-8"
) -> Response:
    """Build a plain text response."""
    return Response(status=status, headers={"content-type": content_type}, body=body.encode())


@dataclass(frozen=True)
class _Route:
    method: str
    segments: tuple[str, ...]
    handler: Handler

    @property
    def shape(self) -> tuple[str, ...]:
        return tuple(":" if segment.startswith(":") else segment for segment in self.segments)

    @property
    def param_count(self) -> int:
        return sum(segment.startswith(":") for segment in self.segments)

    def match(self, parts: tuple[str, ...]) -> dict[str, str] | None:
        if len(parts) != len(self.segments):
            return None
        params: dict[str, str] = {}
        for segment, part in zip(self.segments, parts):
            if segment.startswith(":"):
                if not part:
                    return None
                params[segment[1:]] = part
            elif segment != part:
                return None
        return params


def _split_pattern(path: str) -> tuple[str, ...]:
    if not path.startswith("/"):
        raise ValueError(f"paths must start with a `/`: {path!r}")
    return tuple(path[1:].split("/"))


class Router:
    """Maps method and path patterns such as ``/items/:id`` to handlers."""

    def __init__(self) -> None:
        self._routes: list[_Route] = []

    def _insert(self, route: _Route) -> None:
        for existing in self._routes:
            if existing.method == route.method and existing.shape == route.shape:
                raise ValueError(
                    f"overlapping route: {route.method} /{'/'.join(route.segments)}"
                )
        self._routes.append(route)

    def add(self, method: str, path: str, handler: Handler) -> Router:
        self._insert(_Route(method.upper(), _split_pattern(path), handler))
        return self

    def merge(self, other: Router) -> Router:
        for route in other._routes:
            self._insert(route)
        return self

    def add_middleware(self, middleware: Middleware) -> Router:
        """Wrap every route registered so far; later routes stay unwrapped."""

        def wrap(handler: Handler) -> Handler:
            return lambda request: middleware(request, handler)

        self._routes = [replace(route, handler=wrap(route.handler)) for route in self._routes]
        return self

    def dispatch(self, request: Request) -> Response:
        if not request.path.startswith("/"):
            return Response(status=404)
        parts = _split_pattern(request.path)
        matches = sorted(
            (
                (route, params)
                for route in self._routes
                if (params := route.match(parts)) is not None
            ),
            key=lambda item: item[0].param_count,
        )
        if not matches:
            return Response(status=404)

        for route, params in matches:
            if route.method == request.method:
                return route.handler(replace(request, path_params=params))

        if request.method == "HEAD":
            for route, params in matches:
                if route.method == "GET":
                    response = route.handler(replace(request, path_params=params))
                    return replace(response, headers=dict(response.headers), body=b"")

        allowed = sorted({route.method for route, _ in matches})
        if "GET" in allowed and "HEAD" not in allowed:
            allowed = sorted([*allowed, "HEAD"])
        return Response(status=405, headers={"allow": ",".join(allowed)})


def _new_request_id() -> str:
    return str(uuid.uuid4())


def _check_header_value(value: str) -> None:
    if any(not (ch == "\t" or " " <= ch <= "~") for ch in value):
        raise ValueError(f"invalid header value: {value!r}")


@dataclass(frozen=True)
class RequestIdMiddleware:
    """Tags each request and its response with a fresh ``x-request-id``."""

    id_factory: Callable[[], str] = _new_request_id

    def __call__(self, request: Request, call_next: Handler) -> Response:
        request_id = self.id_factory()
        _check_header_value(request_id)
        request = replace(request, headers={**request.headers, REQUEST_ID_HEADER: request_id})
        response = call_next(request)
        return replace(response, headers={**response.headers, REQUEST_ID_HEADER: request_id})


@dataclass(frozen=True)
class AuthMiddleware:
    """Authentication hook; every request is currently allowed through."""

    def __call__(self, request: Request, call_next: Handler) -> Response:
        return call_next(request)