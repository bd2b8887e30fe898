"""Route tables for the bridge API."""

from __future__ import annotations

import functools
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Callable, Iterator

from . import handlers
from .errors import ApiError, InternalError
from .handlers import ApiState
from .web import Request, Response, Router

StateHandler = Callable[[ApiState, Request], Response]

_current_state: ContextVar[ApiState] = ContextVar("bridgeapi_state")


@contextmanager
def _state_scope(state: ApiState) -> Iterator[ApiState]:
    """Make ``state`` available to handlers dispatched inside the block."""
    token = _current_state.set(state)
    try:
        yield state
    finally:
        _current_state.reset(token)


def _bind(handler: StateHandler) -> Callable[[Request], Response]:
    @functools.wraps(handler)
    def endpoint(request: Request) -> Response:
        try:
            state = _current_state.get()
        except LookupError:
            return InternalError("application state is not available").to_response()
        try:
            return handler(state, request)
        except ApiError as exc:
            return exc.to_response()

    return endpoint


def _router(*routes: tuple[str, str, StateHandler]) -> Router:
    router = Router()
    for method, path, handler in routes:
        router.add(method, path, _bind(handler))
    return router


def create_api_routes() -> Router:
    """REST endpoints for status, validators, bridge operations, tokens, blocks and events."""
    return _router(
        ("GET", "/health", handlers.health_check),
        ("GET", "/stats", handlers.bridge_stats),
        ("GET", "/validators", handlers.list_validators),
        ("GET", "/validators/:validator_id", handlers.get_validator),
        ("POST", "/bridge/lock", handlers.initiate_lock),
        ("POST", "/bridge/unlock", handlers.initiate_unlock),
        ("POST", "/bridge/mint", handlers.mint_tokens),
        ("POST", "/bridge/burn", handlers.burn_tokens),
        ("GET", "/tokens", handlers.list_tokens),
        ("GET", "/tokens/:token_address", handlers.get_token),
        ("GET", "/blocks/ethereum/latest", handlers.latest_ethereum_block),
        ("GET", "/blocks/polkadot/latest", handlers.latest_polkadot_block),
        ("GET", "/events", handlers.list_events),
        ("GET", "/events/ethereum", handlers.ethereum_events),
        ("GET", "/events/polkadot", handlers.polkadot_events),
    )


def create_websocket_routes() -> Router:
    """Real-time channel endpoints."""
    return _router(
        ("GET", "/ws", handlers.websocket_handler),
        ("GET", "/ws/events", handlers.events_websocket),
        ("GET", "/ws/stats", handlers.stats_websocket),
    )


def create_metrics_routes() -> Router:
    """Metrics endpoints."""
    return _router(
        ("GET", "/metrics", handlers.prometheus_metrics),
        ("GET", "/metrics/bridge", handlers.bridge_metrics),
    )