"""HTTP endpoint handlers for the bridge API."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from http import HTTPStatus
from typing import Any, Protocol
from urllib.parse import unquote

from .errors import ApiError, RelayerError
from .models import BridgeStatsResponse, HealthResponse, ValidatorResponse
from .web import Request, Response, json_response, text_response

logger = logging.getLogger(__name__)

_VERSION = "0.1.0"
_UPTIME_SECONDS = 3600
_VALIDATOR_ADDRESS = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

_PROMETHEUS_METRICS = """
# HELP bridge_processed_transactions_total Total number of processed transactions
# TYPE bridge_processed_transactions_total counter
bridge_processed_transactions_total{chain="ethereum"} 100
bridge_processed_transactions_total{chain="polkadot"} 95

# HELP bridge_active_validators Number of active validators
# TYPE bridge_active_validators gauge
bridge_active_validators 3

# HELP bridge_pending_signatures Number of pending signatures
# TYPE bridge_pending_signatures gauge
bridge_pending_signatures 2
"""


@dataclass
class BridgeStats:
    """Counters kept by the bridge coordinator."""

    ethereum_processed_txs: int = 0
    polkadot_processed_txs: int = 0
    pending_signatures: int = 0
    active_validators: int = 0


class _SupportsStats(Protocol):
    def get_stats(self) -> BridgeStats: ...


class StatsProvider:
    """A coordinator stand-in that serves a stored statistics snapshot."""

    def __init__(self, stats: BridgeStats | None = None) -> None:
        self.stats = stats if stats is not None else BridgeStats()

    def get_stats(self) -> BridgeStats:
        """Return a copy of the current statistics."""
        return replace(self.stats)


@dataclass(frozen=True)
class ApiState:
    """Shared state handed to every handler."""

    coordinator: _SupportsStats


@dataclass(frozen=True)
class LockRequest:
    """Body of a lock request."""

    token: str
    amount: str
    polkadot_address: str


@dataclass(frozen=True)
class LockResponse:
    """Reply to a lock request."""

    tx_hash: str
    status: str


class _JsonRejection(ApiError):
    """A request body that could not be taken as the expected JSON."""

    def __init__(self, status: HTTPStatus, message: str) -> None:
        self.status = status
        self.message = message
        Exception.__init__(self, message)

    def to_response(self) -> Response:
        return text_response(self.message, int(self.status))


def _json_body(request: Request) -> Any:
    content_type = request.headers.get("content-type", "")
    mime = content_type.split(";", 1)[0].strip().lower()
    is_json = mime == "application/json" or (
        mime.startswith("application/") and mime.endswith("+json")
    )
    if not is_json:
        raise _JsonRejection(
            HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
            "Expected request with `Content-Type: application/json`",
        )
    try:
        return json.loads(request.body)
    except ValueError as exc:
        raise _JsonRejection(
            HTTPStatus.BAD_REQUEST, f"Failed to parse the request body as JSON: {exc}"
        ) from exc


def _deserialize_failure(detail: str) -> _JsonRejection:
    return _JsonRejection(
        HTTPStatus.UNPROCESSABLE_ENTITY,
        f"Failed to deserialize the JSON body into the target type: {detail}",
    )


def _lock_request(body: Any) -> LockRequest:
    if not isinstance(body, dict):
        raise _deserialize_failure("invalid type, expected struct LockRequest")
    values: dict[str, str] = {}
    for name in ("token", "amount", "polkadot_address"):
        if name not in body:
            raise _deserialize_failure(f"missing field `{name}`")
        if not isinstance(body[name], str):
            raise _deserialize_failure(f"{name}: invalid type, expected a string")
        values[name] = body[name]
    return LockRequest(**values)


def _fetch_stats(state: ApiState) -> BridgeStatsResponse:
    try:
        stats = state.coordinator.get_stats()
    except ApiError:
        raise
    except Exception as exc:
        raise RelayerError(exc) from exc
    return BridgeStatsResponse(
        ethereum_processed_txs=stats.ethereum_processed_txs,
        polkadot_processed_txs=stats.polkadot_processed_txs,
        pending_signatures=stats.pending_signatures,
        active_validators=stats.active_validators,
    )


def _sample_validator(validator_id: str) -> ValidatorResponse:
    return ValidatorResponse(
        id=validator_id,
        address=_VALIDATOR_ADDRESS,
        active=True,
        stake="1000",
        uptime=99.5,
    )


def health_check(state: ApiState, request: Request) -> Response:
    """Report service health together with bridge statistics."""
    logger.debug("Health check requested")
    response = HealthResponse(
        status="healthy",
        version=_VERSION,
        uptime=_UPTIME_SECONDS,
        bridge_stats=_fetch_stats(state),
    )
    return json_response(response.to_dict())


def bridge_stats(state: ApiState, request: Request) -> Response:
    """Report bridge statistics."""
    logger.debug("Bridge stats requested")
    return json_response(_fetch_stats(state).to_dict())


def list_validators(state: ApiState, request: Request) -> Response:
    return json_response([_sample_validator("validator_0").to_dict()])


def get_validator(state: ApiState, request: Request) -> Response:
    validator_id = unquote(request.path_params["validator_id"])
    return json_response(_sample_validator(validator_id).to_dict())


def initiate_lock(state: ApiState, request: Request) -> Response:
    _lock_request(_json_body(request))
    response = LockResponse(tx_hash="0x1234567890abcdef", status="pending")
    return json_response(asdict(response))


def initiate_unlock(state: ApiState, request: Request) -> Response:
    _json_body(request)
    return json_response({"status": "pending"})


def mint_tokens(state: ApiState, request: Request) -> Response:
    _json_body(request)
    return json_response({"status": "pending"})


def burn_tokens(state: ApiState, request: Request) -> Response:
    _json_body(request)
    return json_response({"status": "pending"})


def list_tokens(state: ApiState, request: Request) -> Response:
    return json_response({"tokens": []})


def get_token(state: ApiState, request: Request) -> Response:
    return json_response({"token": {}})


def latest_ethereum_block(state: ApiState, request: Request) -> Response:
    return json_response({"block_number": 12345})


def latest_polkadot_block(state: ApiState, request: Request) -> Response:
    return json_response({"block_number": 6789})


def list_events(state: ApiState, request: Request) -> Response:
    return json_response({"events": []})


def ethereum_events(state: ApiState, request: Request) -> Response:
    return json_response({"events": []})


def polkadot_events(state: ApiState, request: Request) -> Response:
    return json_response({"events": []})


def prometheus_metrics(state: ApiState, request: Request) -> Response:
    """Expose metrics in the Prometheus text format."""
    return text_response(
        _PROMETHEUS_METRICS, content_type="text/plain; version=0.0.4; charset=utf-8"
    )


def bridge_metrics(state: ApiState, request: Request) -> Response:
    return text_response(
        '{"metrics": "bridge_specific_metrics"}', content_type="application/json"
    )


def websocket_handler(state: ApiState, request: Request) -> Response:
    return Response(status=501, body=b"WebSocket not implemented yet")


def events_websocket(state: ApiState, request: Request) -> Response:
    return Response(status=501, body=b"Events WebSocket not implemented yet")


def stats_websocket(state: ApiState, request: Request) -> Response:
    return Response(status=501, body=b"Stats WebSocket not implemented yet")