"""Configuration, response and message models for the bridge API."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any


def _require_unsigned(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")


def _require_type(name: str, value: Any, kind: type | tuple[type, ...]) -> None:
    if isinstance(value, bool) and kind is not bool:
        raise ValueError(f"{name} has the wrong type: {value!r}")
    if not isinstance(value, kind):
        raise ValueError(f"{name} has the wrong type: {value!r}")


@dataclass
class ApiConfig:
    """Settings for the HTTP server."""

    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    enable_metrics: bool = True
    metrics_path: str = "/metrics"


@dataclass(frozen=True)
class BridgeStatsResponse:
    """Counters describing bridge activity."""

    ethereum_processed_txs: int
    polkadot_processed_txs: int
    pending_signatures: int
    active_validators: int

    def __post_init__(self) -> None:
        for name, value in asdict(self).items():
            _require_unsigned(name, value)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class HealthResponse:
    """Body of the health check endpoint."""

    status: str
    version: str
    uptime: int
    bridge_stats: BridgeStatsResponse

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TransactionResponse:
    """A bridged transaction as reported by the API."""

    tx_hash: str
    chain: str
    status: str
    amount: str
    token: str
    user: str
    block_number: int
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ValidatorResponse:
    """A validator as reported by the API."""

    id: str
    address: str
    active: bool
    stake: str
    uptime: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BridgeStatusResponse:
    """Detailed bridge status."""

    status: str
    ethereum_block: int
    polkadot_block: int
    validators: list[ValidatorResponse] = field(default_factory=list)
    recent_transactions: list[TransactionResponse] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ErrorResponse:
    """Structured description of an API error."""

    error: str
    message: str
    code: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class PaginationParams:
    """Page selection for list endpoints."""

    page: int | None = 1
    limit: int | None = 20


@dataclass
class TransactionFilters:
    """Optional filters for transaction listings."""

    chain: str | None = None
    status: str | None = None
    user: str | None = None
    token: str | None = None
    from_block: int | None = None
    to_block: int | None = None


_MESSAGE_FIELDS: dict[str, tuple[str, ...]] = {
    "bridge_event": ("event_type", "data"),
    "stats_update": ("stats",),
    "validator_update": ("validator",),
    "error": ("message",),
    "ping": (),
    "pong": (),
}

_OPTIONAL_FIELDS = ("event_type", "data", "stats", "validator", "message")


def _stats_from_dict(obj: Any) -> BridgeStatsResponse:
    if not isinstance(obj, dict):
        raise ValueError("stats must be an object")
    names = (
        "ethereum_processed_txs",
        "polkadot_processed_txs",
        "pending_signatures",
        "active_validators",
    )
    missing = [name for name in names if name not in obj]
    if missing:
        raise ValueError(f"missing field `{missing[0]}`")
    return BridgeStatsResponse(**{name: obj[name] for name in names})


def _validator_from_dict(obj: Any) -> ValidatorResponse:
    if not isinstance(obj, dict):
        raise ValueError("validator must be an object")
    expected: dict[str, type | tuple[type, ...]] = {
        "id": str,
        "address": str,
        "active": bool,
        "stake": str,
        "uptime": (int, float),
    }
    for name, kind in expected.items():
        if name not in obj:
            raise ValueError(f"missing field `{name}`")
        _require_type(name, obj[name], kind)
    return ValidatorResponse(
        id=obj["id"],
        address=obj["address"],
        active=obj["active"],
        stake=obj["stake"],
        uptime=float(obj["uptime"]),
    )


@dataclass(frozen=True)
class WebSocketMessage:
    """A message on the real-time channel, tagged by its ``type``."""

    type: str
    event_type: str | None = None
    data: Any = None
    stats: BridgeStatsResponse | None = None
    validator: ValidatorResponse | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        if self.type not in _MESSAGE_FIELDS:
            raise ValueError(f"unknown message type: {self.type!r}")
        own = _MESSAGE_FIELDS[self.type]
        for name in _OPTIONAL_FIELDS:
            value = getattr(self, name)
            if name not in own:
                if value is not None:
                    raise ValueError(f"{self.type} messages carry no `{name}`")
                continue
            if name == "data":
                continue
            if value is None:
                raise ValueError(f"{self.type} messages need `{name}`")
        if self.event_type is not None:
            _require_type("event_type", self.event_type, str)
        if self.message is not None:
            _require_type("message", self.message, str)
        if self.stats is not None:
            _require_type("stats", self.stats, BridgeStatsResponse)
        if self.validator is not None:
            _require_type("validator", self.validator, ValidatorResponse)

    def to_json(self) -> str:
        payload: dict[str, Any] = {"type": self.type}
        for name in _MESSAGE_FIELDS[self.type]:
            value = getattr(self, name)
            payload[name] = asdict(value) if is_dataclass(value) else value
        return json.dumps(payload, separators=(",", ":"))


def parse_websocket_message(text: str | bytes) -> WebSocketMessage:
    """Decode a tagged message; raise ValueError when it is malformed."""
    obj = json.loads(text)
    if not isinstance(obj, dict):
        raise ValueError("message must be a JSON object")
    kind = obj.get("type")
    if kind not in _MESSAGE_FIELDS:
        raise ValueError(f"unknown message type: {kind!r}")
    fields: dict[str, Any] = {}
    for name in _MESSAGE_FIELDS[kind]:
        if name not in obj:
            raise ValueError(f"missing field `{name}`")
        value = obj[name]
        if name == "stats":
            value = _stats_from_dict(value)
        elif name == "validator":
            value = _validator_from_dict(value)
        fields[name] = value
    return WebSocketMessage(type=kind, **fields)