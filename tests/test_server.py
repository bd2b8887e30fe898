import json
import socket
import threading
import time
import urllib.error
import urllib.request
import uuid

import pytest

from bridgeapi.errors import InternalError
from bridgeapi.handlers import BridgeStats, StatsProvider
from bridgeapi.models import ApiConfig
from bridgeapi.server import ApiServer
from bridgeapi.web import Request


@pytest.fixture
def provider():
    return StatsProvider(BridgeStats(ethereum_processed_txs=4, active_validators=3))


@pytest.fixture
def server(provider):
    return ApiServer(ApiConfig(), provider)


def _free_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_health_through_full_stack(server, provider):
    response = server.handle(Request("GET", "/health"))
    assert response.status == 200
    stats = response.json()["bridge_stats"]
    assert stats["ethereum_processed_txs"] == provider.stats.ethereum_processed_txs


def test_request_id_is_a_uuid(server):
    response = server.handle(Request("GET", "/stats"))
    request_id = response.headers["x-request-id"]
    assert str(uuid.UUID(request_id)) == request_id


def test_request_ids_differ_between_requests(server):
    first = server.handle(Request("GET", "/stats")).headers["x-request-id"]
    second = server.handle(Request("GET", "/stats")).headers["x-request-id"]
    assert first != second
    assert len(first) == len(second)


def test_errors_also_carry_request_id(server):
    response = server.handle(Request("POST", "/bridge/unlock", body=b"{}"))
    assert response.status >= 400
    assert "x-request-id" in response.headers


def test_metrics_enabled_by_default(server):
    response = server.handle(Request("GET", "/metrics"))
    assert response.status == 200
    assert b"bridge_active_validators 3" in response.body
    assert "x-request-id" not in response.headers


def test_metrics_disabled(provider):
    server = ApiServer(ApiConfig(enable_metrics=False), provider)
    assert server.handle(Request("GET", "/metrics")).status == 404
    assert server.handle(Request("GET", "/health")).status == 200


def test_cors_headers_on_responses(server):
    response = server.handle(Request("GET", "/tokens", headers={"Origin": "http://localhost:3000"}))
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.json() == {"tokens": []}


def test_cors_preflight(server):
    request = Request(
        "OPTIONS",
        "/bridge/lock",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"},
    )
    response = server.handle(request)
    assert response.status == 200
    assert response.headers["access-control-allow-methods"] == "GET,POST,PUT,DELETE"
    assert "authorization" in response.headers["access-control-allow-headers"]


def test_create_app_routes_validators(server):
    app = server.create_app()
    from bridgeapi.routes import _state_scope

    with _state_scope(server.state):
        response = app.dispatch(Request("GET", "/validators/validator_2"))
    assert response.json()["id"] == "validator_2"


def test_start_reports_bind_failure(provider):
    with socket.socket() as occupied:
        occupied.bind(("127.0.0.1", 0))
        occupied.listen(1)
        port = occupied.getsockname()[1]
        server = ApiServer(ApiConfig(host="127.0.0.1", port=port), provider)
        with pytest.raises(InternalError) as caught:
            server.start()
    assert caught.value.message.startswith(f"Failed to bind to 127.0.0.1:{port}")


def test_start_serves_http(provider):
    port = _free_port()
    server = ApiServer(ApiConfig(host="127.0.0.1", port=port), provider)
    thread = threading.Thread(target=server.start, daemon=True)
    thread.start()
    url = f"http://127.0.0.1:{port}/blocks/ethereum/latest"
    body = None
    headers = None
    for _ in range(100):
        try:
            with urllib.request.urlopen(url, timeout=2) as reply:
                body = json.loads(reply.read())
                headers = reply.headers
            break
        except (urllib.error.URLError, ConnectionError):
            time.sleep(0.05)
    assert body == {"block_number": 12345}
    assert headers["x-request-id"]
    assert headers["content-type"] == "application/json"