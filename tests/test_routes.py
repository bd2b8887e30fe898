import pytest

from bridgeapi.handlers import ApiState, BridgeStats, StatsProvider
from bridgeapi.routes import (
    _state_scope,
    create_api_routes,
    create_metrics_routes,
    create_websocket_routes,
)
from bridgeapi.web import Request, Router


@pytest.fixture
def state():
    return ApiState(StatsProvider(BridgeStats(active_validators=3)))


def _dispatch(router, state, request):
    with _state_scope(state):
        return router.dispatch(request)


def test_health_route(state):
    response = _dispatch(create_api_routes(), state, Request("GET", "/health"))
    assert response.status == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["bridge_stats"]["active_validators"] == 3


def test_missing_state_is_internal_error():
    response = create_api_routes().dispatch(Request("GET", "/health"))
    assert response.status == 500
    assert response.json()["error"] == "Internal Server Error"


def test_path_parameter_reaches_handler(state):
    response = _dispatch(create_api_routes(), state, Request("GET", "/validators/validator_7"))
    assert response.json()["id"] == "validator_7"


def test_static_route_preferred_over_parameter(state):
    response = _dispatch(create_api_routes(), state, Request("GET", "/events/ethereum"))
    assert response.json() == {"events": []}


def test_wrong_method_is_rejected(state):
    response = _dispatch(create_api_routes(), state, Request("POST", "/health"))
    assert response.status == 405
    assert "GET" in response.headers["allow"]


def test_handler_errors_become_responses(state):
    response = _dispatch(create_api_routes(), state, Request("POST", "/bridge/lock", body=b"{}"))
    assert response.status == 415


def test_unknown_path_is_not_found(state):
    response = _dispatch(create_api_routes(), state, Request("GET", "/nowhere"))
    assert response.status == 404


def test_websocket_routes(state):
    response = _dispatch(create_websocket_routes(), state, Request("GET", "/ws/stats"))
    assert response.status == 501
    assert response.body == b"Stats WebSocket not implemented yet"


def test_metrics_routes(state):
    router = create_metrics_routes()
    metrics = _dispatch(router, state, Request("GET", "/metrics"))
    assert b"bridge_pending_signatures 2" in metrics.body
    bridge = _dispatch(router, state, Request("GET", "/metrics/bridge"))
    assert bridge.json() == {"metrics": "bridge_specific_metrics"}


def test_route_tables_merge_without_overlap(state):
    app = Router().merge(create_api_routes()).merge(create_websocket_routes())
    app.merge(create_metrics_routes())
    response = _dispatch(app, state, Request("GET", "/blocks/polkadot/latest"))
    assert response.json() == {"block_number": 6789}


def test_merging_same_table_twice_fails():
    app = Router().merge(create_websocket_routes())
    with pytest.raises(ValueError):
        app.merge(create_websocket_routes())