# bridgeapi

A small HTTP API for monitoring a cross-chain token bridge, built on the
standard library alone. It answers requests for bridge health and
statistics, validator information, token and block lookups, event listings
and Prometheus-style metrics, all as JSON or plain text.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Endpoints

| Method | Path                             | Answer                                        |
|--------|----------------------------------|-----------------------------------------------|
| GET    | `/health`                        | Status, version, uptime and bridge statistics |
| GET    | `/stats`                         | Bridge statistics from the coordinator        |
| GET    | `/validators`                    | A list with one sample validator              |
| GET    | `/validators/:validator_id`      | A sample validator with the given id          |
| POST   | `/bridge/lock`                   | `{"tx_hash": ..., "status": "pending"}`       |
| POST   | `/bridge/unlock`                 | `{"status": "pending"}`                       |
| POST   | `/bridge/mint`                   | `{"status": "pending"}`                       |
| POST   | `/bridge/burn`                   | `{"status": "pending"}`                       |
| GET    | `/tokens`                        | `{"tokens": []}`                              |
| GET    | `/tokens/:token_address`         | `{"token": {}}`                               |
| GET    | `/blocks/ethereum/latest`        | `{"block_number": 12345}`                     |
| GET    | `/blocks/polkadot/latest`        | `{"block_number": 6789}`                      |
| GET    | `/events`, `/events/ethereum`, `/events/polkadot` | `{"events": []}`             |
| GET    | `/ws`, `/ws/events`, `/ws/stats` | 501, not yet available                        |
| GET    | `/metrics`                       | Prometheus text format (when metrics enabled) |
| GET    | `/metrics/bridge`                | A JSON metrics summary (when metrics enabled) |

The POST endpoints require a `Content-Type: application/json` body. A
missing or wrong content type gives 415, unparsable JSON gives 400, and a
`/bridge/lock` body without string fields `token`, `amount` and
`polkadot_address` gives 422; these rejections are plain text.

Other behaviour:

- REST and WebSocket routes carry an `x-request-id` header (a fresh UUID)
  on the request seen by the handler and on the response. The metrics
  routes, 404 and 405 answers do not.
- A path that matches no route gives 404; a known path with the wrong
  method gives 405 with an `allow` header. `HEAD` is answered for any
  `GET` route, with an empty body.
- Every response carries `access-control-allow-origin: *`; CORS preflight
  `OPTIONS` requests are answered directly, allowing `GET, POST, PUT,
  DELETE` and the `content-type` and `authorization` headers.
- Errors raised as `bridgeapi.errors.ApiError` (`ConfigError`,
  `ValidationError`, `NotFoundError`, `InternalError`, `RelayerError`,
  `ThresholdSignatureError`) come back as JSON with an `error` reason and a
  `message`. An exception raised by the coordinator's `get_stats()` becomes
  a `RelayerError` (500).

## Usage

```python
from bridgeapi.handlers import BridgeStats, StatsProvider
from bridgeapi.models import ApiConfig
from bridgeapi.server import ApiServer
from bridgeapi.web import Request

coordinator = StatsProvider(
    BridgeStats(
        ethereum_processed_txs=150,
        polkadot_processed_txs=142,
        pending_signatures=1,
        active_validators=3,
    )
)
server = ApiServer(ApiConfig(port=3001), coordinator)

# Handle a request in-process:
response = server.handle(Request(method="GET", path="/stats"))
print(response.status, response.json())

# Or serve over HTTP until interrupted:
server.start()
```

Any object with a `get_stats()` method returning a `BridgeStats` can serve
as the coordinator. `ApiConfig` defaults to host `0.0.0.0`, port `3001` and
metrics enabled; set `enable_metrics=False` to leave out the metrics routes.
`start()` raises `InternalError` if the address cannot be bound.

The building blocks are usable on their own: `bridgeapi.web` has
`Request`, `Response`, `Router` (with `:name` path parameters and
middleware), `RequestIdMiddleware` and `AuthMiddleware`; `bridgeapi.routes`
has `create_api_routes()`, `create_websocket_routes()` and
`create_metrics_routes()`; `bridgeapi.models` has the response dataclasses
and `WebSocketMessage`, a tagged message (`bridge_event`, `stats_update`,
`validator_update`, `error`, `ping`, `pong`) with `to_json()` and
`parse_websocket_message()` for decoding.

## Demo

A text walkthrough of the bridge's features:

```
bridgeapi-demo
```

## What it does not do

- It does not talk to any blockchain, relayer or database. Statistics come
  only from the coordinator object you pass in; validator, token, block and
  event answers are fixed sample data.
- The bridge POST endpoints check their input and reply "pending"; they do
  not lock, unlock, mint or burn anything.
- There are no `/status` or `/transactions` endpoints, and no WebSocket
  connections: the `/ws` routes answer 501.
- Authentication is not enforced; `AuthMiddleware` lets every request
  through.
- There is no command that starts the server; start it from Python with
  `ApiServer.start()`.