"""Test configuration and fixtures."""

from typing import Any, Callable, Dict, List, Optional

import pytest

from web3_providers_http.errors import TransportError
from web3_providers_http.models import TransportResponse
from web3_providers_http.transport.base import BaseHttpTransport


class FakeTransport(BaseHttpTransport):
    """
    In-memory transport answering POSTs through a handler.

    The handler receives the request body and returns the response data,
    or raises TransportError.
    """

    def __init__(self, endpoint: Any, handler: Callable[[Dict[str, Any]], Any]):
        self.endpoint = endpoint
        self.handler = handler
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    async def post(self, path: str, body: Dict[str, Any], config: Optional[Dict[str, Any]] = None) -> TransportResponse:
        self.calls.append({"path": path, "body": body, "config": config})
        return TransportResponse(status=200, data=self.handler(body))

    async def aclose(self) -> None:
        self.closed = True


class FakeNetwork:
    """
    Transport factory simulating one JSON-RPC node per endpoint.

    ``chains`` maps endpoint → chain id returned by eth_chainId; other
    methods answer with ``results[method]``. Endpoints listed in ``down``
    refuse connections.
    """

    def __init__(self, chains: Dict[str, str]):
        self.chains = dict(chains)
        self.results: Dict[str, Any] = {}
        self.down: set = set()
        self.transports: List[FakeTransport] = []

    def __call__(self, endpoint: Any) -> FakeTransport:
        transport = FakeTransport(endpoint, lambda body: self._answer(endpoint, body))
        self.transports.append(transport)
        return transport

    def _answer(self, endpoint: Any, body: Dict[str, Any]) -> Any:
        if endpoint in self.down:
            raise TransportError("connect ECONNREFUSED 127.0.0.1:8545", code="ECONNREFUSED")
        method = body["method"]
        if method == "eth_chainId":
            return {"jsonrpc": "2.0", "id": body.get("id"), "result": self.chains[endpoint]}
        return {"jsonrpc": "2.0", "id": body.get("id"), "result": self.results.get(method)}

    @property
    def last(self) -> FakeTransport:
        return self.transports[-1]


class EventRecorder:
    """Listener that records (event, payload) pairs in call order."""

    def __init__(self):
        self.events: List[tuple] = []

    def listener(self, name: str) -> Callable[[Any], None]:
        def _record(payload: Any) -> None:
            self.events.append((name, payload))
        return _record

    def attach(self, provider) -> "EventRecorder":
        for name in ("connect", "disconnect", "chainChanged"):
            provider.on(name, self.listener(name))
        return self

    def names(self) -> List[str]:
        return [name for name, _ in self.events]


MAINNET = "http://mainnet.local:8545"
GOERLI = "https://goerli.local"


@pytest.fixture
def network():
    """Two fake nodes: mainnet (0x1) and goerli (0x5)."""
    return FakeNetwork({MAINNET: "0x1", GOERLI: "0x5"})


@pytest.fixture
def recorder():
    return EventRecorder()
