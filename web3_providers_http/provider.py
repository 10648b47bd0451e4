"""
EIP-1193 style provider over HTTP(S).

HttpProvider turns ``request`` calls into JSON-RPC POSTs against one bound
endpoint and keeps a small connectivity state derived from call outcomes:

- a successful call while disconnected triggers a chain-id check, which
  emits ``connect`` (and ``chainChanged`` if the chain id moved)
- a refused connection while connected emits ``disconnect`` with code 4900

HTTP has no push channel, so subscriptions are never supported.
"""

import itertools
from collections.abc import Mapping
from contextvars import ContextVar
from typing import Any, Optional, Union

import structlog

from web3_providers_http.endpoint import TransportFactory, create_client
from web3_providers_http.errors import (
    ConnectError,
    ProviderError,
    RebindError,
    RequestError,
    TransportError,
    UninitializedClientError,
)
from web3_providers_http.events import EventEmitter, Listener, ProviderEvent
from web3_providers_http.models import RequestArguments, unwrap_response
from web3_providers_http.transport.base import BaseHttpTransport

logger = structlog.get_logger()

DISCONNECTED_CODE = 4900
CONNECTION_REFUSED = "ECONNREFUSED"

# ids of providers reconciling in the current task context
_reconciling: ContextVar[frozenset] = ContextVar("reconciling_providers", default=frozenset())


class HttpProvider:
    """
    JSON-RPC provider bound to a single HTTP(S) endpoint.

    Usage:
        provider = HttpProvider("https://rpc.example.org")
        provider.on("connect", lambda info: print(info["chainId"]))
        await provider.start()
        block = await provider.request({"method": "eth_blockNumber"})
        await provider.close()
    """

    def __init__(self, endpoint: Any, transport_factory: Optional[TransportFactory] = None):
        """
        Bind the provider to ``endpoint``. No request is sent until ``start``.

        Args:
            endpoint: http(s) URL of the JSON-RPC server
            transport_factory: Callable building a transport from an endpoint,
                defaults to HttpxTransport

        Raises:
            InvalidEndpointError: if the endpoint is rejected
        """
        self._transport_factory = transport_factory
        self._transport: Optional[BaseHttpTransport] = create_client(endpoint, transport_factory)
        self._retired: list[BaseHttpTransport] = []
        self._events = EventEmitter()
        self._connected = False
        self._chain_id: Optional[str] = None
        self._probe_ids = itertools.count(1)
        self.endpoint = endpoint
        logger.info("http_provider_initialized", endpoint=str(endpoint))

    async def __aenter__(self) -> "HttpProvider":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def chain_id(self) -> Optional[str]:
        """Chain id seen by the last successful connectivity check."""
        return self._chain_id

    # ── Notifications ─────────────────────────────────────────────────────────

    def on(self, event: Union[ProviderEvent, str], listener: Listener) -> "HttpProvider":
        self._events.on(event, listener)
        return self

    def once(self, event: Union[ProviderEvent, str], listener: Listener) -> "HttpProvider":
        self._events.once(event, listener)
        return self

    def off(self, event: Union[ProviderEvent, str], listener: Listener) -> "HttpProvider":
        self._events.off(event, listener)
        return self

    def listener_count(self, event: Union[ProviderEvent, str]) -> int:
        return self._events.listener_count(event)

    def supports_subscriptions(self) -> bool:
        return False

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    async def start(self) -> str:
        """
        Run the initial connectivity check.

        Returns:
            The chain id reported by the endpoint

        Raises:
            ConnectError: if the chain id query fails
        """
        return await self.reconnect()

    async def set_endpoint(self, endpoint: Any) -> str:
        """
        Rebind to a new endpoint and check connectivity against it.

        The new transport stays bound even if the check fails. The previous
        transport is kept open for calls still in flight and closed by
        ``close``.

        Raises:
            RebindError: if the endpoint is rejected or the check fails
        """
        try:
            transport = create_client(endpoint, self._transport_factory)
            if self._transport is not None:
                self._retired.append(self._transport)
            self._transport = transport
            self.endpoint = endpoint
            logger.info("http_provider_endpoint_set", endpoint=str(endpoint))
            return await self.reconnect()
        except ProviderError as e:
            raise RebindError(f"Failed to set endpoint: {e}") from e

    async def close(self) -> None:
        """Close the bound transport and any retired by ``set_endpoint``."""
        transports = self._retired + ([self._transport] if self._transport is not None else [])
        self._retired = []
        self._transport = None
        self._connected = False
        for transport in transports:
            await transport.aclose()
        logger.info("http_provider_closed", transports=len(transports))

    # ── Requests ──────────────────────────────────────────────────────────────

    async def request(self, args: Union[RequestArguments, Mapping[str, Any]]) -> Any:
        """
        Send a JSON-RPC call to the bound endpoint.

        Args:
            args: RequestArguments or a mapping with ``method``, ``params``,
                ``rpcOptions`` and ``providerOptions.transportConfig``

        Returns:
            The decoded response body, or its ``data`` member for gateways
            that wrap the envelope

        Raises:
            UninitializedClientError: if no transport is bound
            RequestError: if the call fails
        """
        body = await self._dispatch(RequestArguments.coerce(args))

        # A successful call proves the endpoint is reachable (EIP-1193 connect).
        # Calls made by listeners while this provider reconciles must not reconcile again.
        if not self._connected and id(self) not in _reconciling.get():
            try:
                await self.reconnect()
            except ConnectError as e:
                logger.warning("connectivity_check_failed", endpoint=str(self.endpoint), error=str(e))

        return unwrap_response(body)

    async def reconnect(self) -> str:
        """
        Query ``eth_chainId`` and reconcile the connectivity state.

        Emits ``connect`` on success and ``chainChanged`` when the chain id
        differs from the previous one.

        Listeners run inside the reconciliation context: ``request`` calls
        they make do not start another reconciliation. Concurrent calls from
        other tasks still may, and the last one to finish wins.

        Raises:
            ConnectError: if the query fails; state is left untouched
        """
        token = _reconciling.set(_reconciling.get() | {id(self)})
        try:
            return await self._reconcile()
        finally:
            _reconciling.reset(token)

    async def _reconcile(self) -> str:
        try:
            chain_id = await self._get_chain_id()
        except ProviderError as e:
            raise ConnectError(f"Error connecting to client: {e}") from e

        await self._events.emit(ProviderEvent.CONNECT, {"chainId": chain_id})
        self._connected = True

        previous = self._chain_id
        if previous is not None and chain_id != previous:
            logger.info("chain_changed", previous=previous, chain_id=chain_id)
            await self._events.emit(ProviderEvent.CHAIN_CHANGED, chain_id)
        self._chain_id = chain_id

        logger.info("http_provider_connected", endpoint=str(self.endpoint), chain_id=chain_id)
        return chain_id

    async def _get_chain_id(self) -> str:
        # Goes through _dispatch, not request, so the probe never reconciles itself
        body = await self._dispatch(RequestArguments(
            method="eth_chainId",
            params=[],
            rpc_options={"jsonrpc": "2.0", "id": next(self._probe_ids)},
        ))
        envelope = unwrap_response(body)
        if not isinstance(envelope, Mapping):
            raise RequestError(f"Unexpected eth_chainId response: {envelope!r}")
        if envelope.get("error"):
            error = envelope["error"]
            message = error.get("message", error) if isinstance(error, Mapping) else error
            raise RequestError(f"eth_chainId failed: {message}")
        if envelope.get("result") is None:
            raise RequestError("eth_chainId response has no result")
        return envelope["result"]

    async def _dispatch(self, args: RequestArguments) -> Any:
        """POST one call and return the raw decoded body."""
        transport = self._transport
        if transport is None:
            raise UninitializedClientError("No HTTP client initialized")

        try:
            body = args.to_body()
        except TypeError as e:
            raise RequestError(str(e)) from e

        logger.debug("sending_rpc_request", method=args.method, endpoint=str(self.endpoint))

        try:
            response = await transport.post("", body, args.transport_config)
        except TransportError as e:
            if e.code == CONNECTION_REFUSED and self._connected:
                self._connected = False
                logger.warning("http_provider_disconnected", endpoint=str(self.endpoint))
                await self._events.emit(ProviderEvent.DISCONNECT, {"code": DISCONNECTED_CODE})
            raise RequestError(e.message, code=e.code) from e
        except Exception as e:
            logger.error("rpc_request_failed", method=args.method, error=str(e), error_type=type(e).__name__)
            raise RequestError(str(e)) from e

        return response.data
