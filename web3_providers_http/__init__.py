"""EIP-1193 style JSON-RPC provider over HTTP(S)."""

from web3_providers_http.endpoint import create_client, is_valid_endpoint
from web3_providers_http.errors import (
    ConnectError,
    InvalidEndpointError,
    ProviderError,
    RebindError,
    RequestError,
    TransportError,
    UninitializedClientError,
)
from web3_providers_http.events import EventEmitter, ProviderEvent
from web3_providers_http.models import ProviderOptions, RequestArguments, TransportResponse
from web3_providers_http.provider import DISCONNECTED_CODE, HttpProvider
from web3_providers_http.transport import BaseHttpTransport, HttpxTransport

__version__ = "0.1.0"

__all__ = [
    "HttpProvider",
    "DISCONNECTED_CODE",
    "RequestArguments",
    "ProviderOptions",
    "TransportResponse",
    "EventEmitter",
    "ProviderEvent",
    "BaseHttpTransport",
    "HttpxTransport",
    "create_client",
    "is_valid_endpoint",
    "ProviderError",
    "InvalidEndpointError",
    "UninitializedClientError",
    "RequestError",
    "ConnectError",
    "RebindError",
    "TransportError",
]
