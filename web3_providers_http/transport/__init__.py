"""HTTP transports."""

from web3_providers_http.transport.base import BaseHttpTransport
from web3_providers_http.transport.httpx_transport import HttpxTransport

__all__ = [
    "BaseHttpTransport",
    "HttpxTransport",
]
