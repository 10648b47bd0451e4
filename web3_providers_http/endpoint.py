"""Endpoint validation and transport construction."""

import re
from typing import Any, Callable, Optional

from web3_providers_http.errors import InvalidEndpointError
from web3_providers_http.transport.base import BaseHttpTransport
from web3_providers_http.transport.httpx_transport import HttpxTransport

TransportFactory = Callable[[Any], BaseHttpTransport]

ENDPOINT_PATTERN = re.compile(r"^http(s)?://", re.IGNORECASE)


def is_valid_endpoint(endpoint: Any) -> bool:
    """
    Check an endpoint before binding.

    Only strings are checked against the http(s) scheme; other values
    (e.g. ``httpx.URL``) are passed through to the transport.
    """
    return not isinstance(endpoint, str) or ENDPOINT_PATTERN.match(endpoint) is not None


def create_client(
    endpoint: Any,
    transport_factory: Optional[TransportFactory] = None,
) -> BaseHttpTransport:
    """
    Build a transport bound to ``endpoint``. No request is sent.

    Raises:
        InvalidEndpointError: if the endpoint is rejected or the factory fails
    """
    if not is_valid_endpoint(endpoint):
        raise InvalidEndpointError("Failed to create HTTP client: Invalid HTTP(S) URL provided")

    factory = transport_factory or HttpxTransport
    try:
        return factory(endpoint)
    except Exception as e:
        raise InvalidEndpointError(f"Failed to create HTTP client: {e}") from e
