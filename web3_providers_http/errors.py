"""Exceptions raised by the HTTP provider and its transports."""

from typing import Optional


class ProviderError(Exception):
    """Base class for provider errors."""


class InvalidEndpointError(ProviderError):
    """Endpoint could not be bound to an HTTP client."""


class UninitializedClientError(ProviderError):
    """A request was issued before any HTTP client was bound."""


class RequestError(ProviderError):
    """A JSON-RPC call failed in the transport or on the remote side."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class ConnectError(ProviderError):
    """The chain-identity query used to check connectivity failed."""


class RebindError(ProviderError):
    """Switching to a new endpoint failed."""


class TransportError(Exception):
    """
    Failure raised by an HTTP transport.

    Attributes:
        code: Short error code, e.g. ``ECONNREFUSED`` or ``ERR_BAD_RESPONSE``
        message: Human readable description
        status: HTTP status code when the server answered
    """

    def __init__(self, message: str, code: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status

    def __repr__(self) -> str:
        return f"<TransportError code={self.code} status={self.status}>"
