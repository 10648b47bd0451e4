"""
Base transport interface for the HTTP provider.

A transport is bound to one base URL and knows how to POST a JSON body to
it. The provider only depends on this interface, so tests and alternative
HTTP stacks can be plugged in through a transport factory.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from web3_providers_http.models import TransportResponse


class BaseHttpTransport(ABC):
    """
    Abstract base class for HTTP transports.

    Implementations:
    - HttpxTransport: httpx.AsyncClient bound to the endpoint
    """

    @abstractmethod
    async def post(
        self,
        path: str,
        body: Dict[str, Any],
        config: Optional[Dict[str, Any]] = None
    ) -> TransportResponse:
        """
        POST a JSON body relative to the base URL.

        Args:
            path: Path appended to the base URL (the provider always sends "")
            body: JSON-serialisable request body
            config: Per-call overrides (headers, timeout, ...)

        Returns:
            Decoded response

        Raises:
            TransportError: on connection failures and non-2xx answers
        """
        pass

    @abstractmethod
    async def aclose(self) -> None:
        """Release connections held by the transport."""
        pass
