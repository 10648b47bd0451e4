"""
httpx transport for the HTTP provider.

Sends JSON-RPC bodies via HTTP POST to a single base URL and maps httpx
failures onto TransportError codes (ECONNREFUSED, ECONNABORTED, ...).
"""

import errno
from typing import Any, Dict, Optional

import httpx
import structlog

from web3_providers_http.config import get_settings
from web3_providers_http.errors import TransportError
from web3_providers_http.models import TransportResponse
from web3_providers_http.transport.base import BaseHttpTransport

logger = structlog.get_logger()

# Per-call config keys forwarded to httpx.AsyncClient.post
_FORWARDED_KEYS = ("headers", "params", "cookies", "extensions")


class HttpxTransport(BaseHttpTransport):
    """
    Handles JSON-RPC POSTs over HTTP(S) with httpx.

    An empty path posts to the endpoint URL exactly as given; httpx would
    otherwise append a trailing slash when joining it with base_url.
    """

    def __init__(
        self,
        base_url: Any,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the transport.

        Args:
            base_url: Endpoint URL (str or httpx.URL)
            timeout: Default timeout in seconds, falls back to settings
            headers: Extra headers sent with every request
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        settings = get_settings()
        default_headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": settings.user_agent,
        }
        if headers:
            default_headers.update(headers)

        self.base_url = base_url
        self.url = httpx.URL(base_url)
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout if timeout is not None else settings.request_timeout,
            headers=default_headers,
            transport=transport,
        )
        logger.debug("httpx_transport_initialized", base_url=str(base_url))

    async def post(
        self,
        path: str,
        body: Dict[str, Any],
        config: Optional[Dict[str, Any]] = None
    ) -> TransportResponse:
        """POST ``body`` as JSON and decode the answer."""
        config = config or {}
        kwargs = {key: config[key] for key in _FORWARDED_KEYS if key in config}
        if "timeout" in config:
            kwargs["timeout"] = config["timeout"]

        try:
            response = await self.client.post(path or self.url, json=body, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            code = "ERR_BAD_REQUEST" if status < 500 else "ERR_BAD_RESPONSE"
            logger.debug("http_status_error", status=status, method=body.get("method"))
            raise TransportError(
                f"Request failed with status code {status}", code=code, status=status
            ) from e
        except httpx.TimeoutException as e:
            raise TransportError(str(e) or "Request timed out", code="ECONNABORTED") from e
        except httpx.ConnectError as e:
            code = "ECONNREFUSED" if _is_connection_refused(e) else "ERR_NETWORK"
            raise TransportError(str(e) or "Connection failed", code=code) from e
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__, code="ERR_NETWORK") from e

        return TransportResponse(
            status=response.status_code,
            data=_decode_body(response),
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        """Close the underlying httpx client."""
        await self.client.aclose()
        logger.debug("httpx_transport_closed", base_url=str(self.base_url))


def _decode_body(response: httpx.Response) -> Any:
    """JSON body if parseable, raw text otherwise, None when empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _is_connection_refused(exc: BaseException) -> bool:
    """Walk the exception chain looking for a refused TCP connection."""
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, ConnectionRefusedError):
            return True
        if isinstance(current, OSError) and current.errno == errno.ECONNREFUSED:
            return True
        if "connection refused" in str(current).lower():
            return True
        current = current.__cause__ or current.__context__
    return False
