"""Request and response shapes exchanged between the provider and its transports."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from web3_providers_http.errors import RequestError

Params = Union[list, tuple, Mapping, None]


@dataclass
class ProviderOptions:
    """Per-call options that are not part of the JSON-RPC body."""
    transport_config: Optional[Mapping[str, Any]] = None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "ProviderOptions":
        return cls(transport_config=d.get("transportConfig", d.get("transport_config")))


@dataclass
class RequestArguments:
    """
    A single JSON-RPC call.

    ``params`` may be a sequence (sent as is) or a mapping (sent as the list
    of its values). ``rpc_options`` are merged into the request body, which is
    how callers supply ``jsonrpc`` and ``id``.
    """
    method: str
    params: Params = None
    rpc_options: Optional[Mapping[str, Any]] = None
    provider_options: Optional[ProviderOptions] = None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "RequestArguments":
        if not d.get("method"):
            raise RequestError("method is required")
        provider_options = d.get("providerOptions", d.get("provider_options"))
        if isinstance(provider_options, Mapping):
            provider_options = ProviderOptions.from_dict(provider_options)
        return cls(
            method=d["method"],
            params=d.get("params"),
            rpc_options=d.get("rpcOptions", d.get("rpc_options")),
            provider_options=provider_options,
        )

    @classmethod
    def coerce(cls, args: Union["RequestArguments", Mapping[str, Any]]) -> "RequestArguments":
        if isinstance(args, cls):
            return args
        return cls.from_dict(args)

    @property
    def transport_config(self) -> dict[str, Any]:
        if self.provider_options is None or not self.provider_options.transport_config:
            return {}
        return dict(self.provider_options.transport_config)

    def to_body(self) -> dict[str, Any]:
        """Build the POST body: rpc options first, then method and positional params."""
        return {
            **(self.rpc_options or {}),
            "method": self.method,
            "params": normalize_params(self.params),
        }


@dataclass
class TransportResponse:
    """What a transport hands back for a successful POST."""
    status: int
    data: Any = None
    headers: dict[str, str] = field(default_factory=dict)


def normalize_params(params: Params) -> list:
    """Convert params to the positional list form."""
    if params is None:
        return []
    if isinstance(params, list):
        return params
    if isinstance(params, tuple):
        return list(params)
    if isinstance(params, Mapping):
        return list(params.values())
    raise TypeError(f"params must be a sequence or a mapping, got {type(params).__name__}")


def unwrap_response(body: Any) -> Any:
    """
    Strip gateway wrapping from a decoded response body.

    ``{"data": T}`` yields ``T`` when ``T`` is truthy; anything else is
    returned unchanged, including None for an empty body.
    """
    if isinstance(body, Mapping) and body.get("data"):
        return body["data"]
    return body
