"""Tests for endpoint validation and client construction."""

import httpx
import pytest

from web3_providers_http import HttpxTransport, InvalidEndpointError, create_client, is_valid_endpoint


@pytest.mark.parametrize("endpoint", [
    "http://localhost:8545",
    "https://mainnet.infura.io/v3/key",
    "HTTPS://RPC.EXAMPLE.ORG",
    "Http://127.0.0.1",
])
def test_http_urls_are_valid(endpoint):
    assert is_valid_endpoint(endpoint) is True


@pytest.mark.parametrize("endpoint", [
    "",
    "localhost:8545",
    "ws://localhost:8546",
    "ftp://example.org",
    " http://leading-space.org",
    "httpx://example.org",
])
def test_other_strings_are_rejected(endpoint):
    assert is_valid_endpoint(endpoint) is False
    with pytest.raises(InvalidEndpointError, match="Invalid HTTP\\(S\\) URL provided"):
        create_client(endpoint)


@pytest.mark.parametrize("endpoint", [None, 8545, httpx.URL("ws://not-checked")])
def test_non_strings_pass_through(endpoint):
    assert is_valid_endpoint(endpoint) is True
    bound = []
    create_client(endpoint, transport_factory=bound.append)
    assert bound == [endpoint]


def test_default_factory_is_httpx():
    client = create_client("https://rpc.example.org")
    assert isinstance(client, HttpxTransport)
    assert client.url == httpx.URL("https://rpc.example.org")


def test_factory_failure_is_wrapped():
    def broken(endpoint):
        raise RuntimeError("boom")

    with pytest.raises(InvalidEndpointError, match="Failed to create HTTP client: boom"):
        create_client("http://localhost:8545", transport_factory=broken)
