"""Utility helpers."""

from web3_providers_http.utils.logging import configure_logging

__all__ = ["configure_logging"]
