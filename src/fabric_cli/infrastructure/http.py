"""HTTP transport helpers for gateway sessions."""

import ssl
import typing as t
from pathlib import Path

import aiohttp
import certifi


def create_ssl_context(cafile: Path | str | None = None) -> ssl.SSLContext:
    """Create an SSL context that verifies peers.

    Args:
        cafile: CA bundle to trust. Defaults to certifi's bundle so
            verification does not depend on the platform's certificate store.

    Returns:
        Configured SSL context
    """
    return ssl.create_default_context(cafile=str(cafile) if cafile else certifi.where())


def create_secure_connector(
    ssl: ssl.SSLContext | None = None, **kwargs: t.Any
) -> aiohttp.TCPConnector:
    """Create a TCP connector with certificate verification enabled.

    Must be called from within a running event loop.

    Args:
        ssl: SSL context to use. If None, create_ssl_context() is used.
        **kwargs: Passed through to aiohttp.TCPConnector
    """
    return aiohttp.TCPConnector(ssl=ssl or create_ssl_context(), **kwargs)
