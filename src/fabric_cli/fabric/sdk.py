"""Gateway session handle."""

import asyncio
import ssl
import typing as t

import aiohttp

from ..domain.exceptions import ClientError, ResourceManagementError, SessionClosedError
from ..environment.config import Context, Network
from ..infrastructure.http import create_secure_connector, create_ssl_context
from ..infrastructure.logging import get_logger
from .base import BaseSession

if t.TYPE_CHECKING:
    import loguru

ORGANIZATION_HEADER = "X-Fabric-Organization"
USER_HEADER = "X-Fabric-User"


class SDK(BaseSession):
    """A live HTTP session with a network gateway.

    Holds the aiohttp ClientSession for one network and sends the context's
    identity with every request. Capability clients share this handle; only
    the owner closes it.

    Usage:
        sdk = await SDK.connect(network, context)
        try:
            result = await sdk.request("GET", "/peers/peer0/channels")
        finally:
            await sdk.close()
    """

    def __init__(
        self,
        client: aiohttp.ClientSession,
        network: Network,
        context: Context,
        logger: "loguru.Logger" = get_logger(__name__),
    ) -> None:
        self._client = client
        self.network = network
        self.context = context
        self._logger = logger
        self._base_url = network.url.rstrip("/")

    @classmethod
    async def connect(
        cls,
        network: Network,
        context: Context,
        logger: "loguru.Logger" = get_logger(__name__),
    ) -> "SDK":
        """Open a session to the network gateway.

        Args:
            network: Gateway URL, TLS trust and timeout
            context: Identity sent as request headers

        Returns:
            Connected SDK instance

        Raises:
            ClientError: If the TLS CA certificate cannot be loaded
        """
        headers = {}
        if context.organization:
            headers[ORGANIZATION_HEADER] = context.organization
        if context.user:
            headers[USER_HEADER] = context.user

        # CA bundle loading is blocking file I/O
        try:
            ssl_context = await asyncio.to_thread(create_ssl_context, network.tls_ca_cert)
        except (OSError, ssl.SSLError) as e:
            raise ClientError(
                f"cannot load TLS CA certificate {network.tls_ca_cert}: {e}"
            ) from e

        connector = create_secure_connector(ssl=ssl_context)
        timeout = aiohttp.ClientTimeout(total=network.timeout)
        client = aiohttp.ClientSession(
            connector=connector, headers=headers, timeout=timeout
        )
        logger.debug(f"Opened session to {network.url}")
        return cls(client, network, context, logger=logger)

    @property
    def closed(self) -> bool:
        return self._client.closed

    async def close(self) -> None:
        if self._client.closed:
            return
        await self._client.close()
        self._logger.debug(f"Closed session to {self.network.url}")

    async def request(
        self,
        method: str,
        path: str,
        payload: dict[str, t.Any] | None = None,
    ) -> dict[str, t.Any]:
        """Send a JSON request to the gateway.

        Args:
            method: HTTP method
            path: Path relative to the network URL, starting with "/"
            payload: JSON body, if any

        Returns:
            Decoded JSON response body (empty dict for empty bodies)

        Raises:
            SessionClosedError: If the session was closed
            ResourceManagementError: If the gateway answers with an error status
            ClientError: On transport failures
        """
        if self.closed:
            raise SessionClosedError("session is closed")

        url = f"{self._base_url}{path}"
        self._logger.debug(f"{method} {url}")
        try:
            async with self._client.request(method, url, json=payload) as response:
                if response.status >= 400:
                    raise ResourceManagementError(
                        response.status, await _error_message(response)
                    )
                body = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise ClientError(f"{method} {url}: {e}") from e
        return body or {}


async def _error_message(response: aiohttp.ClientResponse) -> str:
    """Extract the gateway's error message from a failed response."""
    text = await response.text()
    try:
        body = await response.json(content_type=None)
    except ValueError:
        return text or response.reason or "request failed"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return text or response.reason or "request failed"
