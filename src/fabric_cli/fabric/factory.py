"""Network-backed client factory."""

import asyncio
import typing as t

from ..domain.exceptions import ClientError, ConfigNotLoadedError
from ..environment.config import Config
from ..infrastructure.logging import get_logger
from .base import BaseFactory, BaseResourceManagement, BaseSession, SessionConnector
from .resmgmt import ResourceManagementClient
from .sdk import SDK

if t.TYPE_CHECKING:
    import loguru


class NetworkFactory(BaseFactory):
    """Builds one gateway session per command invocation and derives clients.

    The session is created lazily from the configuration's current context on
    the first call to sdk() or any client accessor, then cached. Concurrent
    first calls share a lock so at most one session is ever opened.

    Usage:
        factory = NetworkFactory(config)
        client = await factory.resource_management()
        ...
        sdk = await factory.sdk()  # same cached session
    """

    def __init__(
        self,
        config: Config | None,
        connector: SessionConnector | None = None,
        logger: "loguru.Logger" = get_logger(__name__),
    ) -> None:
        """Initialise the factory.

        Args:
            config: Loaded configuration; None fails on first use.
            connector: Opens the session. Defaults to SDK.connect.
            logger: Logger instance for recording factory events.
        """
        self._config = config
        self._connector = connector or SDK.connect
        self._logger = logger
        self._sdk: BaseSession | None = None
        self._lock = asyncio.Lock()

    @property
    def has_session(self) -> bool:
        return self._sdk is not None

    async def sdk(self) -> BaseSession:
        """Return the cached session, opening it on first use.

        Raises:
            ConfigNotLoadedError: If no configuration was provided
            ConfigurationError: If the current context or its network
                cannot be resolved
            ClientError: If the session cannot be opened
        """
        if self._sdk is not None:
            return self._sdk

        async with self._lock:
            if self._sdk is None:
                if self._config is None:
                    raise ConfigNotLoadedError("configuration is not loaded")
                context = self._config.get_current_context()
                network = self._config.get_network(context.network)
                self._logger.debug(
                    f"Creating session for context '{self._config.current_context}' "
                    f"on network '{context.network}'"
                )
                self._sdk = await self._connector(network, context)
        return self._sdk

    async def resource_management(self) -> BaseResourceManagement:
        """Derive a resource management client from the cached session.

        Raises:
            ClientError: If the connector produced a session the gateway
                client cannot drive
        """
        sdk = await self.sdk()
        if not isinstance(sdk, SDK):
            raise ClientError(
                f"resource management requires a gateway session, got {type(sdk).__name__}"
            )
        return ResourceManagementClient(sdk)
