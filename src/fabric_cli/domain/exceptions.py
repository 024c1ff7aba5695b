"""Custom exceptions for the fabric CLI."""


class FabricCLIError(Exception):
    """Base exception for fabric CLI errors."""

    pass


class ConfigurationError(FabricCLIError):
    """Raised when the network configuration cannot satisfy a command."""

    pass


class ConfigNotLoadedError(ConfigurationError):
    """Raised when a command needs the configuration but none was loaded."""

    pass


class ConfigFileError(ConfigurationError):
    """Raised when the configuration file cannot be read or parsed."""

    pass


class CurrentContextNotSetError(ConfigurationError):
    """Raised when no current context has been selected."""

    pass


class ContextNotFoundError(ConfigurationError):
    """Raised when a context name does not resolve in the configuration."""

    pass


class NetworkNotFoundError(ConfigurationError):
    """Raised when a network name does not resolve in the configuration."""

    pass


class InvalidArgumentError(FabricCLIError):
    """Raised when a command argument is missing or malformed.

    The message is a single human-readable sentence naming the field.
    """

    pass


class CommandStateError(FabricCLIError):
    """Raised when a command is used outside its lifecycle order.

    This indicates a programming error, such as executing the same command
    instance twice or running it before its clients were resolved.
    """

    pass


class ClientError(FabricCLIError):
    """Base exception for network client failures."""

    pass


class SessionClosedError(ClientError):
    """Raised when a request is issued on a closed session."""

    pass


class ResourceManagementError(ClientError):
    """Raised when the gateway rejects a resource management request."""

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        self.message = message
        super().__init__(f"{message} (status {status})")


class OperationError(FabricCLIError):
    """Raised when a command's network operation fails.

    Wraps the underlying client error with a short prefix naming the
    operation; the original error is kept as ``__cause__``.
    """

    pass
