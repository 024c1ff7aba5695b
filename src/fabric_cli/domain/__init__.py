"""Domain models and exceptions."""

from .chaincode import (
    ChaincodeDefinition,
    CommittedChaincode,
    InstallResult,
    InstalledChaincode,
    InstantiateRequest,
)
from .exceptions import (
    ClientError,
    CommandStateError,
    ConfigFileError,
    ConfigNotLoadedError,
    ConfigurationError,
    ContextNotFoundError,
    CurrentContextNotSetError,
    FabricCLIError,
    InvalidArgumentError,
    NetworkNotFoundError,
    OperationError,
    ResourceManagementError,
    SessionClosedError,
)

__all__ = [
    # Models
    "ChaincodeDefinition",
    "CommittedChaincode",
    "InstallResult",
    "InstalledChaincode",
    "InstantiateRequest",
    # Exceptions
    "FabricCLIError",
    "ConfigurationError",
    "ConfigNotLoadedError",
    "ConfigFileError",
    "CurrentContextNotSetError",
    "ContextNotFoundError",
    "NetworkNotFoundError",
    "InvalidArgumentError",
    "CommandStateError",
    "ClientError",
    "SessionClosedError",
    "ResourceManagementError",
    "OperationError",
]
