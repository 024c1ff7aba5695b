"""Network session, capability clients and the factory that builds them."""

from .base import BaseFactory, BaseResourceManagement, BaseSession, SessionConnector
from .factory import NetworkFactory
from .resmgmt import ResourceManagementClient
from .sdk import SDK

__all__ = [
    "BaseFactory",
    "BaseResourceManagement",
    "BaseSession",
    "SessionConnector",
    "NetworkFactory",
    "ResourceManagementClient",
    "SDK",
]
