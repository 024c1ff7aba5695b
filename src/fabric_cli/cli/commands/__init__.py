"""CLI command groups."""

from .chaincode import chaincode_app
from .channel import channel_app
from .context import context_app
from .lifecycle import lifecycle_app
from .network import network_app

__all__ = [
    "chaincode_app",
    "channel_app",
    "context_app",
    "lifecycle_app",
    "network_app",
]
