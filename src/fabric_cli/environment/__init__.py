"""Network configuration model and its persistence."""

from .config import Config, Context, Network
from .store import ConfigStore

__all__ = ["Config", "Context", "Network", "ConfigStore"]
