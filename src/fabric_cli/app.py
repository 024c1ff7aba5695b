"""Application bootstrap: settings and logging."""

from dataclasses import dataclass

from .config.settings import Settings
from .infrastructure.logging import setup_logging


@dataclass(frozen=True)
class App:
    """Bootstrapped application."""

    settings: Settings


def create_app(settings: Settings | None = None) -> App:
    """Create the application and configure logging.

    Args:
        settings: Settings override; resolved from the environment if None

    Returns:
        App holding the resolved settings
    """
    resolved = settings if settings is not None else Settings()
    setup_logging(resolved)
    return App(settings=resolved)
