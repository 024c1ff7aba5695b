"""Logging setup built on loguru.

The global loguru logger is configured once per process. Modules obtain a
bound logger through get_logger(), which configures defaults on first use so
library code never logs into an unconfigured sink.
"""

import sys
import typing as t

from loguru import logger

from ..config.settings import Environment, LogLevel, Settings

if t.TYPE_CHECKING:
    import loguru

DEVELOPMENT_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)
PRODUCTION_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]} | {message}"

_configured = False


def configure_logger(
    level: LogLevel = LogLevel.INFO,
    environment: Environment = Environment.PRODUCTION,
) -> None:
    """Replace all loguru sinks with a single stderr sink.

    Args:
        level: Minimum level written to the sink
        environment: Development enables colours, backtraces and variable
            values in tracebacks; other environments keep output plain.
    """
    global _configured

    development = environment == Environment.DEVELOPMENT
    logger.remove()
    logger.configure(extra={"name": "fabric_cli"})
    logger.add(
        sys.stderr,
        level=LogLevel(level).value,
        format=DEVELOPMENT_FORMAT if development else PRODUCTION_FORMAT,
        colorize=development,
        backtrace=development,
        diagnose=development,
    )
    _configured = True


def setup_logging(settings: Settings) -> None:
    """Configure logging from application settings."""
    configure_logger(level=settings.log_level, environment=settings.environment)


def get_logger(name: str) -> "loguru.Logger":
    """Return the application logger bound to a module name.

    Configures logging with defaults if nothing has configured it yet.
    """
    if not _configured:
        configure_logger()
    return logger.bind(name=name)


def reset_logging() -> None:
    """Remove all sinks and mark logging as unconfigured."""
    global _configured

    logger.remove()
    _configured = False


def is_configured() -> bool:
    return _configured
