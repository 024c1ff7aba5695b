"""YAML persistence for the network configuration."""

import typing as t
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..domain.exceptions import ConfigFileError
from ..infrastructure.logging import get_logger
from .config import Config

if t.TYPE_CHECKING:
    import loguru

CONFIG_FILENAME = "config.yaml"


class ConfigStore:
    """Loads and saves Config as ``<home>/config.yaml``."""

    def __init__(
        self,
        home: Path,
        logger: "loguru.Logger" = get_logger(__name__),
    ) -> None:
        self.home = Path(home)
        self.path = self.home / CONFIG_FILENAME
        self._logger = logger

    def load(self) -> Config:
        """Read the configuration file.

        Returns:
            The parsed Config, or an empty Config if the file does not exist

        Raises:
            ConfigFileError: If the file is not valid YAML or does not
                describe a valid configuration
        """
        if not self.path.exists():
            self._logger.debug(f"No configuration at {self.path}, using empty config")
            return Config()

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return Config.model_validate(data)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            raise ConfigFileError(f"invalid configuration file {self.path}: {e}") from e

    def save(self, config: Config) -> None:
        """Write the configuration file, creating home if needed."""
        self.home.mkdir(parents=True, exist_ok=True)
        data = config.model_dump(mode="json", exclude_none=True)
        with self.path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)
        self._logger.debug(f"Saved configuration to {self.path}")
