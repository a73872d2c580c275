"""Configuration loader."""

import logging
from typing import Any, Optional

import yaml

from greater_version.models.config import (
    Configuration,
    InstalledConfiguration,
    RegistryConfiguration,
    SourceConfiguration,
)
from greater_version.utils.types import Singleton

logger = logging.getLogger(__name__)


class LogicError(Exception):
    """Error in application logic."""


class AppConfig(metaclass=Singleton):
    """Singleton class to load and store the configuration.

    Unlike a long running service, a release check can run without any
    configuration file; the defaults are used until something is loaded.
    """

    def __init__(self) -> None:
        """Initialize the class instance with no configuration loaded."""
        self._configuration: Optional[Configuration] = None
        self._defaults: Optional[Configuration] = None

    def load_configuration(self, filename: str) -> None:
        """Load configuration from YAML file.

        Parameters:
            filename (str): Path to the YAML configuration file to load.

        Raises:
            LogicError: If the file does not contain a YAML mapping.
            pydantic.ValidationError: If the configuration is not valid.
        """
        with open(filename, encoding="utf-8") as fin:
            config_dict = yaml.safe_load(fin)
        # empty file means defaults
        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise LogicError(
                f"logic error: configuration file {filename} does not contain a mapping"
            )
        logger.info("Loaded configuration: %s", config_dict)
        self.init_from_dict(config_dict)

    def init_from_dict(self, config_dict: dict[Any, Any]) -> None:
        """Initialize configuration from a dictionary.

        Parameters:
            config_dict (dict[Any, Any]): Mapping of configuration values
            (typically parsed from YAML) to construct a new Configuration
            instance.
        """
        self._configuration = Configuration(**config_dict)

    def reset(self) -> None:
        """Forget the loaded configuration and fall back to defaults."""
        self._configuration = None

    @property
    def is_loaded(self) -> bool:
        """Check if a configuration has been loaded explicitly."""
        return self._configuration is not None

    @property
    def configuration(self) -> Configuration:
        """Return the whole configuration.

        Returns:
            Configuration: The loaded configuration object, or the default
            configuration when nothing has been loaded.
        """
        if self._configuration is not None:
            return self._configuration
        if self._defaults is None:
            logger.debug("No configuration loaded, using defaults")
            self._defaults = Configuration()
        return self._defaults

    @property
    def source_configuration(self) -> SourceConfiguration:
        """Return local source tree configuration."""
        return self.configuration.source

    @property
    def installed_configuration(self) -> InstalledConfiguration:
        """Return installed package lookup configuration."""
        return self.configuration.installed

    @property
    def registry_configuration(self) -> RegistryConfiguration:
        """Return package registry configuration."""
        return self.configuration.registry


configuration: AppConfig = AppConfig()
