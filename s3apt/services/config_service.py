"""Configuration loading service"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml

from ..api.exceptions import ConfigError
from ..constants import CONFIG_FILE, ENV_CONFIG_PATH, ENV_SIGNING_KEY
from ..models.config import RepoConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for locating and loading the repository configuration"""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize config service

        Args:
            config_path: Explicit configuration file. Falls back to the
                S3APT_CONFIG environment variable, then to .s3apt.yaml in
                the working directory.
        """
        if config_path is None:
            config_path = os.environ.get(ENV_CONFIG_PATH) or CONFIG_FILE
        self.config_path = Path(config_path)
        self._config: Optional[RepoConfig] = None

    @property
    def config(self) -> RepoConfig:
        """Get current configuration (lazy load)"""
        if self._config is None:
            self.load_config()
        return self._config

    def load_config(self) -> RepoConfig:
        """Load configuration from file

        A missing file yields the default configuration.

        Returns:
            Loaded configuration

        Raises:
            ConfigError: If the file is unreadable, not valid YAML or invalid
        """
        data = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    content = f.read()
            except OSError as e:
                raise ConfigError(f"Cannot read {self.config_path}: {e}") from e

            # Expand environment variables in the file
            content = os.path.expandvars(content)

            try:
                data = yaml.safe_load(content) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

            if not isinstance(data, dict):
                raise ConfigError(f"{self.config_path} must contain a mapping")
            logger.debug(f"Loaded configuration from {self.config_path}")
        else:
            logger.debug(f"No configuration at {self.config_path}, using defaults")

        config = RepoConfig.from_dict(data)

        signing_key = os.environ.get(ENV_SIGNING_KEY)
        if signing_key is not None and config.signing.key is None:
            config.signing.key = signing_key

        self._config = config
        return config
