"""
load the config from config.yaml and environment variables
"""

import os
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


class Config:
    """Configuration loader that reads from config.yaml and environment variables."""

    def __init__(self, config_path: str = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to a YAML file. If None, uses config.yaml next to
                        this module and tolerates it being absent.
        """
        self.explicit = config_path is not None
        self.config_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and override with environment variables."""
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            if self.explicit:
                raise ConfigError(f"Configuration file not found: {self.config_path}")
            config = {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in configuration file: {e}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must hold a mapping: {self.config_path}")

        config = self._apply_env_overrides(config)
        self._check_timeout(config)
        return config

    def _check_timeout(self, config: Dict[str, Any]):
        """fetcher.timeout must be empty or a positive number of seconds."""
        fetcher = config.get('fetcher')
        timeout = fetcher.get('timeout') if isinstance(fetcher, dict) else None
        if timeout is None:
            return
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError(f"fetcher.timeout must be a positive number of seconds, got {timeout!r}")

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            'PEXELS_API_KEY': ('pexels', 'api_key'),
            'DOWNLOADER_DESTINATION': ('downloader', 'destination'),
            'DOWNLOADER_QUERY': ('downloader', 'query'),
            'FETCHER_TIMEOUT': ('fetcher', 'timeout'),
            'LOG_LEVEL': ('logging', 'level'),
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                current = config
                for key in config_path[:-1]:
                    if not isinstance(current.get(key), dict):
                        current[key] = {}
                    current = current[key]

                current[config_path[-1]] = self._convert_env_value(env_value)

        return config

    def _convert_env_value(self, value: str):
        """Convert environment variable string to appropriate Python type."""
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, *keys, default=None):
        """Get a nested configuration value, e.g. get('fetcher', 'timeout')."""
        current = self._config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    @property
    def pexels(self) -> Dict[str, Any]:
        return self.get('pexels', default={})

    @property
    def downloader(self) -> Dict[str, Any]:
        return self.get('downloader', default={})

    @property
    def fetcher(self) -> Dict[str, Any]:
        return self.get('fetcher', default={})

    @property
    def logging(self) -> Dict[str, Any]:
        return self.get('logging', default={})
