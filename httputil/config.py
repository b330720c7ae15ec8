"""
load the config from config.yaml and the environment
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any


class Config:
    """Configuration loader that reads from config.yaml and environment variables."""

    # Environment variable -> nested config location
    ENV_MAPPINGS = {
        'HTTPUTIL_TIMEOUT': ('http', 'timeout'),
        'HTTPUTIL_USER_AGENT': ('http', 'user_agent'),
        'LOG_LEVEL': ('logging', 'level'),
        'HTTPUTIL_LOG_RENDERER': ('logging', 'renderer'),
    }

    def __init__(self, config_path: str = None):
        """config_path defaults to the config.yaml next to this module."""
        if config_path is None:
            config_path = Path(__file__).parent / "config.yaml"

        self.config_path = Path(config_path)
        self._config = self._load_config()

    def reload(self):
        """Re-read the YAML file and environment (e.g. after loading a .env file)."""
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """YAML file first, then ENV_MAPPINGS overrides."""
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        return self._apply_env_overrides(config)

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        for env_var, config_path in self.ENV_MAPPINGS.items():
            env_value = os.getenv(env_var)
            if env_value is None:
                continue

            current = config
            for key in config_path[:-1]:
                if not isinstance(current.get(key), dict):
                    current[key] = {}
                current = current[key]

            current[config_path[-1]] = self._convert_env_value(env_value)

        return config

    def _convert_env_value(self, value: str):
        # "true"/"false", int, float, else the raw string
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
        """Walk nested keys, e.g. get('http', 'timeout'); default when any key is missing."""
        current = self._config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    @property
    def http(self) -> Dict[str, Any]:
        """Get HTTP client configuration."""
        return self.get('http', default={})

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get('logging', default={})


# Global configuration instance
config = Config()
