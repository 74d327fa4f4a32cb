"""Configuration loading: file, environment expansion and overrides."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from nanobox_ec2.config.env_expansion import expand_env_vars
from nanobox_ec2.config.schemas import AppConfig, validate_config
from nanobox_ec2.infrastructure.exceptions import InvalidConfigurationError
from nanobox_ec2.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

CONFIG_FILE_ENV = "NANOBOX_EC2_CONFIG"

# environment variable -> (section, key)
ENV_OVERRIDES = {
    "NANOBOX_EC2_REGION": ("aws", "region"),
    "NANOBOX_EC2_PROFILE": ("aws", "profile"),
    "NANOBOX_EC2_LOG_LEVEL": ("logging", "level"),
    "NANOBOX_EC2_SECURITY_GROUP": ("security_group", "name"),
}


def describe_errors(error: ValidationError) -> str:
    """One "field.path: message" entry per validation error."""
    entries = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "<root>"
        entries.append(f"{location}: {err['msg']}")
    return "; ".join(entries)


class ConfigManager:
    """
    Loads and validates the application configuration.

    Sources, lowest precedence first:
    - schema defaults
    - a JSON or YAML file (explicit path, else $NANOBOX_EC2_CONFIG)
    - NANOBOX_EC2_* environment variables

    String values in the file may reference environment variables as $VAR or ${VAR}.
    """

    def __init__(self, config_file: Optional[str] = None):
        self._config_file = config_file or os.environ.get(CONFIG_FILE_ENV)
        self._app_config: Optional[AppConfig] = None

    @property
    def app_config(self) -> AppConfig:
        """Lazy load application configuration."""
        if self._app_config is None:
            self._app_config = self._load_app_config()
        return self._app_config

    def reload(self) -> AppConfig:
        """Discard the cached configuration and load it again."""
        self._app_config = None
        return self.app_config

    def _load_app_config(self) -> AppConfig:
        config_data: Dict[str, Any] = {}
        if self._config_file:
            config_data = self.load_from_file(self._config_file)

        config_data = expand_env_vars(config_data)
        config_data = self.apply_environment_overrides(config_data)

        try:
            return validate_config(config_data)
        except ValidationError as e:
            raise InvalidConfigurationError(
                f"Invalid configuration: {e.error_count()} error(s): {describe_errors(e)}",
                details=e.errors(),
            )

    @staticmethod
    def load_from_file(config_file: str) -> Dict[str, Any]:
        """Read a JSON or YAML configuration file into a dictionary."""
        path = Path(config_file)
        if not path.exists():
            raise InvalidConfigurationError(f"Configuration file not found: {config_file}")

        try:
            with path.open("r") as f:
                if path.suffix.lower() in (".yml", ".yaml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise InvalidConfigurationError(f"Failed to parse configuration file {config_file}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise InvalidConfigurationError(
                f"Configuration file {config_file} must contain a mapping at the top level"
            )

        logger.debug("Loaded configuration", config_file=config_file)
        return data

    @staticmethod
    def apply_environment_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply NANOBOX_EC2_* environment variables on top of file values."""
        result = dict(config_data)
        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is None or value == "":
                continue
            section_data = dict(result.get(section) or {})
            section_data[key] = value
            result[section] = section_data
            logger.debug("Applied environment override", variable=env_name)
        return result


def load_config(config_file: Optional[str] = None) -> AppConfig:
    """Load and validate configuration in one call."""
    return ConfigManager(config_file).app_config
