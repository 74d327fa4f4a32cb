"""Configuration package with clean public API."""

from .schemas import (
    AppConfig, validate_config,
    AWSConfig, LaunchConfig, SecurityGroupConfig, TaggingConfig,
    LogFileConfig, LoggingConfig,
)
from .env_expansion import expand_env_vars
from .manager import ConfigManager, load_config

__all__ = [
    'AppConfig',
    'validate_config',
    'AWSConfig',
    'LaunchConfig',
    'SecurityGroupConfig',
    'TaggingConfig',
    'LogFileConfig',
    'LoggingConfig',
    'expand_env_vars',
    'ConfigManager',
    'load_config',
]
