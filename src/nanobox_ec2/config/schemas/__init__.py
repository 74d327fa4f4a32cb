"""Configuration schemas."""

from .app_schema import AppConfig, validate_config
from .aws_schema import AWSConfig
from .ec2_schema import LaunchConfig, SecurityGroupConfig, TaggingConfig
from .logging_schema import LogFileConfig, LoggingConfig

__all__ = [
    'AppConfig',
    'validate_config',
    'AWSConfig',
    'LaunchConfig',
    'SecurityGroupConfig',
    'TaggingConfig',
    'LogFileConfig',
    'LoggingConfig',
]
