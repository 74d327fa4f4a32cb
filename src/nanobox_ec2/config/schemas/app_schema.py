"""Main application configuration schema."""
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from .aws_schema import AWSConfig
from .ec2_schema import LaunchConfig, SecurityGroupConfig, TaggingConfig
from .logging_schema import LoggingConfig


class AppConfig(BaseModel):
    """Application configuration."""
    model_config = ConfigDict(extra="forbid")

    aws: AWSConfig = Field(default_factory=lambda: AWSConfig())
    tagging: TaggingConfig = Field(default_factory=lambda: TaggingConfig())
    security_group: SecurityGroupConfig = Field(default_factory=lambda: SecurityGroupConfig())
    launch: LaunchConfig = Field(default_factory=lambda: LaunchConfig())
    logging: LoggingConfig = Field(default_factory=lambda: LoggingConfig())


def validate_config(config: Dict[str, Any]) -> AppConfig:
    """
    Validate configuration.

    Args:
        config: Configuration to validate

    Returns:
        Validated configuration

    Raises:
        pydantic.ValidationError: If configuration is invalid
    """
    return AppConfig(**config)
