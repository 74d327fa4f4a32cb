"""Infrastructure layer: AWS client, error types and logging."""

from nanobox_ec2.infrastructure.exceptions import (
    AWSError,
    ConfigurationError,
    CredentialsError,
    InfrastructureError,
    InvalidConfigurationError,
    LaunchError,
    SecurityGroupError,
    UnexpectedResponseError,
)

__all__: list[str] = [
    "AWSError",
    "ConfigurationError",
    "CredentialsError",
    "InfrastructureError",
    "InvalidConfigurationError",
    "LaunchError",
    "SecurityGroupError",
    "UnexpectedResponseError",
]
