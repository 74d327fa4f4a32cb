from typing import Optional, Any

class InfrastructureError(Exception):
    """Base exception for infrastructure-related errors."""
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.details = details

class AWSError(InfrastructureError):
    """Raised when AWS operations fail."""
    pass

class UnexpectedResponseError(AWSError):
    """Raised when an AWS response lacks a field the operation depends on."""
    pass

class SecurityGroupError(AWSError):
    """Raised when the managed security group cannot be created or located."""
    pass

class LaunchError(AWSError):
    """Raised when a launch request returns no instance."""
    pass

class ConfigurationError(InfrastructureError):
    """Raised when there's an issue with configuration."""
    pass

class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid."""
    pass

class CredentialsError(ConfigurationError):
    """Raised when there's an issue with credentials."""
    pass
