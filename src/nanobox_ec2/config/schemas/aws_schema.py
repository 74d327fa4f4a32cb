"""AWS client configuration schema."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AWSConfig(BaseModel):
    """Settings used to build the boto3 EC2 client."""
    model_config = ConfigDict(extra="forbid")

    region: str = Field("us-west-2", description="AWS region name")
    profile: Optional[str] = Field(None, description="Named profile from the shared credentials file")
    request_retry_attempts: int = Field(3, description="Maximum attempts per request")
    retry_mode: str = Field("standard", description="botocore retry mode (legacy, standard, adaptive)")
    connect_timeout: int = Field(10, description="Connection timeout in seconds")
    read_timeout: int = Field(60, description="Read timeout in seconds")
    proxy_host: Optional[str] = Field(None, description="HTTP(S) proxy host")
    proxy_port: Optional[int] = Field(None, description="HTTP(S) proxy port")
    validate_credentials: bool = Field(False, description="Call STS GetCallerIdentity when the client is created")

    @field_validator("retry_mode")
    @classmethod
    def validate_retry_mode(cls, v: str) -> str:
        """Validate retry mode."""
        valid_modes = ["legacy", "standard", "adaptive"]
        if v not in valid_modes:
            raise ValueError(f"Retry mode must be one of {valid_modes}")
        return v

    @field_validator("request_retry_attempts", "connect_timeout", "read_timeout")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Value must be at least 1")
        return v
