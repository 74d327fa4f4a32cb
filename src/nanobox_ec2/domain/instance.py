"""Instance records and launch parameters."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ACTIVE_STATUS = "active"
PROVIDER_RUNNING_STATUS = "running"


def translate_status(status: Optional[str]) -> Optional[str]:
    """Map the provider's "running" to "active"; every other status passes through."""
    if status == PROVIDER_RUNNING_STATUS:
        return ACTIVE_STATUS
    return status


class Instance(BaseModel):
    """A managed compute instance, rebuilt from the provider on every query."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    status: Optional[str] = None
    external_ip: Optional[str] = None
    internal_ip: Optional[str] = None

    def with_name(self, name: str) -> "Instance":
        """Return a copy carrying the given name."""
        return self.model_copy(update={"name": name})

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class LaunchSpec(BaseModel):
    """Parameters of a single instance launch."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Name stored in the instance's name tag")
    image: str = Field(..., description="Machine image id")
    availability_zone: str = Field(..., description="Availability zone to launch in")
    key: str = Field(..., description="Name of the SSH key pair")
    security_group: str = Field(..., description="Security group id")
    size: Optional[str] = Field(None, description="Instance type; configured default when omitted")
    disk: Optional[int] = Field(None, description="Root volume size in GiB; configured default when omitted")

    @field_validator("name", "image", "availability_zone", "key", "security_group")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Value must not be empty")
        return v

    @field_validator("disk")
    @classmethod
    def validate_disk(cls, v: Optional[int]) -> Optional[int]:
        """Validate root volume size."""
        if v is not None and v < 1:
            raise ValueError("Disk size must be at least 1 GiB")
        return v
