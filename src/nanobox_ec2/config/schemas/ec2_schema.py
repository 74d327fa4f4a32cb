"""Settings for the resources this system manages in EC2."""
from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaggingConfig(BaseModel):
    """Tags marking managed instances and carrying their names."""
    model_config = ConfigDict(extra="forbid")

    marker_key: str = Field("Nanobox", description="Key of the ownership marker tag")
    marker_value: str = Field("true", description="Value of the ownership marker tag")
    name_key: str = Field("Nanobox-Name", description="Key of the tag holding the instance name")
    unknown_name: str = Field("unknown", description="Name reported when the name tag is missing")


class SecurityGroupConfig(BaseModel):
    """The single security group shared by managed instances."""
    model_config = ConfigDict(extra="forbid")

    name: str = Field("Nanobox", description="Security group name")
    description: str = Field(
        "Simple security group policy for Nanobox apps.",
        description="Description used when the group is created",
    )
    cidr: str = Field("0.0.0.0/0", description="Address range allowed by the default rules")


class LaunchConfig(BaseModel):
    """Defaults applied to instance launches and permission probes."""
    model_config = ConfigDict(extra="forbid")

    size: str = Field("t2.micro", description="Default instance type")
    disk: int = Field(20, description="Default root volume size in GiB")
    root_device: str = Field("/dev/sda1", description="Device name of the root EBS volume")
    tenancy: str = Field("default", description="Placement tenancy")
    permission_image: str = Field(
        "ami-00000000000000000",
        description=(
            "Image id sent with the launch dry run. Set a real image in the "
            "configured region; EC2 may answer the placeholder with "
            "InvalidAMIID.NotFound, which fails the permission check."
        ),
    )
    permission_instance_id: str = Field(
        "i-00000000000000000",
        description=(
            "Instance id sent with the terminate dry run. Set an existing instance; "
            "EC2 may answer the placeholder with InvalidInstanceID.NotFound, "
            "which fails the permission check."
        ),
    )

    @field_validator("disk")
    @classmethod
    def validate_disk(cls, v: int) -> int:
        """Validate default disk size."""
        if v < 1:
            raise ValueError("Disk size must be at least 1 GiB")
        return v
