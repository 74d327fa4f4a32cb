"""Domain records returned to callers."""

from nanobox_ec2.domain.instance import Instance, LaunchSpec, translate_status
from nanobox_ec2.domain.security_group import SecurityGroup

__all__: list[str] = [
    "Instance",
    "LaunchSpec",
    "SecurityGroup",
    "translate_status",
]
