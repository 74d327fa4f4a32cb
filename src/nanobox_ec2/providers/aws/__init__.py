"""AWS EC2 provider facades."""

from nanobox_ec2.providers.aws.compute import ComputeFacade
from nanobox_ec2.providers.aws.security import SecurityFacade

__all__: list[str] = [
    "ComputeFacade",
    "SecurityFacade",
]
