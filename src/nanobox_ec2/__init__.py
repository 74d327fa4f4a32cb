"""Nanobox EC2 adapter.

Translates platform-management operations into AWS EC2 calls:

    - compute: list, describe, launch, reboot and terminate managed
      instances; list availability zones that have a default subnet
    - security: fetch or create the managed security group and open its
      default inbound and outbound rules

Both facades take a boto3 EC2 client. ``Application`` builds one from
configuration and wires the facades to it.
"""

__version__ = "0.1.0"

from nanobox_ec2.bootstrap import Application
from nanobox_ec2.domain import Instance, LaunchSpec, SecurityGroup, translate_status
from nanobox_ec2.providers.aws import ComputeFacade, SecurityFacade

__all__ = [
    "Application",
    "ComputeFacade",
    "Instance",
    "LaunchSpec",
    "SecurityFacade",
    "SecurityGroup",
    "translate_status",
    "__version__",
]
