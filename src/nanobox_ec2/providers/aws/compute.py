"""Compute facade: managed EC2 instances and usable availability zones."""
from typing import Any, Dict, List, Optional

from botocore.exceptions import ClientError

from nanobox_ec2.config.schemas import LaunchConfig, TaggingConfig
from nanobox_ec2.domain.instance import Instance, LaunchSpec, translate_status
from nanobox_ec2.infrastructure.aws.errors import ErrorMarker, error_matches
from nanobox_ec2.infrastructure.exceptions import LaunchError, UnexpectedResponseError
from nanobox_ec2.infrastructure.logging.logger import get_logger
from nanobox_ec2.providers.aws.permissions import dry_run
from nanobox_ec2.providers.aws.responses import as_list, dig
from nanobox_ec2.providers.aws.tags import TagBuilder

logger = get_logger(__name__)

DEFAULT_SUBNET_FILTER = {'Name': 'default-for-az', 'Values': ['true']}


class ComputeFacade:
    """
    Lists, launches, reboots and terminates managed instances.

    Every list and describe call is scoped by the ownership marker tag, so
    instances not launched through this facade are never reported.
    """

    def __init__(self, manager: Any, tagging: Optional[TaggingConfig] = None,
                 launch: Optional[LaunchConfig] = None):
        """
        Args:
            manager: boto3 EC2 client, or any object exposing the same methods
            tagging: Marker and name tag settings
            launch: Launch defaults
        """
        self.manager = manager
        self.tags = TagBuilder(tagging)
        self.launch_config = launch or LaunchConfig()

    def list_instances(self) -> List[Instance]:
        """All managed instances; an empty list when there are none."""
        logger.debug("Describing managed instances")
        instances = []
        paginator = self.manager.get_paginator('describe_instances')
        for page in paginator.paginate(Filters=self.tags.marker_filters()):
            instances.extend(self._instances_from_reservations(page))
        return instances

    def get_instance(self, instance_id: str) -> Optional[Instance]:
        """The managed instance with this id, or None."""
        logger.debug("Describing instance", instance_id=instance_id)
        try:
            response = self.manager.describe_instances(
                InstanceIds=[instance_id],
                Filters=self.tags.marker_filters()
            )
        except ClientError as e:
            if error_matches(e, (ErrorMarker.INSTANCE_NOT_FOUND,)):
                return None
            raise

        instances = self._instances_from_reservations(response)
        return instances[0] if instances else None

    def launch_instance(self, spec: LaunchSpec) -> Instance:
        """
        Launch one instance, tag it, and return its record.

        The returned name is the one given in the spec; tags are not read back.
        """
        size = spec.size or self.launch_config.size
        disk = spec.disk or self.launch_config.disk

        logger.info("Launching instance", name=spec.name, size=size,
                    availability_zone=spec.availability_zone)
        response = self.manager.run_instances(
            ImageId=spec.image,
            MinCount=1,
            MaxCount=1,
            KeyName=spec.key,
            InstanceType=size,
            SecurityGroupIds=[spec.security_group],
            Placement={
                'AvailabilityZone': spec.availability_zone,
                'Tenancy': self.launch_config.tenancy
            },
            BlockDeviceMappings=[{
                'DeviceName': self.launch_config.root_device,
                'Ebs': {
                    'VolumeSize': disk,
                    'DeleteOnTermination': True
                }
            }]
        )

        data = dig(response, 'Instances', 0)
        if not data or not data.get('InstanceId'):
            raise LaunchError("Launch request returned no instance", details=response)
        instance = self._to_instance(data)

        self.manager.create_tags(
            Resources=[instance.id],
            Tags=self.tags.instance_tags(spec.name)
        )
        logger.info("Launched instance", instance_id=instance.id, name=spec.name)

        return instance.with_name(spec.name)

    def reboot_instance(self, instance_id: str) -> None:
        logger.info("Rebooting instance", instance_id=instance_id)
        self.manager.reboot_instances(InstanceIds=[instance_id])

    def terminate_instance(self, instance_id: str) -> str:
        """
        Terminate an instance.

        Returns:
            The lifecycle state the provider reports after the request,
            e.g. "shutting-down"

        Raises:
            UnexpectedResponseError: If the response does not report a state
        """
        logger.info("Terminating instance", instance_id=instance_id)
        response = self.manager.terminate_instances(InstanceIds=[instance_id])

        state = dig(response, 'TerminatingInstances', 0, 'CurrentState', 'Name')
        if state is None:
            raise UnexpectedResponseError(
                f"Terminate response for {instance_id} has no current state",
                details=response,
            )
        return state

    def list_availability_zones(self) -> List[str]:
        """Zones with a default subnet, deduplicated and sorted."""
        zones = set()
        paginator = self.manager.get_paginator('describe_subnets')
        for page in paginator.paginate(Filters=[DEFAULT_SUBNET_FILTER]):
            for subnet in as_list(page.get('Subnets')):
                zone = subnet.get('AvailabilityZone')
                if zone:
                    zones.add(zone)
        return sorted(zones)

    def check_permission(self) -> bool:
        """Dry-run describe, launch and terminate to validate credentials."""
        dry_run(self.manager.describe_instances)
        dry_run(
            self.manager.run_instances,
            ImageId=self.launch_config.permission_image,
            InstanceType=self.launch_config.size,
            MinCount=1,
            MaxCount=1
        )
        dry_run(
            self.manager.terminate_instances,
            InstanceIds=[self.launch_config.permission_instance_id]
        )
        return True

    def _instances_from_reservations(self, response: Dict[str, Any]) -> List[Instance]:
        instances = []
        for reservation in as_list((response or {}).get('Reservations')):
            for data in as_list(reservation.get('Instances')):
                instances.append(self._to_instance(data))
        return instances

    def _to_instance(self, data: Dict[str, Any]) -> Instance:
        return Instance(
            id=data['InstanceId'],
            name=self.tags.instance_name(data.get('Tags')),
            status=translate_status(dig(data, 'State', 'Name')),
            external_ip=data.get('PublicIpAddress'),
            internal_ip=data.get('PrivateIpAddress')
        )
