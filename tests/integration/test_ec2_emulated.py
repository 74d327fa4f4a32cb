"""Facades against moto's emulated EC2."""

import boto3
import pytest
from unittest.mock import Mock
from moto import mock_aws

from nanobox_ec2.domain.instance import LaunchSpec
from nanobox_ec2.providers.aws.compute import ComputeFacade
from nanobox_ec2.providers.aws.security import SecurityFacade

REGION = 'us-east-1'


@pytest.fixture
def ec2(aws_credentials):
    with mock_aws():
        yield boto3.client('ec2', region_name=REGION)


@pytest.fixture
def launch_spec(ec2):
    image_id = ec2.describe_images()['Images'][0]['ImageId']
    ec2.create_key_pair(KeyName='deploy')
    group = ec2.create_security_group(GroupName='web', Description='web servers')
    return LaunchSpec(
        name='web.1',
        image=image_id,
        availability_zone=f"{REGION}a",
        key='deploy',
        security_group=group['GroupId'],
        disk=30,
    )


@pytest.mark.integration
@pytest.mark.aws
class TestComputeEmulated:

    def test_launch_list_and_get(self, ec2, launch_spec):
        compute = ComputeFacade(ec2)

        launched = compute.launch_instance(launch_spec)

        assert launched.name == 'web.1'
        assert launched.id.startswith('i-')

        listed = compute.list_instances()
        assert [i.id for i in listed] == [launched.id]
        assert listed[0].name == 'web.1'
        assert listed[0].status in ('pending', 'active')
        assert listed[0].internal_ip

        fetched = compute.get_instance(launched.id)
        assert fetched.id == launched.id
        assert fetched.name == 'web.1'

    def test_unmanaged_instances_are_invisible(self, ec2, launch_spec):
        compute = ComputeFacade(ec2)
        unmanaged = ec2.run_instances(ImageId=launch_spec.image, MinCount=1, MaxCount=1)
        unmanaged_id = unmanaged['Instances'][0]['InstanceId']

        assert compute.list_instances() == []
        assert compute.get_instance(unmanaged_id) is None

    def test_get_unknown_instance(self, ec2):
        assert ComputeFacade(ec2).get_instance('i-0123456789abcdef0') is None

    def test_tags_and_placement(self, ec2, launch_spec):
        launched = ComputeFacade(ec2).launch_instance(launch_spec)

        reservation = ec2.describe_instances(InstanceIds=[launched.id])['Reservations'][0]
        data = reservation['Instances'][0]
        tags = {t['Key']: t['Value'] for t in data['Tags']}
        assert tags == {'Nanobox': 'true', 'Nanobox-Name': 'web.1'}
        assert data['Placement']['AvailabilityZone'] == launch_spec.availability_zone

    def test_reboot_and_terminate(self, ec2, launch_spec):
        compute = ComputeFacade(ec2)
        launched = compute.launch_instance(launch_spec)

        compute.reboot_instance(launched.id)
        state = compute.terminate_instance(launched.id)

        assert state in ('shutting-down', 'terminated')

    def test_availability_zones(self, ec2):
        zones = ComputeFacade(ec2).list_availability_zones()

        assert zones
        assert zones == sorted(set(zones))
        assert all(zone.startswith(REGION) for zone in zones)


@pytest.mark.integration
@pytest.mark.aws
class TestSecurityEmulated:

    def test_ensure_group_creates_and_configures(self, ec2):
        group = SecurityFacade(ec2).ensure_group()

        assert group.name == 'Nanobox'
        assert group.inbound and group.outbound

        described = ec2.describe_security_groups(GroupIds=[group.id])['SecurityGroups'][0]
        assert described['IpPermissions']
        assert described['IpPermissionsEgress']

    def test_second_ensure_issues_no_mutations(self, ec2):
        first = SecurityFacade(ec2).ensure_group()
        spy = Mock(wraps=ec2)

        second = SecurityFacade(spy).ensure_group()

        assert second.id == first.id
        spy.create_security_group.assert_not_called()
        spy.authorize_security_group_ingress.assert_not_called()
        spy.authorize_security_group_egress.assert_not_called()
