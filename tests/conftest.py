import copy
import itertools
import logging
from typing import Any, Dict, List, Optional

import pytest
from botocore.exceptions import ClientError

from nanobox_ec2.infrastructure.logging.logger import configure_structlog

MUTATING_OPERATIONS = {
    'run_instances',
    'terminate_instances',
    'reboot_instances',
    'create_tags',
    'create_security_group',
    'authorize_security_group_ingress',
    'authorize_security_group_egress',
}


def client_error(code: str, operation: str = 'TestOperation', message: Optional[str] = None) -> ClientError:
    """Build a botocore ClientError the way the EC2 client raises it."""
    return ClientError(
        {'Error': {'Code': code, 'Message': message or f"{code} raised by test"}},
        operation
    )


def make_instance(instance_id: str, name: Optional[str] = None, state: str = 'running',
                  public_ip: Optional[str] = '54.0.0.1', private_ip: Optional[str] = '10.0.0.1',
                  marker: bool = True) -> Dict[str, Any]:
    """Instance payload shaped like describe_instances output."""
    tags = []
    if marker:
        tags.append({'Key': 'Nanobox', 'Value': 'true'})
    if name is not None:
        tags.append({'Key': 'Nanobox-Name', 'Value': name})
    data = {
        'InstanceId': instance_id,
        'State': {'Code': 16, 'Name': state},
        'Tags': tags,
    }
    if public_ip:
        data['PublicIpAddress'] = public_ip
    if private_ip:
        data['PrivateIpAddress'] = private_ip
    return data


class FakePaginator:
    """Single-page paginator over one FakeEC2 operation."""

    def __init__(self, operation):
        self.operation = operation

    def paginate(self, **params):
        yield self.operation(**params)


class FakeEC2:
    """
    In-memory stand-in for the boto3 EC2 client.

    Records every call. errors maps an operation name to a list of exceptions
    raised on successive calls (None lets that call through).
    """

    def __init__(self):
        self.calls: List[tuple] = []
        self.errors: Dict[str, List[Optional[Exception]]] = {}
        self.reservations: Any = []
        self.subnets: List[Dict[str, Any]] = []
        self.groups: Dict[str, Dict[str, Any]] = {}
        self.run_response: Optional[Dict[str, Any]] = None
        self.terminate_response: Optional[Dict[str, Any]] = None
        self._ids = itertools.count(1)

    def _record(self, operation: str, params: Dict[str, Any]) -> None:
        self.calls.append((operation, copy.deepcopy(params)))
        queue = self.errors.get(operation)
        if queue:
            error = queue.pop(0)
            if error is not None:
                raise error

    def calls_to(self, operation: str) -> List[Dict[str, Any]]:
        return [params for name, params in self.calls if name == operation]

    @property
    def mutations(self) -> List[tuple]:
        return [call for call in self.calls if call[0] in MUTATING_OPERATIONS]

    def get_paginator(self, operation: str) -> FakePaginator:
        return FakePaginator(getattr(self, operation))

    # compute

    def describe_instances(self, **params):
        self._record('describe_instances', params)
        return {'Reservations': self.reservations}

    def run_instances(self, **params):
        self._record('run_instances', params)
        if self.run_response is not None:
            return self.run_response
        instance = make_instance(f"i-{next(self._ids):017d}", state='pending', public_ip=None)
        instance.pop('Tags')
        return {'Instances': [instance]}

    def create_tags(self, **params):
        self._record('create_tags', params)
        return {}

    def reboot_instances(self, **params):
        self._record('reboot_instances', params)
        return {}

    def terminate_instances(self, **params):
        self._record('terminate_instances', params)
        if self.terminate_response is not None:
            return self.terminate_response
        return {'TerminatingInstances': [{
            'InstanceId': params['InstanceIds'][0],
            'CurrentState': {'Code': 32, 'Name': 'shutting-down'},
            'PreviousState': {'Code': 16, 'Name': 'running'},
        }]}

    def describe_subnets(self, **params):
        self._record('describe_subnets', params)
        return {'Subnets': self.subnets}

    # security

    def describe_security_groups(self, **params):
        self._record('describe_security_groups', params)
        names = set()
        for f in params.get('Filters', []):
            if f['Name'] == 'group-name':
                names.update(f['Values'])
        groups = [g for g in self.groups.values() if not names or g['GroupName'] in names]
        return {'SecurityGroups': copy.deepcopy(groups)}

    def create_security_group(self, **params):
        self._record('create_security_group', params)
        group_id = f"sg-{next(self._ids):017d}"
        self.groups[group_id] = {
            'GroupId': group_id,
            'GroupName': params['GroupName'],
            'Description': params['Description'],
            'IpPermissions': [],
            'IpPermissionsEgress': [],
        }
        return {'GroupId': group_id}

    def authorize_security_group_ingress(self, **params):
        self._record('authorize_security_group_ingress', params)
        self._add_rules(params, 'IpPermissions')
        return {'Return': True}

    def authorize_security_group_egress(self, **params):
        self._record('authorize_security_group_egress', params)
        self._add_rules(params, 'IpPermissionsEgress')
        return {'Return': True}

    def _add_rules(self, params, key):
        group = self.groups[params['GroupId']]
        if 'IpPermissions' in params:
            group[key].extend(params['IpPermissions'])
        else:
            group[key].append({
                'IpProtocol': params['IpProtocol'],
                'IpRanges': [{'CidrIp': params['CidrIp']}],
            })


@pytest.fixture
def fake_ec2():
    return FakeEC2()


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for moto."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')


@pytest.fixture(autouse=True, scope='session')
def structlog_through_stdlib():
    """Configure structlog before any module logger is first used."""
    configure_structlog()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
