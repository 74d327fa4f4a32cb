"""Tests for CLI output formatting."""

import json

import yaml

from nanobox_ec2.cli.formatters import format_output

INSTANCES = {'instances': [
    {'id': 'i-1', 'name': 'web.1', 'status': 'active', 'external_ip': '54.0.0.1', 'internal_ip': '10.0.0.1'},
    {'id': 'i-2', 'name': 'db.1', 'status': 'pending', 'external_ip': None, 'internal_ip': '10.0.0.2'},
]}


def test_json_default():
    assert json.loads(format_output(INSTANCES, 'json')) == INSTANCES


def test_yaml():
    assert yaml.safe_load(format_output(INSTANCES, 'yaml')) == INSTANCES


def test_instances_table():
    output = format_output(INSTANCES, 'table')
    lines = output.splitlines()

    assert lines[0].startswith('+')
    assert 'External IP' in lines[1]
    assert 'web.1' in output
    # missing values are shown as N/A
    assert 'N/A' in [cell.strip() for cell in lines[4].split('|')]


def test_empty_instances_table():
    assert format_output({'instances': []}, 'table') == 'No instances found.'


def test_missing_single_instance():
    assert format_output({'instance': None}, 'table') == 'No instances found.'
    assert format_output({'instance': None}, 'list') == 'Instance not found.'


def test_zones_list():
    assert format_output({'zones': ['us-west-2a', 'us-west-2b']}, 'list') == 'us-west-2a\nus-west-2b'


def test_security_group_table():
    group = {'id': 'sg-1', 'name': 'Nanobox', 'description': 'desc', 'inbound': True, 'outbound': False}

    output = format_output({'security_group': group}, 'table')

    assert 'sg-1' in output
    assert '| yes ' in output
    assert '| no ' in output


def test_instances_list():
    output = format_output({'instances': INSTANCES['instances'][:1]}, 'list')

    assert 'id          : i-1' in output
    assert 'external_ip : 54.0.0.1' in output


def test_unknown_shape_falls_back_to_json():
    data = {'compute': True, 'security': True}
    assert json.loads(format_output(data, 'table')) == data
