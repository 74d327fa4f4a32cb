"""
CLI-specific formatting functions for human-readable output.

This module handles presentation formatting for the CLI, including:
- JSON and YAML serialization
- ASCII tables for instances, zones and security groups
- List formatting for detailed views
"""

import json
from typing import Any, Dict, List

import yaml

INSTANCE_HEADERS = ["ID", "Name", "Status", "External IP", "Internal IP"]
INSTANCE_FIELDS = ["id", "name", "status", "external_ip", "internal_ip"]


def format_output(data: Any, format_type: str) -> str:
    """Format data according to the specified format type."""
    if format_type == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    elif format_type == "table":
        return format_table_output(data)
    elif format_type == "list":
        return format_list_output(data)
    else:
        # Default to JSON
        return json.dumps(data, indent=2, default=str)


def format_table_output(data: Any) -> str:
    """Format data as a table."""
    if isinstance(data, dict) and "instances" in data:
        return format_instances_table(data["instances"])
    elif isinstance(data, dict) and "instance" in data:
        instance = data["instance"]
        return format_instances_table([instance] if instance else [])
    elif isinstance(data, dict) and "zones" in data:
        return format_zones_table(data["zones"])
    elif isinstance(data, dict) and "security_group" in data:
        return format_security_group_table(data["security_group"])
    else:
        # Fallback to JSON for unknown data structures
        return json.dumps(data, indent=2, default=str)


def format_list_output(data: Any) -> str:
    """Format data as a detailed list."""
    if isinstance(data, dict) and "instances" in data:
        return _format_records_list(data["instances"], "No instances found.")
    elif isinstance(data, dict) and "instance" in data:
        instance = data["instance"]
        return _format_records_list([instance] if instance else [], "Instance not found.")
    elif isinstance(data, dict) and "zones" in data:
        if not data["zones"]:
            return "No availability zones found."
        return "\n".join(data["zones"])
    elif isinstance(data, dict) and "security_group" in data:
        return _format_records_list([data["security_group"]], "No security group.")
    else:
        return json.dumps(data, indent=2, default=str)


def format_instances_table(instances: List[Dict]) -> str:
    """Format instances as a table."""
    if not instances:
        return "No instances found."

    rows = []
    for instance in instances:
        rows.append([_display(instance.get(field)) for field in INSTANCE_FIELDS])

    return _format_table_with_headers(INSTANCE_HEADERS, rows)


def format_zones_table(zones: List[str]) -> str:
    if not zones:
        return "No availability zones found."
    return _format_table_with_headers(["Availability Zone"], [[zone] for zone in zones])


def format_security_group_table(group: Dict) -> str:
    headers = ["ID", "Name", "Inbound", "Outbound", "Description"]
    row = [
        _display(group.get("id")),
        _display(group.get("name")),
        "yes" if group.get("inbound") else "no",
        "yes" if group.get("outbound") else "no",
        _display(group.get("description")),
    ]
    return _format_table_with_headers(headers, [row])


def _display(value: Any) -> str:
    return "N/A" if value is None or value == "" else str(value)


def _format_records_list(records: List[Dict], empty_message: str) -> str:
    if not records:
        return empty_message

    blocks = []
    for record in records:
        width = max(len(key) for key in record)
        lines = [f"{key.ljust(width)} : {_display(value)}" for key, value in record.items()]
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def _format_table_with_headers(headers: List[str], rows: List[List[str]]) -> str:
    """Format data as ASCII table with headers."""
    if not rows:
        return "No data to display."

    # Calculate column widths
    all_rows = [headers] + rows
    widths = [max(len(str(row[i])) for row in all_rows) for i in range(len(headers))]

    def format_row(row, widths):
        return "| " + " | ".join(str(row[i]).ljust(widths[i]) for i in range(len(row))) + " |"

    def format_separator(widths):
        return "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    lines = []
    lines.append(format_separator(widths))
    lines.append(format_row(headers, widths))
    lines.append(format_separator(widths))
    for row in rows:
        lines.append(format_row(row, widths))
    lines.append(format_separator(widths))

    return "\n".join(lines)
