"""
Main CLI module with argument parsing and command execution.

This module provides the main CLI interface including:
- Command line argument parsing
- Command routing to the compute and security facades
- Output formatting and error reporting
"""
import os
import sys
import argparse
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from nanobox_ec2 import __version__
from nanobox_ec2.bootstrap import Application
from nanobox_ec2.cli.formatters import format_output
from nanobox_ec2.domain.instance import LaunchSpec
from nanobox_ec2.infrastructure.exceptions import InfrastructureError
from nanobox_ec2.infrastructure.logging.logger import configure_structlog, get_logger

FORMATS = ['json', 'yaml', 'table', 'list']


def build_parser() -> argparse.ArgumentParser:
    """Build the resource/action argument parser."""
    parser = argparse.ArgumentParser(
        prog=os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else 'nanobox-ec2',
        description="Nanobox EC2 adapter - manage tagged instances and the shared security group",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s instances list --format table
  %(prog)s instances show i-0123456789abcdef0
  %(prog)s instances launch --name web.1 --image ami-0abc --zone us-west-2a \\
      --key deploy --security-group sg-0abc
  %(prog)s zones list
  %(prog)s security-group ensure
  %(prog)s permissions check
        """
    )

    # Global options
    parser.add_argument('--config', help='Configuration file path (JSON or YAML)')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Set logging level')
    parser.add_argument('--format', choices=FORMATS, default='json', help='Output format')
    parser.add_argument('--output', help='Output file (default: stdout)')
    parser.add_argument('--quiet', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', action='store_true', help='Print tracebacks on errors')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='resource', help='Available resources')

    # Instances resource
    instances_parser = subparsers.add_parser('instances', help='Manage compute instances')
    instances_subparsers = instances_parser.add_subparsers(dest='action', help='Instance actions')

    instances_subparsers.add_parser('list', help='List managed instances')

    instances_show = instances_subparsers.add_parser('show', help='Show one instance')
    instances_show.add_argument('instance_id', help='Instance ID to show')

    instances_launch = instances_subparsers.add_parser('launch', help='Launch an instance')
    instances_launch.add_argument('--name', required=True, help='Instance name')
    instances_launch.add_argument('--image', required=True, help='Machine image ID')
    instances_launch.add_argument('--zone', required=True, help='Availability zone')
    instances_launch.add_argument('--key', required=True, help='SSH key pair name')
    instances_launch.add_argument('--security-group', required=True, help='Security group ID')
    instances_launch.add_argument('--size', help='Instance type')
    instances_launch.add_argument('--disk', type=int, help='Root volume size in GiB')

    instances_reboot = instances_subparsers.add_parser('reboot', help='Reboot an instance')
    instances_reboot.add_argument('instance_id', help='Instance ID to reboot')

    instances_terminate = instances_subparsers.add_parser('terminate', help='Terminate an instance')
    instances_terminate.add_argument('instance_id', help='Instance ID to terminate')

    # Zones resource
    zones_parser = subparsers.add_parser('zones', help='Availability zones')
    zones_subparsers = zones_parser.add_subparsers(dest='action', help='Zone actions')
    zones_subparsers.add_parser('list', help='List zones with a default subnet')

    # Security group resource
    sg_parser = subparsers.add_parser('security-group', help='Managed security group')
    sg_subparsers = sg_parser.add_subparsers(dest='action', help='Security group actions')
    sg_subparsers.add_parser('ensure', help='Create the group and default rules if missing')

    # Permissions resource
    permissions_parser = subparsers.add_parser('permissions', help='Credential checks')
    permissions_subparsers = permissions_parser.add_subparsers(dest='action', help='Permission actions')
    permissions_subparsers.add_parser('check', help='Dry-run every operation')

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def execute_command(args: argparse.Namespace, app: Application) -> Dict[str, Any]:
    """Route a parsed command to the facades and return a serializable result."""
    if args.resource == 'instances':
        if args.action == 'list':
            return {'instances': [i.to_dict() for i in app.compute.list_instances()]}
        elif args.action == 'show':
            instance = app.compute.get_instance(args.instance_id)
            return {'instance': instance.to_dict() if instance else None}
        elif args.action == 'launch':
            spec = LaunchSpec(
                name=args.name,
                image=args.image,
                availability_zone=args.zone,
                key=args.key,
                security_group=args.security_group,
                size=args.size,
                disk=args.disk
            )
            return {'instance': app.compute.launch_instance(spec).to_dict()}
        elif args.action == 'reboot':
            app.compute.reboot_instance(args.instance_id)
            return {'instance_id': args.instance_id, 'rebooted': True}
        elif args.action == 'terminate':
            state = app.compute.terminate_instance(args.instance_id)
            return {'instance_id': args.instance_id, 'state': state}
    elif args.resource == 'zones' and args.action == 'list':
        return {'zones': app.compute.list_availability_zones()}
    elif args.resource == 'security-group' and args.action == 'ensure':
        return {'security_group': app.security.ensure_group().to_dict()}
    elif args.resource == 'permissions' and args.action == 'check':
        return {
            'compute': app.compute.check_permission(),
            'security': app.security.check_permission()
        }

    raise ValueError(f"Unknown command: {args.resource} {args.action}")


def main(argv: Optional[List[str]] = None, app: Optional[Application] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    configure_structlog()
    logger = get_logger(__name__)

    if not args.resource:
        print("Error: No resource specified. Use --help for usage information.", file=sys.stderr)
        return 1

    if not args.action:
        print(f"Error: No action specified for {args.resource}. Use --help for usage information.",
              file=sys.stderr)
        return 1

    try:
        if app is None:
            app = Application(args.config)
        app.setup_logging(args.log_level)
        result = execute_command(args, app)
    except (InfrastructureError, ClientError, BotoCoreError, ValidationError, ValueError) as e:
        logger.error("Command failed", resource=args.resource, action=args.action, error=str(e))
        if args.verbose:
            import traceback
            traceback.print_exc()
        if not args.quiet:
            print(f"Error: {e}", file=sys.stderr)
        return 1

    formatted_output = format_output(result, args.format)
    if args.output:
        with open(args.output, 'w') as f:
            f.write(formatted_output)
        if not args.quiet:
            print(f"Output written to {args.output}")
    else:
        print(formatted_output)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == '__main__':
    run()
