"""Dry-run permission probes."""
from typing import Any, Callable

from botocore.exceptions import ClientError

from nanobox_ec2.infrastructure.aws.errors import is_dry_run_success
from nanobox_ec2.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


def dry_run(operation: Callable[..., Any], **params: Any) -> bool:
    """
    Send a request with DryRun=True to check the caller may perform it.

    The provider answers a permitted dry run with a DryRunOperation error,
    which is swallowed. Any other error is re-raised unchanged.
    """
    name = getattr(operation, '__name__', repr(operation))
    try:
        operation(DryRun=True, **params)
    except ClientError as e:
        if is_dry_run_success(e):
            logger.debug("Dry run permitted", operation=name)
            return True
        logger.error("Dry run rejected", operation=name, error=str(e))
        raise
    return True
