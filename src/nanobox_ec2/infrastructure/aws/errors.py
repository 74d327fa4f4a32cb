"""Recognition of the EC2 error codes used as control-flow signals.

Most provider errors are opaque and simply propagate. A few are expected
outcomes of a request and select an alternative path instead:

    DryRunOperation              a dry-run request would have succeeded
    InvalidPermission.Malformed  a rule shape was rejected
    UnknownParameter             a request parameter is not supported
    InvalidInstanceID.NotFound   the instance does not exist
"""
from typing import Iterable

from botocore.exceptions import ClientError


class ErrorMarker:
    """Known EC2 error codes."""

    DRY_RUN = "DryRunOperation"
    MALFORMED_PERMISSION = "InvalidPermission.Malformed"
    UNKNOWN_PARAMETER = "UnknownParameter"
    INSTANCE_NOT_FOUND = "InvalidInstanceID.NotFound"


def error_code(error: ClientError) -> str:
    """Return the provider error code, or an empty string if there is none."""
    response = getattr(error, "response", None) or {}
    return response.get("Error", {}).get("Code", "") or ""


def error_matches(error: Exception, markers: Iterable[str]) -> bool:
    """
    Check whether a provider error carries one of the given markers.

    The error code is checked first; the message text is searched as well
    since some callers raise errors whose code is generic but whose message
    names the condition.
    """
    if not isinstance(error, ClientError):
        return False

    code = error_code(error)
    message = str(error)
    return any(marker == code or marker in message for marker in markers)


def is_dry_run_success(error: Exception) -> bool:
    """True when the error is the provider's "dry run would succeed" signal."""
    return error_matches(error, (ErrorMarker.DRY_RUN,))
