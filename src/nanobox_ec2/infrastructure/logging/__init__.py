"""Structured logging setup."""

from nanobox_ec2.infrastructure.logging.logger import configure_structlog, get_logger, setup_logging

__all__: list[str] = ["configure_structlog", "get_logger", "setup_logging"]
