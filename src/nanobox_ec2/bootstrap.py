"""Application bootstrap: configuration, logging, client and facades."""

from __future__ import annotations

from typing import Any, Optional

from nanobox_ec2.config import AppConfig, ConfigManager
from nanobox_ec2.infrastructure.aws.aws_client import AWSClient
from nanobox_ec2.infrastructure.logging.logger import get_logger, setup_logging
from nanobox_ec2.providers.aws.compute import ComputeFacade
from nanobox_ec2.providers.aws.security import SecurityFacade


class Application:
    """Application context with lazily created client and facades."""

    def __init__(self, config_path: Optional[str] = None, config: Optional[AppConfig] = None,
                 manager: Any = None) -> None:
        """
        Args:
            config_path: JSON or YAML configuration file
            config: Already loaded configuration; takes precedence over config_path
            manager: EC2 client to use instead of building one from configuration
        """
        self.config_path = config_path
        self._config = config
        self._manager = manager
        self._aws_client: Optional[AWSClient] = None
        self._compute: Optional[ComputeFacade] = None
        self._security: Optional[SecurityFacade] = None
        self.logger = get_logger(__name__)

    @property
    def config(self) -> AppConfig:
        if self._config is None:
            self._config = ConfigManager(self.config_path).app_config
        return self._config

    def setup_logging(self, level: Optional[str] = None) -> None:
        """Configure logging from config, optionally overriding the level."""
        logging_config = self.config.logging
        if level:
            logging_config = logging_config.model_copy(update={'level': level.upper()})
        setup_logging(logging_config)

    @property
    def aws_client(self) -> AWSClient:
        if self._aws_client is None:
            self._aws_client = AWSClient(self.config.aws)
        return self._aws_client

    @property
    def manager(self) -> Any:
        """The EC2 client shared by both facades."""
        if self._manager is None:
            self._manager = self.aws_client.ec2_client
        return self._manager

    @property
    def compute(self) -> ComputeFacade:
        if self._compute is None:
            self._compute = ComputeFacade(
                self.manager,
                tagging=self.config.tagging,
                launch=self.config.launch
            )
        return self._compute

    @property
    def security(self) -> SecurityFacade:
        if self._security is None:
            self._security = SecurityFacade(self.manager, config=self.config.security_group)
        return self._security


def create_application(config_path: Optional[str] = None) -> Application:
    """Create an application from a configuration file."""
    return Application(config_path)
