import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from typing import Any, Dict, Optional

from nanobox_ec2.config.schemas import AWSConfig
from nanobox_ec2.infrastructure.exceptions import CredentialsError
from nanobox_ec2.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


class AWSClient:
    """
    Centralized AWS client management.

    Builds the boto3 EC2 client handed to the compute and security facades.
    Retries, backoff and timeouts are configured here and performed by botocore.
    """

    def __init__(self, config: Optional[AWSConfig] = None, session: Optional[boto3.session.Session] = None):
        """
        Initialize AWS client with configuration.

        Args:
            config: AWS configuration; defaults are used when None
            session: Optional pre-built boto3 session

        Raises:
            CredentialsError: If credential validation is enabled and fails
        """
        self.aws_config = config or AWSConfig()
        self.region_name = self.aws_config.region
        self.config = Config(
            region_name=self.region_name,
            retries={
                'max_attempts': self.aws_config.request_retry_attempts,
                'mode': self.aws_config.retry_mode
            },
            connect_timeout=self.aws_config.connect_timeout,
            read_timeout=self.aws_config.read_timeout,
            proxies=self._proxy_config()
        )
        self._session = session or boto3.session.Session(
            profile_name=self.aws_config.profile,
            region_name=self.region_name
        )
        self._ec2_client = None

        if self.aws_config.validate_credentials:
            self.validate_credentials()

    def _proxy_config(self) -> Optional[Dict[str, str]]:
        """Build proxy settings for AWS clients."""
        if self.aws_config.proxy_host and self.aws_config.proxy_port:
            address = f"{self.aws_config.proxy_host}:{self.aws_config.proxy_port}"
            return {
                'http': f"http://{address}",
                'https': f"http://{address}"
            }
        return None

    @property
    def ec2_client(self) -> Any:
        """EC2 client, created on first use."""
        if self._ec2_client is None:
            logger.debug("Creating EC2 client", region=self.region_name)
            self._ec2_client = self._session.client('ec2', config=self.config)
        return self._ec2_client

    def validate_credentials(self) -> Dict[str, Any]:
        """
        Check that the configured credentials resolve to an AWS identity.

        Returns:
            The STS caller identity

        Raises:
            CredentialsError: If the identity cannot be resolved
        """
        try:
            sts = self._session.client('sts', config=self.config)
            identity = sts.get_caller_identity()
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to validate AWS credentials", error=str(e))
            raise CredentialsError(f"Failed to validate AWS credentials: {str(e)}")

        logger.debug("Validated AWS credentials", account=identity.get('Account'))
        return identity
