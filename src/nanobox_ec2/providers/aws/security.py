"""Security facade: the single managed security group and its default rules."""
from typing import Any, Dict, Optional

from nanobox_ec2.config.schemas import SecurityGroupConfig
from nanobox_ec2.domain.security_group import SecurityGroup
from nanobox_ec2.infrastructure.exceptions import SecurityGroupError
from nanobox_ec2.infrastructure.logging.logger import get_logger
from nanobox_ec2.providers.aws.permissions import dry_run
from nanobox_ec2.providers.aws.responses import as_list
from nanobox_ec2.providers.aws.rules import RulePolicy, default_egress_policy, default_ingress_policy

logger = get_logger(__name__)


class SecurityFacade:
    """
    Fetches or creates the managed security group and opens its default rules.

    Provisioning moves absent -> created -> rules-applied. Each direction is
    only configured while its rule set is empty, so a group with any rule in
    a direction is left alone, including one left partially configured by an
    earlier failure.
    """

    def __init__(self, manager: Any, config: Optional[SecurityGroupConfig] = None,
                 ingress_policy: Optional[RulePolicy] = None,
                 egress_policy: Optional[RulePolicy] = None):
        self.manager = manager
        self.config = config or SecurityGroupConfig()
        self.ingress_policy = ingress_policy or default_ingress_policy()
        self.egress_policy = egress_policy or default_egress_policy()

    def ensure_group(self) -> SecurityGroup:
        """
        Return the managed group, creating it and applying default rules as needed.

        Raises:
            SecurityGroupError: If the group cannot be found after creating it
            ClientError: For provider errors outside the rule fallbacks
        """
        group = self.fetch_group()
        if group is None:
            group = self.create_group()

        if group.configured:
            logger.debug("Security group already configured", group_id=group.id)
            return group

        if not group.inbound:
            self.ingress_policy.apply(
                self.manager.authorize_security_group_ingress, group.id, self.config.cidr
            )
            group = group.model_copy(update={'inbound': True})

        if not group.outbound:
            self.egress_policy.apply(
                self.manager.authorize_security_group_egress, group.id, self.config.cidr
            )
            group = group.model_copy(update={'outbound': True})

        return group

    def fetch_group(self) -> Optional[SecurityGroup]:
        """The managed group, or None when it does not exist."""
        response = self.manager.describe_security_groups(
            Filters=[{'Name': 'group-name', 'Values': [self.config.name]}]
        )
        groups = as_list((response or {}).get('SecurityGroups'))
        if not groups:
            return None
        return self._to_security_group(groups[0])

    def create_group(self) -> SecurityGroup:
        """Create the managed group and return it as the provider reports it."""
        logger.info("Creating security group", name=self.config.name)
        self.manager.create_security_group(
            GroupName=self.config.name,
            Description=self.config.description
        )

        group = self.fetch_group()
        if group is None:
            raise SecurityGroupError(
                f"Security group {self.config.name} not found after creating it"
            )
        return group

    def check_permission(self) -> bool:
        """Dry-run describe and create to validate credentials."""
        dry_run(self.manager.describe_security_groups)
        dry_run(
            self.manager.create_security_group,
            GroupName=self.config.name,
            Description=self.config.description
        )
        return True

    @staticmethod
    def _to_security_group(data: Dict[str, Any]) -> SecurityGroup:
        return SecurityGroup(
            id=data['GroupId'],
            name=data.get('GroupName', ''),
            description=data.get('Description'),
            inbound=bool(as_list(data.get('IpPermissions'))),
            outbound=bool(as_list(data.get('IpPermissionsEgress')))
        )
