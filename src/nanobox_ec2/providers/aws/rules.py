"""Default firewall rules for the managed security group.

Each direction has an ordered list of strategies. The first is a single
blanket allow-all rule; some accounts and API versions reject that shape, in
which case the same policy is applied as one rule per protocol. A strategy
that fails with one of its policy's fallback markers hands over to the next
one; any other failure propagates.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from botocore.exceptions import ClientError

from nanobox_ec2.infrastructure.aws.errors import ErrorMarker, error_matches
from nanobox_ec2.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

INGRESS = "ingress"
EGRESS = "egress"

ALL_PROTOCOLS = "-1"
ALL_PORTS = (0, 65535)
ALL_ICMP_TYPES = (-1, -1)

Authorize = Callable[..., Any]


def protocol_permission(protocol: str, port_range: Tuple[int, int], cidr: str) -> Dict[str, Any]:
    """Build one IpPermissions entry."""
    from_port, to_port = port_range
    return {
        'IpProtocol': protocol,
        'FromPort': from_port,
        'ToPort': to_port,
        'IpRanges': [{'CidrIp': cidr}]
    }


class RuleStrategy(ABC):
    """One way of applying the default policy to a group."""

    name = "strategy"

    @abstractmethod
    def requests(self, group_id: str, direction: str, cidr: str) -> List[Dict[str, Any]]:
        """Parameters of each authorize request, in the order they are sent."""

    def apply(self, authorize: Authorize, group_id: str, direction: str, cidr: str) -> int:
        """Send every request; return how many were sent."""
        requests = self.requests(group_id, direction, cidr)
        for params in requests:
            logger.debug("Authorizing rule", strategy=self.name, direction=direction, params=params)
            authorize(**params)
        return len(requests)


class BlanketRuleStrategy(RuleStrategy):
    """A single rule allowing every protocol from (or to) any address."""

    name = "blanket"

    def requests(self, group_id: str, direction: str, cidr: str) -> List[Dict[str, Any]]:
        params = {
            'GroupId': group_id,
            'IpProtocol': ALL_PROTOCOLS,
            'CidrIp': cidr
        }
        if direction == INGRESS:
            params['FromPort'] = -1
        else:
            params['ToPort'] = -1
        return [params]


class ProtocolRulesStrategy(RuleStrategy):
    """One rule per protocol: TCP and UDP on every port, then ICMP of every type."""

    name = "per-protocol"

    def __init__(self, protocols: Optional[Sequence[Tuple[str, Tuple[int, int]]]] = None):
        self.protocols = list(protocols or [
            ('tcp', ALL_PORTS),
            ('udp', ALL_PORTS),
            ('icmp', ALL_ICMP_TYPES),
        ])

    def requests(self, group_id: str, direction: str, cidr: str) -> List[Dict[str, Any]]:
        return [
            {
                'GroupId': group_id,
                'IpPermissions': [protocol_permission(protocol, port_range, cidr)]
            }
            for protocol, port_range in self.protocols
        ]


class RulePolicy:
    """Ordered strategies for one direction, tried until one succeeds."""

    def __init__(self, direction: str, strategies: Sequence[RuleStrategy],
                 fallback_markers: Sequence[str]):
        if direction not in (INGRESS, EGRESS):
            raise ValueError(f"Unknown rule direction: {direction}")
        if not strategies:
            raise ValueError("A rule policy needs at least one strategy")
        self.direction = direction
        self.strategies = list(strategies)
        self.fallback_markers = tuple(fallback_markers)

    def apply(self, authorize: Authorize, group_id: str, cidr: str) -> RuleStrategy:
        """
        Apply the policy to a group.

        Args:
            authorize: authorize_security_group_ingress or _egress of the EC2 client
            group_id: Security group id
            cidr: Address range the rules allow

        Returns:
            The strategy that succeeded

        Raises:
            ClientError: When the last strategy fails, or any strategy fails
                with an error that is not a fallback marker
        """
        last_index = len(self.strategies) - 1
        for index, strategy in enumerate(self.strategies):
            try:
                strategy.apply(authorize, group_id, self.direction, cidr)
            except ClientError as e:
                if index == last_index or not error_matches(e, self.fallback_markers):
                    raise
                logger.warning(
                    "Rule strategy rejected, falling back",
                    direction=self.direction,
                    strategy=strategy.name,
                    next_strategy=self.strategies[index + 1].name,
                    error=str(e),
                )
                continue
            logger.info("Applied default rules", direction=self.direction,
                        strategy=strategy.name, group_id=group_id)
            return strategy

        # unreachable: the last strategy either returns or raises
        raise RuntimeError("No rule strategy applied")


def default_ingress_policy() -> RulePolicy:
    return RulePolicy(
        INGRESS,
        [BlanketRuleStrategy(), ProtocolRulesStrategy()],
        (ErrorMarker.MALFORMED_PERMISSION,),
    )


def default_egress_policy() -> RulePolicy:
    return RulePolicy(
        EGRESS,
        [BlanketRuleStrategy(), ProtocolRulesStrategy()],
        (ErrorMarker.MALFORMED_PERMISSION, ErrorMarker.UNKNOWN_PARAMETER),
    )
