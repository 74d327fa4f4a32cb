"""Security group record."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class SecurityGroup(BaseModel):
    """
    The security group shared by managed instances.

    inbound and outbound report whether the respective rule set holds any
    rule at all, not whether it holds the default policy.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: Optional[str] = None
    inbound: bool = False
    outbound: bool = False

    @property
    def configured(self) -> bool:
        return self.inbound and self.outbound

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
