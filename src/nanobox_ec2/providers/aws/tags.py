"""Tag lookup and tag building for managed instances.

EC2 instances have no name attribute, so the name lives in a tag next to the
ownership marker that scopes every query to resources this system manages.
"""
from typing import Any, Dict, Iterable, List, Optional

from nanobox_ec2.config.schemas import TaggingConfig
from nanobox_ec2.providers.aws.responses import as_list


class TagSet:
    """Read-only key/value view over an EC2 tag collection."""

    def __init__(self, tags: Optional[Iterable[Dict[str, Any]]] = None):
        self._tags: Dict[str, str] = {}
        for tag in as_list(tags):
            key = tag.get('Key')
            if key is not None:
                self._tags[key] = tag.get('Value', '')

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._tags.get(key, default)


class TagBuilder:
    """Builds the tags and filters that mark and find managed instances."""

    def __init__(self, config: Optional[TaggingConfig] = None):
        self.config = config or TaggingConfig()

    def marker_tag(self) -> Dict[str, str]:
        return {'Key': self.config.marker_key, 'Value': self.config.marker_value}

    def name_tag(self, name: str) -> Dict[str, str]:
        return {'Key': self.config.name_key, 'Value': name}

    def instance_tags(self, name: str) -> List[Dict[str, str]]:
        """Tags applied to a freshly launched instance."""
        return [self.marker_tag(), self.name_tag(name)]

    def marker_filters(self) -> List[Dict[str, Any]]:
        """describe_instances filter matching only managed instances."""
        return [{
            'Name': f"tag:{self.config.marker_key}",
            'Values': [self.config.marker_value]
        }]

    def instance_name(self, tags: Optional[Iterable[Dict[str, Any]]]) -> str:
        """Name from the name tag, or the configured fallback when it is missing."""
        name = TagSet(tags).get(self.config.name_key)
        if name is None:
            return self.config.unknown_name
        return name
