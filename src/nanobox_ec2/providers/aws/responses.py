"""Helpers for reading EC2 response payloads."""
from typing import Any, List, Mapping, Sequence


def as_list(value: Any) -> List[Any]:
    """
    Normalize a response collection into a list.

    An absent collection becomes an empty list and a bare mapping (a
    collection collapsed to its single item) becomes a one-element list.
    """
    if value is None:
        return []
    if isinstance(value, Mapping):
        return [value]
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return list(value)
    return [value]


def dig(data: Any, *path: Any) -> Any:
    """
    Follow a path of keys and list indexes into a response.

    Returns None as soon as a step is missing.
    """
    current = data
    for step in path:
        if isinstance(step, int):
            items = as_list(current)
            if step >= len(items):
                return None
            current = items[step]
        elif isinstance(current, Mapping):
            current = current.get(step)
        else:
            return None
        if current is None:
            return None
    return current
