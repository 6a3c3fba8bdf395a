"""Logic for deep merging nested mappings."""

from collections.abc import Mapping
from typing import Any


def deep_merge(base: Mapping[str, Any], update: Mapping[str, Any]) -> dict[str, Any]:
    """Deep merge two mappings into a new dict.

    - Mappings are merged recursively.
    - Everything else in 'update' replaces the value in 'base' (last write wins).
    Neither argument is modified.
    """
    result = dict(base)
    for key, value in update.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result
