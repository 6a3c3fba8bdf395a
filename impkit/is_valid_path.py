"""Predicate for checking a dotted path against a registry."""

from collections.abc import Mapping
from typing import Any


def is_valid_path(registry: Mapping[str, Any], dotted: str) -> bool:
    """Check if ``dotted`` resolves to a node or leaf of the registry."""
    if not dotted:
        return False
    node: Any = registry
    for segment in dotted.split("."):
        if not isinstance(node, Mapping) or segment not in node:
            return False
        node = node[segment]
    return True
