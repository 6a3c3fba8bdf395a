"""Logic for flattening a registry into dotted path strings."""

from collections.abc import Mapping
from typing import Any


def flatten_paths(registry: Mapping[str, Any]) -> list[str]:
    """Return every dotted path reachable from the registry root, sorted.

    Interior nodes and leaves are both included; the root itself is not.
    """
    paths: list[str] = []
    _collect(registry, "", paths)
    return sorted(paths)


def _collect(node: Mapping[str, Any], prefix: str, out: list[str]) -> None:
    for name, child in node.items():
        dotted = f"{prefix}.{name}" if prefix else name
        out.append(dotted)
        if isinstance(child, Mapping):
            _collect(child, dotted, out)
