"""Logic for building a registry tree from a directory."""

import logging
from collections.abc import Mapping
from pathlib import Path

from impkit.naming_rules import NamingRules
from impkit.path_segment import path_segment
from impkit.path_tree import iter_path_tree
from impkit.registry_node import RegistryNode, RegistryValue

logger = logging.getLogger(__name__)


class _PendingNode:
    """Mutable interior node used only while the tree is being assembled."""

    def __init__(self, path: Path | None) -> None:
        self.path = path
        self.children: dict[str, "_PendingNode | Path"] = {}


def build_registry(
    root: Path | str,
    rules: NamingRules | None = None,
    overrides: Mapping[str, Path | str] | None = None,
) -> RegistryNode:
    """Build the registry for ``root``.

    ``overrides`` maps extra dotted paths to locations; they are placed over
    the scanned tree after traversal.
    """
    rules = rules or NamingRules()
    root = Path(root)

    if root.is_file():
        top = _PendingNode(root.parent)
        top.children[path_segment(root.name, rules)] = root
    else:
        top = _PendingNode(root)
        for entry in iter_path_tree(root, rules):
            parent = _descend(top, entry.segments[:-1])
            name = entry.segments[-1]
            if name in parent.children:
                logger.warning(
                    "Registry entry %s is defined twice; keeping %s",
                    entry.dotted,
                    entry.location,
                )
            if entry.is_leaf:
                parent.children[name] = entry.location
            else:
                parent.children[name] = _PendingNode(entry.location)

    for dotted, location in (overrides or {}).items():
        segments = dotted.split(".")
        parent = _descend(top, segments[:-1])
        parent.children[segments[-1]] = Path(location)

    return _freeze(top)


def _descend(node: _PendingNode, segments: tuple[str, ...] | list[str]) -> _PendingNode:
    """Walk to the interior node at ``segments``, creating missing nodes."""
    for segment in segments:
        child = node.children.get(segment)
        if not isinstance(child, _PendingNode):
            child = _PendingNode(None)
            node.children[segment] = child
        node = child
    return node


def _freeze(node: _PendingNode) -> RegistryNode:
    children: dict[str, RegistryValue] = {}
    for name, child in node.children.items():
        children[name] = _freeze(child) if isinstance(child, _PendingNode) else child
    return RegistryNode(node.path, children)
