"""Logic for building a dependency graph from registry references.

Graph shape::

    {
        "nodes": [{"id": "home.alice", "path": "/abs/home/alice.py", "type": "file"}],
        "edges": [{"from": "home.alice", "to": "modules.shell", "type": "registry",
                   "valid": True}],
    }

Formatting the graph as DOT or text is left to callers.
"""

from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from impkit.collect_source_files import collect_source_files
from impkit.extract_references import extract_references
from impkit.is_valid_path import is_valid_path


def analyze_registry(
    registry: Mapping[str, Any],
    root_identifier: str = "registry",
    suffix: str = ".py",
) -> dict[str, list[dict[str, Any]]]:
    """Return the nodes and reference edges of every registry leaf."""
    nodes: list[dict[str, Any]] = []
    edges: set[tuple[str, str]] = set()

    for node_id, location in _iter_leaves(registry, ""):
        is_package = location.is_dir()
        nodes.append(
            {
                "id": node_id,
                "path": str(location),
                "type": "package" if is_package else "file",
            }
        )
        for source_file in collect_source_files([location], suffix):
            text = source_file.read_text(encoding="utf-8", errors="replace")
            for ref in extract_references(root_identifier, text):
                if ref != node_id:
                    edges.add((node_id, ref))

    return {
        "nodes": sorted(nodes, key=lambda n: n["id"]),
        "edges": [
            {
                "from": src,
                "to": dst,
                "type": "registry",
                "valid": is_valid_path(registry, dst),
            }
            for src, dst in sorted(edges)
        ],
    }


def _iter_leaves(
    node: Mapping[str, Any], prefix: str
) -> Iterator[tuple[str, Path]]:
    for name, child in node.items():
        dotted = f"{prefix}.{name}" if prefix else name
        if isinstance(child, Mapping):
            yield from _iter_leaves(child, dotted)
        else:
            yield dotted, Path(child)
