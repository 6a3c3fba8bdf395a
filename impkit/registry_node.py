"""Data model for the immutable registry tree."""

from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Union

RegistryValue = Union["RegistryNode", Path]


class RegistryNode(Mapping[str, RegistryValue]):
    """An interior registry node: segment -> child, plus its own location.

    Leaves are plain ``Path`` objects. Children are also reachable as
    attributes, so ``registry.home.alice`` resolves the same way the
    reference scanner reads it. Names that clash with ``Mapping`` methods
    (``keys``, ``get``, ...) are only reachable by subscription.
    """

    __slots__ = ("_children", "_path")

    def __init__(
        self, path: Path | None, children: Mapping[str, RegistryValue]
    ) -> None:
        """Initialize the node; the children mapping is copied and frozen."""
        self._path = path
        self._children = MappingProxyType(dict(children))

    @property
    def path(self) -> Path | None:
        """Filesystem location of this node, if it has one."""
        return self._path

    def __getitem__(self, key: str) -> RegistryValue:
        return self._children[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __getattr__(self, name: str) -> RegistryValue:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._children[name]
        except KeyError:
            msg = f"registry has no entry {name!r}"
            raise AttributeError(msg) from None

    def __repr__(self) -> str:
        return f"RegistryNode({self._path!s}, {sorted(self._children)})"

    def lookup(self, dotted: str) -> RegistryValue | None:
        """Return the node or leaf at a dotted path, or None if it does not resolve."""
        node: RegistryValue = self
        for segment in dotted.split("."):
            if not isinstance(node, RegistryNode) or segment not in node:
                return None
            node = node[segment]
        return node
