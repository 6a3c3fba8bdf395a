"""Logic for enumerating a directory as logical registry paths."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from impkit.naming_rules import NamingRules
from impkit.path_segment import path_segment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathEntry:
    """A logical path and the filesystem location it resolves to."""

    segments: tuple[str, ...]
    location: Path
    is_leaf: bool

    @property
    def dotted(self) -> str:
        """Return the canonical dotted form of the logical path."""
        return ".".join(self.segments)


def iter_path_tree(
    root: Path,
    rules: NamingRules,
    prefix: tuple[str, ...] = (),
) -> Iterator[PathEntry]:
    """Enumerate ``root`` depth-first in lexicographic order of raw entry names.

    Yields an interior entry for every plain directory before its children,
    and a leaf entry for every unit file and every directory containing the
    marker file. Marker directories are never descended into. Entries whose
    segment would contain "." cannot be addressed by a dotted path and are
    skipped.
    """
    for child in sorted(root.iterdir(), key=lambda p: p.name):
        name = child.name
        if rules.is_hidden(name):
            continue
        is_dir = child.is_dir()
        if not is_dir and not (child.is_file() and rules.is_unit(name)):
            continue
        segment = path_segment(name, rules)
        if "." in segment:
            logger.warning("Skipping %s: segment %r contains '.'", child, segment)
            continue
        segments = (*prefix, segment)
        if not is_dir or (child / rules.marker).is_file():
            yield PathEntry(segments, child, is_leaf=True)
        else:
            yield PathEntry(segments, child, is_leaf=False)
            yield from iter_path_tree(child, rules, segments)


def unit_file_for(entry: PathEntry, rules: NamingRules) -> Path | None:
    """Return the file to evaluate for a leaf entry.

    A marker directory collapses to its marker file.
    """
    if not entry.is_leaf:
        return None
    if entry.location.is_dir():
        return entry.location / rules.marker
    return entry.location
