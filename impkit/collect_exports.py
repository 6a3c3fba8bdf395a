"""Logic for collecting export declarations from unit trees."""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from impkit.evaluate_unit import evaluate_unit
from impkit.export_record import ExportRecord
from impkit.naming_rules import NamingRules
from impkit.path_tree import iter_path_tree, unit_file_for

logger = logging.getLogger(__name__)


def collect_exports(
    path_or_paths: Path | str | Iterable[Path | str],
    rules: NamingRules | None = None,
) -> dict[str, list[ExportRecord]]:
    """Collect export records from one or more files or directories.

    Records are grouped by sink key. Within a key they keep traversal order:
    roots in the order given, then files in lexicographic order within each
    root. Units that fail to evaluate contribute nothing.
    """
    rules = rules or NamingRules()
    if isinstance(path_or_paths, (str, Path)):
        roots = [Path(path_or_paths)]
    else:
        roots = [Path(p) for p in path_or_paths]

    collected: dict[str, list[ExportRecord]] = {}
    for root in roots:
        for unit_file in iter_unit_files(root, rules):
            result = evaluate_unit(unit_file)
            for record in result.records:
                collected.setdefault(record.sink_key, []).append(record)
    return collected


def iter_unit_files(root: Path, rules: NamingRules) -> Iterator[Path]:
    """Yield the unit files under ``root`` in registry traversal order."""
    if root.is_file():
        yield root
        return
    if not root.is_dir():
        logger.warning("Export path does not exist: %s", root)
        return
    for entry in iter_path_tree(root, rules):
        unit_file = unit_file_for(entry, rules)
        if unit_file is not None:
            yield unit_file
