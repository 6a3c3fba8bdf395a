"""Logic for gathering the source files a migration scan reads."""

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def collect_source_files(
    paths: Iterable[Path | str], suffix: str = ".py"
) -> list[Path]:
    """Collect files ending in ``suffix`` under each path.

    Directories are walked depth-first in lexicographic order. A file given
    directly is always included. Paths that do not exist are skipped.
    """
    files: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_file():
            files.append(path)
        elif path.is_dir():
            _walk(path, suffix, files)
        else:
            logger.warning("Scan path is neither a file nor a directory: %s", path)
    return files


def _walk(directory: Path, suffix: str, out: list[Path]) -> None:
    for child in sorted(directory.iterdir(), key=lambda p: p.name):
        if child.is_dir():
            _walk(child, suffix, out)
        elif child.is_file() and child.name.endswith(suffix):
            out.append(child)
