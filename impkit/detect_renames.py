"""Logic for detecting broken registry references and proposing fixes."""

import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from impkit.collect_source_files import collect_source_files
from impkit.extract_references import extract_references
from impkit.flatten_paths import flatten_paths
from impkit.is_valid_path import is_valid_path
from impkit.rename_report import RenameReport, build_rewrite_command, render_script
from impkit.suggest_new_path import classify_rename

logger = logging.getLogger(__name__)


def detect_renames(
    registry: Mapping[str, Any],
    paths: Iterable[Path | str],
    rename_map: Mapping[str, str] | None = None,
    *,
    root: Path | str | None = None,
    root_identifier: str = "registry",
    suffix: str = ".py",
    rewrite_tool: str = "ast-grep",
    language: str = "python",
) -> RenameReport:
    """Scan sources under ``paths`` for references that no longer resolve.

    Affected files are reported relative to ``root`` (the current directory
    by default).
    """
    root = Path(root) if root is not None else Path.cwd()

    refs_by_file: dict[Path, set[str]] = {}
    candidates: dict[str, None] = {}
    for source_file in collect_source_files(paths, suffix):
        try:
            text = source_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s: %s", source_file, exc)
            continue
        refs = extract_references(root_identifier, text)
        refs_by_file[source_file] = set(refs)
        candidates.update(dict.fromkeys(refs))

    report = RenameReport()
    report.broken_refs = sorted(r for r in candidates if not is_valid_path(registry, r))
    if not report.broken_refs:
        report.script = render_script(report)
        return report

    current_paths = flatten_paths(registry)
    for broken in report.broken_refs:
        suggestion = classify_rename(current_paths, broken, rename_map)
        if suggestion.replacement is None:
            report.unresolved[broken] = suggestion.reason.value
        else:
            report.suggestions[broken] = suggestion.replacement
        logger.debug(
            "%s -> %s (%s)", broken, suggestion.replacement, suggestion.reason.value
        )

    affected: set[str] = set()
    for old, new in report.suggestions.items():
        files = sorted(
            _relative(f, root) for f, refs in refs_by_file.items() if old in refs
        )
        affected.update(files)
        report.commands.append(
            build_rewrite_command(
                root_identifier, old, new, files, tool=rewrite_tool, language=language
            )
        )
    report.affected_files = sorted(affected)
    report.script = render_script(report)
    return report


def _relative(path: Path, root: Path) -> str:
    return Path(os.path.relpath(path.resolve(), root.resolve())).as_posix()
