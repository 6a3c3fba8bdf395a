"""Data model and rendering for migration reports."""

import shlex
from dataclasses import dataclass, field
from typing import Any


@dataclass
class RenameReport:
    """Outcome of scanning sources for broken registry references."""

    broken_refs: list[str] = field(default_factory=list)
    suggestions: dict[str, str] = field(default_factory=dict)
    unresolved: dict[str, str] = field(default_factory=dict)  # path -> reason
    affected_files: list[str] = field(default_factory=list)
    commands: list[str] = field(default_factory=list)
    script: str = ""

    @property
    def needs_manual_fix(self) -> bool:
        """True when some broken references have no automatic fix."""
        return bool(self.unresolved)

    def to_dict(self) -> dict[str, Any]:
        """Return the report using its stable external keys."""
        return {
            "brokenRefs": list(self.broken_refs),
            "suggestions": dict(self.suggestions),
            "unresolved": dict(self.unresolved),
            "affectedFiles": list(self.affected_files),
            "commands": list(self.commands),
            "script": self.script,
        }


def build_rewrite_command(
    root_identifier: str,
    old: str,
    new: str,
    files: list[str],
    *,
    tool: str = "ast-grep",
    language: str = "python",
) -> str:
    """Build the structural-rewrite command for one rename."""
    argv = [
        tool,
        "run",
        "--lang",
        language,
        "--pattern",
        f"{root_identifier}.{old}",
        "--rewrite",
        f"{root_identifier}.{new}",
        "--update-all",
        *files,
    ]
    return shlex.join(argv)


def _echo(text: str) -> str:
    return f"echo {shlex.quote(text)}" if text else 'echo ""'


def render_script(report: RenameReport) -> str:
    """Render a bash script that shows the commands, or runs them with --apply."""
    lines = ["#!/usr/bin/env bash", "set -euo pipefail", ""]

    if not report.broken_refs:
        lines.append(_echo("No broken registry references found."))
        return "\n".join(lines) + "\n"

    if report.suggestions:
        lines.append(_echo("Detected renames:"))
        lines.extend(
            _echo(f"  {old} -> {new}") for old, new in report.suggestions.items()
        )
        lines.append(_echo(""))
    if report.unresolved:
        lines.append(_echo("Unresolved references (no automatic fix):"))
        lines.extend(
            _echo(f"  {path} ({reason})") for path, reason in report.unresolved.items()
        )
        lines.append(_echo(""))
    if not report.commands:
        return "\n".join(lines) + "\n"

    lines.append(_echo("Affected files:"))
    lines.extend(_echo(f"  {path}") for path in report.affected_files)
    lines.append(_echo(""))

    lines.append('if [[ "${1:-}" == "--apply" ]]; then')
    lines.extend(f"  {command}" for command in report.commands)
    lines.append(f"  {_echo('Applied ' + str(len(report.commands)) + ' rewrite(s).')}")
    lines.append("else")
    lines.append(f"  {_echo('Commands to apply:')}")
    lines.extend(f"  {_echo('  ' + command)}" for command in report.commands)
    lines.append(f"  {_echo('')}")
    lines.append(f"  {_echo('Run with --apply to execute these commands.')}")
    lines.append("fi")
    return "\n".join(lines) + "\n"
