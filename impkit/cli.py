"""Command line entry point for registry, export and migration tooling."""

import argparse
import json
import logging
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Any

from impkit.analyze_registry import analyze_registry
from impkit.build_export_sinks import export_sinks
from impkit.build_registry import build_registry
from impkit.compute_config_hash import compute_config_hash
from impkit.detect_renames import detect_renames
from impkit.errors import ImpError
from impkit.flatten_paths import flatten_paths
from impkit.load_config import load_config
from impkit.naming_rules import NamingRules
from impkit.registry_node import RegistryNode

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNRESOLVED = 3

# Config sections that can change a migration report.
MIGRATE_SECTIONS = ("naming", "registry", "migrate")


def run_command(command: str) -> None:
    """Run one rewrite command, failing loudly if it does not succeed."""
    print(f"Running: {command}")
    subprocess.run(shlex.split(command), check=True)


def _require_path(path: Path) -> Path:
    if not path.exists():
        msg = f"Path does not exist: {path}"
        raise SystemExit(msg)
    return path


def _registry_from(config: dict[str, Any], root: Path) -> RegistryNode:
    return build_registry(
        _require_path(root),
        NamingRules.from_config(config),
        overrides=config["registry"].get("overrides") or None,
    )


def _parse_rename(values: list[str]) -> dict[str, str]:
    rename_map: dict[str, str] = {}
    for value in values:
        old, sep, new = value.partition("=")
        if not sep or not old or not new:
            msg = f"--rename expects OLD=NEW, got: {value}"
            raise SystemExit(msg)
        rename_map[old] = new
    return rename_map


def cmd_paths(args: argparse.Namespace, config: dict[str, Any]) -> int:
    """Print every registry path."""
    registry = _registry_from(config, args.root)
    for dotted in flatten_paths(registry):
        print(dotted)
    return EXIT_OK


def cmd_exports(args: argparse.Namespace, config: dict[str, Any]) -> int:
    """Print the merged sink tree as JSON."""
    for path in args.paths:
        _require_path(path)
    exports_cfg = config["exports"]
    tree = export_sinks(
        args.paths,
        exports_cfg.get("sink_defaults") or {},
        enable_debug=exports_cfg.get("debug", True) and not args.no_debug,
        rules=NamingRules.from_config(config),
    )
    print(json.dumps(tree, indent=2, sort_keys=True, default=repr))
    return EXIT_OK


def cmd_migrate(args: argparse.Namespace, config: dict[str, Any]) -> int:
    """Report broken registry references and optionally rewrite them."""
    migrate_cfg = config["migrate"]
    registry = _registry_from(config, args.registry)
    rename_map = dict(migrate_cfg.get("rename_map") or {})
    rename_map.update(_parse_rename(args.rename))

    report = detect_renames(
        registry,
        args.paths,
        rename_map,
        root=Path.cwd(),
        root_identifier=config["registry"]["name"],
        suffix=config["naming"]["suffix"],
        rewrite_tool=migrate_cfg["rewrite_tool"],
        language=migrate_cfg["language"],
    )

    if args.report:
        data = {
            "meta": {
                "config_hash": compute_config_hash(config, MIGRATE_SECTIONS)
            },
            **report.to_dict(),
        }
        Path(args.report).write_text(json.dumps(data, indent=2), encoding="utf-8")

    if args.script:
        print(report.script, end="")
    elif not report.broken_refs:
        print("No broken registry references found.")
    else:
        for old, new in report.suggestions.items():
            print(f"{old} -> {new}")
        for path, reason in report.unresolved.items():
            print(f"{path}: no automatic fix ({reason})")

    if args.apply:
        for command in report.commands:
            try:
                run_command(command)
            except subprocess.CalledProcessError as e:
                print(f"Error executing command: {command}", file=sys.stderr)
                return e.returncode or EXIT_ERROR

    return EXIT_UNRESOLVED if report.needs_manual_fix else EXIT_OK


def cmd_graph(args: argparse.Namespace, config: dict[str, Any]) -> int:
    """Print the registry dependency graph as JSON."""
    registry = _registry_from(config, args.root)
    graph = analyze_registry(
        registry,
        root_identifier=config["registry"]["name"],
        suffix=config["naming"]["suffix"],
    )
    print(json.dumps(graph, indent=2))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="impkit",
        description="Registry paths, export sinks and registry migration tooling.",
    )
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_paths = sub.add_parser("paths", help="List registry paths")
    p_paths.add_argument("root", type=Path, help="Registry root directory")
    p_paths.set_defaults(func=cmd_paths)

    p_exports = sub.add_parser("exports", help="Build export sinks")
    p_exports.add_argument("paths", type=Path, nargs="+", help="Files or directories")
    p_exports.add_argument(
        "--no-debug",
        action="store_true",
        help="Omit contributor metadata from sink leaves",
    )
    p_exports.set_defaults(func=cmd_exports)

    p_migrate = sub.add_parser("migrate", help="Detect renamed registry paths")
    p_migrate.add_argument(
        "--registry", type=Path, required=True, help="Current registry root"
    )
    p_migrate.add_argument("paths", type=Path, nargs="+", help="Sources to scan")
    p_migrate.add_argument(
        "--rename",
        action="append",
        default=[],
        metavar="OLD=NEW",
        help="Explicit prefix rename (repeatable)",
    )
    p_migrate.add_argument(
        "--apply", action="store_true", help="Run the rewrite commands"
    )
    p_migrate.add_argument("--report", help="Write the report as JSON to this file")
    p_migrate.add_argument(
        "--script", action="store_true", help="Print the migration script"
    )
    p_migrate.set_defaults(func=cmd_migrate)

    p_graph = sub.add_parser("graph", help="Analyze registry references")
    p_graph.add_argument("root", type=Path, help="Registry root directory")
    p_graph.set_defaults(func=cmd_graph)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.config)
    try:
        return args.func(args, config)
    except ImpError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
