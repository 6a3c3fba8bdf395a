"""Logic for evaluating a unit file into a Python value."""

import json
import runpy
from pathlib import Path
from typing import Any

import yaml

YAML_SUFFIXES = {".yml", ".yaml"}


def load_unit(path: Path) -> Any:
    """Evaluate a unit file.

    Python files run in a fresh namespace and evaluate to that namespace.
    YAML and JSON documents evaluate to their parsed content. Errors from
    evaluation propagate to the caller.
    """
    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    if suffix == ".json":
        return json.loads(path.read_text(encoding="utf-8"))
    return runpy.run_path(str(path), run_name=f"impkit.unit.{path.stem}")
