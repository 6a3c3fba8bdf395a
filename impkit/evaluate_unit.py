"""Per-unit fault boundary for export collection."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from impkit.export_record import ExportRecord
from impkit.load_unit import load_unit
from impkit.unit import classify_unit

logger = logging.getLogger(__name__)


@dataclass
class UnitResult:
    """Records produced by one unit, or the reason it was skipped."""

    records: list[ExportRecord] = field(default_factory=list)
    skipped: str | None = None


def evaluate_unit(path: Path) -> UnitResult:
    """Evaluate one unit file and extract its export records.

    Never raises for problems inside the unit: evaluation errors, values
    that are not structured, and missing or malformed ``__exports__`` all
    produce a skipped result.
    """
    try:
        value = load_unit(path)
    except (Exception, SystemExit) as exc:
        return _skip(path, f"evaluation failed: {exc!r}")

    unit = classify_unit(value)
    if unit is None:
        return _skip(path, f"not a structured value ({type(value).__name__})")

    exports = unit.exports
    if exports is None:
        return _skip(path, "no export declarations")
    if not isinstance(exports, Mapping):
        return _skip(path, f"__exports__ is {type(exports).__name__}, not a mapping")

    source = str(path)
    records = [
        ExportRecord(str(sink_key), *normalize_export_entry(entry), source=source)
        for sink_key, entry in exports.items()
    ]
    return UnitResult(records=records)


def normalize_export_entry(entry: Any) -> tuple[Any, str | None]:
    """Split an export entry into ``(value, strategy)``.

    ``{"value": v, "strategy": s}`` keeps its strategy; anything else is a
    bare value with no strategy.
    """
    if isinstance(entry, Mapping) and "value" in entry:
        return entry["value"], entry.get("strategy")
    return entry, None


def _skip(path: Path, reason: str) -> UnitResult:
    logger.debug("Skipping %s: %s", path, reason)
    return UnitResult(skipped=reason)
