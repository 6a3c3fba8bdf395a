"""Data models for collected export declarations."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Strategy(str, Enum):
    """Merge policies a sink can use."""

    MERGE = "merge"
    OVERRIDE = "override"
    LIST_APPEND = "list-append"
    MK_MERGE = "mkMerge"


@dataclass(frozen=True)
class ExportRecord:
    """One value a unit exports into a named sink."""

    sink_key: str
    value: Any
    strategy: str | None  # None means "use the sink default"
    source: str
