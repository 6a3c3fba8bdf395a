"""Classification of evaluated units into the shapes the collector understands."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

EXPORTS_ATTR = "__exports__"
CALL_ATTR = "__call__"


@dataclass(frozen=True)
class ValueUnit:
    """A plain structured value, read directly."""

    value: Mapping[str, Any]

    @property
    def exports(self) -> Any:
        return self.value.get(EXPORTS_ATTR)


@dataclass(frozen=True)
class DeferredUnit:
    """A callable that needs external context; never invoked by the collector."""

    fn: Callable[..., Any]

    @property
    def exports(self) -> Any:
        return None


@dataclass(frozen=True)
class SelfDescribingUnit:
    """A callable that also declares its exports without being invoked."""

    declared: Any
    fn: Callable[..., Any]

    @property
    def exports(self) -> Any:
        return self.declared


Unit = ValueUnit | DeferredUnit | SelfDescribingUnit


def classify_unit(value: object) -> Unit | None:
    """Classify an evaluated unit, or return None if it is not structured.

    A mapping that defines a callable ``__call__`` entry (a module with a
    module-level ``__call__`` function) is treated like a callable object.
    """
    if isinstance(value, Mapping):
        fn = value.get(CALL_ATTR)
        if not callable(fn):
            return ValueUnit(value)
        if EXPORTS_ATTR in value:
            return SelfDescribingUnit(value[EXPORTS_ATTR], fn)
        return DeferredUnit(fn)
    if callable(value):
        if hasattr(value, EXPORTS_ATTR):
            return SelfDescribingUnit(getattr(value, EXPORTS_ATTR), value)
        return DeferredUnit(value)
    return None
