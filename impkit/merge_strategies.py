"""Binary reducers for each sink merge strategy."""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from impkit.deep_merge import deep_merge
from impkit.errors import ListAppendError
from impkit.export_record import ExportRecord, Strategy


class _Empty:
    """Neutral seed for every fold."""

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = _Empty()

Reducer = Callable[[Any, ExportRecord], Any]


@dataclass(frozen=True)
class ModuleGroup:
    """Deferred configuration fragments applied in order when called."""

    imports: tuple[Callable[..., Any], ...]

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return _compose(fragment(*args, **kwargs) for fragment in self.imports)


@dataclass(frozen=True)
class MkMerge:
    """Contributions kept for override-style composition by the consumer."""

    contents: tuple[Any, ...]

    def resolve(self, *args: Any, **kwargs: Any) -> Any:
        """Compose the contents in order, calling callables with the given args."""
        return _compose(
            item(*args, **kwargs) if callable(item) else item for item in self.contents
        )


def _compose(values: Any) -> Any:
    result: Any = EMPTY
    for value in values:
        if isinstance(result, Mapping) and isinstance(value, Mapping):
            result = deep_merge(result, value)
        else:
            result = value
    return None if result is EMPTY else result


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def reduce_override(acc: Any, record: ExportRecord) -> Any:
    """Each new value fully replaces the accumulator."""
    return record.value


def reduce_merge(acc: Any, record: ExportRecord) -> Any:
    """Deep-merge mappings; anything else replaces the accumulator."""
    if isinstance(acc, Mapping) and isinstance(record.value, Mapping):
        return deep_merge(acc, record.value)
    return record.value


def reduce_list_append(acc: Any, record: ExportRecord) -> Any:
    """Concatenate sequences in record order."""
    if not _is_sequence(record.value):
        raise ListAppendError(record.sink_key, record.source, record.value)
    if acc is EMPTY:
        return list(record.value)
    return [*acc, *record.value]


def reduce_mk_merge(acc: Any, record: ExportRecord) -> Any:
    """Collect contributions into an ordered tuple."""
    if acc is EMPTY:
        return (record.value,)
    return (*acc, record.value)


REDUCERS: dict[Strategy, Reducer] = {
    Strategy.OVERRIDE: reduce_override,
    Strategy.MERGE: reduce_merge,
    Strategy.LIST_APPEND: reduce_list_append,
    Strategy.MK_MERGE: reduce_mk_merge,
}


def finalize(strategy: Strategy, acc: Any) -> Any:
    """Turn a folded accumulator into the sink's value."""
    if acc is EMPTY:
        return None
    if strategy is Strategy.MK_MERGE:
        if all(callable(v) for v in acc):
            return ModuleGroup(tuple(acc))
        return MkMerge(tuple(acc))
    return acc
