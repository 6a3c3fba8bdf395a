"""Logic for merging collected exports into a nested sink tree."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from impkit.collect_exports import collect_exports
from impkit.deep_merge import deep_merge
from impkit.errors import InvalidStrategyError, SinkConflictError
from impkit.export_record import ExportRecord, Strategy
from impkit.merge_strategies import EMPTY, REDUCERS, finalize
from impkit.naming_rules import NamingRules
from impkit.sink_defaults import SinkRule, compile_sink_defaults, find_default_strategy

logger = logging.getLogger(__name__)

SINK_VALUE_KEY = "__module"
SINK_META_KEY = "__meta"


@dataclass(frozen=True)
class Sink:
    """The merged result for one sink key."""

    key: str
    value: Any
    contributors: list[str]
    strategy: Strategy

    def as_tree_value(self, *, enable_debug: bool) -> Any:
        """Return what gets placed at the sink's position in the tree."""
        if not enable_debug:
            return self.value
        return {
            SINK_VALUE_KEY: self.value,
            SINK_META_KEY: {
                "contributors": list(self.contributors),
                "strategy": self.strategy.value,
            },
        }


def effective_strategy(
    sink_key: str, record: ExportRecord, rules: list[SinkRule]
) -> Strategy:
    """Resolve a record's strategy: explicit, then sink default, then override."""
    raw = record.strategy
    if raw is None:
        raw = find_default_strategy(sink_key, rules)
    if raw is None:
        return Strategy.OVERRIDE
    try:
        return Strategy(raw)
    except ValueError:
        raise InvalidStrategyError(sink_key, record.source, raw) from None


def build_sink(
    sink_key: str, records: Iterable[ExportRecord], rules: list[SinkRule]
) -> Sink:
    """Merge all records for one sink key.

    Records are ordered by source first, so the result does not depend on
    collection order.
    """
    ordered = sorted(records, key=lambda r: r.source)
    resolved = [(r, effective_strategy(sink_key, r, rules)) for r in ordered]

    strategies = list(dict.fromkeys(s for _, s in resolved))
    if len(strategies) > 1:
        raise SinkConflictError(
            sink_key, [(r.source, s.value) for r, s in resolved]
        )
    strategy = strategies[0] if strategies else Strategy.OVERRIDE

    reducer = REDUCERS[strategy]
    acc: Any = EMPTY
    for record, _ in resolved:
        acc = reducer(acc, record)

    return Sink(
        key=sink_key,
        value=finalize(strategy, acc),
        contributors=[r.source for r in ordered],
        strategy=strategy,
    )


def build_export_sinks(
    collected: Mapping[str, Iterable[ExportRecord]],
    sink_defaults: Mapping[str, str] | None = None,
    *,
    enable_debug: bool = True,
) -> dict[str, Any]:
    """Build the nested sink tree from collected export records.

    Each sink key is split on "." and its value placed at that path. With
    ``enable_debug`` every sink leaf is wrapped with its contributors and
    strategy; intermediate nodes never carry metadata.
    """
    rules = compile_sink_defaults(sink_defaults or {})
    tree: dict[str, Any] = {}
    for sink_key in sorted(collected):
        sink = build_sink(sink_key, collected[sink_key], rules)
        logger.debug(
            "Built sink %s from %d contributor(s) using %s",
            sink_key,
            len(sink.contributors),
            sink.strategy.value,
        )
        leaf = sink.as_tree_value(enable_debug=enable_debug)
        nested = _nest(sink_key.split("."), leaf)
        tree = deep_merge(tree, nested)
    return tree


def export_sinks(
    path_or_paths: Path | str | Iterable[Path | str],
    sink_defaults: Mapping[str, str] | None = None,
    *,
    enable_debug: bool = True,
    rules: NamingRules | None = None,
) -> dict[str, Any]:
    """Collect exports under the given paths and build their sink tree."""
    collected = collect_exports(path_or_paths, rules)
    return build_export_sinks(collected, sink_defaults, enable_debug=enable_debug)


def _nest(segments: list[str], value: Any) -> dict[str, Any]:
    node: Any = value
    for segment in reversed(segments):
        node = {segment: node}
    return node
