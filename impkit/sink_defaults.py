"""Logic for resolving default merge strategies from sink key patterns."""

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class SinkRule:
    """A sink key pattern and the strategy it assigns."""

    pattern: str
    strategy: str

    @property
    def is_glob(self) -> bool:
        return self.pattern.endswith("*")

    @property
    def prefix(self) -> str:
        # "nixos.*" -> "nixos.", "nixos*" -> "nixos"
        return self.pattern[:-1] if self.is_glob else self.pattern

    def matches(self, sink_key: str) -> bool:
        """Check if the rule applies to a sink key."""
        if self.is_glob:
            return sink_key.startswith(self.prefix)
        return sink_key == self.pattern


def compile_sink_defaults(sink_defaults: Mapping[str, str]) -> list[SinkRule]:
    """Turn a pattern -> strategy mapping into ordered rules.

    Rules are evaluated first-match-wins. They are ordered most specific
    first: exact keys, then globs by descending prefix length. Ties keep
    their declaration order.
    """
    rules = [SinkRule(pattern, strategy) for pattern, strategy in sink_defaults.items()]
    return sorted(rules, key=lambda r: (r.is_glob, -len(r.prefix)))


def find_default_strategy(sink_key: str, rules: list[SinkRule]) -> str | None:
    """Return the strategy of the first rule matching ``sink_key``, if any."""
    for rule in rules:
        if rule.matches(sink_key):
            return rule.strategy
    return None
