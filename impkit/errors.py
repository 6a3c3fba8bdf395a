"""Exceptions raised when export sinks cannot be built."""


class ImpError(ValueError):
    """Base class for fatal registry and sink errors."""


class InvalidStrategyError(ImpError):
    """An export declares a strategy name that is not recognized."""

    def __init__(self, sink_key: str, source: str, strategy: object) -> None:
        """Record the offending sink key, source and strategy."""
        self.sink_key = sink_key
        self.source = source
        self.strategy = strategy
        super().__init__(
            f"invalid strategy {strategy!r} for sink '{sink_key}' in {source}"
        )


class SinkConflictError(ImpError):
    """Contributors to one sink resolve to different strategies."""

    def __init__(self, sink_key: str, contributors: list[tuple[str, str]]) -> None:
        """Record the sink key and each (source, strategy) contributor."""
        self.sink_key = sink_key
        self.contributors = contributors
        lines = [f"conflicting strategies for sink '{sink_key}'", "Contributors:"]
        lines.extend(
            f"  - {source} (strategy: {strategy})" for source, strategy in contributors
        )
        lines.append("")
        lines.append("All exports to the same sink must use the same strategy.")
        super().__init__("\n".join(lines))


class ListAppendError(ImpError):
    """A list-append sink received a value that is not a list."""

    def __init__(self, sink_key: str, source: str, value: object) -> None:
        """Record the sink key, source and the rejected value's type."""
        self.sink_key = sink_key
        self.source = source
        super().__init__(
            f"list-append strategy for sink '{sink_key}' requires list values, "
            f"got {type(value).__name__} from {source}"
        )
