"""Naming rules that turn filesystem entries into registry segments."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NamingRules:
    """How file and directory names map to logical path segments."""

    suffix: str = ".py"
    marker: str = "__init__.py"
    escape: str = "_"
    hidden_prefix: str = "_"

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "NamingRules":
        """Build naming rules from the ``naming`` section of a config."""
        naming = config.get("naming") or {}
        return cls(
            suffix=naming.get("suffix", cls.suffix),
            marker=naming.get("marker", cls.marker),
            escape=naming.get("escape", cls.escape),
            hidden_prefix=naming.get("hidden_prefix", cls.hidden_prefix),
        )

    def is_hidden(self, name: str) -> bool:
        """Check if an entry is excluded from the registry entirely.

        Dot-prefixed entries (".git", ".venv") are always hidden.
        """
        if name.startswith("."):
            return True
        return bool(self.hidden_prefix) and name.startswith(self.hidden_prefix)

    def is_unit(self, name: str) -> bool:
        """Check if a file name carries the unit suffix."""
        return name.endswith(self.suffix)
