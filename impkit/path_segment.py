"""Utility for deriving a registry segment from a raw entry name."""

from impkit.naming_rules import NamingRules


def path_segment(name: str, rules: NamingRules) -> str:
    """Convert a file or directory name into a logical path segment.

    - The unit suffix is dropped if present (``git.py`` -> ``git``).
    - Then one trailing escape character is dropped (``class_.py`` -> ``class``).
    """
    if rules.suffix and name.endswith(rules.suffix):
        name = name[: -len(rules.suffix)]
    if rules.escape and name.endswith(rules.escape):
        name = name[: -len(rules.escape)]
    return name
