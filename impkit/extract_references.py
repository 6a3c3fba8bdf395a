"""Logic for finding registry references in source text."""

import re
from functools import lru_cache


@lru_cache(maxsize=None)
def reference_pattern(root_identifier: str) -> re.Pattern[str]:
    """Compile the scanner pattern for a registry root identifier.

    The match is zero-width (a lookahead), so references nested inside or
    overlapping an earlier match on the same line are still found.
    """
    root = re.escape(root_identifier)
    return re.compile(rf"(?<!\w)(?={root}\.(\w+(?:\.\w+)*))")


def extract_references(root_identifier: str, text: str) -> list[str]:
    """Return every dotted path following ``root_identifier.`` in ``text``.

    This is a textual scan, not a parse: matches inside comments and string
    literals are included. Order is top to bottom, left to right.
    """
    pattern = reference_pattern(root_identifier)
    refs: list[str] = []
    for line in text.splitlines():
        refs.extend(m.group(1) for m in pattern.finditer(line))
    return refs
