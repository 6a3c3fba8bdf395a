"""Logic for proposing replacements for broken registry paths."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum


class RenameReason(str, Enum):
    """Why a broken path did or did not get a suggestion."""

    EXPLICIT = "explicit"
    UNIQUE_LEAF = "unique-leaf"
    AMBIGUOUS = "ambiguous"
    NO_MATCH = "no-match"


@dataclass(frozen=True)
class RenameSuggestion:
    """A broken path and its proposed replacement, if any."""

    broken: str
    replacement: str | None
    reason: RenameReason
    candidates: tuple[str, ...] = field(default_factory=tuple)


def leaf_name(dotted: str) -> str:
    """Return the final segment of a dotted path."""
    return dotted.rsplit(".", 1)[-1]


def apply_rename_map(broken: str, rename_map: Mapping[str, str]) -> str | None:
    """Substitute the longest prefix of ``broken`` found in ``rename_map``.

    Prefixes only match on segment boundaries: "home" matches "home.alice"
    but not "homes.alice".
    """
    best: str | None = None
    for old in rename_map:
        if broken == old or broken.startswith(old + "."):
            if best is None or len(old) > len(best):
                best = old
    if best is None:
        return None
    return rename_map[best] + broken[len(best) :]


def classify_rename(
    current_paths: Iterable[str],
    broken: str,
    rename_map: Mapping[str, str] | None = None,
) -> RenameSuggestion:
    """Decide the replacement for a broken path and the reason for it.

    An explicit rename map wins outright. Otherwise the path's leaf name is
    matched against the leaf names of ``current_paths``; only a unique
    match is suggested.
    """
    if rename_map:
        explicit = apply_rename_map(broken, rename_map)
        if explicit is not None:
            return RenameSuggestion(broken, explicit, RenameReason.EXPLICIT)

    leaf = leaf_name(broken)
    candidates = tuple(sorted({p for p in current_paths if leaf_name(p) == leaf}))
    if len(candidates) == 1:
        return RenameSuggestion(
            broken, candidates[0], RenameReason.UNIQUE_LEAF, candidates
        )
    if candidates:
        return RenameSuggestion(broken, None, RenameReason.AMBIGUOUS, candidates)
    return RenameSuggestion(broken, None, RenameReason.NO_MATCH)


def suggest_new_path(
    current_paths: Iterable[str],
    broken: str,
    rename_map: Mapping[str, str] | None = None,
) -> str | None:
    """Return the suggested replacement for ``broken``, or None if unresolved."""
    return classify_rename(current_paths, broken, rename_map).replacement
