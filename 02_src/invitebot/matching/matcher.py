"""Name matcher: resolves free-text name fragments against the directory."""

from typing import Iterable, Sequence

from ..models import DirectoryEntry, MatchResult


def split_fragments(text: str) -> list[str]:
    """Split comma separated input into trimmed fragments."""
    return [fragment.strip() for fragment in text.split(",")]


def find_entry(fragment: str, directory: Sequence[DirectoryEntry]) -> DirectoryEntry | None:
    """Return the first entry whose handle or display name contains the fragment."""
    needle = fragment.strip().lower()
    for entry in directory:
        if needle in entry.handle.lower() or needle in entry.display_name.lower():
            return entry
    return None


def match(fragments: Iterable[str], directory: Sequence[DirectoryEntry]) -> MatchResult:
    """
    Resolve each fragment to a directory entry.

    First match wins, in directory order. Fragments are not deduplicated,
    so two fragments can resolve to the same entry. The directory is
    expected to be pre-filtered (no bots, no deactivated accounts) and is
    never modified.

    Args:
        fragments: Name fragments as typed by the user.
        directory: Snapshot of active directory entries.

    Returns:
        MatchResult with matched (id, display_name) pairs in input order,
        unmatched fragments, and every valid display name.
    """
    snapshot = tuple(directory)
    result = MatchResult(all_display_names=[entry.display_name for entry in snapshot])

    for fragment in fragments:
        trimmed = fragment.strip()
        entry = find_entry(trimmed, snapshot)
        if entry is None:
            result.unmatched.append(trimmed)
        else:
            result.matched.append((entry.id, entry.display_name))

    return result
