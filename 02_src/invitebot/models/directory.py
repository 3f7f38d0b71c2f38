"""Directory-related data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DirectoryEntry:
    """An addressable human account in the workspace directory."""

    id: str
    handle: str
    display_name: str


@dataclass
class MatchResult:
    """Outcome of resolving name fragments against a directory snapshot."""

    matched: list[tuple[str, str]] = field(default_factory=list)  # (id, display_name)
    unmatched: list[str] = field(default_factory=list)
    all_display_names: list[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.unmatched

    @property
    def ids(self) -> list[str]:
        return [entry_id for entry_id, _ in self.matched]

    @property
    def names(self) -> list[str]:
        return [name for _, name in self.matched]
