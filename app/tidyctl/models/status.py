"""Repository status models.

This module defines the data structures produced by version-control
backends and consumed by the status normalizer.
"""

from dataclasses import dataclass, field
from enum import Enum


class StatusClassification(Enum):
    """Classification of a dirty file in a status snapshot.

    Attributes:
        STAGED: Change recorded in the index.
        UNTRACKED: File unknown to version control.
        ADDED: File newly added to the index (or marked intent-to-add).
        MODIFIED: Working-tree content differs from the index.
    """

    STAGED = "staged"
    UNTRACKED = "untracked"
    ADDED = "added"
    MODIFIED = "modified"


@dataclass(frozen=True, slots=True)
class RepositoryStatusEntry:
    """A single file reported by a status query.

    Attributes:
        path: Path relative to the working tree root, as reported.
        classification: Which status bucket the file falls under.
    """

    path: str
    classification: StatusClassification

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.path:
            msg = "Status entry path cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class RepositorySnapshot:
    """Result of one status query against a working tree.

    A file may appear under several classifications, in which case it
    has one entry per classification.

    Attributes:
        root: Absolute working tree root the entries are relative to.
        branch: Friendly branch name, lower-cased.
        entries: Every status entry in the snapshot.
    """

    root: str
    branch: str
    entries: tuple[RepositoryStatusEntry, ...] = field(default=())

    @property
    def is_dirty(self) -> bool:
        """Check if the working tree has any pending changes."""
        return bool(self.entries)

    def paths_for(self, classification: StatusClassification) -> list[str]:
        """Return the paths reported under one classification."""
        return [e.path for e in self.entries if e.classification == classification]


@dataclass(frozen=True, slots=True)
class CandidateFileSet:
    """Normalized set of dirty files for one run.

    Keys are absolute, lower-cased paths used for identity and cache
    lookups. Each key maps to the file's real location on disk, which is
    what gets opened and stat'ed on case-sensitive filesystems.

    Attributes:
        root: Absolute working tree root.
        branch: Friendly branch name, lower-cased.
        locations: Normalized path -> absolute on-disk path.
    """

    root: str
    branch: str
    locations: dict[str, str] = field(default_factory=dict)

    @property
    def paths(self) -> frozenset[str]:
        """Normalized paths, without duplicates."""
        return frozenset(self.locations)

    def location_of(self, path: str) -> str:
        """Return the on-disk path for a normalized path."""
        return self.locations[path]

    def __len__(self) -> int:
        return len(self.locations)

    def __contains__(self, path: object) -> bool:
        return path in self.locations
