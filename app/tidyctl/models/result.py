"""Cleanup result models.

This module defines data structures describing the outcome of a
cleanup run, both overall and per file.
"""

from dataclasses import dataclass, field
from enum import Enum


class FormatOutcome(Enum):
    """Result of running the formatting action on the active document."""

    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def ok(self) -> bool:
        """Check if the formatting action succeeded."""
        return self is FormatOutcome.SUCCESS


class CleanupStatus(Enum):
    """Overall status of a cleanup run.

    Attributes:
        NOT_A_REPOSITORY: No working tree could be resolved; nothing done.
        NO_PENDING_CHANGES: The working tree is clean; nothing done.
        STATUS_UNAVAILABLE: The status query failed; nothing done.
        COMPLETED: Candidates were selected and processed.
    """

    NOT_A_REPOSITORY = "not_a_repository"
    NO_PENDING_CHANGES = "no_pending_changes"
    STATUS_UNAVAILABLE = "status_unavailable"
    COMPLETED = "completed"


class FileOutcome(Enum):
    """What happened to one candidate file.

    Attributes:
        FORMATTED: Formatting succeeded; the buffer was saved if dirty.
        FORMAT_FAILED: Formatting failed; the buffer was not saved.
        UNRESOLVED: The file could not be opened as a document.
        UP_TO_DATE: Already formatted since its last on-disk change.
        EXCLUDED: Rejected by the filter policy.
        PENDING: Selected for formatting (dry runs only).
    """

    FORMATTED = "formatted"
    FORMAT_FAILED = "format_failed"
    UNRESOLVED = "unresolved"
    UP_TO_DATE = "up_to_date"
    EXCLUDED = "excluded"
    PENDING = "pending"


@dataclass(frozen=True, slots=True)
class FileCleanupResult:
    """Outcome for one candidate file.

    Attributes:
        path: Normalized absolute path.
        outcome: What happened to the file.
        detail: Optional human-readable explanation.
    """

    path: str
    outcome: FileOutcome
    detail: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        """Convert to a JSON-serializable dictionary."""
        return {"path": self.path, "outcome": self.outcome.value, "detail": self.detail}


@dataclass(slots=True)
class CleanupReport:
    """Summary of one cleanup run.

    Attributes:
        status: Overall status of the run.
        root: Working tree root, if one was resolved.
        branch: Branch name the run was attributed to.
        files: Per-file results in processing order.
        dry_run: Whether documents were left untouched.
    """

    status: CleanupStatus
    root: str | None = None
    branch: str | None = None
    files: list[FileCleanupResult] = field(default_factory=list)
    dry_run: bool = False

    def with_outcome(self, outcome: FileOutcome) -> list[FileCleanupResult]:
        """Return the file results that ended with ``outcome``."""
        return [f for f in self.files if f.outcome == outcome]

    @property
    def formatted_count(self) -> int:
        """Number of files formatted successfully."""
        return len(self.with_outcome(FileOutcome.FORMATTED))

    @property
    def failed_count(self) -> int:
        """Number of files whose formatting failed."""
        return len(self.with_outcome(FileOutcome.FORMAT_FAILED))

    def to_dict(self) -> dict[str, object]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "status": self.status.value,
            "root": self.root,
            "branch": self.branch,
            "dry_run": self.dry_run,
            "files": [f.to_dict() for f in self.files],
        }
