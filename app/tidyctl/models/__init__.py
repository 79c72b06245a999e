"""Data models for tidyctl.

This module exports the core data structures used throughout the application.
"""

from tidyctl.models.result import (
    CleanupReport,
    CleanupStatus,
    FileCleanupResult,
    FileOutcome,
    FormatOutcome,
)
from tidyctl.models.status import (
    CandidateFileSet,
    RepositorySnapshot,
    RepositoryStatusEntry,
    StatusClassification,
)

__all__ = [
    "CandidateFileSet",
    "CleanupReport",
    "CleanupStatus",
    "FileCleanupResult",
    "FileOutcome",
    "FormatOutcome",
    "RepositorySnapshot",
    "RepositoryStatusEntry",
    "StatusClassification",
]
