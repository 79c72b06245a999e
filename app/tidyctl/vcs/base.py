"""Abstract base class for version-control backends.

This module defines the VcsBackend interface the status normalizer
queries for dirty files and the current branch.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from tidyctl.models.status import RepositorySnapshot, RepositoryStatusEntry


class VcsError(Exception):
    """Raised when a version-control query fails."""


class NotARepositoryError(VcsError):
    """Raised when a path is not inside a valid working tree."""


class VcsBackend(ABC):
    """Abstract base class for version-control backends.

    Example:
        >>> backend = GitBackend()
        >>> if backend.is_valid_working_tree(root):
        ...     snapshot = backend.get_status(root)
        ...     print(snapshot.branch, len(snapshot.entries))
    """

    @abstractmethod
    def is_valid_working_tree(self, path: Path) -> bool:
        """Check if ``path`` lies inside a version-controlled working tree."""

    @abstractmethod
    def get_status_entries(self, path: Path) -> list[RepositoryStatusEntry]:
        """Return every dirty file in the working tree.

        A file reported under several classifications yields one entry
        per classification.

        Raises:
            NotARepositoryError: If ``path`` is not a working tree.
            VcsError: If the status query fails.
        """

    @abstractmethod
    def get_current_branch_name(self, path: Path) -> str:
        """Return the friendly name of the checked-out branch.

        Raises:
            NotARepositoryError: If ``path`` is not a working tree.
            VcsError: If the query fails.
        """

    def get_root(self, path: Path) -> Path:
        """Return the working tree root containing ``path``.

        Backends that can locate the top level should override this; the
        default treats ``path`` itself as the root.
        """
        return path.resolve()

    def get_status(self, path: Path) -> RepositorySnapshot:
        """Query status and branch in one call.

        Args:
            path: Working tree root (or a path inside it).

        Returns:
            RepositorySnapshot with the branch name lower-cased.

        Raises:
            NotARepositoryError: If ``path`` is not a working tree.
            VcsError: If a query fails.
        """
        if not self.is_valid_working_tree(path):
            msg = f"Not a version-controlled working tree: {path}"
            raise NotARepositoryError(msg)

        root = self.get_root(path)
        return RepositorySnapshot(
            root=str(root),
            branch=self.get_current_branch_name(root).lower(),
            entries=tuple(self.get_status_entries(root)),
        )
