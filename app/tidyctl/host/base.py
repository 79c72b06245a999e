"""Abstract base class for host editors.

This module defines the HostEditor interface: the document operations a
cleanup run needs from whatever application holds the open buffers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from tidyctl.core.status import normalize_path
from tidyctl.models.result import FormatOutcome


class DocumentResolutionError(Exception):
    """Raised when a file cannot be opened as a document."""


@dataclass(frozen=True, slots=True)
class DocumentHandle:
    """Reference to an open document.

    Attributes:
        path: Location of the document on disk.
    """

    path: str

    @property
    def key(self) -> str:
        """Normalized identity of the document."""
        return normalize_path(self.path)


class HostEditor(ABC):
    """Abstract base class for host editors.

    Hosts own the document model. A cleanup run opens, focuses, formats,
    saves and closes documents only through these operations.

    Example:
        >>> host = WorkspaceHost(root, formatter_config)
        >>> handle = host.open_document("/repo/Program.cs")
        >>> host.activate_document(handle)
        >>> if host.run_formatting_action().ok:
        ...     host.save_document_if_dirty(handle)
    """

    @abstractmethod
    def get_working_tree_root(self) -> Path | None:
        """Return the root of the active solution or project, if any."""

    @abstractmethod
    def save_all_open_documents(self) -> None:
        """Write every open document with unsaved changes to disk."""

    @abstractmethod
    def list_open_documents(self) -> list[DocumentHandle]:
        """Return handles for every open document."""

    @abstractmethod
    def get_open_document(self, path: str) -> DocumentHandle | None:
        """Return the open document for ``path``, or None if not open."""

    @abstractmethod
    def open_document(self, path: str) -> DocumentHandle:
        """Open ``path`` in a new document.

        Raises:
            DocumentResolutionError: If the file cannot be opened.
        """

    @abstractmethod
    def activate_document(self, handle: DocumentHandle) -> None:
        """Give ``handle`` focus."""

    @abstractmethod
    def close_document(self, handle: DocumentHandle) -> None:
        """Close ``handle`` without saving."""

    @abstractmethod
    def save_document_if_dirty(self, handle: DocumentHandle) -> bool:
        """Save ``handle`` if it has unsaved changes.

        Returns:
            True if the document was written.
        """

    @abstractmethod
    def run_formatting_action(self) -> FormatOutcome:
        """Run the formatter on the active document."""

    @abstractmethod
    def get_active_document(self) -> DocumentHandle | None:
        """Return the document that currently has focus, if any."""

    def is_document_open(self, path: str) -> bool:
        """Check if ``path`` is open in a document."""
        return self.get_open_document(path) is not None
