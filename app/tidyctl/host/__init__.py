"""Host editor collaborators.

This module exports the host interface and the file-backed workspace host.
"""

from tidyctl.host.base import DocumentHandle, DocumentResolutionError, HostEditor
from tidyctl.host.workspace import WorkspaceHost

__all__ = ["DocumentHandle", "DocumentResolutionError", "HostEditor", "WorkspaceHost"]
