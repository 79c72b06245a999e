"""Version-control backends.

This module exports the backend interface and the git implementation.
"""

from tidyctl.vcs.base import NotARepositoryError, VcsBackend, VcsError
from tidyctl.vcs.git import GitBackend

__all__ = ["GitBackend", "NotARepositoryError", "VcsBackend", "VcsError"]
