"""Per-file formatting memory.

This module provides the StalenessCache class, which remembers when each
file was last formatted so unchanged files are not formatted again.

The cache lives in memory for the lifetime of the process. Its only
invalidation is a branch change: switching branches can change files on
disk behind the cache's back, so every entry is dropped.
"""

import logging
import os
from collections.abc import Callable

from tidyctl.core.status import normalize_path

logger = logging.getLogger(__name__)

# Recorded for files seen but never formatted
NEVER = float("-inf")

MtimeReader = Callable[[str], float]


def read_mtime(path: str) -> float:
    """Return the last-write time of ``path`` in epoch seconds.

    Raises:
        OSError: If the file cannot be stat'ed.
    """
    return os.stat(path).st_mtime


class StalenessCache:
    """Remembers when each file was last formatted.

    Keys are normalized (absolute, lower-cased) paths. Timestamps are epoch
    seconds compared against the file's on-disk modification time.

    Attributes:
        branch: Lower-cased branch name the entries belong to, or None.
    """

    def __init__(self, mtime_reader: MtimeReader = read_mtime) -> None:
        """Initialize an empty cache.

        Args:
            mtime_reader: Returns a file's last-write time for a path.
        """
        self._mtime_reader = mtime_reader
        self._entries: dict[str, float] = {}
        self._branch: str | None = None

    @property
    def branch(self) -> str | None:
        """Branch the cached entries were recorded on."""
        return self._branch

    def set_branch(self, name: str) -> bool:
        """Track ``name`` as the current branch.

        When the name differs from the tracked one (case-insensitively),
        every entry is dropped before the new name is adopted.

        Args:
            name: Friendly branch name.

        Returns:
            True if the cache was reset.
        """
        branch = name.lower()
        if branch == self._branch:
            return False

        logger.log(
            logging.INFO if self._branch is not None else logging.DEBUG,
            "Branch changed from %s to %s, dropping %d cached entries",
            self._branch,
            branch,
            len(self._entries),
        )
        self._entries.clear()
        self._branch = branch
        return True

    def is_stale(self, path: str, *, record: bool = True) -> bool:
        """Check if ``path`` needs formatting.

        A path seen for the first time is recorded as never formatted and
        reported stale. Otherwise the file is stale when its on-disk
        modification time is strictly newer than the recorded time, or
        when it can no longer be stat'ed.

        Args:
            path: Path to the file on disk.
            record: Remember a first-seen path. Pass False to only peek.

        Returns:
            True if the file should be formatted.
        """
        key = normalize_path(path)
        recorded = self._entries.get(key)
        if recorded is None:
            if record:
                self._entries[key] = NEVER
            return True

        try:
            modified = self._mtime_reader(path)
        except OSError as e:
            logger.debug("Cannot stat %s, treating as stale: %s", path, e)
            return True

        return modified > recorded

    def mark_formatted(self, path: str, timestamp: float) -> None:
        """Record that ``path`` was formatted at ``timestamp``."""
        self._entries[normalize_path(path)] = timestamp

    def last_formatted(self, path: str) -> float | None:
        """Return the recorded timestamp for ``path``, if any."""
        return self._entries.get(normalize_path(path))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        return normalize_path(path) in self._entries
