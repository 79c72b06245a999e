"""Git backend implementation.

Reads dirty files from ``git status --porcelain=v1 -z`` and the branch
name from ``git branch --show-current``.
"""

import logging
import subprocess
from pathlib import Path

from tidyctl.models.status import RepositoryStatusEntry, StatusClassification
from tidyctl.utils.shell import CommandResult, command_exists, run_command
from tidyctl.vcs.base import NotARepositoryError, VcsBackend, VcsError

logger = logging.getLogger(__name__)

# Friendly name reported for a detached HEAD
DETACHED_BRANCH_NAME = "(no branch)"

# Index-column codes that count as a staged change
_STAGED_CODES = frozenset("MARCT")


def parse_porcelain_records(output: str) -> list[tuple[str, str]]:
    """Split ``git status --porcelain=v1 -z`` output into records.

    Args:
        output: Raw NUL-separated status output.

    Returns:
        List of (two-letter status, path) tuples. For renames and copies
        the destination path is reported.
    """
    records: list[tuple[str, str]] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if not token:
            continue
        if len(token) < 4 or token[2] != " ":
            logger.debug("Skipping malformed status record: %r", token[:100])
            continue

        status = token[:2]
        records.append((status, token[3:]))

        # Renames and copies carry the source path in the next token
        if "R" in status or "C" in status:
            index += 1

    return records


def classify_status(status: str) -> list[StatusClassification]:
    """Map a two-letter porcelain status to classifications.

    Args:
        status: The ``XY`` status code (index column, worktree column).

    Returns:
        Every classification the record falls under; empty for ignored files
        and for deletions in either column, which leave nothing to format.
    """
    if status == "??":
        return [StatusClassification.UNTRACKED]
    if status == "!!" or "D" in status:
        return []

    index_code, worktree_code = status[0], status[1]
    classifications: list[StatusClassification] = []

    if index_code in _STAGED_CODES:
        classifications.append(StatusClassification.STAGED)
    if index_code == "A" or worktree_code == "A":
        classifications.append(StatusClassification.ADDED)
    if worktree_code in ("M", "T"):
        classifications.append(StatusClassification.MODIFIED)

    return classifications


class GitBackend(VcsBackend):
    """Backend driving the ``git`` executable.

    Attributes:
        timeout: Maximum seconds for a single git call.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        """Initialize the backend.

        Args:
            timeout: Maximum seconds for a single git call.
        """
        self.timeout = timeout

    def is_available(self) -> bool:
        """Check if git is installed."""
        return command_exists("git")

    def _git(self, path: Path, args: list[str]) -> CommandResult:
        """Run a git subcommand against ``path``.

        Raises:
            VcsError: If git is missing or the call times out.
        """
        try:
            return run_command(["git", "-C", str(path), *args], timeout=self.timeout)
        except FileNotFoundError as e:
            raise VcsError("git executable not found") from e
        except subprocess.TimeoutExpired as e:
            msg = f"git {args[0]} timed out after {self.timeout}s"
            raise VcsError(msg) from e

    def _toplevel(self, path: Path) -> Path | None:
        if not path.is_dir():
            return None
        try:
            result = self._git(path, ["rev-parse", "--show-toplevel"])
        except VcsError as e:
            logger.debug("Cannot query git for %s: %s", path, e)
            return None
        top = result.stdout.strip()
        if not result.success or not top:
            return None
        return Path(top).resolve()

    def is_valid_working_tree(self, path: Path) -> bool:
        """Check if ``path`` is inside a git working tree."""
        return self._toplevel(path) is not None

    def get_root(self, path: Path) -> Path:
        """Return the top level of the working tree containing ``path``.

        Raises:
            NotARepositoryError: If ``path`` is not in a working tree.
        """
        top = self._toplevel(path)
        if top is None:
            msg = f"Not a git working tree: {path}"
            raise NotARepositoryError(msg)
        return top

    def get_status_entries(self, path: Path) -> list[RepositoryStatusEntry]:
        """Return dirty files reported by ``git status``.

        Raises:
            VcsError: If git status fails.
        """
        result = self._git(
            path,
            ["status", "--porcelain=v1", "-z", "--untracked-files=all"],
        )
        if not result.success:
            msg = f"git status failed: {result.stderr.strip() or 'unknown error'}"
            raise VcsError(msg)

        entries: list[RepositoryStatusEntry] = []
        for status, rel_path in parse_porcelain_records(result.stdout):
            if not rel_path:
                continue
            for classification in classify_status(status):
                entries.append(RepositoryStatusEntry(path=rel_path, classification=classification))
        return entries

    def get_current_branch_name(self, path: Path) -> str:
        """Return the checked-out branch, or ``(no branch)`` when detached.

        Raises:
            VcsError: If the query fails.
        """
        result = self._git(path, ["branch", "--show-current"])
        if not result.success:
            msg = f"git branch failed: {result.stderr.strip() or 'unknown error'}"
            raise VcsError(msg)
        return result.stdout.strip() or DETACHED_BRANCH_NAME
