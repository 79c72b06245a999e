"""Status normalization.

Turns a raw version-control status snapshot into the flat, deduplicated
set of candidate files a cleanup run works on.
"""

import logging
import os
from pathlib import Path

from tidyctl.models.status import CandidateFileSet, StatusClassification
from tidyctl.vcs.base import VcsBackend

logger = logging.getLogger(__name__)

# Classifications whose files are candidates for cleanup
CANDIDATE_CLASSIFICATIONS: tuple[StatusClassification, ...] = (
    StatusClassification.STAGED,
    StatusClassification.UNTRACKED,
    StatusClassification.ADDED,
    StatusClassification.MODIFIED,
)


def resolve_path(root: str | Path, path: str | Path) -> str:
    """Anchor ``path`` at ``root`` and return an absolute, normalized path."""
    return os.path.normpath(os.path.join(os.fspath(root), os.fspath(path)))


def normalize_path(path: str | Path) -> str:
    """Return the case-insensitive identity of a file path.

    Args:
        path: Absolute or relative path.

    Returns:
        Absolute path, lower-cased.
    """
    return os.path.normpath(os.path.abspath(os.fspath(path))).lower()


def collect_candidates(backend: VcsBackend, root: Path) -> CandidateFileSet:
    """Query status and build the candidate file set.

    Files are collected from the staged, untracked, added and modified
    classifications. A file listed under several of them appears once.

    Args:
        backend: Version-control backend to query.
        root: Working tree root (or a path inside it).

    Returns:
        CandidateFileSet with the lower-cased branch name. Empty when the
        working tree is clean.

    Raises:
        NotARepositoryError: If ``root`` is not a working tree.
        VcsError: If the status query fails.
    """
    snapshot = backend.get_status(root)

    if not snapshot.is_dirty:
        logger.debug("Working tree %s is clean", snapshot.root)
        return CandidateFileSet(root=snapshot.root, branch=snapshot.branch)

    locations: dict[str, str] = {}
    for classification in CANDIDATE_CLASSIFICATIONS:
        for rel_path in snapshot.paths_for(classification):
            location = resolve_path(snapshot.root, rel_path)
            locations.setdefault(normalize_path(location), location)

    logger.debug(
        "Collected %d candidate(s) from %d status entries on branch %s",
        len(locations),
        len(snapshot.entries),
        snapshot.branch,
    )
    return CandidateFileSet(root=snapshot.root, branch=snapshot.branch, locations=locations)
