"""Cleanup orchestration.

Provides the CleanupOrchestrator, which runs one commit-intent trigger:
select dirty files, skip the ones already formatted, drive the host's
formatting action over the rest, and restore the host's focus.

A run never raises for a missing repository, a clean working tree, an
unopenable file or a failing formatter. It is a convenience step ahead of
a commit and must not block it.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from tidyctl.core.cache import StalenessCache
from tidyctl.core.policy import PolicyVerdict, explain, filter_candidates
from tidyctl.core.status import collect_candidates, normalize_path
from tidyctl.host.base import DocumentResolutionError
from tidyctl.models.result import (
    CleanupReport,
    CleanupStatus,
    FileCleanupResult,
    FileOutcome,
    FormatOutcome,
)
from tidyctl.vcs.base import NotARepositoryError, VcsError

if TYPE_CHECKING:
    from tidyctl.config import FilterPolicy
    from tidyctl.host.base import DocumentHandle, HostEditor
    from tidyctl.models.status import CandidateFileSet
    from tidyctl.vcs.base import VcsBackend

logger = logging.getLogger(__name__)


class CleanupOrchestrator:
    """Runs cleanup passes against one host and backend.

    The orchestrator owns its StalenessCache for its whole lifetime, so
    repeated runs skip files already formatted since their last change.

    Attributes:
        host: Host editor holding the documents.
        backend: Version-control backend.
        policy: Extension include/exclude rules.
        cache: Formatting memory, reset on branch change.
    """

    def __init__(
        self,
        host: HostEditor,
        backend: VcsBackend,
        policy: FilterPolicy,
        cache: StalenessCache | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            host: Host editor holding the documents.
            backend: Version-control backend.
            policy: Extension include/exclude rules.
            cache: Formatting memory. A new empty cache if None.
            clock: Returns the current time in epoch seconds.
        """
        self.host = host
        self.backend = backend
        self.policy = policy
        self.cache = cache if cache is not None else StalenessCache()
        self._clock = clock

    def run(self, dry_run: bool = False) -> CleanupReport:
        """Run one cleanup pass.

        Args:
            dry_run: Only compute the selection; leave documents and the
                cache untouched.

        Returns:
            CleanupReport describing what happened.
        """
        root = self.host.get_working_tree_root()
        if root is None or not self.backend.is_valid_working_tree(root):
            logger.debug("No working tree for %s, nothing to do", root)
            return CleanupReport(status=CleanupStatus.NOT_A_REPOSITORY, dry_run=dry_run)

        if not dry_run:
            self.host.save_all_open_documents()

        try:
            candidates = collect_candidates(self.backend, root)
        except NotARepositoryError as e:
            logger.debug("Not a working tree: %s", e)
            return CleanupReport(status=CleanupStatus.NOT_A_REPOSITORY, dry_run=dry_run)
        except VcsError as e:
            logger.warning("Cannot read repository status: %s", e)
            return CleanupReport(
                status=CleanupStatus.STATUS_UNAVAILABLE,
                root=str(root),
                dry_run=dry_run,
            )

        report = CleanupReport(
            status=CleanupStatus.COMPLETED,
            root=candidates.root,
            branch=candidates.branch,
            dry_run=dry_run,
        )

        if not candidates:
            report.status = CleanupStatus.NO_PENDING_CHANGES
            return report

        if dry_run:
            self._preview(candidates, report)
            return report

        self.cache.set_branch(candidates.branch)

        stale: list[str] = []
        for key in self._select(candidates, report):
            location = candidates.location_of(key)
            if self.cache.is_stale(location):
                stale.append(location)
            else:
                report.files.append(FileCleanupResult(path=key, outcome=FileOutcome.UP_TO_DATE))

        if stale:
            previously_active = self.host.get_active_document()
            try:
                for location in stale:
                    report.files.append(self._process(location))
            finally:
                self._restore_focus(previously_active)

        logger.info(
            "Cleanup on %s: %d formatted, %d failed, %d up to date",
            candidates.branch,
            report.formatted_count,
            report.failed_count,
            len(report.with_outcome(FileOutcome.UP_TO_DATE)),
        )
        return report

    def _select(self, candidates: CandidateFileSet, report: CleanupReport) -> list[str]:
        """Apply the policy, recording rejected files in the report."""
        selected = filter_candidates(candidates.paths, self.policy)
        for key in sorted(candidates.paths.difference(selected)):
            decision = explain(key, self.policy)
            detail = (
                f"excluded by {decision.suffix}"
                if decision.verdict == PolicyVerdict.EXCLUDED
                else "no matching include suffix"
            )
            report.files.append(
                FileCleanupResult(path=key, outcome=FileOutcome.EXCLUDED, detail=detail)
            )
        return selected

    def _preview(self, candidates: CandidateFileSet, report: CleanupReport) -> None:
        """Fill a dry-run report without touching the cache or documents."""
        branch_changed = self.cache.branch != candidates.branch
        for key in self._select(candidates, report):
            location = candidates.location_of(key)
            if branch_changed or self.cache.is_stale(location, record=False):
                report.files.append(FileCleanupResult(path=key, outcome=FileOutcome.PENDING))
            else:
                report.files.append(FileCleanupResult(path=key, outcome=FileOutcome.UP_TO_DATE))

    def _process(self, location: str) -> FileCleanupResult:
        """Format one file through the host.

        The file is marked formatted whether or not the formatter
        succeeded, so a formatter that always fails on it is not retried
        until the file changes again.
        """
        handle = self.host.get_open_document(location)
        opened_here = False
        if handle is None:
            try:
                handle = self.host.open_document(location)
            except DocumentResolutionError as e:
                logger.warning("Skipping %s: %s", location, e)
                return FileCleanupResult(
                    path=normalize_path(location),
                    outcome=FileOutcome.UNRESOLVED,
                    detail=str(e),
                )
            opened_here = True

        outcome = FormatOutcome.FAILURE
        saved = False
        try:
            self.host.activate_document(handle)
            outcome = self.host.run_formatting_action()
            if outcome.ok:
                saved = self.host.save_document_if_dirty(handle)
        except DocumentResolutionError as e:
            logger.warning("Skipping %s: %s", location, e)
            return FileCleanupResult(
                path=handle.key,
                outcome=FileOutcome.UNRESOLVED,
                detail=str(e),
            )
        finally:
            if opened_here:
                self.host.close_document(handle)

        self.cache.mark_formatted(location, self._clock())

        if outcome.ok:
            logger.debug("Formatted %s (saved=%s)", location, saved)
            return FileCleanupResult(
                path=handle.key,
                outcome=FileOutcome.FORMATTED,
                detail="saved" if saved else None,
            )

        logger.warning("Formatter failed on %s, not saving", location)
        return FileCleanupResult(path=handle.key, outcome=FileOutcome.FORMAT_FAILED)

    def _restore_focus(self, previously_active: DocumentHandle | None) -> None:
        if previously_active is None:
            return
        handle = self.host.get_open_document(previously_active.path)
        if handle is None:
            logger.debug("Previously active %s is no longer open", previously_active.path)
            return
        self.host.activate_document(handle)
