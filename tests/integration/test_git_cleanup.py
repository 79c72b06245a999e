"""Integration tests running cleanup against a real git repository.

The formatter is a small Python one-liner that upper-cases its input, so
these tests need git but no external formatter.
"""

import os
import shutil
import subprocess
import sys
from pathlib import Path

import pytest
from tidyctl.config import FilterPolicy, FormatterConfig
from tidyctl.core.orchestrator import CleanupOrchestrator
from tidyctl.core.status import collect_candidates, normalize_path
from tidyctl.host.workspace import WorkspaceHost
from tidyctl.models.result import CleanupStatus, FileOutcome
from tidyctl.vcs.git import GitBackend

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git is required")

UPPER_STDIN = [sys.executable, "-c", "import sys; sys.stdout.write(sys.stdin.read().upper())"]


def _git(root: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=root, check=True, capture_output=True)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Repository with one committed file on branch main."""
    root = tmp_path / "repo"
    root.mkdir()
    _git(root, "init", "-q", "-b", "main")
    _git(root, "config", "user.email", "tests@example.com")
    _git(root, "config", "user.name", "Tests")
    (root / "Committed.cs").write_text("class committed {}\n", encoding="utf-8")
    _git(root, "add", "-A")
    _git(root, "commit", "-q", "-m", "initial")
    return root


@pytest.fixture
def orchestrator(git_repo: Path) -> CleanupOrchestrator:
    """Orchestrator over a real repo with an upper-casing formatter."""
    host = WorkspaceHost(git_repo, FormatterConfig(command=UPPER_STDIN, mode="stdin"))
    return CleanupOrchestrator(host, GitBackend(), FilterPolicy())


class TestGitStatus:
    """Status normalization against real git output."""

    def test_clean_repository(self, git_repo: Path) -> None:
        """A freshly committed repository has no candidates."""
        candidates = collect_candidates(GitBackend(), git_repo)

        assert len(candidates) == 0
        assert candidates.branch == "main"

    def test_collects_every_kind_of_change(self, git_repo: Path) -> None:
        """Modified, staged and untracked files are all candidates."""
        (git_repo / "Committed.cs").write_text("changed\n", encoding="utf-8")
        (git_repo / "Staged.xaml").write_text("<x/>\n", encoding="utf-8")
        _git(git_repo, "add", "Staged.xaml")
        (git_repo / "sub dir").mkdir()
        (git_repo / "sub dir" / "Untracked.xml").write_text("<y/>\n", encoding="utf-8")

        candidates = collect_candidates(GitBackend(), git_repo)

        root = git_repo.resolve()
        assert candidates.paths == frozenset(
            {
                normalize_path(root / "Committed.cs"),
                normalize_path(root / "Staged.xaml"),
                normalize_path(root / "sub dir" / "Untracked.xml"),
            }
        )

    def test_staged_then_modified_once(self, git_repo: Path) -> None:
        """A file added and then modified again is one candidate."""
        target = git_repo / "New.cs"
        target.write_text("a\n", encoding="utf-8")
        _git(git_repo, "add", "New.cs")
        target.write_text("b\n", encoding="utf-8")

        assert len(collect_candidates(GitBackend(), git_repo)) == 1

    def test_removed_file_is_not_a_candidate(self, git_repo: Path) -> None:
        """A file deleted with git rm has nothing to format."""
        _git(git_repo, "rm", "-q", "Committed.cs")

        assert len(collect_candidates(GitBackend(), git_repo)) == 0

    def test_not_a_repository(self, tmp_path: Path) -> None:
        """A plain directory is not a working tree."""
        plain = tmp_path / "plain"
        plain.mkdir()

        assert GitBackend().is_valid_working_tree(plain) is False


class TestCleanupRun:
    """End-to-end cleanup runs."""

    def test_formats_eligible_files(
        self, git_repo: Path, orchestrator: CleanupOrchestrator
    ) -> None:
        """Eligible dirty files are formatted and saved; others untouched."""
        (git_repo / "Committed.cs").write_text("class changed {}\n", encoding="utf-8")
        (git_repo / "Form1.Designer.cs").write_text("generated\n", encoding="utf-8")
        (git_repo / "notes.txt").write_text("notes\n", encoding="utf-8")

        report = orchestrator.run()

        assert report.status == CleanupStatus.COMPLETED
        assert (git_repo / "Committed.cs").read_text(encoding="utf-8") == "CLASS CHANGED {}\n"
        assert (git_repo / "Form1.Designer.cs").read_text(encoding="utf-8") == "generated\n"
        assert (git_repo / "notes.txt").read_text(encoding="utf-8") == "notes\n"
        assert orchestrator.host.list_open_documents() == []

    def test_second_run_skips_formatted(
        self, git_repo: Path, orchestrator: CleanupOrchestrator
    ) -> None:
        """A second run with no edits formats nothing."""
        (git_repo / "Committed.cs").write_text("x\n", encoding="utf-8")
        orchestrator.run()

        report = orchestrator.run()

        assert [f.outcome for f in report.files] == [FileOutcome.UP_TO_DATE]

    def test_edit_after_format_is_picked_up(
        self, git_repo: Path, orchestrator: CleanupOrchestrator
    ) -> None:
        """Editing a formatted file makes the next run format it again."""
        target = git_repo / "Committed.cs"
        target.write_text("x\n", encoding="utf-8")
        orchestrator.run()

        target.write_text("y\n", encoding="utf-8")
        future = target.stat().st_mtime + 60
        os.utime(target, (future, future))
        report = orchestrator.run()

        assert report.formatted_count == 1
        assert target.read_text(encoding="utf-8") == "Y\n"

    def test_branch_switch_resets(self, git_repo: Path, orchestrator: CleanupOrchestrator) -> None:
        """Checking out another branch makes formatted files stale again."""
        (git_repo / "Committed.cs").write_text("x\n", encoding="utf-8")
        orchestrator.run()

        _git(git_repo, "checkout", "-q", "-b", "feature")
        report = orchestrator.run()

        assert report.branch == "feature"
        assert report.formatted_count == 1

    def test_clean_tree_is_noop(self, orchestrator: CleanupOrchestrator) -> None:
        """Nothing dirty means nothing happens."""
        assert orchestrator.run().status == CleanupStatus.NO_PENDING_CHANGES

    def test_removed_file_is_skipped_silently(
        self, git_repo: Path, orchestrator: CleanupOrchestrator
    ) -> None:
        """A staged deletion is neither formatted nor reported as unresolved."""
        _git(git_repo, "rm", "-q", "Committed.cs")

        report = orchestrator.run()

        assert report.status == CleanupStatus.NO_PENDING_CHANGES
        assert report.with_outcome(FileOutcome.UNRESOLVED) == []
