"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules: sample git
output plus in-memory fakes of the version-control backend and the host
editor.
"""

import os
from pathlib import Path

import pytest
from tidyctl.core.status import normalize_path
from tidyctl.host.base import DocumentHandle, DocumentResolutionError, HostEditor
from tidyctl.models.result import FormatOutcome
from tidyctl.models.status import RepositoryStatusEntry, StatusClassification
from tidyctl.vcs.base import VcsBackend


class FakeBackend(VcsBackend):
    """Backend returning canned status entries."""

    def __init__(
        self,
        root: Path,
        entries: list[RepositoryStatusEntry] | None = None,
        branch: str = "main",
        valid: bool = True,
    ) -> None:
        self.root = root
        self.entries = entries or []
        self.branch = branch
        self.valid = valid
        self.status_calls = 0

    def is_valid_working_tree(self, path: Path) -> bool:
        return self.valid

    def get_root(self, path: Path) -> Path:
        return self.root

    def get_status_entries(self, path: Path) -> list[RepositoryStatusEntry]:
        self.status_calls += 1
        return list(self.entries)

    def get_current_branch_name(self, path: Path) -> str:
        return self.branch

    def set_dirty(self, *specs: tuple[str, StatusClassification]) -> None:
        self.entries = [RepositoryStatusEntry(path=p, classification=c) for p, c in specs]


class FakeHost(HostEditor):
    """Host that records every document operation.

    Formatting marks the active document dirty unless its path is listed
    in ``failing``, in which case FAILURE is returned.
    """

    def __init__(self, root: Path | None) -> None:
        self.root = root
        self.open: dict[str, DocumentHandle] = {}
        self.dirty: set[str] = set()
        self.active: DocumentHandle | None = None
        self.failing: set[str] = set()
        self.unopenable: set[str] = set()
        self.formatted: list[str] = []
        self.saved: list[str] = []
        self.opened: list[str] = []
        self.closed: list[str] = []
        self.save_all_calls = 0

    def preopen(self, path: Path, activate: bool = False) -> DocumentHandle:
        handle = DocumentHandle(path=str(path))
        self.open[handle.key] = handle
        if activate:
            self.active = handle
        return handle

    def get_working_tree_root(self) -> Path | None:
        return self.root

    def save_all_open_documents(self) -> None:
        self.save_all_calls += 1
        self.dirty.clear()

    def list_open_documents(self) -> list[DocumentHandle]:
        return list(self.open.values())

    def get_open_document(self, path: str) -> DocumentHandle | None:
        return self.open.get(normalize_path(path))

    def open_document(self, path: str) -> DocumentHandle:
        key = normalize_path(path)
        if key in self.unopenable or not os.path.exists(path):
            raise DocumentResolutionError(f"Cannot open {path}")
        handle = DocumentHandle(path=path)
        self.open[key] = handle
        self.opened.append(key)
        return handle

    def activate_document(self, handle: DocumentHandle) -> None:
        self.active = handle

    def close_document(self, handle: DocumentHandle) -> None:
        self.open.pop(handle.key, None)
        self.closed.append(handle.key)
        if self.active == handle:
            self.active = None

    def save_document_if_dirty(self, handle: DocumentHandle) -> bool:
        if handle.key not in self.dirty:
            return False
        self.dirty.discard(handle.key)
        self.saved.append(handle.key)
        return True

    def run_formatting_action(self) -> FormatOutcome:
        assert self.active is not None
        key = self.active.key
        self.formatted.append(key)
        if key in self.failing:
            return FormatOutcome.FAILURE
        self.dirty.add(key)
        return FormatOutcome.SUCCESS

    def get_active_document(self) -> DocumentHandle | None:
        return self.active


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """Working tree root directory."""
    root = tmp_path / "repo"
    root.mkdir()
    return root


@pytest.fixture
def make_file(repo_root: Path):
    """Create a file under the repo root with a fixed modification time."""

    def _make(rel_path: str, mtime: float = 1000.0, content: str = "x\n") -> Path:
        path = repo_root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture
def fake_backend(repo_root: Path) -> FakeBackend:
    """Backend for the repo root with a clean tree on branch main."""
    return FakeBackend(repo_root)


@pytest.fixture
def fake_host(repo_root: Path) -> FakeHost:
    """Host reporting the repo root, with no open documents."""
    return FakeHost(repo_root)


@pytest.fixture
def porcelain_output() -> str:
    """Sample ``git status --porcelain=v1 -z`` output."""
    records = [
        " M src/Program.cs",
        "M  src/Staged.cs",
        "A  src/New.xaml",
        "AM src/Both.cs",
        "R  src/Renamed.cs",
        "src/Original.cs",
        "?? notes/Readme.txt",
        "?? dir with space/File Name.resx",
        "!! bin/Debug.dll",
        " D src/Deleted.cs",
    ]
    return "\0".join(records) + "\0"
