"""File-backed host for command-line use.

Documents are in-memory text buffers of files under a working tree. The
formatting action runs the configured external formatter command on the
active buffer, either in place on disk or through stdin/stdout.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from tidyctl.config import FormatterConfig
from tidyctl.core.status import normalize_path
from tidyctl.host.base import DocumentHandle, DocumentResolutionError, HostEditor
from tidyctl.models.result import FormatOutcome
from tidyctl.utils.shell import CommandResult, FilterResult, run_command, run_filter

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Buffer:
    """Text of one open document and what was last written to disk."""

    handle: DocumentHandle
    text: str
    saved_text: str

    @property
    def dirty(self) -> bool:
        return self.text != self.saved_text


def _read_text(path: str) -> str:
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def _write_text(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


class WorkspaceHost(HostEditor):
    """Host whose documents are plain files under a working tree.

    Attributes:
        root: Working tree root reported to the orchestrator.
        formatter: Formatter command settings.
    """

    def __init__(self, root: Path | None, formatter: FormatterConfig) -> None:
        """Initialize the host with no open documents.

        Args:
            root: Working tree root, or None when there is no project.
            formatter: Formatter command settings.
        """
        self.root = root
        self.formatter = formatter
        self._buffers: dict[str, _Buffer] = {}
        self._active: str | None = None

    def get_working_tree_root(self) -> Path | None:
        return self.root

    def save_all_open_documents(self) -> None:
        for buffer in self._buffers.values():
            self._save(buffer)

    def list_open_documents(self) -> list[DocumentHandle]:
        return [buffer.handle for buffer in self._buffers.values()]

    def get_open_document(self, path: str) -> DocumentHandle | None:
        buffer = self._buffers.get(normalize_path(path))
        return buffer.handle if buffer is not None else None

    def open_document(self, path: str) -> DocumentHandle:
        """Load ``path`` into a new buffer.

        Raises:
            DocumentResolutionError: If the file is missing or not UTF-8 text.
        """
        if not Path(path).is_file():
            raise DocumentResolutionError(f"No such file: {path}")

        try:
            text = _read_text(path)
        except UnicodeDecodeError as e:
            raise DocumentResolutionError(f"Not a UTF-8 text file: {path}") from e
        except OSError as e:
            raise DocumentResolutionError(f"Cannot read {path}: {e}") from e

        handle = DocumentHandle(path=path)
        self._buffers[handle.key] = _Buffer(handle=handle, text=text, saved_text=text)
        logger.debug("Opened %s", path)
        return handle

    def activate_document(self, handle: DocumentHandle) -> None:
        if handle.key not in self._buffers:
            raise DocumentResolutionError(f"Document is not open: {handle.path}")
        self._active = handle.key

    def close_document(self, handle: DocumentHandle) -> None:
        self._buffers.pop(handle.key, None)
        if self._active == handle.key:
            self._active = None
        logger.debug("Closed %s", handle.path)

    def save_document_if_dirty(self, handle: DocumentHandle) -> bool:
        buffer = self._buffers.get(handle.key)
        if buffer is None:
            return False
        return self._save(buffer)

    def get_active_document(self) -> DocumentHandle | None:
        if self._active is None:
            return None
        return self._buffers[self._active].handle

    def get_text(self, handle: DocumentHandle) -> str:
        """Return the current buffer text of an open document."""
        return self._buffers[handle.key].text

    def set_text(self, handle: DocumentHandle, text: str) -> None:
        """Replace the buffer text of an open document without saving."""
        self._buffers[handle.key].text = text

    def _save(self, buffer: _Buffer) -> bool:
        if not buffer.dirty:
            return False
        _write_text(buffer.handle.path, buffer.text)
        buffer.saved_text = buffer.text
        logger.debug("Saved %s", buffer.handle.path)
        return True

    def run_formatting_action(self) -> FormatOutcome:
        """Run the formatter command on the active buffer.

        Any formatter error (missing executable, timeout, non-zero exit,
        output that is not UTF-8) is reported as FAILURE; nothing is raised.
        """
        if self._active is None:
            logger.warning("No active document to format")
            return FormatOutcome.FAILURE

        buffer = self._buffers[self._active]
        args = self.formatter.build_command(buffer.handle.path)
        cwd = str(self.root) if self.root else None

        try:
            if self.formatter.mode == "stdin":
                return self._format_stdin(buffer, args, cwd)
            return self._format_in_place(buffer, args, cwd)
        except FileNotFoundError:
            logger.warning("Formatter executable not found: %s", args[0])
        except subprocess.TimeoutExpired:
            logger.warning(
                "Formatter timed out after %ds on %s",
                self.formatter.timeout_seconds,
                buffer.handle.path,
            )
        except OSError as e:
            logger.warning("Cannot run formatter on %s: %s", buffer.handle.path, e)
        return FormatOutcome.FAILURE

    def _format_stdin(self, buffer: _Buffer, args: list[str], cwd: str | None) -> FormatOutcome:
        # Bytes in and out so CRLF line endings survive an unchanged pass
        result = run_filter(
            args,
            buffer.text.encode("utf-8"),
            timeout=self.formatter.timeout_seconds,
            cwd=cwd,
        )
        if not self._check(result, buffer.handle.path):
            return FormatOutcome.FAILURE

        try:
            buffer.text = result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("Formatter output for %s is not UTF-8: %s", buffer.handle.path, e)
            return FormatOutcome.FAILURE
        return FormatOutcome.SUCCESS

    def _format_in_place(
        self, buffer: _Buffer, args: list[str], cwd: str | None
    ) -> FormatOutcome:
        path = buffer.handle.path
        # The formatter reads the file, so edits made since the last save go
        # to disk first; they are taken back off disk unless formatting succeeds
        previous = buffer.saved_text
        presaved = self._save(buffer)
        outcome = FormatOutcome.FAILURE
        try:
            result = run_command(args, timeout=self.formatter.timeout_seconds, cwd=cwd)
            if self._check(result, path):
                try:
                    reloaded = _read_text(path)
                except UnicodeDecodeError as e:
                    logger.warning("Cannot reload %s after formatting: %s", path, e)
                else:
                    buffer.text = reloaded
                    buffer.saved_text = reloaded
                    outcome = FormatOutcome.SUCCESS
        finally:
            if presaved and not outcome.ok:
                _write_text(path, previous)
                buffer.saved_text = previous
                logger.debug("Restored %s after failed formatting", path)
        return outcome

    def _check(self, result: CommandResult | FilterResult, path: str) -> bool:
        if result.success:
            return True
        logger.warning(
            "Formatter failed on %s (exit %d): %s",
            path,
            result.returncode,
            result.stderr.strip() or "no output",
        )
        return False
