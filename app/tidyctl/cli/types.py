"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from tidyctl.config import ConfigError, TidyConfig, resolve_config
from tidyctl.core.orchestrator import CleanupOrchestrator
from tidyctl.host.workspace import WorkspaceHost
from tidyctl.utils.formatting import print_error, print_warning
from tidyctl.vcs.git import GitBackend


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def build_orchestrator(
    path: Path,
    config_path: Path | None = None,
) -> tuple[CleanupOrchestrator, TidyConfig]:
    """Wire a git backend and workspace host for the tree containing ``path``.

    When ``path`` is not inside a working tree the host reports no root,
    so a run is a silent no-op.

    Args:
        path: Directory inside the working tree.
        config_path: Explicit config file, if given.

    Returns:
        Tuple of (orchestrator, effective config).

    Raises:
        typer.Exit: With code 1 if the configuration is invalid.
    """
    backend = GitBackend()
    if not backend.is_available():
        print_warning("git executable not found on PATH")
    root = backend.get_root(path) if backend.is_valid_working_tree(path) else None

    try:
        config = resolve_config(config_path, root)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    host = WorkspaceHost(root, config.formatter)
    return CleanupOrchestrator(host, backend, config.policy), config
