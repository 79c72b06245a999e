"""CLI commands for tidyctl.

This package contains all subcommand implementations.
"""

from tidyctl.cli.commands import config, run, status, watch

__all__ = ["config", "run", "status", "watch"]
