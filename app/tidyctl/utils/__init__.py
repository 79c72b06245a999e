"""Utility modules for tidyctl.

This module exports commonly used utility functions.
"""

from tidyctl.utils.formatting import (
    console,
    create_file_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from tidyctl.utils.shell import (
    CommandResult,
    FilterResult,
    command_exists,
    run_command,
    run_filter,
)

__all__ = [
    "CommandResult",
    "FilterResult",
    "command_exists",
    "console",
    "create_file_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "run_filter",
]
