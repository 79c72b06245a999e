"""Shared Rich display functions for cleanup reports.

Provides the table builder and summary printer used by the run, status
and watch commands.
"""

import json
import os

from rich.table import Table

from tidyctl.models.result import CleanupReport, CleanupStatus, FileCleanupResult, FileOutcome
from tidyctl.utils.formatting import console, create_file_table, print_info, print_success

_OUTCOME_LABELS: dict[FileOutcome, str] = {
    FileOutcome.FORMATTED: "[formatted]formatted[/]",
    FileOutcome.FORMAT_FAILED: "[failed]failed[/]",
    FileOutcome.UNRESOLVED: "[warning]unresolved[/]",
    FileOutcome.UP_TO_DATE: "[skipped]up to date[/]",
    FileOutcome.EXCLUDED: "[muted]excluded[/]",
    FileOutcome.PENDING: "[info]pending[/]",
}

_STATUS_MESSAGES: dict[CleanupStatus, str] = {
    CleanupStatus.NOT_A_REPOSITORY: "Not inside a git working tree, nothing to do.",
    CleanupStatus.NO_PENDING_CHANGES: "Working tree is clean, nothing to do.",
    CleanupStatus.STATUS_UNAVAILABLE: "Could not read repository status, nothing done.",
}


def _display_path(result: FileCleanupResult, root: str | None) -> str:
    if root and result.path.startswith(root.lower() + os.sep):
        return result.path[len(root) + 1 :]
    return result.path


def create_report_table(report: CleanupReport, show_excluded: bool = False) -> Table:
    """Create a Rich table with one row per file in the report.

    Args:
        report: Report to display.
        show_excluded: Include files rejected by the policy.

    Returns:
        Rich Table of file outcomes.
    """
    title = "Cleanup Preview" if report.dry_run else "Cleanup Results"
    if report.branch:
        title = f"{title} ({report.branch})"

    table = create_file_table(title)
    for result in report.files:
        if result.outcome == FileOutcome.EXCLUDED and not show_excluded:
            continue
        table.add_row(
            _display_path(result, report.root),
            _OUTCOME_LABELS[result.outcome],
            result.detail or "",
        )
    return table


def print_report(report: CleanupReport, show_excluded: bool = False, quiet: bool = False) -> None:
    """Print a report as a table followed by a one-line summary.

    Args:
        report: Report to display.
        show_excluded: Include files rejected by the policy.
        quiet: Only print the summary line for completed runs.
    """
    message = _STATUS_MESSAGES.get(report.status)
    if message is not None:
        if not quiet:
            print_info(message)
        return

    visible = [
        f for f in report.files if show_excluded or f.outcome != FileOutcome.EXCLUDED
    ]
    if not visible:
        if not quiet:
            print_info("No eligible files changed.")
        return

    if not quiet:
        console.print(create_report_table(report, show_excluded=show_excluded))

    if report.dry_run:
        pending = len(report.with_outcome(FileOutcome.PENDING))
        print_info(f"{pending} file(s) would be formatted.")
        return

    summary = f"{report.formatted_count} file(s) formatted"
    if report.failed_count:
        summary += f", {report.failed_count} failed"
    print_success(summary + ".")


def print_report_json(report: CleanupReport) -> None:
    """Print a report as JSON for scripting."""
    console.print(
        json.dumps(report.to_dict(), indent=2),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
