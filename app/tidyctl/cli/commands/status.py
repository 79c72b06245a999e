"""Status command implementation.

Shows which dirty files a run would format, without formatting anything.
"""

from pathlib import Path
from typing import Annotated

import typer

from tidyctl.cli.display import print_report, print_report_json
from tidyctl.cli.types import OutputFormat, build_orchestrator

app = typer.Typer(
    help="Preview which dirty files would be formatted.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_status(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Option(
            "--path",
            "-p",
            help="Directory inside the working tree.",
            file_okay=False,
            resolve_path=True,
        ),
    ] = Path("."),
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file to use instead of the default lookup.",
        ),
    ] = None,
    show_excluded: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Also list dirty files rejected by the extension policy.",
        ),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List dirty files and whether each would be formatted.

    Examples:
        tidyctl status                    # Eligible files only
        tidyctl status --all              # Include excluded files
    """
    if ctx.invoked_subcommand is not None:
        return

    orchestrator, _config = build_orchestrator(path, config_path)
    report = orchestrator.run(dry_run=True)

    if output_format == OutputFormat.JSON:
        print_report_json(report)
        return

    print_report(report, show_excluded=show_excluded)
