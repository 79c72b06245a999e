"""Run command implementation.

Formats the dirty files of a working tree once. Intended to be called
from a pre-commit hook: silent early exits and per-file formatter
failures never produce a non-zero exit code.
"""

from pathlib import Path
from typing import Annotated

import typer

from tidyctl.cli.display import print_report, print_report_json
from tidyctl.cli.types import OutputFormat, build_orchestrator

app = typer.Typer(
    help="Format dirty files in the working tree.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def run_cleanup(
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
    """Format every dirty file that matches the extension policy.

    Examples:
        tidyctl run                       # Current working tree
        tidyctl run -p ~/src/app          # Another working tree
        tidyctl run --format json         # JSON report for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    orchestrator, _config = build_orchestrator(path, config_path)
    report = orchestrator.run()

    if output_format == OutputFormat.JSON:
        print_report_json(report)
        return

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    print_report(report, quiet=quiet)
