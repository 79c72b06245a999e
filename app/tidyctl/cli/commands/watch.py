"""Watch command implementation.

Keeps one orchestrator alive and triggers it repeatedly, so files already
formatted since their last change are skipped on later passes.
"""

import logging
import time
from pathlib import Path
from typing import Annotated

import typer

from tidyctl.cli.display import print_report
from tidyctl.cli.types import build_orchestrator
from tidyctl.models.result import FileOutcome
from tidyctl.utils.formatting import print_info

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Re-run cleanup on an interval.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def watch(
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
    interval: Annotated[
        float,
        typer.Option(
            "--interval",
            "-i",
            min=0.0,
            help="Seconds between passes.",
        ),
    ] = 5.0,
    iterations: Annotated[
        int | None,
        typer.Option(
            "--iterations",
            "-n",
            min=1,
            help="Stop after this many passes (default: run until interrupted).",
        ),
    ] = None,
) -> None:
    """Run cleanup passes until interrupted.

    Only passes that formatted or failed something are reported.

    Examples:
        tidyctl watch                     # Every 5 seconds
        tidyctl watch -i 1 -n 10          # Ten passes, one second apart
    """
    if ctx.invoked_subcommand is not None:
        return

    orchestrator, _config = build_orchestrator(path, config_path)
    print_info(f"Watching {path} every {interval:g}s (Ctrl+C to stop)")

    passes = 0
    try:
        while iterations is None or passes < iterations:
            if passes:
                time.sleep(interval)
            passes += 1
            report = orchestrator.run()
            logger.debug("Pass %d finished with status %s", passes, report.status.value)
            if report.with_outcome(FileOutcome.FORMATTED) or report.with_outcome(
                FileOutcome.FORMAT_FAILED
            ):
                print_report(report)
    except KeyboardInterrupt:
        print_info("Stopped.")
