"""Config command implementation.

Shows, locates and initializes the tidyctl configuration file.
"""

from pathlib import Path
from typing import Annotated

import tomli_w
import typer

from tidyctl.config import (
    ConfigError,
    config_to_dict,
    get_default_config,
    resolve_config,
    save_config,
)
from tidyctl.core.paths import get_config_path
from tidyctl.utils.formatting import console, print_error, print_success
from tidyctl.vcs.git import GitBackend

app = typer.Typer(
    help="Show or initialize configuration.",
    no_args_is_help=True,
)


@app.command()
def show(
    path: Annotated[
        Path,
        typer.Option(
            "--path",
            "-p",
            help="Directory inside the working tree (for .tidyctl.toml lookup).",
            file_okay=False,
            resolve_path=True,
        ),
    ] = Path("."),
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file to show instead of the default lookup.",
        ),
    ] = None,
) -> None:
    """Print the effective configuration as TOML."""
    backend = GitBackend()
    root = backend.get_root(path) if backend.is_valid_working_tree(path) else None

    try:
        config = resolve_config(config_path, root)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    console.print(
        tomli_w.dumps(config_to_dict(config)),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


@app.command()
def init(
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Where to write the config (default: user config path).",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    target = config_path or get_config_path()
    if target.exists() and not force:
        print_error(f"Config already exists: {target} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        written = save_config(get_default_config(), target)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    print_success(f"Wrote default config to {written}")


@app.command("path")
def show_path() -> None:
    """Print the user config file path."""
    console.print(str(get_config_path()), markup=False, highlight=False, soft_wrap=True)
