"""Unit tests for the config command."""

import os
import tomllib
from pathlib import Path
from unittest.mock import patch

from tidyctl.cli.main import app
from tidyctl.config import DEFAULT_INCLUDE_SUFFIXES
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigCommand:
    """Tests for tidyctl config."""

    def test_path(self, tmp_path: Path) -> None:
        """config path prints the user config location."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert result.stdout.strip() == str(tmp_path / "tidyctl" / "config.toml")

    def test_init_writes_defaults(self, tmp_path: Path) -> None:
        """config init writes a loadable default config."""
        target = tmp_path / "config.toml"

        result = runner.invoke(app, ["config", "init", "-c", str(target)])

        assert result.exit_code == 0
        data = tomllib.loads(target.read_text())
        assert data["policy"]["include_suffixes"] == DEFAULT_INCLUDE_SUFFIXES

    def test_init_refuses_overwrite(self, tmp_path: Path) -> None:
        """config init leaves an existing file alone without --force."""
        target = tmp_path / "config.toml"
        target.write_text("# mine\n")

        result = runner.invoke(app, ["config", "init", "-c", str(target)])

        assert result.exit_code == 1
        assert target.read_text() == "# mine\n"

    def test_init_force_overwrites(self, tmp_path: Path) -> None:
        """--force replaces an existing file."""
        target = tmp_path / "config.toml"
        target.write_text("# mine\n")

        result = runner.invoke(app, ["config", "init", "-c", str(target), "--force"])

        assert result.exit_code == 0
        assert "policy" in tomllib.loads(target.read_text())

    def test_show_explicit(self, tmp_path: Path) -> None:
        """config show prints the given config as TOML."""
        target = tmp_path / "config.toml"
        target.write_text("[formatter]\ncommand = ['ruff', 'format', '-']\nmode = 'stdin'\n")

        result = runner.invoke(app, ["config", "show", "-p", str(tmp_path), "-c", str(target)])

        assert result.exit_code == 0
        data = tomllib.loads(result.stdout)
        assert data["formatter"]["mode"] == "stdin"
        assert data["policy"]["exclude_suffixes"] == [".designer.cs"]

    def test_show_missing_explicit(self, tmp_path: Path) -> None:
        """A missing explicit config is an error."""
        result = runner.invoke(
            app, ["config", "show", "-p", str(tmp_path), "-c", str(tmp_path / "none.toml")]
        )

        assert result.exit_code == 1
