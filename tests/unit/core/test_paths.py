"""Unit tests for path helpers."""

import os
from pathlib import Path
from unittest.mock import patch

from tidyctl.core.paths import (
    REPO_CONFIG_FILENAME,
    get_config_dir,
    get_config_path,
    get_repo_config_path,
    get_theme_path,
)


class TestConfigPaths:
    """Tests for user config locations."""

    def test_default_config_dir(self) -> None:
        """Without XDG_CONFIG_HOME the config lives under ~/.config."""
        with patch.dict(os.environ, {}, clear=True):
            assert get_config_dir() == Path.home() / ".config" / "tidyctl"

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """XDG_CONFIG_HOME overrides the base directory."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_dir() == tmp_path / "tidyctl"
            assert get_config_path() == tmp_path / "tidyctl" / "config.toml"
            assert get_theme_path() == tmp_path / "tidyctl" / "theme.toml"

    def test_repo_config_path(self, tmp_path: Path) -> None:
        """The repository config sits at the working tree root."""
        assert get_repo_config_path(tmp_path) == tmp_path / REPO_CONFIG_FILENAME
