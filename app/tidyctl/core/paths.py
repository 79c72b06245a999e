"""XDG-compliant path management for tidyctl.

This module provides standardized paths following the XDG Base Directory
Specification for configuration storage.

XDG defaults:
- Config: ~/.config/tidyctl/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "tidyctl"

# Per-repository config file, looked up at the working tree root
REPO_CONFIG_FILENAME = ".tidyctl.toml"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/tidyctl/ (or XDG_CONFIG_HOME/tidyctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the user configuration file path.

    Returns:
        Path to ~/.config/tidyctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/tidyctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_repo_config_path(root: Path) -> Path:
    """Get the per-repository configuration file path.

    Args:
        root: Working tree root.

    Returns:
        Path to <root>/.tidyctl.toml.
    """
    return root / REPO_CONFIG_FILENAME
