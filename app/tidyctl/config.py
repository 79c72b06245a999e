"""Configuration models and settings I/O.

This module provides the configuration model for tidyctl: which file
suffixes are eligible for cleanup, and which external formatter runs on
them.

Lookup order for the effective configuration:
1. An explicit path passed on the command line
2. <working tree>/.tidyctl.toml
3. ~/.config/tidyctl/config.toml
4. Built-in defaults
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from tidyctl.core.paths import get_config_path, get_repo_config_path

logger = logging.getLogger(__name__)

FormatterMode = Literal["in_place", "stdin"]

# Substituted with the absolute document path in formatter commands
PATH_PLACEHOLDER = "{path}"

DEFAULT_INCLUDE_SUFFIXES: list[str] = [".cs", ".xaml", ".resx", ".xml", ".config"]
DEFAULT_EXCLUDE_SUFFIXES: list[str] = [".designer.cs"]
DEFAULT_FORMATTER_COMMAND: list[str] = [
    "dotnet",
    "format",
    "whitespace",
    "--folder",
    "--include",
    PATH_PLACEHOLDER,
]


def _normalize_suffixes(value: list[str], field_name: str) -> list[str]:
    normalized: list[str] = []
    for suffix in value:
        suffix = suffix.strip().lower()
        if not suffix.startswith("."):
            msg = f"{field_name}: suffix '{suffix}' must start with '.'"
            raise ValueError(msg)
        if suffix not in normalized:
            normalized.append(suffix)
    return normalized


class FilterPolicy(BaseModel):
    """Extension rules deciding which dirty files are eligible.

    Exclude rules are checked first and always win, so a narrow exclusion
    such as ``.designer.cs`` overrides a broad inclusion such as ``.cs``.

    Attributes:
        include_suffixes: A file is eligible only if it ends with one of these.
        exclude_suffixes: A file ending with one of these is always rejected.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    include_suffixes: Annotated[
        list[str],
        Field(
            default_factory=lambda: list(DEFAULT_INCLUDE_SUFFIXES),
            description="Suffixes eligible for cleanup",
        ),
    ]
    exclude_suffixes: Annotated[
        list[str],
        Field(
            default_factory=lambda: list(DEFAULT_EXCLUDE_SUFFIXES),
            description="Suffixes never cleaned up (checked first)",
        ),
    ]

    @field_validator("include_suffixes", "exclude_suffixes")
    @classmethod
    def validate_suffixes(cls, v: list[str], info: ValidationInfo) -> list[str]:
        """Lower-case suffixes, drop duplicates and require a leading dot."""
        return _normalize_suffixes(v, info.field_name or "suffixes")


class FormatterConfig(BaseModel):
    """External formatter invocation settings.

    Attributes:
        command: Command tokens; ``{path}`` is replaced with the document path.
        mode: ``in_place`` rewrites the file on disk; ``stdin`` reads the
            buffer on stdin and writes the formatted text to stdout.
        timeout_seconds: Maximum time for one formatter call.
    """

    model_config = ConfigDict(extra="forbid")

    command: Annotated[
        list[str],
        Field(
            default_factory=lambda: list(DEFAULT_FORMATTER_COMMAND),
            min_length=1,
            description="Formatter command tokens",
        ),
    ]
    mode: Annotated[
        FormatterMode,
        Field(description="How the formatter receives the document"),
    ] = "in_place"
    timeout_seconds: Annotated[
        int,
        Field(ge=1, le=3600, description="Timeout in seconds (1-3600)"),
    ] = 120

    def build_command(self, path: str) -> list[str]:
        """Return the command with the path placeholder substituted."""
        return [token.replace(PATH_PLACEHOLDER, path) for token in self.command]


class TidyConfig(BaseModel):
    """Top-level tidyctl configuration."""

    model_config = ConfigDict(extra="forbid")

    policy: FilterPolicy = Field(default_factory=FilterPolicy)
    formatter: FormatterConfig = Field(default_factory=FormatterConfig)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when a config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when a config file cannot be parsed."""


def load_config(path: Path | None = None) -> TidyConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the user config path.

    Returns:
        Validated TidyConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return TidyConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def resolve_config(explicit: Path | None = None, repo_root: Path | None = None) -> TidyConfig:
    """Load the effective configuration.

    An explicit path must exist. Otherwise the repository config, then the
    user config, are tried, falling back to defaults when neither exists.

    Args:
        explicit: Path given by the user, if any.
        repo_root: Working tree root to look for ``.tidyctl.toml`` in.

    Returns:
        The effective TidyConfig.

    Raises:
        ConfigError: If a config file exists but is invalid, or the
            explicit path is missing.
    """
    if explicit is not None:
        return load_config(explicit)

    candidates: list[Path] = []
    if repo_root is not None:
        candidates.append(get_repo_config_path(repo_root))
    candidates.append(get_config_path())

    for candidate in candidates:
        if candidate.exists():
            logger.debug("Using config file %s", candidate)
            return load_config(candidate)

    logger.debug("No config file found, using defaults")
    return get_default_config()


def save_config(config: TidyConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The TidyConfig object to save.
        path: Path to save the config. If None, uses the user config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config_to_dict(config), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: TidyConfig) -> dict[str, object]:
    """Convert TidyConfig to a dictionary for TOML serialization."""
    return config.model_dump(mode="json")


def get_default_config() -> TidyConfig:
    """Create a default TidyConfig."""
    return TidyConfig()
