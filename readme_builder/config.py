"""Settings for README generation.

Values are layered from lowest to highest precedence: built-in defaults, a
YAML config file, ``README_BUILDER_*`` environment variables and finally
explicit overrides (usually command-line flags).
"""

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .constants import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_TEMPLATE_DIR,
    ENV_PREFIX,
)
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Settings that may be set through README_BUILDER_<NAME> environment variables
ENV_FIELDS = ("tagline", "quote", "quote_author", "brew_link", "emoji")

# Settings that end up in the README as single-line placeholder values
VALUE_FIELDS = ("cli_name", "tagline", "quote", "quote_author", "brew_link", "emoji")

# Value settings whose None means "derive a default"
OPTIONAL_VALUE_FIELDS = ("brew_link",)

PATH_FIELDS = ("template_dir", "output", "tree_root")


@dataclass
class ReadmeSettings:
    """Resolved settings for one README build."""

    cli_name: str = ""
    tagline: str = "A small command-line tool."
    quote: str = "Simplicity is prerequisite for reliability."
    quote_author: str = "Edsger W. Dijkstra"
    brew_link: Optional[str] = None
    emoji: str = "🛠️"
    template_dir: Path = Path(DEFAULT_TEMPLATE_DIR)
    output: Path = Path(DEFAULT_OUTPUT_FILE)
    tree_root: Path = Path(".")
    tree_depth: Optional[int] = None
    fragments: Optional[List[str]] = None

    def __post_init__(self):
        for name in PATH_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, (str, Path)):
                raise ConfigurationError(f"{name} must be a path, got {value!r}")
            setattr(self, name, Path(value))
        if self.tree_depth is not None:
            try:
                self.tree_depth = int(self.tree_depth)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"tree_depth must be an integer, got {self.tree_depth!r}") from e
            if self.tree_depth < 1:
                raise ConfigurationError(f"tree_depth must be at least 1, got {self.tree_depth}")
        if self.fragments is not None:
            if not isinstance(self.fragments, list) or not all(isinstance(f, str) for f in self.fragments):
                raise ConfigurationError("fragments must be a list of file names")
        for name in VALUE_FIELDS:
            value = getattr(self, name)
            if value is None and name in OPTIONAL_VALUE_FIELDS:
                continue
            if isinstance(value, (bool, int, float)):
                value = str(value)
                setattr(self, name, value)
            elif not isinstance(value, str):
                raise ConfigurationError(f"{name} must be a single-line string, got {value!r}")
            if "\n" in value or "\r" in value:
                raise ConfigurationError(f"{name} must be a single line")

    @property
    def resolved_brew_link(self) -> str:
        """The brew link, defaulting to an install command for the CLI."""
        if self.brew_link:
            return self.brew_link
        return f"brew install {self.cli_name}"

    def to_mapping(self, version: str) -> Mapping[str, str]:
        """Build the read-only placeholder mapping for rendering.

        Args:
            version: The CLI version string.

        Returns:
            Mapping from placeholder name to value.
        """
        return MappingProxyType(
            {
                "CLI_NAME": self.cli_name,
                "VERSION": version,
                "TAGLINE": self.tagline,
                "QUOTE": self.quote,
                "QUOTE_AUTHOR": self.quote_author,
                "BREW_LINK": self.resolved_brew_link,
                "EMOJI": self.emoji,
            }
        )


def _field_names() -> List[str]:
    return [f.name for f in dataclasses.fields(ReadmeSettings)]


def load_config_file(config_file: Path) -> Dict[str, Any]:
    """Load settings from a YAML config file.

    Args:
        config_file: Path to the YAML file.

    Returns:
        The settings found in the file.

    Raises:
        ConfigurationError: If the file is not valid YAML, is not a mapping, or
            contains unknown keys.
    """
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_file} must contain a mapping of settings")

    unknown = sorted(set(data) - set(_field_names()))
    if unknown:
        raise ConfigurationError(f"Unknown setting(s) in {config_file}: {', '.join(unknown)}")

    # A null entry leaves the setting at its default
    data = {key: value for key, value in data.items() if value is not None}

    logger.debug(f"Loaded {len(data)} setting(s) from {config_file}")
    return data


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect settings from ``README_BUILDER_*`` environment variables."""
    if environ is None:
        environ = os.environ
    values = {}
    for name in ENV_FIELDS:
        env_name = f"{ENV_PREFIX}{name.upper()}"
        if environ.get(env_name):
            values[name] = environ[env_name]
    return values


def load_settings(
    config_file: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ReadmeSettings:
    """Resolve settings from defaults, config file, environment and overrides.

    Args:
        config_file: Explicit config file. When omitted, ``.readme-builder.yaml``
            in the working directory is used if it exists.
        overrides: Highest-precedence values; entries set to None are ignored.
        environ: Environment to read; defaults to ``os.environ``.

    Returns:
        The resolved settings.

    Raises:
        ConfigurationError: If the config file is missing or invalid, or a
            value is invalid.
    """
    values: Dict[str, Any] = {}

    if config_file is not None:
        if not config_file.is_file():
            raise ConfigurationError(f"Config file not found: {config_file}")
        values.update(load_config_file(config_file))
    else:
        default_file = Path(DEFAULT_CONFIG_FILE)
        if default_file.is_file():
            values.update(load_config_file(default_file))

    values.update(settings_from_env(environ))

    if overrides:
        values.update({key: value for key, value in overrides.items() if value is not None})

    return ReadmeSettings(**values)
