"""CLI binary resolution and version extraction."""

import logging
import os
import re
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from .constants import UNKNOWN_VERSION
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Matches versions such as 1.2.3, v0.10.0-rc1 or 2.0.1+build.5
VERSION_RE = re.compile(r"\bv?(\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.\-]+)?)")


def resolve_cli_binary(cli_path: Optional[Path], cli_name: str) -> Path:
    """Locate the CLI binary the README documents.

    Args:
        cli_path: Explicit path to the binary, if given.
        cli_name: Name to look up on PATH when no explicit path is given.

    Returns:
        Path to an executable file.

    Raises:
        ConfigurationError: If the binary cannot be found or is not executable.
    """
    if cli_path is None:
        if not cli_name:
            raise ConfigurationError("No CLI binary given and no CLI name to look up")
        found = shutil.which(cli_name)
        if found is None:
            raise ConfigurationError(f"CLI binary '{cli_name}' not found on PATH")
        logger.debug(f"Auto-detected CLI binary at {found}")
        cli_path = Path(found)

    if not cli_path.is_file():
        raise ConfigurationError(f"CLI binary not found: {cli_path}")
    if not os.access(cli_path, os.X_OK):
        raise ConfigurationError(f"CLI binary is not executable: {cli_path}")
    return cli_path


def parse_version(output: str) -> Optional[str]:
    """Extract the first semantic version from a block of text."""
    match = VERSION_RE.search(output)
    return match.group(1) if match else None


def extract_version(binary: Path) -> str:
    """Ask a CLI binary for its version.

    Runs ``<binary> --version`` once. A failed run or output without a version
    number is not fatal.

    Args:
        binary: Path to the CLI binary.

    Returns:
        The version string, or ``unknown``.
    """
    try:
        result = subprocess.run(
            [str(binary), "--version"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        logger.warning(f"Could not run {binary} --version: {e}")
        return UNKNOWN_VERSION

    version = parse_version(result.stdout) or parse_version(result.stderr)
    if version is None:
        logger.warning(f"No version number found in output of {binary} --version")
        return UNKNOWN_VERSION

    logger.debug(f"Detected version {version} from {binary}")
    return version
