"""Directory tree acquisition and normalization.

The tree shown in the README comes from an external listing tool. Tools are
tried in a fixed priority order and the first one that succeeds wins; the
tier that produced the listing is recorded so the renderer can add an
advisory banner when the preferred tool was missing.
"""

import enum
import logging
import re
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from .constants import (
    FALLBACK_TREE_TOOL,
    FRAGMENT_PREFIX,
    NOISE_GLYPHS,
    PREFERRED_TREE_TOOL,
    TREE_SCRATCH_FILE,
    TREE_UNAVAILABLE_TEXT,
)

logger = logging.getLogger(__name__)

# ESC [ ... m (colors) and ESC [ ... K (erase in line)
ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[mK]")

# Trailing summary printed by `tree`, e.g. "4 directories, 12 files"
SUMMARY_LINE_RE = re.compile(r"^\s*\d+ director(?:y|ies), \d+ files?\s*$")


class TreeSource(str, enum.Enum):
    """Tier of the tool that produced a directory tree."""

    PREFERRED = "preferred"
    FALLBACK = "fallback"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class TreeResult:
    """A normalized directory tree and the tier that produced it."""

    lines: Tuple[str, ...]
    source: TreeSource

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class TreeCommand:
    """An external directory listing tool.

    Subclasses provide the executable name and its arguments. ``fetch`` returns
    the raw output lines, or None when the tool is unavailable.
    """

    executable: str = ""
    source: TreeSource = TreeSource.FALLBACK

    def __init__(self, depth: Optional[int] = None):
        self.depth = depth

    def arguments(self) -> List[str]:
        raise NotImplementedError

    def command(self) -> List[str]:
        return [self.executable, *self.arguments()]

    def is_installed(self) -> bool:
        return shutil.which(self.executable) is not None

    def fetch(self, root: Path, scratch_file: Path) -> Optional[List[str]]:
        """Run the tool on a directory, buffering its output in a scratch file.

        Args:
            root: Directory to list.
            scratch_file: File receiving the tool's standard output.

        Returns:
            The raw output lines, or None if the tool is missing or failed.
        """
        if not self.is_installed():
            logger.debug(f"{self.executable} not found on PATH")
            return None

        command = self.command()
        logger.debug(f"Running {' '.join(command)} in {root}")
        try:
            with open(scratch_file, "w", encoding="utf-8") as out:
                result = subprocess.run(
                    command,
                    cwd=root,
                    stdout=out,
                    stderr=subprocess.DEVNULL,
                    check=False,
                )
        except OSError as e:
            logger.debug(f"Could not run {self.executable}: {e}")
            return None

        if result.returncode != 0:
            logger.debug(f"{self.executable} exited with status {result.returncode}")
            return None

        return scratch_file.read_text(encoding="utf-8", errors="replace").splitlines()


class EzaCommand(TreeCommand):
    """Preferred tree listing: ``eza --tree --all``."""

    executable = PREFERRED_TREE_TOOL
    source = TreeSource.PREFERRED

    def arguments(self) -> List[str]:
        args = ["--tree", "--all"]
        if self.depth is not None:
            args.extend(["--level", str(self.depth)])
        return args


class TreeUtilityCommand(TreeCommand):
    """Fallback tree listing: ``tree --dirsfirst -s``."""

    executable = FALLBACK_TREE_TOOL
    source = TreeSource.FALLBACK

    def arguments(self) -> List[str]:
        args = ["--dirsfirst", "-s"]
        if self.depth is not None:
            args.extend(["-L", str(self.depth)])
        return args


def strip_ansi(line: str) -> str:
    """Remove terminal color and erase-line escape sequences from a line."""
    return ANSI_ESCAPE_RE.sub("", line)


def is_noise_line(line: str, fragment_prefix: str = FRAGMENT_PREFIX) -> bool:
    """Check whether a (color-stripped) line should be left out of the tree.

    Args:
        line: An output line with escape sequences already removed.
        fragment_prefix: Filename prefix of template fragments.

    Returns:
        True for informational lines, lines naming template fragments, and
        the directory/file count summary.
    """
    if line.lstrip().startswith(NOISE_GLYPHS):
        return True
    if fragment_prefix and fragment_prefix in line:
        return True
    return SUMMARY_LINE_RE.match(line) is not None


def normalize_tree_output(raw_lines: Iterable[str], fragment_prefix: str = FRAGMENT_PREFIX) -> List[str]:
    """Clean raw tree tool output for embedding in a README.

    Args:
        raw_lines: Lines as printed by the tool.
        fragment_prefix: Filename prefix of template fragments.

    Returns:
        The remaining lines, in their original order, without trailing blanks.
    """
    cleaned = []
    for raw in raw_lines:
        line = strip_ansi(raw)
        if is_noise_line(line, fragment_prefix):
            continue
        cleaned.append(line)
    # `tree` separates its summary with an empty line
    while cleaned and not cleaned[-1].strip():
        cleaned.pop()
    return cleaned


class TreeNormalizer:
    """Produces the directory tree embedded in the README."""

    def __init__(
        self,
        commands: Optional[Sequence[TreeCommand]] = None,
        depth: Optional[int] = None,
        fragment_prefix: str = FRAGMENT_PREFIX,
    ):
        """Initialize the normalizer.

        Args:
            commands: Tree tools in priority order. Defaults to eza, then tree.
            depth: Optional maximum depth passed to the default tools.
            fragment_prefix: Filename prefix of template fragments to hide.
        """
        if commands is None:
            commands = [EzaCommand(depth), TreeUtilityCommand(depth)]
        self.commands = list(commands)
        self.fragment_prefix = fragment_prefix

    def produce_tree(self, root: Path, scratch_dir: Optional[Path] = None) -> TreeResult:
        """List a directory with the best available tool.

        Args:
            root: Directory to list.
            scratch_dir: Directory holding the scratch file for raw tool output.
                When omitted, a temporary directory is used for this call only.

        Returns:
            The normalized tree and the tier that produced it.
        """
        if scratch_dir is None:
            with tempfile.TemporaryDirectory(prefix="readme-builder-") as tmp:
                return self.produce_tree(root, Path(tmp))

        scratch_file = scratch_dir / TREE_SCRATCH_FILE
        for command in self.commands:
            raw_lines = command.fetch(root, scratch_file)
            if raw_lines is None:
                logger.info(f"Tree tool {command.executable} unavailable, trying next option")
                continue
            lines = normalize_tree_output(raw_lines, self.fragment_prefix)
            logger.debug(f"Tree generated with {command.executable} ({len(lines)} lines)")
            return TreeResult(lines=tuple(lines), source=command.source)

        logger.warning("No tree tool available, embedding a placeholder instead")
        return TreeResult(lines=(TREE_UNAVAILABLE_TEXT,), source=TreeSource.UNAVAILABLE)
