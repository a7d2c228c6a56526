"""Template rendering: substitution and tree block embedding."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Sequence, Tuple

from .constants import (
    CODE_FENCE,
    FALLBACK_BANNER,
    TREE_KEY,
    TREE_MARKER,
    UNAVAILABLE_BANNER,
    VALUE_KEYS,
)
from .substitution import find_placeholders, process_line
from .tree import TreeResult, TreeSource

logger = logging.getLogger(__name__)

BACKTICK_RUN_RE = re.compile(r"`+")


@dataclass(frozen=True)
class TemplateFragment:
    """One template file contributing an ordered slice of the README."""

    name: str
    lines: Tuple[str, ...]

    @classmethod
    def from_file(cls, path: Path) -> "TemplateFragment":
        """Read a fragment from disk.

        Args:
            path: Path to the fragment file.

        Returns:
            The fragment, named after the file.
        """
        with open(path, "r", encoding="utf-8") as f:
            return cls(name=path.name, lines=tuple(f.read().splitlines()))


@dataclass
class RenderedDocument:
    """The rendered README, held in memory as a list of lines."""

    lines: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)

    def write_to(self, path: Path) -> None:
        """Write the document to a file, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.text)


class TemplateRenderer:
    """Renders ordered template fragments into a README document.

    Each line is handled on its own: internal comments are dropped, known
    placeholders are substituted, and a line that still holds the tree marker
    is replaced by a fenced block containing the directory tree.
    """

    def __init__(self, mapping: Mapping[str, str], tree: TreeResult):
        """Initialize the renderer.

        Args:
            mapping: Placeholder values. The tree marker key is ignored.
            tree: The directory tree to embed at the tree marker.
        """
        self.mapping = {key: value for key, value in mapping.items() if key != TREE_KEY}
        self.tree = tree

    def render(self, fragments: Sequence[TemplateFragment]) -> RenderedDocument:
        """Render all fragments in the given order.

        Args:
            fragments: Fragments, already sorted by filename.

        Returns:
            The concatenated document.
        """
        document = RenderedDocument()
        for fragment in fragments:
            logger.debug(f"Rendering fragment {fragment.name} ({len(fragment.lines)} lines)")
            for line in fragment.lines:
                document.lines.extend(self.render_line(line))
        return document

    def render_line(self, line: str) -> List[str]:
        """Render a single template line.

        Args:
            line: The raw template line.

        Returns:
            The output lines this template line expands to (possibly none).
        """
        processed = process_line(line, self.mapping)
        if processed is None:
            return []
        if TREE_MARKER in processed:
            return self.tree_block()
        self._log_unresolved(processed)
        return [processed]

    def tree_block(self) -> List[str]:
        """Build the fenced tree block, preceded by a banner for lower tiers."""
        block = []
        if self.tree.source == TreeSource.FALLBACK:
            block.extend(FALLBACK_BANNER)
            block.append("")
        elif self.tree.source == TreeSource.UNAVAILABLE:
            block.extend(UNAVAILABLE_BANNER)
            block.append("")
        fence = self.fence()
        block.append(fence)
        block.extend(self.tree.lines)
        block.append(fence)
        return block

    def fence(self) -> str:
        """Code fence longer than any run of backticks in the tree lines."""
        longest = max((len(run) for line in self.tree.lines for run in BACKTICK_RUN_RE.findall(line)), default=0)
        if longest < len(CODE_FENCE):
            return CODE_FENCE
        return "`" * (longest + 1)

    def _log_unresolved(self, line: str) -> None:
        for name in find_placeholders(line):
            if name in VALUE_KEYS and name not in self.mapping:
                logger.debug(f"Placeholder {{{{{name}}}}} has no value, leaving it as is")
            elif name not in VALUE_KEYS:
                logger.debug(f"Unrecognized placeholder {{{{{name}}}}} left as is")


def render(
    fragments: Sequence[TemplateFragment],
    mapping: Mapping[str, str],
    tree: TreeResult,
) -> RenderedDocument:
    """Render fragments with the given values and directory tree."""
    return TemplateRenderer(mapping, tree).render(fragments)
