"""README writer: resolves inputs, renders fragments and writes the result."""

import dataclasses
import enum
import logging
import sys
import tempfile
from pathlib import Path
from typing import Optional, TextIO, Tuple

from .config import ReadmeSettings
from .discovery import discover_fragments, load_fragments
from .renderer import RenderedDocument, TemplateRenderer
from .tree import TreeNormalizer, TreeResult
from .version import extract_version, resolve_cli_binary

logger = logging.getLogger(__name__)


class WriteMode(str, enum.Enum):
    """What to do with the rendered README."""

    WRITE = "write"
    CHECK = "check"
    DRY_RUN = "dry-run"


class ReadmeWriter:
    """Builds a README from template fragments for a command-line tool."""

    def __init__(
        self,
        settings: ReadmeSettings,
        cli_path: Optional[Path] = None,
        version: Optional[str] = None,
        normalizer: Optional[TreeNormalizer] = None,
        diagnostics: Optional[TextIO] = None,
    ):
        """Initialize the README writer.

        Args:
            settings: Resolved settings (values, template directory, output path).
            cli_path: Explicit path to the CLI binary. Looked up on PATH by
                ``settings.cli_name`` when omitted.
            version: Explicit version string; skips asking the binary.
            normalizer: Tree normalizer to use; defaults to eza with a tree fallback.
            diagnostics: Stream receiving the tree in dry-run mode (default stderr).
        """
        self.settings = settings
        self.cli_path = cli_path
        self.version = version
        self.normalizer = normalizer or TreeNormalizer(depth=settings.tree_depth)
        self.diagnostics = diagnostics
        self.readme_file = settings.output

    def _read_existing(self) -> Optional[str]:
        """Read the current README, or None if it does not exist yet."""
        if not self.readme_file.exists():
            return None
        with open(self.readme_file, "r", encoding="utf-8") as f:
            return f.read()

    def _check_readme_file(self, document: RenderedDocument) -> bool:
        """Check whether the README on disk differs from the rendered document.

        Returns:
            True if there's a diff, False if content matches.
        """
        has_diff = self._read_existing() != document.text
        if has_diff:
            logger.warning(f"Out of sync: {self.readme_file}")
        else:
            logger.info(f"{self.readme_file} is up to date")
        return has_diff

    def _write_readme_file(self, document: RenderedDocument) -> None:
        if self.readme_file.exists():
            logger.info(f"README exists at {self.readme_file}, regenerating it")
        logger.debug(f"Writing {len(document.lines)} lines to {self.readme_file}")
        document.write_to(self.readme_file)
        logger.info(f"README generated successfully at {self.readme_file}")

    def _emit_tree(self, tree: TreeResult) -> None:
        stream = self.diagnostics if self.diagnostics is not None else sys.stderr
        stream.write(tree.text + "\n")
        stream.flush()

    def render(self, scratch_dir: Path) -> Tuple[RenderedDocument, TreeResult]:
        """Resolve all inputs and render the README.

        All configuration problems are raised before the tree tools run.

        Args:
            scratch_dir: Temporary directory for intermediate tree output.

        Returns:
            The rendered document and the tree embedded in it.

        Raises:
            ConfigurationError: If the template directory or CLI binary is invalid.
            MissingFragmentsError: If any template fragment is missing.
        """
        fragment_paths = discover_fragments(self.settings.template_dir, self.settings.fragments)
        binary = resolve_cli_binary(self.cli_path, self.settings.cli_name)
        settings = self.settings
        if not settings.cli_name:
            settings = dataclasses.replace(settings, cli_name=binary.name)

        version = self.version or extract_version(binary)
        mapping = settings.to_mapping(version)
        fragments = load_fragments(fragment_paths)

        tree = self.normalizer.produce_tree(self.settings.tree_root, scratch_dir)
        logger.info(f"Directory tree source: {tree.source.value}")

        document = TemplateRenderer(mapping, tree).render(fragments)
        logger.debug(f"README content length: {len(document.text)} characters")
        return document, tree

    def generate(self, mode: WriteMode = WriteMode.WRITE) -> bool:
        """Generate the README.

        Args:
            mode: WRITE to write the README, CHECK to only compare it with the
                file on disk, DRY_RUN to print just the directory tree.

        Returns:
            True if the README on disk differs from the rendered one (CHECK
            mode only), False otherwise.
        """
        with tempfile.TemporaryDirectory(prefix="readme-builder-") as tmp:
            document, tree = self.render(Path(tmp))

        if mode == WriteMode.DRY_RUN:
            self._emit_tree(tree)
            return False
        if mode == WriteMode.CHECK:
            return self._check_readme_file(document)

        self._write_readme_file(document)
        return False
