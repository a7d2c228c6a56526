"""Template fragment discovery and loading."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .constants import FRAGMENT_GLOB
from .errors import ConfigurationError, MissingFragmentsError
from .renderer import TemplateFragment

logger = logging.getLogger(__name__)


def discover_fragments(template_dir: Path, names: Optional[Sequence[str]] = None) -> List[Path]:
    """Find the template fragments to render, in rendering order.

    Args:
        template_dir: Directory holding the ``readme_*`` fragment files.
        names: Explicit fragment file names. When omitted, every ``readme_*``
            entry in the directory is used.

    Returns:
        Fragment paths sorted lexically by file name.

    Raises:
        ConfigurationError: If the template directory does not exist or holds
            no fragments.
        MissingFragmentsError: If any fragment path is not a readable file.
    """
    if not template_dir.is_dir():
        raise ConfigurationError(f"Template directory not found: {template_dir}")

    if names is not None:
        candidates = [template_dir / name for name in names]
    else:
        candidates = [path for path in template_dir.glob(FRAGMENT_GLOB) if not path.is_dir()]

    if not candidates:
        raise ConfigurationError(f"No {FRAGMENT_GLOB} fragments found in {template_dir}")

    paths = sorted(candidates, key=lambda path: path.name)

    # Dangling links show up in the glob but are not files
    missing = [path for path in paths if not path.is_file()]
    if missing:
        raise MissingFragmentsError(missing)

    logger.debug(f"Found {len(paths)} fragment(s) in {template_dir}: {', '.join(p.name for p in paths)}")
    return paths


def load_fragments(paths: Sequence[Path]) -> List[TemplateFragment]:
    """Read fragments from disk, keeping the given order."""
    return [TemplateFragment.from_file(path) for path in paths]
