"""Starter template fragments for a new README.

The fragments are rendered from Jinja2 templates that use ``[[ ]]`` and
``[% %]`` delimiters, so the ``{{NAME}}`` placeholders they contain are copied
through untouched.
"""

import logging
from pathlib import Path
from typing import Dict, List

import jinja2

logger = logging.getLogger(__name__)

LAYOUT_FRAGMENT = "readme_30_layout.md"


def _get_template_env() -> jinja2.Environment:
    """Get Jinja2 environment with the starter fragment templates."""
    template_dir = Path(__file__).parent / "scaffold_templates"
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(template_dir),
        block_start_string="[%",
        block_end_string="%]",
        variable_start_string="[[",
        variable_end_string="]]",
        comment_start_string="[#",
        comment_end_string="#]",
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def generate_starter_fragments(cli_name: str, with_tree: bool = True, with_quote: bool = True) -> Dict[str, str]:
    """Render the starter fragments.

    Args:
        cli_name: Name of the documented tool, used for the title.
        with_tree: Include the project layout fragment with the tree marker.
        with_quote: Include the quote in the footer.

    Returns:
        Dict of fragment filename to content.
    """
    env = _get_template_env()
    context = {
        "title": cli_name or "my-tool",
        "with_quote": with_quote,
    }

    files = {}
    for template_name in sorted(env.list_templates(extensions=["j2"])):
        filename = template_name[: -len(".j2")]
        if filename == LAYOUT_FRAGMENT and not with_tree:
            continue
        files[filename] = env.get_template(template_name).render(context)
    return files


def init_templates(
    template_dir: Path,
    cli_name: str,
    with_tree: bool = True,
    with_quote: bool = True,
    overwrite: bool = False,
) -> List[Path]:
    """Write starter fragments into a template directory.

    Args:
        template_dir: Directory to create the fragments in.
        cli_name: Name of the documented tool.
        with_tree: Include the project layout fragment.
        with_quote: Include the quote in the footer.
        overwrite: Replace fragments that already exist.

    Returns:
        Paths of the fragments that were written.
    """
    template_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for filename, content in generate_starter_fragments(cli_name, with_tree, with_quote).items():
        path = template_dir / filename
        if path.exists() and not overwrite:
            logger.info(f"Keeping existing fragment {path}")
            continue
        path.write_text(content, encoding="utf-8")
        logger.info(f"Created fragment {path}")
        written.append(path)
    return written
