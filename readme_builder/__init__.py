"""Generate a README from ordered template fragments.

Fragments named ``readme_*`` are concatenated in file name order, ``{{NAME}}``
placeholders are replaced with values such as the tool name and version, and a
normalized directory tree is embedded at the ``{{FOLDER_TREE}}`` marker.
"""

from .config import ReadmeSettings, load_settings
from .renderer import RenderedDocument, TemplateFragment, TemplateRenderer, render
from .substitution import substitute
from .tree import TreeNormalizer, TreeResult, TreeSource
from .writer import ReadmeWriter, WriteMode

__all__ = [
    "ReadmeSettings",
    "ReadmeWriter",
    "RenderedDocument",
    "TemplateFragment",
    "TemplateRenderer",
    "TreeNormalizer",
    "TreeResult",
    "TreeSource",
    "WriteMode",
    "load_settings",
    "render",
    "substitute",
]
