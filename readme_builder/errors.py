"""Exceptions raised by readme_builder."""

from pathlib import Path
from typing import Iterable


class ReadmeBuilderError(Exception):
    """Base class for all readme_builder errors."""


class ConfigurationError(ReadmeBuilderError):
    """Raised when the inputs needed to render a README are invalid or absent."""


class MissingFragmentsError(ReadmeBuilderError):
    """Raised when one or more template fragments cannot be found.

    Every missing path is collected so they can all be reported at once.
    """

    def __init__(self, paths: Iterable[Path]):
        self.paths = list(paths)
        listing = "\n".join(f"  - {path}" for path in self.paths)
        super().__init__(f"Missing {len(self.paths)} template fragment(s):\n{listing}")
