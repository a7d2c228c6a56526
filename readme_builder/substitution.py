"""Placeholder substitution for template lines."""

from typing import List, Mapping, Optional

from .constants import INTERNAL_COMMENT_MARKER, TOKEN_CLOSE, TOKEN_OPEN


def is_internal_comment(line: str) -> bool:
    """Check whether a line is a template-authoring note.

    Args:
        line: A template line.

    Returns:
        True if the line starts with the internal comment marker.
    """
    return line.startswith(INTERNAL_COMMENT_MARKER)


def substitute(line: str, mapping: Mapping[str, str]) -> str:
    """Replace every ``{{KEY}}`` token whose key is in the mapping.

    The line is scanned once from left to right, so a substituted value is
    never scanned again. Tokens whose key is not in the mapping are kept
    verbatim.

    Args:
        line: The line to process.
        mapping: Placeholder name to replacement value.

    Returns:
        The line with all known tokens replaced.
    """
    parts = []
    pos = 0
    while True:
        start = line.find(TOKEN_OPEN, pos)
        if start == -1:
            break
        end = line.find(TOKEN_CLOSE, start + len(TOKEN_OPEN))
        if end == -1:
            break
        name = line[start + len(TOKEN_OPEN):end]
        if name in mapping:
            parts.append(line[pos:start])
            parts.append(mapping[name])
            pos = end + len(TOKEN_CLOSE)
        else:
            # Keep the opening braces and resume right after them
            parts.append(line[pos:start + len(TOKEN_OPEN)])
            pos = start + len(TOKEN_OPEN)
    parts.append(line[pos:])
    return "".join(parts)


def process_line(line: str, mapping: Mapping[str, str]) -> Optional[str]:
    """Apply comment suppression and substitution to a single line.

    Args:
        line: The line to process.
        mapping: Placeholder name to replacement value.

    Returns:
        None for internal comment lines, otherwise the substituted line.
    """
    if is_internal_comment(line):
        return None
    return substitute(line, mapping)


def find_placeholders(line: str) -> List[str]:
    """List the names of all ``{{NAME}}`` tokens in a line, in order."""
    names = []
    pos = 0
    while True:
        start = line.find(TOKEN_OPEN, pos)
        if start == -1:
            return names
        end = line.find(TOKEN_CLOSE, start + len(TOKEN_OPEN))
        if end == -1:
            return names
        name = line[start + len(TOKEN_OPEN):end]
        if name and TOKEN_OPEN not in name:
            names.append(name)
            pos = end + len(TOKEN_CLOSE)
        else:
            pos = start + len(TOKEN_OPEN)
