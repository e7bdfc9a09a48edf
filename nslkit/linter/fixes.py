"""Automatic fixes for comment diagnostics."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Union

from nslkit.errors import NSLError

from .diagnostics import Diagnostic

logger = logging.getLogger(__name__)

COMMENT_MESSAGE = "Line contains an NSL comment"


def is_fixable(diagnostic: Diagnostic) -> bool:
    """True for comment warnings whose snippet still shows a comment marker."""
    if diagnostic.message != COMMENT_MESSAGE:
        return False
    snippet = (diagnostic.snippet or "").strip()
    if not snippet:
        return False
    return "{#" in snippet or "#}" in snippet


def _split_after_newlines(text: str) -> List[str]:
    parts = text.split("\n")
    return [part + "\n" for part in parts[:-1]] + [parts[-1]]


def _strip_comment(line: str) -> str:
    start = line.find("{#")
    end = line.find("#}")
    if start >= 0 and end >= start:
        return line[:start] + line[end + 2:]
    if start >= 0:
        return line[:start].rstrip(" \t")
    if end >= 0:
        return line[:end].rstrip(" \t")
    return line


def fix_comment(path: Union[str, Path], line: int) -> bool:
    """
    Remove the NSL comment on one line of a file.

    A line that is nothing but a ``{# ... #}`` comment is deleted. Otherwise
    the ``{#...#}`` span is cut out, or, for a lone marker, the line is cut at
    the marker and trailing blanks are dropped.

    Returns:
        True if the file was rewritten

    Raises:
        NSLError: If ``line`` is outside the file
        OSError: If the file cannot be read or written
    """
    path = Path(path)
    with path.open("r", encoding="utf-8", newline="") as handle:
        data = handle.read()

    lines = _split_after_newlines(data)
    if line <= 0 or line > len(lines):
        raise NSLError(f"line {line} out of range", path=str(path), line=line)

    index = line - 1
    original = lines[index]
    trimmed = original.strip()

    if trimmed.startswith("{#") and trimmed.endswith("#}"):
        del lines[index]
    else:
        content = original[:-1] if original.endswith("\n") else original
        newline = "\n" if original.endswith("\n") else ""
        stripped = _strip_comment(content)
        if stripped == content:
            return False
        lines[index] = stripped + newline

    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write("".join(lines))
    logger.debug("Removed comment at %s:%d", path, line)
    return True


def apply_fixes(diagnostics: Iterable[Diagnostic]) -> int:
    """Fix every fixable diagnostic and return how many lines changed.

    Lines are fixed bottom-up within each file so that deleting a line does
    not shift the line numbers of fixes still pending.
    """
    fixable = sorted(
        (d for d in diagnostics if is_fixable(d)),
        key=lambda d: (d.file, -d.line),
    )
    fixed = 0
    for diagnostic in fixable:
        if fix_comment(diagnostic.file, diagnostic.line):
            fixed += 1
    return fixed


__all__ = ["is_fixable", "fix_comment", "apply_fixes"]
