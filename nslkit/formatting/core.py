"""Whitespace and canonical formatting for NSL templates."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from nslkit.config import FormattingOptions, ParserOptions
from nslkit.lang.parser import parse

from .printer import NSLPrinter

logger = logging.getLogger(__name__)

TRAILING_WHITESPACE_RE = re.compile(r"[\t ]+$", re.MULTILINE)


@dataclass
class FormattedResult:
    """Result of a formatting operation."""

    formatted_text: str
    is_changed: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def success(self) -> bool:
        """Check if formatting was successful."""
        return len(self.errors) == 0


def _apply_text_cleanup(text: str, options: FormattingOptions) -> str:
    if options.trim_trailing_whitespace:
        text = TRAILING_WHITESPACE_RE.sub("", text)

    # max_empty_lines blank lines means at most max_empty_lines + 1 newlines in a row.
    limit = max(options.max_empty_lines, 0) + 1
    text = re.sub(r"\n{%d,}" % (limit + 1), "\n" * limit, text)

    text = text.strip()
    if options.insert_final_newline:
        text += "\n"
    return text


def format_text(text: str, options: Optional[FormattingOptions] = None) -> FormattedResult:
    """
    Normalize whitespace in template text without parsing it.

    Trailing spaces and tabs are removed from every line, runs of blank lines
    are collapsed, and the text ends with exactly one newline. Works on any
    input, including templates that do not parse.
    """
    options = options or FormattingOptions()
    formatted = _apply_text_cleanup(text, options)
    return FormattedResult(formatted_text=formatted, is_changed=formatted != text)


def format_file(path: Union[str, Path], options: Optional[FormattingOptions] = None) -> bool:
    """Apply :func:`format_text` to a file in place.

    Returns True when the file was rewritten. Read and write errors propagate.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8", newline="") as handle:
        original = handle.read()

    result = format_text(original, options)
    if not result.is_changed:
        return False

    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(result.formatted_text)
    logger.debug("Formatted %s", path)
    return True


class NSLFormatter:
    """
    Canonical formatter built on the parser and :class:`NSLPrinter`.

    Unlike :func:`format_text` this rewrites the template layout. Text that
    does not parse is returned unchanged together with the syntax errors.
    """

    def __init__(
        self,
        options: Optional[FormattingOptions] = None,
        parser_options: Optional[ParserOptions] = None,
    ):
        self.options = options or FormattingOptions()
        self.parser_options = parser_options

    def format_document(self, source_text: str, file_path: str = "untitled.nsl") -> FormattedResult:
        result = parse(source_text, self.parser_options)
        if result.errors:
            logger.debug("Not formatting %s: %d syntax error(s)", file_path, len(result.errors))
            return FormattedResult(
                formatted_text=source_text,
                is_changed=False,
                errors=[f"Parse error: {message}" for message in result.errors],
            )

        warnings = []
        if "{#" in source_text:
            warnings.append(f"{file_path}: comments are not preserved by canonical formatting")

        formatted = NSLPrinter(self.options).print(result.program)
        return FormattedResult(
            formatted_text=formatted,
            is_changed=formatted != source_text,
            warnings=warnings,
        )


__all__ = ["FormattedResult", "NSLFormatter", "format_text", "format_file"]
