"""
Formatting for NSL templates.

Two levels are provided:
1. ``format_text``/``format_file`` normalize whitespace and never parse
2. ``NSLPrinter``/``NSLFormatter`` rebuild canonical layout from the syntax tree
"""

from __future__ import annotations

__all__ = [
    "NSLPrinter",
    "print_program",
    "NSLFormatter",
    "FormattedResult",
    "FormattingOptions",
    "format_text",
    "format_file",
]

from nslkit.config import FormattingOptions

from .core import FormattedResult, NSLFormatter, format_file, format_text
from .printer import NSLPrinter, print_program

