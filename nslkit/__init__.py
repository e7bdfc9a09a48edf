"""nslkit: lexer, parser, printer and linter for NSL skill templates."""

from __future__ import annotations

__version__ = "0.1.0"

from .config import FormattingOptions, LintOptions, ParserOptions
from .errors import ASTDecodeError, MetadataError, NSLError
from .formatting import NSLPrinter, format_file, format_text, print_program
from .lang.parser import NSLParser, ParseResult, parse
from .linter import Diagnostic, NSLLinter, ScopeAnalyzer, Severity

__all__ = [
    "__version__",
    "parse",
    "NSLParser",
    "ParseResult",
    "NSLPrinter",
    "print_program",
    "format_text",
    "format_file",
    "NSLLinter",
    "ScopeAnalyzer",
    "Diagnostic",
    "Severity",
    "ParserOptions",
    "FormattingOptions",
    "LintOptions",
    "NSLError",
    "MetadataError",
    "ASTDecodeError",
]
