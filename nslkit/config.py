"""Runtime options for the NSL front end.

Options are plain dataclasses with defaults; nothing here reads configuration
files. Callers that own a configuration source build the options themselves.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class ParserOptions:
    """Limits applied while parsing a single template."""

    # Expression and block nesting limit; deeper input is reported, not recursed into.
    max_depth: int = 100


@dataclass
class FormattingOptions:
    """Configuration options for printing and whitespace formatting."""

    indent_size: int = 4

    # Whitespace formatter settings
    max_empty_lines: int = 1
    insert_final_newline: bool = True
    trim_trailing_whitespace: bool = True

    @property
    def indent_str(self) -> str:
        return " " * self.indent_size


@dataclass
class LintOptions:
    """Configuration for the lint orchestrator and directory walks."""

    file_suffix: str = ".nsl"
    meta_suffixes: Tuple[str, ...] = (".meta.yaml", ".meta.yml")
    check_cyrillic: bool = True
    check_comments: bool = True
    max_workers: int = 4
    parser: ParserOptions = field(default_factory=ParserOptions)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LintOptions":
        """Build options, letting ``NSL_LINT_*`` variables override the defaults."""
        env = os.environ if environ is None else environ
        options = cls()

        workers = env.get("NSL_LINT_MAX_WORKERS")
        if workers:
            try:
                options.max_workers = max(1, int(workers))
            except ValueError:
                raise ValueError(
                    f"NSL_LINT_MAX_WORKERS must be an integer, got {workers!r}"
                ) from None

        suffix = env.get("NSL_LINT_SUFFIX")
        if suffix:
            options.file_suffix = suffix if suffix.startswith(".") else f".{suffix}"

        return options


__all__ = ["ParserOptions", "FormattingOptions", "LintOptions"]
