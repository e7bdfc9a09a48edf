"""Unified error model for nslkit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorLocation:
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def describe(self) -> str:
        if self.path and self.line is not None and self.column is not None:
            return f"{self.path}:{self.line}:{self.column}"
        if self.path and self.line is not None:
            return f"{self.path}:{self.line}"
        if self.path:
            return self.path
        return "unknown location"


class NSLError(Exception):
    """Base class for errors raised at the I/O and interchange seams.

    The lexer, parser and analyzer never raise; they report through lists.
    """

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, line=line, column=column)
        self.path = path
        self.line = line
        self.column = column
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        location_desc = self.location.describe()
        if location_desc != "unknown location":
            meta_parts.append(location_desc)
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class MetadataError(NSLError):
    """Raised when a skill's sidecar metadata file cannot be read or understood."""

    code = "NSL_METADATA"


class ASTDecodeError(NSLError):
    """Raised when a serialized AST document does not describe a valid tree."""

    code = "NSL_AST_DECODE"


__all__ = [
    "NSLError",
    "MetadataError",
    "ASTDecodeError",
    "ErrorLocation",
]
