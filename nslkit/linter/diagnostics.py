"""Diagnostic value objects shared by lint rules and the scope analyzer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Severity(Enum):
    """Severity levels for diagnostics."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A single lint finding for one file."""

    file: str
    line: int
    severity: Severity
    message: str
    snippet: Optional[str] = None
    rule_id: str = ""

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def format(self) -> str:
        return f"{self.file}:{self.line}: {self.message}"

    def __str__(self) -> str:
        return self.format()


def has_errors(diagnostics) -> bool:
    return any(diagnostic.is_error for diagnostic in diagnostics)


__all__ = ["Severity", "Diagnostic", "has_errors"]
