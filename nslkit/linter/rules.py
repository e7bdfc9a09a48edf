"""Base class and infrastructure for lint rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .core import LintContext
    from .diagnostics import Diagnostic


class LintRule(ABC):
    """Base class for structural lint rules.

    Rules see raw template text only; they run before the parser so a file
    that fails them is never handed to semantic analysis.
    """

    def __init__(self, rule_id: str, description: str):
        self.rule_id = rule_id
        self.description = description

    @abstractmethod
    def check(self, context: "LintContext") -> List["Diagnostic"]:
        """
        Apply this rule to the given context.

        Args:
            context: Source text, path and options of the file being linted

        Returns:
            List of diagnostics, empty when the rule passes
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.rule_id!r})"


__all__ = ["LintRule"]
