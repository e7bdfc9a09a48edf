"""
Linter for NSL templates.

Structural rules run over the raw text first. Only a file that passes them
is parsed, and only a file that parses and has declared parameters goes
through scope analysis for undefined variables.
"""

from __future__ import annotations

__all__ = [
    "NSLLinter",
    "LintContext",
    "LintRule",
    "Diagnostic",
    "Severity",
    "ScopeAnalyzer",
    "GLOBAL_NAMES",
    "get_default_rules",
    "load_declared_parameters",
    "fix_comment",
    "is_fixable",
    "apply_fixes",
    "render_report",
]

from .builtin_rules import get_default_rules
from .core import LintContext, NSLLinter
from .diagnostics import Diagnostic, Severity
from .fixes import apply_fixes, fix_comment, is_fixable
from .metadata import load_declared_parameters
from .report import render_report
from .rules import LintRule
from .scope import GLOBAL_NAMES, ScopeAnalyzer
