"""Terminal rendering of lint diagnostics."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from rich.console import Console
from rich.text import Text

from .diagnostics import Diagnostic, Severity

SEVERITY_RANK = {Severity.ERROR: 0, Severity.WARNING: 1}
SEVERITY_STYLE = {Severity.ERROR: "red", Severity.WARNING: "yellow"}


def group_by_file(diagnostics: Iterable[Diagnostic]) -> Dict[str, List[Diagnostic]]:
    """Group diagnostics per file; within a file errors come first, then by line."""
    grouped: Dict[str, List[Diagnostic]] = defaultdict(list)
    for diagnostic in diagnostics:
        grouped[diagnostic.file].append(diagnostic)
    return {
        file: sorted(items, key=lambda d: (SEVERITY_RANK[d.severity], d.line))
        for file, items in sorted(grouped.items())
    }


def count_issues(diagnostics: Iterable[Diagnostic]) -> Tuple[int, int]:
    """Return ``(errors, warnings)``."""
    errors = warnings = 0
    for diagnostic in diagnostics:
        if diagnostic.severity is Severity.WARNING:
            warnings += 1
        else:
            errors += 1
    return errors, warnings


def render_report(diagnostics: Iterable[Diagnostic], console: Optional[Console] = None) -> Tuple[int, int]:
    """
    Print a grouped lint report.

    Each file gets a heading followed by one row per diagnostic and, when
    present, the offending source line. Returns ``(errors, warnings)``.
    """
    console = console or Console()
    diagnostics = list(diagnostics)
    grouped = group_by_file(diagnostics)

    for index, (file, items) in enumerate(grouped.items()):
        if index > 0:
            console.print()
        console.print(Text(file, style="bold"))

        for diagnostic in items:
            line = str(diagnostic.line) if diagnostic.line > 0 else "-"
            row = f"  line {line:<4} | {diagnostic.severity.value:<7} | {diagnostic.message}"
            console.print(Text(row, style=SEVERITY_STYLE[diagnostic.severity]))

            snippet = (diagnostic.snippet or "").strip()
            if snippet:
                console.print(Text(f"    > {snippet}", style="dim"))

    errors, warnings = count_issues(diagnostics)
    if grouped:
        console.print()
    summary_style = "red" if errors else ("yellow" if warnings else "green")
    console.print(Text(f"{errors} error(s), {warnings} warning(s)", style=summary_style))
    return errors, warnings


__all__ = ["render_report", "group_by_file", "count_issues"]
