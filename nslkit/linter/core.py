"""Lint orchestrator: structural rules, parsing and scope analysis per file."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from nslkit.config import LintOptions
from nslkit.errors import MetadataError
from nslkit.lang.parser import parse

from .builtin_rules import get_default_rules
from .diagnostics import Diagnostic, Severity, has_errors
from .metadata import load_declared_parameters
from .rules import LintRule
from .scope import ScopeAnalyzer

PathLike = Union[str, Path]


@dataclass
class LintContext:
    """Context provided to lint rules for analysis."""

    source_text: str
    file_path: str
    options: LintOptions = field(default_factory=LintOptions)

    def get_lines(self) -> List[str]:
        """Source lines without their terminators; a final newline adds no line."""
        lines = self.source_text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return [line[:-1] if line.endswith("\r") else line for line in lines]

    def get_line(self, line_number: int) -> Optional[str]:
        """Get a specific source line (1-indexed)."""
        lines = self.get_lines()
        if 1 <= line_number <= len(lines):
            return lines[line_number - 1]
        return None

    @property
    def content(self) -> str:
        """The text rebuilt from :meth:`get_lines` with ``\\n`` after every line."""
        return "".join(f"{line}\n" for line in self.get_lines())


class NSLLinter:
    """
    Runs the lint pipeline for NSL templates.

    For each document:
    1. Every structural rule runs over the raw text
    2. If no rule reported an error, the text is parsed
    3. If parsing succeeded and declared parameters are known, the scope
       analyzer reports undefined variables

    Syntax errors are not reported by the linter; they only stop analysis.
    """

    def __init__(self, options: Optional[LintOptions] = None, rules: Optional[List[LintRule]] = None):
        self.options = options or LintOptions()
        self.rules = rules if rules is not None else get_default_rules(self.options)
        self.logger = logging.getLogger(__name__)

    def lint_document(
        self,
        source_text: str,
        file_path: str = "untitled.nsl",
        declared: Optional[Sequence[str]] = None,
    ) -> List[Diagnostic]:
        """
        Lint one template held in memory.

        Args:
            source_text: Template text
            file_path: Path reported in diagnostics
            declared: Declared parameter names, or ``None`` when the template
                has no parameter source, which skips semantic analysis

        Returns:
            Diagnostics in rule order, followed by undefined-variable errors
        """
        context = LintContext(source_text=source_text, file_path=file_path, options=self.options)

        diagnostics: List[Diagnostic] = []
        for rule in self.rules:
            diagnostics.extend(rule.check(context))

        if has_errors(diagnostics):
            self.logger.debug("Skipping analysis of %s: structural errors found", file_path)
            return diagnostics

        result = parse(context.content, self.options.parser)
        if result.errors:
            self.logger.debug(
                "Skipping analysis of %s: %d syntax error(s), first: %s",
                file_path,
                len(result.errors),
                result.errors[0],
            )
            return diagnostics

        if declared is None:
            self.logger.debug("Skipping analysis of %s: no declared parameters", file_path)
            return diagnostics

        analyzer = ScopeAnalyzer(declared, file_path=file_path)
        diagnostics.extend(analyzer.analyze(result.program))
        return diagnostics

    def lint_file(self, path: PathLike) -> List[Diagnostic]:
        """Read a template and its sidecar metadata from disk and lint them.

        Read failures become a single error diagnostic instead of an exception.
        """
        file_path = str(path)
        try:
            with open(path, "r", encoding="utf-8") as handle:
                source_text = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.warning("Could not read %s: %s", file_path, exc)
            return [_io_diagnostic(file_path, f"failed to read file: {exc}")]

        diagnostics: List[Diagnostic] = []
        try:
            declared = load_declared_parameters(
                path,
                file_suffix=self.options.file_suffix,
                meta_suffixes=self.options.meta_suffixes,
            )
        except MetadataError as exc:
            self.logger.warning("Could not load metadata for %s: %s", file_path, exc.format())
            diagnostics.append(
                _io_diagnostic(file_path, f"failed to get declared parameters: {exc.message}")
            )
            declared = None

        diagnostics.extend(self.lint_document(source_text, file_path, declared))
        return diagnostics

    def collect_files(self, paths: Iterable[PathLike]) -> List[Path]:
        """Expand directories into the template files below them.

        Missing paths are skipped. The result is sorted and free of duplicates.
        """
        found = set()
        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                for candidate in path.rglob(f"*{self.options.file_suffix}"):
                    if candidate.is_file():
                        found.add(candidate)
            elif path.is_file():
                found.add(path)
            else:
                self.logger.debug("Skipping missing path %s", path)
        files = sorted(found)
        self.logger.debug("Found %d template(s) to lint", len(files))
        return files

    def lint_paths(self, paths: Iterable[PathLike]) -> List[Diagnostic]:
        """Lint every template under ``paths`` using a thread pool.

        Each worker returns its own list; results are merged in sorted path
        order so the output does not depend on scheduling.
        """
        files = self.collect_files(paths)
        if not files:
            return []

        workers = max(1, min(self.options.max_workers, len(files)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            per_file = list(executor.map(self._lint_file_guarded, files))

        diagnostics: List[Diagnostic] = []
        for file_diagnostics in per_file:
            diagnostics.extend(file_diagnostics)
        return diagnostics

    def _lint_file_guarded(self, path: Path) -> List[Diagnostic]:
        # A failure in one file must not discard the results of its siblings.
        try:
            return self.lint_file(path)
        except Exception as exc:
            self.logger.warning("Linting %s failed: %s", path, exc)
            return [_io_diagnostic(str(path), f"failed to lint file: {exc}")]


def _io_diagnostic(file_path: str, message: str) -> Diagnostic:
    return Diagnostic(
        file=file_path,
        line=1,
        severity=Severity.ERROR,
        message=message,
        rule_id="io",
    )


__all__ = ["LintContext", "NSLLinter"]
