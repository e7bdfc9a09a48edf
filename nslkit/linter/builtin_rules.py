"""Built-in structural lint rules for NSL templates."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, List, Optional

from nslkit.config import LintOptions

from .diagnostics import Diagnostic, Severity
from .rules import LintRule

if TYPE_CHECKING:
    from .core import LintContext

# Characters of the Cyrillic script: the base and supplement blocks, the
# extended blocks, two phonetic modifier letters and the two combining half marks.
CYRILLIC_RE = re.compile(
    "[\u0400-\u052f\u1c80-\u1c8f\u1d2b\u1d78\u2de0-\u2dff\ua640-\ua69f\ufe2e\ufe2f"
    "\U0001e030-\U0001e08f]"
)

DELIMITER_PAIRS = (
    ("{{", "}}"),
    ("{%", "%}"),
    ("{#", "#}"),
)

BLOCK_TAG_RE = re.compile(r"\{%-?\s*(\w+)")
BLOCK_OPENERS = frozenset({"if", "for", "block"})
BLOCK_CLOSERS = {"endif": "if", "endfor": "for", "endblock": "block"}


class CyrillicRule(LintRule):
    """Flag lines containing Cyrillic characters."""

    def __init__(self):
        super().__init__(
            rule_id="cyrillic",
            description="Detect lines containing Cyrillic characters",
        )

    def check(self, context: LintContext) -> List[Diagnostic]:
        findings = []
        for number, line in enumerate(context.get_lines(), start=1):
            if CYRILLIC_RE.search(line):
                findings.append(Diagnostic(
                    file=context.file_path,
                    line=number,
                    severity=Severity.WARNING,
                    message="Line contains Cyrillic characters",
                    snippet=line,
                    rule_id=self.rule_id,
                ))
        return findings


class CommentRule(LintRule):
    """Flag lines containing NSL comment delimiters."""

    def __init__(self):
        super().__init__(
            rule_id="nsl-comment",
            description="Detect lines containing {# ... #} comments",
        )

    def check(self, context: LintContext) -> List[Diagnostic]:
        findings = []
        for number, line in enumerate(context.get_lines(), start=1):
            if "{#" in line or "#}" in line:
                findings.append(Diagnostic(
                    file=context.file_path,
                    line=number,
                    severity=Severity.WARNING,
                    message="Line contains an NSL comment",
                    snippet=line,
                    rule_id=self.rule_id,
                ))
        return findings


class DelimiterBalanceRule(LintRule):
    """Each opening delimiter must occur as often as its closing partner."""

    def __init__(self):
        super().__init__(
            rule_id="unbalanced-delimiters",
            description="Check that {{ }}, {% %} and {# #} occur in matching counts",
        )

    def check(self, context: LintContext) -> List[Diagnostic]:
        content = context.content
        findings = []
        for opener, closer in DELIMITER_PAIRS:
            if content.count(opener) != content.count(closer):
                findings.append(Diagnostic(
                    file=context.file_path,
                    line=1,
                    severity=Severity.ERROR,
                    message=f"unbalanced delimiters across file: {opener} and {closer}",
                    rule_id=self.rule_id,
                ))
        return findings


class BlockTerminationRule(LintRule):
    """
    Match block tags with a stack, independently of the parser.

    Only the first failure is reported: a closer with nothing open, a closer
    for the wrong block, or blocks still open at end of file.
    """

    def __init__(self):
        super().__init__(
            rule_id="block-termination",
            description="Check that if/for/block tags are closed in order",
        )

    def check(self, context: LintContext) -> List[Diagnostic]:
        stack: List[str] = []

        for match in BLOCK_TAG_RE.finditer(context.content):
            tag = match.group(1)
            if tag in BLOCK_OPENERS:
                stack.append(tag)
            elif tag in BLOCK_CLOSERS:
                if not stack:
                    return [self._finding(context, f"unexpected closing tag: {tag}")]
                if stack[-1] != BLOCK_CLOSERS[tag]:
                    return [self._finding(
                        context,
                        f"mismatched closing tag: expected end for {stack[-1]}, but got {tag}",
                    )]
                stack.pop()

        if stack:
            return [self._finding(context, f"unclosed block(s): {', '.join(stack)}")]
        return []

    def _finding(self, context: LintContext, message: str) -> Diagnostic:
        return Diagnostic(
            file=context.file_path,
            line=1,
            severity=Severity.ERROR,
            message=message,
            rule_id=self.rule_id,
        )


def get_default_rules(options: Optional[LintOptions] = None) -> List[LintRule]:
    """Get the default set of lint rules, in the order they run."""
    options = options or LintOptions()
    rules: List[LintRule] = []
    if options.check_cyrillic:
        rules.append(CyrillicRule())
    if options.check_comments:
        rules.append(CommentRule())
    rules.append(DelimiterBalanceRule())
    rules.append(BlockTerminationRule())
    return rules


__all__ = [
    "CyrillicRule",
    "CommentRule",
    "DelimiterBalanceRule",
    "BlockTerminationRule",
    "get_default_rules",
]
