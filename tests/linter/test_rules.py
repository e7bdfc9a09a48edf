"""Test individual structural lint rules."""

import pytest

from nslkit.config import LintOptions
from nslkit.linter.builtin_rules import (
    BlockTerminationRule,
    CommentRule,
    CyrillicRule,
    DelimiterBalanceRule,
    get_default_rules,
)
from nslkit.linter.core import LintContext
from nslkit.linter.diagnostics import Severity


def create_context(source: str) -> LintContext:
    """Helper to create lint context from source."""
    return LintContext(source_text=source, file_path="test.nsl")


def messages(rule, source):
    return [finding.message for finding in rule.check(create_context(source))]


class TestCyrillicRule:
    def test_flags_each_line_once(self):
        source = "{{ a }}\nПривет мир\n{{ b }} ёж\n"
        findings = CyrillicRule().check(create_context(source))
        assert [(f.line, f.snippet) for f in findings] == [(2, "Привет мир"), (3, "{{ b }} ёж")]
        assert all(f.severity is Severity.WARNING for f in findings)
        assert all(f.message == "Line contains Cyrillic characters" for f in findings)

    def test_latin_text_passes(self):
        assert messages(CyrillicRule(), "plain {{ text }} café") == []

    def test_extended_cyrillic(self):
        assert messages(CyrillicRule(), "Ԁ Ꙁ") == ["Line contains Cyrillic characters"]

    @pytest.mark.parametrize("char", ["\u1d2b", "\u1d78", "\ufe2e", "\ufe2f", "\U0001e030"])
    def test_cyrillic_outside_main_blocks(self, char):
        assert messages(CyrillicRule(), "x" + char) == ["Line contains Cyrillic characters"]


class TestCommentRule:
    def test_flags_open_and_close_markers(self):
        source = "{# start\nmiddle\nend #}\n{{ a }} {# inline #}\n"
        findings = CommentRule().check(create_context(source))
        assert [f.line for f in findings] == [1, 3, 4]
        assert findings[2].snippet == "{{ a }} {# inline #}"
        assert findings[0].message == "Line contains an NSL comment"

    def test_no_comments(self):
        assert messages(CommentRule(), "{{ a }}\n{% set b = 1 %}") == []


class TestDelimiterBalanceRule:
    def test_balanced(self):
        assert messages(DelimiterBalanceRule(), "{{ a }}{% if b %}{# c #}{% endif %}") == []

    @pytest.mark.parametrize("source,expected", [
        ("{{ a }", ["unbalanced delimiters across file: {{ and }}"]),
        ("{% if a", ["unbalanced delimiters across file: {% and %}"]),
        ("{# note", ["unbalanced delimiters across file: {# and #}"]),
        ("{{ {% {#", [
            "unbalanced delimiters across file: {{ and }}",
            "unbalanced delimiters across file: {% and %}",
            "unbalanced delimiters across file: {# and #}",
        ]),
    ])
    def test_unbalanced(self, source, expected):
        assert messages(DelimiterBalanceRule(), source) == expected

    def test_findings_are_errors_on_line_one(self):
        [finding] = DelimiterBalanceRule().check(create_context("\n\n{{ a"))
        assert finding.line == 1
        assert finding.severity is Severity.ERROR
        assert finding.rule_id == "unbalanced-delimiters"


class TestBlockTerminationRule:
    def test_well_nested(self):
        source = "{% if a %}{% for x in y %}{% endfor %}{% endif %}{% block b %}{% endblock %}"
        assert messages(BlockTerminationRule(), source) == []

    def test_unexpected_closing_tag(self):
        assert messages(BlockTerminationRule(), "{% endif %}") == ["unexpected closing tag: endif"]

    def test_mismatched_closing_tag(self):
        assert messages(BlockTerminationRule(), "{% if a %}{% endfor %}") == [
            "mismatched closing tag: expected end for if, but got endfor"
        ]

    def test_unclosed_blocks_listed_in_order(self):
        assert messages(BlockTerminationRule(), "{% if a %}{% for x in y %}") == [
            "unclosed block(s): if, for"
        ]

    def test_only_first_failure_is_reported(self):
        assert messages(BlockTerminationRule(), "{% endfor %}{% endif %}{% if a %}") == [
            "unexpected closing tag: endfor"
        ]

    def test_whitespace_control_dash(self):
        assert messages(BlockTerminationRule(), "{%- if a %}{%-endif %}") == []

    def test_other_tags_are_ignored(self):
        assert messages(BlockTerminationRule(), "{% set x = 1 %}{% else %}{% elif %}") == []


class TestDefaultRules:
    def test_order(self):
        assert [rule.rule_id for rule in get_default_rules()] == [
            "cyrillic",
            "nsl-comment",
            "unbalanced-delimiters",
            "block-termination",
        ]

    def test_optional_rules_can_be_disabled(self):
        options = LintOptions(check_cyrillic=False, check_comments=False)
        assert [rule.rule_id for rule in get_default_rules(options)] == [
            "unbalanced-delimiters",
            "block-termination",
        ]

    def test_repr(self):
        assert repr(CyrillicRule()) == "CyrillicRule('cyrillic')"


class TestLintContext:
    def test_lines_ignore_final_newline_and_carriage_returns(self):
        context = create_context("a\r\nb\n")
        assert context.get_lines() == ["a", "b"]
        assert context.get_line(2) == "b"
        assert context.get_line(3) is None
        assert context.content == "a\nb\n"

    def test_content_always_ends_with_newline(self):
        assert create_context("a").content == "a\n"
        assert create_context("").content == ""
