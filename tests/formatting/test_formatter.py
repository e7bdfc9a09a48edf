"""Tests for whitespace formatting and the canonical formatter."""

from pathlib import Path

from nslkit.config import FormattingOptions
from nslkit.formatting import NSLFormatter, format_file, format_text


class TestFormatText:
    def test_trailing_whitespace_and_blank_runs(self):
        result = format_text("a  \n\n\n\nb\t\n")
        assert result.success()
        assert result.is_changed
        assert result.formatted_text == "a\n\nb\n"

    def test_single_blank_line_is_kept(self):
        result = format_text("a\n\nb\n")
        assert not result.is_changed
        assert result.formatted_text == "a\n\nb\n"

    def test_leading_and_trailing_blank_lines_removed(self):
        assert format_text("\n\n  {{ x }}\n\n\n").formatted_text == "{{ x }}\n"

    def test_missing_final_newline_added(self):
        result = format_text("{{ x }}")
        assert result.is_changed
        assert result.formatted_text == "{{ x }}\n"

    def test_indentation_is_preserved(self):
        text = "{% if a %}\n    {{ a }}\n{% endif %}\n"
        assert not format_text(text).is_changed

    def test_unparseable_text_is_still_formatted(self):
        assert format_text("{% if %}   \n{{").formatted_text == "{% if %}\n{{\n"

    def test_empty_text(self):
        assert format_text("").formatted_text == "\n"

    def test_options(self):
        options = FormattingOptions(max_empty_lines=0, insert_final_newline=False)
        assert format_text("a\n\nb\n", options).formatted_text == "a\nb"

    def test_trailing_whitespace_can_be_kept(self):
        options = FormattingOptions(trim_trailing_whitespace=False)
        assert format_text("a  \nb", options).formatted_text == "a  \nb\n"


class TestFormatFile:
    def test_rewrites_only_when_changed(self, temp_file):
        path = temp_file("{{ x }}   \n\n\n\n{{ y }}")
        assert format_file(path) is True
        assert Path(path).read_text(encoding="utf-8") == "{{ x }}\n\n{{ y }}\n"
        assert format_file(path) is False

    def test_clean_file_is_untouched(self, temp_file):
        path = temp_file("{{ x }}\n")
        before = Path(path).stat().st_mtime_ns
        assert format_file(path) is False
        assert Path(path).stat().st_mtime_ns == before


class TestNSLFormatter:
    def test_format_document(self, messy_template, canonical_template):
        formatter = NSLFormatter(FormattingOptions(indent_size=4))
        result = formatter.format_document(messy_template)
        assert result.success()
        assert result.is_changed
        assert result.formatted_text == canonical_template

    def test_canonical_input_is_unchanged(self, canonical_template):
        result = NSLFormatter().format_document(canonical_template)
        assert result.success()
        assert not result.is_changed

    def test_syntax_errors_return_original(self, malformed_template):
        result = NSLFormatter().format_document(malformed_template)
        assert not result.success()
        assert not result.is_changed
        assert result.formatted_text == malformed_template
        assert result.errors[0] == "Parse error: expected next token to be }}, got {% instead"

    def test_comment_warning(self):
        result = NSLFormatter().format_document("{# note #}{{ a }}", file_path="a.nsl")
        assert result.formatted_text == "{{ a }}\n"
        assert result.warnings == ["a.nsl: comments are not preserved by canonical formatting"]
