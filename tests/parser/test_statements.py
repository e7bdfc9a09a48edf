"""Tests for statement parsing and error recovery."""

import pytest

from nslkit.ast import (
    AttributeAccess,
    BlockStatement,
    ElseIfClause,
    ExpressionStatement,
    FilterExpression,
    ForStatement,
    Identifier,
    IfStatement,
    IntegerLiteral,
    OutputStatement,
    Program,
    SetStatement,
    StringLiteral,
)
from nslkit.config import ParserOptions
from nslkit.lang import Lexer
from nslkit.lang.parser import NSLParser, ParseResult, parse


def parse_ok(source):
    result = parse(source)
    assert result.errors == [], result.errors
    return result.program


def block(*statements):
    return BlockStatement(list(statements))


def out(name):
    return OutputStatement(Identifier(name))


class TestSetStatement:
    def test_set_integer(self):
        program = parse_ok("{% set x = 1 %}")
        assert program.statements == [SetStatement(Identifier("x"), IntegerLiteral(1))]

    def test_set_string(self):
        program = parse_ok("{% set greeting = 'hello' %}")
        assert program.statements == [SetStatement(Identifier("greeting"), StringLiteral("hello"))]

    def test_set_records_token_positions(self):
        stmt = parse_ok("\n  {% set x = y %}").statements[0]
        assert stmt.token.literal == "set"
        assert stmt.name.line == 2
        assert stmt.value.token.column == 14

    @pytest.mark.parametrize("source,message", [
        ("{% set = 1 %}", "expected next token to be IDENT, got = instead"),
        ("{% set x 1 %}", "expected next token to be =, got INT instead"),
        ("{% set x = %}", "no prefix parse function for %} found"),
        ("{% set x = 1", "expected next token to be %}, got EOF instead"),
    ])
    def test_malformed_set(self, source, message):
        result = parse(source)
        assert result.errors[0] == message
        assert result.program.statements == []


class TestOutputStatement:
    def test_output(self):
        assert parse_ok("{{ name }}").statements == [out("name")]

    def test_output_with_attribute_and_filter(self):
        program = parse_ok("{{ user.name | upper }}")
        assert program.statements == [
            OutputStatement(
                FilterExpression(
                    AttributeAccess(Identifier("user"), Identifier("name")),
                    Identifier("upper"),
                )
            )
        ]

    def test_missing_closing_delimiter(self):
        result = parse("{{ a b }}")
        assert result.errors == ["expected next token to be }}, got IDENT instead"]

    def test_empty_output(self):
        result = parse("{{ }}")
        assert result.errors == ["no prefix parse function for }} found"]


class TestIfStatement:
    def test_if_elif_else(self):
        program = parse_ok("{% if a %}x{% elif b %}y{% elif c %}z{% else %}w{% endif %}")
        assert program.statements == [
            IfStatement(
                condition=Identifier("a"),
                consequence=block(ExpressionStatement(Identifier("x"))),
                elseifs=[
                    ElseIfClause(Identifier("b"), block(ExpressionStatement(Identifier("y")))),
                    ElseIfClause(Identifier("c"), block(ExpressionStatement(Identifier("z")))),
                ],
                alternative=block(ExpressionStatement(Identifier("w"))),
            )
        ]

    def test_empty_bodies_are_blocks(self):
        stmt = parse_ok("{% if a %}{% else %}{% endif %}").statements[0]
        assert stmt.consequence == BlockStatement([])
        assert stmt.alternative == BlockStatement([])
        assert stmt.elseifs == []

    def test_if_without_else_has_no_alternative(self):
        stmt = parse_ok("{% if a %}{{ a }}{% endif %}").statements[0]
        assert stmt.alternative is None

    def test_elif_after_else_is_rejected(self):
        result = parse("{% if a %}x{% else %}y{% elif b %}z{% endif %}")
        assert result.errors[0] == "expected next token to be ENDIF, got ELIF instead"

    def test_wrong_closing_tag(self):
        result = parse("{% if a %}x{% endfor %}")
        assert result.errors[0] == "expected next token to be ENDIF, got ENDFOR instead"

    def test_missing_condition(self):
        result = parse("{% if %}x{% endif %}")
        assert result.errors[0] == "no prefix parse function for %} found"

    def test_unterminated_block(self):
        result = parse("{% if a %}x")
        assert result.errors == [
            'unexpected EOF while parsing block starting with "%}"',
            "expected next token to be ENDIF, got EOF instead",
        ]

    def test_following_unrelated_tag_is_separate_statement(self):
        program = parse_ok("{% if a %}x{% endif %}{% set y = 1 %}")
        assert len(program.statements) == 2
        assert isinstance(program.statements[0], IfStatement)
        assert program.statements[1] == SetStatement(Identifier("y"), IntegerLiteral(1))

    def test_following_loop_is_not_merged(self):
        program = parse_ok("{% if a %}{% endif %}{% for i in s %}{% endfor %}")
        assert [type(s) for s in program.statements] == [IfStatement, ForStatement]
        assert program.statements[0].elseifs == []
        assert program.statements[0].alternative is None


class TestForStatement:
    def test_for_loop(self):
        program = parse_ok("{% for item in items %}{{ item.name }}{% endfor %}")
        assert program.statements == [
            ForStatement(
                Identifier("item"),
                Identifier("items"),
                block(OutputStatement(AttributeAccess(Identifier("item"), Identifier("name")))),
            )
        ]

    @pytest.mark.parametrize("source,message", [
        ("{% for in items %}{% endfor %}", "expected next token to be IDENT, got IN instead"),
        ("{% for x items %}{% endfor %}", "expected next token to be IN, got IDENT instead"),
        ("{% for x in %}{% endfor %}", "no prefix parse function for %} found"),
        ("{% for x in xs %}a{% endif %}", "expected next token to be ENDFOR, got ENDIF instead"),
    ])
    def test_malformed_for(self, source, message):
        assert parse(source).errors[0] == message

    def test_nested_blocks(self):
        source = (
            "{% if a %}"
            "{% for x in xs %}{% if x %}{{ x }}{% endif %}{% endfor %}"
            "{% endif %}"
        )
        outer = parse_ok(source).statements[0]
        loop = outer.consequence.statements[0]
        inner = loop.body.statements[0]
        assert isinstance(loop, ForStatement)
        assert inner.consequence.statements == [out("x")]


class TestTemplateTags:
    @pytest.mark.parametrize("tag", ["block", "endif", "else", "elif", "include", "{%"])
    def test_unexpected_tag(self, tag):
        result = parse("{% " + tag + " %}")
        assert result.errors[0] == f'unexpected template tag "{tag}"'

    def test_block_tag_is_not_parsed(self):
        result = parse("{% block main %}")
        assert result.errors == ['unexpected template tag "block"']
        assert result.program.statements == []

    def test_plain_text_becomes_expression_statements(self):
        program = parse_ok("hello world")
        assert program.statements == [
            ExpressionStatement(Identifier("hello")),
            ExpressionStatement(Identifier("world")),
        ]

    def test_comments_are_ignored(self):
        assert parse_ok("{# note #}{{ a }}").statements == [out("a")]

    def test_empty_source(self):
        result = parse("")
        assert result.success()
        assert result.program == Program([])


class TestRecovery:
    def test_parsing_continues_after_broken_output(self):
        result = parse("{{ }}{{ ok }}")
        assert len(result.errors) == 1
        assert result.program.statements == [out("ok")]

    def test_parsing_continues_after_broken_set(self):
        result = parse("{% set %}{{ a }}")
        assert result.errors == ["expected next token to be IDENT, got %} instead"]
        assert result.program.statements == [out("a")]

    def test_recovery_stops_before_next_tag(self):
        result = parse("{{ a. {{ b }}")
        assert result.errors == ["expected next token to be IDENT, got {{ instead"]
        assert result.program.statements == [out("b")]

    def test_errors_accumulate_in_order(self):
        result = parse("{% set %}{{ }}{% include x %}")
        assert result.errors == [
            "expected next token to be IDENT, got %} instead",
            "no prefix parse function for }} found",
            'unexpected template tag "include"',
        ]

    @pytest.mark.parametrize("source", [
        "{%",
        "%}",
        "{{",
        "}}",
        "{% if",
        "{% if a %}{% elif %}",
        "{% for x in %}",
        "{% endif %}{% endfor %}",
        '"unterminated',
        "{% set x = 1 + %}",
        "{{ a | }}",
        "}}{{%}{%%}",
        "{% else %}{% elif a %}",
        "\x00\x01\x02",
        "{{ a b c }}",
        "{% if a %}{% if b %}{% if c %}",
        "- - - !",
        "{{ a.b.c.d. }}",
    ])
    def test_parser_is_total(self, source):
        result = parse(source)
        assert isinstance(result, ParseResult)
        assert isinstance(result.program, Program)


class TestNestingLimit:
    def test_deep_prefix_chain_is_reported(self):
        result = parse("{{ " + "-" * 500 + "a }}")
        assert result.errors == ["maximum nesting depth of 100 exceeded"]
        assert result.program.statements == []

    def test_deep_block_nesting_is_reported(self):
        source = "{% if a %}" * 300 + "{% endif %}" * 300
        result = parse(source)
        assert result.errors.count("maximum nesting depth of 100 exceeded") == 1

    def test_custom_limit(self):
        options = ParserOptions(max_depth=3)
        assert parse("{{ --a }}", options).errors == []
        assert parse("{{ ---a }}", options).errors == ["maximum nesting depth of 3 exceeded"]

    def test_nesting_within_limit(self):
        source = "{% if a %}" * 20 + "{{ a }}" + "{% endif %}" * 20
        assert parse(source).errors == []


class TestParserObject:
    def test_parser_exposes_errors(self):
        parser = NSLParser(Lexer("{{ 1 }}{{ }}"))
        program = parser.parse_program()
        assert program.statements == [OutputStatement(IntegerLiteral(1))]
        assert parser.errors == ["no prefix parse function for }} found"]
