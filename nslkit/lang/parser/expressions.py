"""Expression parsing methods for NSLParser.

Expressions are parsed by precedence climbing. Each token kind that can start
an expression has a prefix rule; each binary operator has an infix rule and a
precedence. Both tables are built once at import and never mutated.
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Optional

from nslkit.ast import (
    AttributeAccess,
    Boolean,
    Expression,
    FilterExpression,
    Identifier,
    InfixExpression,
    IntegerLiteral,
    PrefixExpression,
    StringLiteral,
)
from nslkit.lang.token import TokenType

INT64_MAX = 2**63 - 1
INT64_DIGITS = len(str(INT64_MAX))


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # == !=
    COMPARISON = 3  # < > <= >=
    SUM = 4  # + -
    PRODUCT = 5  # * /
    FILTER = 6  # |
    ATTRIBUTE = 7  # .
    PREFIX = 8  # !x -x


PRECEDENCES = MappingProxyType({
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.COMPARISON,
    TokenType.GT: Precedence.COMPARISON,
    TokenType.LTE: Precedence.COMPARISON,
    TokenType.GTE: Precedence.COMPARISON,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.PIPE: Precedence.FILTER,
    TokenType.DOT: Precedence.ATTRIBUTE,
})

PREFIX_RULES = MappingProxyType({
    TokenType.IDENT: "_parse_identifier",
    TokenType.INT: "_parse_integer_literal",
    TokenType.STRING: "_parse_string_literal",
    TokenType.TRUE: "_parse_boolean",
    TokenType.FALSE: "_parse_boolean",
    TokenType.BANG: "_parse_prefix_expression",
    TokenType.MINUS: "_parse_prefix_expression",
})

INFIX_RULES = MappingProxyType({
    TokenType.EQ: "_parse_infix_expression",
    TokenType.NOT_EQ: "_parse_infix_expression",
    TokenType.LT: "_parse_infix_expression",
    TokenType.GT: "_parse_infix_expression",
    TokenType.LTE: "_parse_infix_expression",
    TokenType.GTE: "_parse_infix_expression",
    TokenType.PLUS: "_parse_infix_expression",
    TokenType.MINUS: "_parse_infix_expression",
    TokenType.ASTERISK: "_parse_infix_expression",
    TokenType.SLASH: "_parse_infix_expression",
    TokenType.PIPE: "_parse_filter_expression",
    TokenType.DOT: "_parse_attribute_access",
})

# Expressions never extend past the closing delimiter of their tag.
EXPRESSION_TERMINATORS = frozenset({TokenType.RPERCENT, TokenType.RBRACE})


class ExpressionParsingMixin:
    """Mixin with expression parsing methods.

    Relies on the token cursor and error helpers of :class:`NSLParser`.
    """

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        """Parse an expression whose operators bind tighter than ``precedence``.

        Returns ``None`` after recording an error when no valid expression starts
        at the current token.
        """
        with self._nested() as allowed:
            if not allowed:
                self._depth_error()
                return None

            rule = PREFIX_RULES.get(self.cur_token.type)
            if rule is None:
                self._no_prefix_parse_fn_error(self.cur_token.type)
                return None
            left = getattr(self, rule)()

            # Each fold wraps ``left`` one level deeper, so it counts toward
            # the nesting limit like a nested call does.
            folds = 0
            try:
                while (
                    left is not None
                    and self.peek_token.type not in EXPRESSION_TERMINATORS
                    and precedence < self._peek_precedence()
                ):
                    infix = INFIX_RULES.get(self.peek_token.type)
                    if infix is None:
                        return left
                    folds += 1
                    self._depth += 1
                    if self._depth > self.options.max_depth:
                        self._depth_error()
                        return None
                    self.next_token()
                    left = getattr(self, infix)(left)

                return left
            finally:
                self._depth -= folds

    def _parse_identifier(self) -> Expression:
        return Identifier(self.cur_token.literal, token=self.cur_token)

    def _parse_integer_literal(self) -> Optional[Expression]:
        literal = self.cur_token.literal
        # INT64_MAX has 19 digits; longer literals are rejected before int().
        fits = literal.isdigit() and len(literal.lstrip("0")) <= INT64_DIGITS
        value = int(literal) if fits else None
        if value is None or value > INT64_MAX:
            self.add_error(f'could not parse "{literal}" as integer')
            return None
        return IntegerLiteral(value, token=self.cur_token)

    def _parse_string_literal(self) -> Expression:
        return StringLiteral(self.cur_token.literal, token=self.cur_token)

    def _parse_boolean(self) -> Expression:
        return Boolean(self.cur_token_is(TokenType.TRUE), token=self.cur_token)

    def _parse_prefix_expression(self) -> Optional[Expression]:
        token = self.cur_token
        self.next_token()
        operand = self.parse_expression(Precedence.PREFIX)
        if operand is None:
            return None
        return PrefixExpression(token.literal, operand, token=token)

    def _parse_infix_expression(self, left: Expression) -> Optional[Expression]:
        token = self.cur_token
        precedence = self._cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(left, token.literal, right, token=token)

    def _parse_attribute_access(self, left: Expression) -> Optional[Expression]:
        token = self.cur_token
        if not self.expect_peek(TokenType.IDENT):
            return None
        attribute = Identifier(self.cur_token.literal, token=self.cur_token)
        return AttributeAccess(left, attribute, token=token)

    def _parse_filter_expression(self, left: Expression) -> Optional[Expression]:
        token = self.cur_token
        if not self.expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.cur_token.literal, token=self.cur_token)
        return FilterExpression(left, name, token=token)

    def _peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def _cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    def _no_prefix_parse_fn_error(self, token_type: TokenType) -> None:
        self.add_error(f"no prefix parse function for {token_type} found")


__all__ = [
    "Precedence",
    "PRECEDENCES",
    "PREFIX_RULES",
    "INFIX_RULES",
    "ExpressionParsingMixin",
]
