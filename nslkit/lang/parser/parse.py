"""Recursive descent parser for NSL templates.

The parser never raises on bad input. A grammar violation records a message,
the current statement yields ``None``, and :meth:`NSLParser.synchronize` moves
the cursor to the next tag boundary so the rest of the file is still parsed.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from nslkit.ast import (
    BlockStatement,
    ElseIfClause,
    ExpressionStatement,
    ForStatement,
    Identifier,
    IfStatement,
    OutputStatement,
    Program,
    SetStatement,
    Statement,
)
from nslkit.config import ParserOptions
from nslkit.lang.lexer import Lexer
from nslkit.lang.token import Token, TokenType

from .expressions import ExpressionParsingMixin, Precedence

# Tags that close the block currently being parsed.
BLOCK_TERMINATORS = frozenset({
    TokenType.ELSE,
    TokenType.ELIF,
    TokenType.ENDIF,
    TokenType.ENDFOR,
    TokenType.ENDBLOCK,
})

OPENING_DELIMITERS = frozenset({TokenType.LPERCENT, TokenType.LBRACE})
CLOSING_DELIMITERS = frozenset({TokenType.RPERCENT, TokenType.RBRACE})


@dataclass
class ParseResult:
    """Best-effort syntax tree plus the syntax errors met while building it."""

    program: Program
    errors: List[str] = field(default_factory=list)

    def success(self) -> bool:
        return len(self.errors) == 0


class NSLParser(ExpressionParsingMixin):
    """Parser for a single NSL template.

    Grammar::

        program    = { statement } ;
        statement  = set | if | for | output | expression ;
        set        = "{%" "set" IDENT "=" expr "%}" ;
        if         = "{%" "if" expr "%}" block
                     { "{%" "elif" expr "%}" block }
                     [ "{%" "else" "%}" block ]
                     "{%" "endif" "%}" ;
        for        = "{%" "for" IDENT "in" expr "%}" block "{%" "endfor" "%}" ;
        output     = "{{" expr "}}" ;
    """

    def __init__(self, lexer: Lexer, options: Optional[ParserOptions] = None):
        self.lexer = lexer
        self.options = options or ParserOptions()
        self.errors: List[str] = []
        self._depth = 0
        self._depth_reported = False

        self.cur_token: Token = Token(TokenType.EOF, "")
        self.peek_token: Token = Token(TokenType.EOF, "")
        self.next_token()
        self.next_token()

    # ====================================================================
    # Token Management
    # ====================================================================

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, token_type: TokenType) -> bool:
        return self.cur_token.type == token_type

    def peek_token_is(self, token_type: TokenType) -> bool:
        return self.peek_token.type == token_type

    def expect_peek(self, token_type: TokenType) -> bool:
        """Advance when the next token has the given type, otherwise record an error."""
        if self.peek_token_is(token_type):
            self.next_token()
            return True
        self.peek_error(token_type)
        return False

    # ====================================================================
    # Error Reporting
    # ====================================================================

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def peek_error(self, token_type: TokenType) -> None:
        self.add_error(
            f"expected next token to be {token_type}, got {self.peek_token.type} instead"
        )

    @contextmanager
    def _nested(self) -> Iterator[bool]:
        """Track expression/block nesting; yields whether the limit still allows it."""
        self._depth += 1
        try:
            yield self._depth <= self.options.max_depth
        finally:
            self._depth -= 1

    def _depth_error(self) -> None:
        if not self._depth_reported:
            self._depth_reported = True
            self.add_error(f"maximum nesting depth of {self.options.max_depth} exceeded")

    def synchronize(self) -> None:
        """Skip the rest of a broken statement.

        Stops on a closing delimiter or just before an opening one, so the
        caller's following ``next_token()`` lands on the next statement.
        """
        while not self.cur_token_is(TokenType.EOF):
            if self.cur_token.type in CLOSING_DELIMITERS:
                return
            if self.peek_token.type in OPENING_DELIMITERS:
                return
            self.next_token()

    # ====================================================================
    # Statements
    # ====================================================================

    def parse_program(self) -> Program:
        program = Program(token=self.cur_token)

        while not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            else:
                self.synchronize()
            self.next_token()

        return program

    def parse_statement(self) -> Optional[Statement]:
        if self.cur_token_is(TokenType.LPERCENT):
            return self.parse_template_statement()
        if self.cur_token_is(TokenType.LBRACE):
            return self.parse_output_statement()
        return self.parse_expression_statement()

    def parse_template_statement(self) -> Optional[Statement]:
        if self.peek_token_is(TokenType.SET):
            self.next_token()
            return self.parse_set_statement()
        if self.peek_token_is(TokenType.IF):
            self.next_token()
            return self.parse_if_statement()
        if self.peek_token_is(TokenType.FOR):
            self.next_token()
            return self.parse_for_statement()

        self.add_error(f'unexpected template tag "{self.peek_token.literal}"')
        return None

    def parse_set_statement(self) -> Optional[SetStatement]:
        token = self.cur_token  # 'set'

        if not self.expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.cur_token.literal, token=self.cur_token)

        if not self.expect_peek(TokenType.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if not self.expect_peek(TokenType.RPERCENT):
            return None

        return SetStatement(name, value, token=token)

    def parse_if_statement(self) -> Optional[IfStatement]:
        token = self.cur_token  # 'if'

        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(TokenType.RPERCENT):
            return None

        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        stmt = IfStatement(condition, consequence, token=token)

        # The block stops on the {% of the tag that ended it. Only elif/else
        # continue the conditional; anything else must be its endif.
        while stmt.alternative is None and self.cur_token_is(TokenType.LPERCENT):
            if self.peek_token_is(TokenType.ELIF):
                self.next_token()
                clause_token = self.cur_token

                self.next_token()
                clause_condition = self.parse_expression(Precedence.LOWEST)
                if clause_condition is None:
                    return None
                if not self.expect_peek(TokenType.RPERCENT):
                    return None

                clause_block = self.parse_block_statement()
                if clause_block is None:
                    return None
                stmt.elseifs.append(
                    ElseIfClause(clause_condition, clause_block, token=clause_token)
                )
            elif self.peek_token_is(TokenType.ELSE):
                self.next_token()
                if not self.expect_peek(TokenType.RPERCENT):
                    return None
                alternative = self.parse_block_statement()
                if alternative is None:
                    return None
                stmt.alternative = alternative
            else:
                break

        if not (self.cur_token_is(TokenType.LPERCENT) and self.peek_token_is(TokenType.ENDIF)):
            self.peek_error(TokenType.ENDIF)
            return None
        self.next_token()  # endif
        if not self.expect_peek(TokenType.RPERCENT):
            return None

        return stmt

    def parse_for_statement(self) -> Optional[ForStatement]:
        token = self.cur_token  # 'for'

        if not self.expect_peek(TokenType.IDENT):
            return None
        iterator = Identifier(self.cur_token.literal, token=self.cur_token)

        if not self.expect_peek(TokenType.IN):
            return None

        self.next_token()
        sequence = self.parse_expression(Precedence.LOWEST)
        if sequence is None:
            return None

        if not self.expect_peek(TokenType.RPERCENT):
            return None

        body = self.parse_block_statement()
        if body is None:
            return None

        if not (self.cur_token_is(TokenType.LPERCENT) and self.peek_token_is(TokenType.ENDFOR)):
            self.peek_error(TokenType.ENDFOR)
            return None
        self.next_token()  # endfor
        if not self.expect_peek(TokenType.RPERCENT):
            return None

        return ForStatement(iterator, sequence, body, token=token)

    def parse_block_statement(self) -> Optional[BlockStatement]:
        """Parse statements up to a block-ending tag.

        Leaves the cursor on the ``{%`` of the terminating tag (or on EOF).
        """
        with self._nested() as allowed:
            if not allowed:
                self._depth_error()
                return None

            block = BlockStatement(token=self.cur_token)
            self.next_token()

            while not self.is_block_end() and not self.cur_token_is(TokenType.EOF):
                stmt = self.parse_statement()
                if stmt is not None:
                    block.statements.append(stmt)
                else:
                    self.synchronize()
                self.next_token()

            if self.cur_token_is(TokenType.EOF):
                self.add_error(
                    f'unexpected EOF while parsing block starting with "{block.token_literal()}"'
                )

            return block

    def is_block_end(self) -> bool:
        return self.cur_token_is(TokenType.LPERCENT) and self.peek_token.type in BLOCK_TERMINATORS

    def parse_output_statement(self) -> Optional[OutputStatement]:
        token = self.cur_token  # '{{'
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if not self.expect_peek(TokenType.RBRACE):
            return None
        return OutputStatement(expression, token=token)

    def parse_expression_statement(self) -> Optional[ExpressionStatement]:
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        return ExpressionStatement(expression, token=token)


def parse(source: str, options: Optional[ParserOptions] = None) -> ParseResult:
    """Parse template text into a best-effort AST and its syntax errors."""
    parser = NSLParser(Lexer(source), options)
    program = parser.parse_program()
    return ParseResult(program=program, errors=list(parser.errors))


__all__ = ["NSLParser", "ParseResult", "parse"]
