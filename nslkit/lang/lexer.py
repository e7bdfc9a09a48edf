"""Lexical analyzer (tokenizer) for NSL templates.

Converts template text into a lazily produced stream of tokens. Lexing never
raises: characters that cannot start a token become ``ILLEGAL`` tokens and are
left for the parser to report.
"""

from __future__ import annotations

import string
from typing import Iterator, List, Optional

from .token import Token, TokenType, lookup_ident


# Two-character tokens, checked before their one-character prefixes.
TWO_CHAR_TOKENS = {
    "{{": TokenType.LBRACE,
    "}}": TokenType.RBRACE,
    "{%": TokenType.LPERCENT,
    "%}": TokenType.RPERCENT,
    "==": TokenType.EQ,
    "!=": TokenType.NOT_EQ,
    "<=": TokenType.LTE,
    ">=": TokenType.GTE,
}

CHAR_TOKENS = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "!": TokenType.BANG,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    ".": TokenType.DOT,
    "|": TokenType.PIPE,
    "<": TokenType.LT,
    ">": TokenType.GT,
}

ESCAPES = {
    "n": "\n",
    "t": "\t",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

WHITESPACE = (" ", "\t", "\r", "\n")


def _is_ident_start(char: Optional[str]) -> bool:
    return char is not None and (char == "_" or char in string.ascii_letters)


def _is_ident_char(char: Optional[str]) -> bool:
    return _is_ident_start(char) or _is_digit(char)


def _is_digit(char: Optional[str]) -> bool:
    return char is not None and char in string.digits


class Lexer:
    """Tokenizer for NSL source text."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self._done = False

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the ``EOF`` sentinel."""
        while not self._done:
            yield self.next_token()

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character without consuming."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        char = self.source[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def skip_whitespace(self) -> None:
        while self.peek() in WHITESPACE:
            self.advance()

    def skip_comment(self) -> None:
        """Skip a ``{# ... #}`` comment; an unterminated one runs to end of input."""
        self.advance()  # {
        self.advance()  # #
        while self.peek() is not None:
            if self.peek() == "#" and self.peek(1) == "}":
                self.advance()
                self.advance()
                return
            self.advance()

    def read_string(self) -> tuple[str, bool]:
        """Read a quoted string literal.

        Returns the decoded value and whether the closing quote was found.
        """
        quote = self.advance()
        chars = []

        while True:
            char = self.peek()
            if char is None:
                return "".join(chars), False
            if char == quote:
                self.advance()
                return "".join(chars), True
            if char == "\\":
                self.advance()
                escape = self.advance()
                if escape is None:
                    chars.append("\\")
                elif escape in ESCAPES:
                    chars.append(ESCAPES[escape])
                else:
                    chars.append("\\" + escape)
            else:
                chars.append(self.advance())

    def read_number(self) -> str:
        chars = []
        while _is_digit(self.peek()):
            chars.append(self.advance())
        return "".join(chars)

    def read_identifier(self) -> str:
        chars = []
        while _is_ident_char(self.peek()):
            chars.append(self.advance())
        return "".join(chars)

    def next_token(self) -> Token:
        """Scan and return the next token."""
        while True:
            self.skip_whitespace()
            if self.peek() == "{" and self.peek(1) == "#":
                self.skip_comment()
                continue
            break

        line, column = self.line, self.column
        char = self.peek()

        if char is None:
            self._done = True
            return Token(TokenType.EOF, "", line, column)

        two_char = char + (self.peek(1) or "")
        if two_char in TWO_CHAR_TOKENS:
            self.advance()
            self.advance()
            return Token(TWO_CHAR_TOKENS[two_char], two_char, line, column)

        if char in CHAR_TOKENS:
            self.advance()
            return Token(CHAR_TOKENS[char], char, line, column)

        if char in ('"', "'"):
            value, terminated = self.read_string()
            kind = TokenType.STRING if terminated else TokenType.ILLEGAL
            return Token(kind, value, line, column)

        if _is_digit(char):
            return Token(TokenType.INT, self.read_number(), line, column)

        if _is_ident_start(char):
            ident = self.read_identifier()
            return Token(lookup_ident(ident), ident, line, column)

        self.advance()
        return Token(TokenType.ILLEGAL, char, line, column)


def tokenize(source: str) -> List[Token]:
    """Tokenize NSL source text, ending with the ``EOF`` token."""
    return list(Lexer(source))


__all__ = ["Lexer", "tokenize"]
