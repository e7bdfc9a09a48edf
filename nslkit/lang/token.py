"""Token model for the NSL template language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class TokenType(Enum):
    """Token kinds. The value is the name shown in parser messages."""

    # Special
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers and literals
    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"

    # Delimiters
    LBRACE = "{{"
    RBRACE = "}}"
    LPERCENT = "{%"
    RPERCENT = "%}"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    DOT = "."
    PIPE = "|"

    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="
    LTE = "<="
    GTE = ">="

    # Keywords
    TRUE = "TRUE"
    FALSE = "FALSE"
    NULL = "NULL"
    IF = "IF"
    ELIF = "ELIF"
    ELSE = "ELSE"
    ENDIF = "ENDIF"
    FOR = "FOR"
    IN = "IN"
    ENDFOR = "ENDFOR"
    SET = "SET"
    BLOCK = "BLOCK"
    ENDBLOCK = "ENDBLOCK"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """A single token with position information (1-based line and column)."""

    type: TokenType
    literal: str
    line: int = 0
    column: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.literal!r}, {self.line}:{self.column})"


KEYWORDS = MappingProxyType({
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "null": TokenType.NULL,
    "if": TokenType.IF,
    "elif": TokenType.ELIF,
    "else": TokenType.ELSE,
    "endif": TokenType.ENDIF,
    "for": TokenType.FOR,
    "in": TokenType.IN,
    "endfor": TokenType.ENDFOR,
    "set": TokenType.SET,
    "block": TokenType.BLOCK,
    "endblock": TokenType.ENDBLOCK,
})


def lookup_ident(ident: str) -> TokenType:
    """Return the keyword kind for ``ident``, or ``IDENT`` when it is not a keyword."""
    return KEYWORDS.get(ident, TokenType.IDENT)


__all__ = ["TokenType", "Token", "KEYWORDS", "lookup_ident"]
