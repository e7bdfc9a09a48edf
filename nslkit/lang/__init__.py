"""NSL language front end: tokens, lexer and parser."""

from .token import KEYWORDS, Token, TokenType, lookup_ident
from .lexer import Lexer, tokenize

__all__ = ["KEYWORDS", "Token", "TokenType", "lookup_ident", "Lexer", "tokenize"]
