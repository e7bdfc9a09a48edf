"""NSL parser package.

``parse`` is the entry point most callers need::

    result = parse("{% set x = 1 %}{{ x }}")
    if result.errors:
        ...
"""

from .expressions import INFIX_RULES, PRECEDENCES, PREFIX_RULES, Precedence
from .parse import NSLParser, ParseResult, parse

__all__ = [
    "parse",
    "NSLParser",
    "ParseResult",
    "Precedence",
    "PRECEDENCES",
    "PREFIX_RULES",
    "INFIX_RULES",
]
