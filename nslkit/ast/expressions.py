"""Expression nodes.

Every expression renders a fully parenthesised debug form through ``str()``,
which is what the precedence tests compare against. The canonical template
form lives in :mod:`nslkit.formatting.printer`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from .base import Node, token_field

if TYPE_CHECKING:
    from nslkit.lang.token import Token


@dataclass
class Identifier(Node):
    name: str
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        return self.name


@dataclass
class IntegerLiteral(Node):
    value: int
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class StringLiteral(Node):
    value: str
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        return self.value


@dataclass
class Boolean(Node):
    value: bool
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass
class PrefixExpression(Node):
    """Unary ``!`` or ``-`` applied to an operand."""

    operator: str
    operand: "Expression"
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        return f"({self.operator}{self.operand})"


@dataclass
class InfixExpression(Node):
    """Binary arithmetic or comparison."""

    left: "Expression"
    operator: str
    right: "Expression"
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class AttributeAccess(Node):
    """``object.attribute``; the attribute is a name, never a variable."""

    object: "Expression"
    attribute: Identifier
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        return f"{self.object}.{self.attribute}"


@dataclass
class FilterExpression(Node):
    """``input | filter``; filters live outside the variable namespace."""

    input: "Expression"
    filter: Identifier
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        return f"{self.input} | {self.filter}"


Expression = Union[
    Identifier,
    IntegerLiteral,
    StringLiteral,
    Boolean,
    PrefixExpression,
    InfixExpression,
    AttributeAccess,
    FilterExpression,
]

EXPRESSION_TYPES = (
    Identifier,
    IntegerLiteral,
    StringLiteral,
    Boolean,
    PrefixExpression,
    InfixExpression,
    AttributeAccess,
    FilterExpression,
)


__all__ = [
    "Identifier",
    "IntegerLiteral",
    "StringLiteral",
    "Boolean",
    "PrefixExpression",
    "InfixExpression",
    "AttributeAccess",
    "FilterExpression",
    "Expression",
    "EXPRESSION_TYPES",
]
