"""Statement nodes and the program root."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Union

from .base import Node, token_field
from .expressions import Expression, Identifier

if TYPE_CHECKING:
    from nslkit.lang.token import Token


@dataclass
class BlockStatement(Node):
    """Ordered statements forming the body of a conditional branch or loop."""

    statements: List["Statement"] = field(default_factory=list)
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        return "".join(str(stmt) for stmt in self.statements)


@dataclass
class ExpressionStatement(Node):
    """A bare expression outside any delimiter."""

    expression: Expression
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        return str(self.expression)


@dataclass
class SetStatement(Node):
    """``{% set name = value %}``"""

    name: Identifier
    value: Expression
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        return f"set {self.name} = {self.value}"


@dataclass
class OutputStatement(Node):
    """``{{ expression }}``"""

    expression: Expression
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        return "{{" + str(self.expression) + "}}"


@dataclass
class ElseIfClause(Node):
    condition: Expression
    consequence: BlockStatement
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        return f"elif {self.condition} {self.consequence}"


@dataclass
class IfStatement(Node):
    condition: Expression
    consequence: BlockStatement
    elseifs: List[ElseIfClause] = field(default_factory=list)
    alternative: Optional[BlockStatement] = None
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        parts = [f"if {self.condition} {self.consequence}"]
        parts.extend(str(clause) for clause in self.elseifs)
        if self.alternative is not None:
            parts.append(f"else {self.alternative}")
        return "".join(parts)


@dataclass
class ForStatement(Node):
    iterator: Identifier
    sequence: Expression
    body: BlockStatement
    token: Optional["Token"] = token_field()

    def __str__(self) -> str:
        return f"for {self.iterator} in {self.sequence} {self.body}"


Statement = Union[
    SetStatement,
    IfStatement,
    ForStatement,
    OutputStatement,
    BlockStatement,
    ExpressionStatement,
]

STATEMENT_TYPES = (
    SetStatement,
    IfStatement,
    ForStatement,
    OutputStatement,
    BlockStatement,
    ExpressionStatement,
)


@dataclass
class Program(Node):
    """Root node of every parsed template."""

    statements: List[Statement] = field(default_factory=list)
    token: Optional["Token"] = token_field()

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(stmt) for stmt in self.statements)


__all__ = [
    "BlockStatement",
    "ExpressionStatement",
    "SetStatement",
    "OutputStatement",
    "ElseIfClause",
    "IfStatement",
    "ForStatement",
    "Statement",
    "STATEMENT_TYPES",
    "Program",
]
