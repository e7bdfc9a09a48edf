"""Abstract syntax tree for NSL templates.

``Statement`` and ``Expression`` are closed unions of the node classes below.
Consumers dispatch over the full variant set (see :class:`NodeVisitor`).
"""

from .base import Node
from .expressions import (
    EXPRESSION_TYPES,
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
from .statements import (
    STATEMENT_TYPES,
    BlockStatement,
    ElseIfClause,
    ExpressionStatement,
    ForStatement,
    IfStatement,
    OutputStatement,
    Program,
    SetStatement,
    Statement,
)
from .visitor import NodeVisitor, iter_child_nodes, walk
from .serialize import node_from_dict, node_to_dict, program_from_dict, program_to_dict

__all__ = [
    "Node",
    "Expression",
    "EXPRESSION_TYPES",
    "Identifier",
    "IntegerLiteral",
    "StringLiteral",
    "Boolean",
    "PrefixExpression",
    "InfixExpression",
    "AttributeAccess",
    "FilterExpression",
    "Statement",
    "STATEMENT_TYPES",
    "BlockStatement",
    "ExpressionStatement",
    "SetStatement",
    "OutputStatement",
    "ElseIfClause",
    "IfStatement",
    "ForStatement",
    "Program",
    "NodeVisitor",
    "iter_child_nodes",
    "walk",
    "node_to_dict",
    "node_from_dict",
    "program_to_dict",
    "program_from_dict",
]
