"""JSON interchange for NSL syntax trees.

Each node becomes a mapping with a ``_type`` discriminator naming its class,
one entry per child field, and an optional ``token`` entry. The format is
stable so trees can be produced or consumed by other tools (for example a
generator that emits a tree which is then pretty-printed).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Type

from nslkit.errors import ASTDecodeError
from nslkit.lang.token import Token, TokenType

from .base import Node
from .expressions import (
    EXPRESSION_TYPES,
    AttributeAccess,
    Boolean,
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
)


@dataclass(frozen=True)
class _Slot:
    """Expected shape of one node field."""

    accepts: Tuple[type, ...]
    many: bool = False
    optional: bool = False


_EXPR = _Slot(EXPRESSION_TYPES)
_IDENT = _Slot((Identifier,))
_BLOCK = _Slot((BlockStatement,))
_STATEMENTS = _Slot(STATEMENT_TYPES, many=True)

SCHEMA: Dict[Type[Node], Dict[str, _Slot]] = {
    Program: {"statements": _STATEMENTS},
    BlockStatement: {"statements": _STATEMENTS},
    ExpressionStatement: {"expression": _EXPR},
    SetStatement: {"name": _IDENT, "value": _EXPR},
    OutputStatement: {"expression": _EXPR},
    ElseIfClause: {"condition": _EXPR, "consequence": _BLOCK},
    IfStatement: {
        "condition": _EXPR,
        "consequence": _BLOCK,
        "elseifs": _Slot((ElseIfClause,), many=True),
        "alternative": _Slot((BlockStatement,), optional=True),
    },
    ForStatement: {"iterator": _IDENT, "sequence": _EXPR, "body": _BLOCK},
    Identifier: {"name": _Slot((str,))},
    IntegerLiteral: {"value": _Slot((int,))},
    StringLiteral: {"value": _Slot((str,))},
    Boolean: {"value": _Slot((bool,))},
    PrefixExpression: {"operator": _Slot((str,)), "operand": _EXPR},
    InfixExpression: {"left": _EXPR, "operator": _Slot((str,)), "right": _EXPR},
    AttributeAccess: {"object": _EXPR, "attribute": _IDENT},
    FilterExpression: {"input": _EXPR, "filter": _IDENT},
}

NODE_TYPES: Dict[str, Type[Node]] = {cls.__name__: cls for cls in SCHEMA}


def node_to_dict(node: Node, *, include_tokens: bool = True) -> Dict[str, Any]:
    """Serialize ``node`` and its subtree into JSON-compatible data."""
    cls = type(node)
    if cls not in SCHEMA:
        raise TypeError(f"cannot serialize {cls.__name__} nodes")

    data: Dict[str, Any] = {"_type": cls.__name__}
    for name, slot in SCHEMA[cls].items():
        value = getattr(node, name)
        if slot.many:
            data[name] = [node_to_dict(item, include_tokens=include_tokens) for item in value]
        elif isinstance(value, Node):
            data[name] = node_to_dict(value, include_tokens=include_tokens)
        else:
            data[name] = value

    if include_tokens and node.token is not None:
        data["token"] = _token_to_dict(node.token)
    return data


def program_to_dict(program: Program, *, include_tokens: bool = True) -> Dict[str, Any]:
    return node_to_dict(program, include_tokens=include_tokens)


def node_from_dict(data: Any) -> Node:
    """Rebuild a node from :func:`node_to_dict` output, validating its shape."""
    try:
        return _decode_node(data)
    except RecursionError:
        raise ASTDecodeError("AST document is nested too deeply") from None


def _decode_node(data: Any) -> Node:
    if not isinstance(data, dict):
        raise ASTDecodeError(f"expected an object describing a node, got {type(data).__name__}")

    type_name = data.get("_type")
    cls = NODE_TYPES.get(type_name) if isinstance(type_name, str) else None
    if cls is None:
        raise ASTDecodeError(f"unknown AST node type: {type_name}")

    kwargs: Dict[str, Any] = {}
    for name, slot in SCHEMA[cls].items():
        if name not in data:
            if slot.many:
                kwargs[name] = []
                continue
            if slot.optional:
                kwargs[name] = None
                continue
            raise ASTDecodeError(f"{type_name} is missing field '{name}'")
        kwargs[name] = _decode_slot(type_name, name, slot, data[name])

    token = data.get("token")
    kwargs["token"] = _token_from_dict(token) if token is not None else None
    return cls(**kwargs)


def program_from_dict(data: Any) -> Program:
    node = node_from_dict(data)
    if not isinstance(node, Program):
        raise ASTDecodeError(f"expected a Program at the root, got {type(node).__name__}")
    return node


def _decode_slot(type_name: str, name: str, slot: _Slot, raw: Any) -> Any:
    if slot.many:
        if not isinstance(raw, list):
            raise ASTDecodeError(f"{type_name}.{name} must be a list")
        return [_decode_single(type_name, name, slot, item) for item in raw]
    if raw is None and slot.optional:
        return None
    return _decode_single(type_name, name, slot, raw)


def _decode_single(type_name: str, name: str, slot: _Slot, raw: Any) -> Any:
    value = _decode_node(raw) if isinstance(raw, dict) else raw
    # bool is an int subclass; only Boolean.value may hold one.
    if isinstance(value, bool) and bool not in slot.accepts:
        raise ASTDecodeError(f"{type_name}.{name} has unexpected type bool")
    if not isinstance(value, slot.accepts):
        raise ASTDecodeError(f"{type_name}.{name} has unexpected type {type(value).__name__}")
    return value


def _token_to_dict(token: Token) -> Dict[str, Any]:
    return {
        "type": token.type.name,
        "literal": token.literal,
        "line": token.line,
        "column": token.column,
    }


def _token_from_dict(data: Any) -> Optional[Token]:
    if not isinstance(data, dict):
        raise ASTDecodeError("token must be an object")
    try:
        kind = TokenType[data["type"]]
        return Token(kind, str(data.get("literal", "")), int(data.get("line", 0)), int(data.get("column", 0)))
    except (KeyError, TypeError, ValueError) as exc:
        raise ASTDecodeError(f"invalid token: {data!r}") from exc


__all__ = [
    "node_to_dict",
    "node_from_dict",
    "program_to_dict",
    "program_from_dict",
    "NODE_TYPES",
]
