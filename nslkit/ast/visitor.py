"""Traversal helpers for NSL syntax trees."""

from __future__ import annotations

import dataclasses
from typing import Any, Iterator

from .base import Node


class NodeVisitor:
    """Dispatches ``visit(node)`` to ``visit_<ClassName>``.

    A node class without a matching method reaches :meth:`generic_visit`,
    which raises, so a visitor that misses a variant fails loudly instead of
    silently skipping part of the tree.
    """

    def visit(self, node: Node) -> Any:
        method = getattr(self, f"visit_{type(node).__name__}", None)
        if method is None:
            return self.generic_visit(node)
        return method(node)

    def generic_visit(self, node: Node) -> Any:
        raise TypeError(f"{type(self).__name__} cannot handle {type(node).__name__} nodes")


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct children of ``node`` in field order."""
    for f in dataclasses.fields(node):
        if f.name == "token":
            continue
        value = getattr(node, f.name)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Node):
                    yield item


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and every descendant in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_child_nodes(current))))


__all__ = ["NodeVisitor", "iter_child_nodes", "walk"]
