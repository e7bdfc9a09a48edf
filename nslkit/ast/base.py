"""Core AST node definitions shared by expressions and statements."""

from __future__ import annotations

from dataclasses import field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from nslkit.lang.token import Token


def token_field():
    """Originating token of a node; kept for diagnostics, ignored by equality."""
    return field(default=None, compare=False, repr=False)


class Node:
    """Base class for every AST node.

    Concrete nodes are dataclasses declaring a trailing ``token`` field built
    with :func:`token_field`.
    """

    token: Optional["Token"]

    def token_literal(self) -> str:
        return self.token.literal if self.token is not None else ""

    @property
    def line(self) -> int:
        """1-based line of the originating token, 0 when unknown."""
        return self.token.line if self.token is not None else 0


__all__ = ["Node", "token_field"]
