"""Static scope analysis: find variables used but never declared."""

from __future__ import annotations

from typing import Iterable, List, Set

from nslkit.ast import (
    AttributeAccess,
    BlockStatement,
    Boolean,
    ElseIfClause,
    ExpressionStatement,
    FilterExpression,
    ForStatement,
    Identifier,
    IfStatement,
    InfixExpression,
    IntegerLiteral,
    NodeVisitor,
    OutputStatement,
    PrefixExpression,
    Program,
    SetStatement,
    StringLiteral,
)

from .diagnostics import Diagnostic, Severity

# Built-in values, functions and test words that every template can use.
GLOBAL_NAMES = frozenset({
    "true",
    "false",
    "null",
    "None",
    "range",
    "dict",
    "lipsum",
    "cycler",
    "joiner",
    "namespace",
    "in",
    "is",
    "not",
    "and",
    "or",
    "defined",
    "undefined",
    "callable",
    "divisible",
    "by",
    "eq",
    "equalto",
    "even",
    "ne",
    "odd",
})

UNDEFINED_VARIABLE = (
    "undefined variable: '{name}' is used but not defined in parameters or in the skill"
)


class ScopeAnalyzer(NodeVisitor):
    """
    Walks a program and reports every identifier reference that resolves to
    nothing.

    The scope chain is a stack of name sets. The root frame holds the declared
    parameters and :data:`GLOBAL_NAMES`; only ``for`` pushes a frame. ``set``
    declares into the innermost frame, so a ``set`` inside an ``if`` branch is
    visible after the conditional, while a ``set`` inside a loop body is not
    visible after the loop.
    """

    rule_id = "undefined-variable"

    def __init__(self, declared: Iterable[str], file_path: str = ""):
        self.file_path = file_path
        self.declared = tuple(declared)
        self._scopes: List[Set[str]] = []
        self._diagnostics: List[Diagnostic] = []

    def analyze(self, program: Program) -> List[Diagnostic]:
        self._scopes = [set(GLOBAL_NAMES)]
        for name in self.declared:
            self._declare(name)
        self._diagnostics = []

        self.visit(program)
        return list(self._diagnostics)

    def _declare(self, name: str) -> None:
        if name:
            self._scopes[-1].add(name)

    def _is_defined(self, name: str) -> bool:
        return any(name in frame for frame in reversed(self._scopes))

    # Statements

    def visit_Program(self, node: Program) -> None:
        for stmt in node.statements:
            self.visit(stmt)

    def visit_BlockStatement(self, node: BlockStatement) -> None:
        for stmt in node.statements:
            self.visit(stmt)

    def visit_SetStatement(self, node: SetStatement) -> None:
        self.visit(node.value)
        self._declare(node.name.name)

    def visit_ForStatement(self, node: ForStatement) -> None:
        self.visit(node.sequence)
        self._scopes.append({node.iterator.name})
        try:
            self.visit(node.body)
        finally:
            self._scopes.pop()

    def visit_IfStatement(self, node: IfStatement) -> None:
        self.visit(node.condition)
        self.visit(node.consequence)
        for clause in node.elseifs:
            self.visit(clause)
        if node.alternative is not None:
            self.visit(node.alternative)

    def visit_ElseIfClause(self, node: ElseIfClause) -> None:
        self.visit(node.condition)
        self.visit(node.consequence)

    def visit_OutputStatement(self, node: OutputStatement) -> None:
        self.visit(node.expression)

    def visit_ExpressionStatement(self, node: ExpressionStatement) -> None:
        self.visit(node.expression)

    # Expressions

    def visit_Identifier(self, node: Identifier) -> None:
        if not node.name or self._is_defined(node.name):
            return
        self._diagnostics.append(Diagnostic(
            file=self.file_path,
            line=node.line or 1,
            severity=Severity.ERROR,
            message=UNDEFINED_VARIABLE.format(name=node.name),
            rule_id=self.rule_id,
        ))

    def visit_AttributeAccess(self, node: AttributeAccess) -> None:
        # The attribute is a member name, not a variable.
        self.visit(node.object)

    def visit_FilterExpression(self, node: FilterExpression) -> None:
        # Filters live in their own namespace.
        self.visit(node.input)

    def visit_InfixExpression(self, node: InfixExpression) -> None:
        self.visit(node.left)
        self.visit(node.right)

    def visit_PrefixExpression(self, node: PrefixExpression) -> None:
        self.visit(node.operand)

    def visit_IntegerLiteral(self, node: IntegerLiteral) -> None:
        pass

    def visit_StringLiteral(self, node: StringLiteral) -> None:
        pass

    def visit_Boolean(self, node: Boolean) -> None:
        pass


__all__ = ["ScopeAnalyzer", "GLOBAL_NAMES", "UNDEFINED_VARIABLE"]
