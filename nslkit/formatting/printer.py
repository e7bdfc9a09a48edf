"""Canonical pretty-printer for NSL syntax trees."""

from __future__ import annotations

from typing import List, Optional

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
from nslkit.config import FormattingOptions

# Characters escaped inside printed string literals so they re-lex unchanged.
STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
}


class NSLPrinter(NodeVisitor):
    """
    Renders a syntax tree back to canonical template text.

    Statements come back from their visit methods as lists of lines; expressions
    come back as strings. Every line of the result ends with a newline, tags
    have a single inner space, and bodies of ``if``/``elif``/``else``/``for``
    are indented one level.
    """

    def __init__(self, options: Optional[FormattingOptions] = None):
        self.options = options or FormattingOptions()
        self._indent_str = self.options.indent_str
        self._level = 0

    def print(self, program: Program) -> str:
        self._level = 0
        return "".join(f"{line}\n" for line in self.visit(program))

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _indent(self, text: str) -> str:
        return self._indent_str * self._level + text

    def _print_statements(self, statements) -> List[str]:
        lines: List[str] = []
        for stmt in statements:
            lines.extend(self.visit(stmt))
        return lines

    def _print_body(self, block: BlockStatement) -> List[str]:
        self._level += 1
        try:
            return self.visit(block)
        finally:
            self._level -= 1

    def visit_Program(self, node: Program) -> List[str]:
        return self._print_statements(node.statements)

    def visit_BlockStatement(self, node: BlockStatement) -> List[str]:
        return self._print_statements(node.statements)

    def visit_ExpressionStatement(self, node: ExpressionStatement) -> List[str]:
        return [self._indent(self.visit(node.expression))]

    def visit_SetStatement(self, node: SetStatement) -> List[str]:
        name = self.visit(node.name)
        value = self.visit(node.value)
        return [self._indent(f"{{% set {name} = {value} %}}")]

    def visit_OutputStatement(self, node: OutputStatement) -> List[str]:
        return [self._indent(f"{{{{ {self.visit(node.expression)} }}}}")]

    def visit_IfStatement(self, node: IfStatement) -> List[str]:
        lines = [self._indent(f"{{% if {self.visit(node.condition)} %}}")]
        lines.extend(self._print_body(node.consequence))
        for clause in node.elseifs:
            lines.extend(self.visit(clause))
        if node.alternative is not None:
            lines.append(self._indent("{% else %}"))
            lines.extend(self._print_body(node.alternative))
        lines.append(self._indent("{% endif %}"))
        return lines

    def visit_ElseIfClause(self, node: ElseIfClause) -> List[str]:
        lines = [self._indent(f"{{% elif {self.visit(node.condition)} %}}")]
        lines.extend(self._print_body(node.consequence))
        return lines

    def visit_ForStatement(self, node: ForStatement) -> List[str]:
        iterator = self.visit(node.iterator)
        sequence = self.visit(node.sequence)
        lines = [self._indent(f"{{% for {iterator} in {sequence} %}}")]
        lines.extend(self._print_body(node.body))
        lines.append(self._indent("{% endfor %}"))
        return lines

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def visit_Identifier(self, node: Identifier) -> str:
        return node.name

    def visit_IntegerLiteral(self, node: IntegerLiteral) -> str:
        return str(node.value)

    def visit_StringLiteral(self, node: StringLiteral) -> str:
        escaped = "".join(STRING_ESCAPES.get(char, char) for char in node.value)
        return f'"{escaped}"'

    def visit_Boolean(self, node: Boolean) -> str:
        return "true" if node.value else "false"

    def visit_PrefixExpression(self, node: PrefixExpression) -> str:
        return f"{node.operator}{self.visit(node.operand)}"

    def visit_InfixExpression(self, node: InfixExpression) -> str:
        return f"{self.visit(node.left)} {node.operator} {self.visit(node.right)}"

    def visit_AttributeAccess(self, node: AttributeAccess) -> str:
        return f"{self.visit(node.object)}.{self.visit(node.attribute)}"

    def visit_FilterExpression(self, node: FilterExpression) -> str:
        return f"{self.visit(node.input)} | {self.visit(node.filter)}"


def print_program(program: Program, options: Optional[FormattingOptions] = None) -> str:
    """Render ``program`` as canonical template text."""
    return NSLPrinter(options).print(program)


__all__ = ["NSLPrinter", "print_program"]
