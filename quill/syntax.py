"""Shared definitions for the Quill abstract syntax tree.

Nodes are plain tuples. The first element is the node tag and the last element
is the source line the node starts on:

    ('literal', value, line)                  number, boolean or None
    ('ident', name, line)                     variable reference
    (Op.ADD, lhs, rhs, line)                  binary operation, one per Op
    ('assign', name, value, line)             assignment to a variable
    ('expr_stmt', expr, line)                 evaluate and discard
    ('var', name, initializer | None, line)   declaration
    ('print', expr, line)                     print one line
    ('if', cond, then, else | None, line)     conditional
    ('while', cond, body, line)               loop
    ('block', [statements], line)             grouping, no new scope
    ('skipped', message, line)                statement dropped by error recovery

Keeping the tags and operators in one place prevents the parser and the
interpreter from drifting apart.


File: syntax.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from enum import Enum


class Node(str, Enum):
    """
    Enumeration of AST node tags other than binary operators.
    """

    # Expressions
    LITERAL = "literal"
    IDENT = "ident"
    ASSIGN = "assign"

    # Statements
    EXPR_STMT = "expr_stmt"
    VAR = "var"
    PRINT = "print"
    IF = "if"
    WHILE = "while"
    BLOCK = "block"
    SKIPPED = "skipped"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


class Op(str, Enum):
    """
    Enumeration of binary operators, valued by their source spelling.
    """

    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"

    # Comparison
    LT = "<"
    GT = ">"

    # Equality
    EQ = "=="

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the source spelling for nicer debug output.
        """
        return self.value


# Token type -> operator, used by the expression parser.
TOKEN_OPS: dict[str, Op] = {
    'PLUS': Op.ADD,
    'MINUS': Op.SUB,
    'MUL': Op.MUL,
    'DIV': Op.DIV,
    'MOD': Op.MOD,
    'LT': Op.LT,
    'GT': Op.GT,
    'EQ': Op.EQ,
}

ARITHMETIC_OPS = frozenset({Op.ADD, Op.SUB, Op.MUL, Op.DIV, Op.MOD})
COMPARISON_OPS = frozenset({Op.LT, Op.GT})


def skipped(message: str, line: int) -> tuple:
    """
    Build the marker left in place of a statement dropped by error recovery.
    """
    return (Node.SKIPPED, message, line)


def is_skipped(node) -> bool:
    """
    Return ``True`` if ``node`` is an error-recovery marker.
    """
    return node[0] == Node.SKIPPED


def format_node(node, indent: int = 0) -> str:
    """
    Convert an AST node back to readable source-like text for debugging.

    Expressions are fully parenthesised so precedence is visible. Statements
    are rendered one per line, nested bodies indented by two spaces.
    """
    pad = "  " * indent
    tag = node[0]
    match tag:
        case Node.LITERAL:
            value = node[1]
            if value is None:
                return "null"
            if isinstance(value, bool):
                return "true" if value else "false"
            return repr(value)
        case Node.IDENT:
            return node[1]
        case Node.ASSIGN:
            return f"({node[1]} = {format_node(node[2])})"
        case Op():
            return f"({format_node(node[1])} {tag.value} {format_node(node[2])})"
        case Node.EXPR_STMT:
            return f"{pad}{format_node(node[1])};"
        case Node.PRINT:
            return f"{pad}print {format_node(node[1])};"
        case Node.VAR:
            if node[2] is None:
                return f"{pad}var {node[1]};"
            return f"{pad}var {node[1]} = {format_node(node[2])};"
        case Node.IF:
            text = f"{pad}if {format_node(node[1])}\n{format_node(node[2], indent + 1)}"
            if node[3] is not None:
                text += f"\n{pad}else\n{format_node(node[3], indent + 1)}"
            return text
        case Node.WHILE:
            return f"{pad}while {format_node(node[1])}\n{format_node(node[2], indent + 1)}"
        case Node.BLOCK:
            inner = "\n".join(format_node(stmt, indent + 1) for stmt in node[1])
            return f"{pad}{{\n{inner}\n{pad}}}" if inner else f"{pad}{{}}"
        case Node.SKIPPED:
            return f"{pad}<skipped: {node[1]}>"
        case _:
            return f"{pad}<node {tag}>"
