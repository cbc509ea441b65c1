"""
Tests for expression and statement parsing in Quill.
"""
from quill.syntax import Node, Op, format_node

from quill.tests.utils import parse_source, parse_with_errors


def expr_of(source: str) -> tuple:
    """
    Parse ``source`` as a single expression statement and return the expression.
    """
    (stmt,) = parse_source(source)
    assert stmt[0] == Node.EXPR_STMT
    return stmt[1]


def test_precedence():
    """Multiplication binds tighter than addition, which binds tighter than comparison."""
    node = expr_of("1 + 2 * 3 < 4 == 5;")
    assert node[0] == Op.EQ
    assert node[1][0] == Op.LT
    add = node[1][1]
    assert add[0] == Op.ADD
    assert add[2][0] == Op.MUL
    assert format_node(node) == "(((1.0 + (2.0 * 3.0)) < 4.0) == 5.0)"


def test_left_associativity():
    """Operators of the same level group to the left."""
    assert format_node(expr_of("8 - 4 - 2;")) == "((8.0 - 4.0) - 2.0)"
    assert format_node(expr_of("8 / 4 % 3;")) == "((8.0 / 4.0) % 3.0)"


def test_parentheses_override_precedence():
    """A parenthesised group is parsed as a whole expression."""
    assert format_node(expr_of("(1 + 2) * 3;")) == "((1.0 + 2.0) * 3.0)"


def test_assignment_is_its_own_node_and_right_associative():
    """Chained assignment nests to the right."""
    node = expr_of("a = b = 1 + 2;")
    assert node[0] == Node.ASSIGN
    assert node[1] == 'a'
    inner = node[2]
    assert inner[0] == Node.ASSIGN
    assert inner[1] == 'b'
    assert inner[2][0] == Op.ADD


def test_invalid_assignment_target_is_a_syntax_error():
    """Only a bare variable may be assigned to."""
    ast, errors = parse_with_errors("1 + a = 2;\n(a) = 3;")
    assert [stmt[0] for stmt in ast] == [Node.SKIPPED, Node.EXPR_STMT]
    assert ast[1][1][0] == Node.ASSIGN
    assert len(errors) == 1
    assert "Invalid assignment target" in str(errors[0])


def test_var_with_and_without_initializer():
    """Declarations may omit the initializer."""
    decl, bare = parse_source("var x = 3; var y;")
    assert decl[0] == Node.VAR
    assert decl[1] == 'x'
    assert decl[2] == (Node.LITERAL, 3.0, 1)
    assert bare == (Node.VAR, 'y', None, 1)


def test_if_else_and_dangling_else():
    """``else`` belongs to the nearest ``if``."""
    (stmt,) = parse_source("if (a) if (b) print 1; else print 2;")
    assert stmt[0] == Node.IF
    assert stmt[3] is None
    inner = stmt[2]
    assert inner[0] == Node.IF
    assert inner[3][0] == Node.PRINT


def test_while_and_block():
    """Loop bodies are single statements, usually blocks."""
    (loop,) = parse_source("while (i < 3) { print i; i = i + 1; }")
    assert loop[0] == Node.WHILE
    assert loop[1][0] == Op.LT
    body = loop[2]
    assert body[0] == Node.BLOCK
    assert [s[0] for s in body[1]] == [Node.PRINT, Node.EXPR_STMT]


def test_empty_block():
    """Blocks need no statements and no trailing semicolon."""
    assert parse_source("{} print 1;")[0] == (Node.BLOCK, [], 1)


def test_statements_record_lines():
    """Each node ends with the line it starts on."""
    ast = parse_source("var a = 1;\n\nprint a;\n")
    assert ast[0][-1] == 1
    assert ast[1][-1] == 3
