"""
Statement parsing utilities for Quill.

These functions operate on a `quill.parser.parser.Parser` instance and
handle the statement forms of the language:

    declaration := 'var' IDENTIFIER ('=' expression)? ';' | statement
    statement   := 'print' expression ';'
                 | 'if' '(' expression ')' statement ('else' statement)?
                 | 'while' '(' expression ')' statement
                 | '{' declaration* '}'
                 | expression ';'

Declarations are only allowed at the top level and directly inside blocks;
the body of an ``if`` or ``while`` is a single statement.
"""

from typing import TYPE_CHECKING

from quill.exceptions import ParseError
from quill.syntax import Node

if TYPE_CHECKING:
    from quill.parser import Parser


def parse_declaration(parser: 'Parser') -> tuple:
    """
    Parse one declaration, recovering from any syntax error inside it.

    Returns:
        tuple: The statement node, or a ``skipped`` marker on error.
    """
    try:
        if parser.curr_token.type == 'VAR':
            return parser.parse_var()
        return parser.statement()
    except ParseError as err:
        return parser.recover(err)


def parse_statement(parser: 'Parser') -> tuple:
    """
    Parse a single statement.

    Returns:
        tuple: representing the AST node.
    """
    tok = parser.curr_token
    if tok.type == 'PRINT':
        return parser.parse_print()
    elif tok.type == 'IF':
        return parser.parse_if()
    elif tok.type == 'WHILE':
        return parser.parse_while()
    elif tok.type == 'LBRACE':
        return parser.block()
    return parser.parse_expr_stmt()


def parse_var(parser: 'Parser') -> tuple:
    """
    Parse a ``var`` declaration with an optional initializer.

    Returns:
        tuple: ('var', name, initializer_or_None, line)
    """
    tok = parser.eat('VAR')
    name_tok = parser.eat('ID', "Expected variable name after 'var'")
    initializer = None
    if parser.curr_token.type == 'ASSIGN':
        parser.eat('ASSIGN')
        initializer = parser.expr()
    parser.eat('SEMICOLON', "Expected ';' after variable declaration")
    return (Node.VAR, name_tok.value, initializer, tok.line)


def parse_print(parser: 'Parser') -> tuple:
    """
    Parse a ``print`` statement.

    Returns:
        tuple: ('print', expression_node, line)
    """
    tok = parser.eat('PRINT')
    expr_node = parser.expr()
    parser.eat('SEMICOLON', "Expected ';' after value")
    return (Node.PRINT, expr_node, tok.line)


def parse_if(parser: 'Parser') -> tuple:
    """
    Parse a conditional ``if`` statement with an optional ``else`` branch.

    A dangling ``else`` binds to the nearest ``if``.

    Returns:
        tuple: ('if', condition, then_branch, else_branch_or_None, line)
    """
    tok = parser.eat('IF')
    parser.eat('LPAREN', "Expected '(' after 'if'")
    condition = parser.expr()
    parser.eat('RPAREN', "Expected ')' after if condition")
    then_branch = parser.body()

    else_branch = None
    if parser.curr_token.type == 'ELSE':
        parser.eat('ELSE')
        else_branch = parser.body()

    return (Node.IF, condition, then_branch, else_branch, tok.line)


def parse_while(parser: 'Parser') -> tuple:
    """
    Parse a ``while`` loop.

    Returns:
        tuple: ('while', condition, body, line)
    """
    tok = parser.eat('WHILE')
    parser.eat('LPAREN', "Expected '(' after 'while'")
    condition = parser.expr()
    parser.eat('RPAREN', "Expected ')' after while condition")
    body = parser.body()
    return (Node.WHILE, condition, body, tok.line)


def parse_block(parser: 'Parser') -> tuple:
    """
    Parse a block of declarations enclosed in braces.

    Each inner declaration recovers on its own, so a broken statement inside
    a block leaves a ``skipped`` marker rather than discarding the block.

    Returns:
        tuple: ('block', list_of_statements, line)
    """
    tok = parser.eat('LBRACE')
    statements = []
    while parser.curr_token.type not in ('RBRACE', 'EOF'):
        statements.append(parser.declaration())
    parser.eat('RBRACE', "Expected '}' after block")
    return (Node.BLOCK, statements, tok.line)


def parse_expr_stmt(parser: 'Parser') -> tuple:
    """
    Parse an expression used as a statement.

    Returns:
        tuple: ('expr_stmt', expression_node, line)
    """
    line = parser.curr_token.line
    expr_node = parser.expr()
    parser.eat('SEMICOLON', "Expected ';' after expression")
    return (Node.EXPR_STMT, expr_node, line)
