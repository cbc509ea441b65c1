"""
Expression parsing utilities for Quill.

These functions operate on a `quill.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, lowest precedence
first:

    assignment := equality ('=' assignment)?
    equality   := comparison ('==' comparison)*
    comparison := term (('<' | '>') term)*
    term       := factor (('+' | '-') factor)*
    factor     := primary (('*' | '/' | '%') primary)*
    primary    := NUMBER | IDENTIFIER | '(' expression ')'

Binary operators are left-associative; assignment is right-associative.
"""

from typing import TYPE_CHECKING

from quill.syntax import TOKEN_OPS, Node

if TYPE_CHECKING:
    from quill.parser import Parser


# ---- Highest precedence ----

def parse_primary(parser: 'Parser') -> tuple:
    """Parse a number literal, a variable reference, or a parenthesized expression."""
    tok = parser.curr_token

    if tok.type == 'NUMBER':
        parser.eat('NUMBER')
        return (Node.LITERAL, tok.literal, tok.line)

    if tok.type == 'ID':
        parser.eat('ID')
        return (Node.IDENT, tok.value, tok.line)

    if tok.type == 'LPAREN':
        parser.eat('LPAREN')
        node = parser.group()
        parser.eat('RPAREN', "Expected ')' after expression")
        return node

    raise parser.error("Expected expression")


def _binary_level(parser: 'Parser', operand, token_types: tuple) -> tuple:
    """Fold a left-associative run of operators of one precedence level."""
    result = operand()
    while parser.curr_token.type in token_types:
        op_tok = parser.curr_token
        parser.eat(op_tok.type)
        result = (TOKEN_OPS[op_tok.type], result, operand(), op_tok.line)
    return result


def parse_factor(parser: 'Parser') -> tuple:
    """Parse multiplication, division, and modulus expressions."""
    return _binary_level(parser, parser.primary, ('MUL', 'DIV', 'MOD'))


def parse_term(parser: 'Parser') -> tuple:
    """Parse addition and subtraction expressions."""
    return _binary_level(parser, parser.factor, ('PLUS', 'MINUS'))


def parse_comparison(parser: 'Parser') -> tuple:
    """Parse comparison expressions (<, >)."""
    return _binary_level(parser, parser.term, ('LT', 'GT'))


def parse_equality(parser: 'Parser') -> tuple:
    """Parse equality expressions (==)."""
    return _binary_level(parser, parser.comparison, ('EQ',))


# ---- Entry point ----

def parse_assignment(parser: 'Parser') -> tuple:
    """
    Parse an expression starting from the lowest-precedence operator.

    The target of ``=`` must be a bare variable reference; anything else is
    rejected here, before the tree is built.
    """
    target = parser.equality()

    if parser.curr_token.type == 'ASSIGN':
        eq_tok = parser.eat('ASSIGN')
        value = parser.group()
        if target[0] != Node.IDENT:
            raise parser.error("Invalid assignment target", eq_tok)
        return (Node.ASSIGN, target[1], value, target[-1])

    return target
