"""
Main parser entry point for Quill.

This is a recursive descent parser that operates in an LL(1) fashion. The
`Parser` class owns the token stream and coordinates the descent; the actual
parsing routines are split across `quill.parser.expressions` and
`quill.parser.statements`.

1. Token Consumption
Tokens are consumed manually using `eat()`, which checks the current token
against the expected type and advances the stream if they match.

2. Error Recovery
A syntax error inside one declaration is caught at that declaration. The
error is recorded on `errors`, the parser discards tokens until it has passed
a `;` or reaches a keyword that starts a statement, and a `skipped` marker
takes the place of the broken statement. Parsing then carries on, so one
pass reports every malformed statement.

3. Nesting Depth
Only re-entrant nesting counts: each parenthesised group, assignment
right-hand side, block and ``if``/``else``/``while`` branch is one level. The
enclosing top-level statement and its expression are level zero. Nesting
beyond `MAX_NESTING_DEPTH` is reported as a syntax error rather than
exhausting the Python call stack.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from quill.exceptions import ParseError
from quill.lexer import Token
from quill.syntax import skipped

from . import expressions as _expr
from . import statements as _stmt


MAX_NESTING_DEPTH = 48

# Tokens that begin a statement; resynchronization stops in front of them.
STATEMENT_STARTS = frozenset({'IF', 'WHILE', 'VAR', 'PRINT'})


class Parser:
    """Quill parser."""

    def __init__(self, tokens: list[Token], file: str = "<script>"):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): A list of Token instances ending with ``EOF``.
            file (str): The name of the script.
        """
        self.tokens = tokens
        self.position = 0
        self.curr_token = self.tokens[self.position]
        self.source_file = file
        self.errors: list[ParseError] = []
        self.depth = 0

    def at_end(self) -> bool:
        """
        Return ``True`` once only the ``EOF`` token remains.
        """
        return self.curr_token.type == 'EOF'

    def check(self, token_type: str) -> bool:
        """
        Return ``True`` if the current token has the given type.
        """
        return self.curr_token.type == token_type

    def advance(self) -> Token:
        """
        Consume and return the current token. ``EOF`` is never consumed.
        """
        tok = self.curr_token
        if not self.at_end():
            self.position += 1
            self.curr_token = self.tokens[self.position]
        return tok

    def previous(self) -> Token | None:
        """
        Return the most recently consumed token.
        """
        if self.position == 0:
            return None
        return self.tokens[self.position - 1]

    def error(self, message: str, tok: Token | None = None) -> ParseError:
        """
        Build a ParseError describing the offending token.
        """
        tok = tok or self.curr_token
        found = "end of input" if tok.type == 'EOF' else f"'{tok.value}'"
        return ParseError(
            f"{message}, got {found}",
            tok.line,
            self.source_file,
            at_eof=tok.type == 'EOF',
        )

    def eat(self, token_type: str, message: str | None = None) -> Token:
        """
        Consume the current token if it matches the expected type.

        Parameters:
            token_type (str): The expected token type.
            message (str): What was expected, for the error message.

        Returns:
            Token: The consumed token.

        Raises:
            ParseError: If the token does not match the expected type.
        """
        if self.curr_token.type == token_type:
            return self.advance()
        raise self.error(message or f"Expected token of type {token_type}")

    def synchronize(self) -> None:
        """
        Discard tokens until a likely statement boundary.

        The token that caused the error is always dropped, then tokens are
        skipped until one of them was a ``;`` or the next one starts a
        statement.
        """
        self.advance()
        while not self.at_end():
            prev = self.previous()
            if prev is not None and prev.type == 'SEMICOLON':
                return
            if self.curr_token.type in STATEMENT_STARTS:
                return
            self.advance()

    def _nested(self, parse_fn):
        """
        Run ``parse_fn`` one nesting level deeper.
        """
        if self.depth >= MAX_NESTING_DEPTH:
            raise self.error(f"Nesting deeper than {MAX_NESTING_DEPTH} levels")
        self.depth += 1
        try:
            return parse_fn(self)
        finally:
            self.depth -= 1


    # Expression wrappers
    def primary(self) -> tuple:
        """
        Parse a number, a variable reference or a parenthesized group.
        """
        return _expr.parse_primary(self)

    def factor(self) -> tuple:
        """
        Parse multiplication, division and modulo.
        """
        return _expr.parse_factor(self)

    def term(self) -> tuple:
        """
        Parse addition and subtraction.
        """
        return _expr.parse_term(self)

    def comparison(self) -> tuple:
        """
        Parse ``<`` and ``>``.
        """
        return _expr.parse_comparison(self)

    def equality(self) -> tuple:
        """
        Parse ``==``.
        """
        return _expr.parse_equality(self)

    def expr(self) -> tuple:
        """
        Parse a full expression, assignment included.
        """
        return _expr.parse_assignment(self)

    def group(self) -> tuple:
        """
        Parse an expression nested inside another one.
        """
        return self._nested(_expr.parse_assignment)


    # Statement wrappers
    def declaration(self) -> tuple:
        """
        Parse a declaration or statement, recovering from syntax errors.
        """
        return _stmt.parse_declaration(self)

    def statement(self) -> tuple:
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def body(self) -> tuple:
        """
        Parse the statement governed by an ``if``, ``else`` or ``while``.
        """
        return self._nested(_stmt.parse_statement)

    def parse_var(self) -> tuple:
        """
        Parse a ``var`` declaration.
        """
        return _stmt.parse_var(self)

    def parse_print(self) -> tuple:
        """
        Parse a ``print`` statement.
        """
        return _stmt.parse_print(self)

    def parse_if(self) -> tuple:
        """
        Parse an ``if`` statement with an optional ``else`` branch.
        """
        return _stmt.parse_if(self)

    def parse_while(self) -> tuple:
        """
        Parse a ``while`` loop.
        """
        return _stmt.parse_while(self)

    def block(self) -> tuple:
        """
        Parse a block of statements enclosed in braces.
        """
        return self._nested(_stmt.parse_block)

    def parse_expr_stmt(self) -> tuple:
        """
        Parse an expression followed by ``;``.
        """
        return _stmt.parse_expr_stmt(self)


    def recover(self, err: ParseError) -> tuple:
        """
        Record ``err``, resynchronize and return the marker for the lost statement.
        """
        self.errors.append(err)
        self.synchronize()
        return skipped(str(err), err.line)

    def parse(self) -> list[tuple]:
        """
        Parse the full input into a list of statements.

        Broken statements appear as ``skipped`` markers; the errors behind them
        are collected in ``errors``.
        """
        statements = []
        while not self.at_end():
            statements.append(self.declaration())
        return statements
