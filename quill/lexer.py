"""Lexer for Quill.

This lexer performs a single pass over the source code using a combined
regular expression of named groups. Each match yields a :class:`Token`
containing its type, the exact source text it was cut from, an optional
literal payload and its source line number.

Tokens cover number literals (digits only, parsed to floats), identifiers,
the five keywords (``if``, ``else``, ``while``, ``var``, ``print``), the
arithmetic and comparison operators, and the delimiters. ``=`` is ``ASSIGN``
unless immediately followed by another ``=``, in which case the pair is
``EQ``. Whitespace is discarded. Any other character aborts tokenization.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import re
from dataclasses import dataclass
from typing import Any

from quill.exceptions import LexError


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Attributes:
        type (str): The token type, e.g. ``NUMBER`` or ``WHILE``.
        value (str): The lexeme, exactly as written in the source.
        literal (Any): Parsed payload; a float for ``NUMBER`` tokens.
        line (int): The 1-based line the token starts on.
    """
    type: str
    value: str
    literal: Any = None
    line: int = 1

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type}, {self.value!r}, line={self.line})"


KEYWORDS: dict[str, str] = {
    'if': 'IF',
    'else': 'ELSE',
    'while': 'WHILE',
    'var': 'VAR',
    'print': 'PRINT',
}

TOKEN_SPECIFICATION: list[tuple[str, str]] = [
    # Literals
    ('NUMBER',    r'[0-9]+'),

    # Identifiers (keywords are reclassified after matching)
    ('ID',        r'[A-Za-z_][A-Za-z0-9_]*'),

    # Equality must be tried before assignment
    ('EQ',        r'=='),
    ('ASSIGN',    r'='),

    # Delimiters
    ('LPAREN',    r'\('),
    ('RPAREN',    r'\)'),
    ('LBRACE',    r'\{'),
    ('RBRACE',    r'\}'),
    ('SEMICOLON', r';'),

    # Arithmetic operators
    ('PLUS',      r'\+'),
    ('MINUS',     r'-'),
    ('MUL',       r'\*'),
    ('DIV',       r'/'),
    ('MOD',       r'%'),

    # Comparison operators
    ('LT',        r'<'),
    ('GT',        r'>'),

    # Miscellaneous
    ('NEWLINE',   r'\n'),
    ('SKIP',      r'[ \t\r]+'),
    ('MISMATCH',  r'.'),
]

TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in TOKEN_SPECIFICATION),
    re.DOTALL,
)


def tokenize(code: str, file: str | None = None) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.
        file (str): Optional script name used in error messages.

    Returns:
        list[Token]: The tokens, always terminated by an ``EOF`` token.

    Raises:
        LexError: If an unexpected character is encountered.
    """
    tokens: list[Token] = []
    line_num = 1

    for match_obj in TOKEN_REGEX.finditer(code):
        kind = match_obj.lastgroup
        value = match_obj.group()

        if kind == 'NEWLINE':
            line_num += 1
            continue
        if kind == 'SKIP':
            continue
        if kind == 'MISMATCH':
            raise LexError(value, line_num, file)

        if kind == 'NUMBER':
            tokens.append(Token('NUMBER', value, float(value), line_num))
        elif kind == 'ID':
            tokens.append(Token(KEYWORDS.get(value, 'ID'), value, None, line_num))
        else:
            tokens.append(Token(kind, value, None, line_num))

    tokens.append(Token('EOF', '', None, line_num))
    return tokens
