"""Runner.

Drives the full pipeline for one piece of source text:

1. The lexer tokenizes the source. An unexpected character aborts the run.
2. The parser builds the AST, recovering from malformed statements. Every
   recovered error is reported, and the well-formed statements still run.
3. The interpreter executes the AST. The first runtime error aborts the run.

Program output goes to ``out`` and diagnostics to ``err``, one line each, in
the ``ErrorType: message`` form the command line prints.


File: runner.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import sys
from typing import TextIO

from quill.exceptions import LexError, ParseError, ScriptRuntimeError
from quill.interpreter import Interpreter
from quill.lexer import Token, tokenize
from quill.parser import Parser
from quill.syntax import format_node


def report(error: Exception, err: TextIO | None = None) -> None:
    """
    Write one diagnostic line for ``error``.
    """
    print(f"{type(error).__name__}: {error}", file=err if err is not None else sys.stderr)


def parse_program(source: str, file: str = "<script>") -> tuple[list[Token], list[tuple], list[ParseError]]:
    """
    Tokenize and parse ``source``.

    Returns:
        list[Token]: The token stream.
        list[tuple]: The statements, ``skipped`` markers included.
        list[ParseError]: The errors the parser recovered from.

    Raises:
        LexError: If the source contains an unexpected character.
    """
    tokens = tokenize(source, file)
    parser = Parser(tokens, file)
    statements = parser.parse()
    return tokens, statements, parser.errors


def debug_print_tokens_ast(tokens, ast, out: TextIO | None = None) -> None:
    """
    Print tokenized source and AST
    """
    out = out if out is not None else sys.stdout
    print("\nTokens:\n", file=out)
    print(tokens, file=out)
    print("\nAST:\n", file=out)
    for node in ast:
        try:
            text = format_node(node)
        except RecursionError:
            text = f"<statement on line {node[-1]} nested too deeply to display>"
        print(text, file=out)
    print(" ", file=out)


def run_source(
    source: str,
    file: str = "<script>",
    out: TextIO | None = None,
    err: TextIO | None = None,
    interpreter: Interpreter | None = None,
    debug: bool = False,
) -> bool:
    """
    Scan, parse and run ``source``.

    Parameters:
        source (str): The program text.
        file (str): Script name used in diagnostics.
        out (TextIO): Program output stream, ``sys.stdout`` when omitted.
        err (TextIO): Diagnostic stream, ``sys.stderr`` when omitted.
        interpreter (Interpreter): Reuse an interpreter, keeping its variables.
        debug (bool): Dump tokens and AST before running.

    Returns:
        bool: ``True`` if the program scanned, parsed and ran without any error.
    """
    try:
        tokens, ast, parse_errors = parse_program(source, file)
    except LexError as e:
        report(e, err)
        return False

    if debug:
        debug_print_tokens_ast(tokens, ast, out)

    for e in parse_errors:
        report(e, err)

    if interpreter is None:
        interpreter = Interpreter(file, out)
    try:
        interpreter.run(ast)
    except ScriptRuntimeError as e:
        report(e, err)
        return False

    return not parse_errors
