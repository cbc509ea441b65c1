"""Errors.

Scanning, parsing and evaluation each raise their own family of errors so the
caller can tell a malformed script apart from one that failed while running.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""


def _located(message: str, line=None, file=None) -> str:
    if line is not None:
        message += f" on line {line}"
    if file is not None:
        message += f" in {file}"
    return message


class LexError(Exception):
    """
    Error for characters the lexer cannot classify.
    """
    def __init__(self, char, line=None, file=None):
        self.char = char
        self.line = line
        super().__init__(_located(f"Unexpected character '{char}'", line, file))


class ParseError(SyntaxError):
    """
    Error for a malformed statement.

    ``at_eof`` is set when the parser ran out of tokens, which the REPL uses
    to decide whether the input is merely incomplete.
    """
    def __init__(self, message, line=None, file=None, at_eof=False):
        self.line = line
        self.at_eof = at_eof
        super().__init__(_located(message, line, file))


class ScriptRuntimeError(RuntimeError):
    """
    Base error for failures while executing a script.
    """
    def __init__(self, message, line=None, file=None):
        self.line = line
        super().__init__(_located(message, line, file))


class UndefinedVariableException(ScriptRuntimeError):
    """
    Error for undefined variables.
    """
    def __init__(self, varname, line=None, file=None):
        self.varname = varname
        super().__init__(f"Undefined variable '{varname}'", line, file)


class OperandTypeException(ScriptRuntimeError):
    """
    Error for arithmetic or comparison on non-numbers.
    """
    def __init__(self, op, line=None, file=None):
        self.op = op
        super().__init__(f"Operands of '{op}' must be numbers", line, file)


class DivisionByZeroException(ScriptRuntimeError):
    """
    Error for division or modulo by zero.
    """
    def __init__(self, op, line=None, file=None):
        self.op = op
        kind = "Modulo" if op == "%" else "Division"
        super().__init__(f"{kind} by zero", line, file)


class UnknownOpException(ScriptRuntimeError):
    """
    Error for unknown operations.
    """
    def __init__(self, op, line=None, file=None):
        self.op = op
        super().__init__(f"Unknown operation '{op}'", line, file)


class NestingDepthException(ScriptRuntimeError):
    """
    Error for expressions too deep to evaluate recursively.
    """
    def __init__(self, line=None, file=None):
        super().__init__("Expression nested too deeply to evaluate", line, file)
