"""Interpreter.

This is a tree-walk interpreter for evaluating AST nodes produced by the parser. It supports
arithmetic, comparison and equality, variables, conditionals, loops, and output statements.

1. Execution Model
The interpreter evaluates an abstract syntax tree (AST) in a top-down, recursive manner.
Statements are executed via the `execute()` method, and expressions are evaluated using
`eval_expr()`. Both methods operate over the tagged tuples described in `quill.syntax`.
`skipped` markers left behind by parser error recovery are ignored.

2. Environment
The interpreter maintains a single flat dictionary `vars` for the whole run. Blocks and
loop bodies do not open a scope: a variable declared anywhere stays visible and mutable
until the run ends. `var` always (re)binds its name, and assignment binds the name even
if it was never declared.

3. Values
Runtime values are Python floats (numbers), bools and ``None`` (the absent value). All
consumers match on these three classes explicitly, so no Python truthiness or cross-type
equality (``True == 1.0``) leaks into the language.

4. Truthiness
``None`` is false, a boolean is its own truth value, and every number (zero included)
is true.

5. Error Handling
Type mismatches, division or modulo by zero and undefined variables are surfaced as
`ScriptRuntimeError` subclasses carrying line numbers and file context. The first such
error aborts the run; output already printed stays printed.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import math
import sys
from typing import TextIO

from quill.exceptions import (
    DivisionByZeroException,
    NestingDepthException,
    OperandTypeException,
    UndefinedVariableException,
    UnknownOpException,
)
from quill.syntax import ARITHMETIC_OPS, COMPARISON_OPS, Node, Op


def is_truthy(value) -> bool:
    """
    Return the truth value of a runtime value.
    """
    match value:
        case None:
            return False
        case bool():
            return value
        case _:
            return True


def values_equal(lhs, rhs) -> bool:
    """
    Compare two runtime values without type coercion.
    """
    match (lhs, rhs):
        case (None, None):
            return True
        case (bool(), bool()) | (float(), float()):
            return lhs == rhs
        case _:
            return False


def stringify(value) -> str:
    """
    Convert a runtime value to the text ``print`` writes.

    Integral numbers drop their trailing ``.0``; non-finite numbers print as
    ``Infinity``, ``-Infinity`` and ``NaN``.
    """
    match value:
        case None:
            return "null"
        case bool():
            return "true" if value else "false"
        case float():
            if math.isnan(value):
                return "NaN"
            if math.isinf(value):
                return "Infinity" if value > 0 else "-Infinity"
            text = repr(value)
            if text.endswith(".0"):
                text = text[:-2]
            return text
        case _:
            return str(value)


class Interpreter:
    """Tree-walk interpreter for Quill."""

    def __init__(self, file: str = "<script>", out: TextIO | None = None):
        """
        Initialize the interpreter.

        Parameters:
            file (str): The script name used in error messages.
            out (TextIO): Stream ``print`` writes to; ``sys.stdout`` when omitted.
        """
        self.vars: dict[str, float | bool | None] = {}
        self.file = file
        self.out = out

    def _write(self, text: str) -> None:
        print(text, file=self.out if self.out is not None else sys.stdout)

    def _lookup(self, name: str, line: int):
        if name in self.vars:
            return self.vars[name]
        raise UndefinedVariableException(name, line, self.file)

    def _binary(self, op: Op, lhs, rhs, line: int):
        """
        Apply a binary operator to two evaluated operands.

        Raises:
            OperandTypeException: If an arithmetic or comparison operand is not a number.
            DivisionByZeroException: If ``/`` or ``%`` has a zero right operand.
        """
        if op == Op.EQ:
            return values_equal(lhs, rhs)

        if op in ARITHMETIC_OPS or op in COMPARISON_OPS:
            if not (isinstance(lhs, float) and isinstance(rhs, float)):
                raise OperandTypeException(op.value, line, self.file)

        match op:
            case Op.ADD:
                return lhs + rhs
            case Op.SUB:
                return lhs - rhs
            case Op.MUL:
                return lhs * rhs
            case Op.DIV:
                if rhs == 0:
                    raise DivisionByZeroException(op.value, line, self.file)
                return lhs / rhs
            case Op.MOD:
                if rhs == 0:
                    raise DivisionByZeroException(op.value, line, self.file)
                # fmod raises on an infinite dividend; IEEE gives NaN
                if not math.isfinite(lhs):
                    return math.nan
                # IEEE remainder takes the sign of the dividend, unlike Python's %
                return math.fmod(lhs, rhs)
            case Op.LT:
                return lhs < rhs
            case Op.GT:
                return lhs > rhs
            case _:
                raise UnknownOpException(op, line, self.file)

    def eval_expr(self, node):
        """
        Recursively evaluate an expression node and return its computed value.

        Parameters:
            node (tuple): An expression node. The first element is the node tag or
                          operator, the last element is the line number.

        Returns:
            float | bool | None: The evaluated result of the expression.

        Raises:
            UndefinedVariableException: If a variable is read before being bound.
            OperandTypeException: If an operator receives operands of the wrong type.
            DivisionByZeroException: On division or modulo by zero.
            UnknownOpException: If the node is not a known expression.
        """
        tag = node[0]
        line = node[-1]
        match tag:
            case Node.LITERAL:
                return node[1]
            case Node.IDENT:
                return self._lookup(node[1], line)
            case Node.ASSIGN:
                _, name, value_node, _ = node
                value = self.eval_expr(value_node)
                self.vars[name] = value
                return value
            case Op():
                lhs = self.eval_expr(node[1])
                rhs = self.eval_expr(node[2])
                return self._binary(tag, lhs, rhs, line)
            case _:
                raise UnknownOpException(tag, line, self.file)

    def exec_stmt(self, stmt: tuple) -> None:
        """
        Execute a single statement node.

        Raises:
            UnknownOpException: For unknown statement types.
        """
        kind = stmt[0]
        line = stmt[-1]
        match kind:
            case Node.EXPR_STMT:
                self.eval_expr(stmt[1])

            case Node.PRINT:
                self._write(stringify(self.eval_expr(stmt[1])))

            case Node.VAR:
                _, name, initializer, _ = stmt
                value = None if initializer is None else self.eval_expr(initializer)
                self.vars[name] = value

            case Node.BLOCK:
                self.execute(stmt[1])

            case Node.IF:
                _, cond_node, then_branch, else_branch, _ = stmt
                if is_truthy(self.eval_expr(cond_node)):
                    self.exec_stmt(then_branch)
                elif else_branch is not None:
                    self.exec_stmt(else_branch)

            case Node.WHILE:
                _, cond_node, body, _ = stmt
                while is_truthy(self.eval_expr(cond_node)):
                    self.exec_stmt(body)

            case Node.SKIPPED:
                pass

            case _:
                raise UnknownOpException(kind, line, self.file)

    def execute(self, statements: list) -> None:
        """
        Executes a list of statements in order against the shared environment.

        Parameters:
            statements (list): Statement nodes as produced by the parser.
        """
        for stmt in statements:
            self.exec_stmt(stmt)

    def run(self, statements: list) -> None:
        """
        Execute a whole program.

        Raises:
            ScriptRuntimeError: On the first runtime failure.
        """
        try:
            self.execute(statements)
        except RecursionError as err:
            raise NestingDepthException(file=self.file) from err
