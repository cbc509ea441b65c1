"""
Tests for running whole programs from source text in Quill.
"""
import io

from quill import run_source
from quill.interpreter import Interpreter


def run(source: str, **kwargs):
    """
    Run ``source`` with captured streams, returning (ok, stdout, stderr).
    """
    out, err = io.StringIO(), io.StringIO()
    ok = run_source(source, "<test>", out=out, err=err, **kwargs)
    return ok, out.getvalue(), err.getvalue()


def test_successful_run():
    """A clean program prints its output and nothing else."""
    ok, out, err = run("var n = 5; var result = 1; while (n > 0) { result = result * n; n = n - 1; } print result;")
    assert ok
    assert out == "120\n"
    assert err == ""


def test_lex_error_aborts_before_running():
    """An unexpected character means nothing runs."""
    ok, out, err = run("print 1; print 2 $ 3;")
    assert not ok
    assert out == ""
    assert err == "LexError: Unexpected character '$' on line 1 in <test>\n"


def test_parse_errors_are_reported_and_rest_runs():
    """Well-formed statements still run after a malformed one."""
    ok, out, err = run("print 1 +;\nprint 2;")
    assert not ok
    assert out == "2\n"
    assert err.splitlines() == ["ParseError: Expected expression, got ';' on line 1 in <test>"]


def test_runtime_error_keeps_earlier_output():
    """One error line follows whatever was printed before the failure."""
    ok, out, err = run("print 1;\nprint x;\nprint 3;")
    assert not ok
    assert out == "1\n"
    assert err == "UndefinedVariableException: Undefined variable 'x' on line 2 in <test>\n"


def test_division_by_zero_message():
    """Division by zero is reported as its own error."""
    ok, _, err = run("print 4 % (2 - 2);")
    assert not ok
    assert err.startswith("DivisionByZeroException: Modulo by zero")


def test_shared_interpreter_keeps_variables():
    """Passing an interpreter carries state from one run to the next."""
    out = io.StringIO()
    interpreter = Interpreter("<test>", out)
    assert run_source("var a = 2;", interpreter=interpreter)
    assert run_source("print a * a;", interpreter=interpreter)
    assert out.getvalue() == "4\n"


def test_debug_dump():
    """Debug mode prints tokens and the formatted AST before the output."""
    ok, out, _ = run("var x = 1 + 2; print x;", debug=True)
    assert ok
    assert "Tokens:" in out
    assert "Token(VAR, 'var', line=1)" in out
    assert "var x = (1.0 + 2.0);" in out
    assert out.endswith("3\n")


def test_debug_dump_of_deeply_nested_statement():
    """An AST too deep to format is summarised instead of aborting the dump."""
    source = "var x = " + " + ".join(["1"] * 20000) + ";\nprint 2;"
    ok, out, err = run(source, debug=True)
    assert not ok
    assert "<statement on line 1 nested too deeply to display>" in out
    assert "print 2.0;" in out
    assert err.startswith("NestingDepthException")
