"""
Tests for parser error recovery and nesting limits in Quill.
"""
from quill.parser import MAX_NESTING_DEPTH
from quill.syntax import Node, is_skipped

from quill.tests.utils import parse_with_errors


def test_broken_statement_leaves_a_skipped_marker():
    """The broken statement keeps its slot as an explicit marker."""
    ast, errors = parse_with_errors("print 1 +;\nprint 2;")
    assert len(ast) == 2
    assert is_skipped(ast[0])
    assert ast[1][0] == Node.PRINT
    assert len(errors) == 1
    assert "Expected expression, got ';'" in str(errors[0])
    assert errors[0].line == 1


def test_recovery_stops_at_statement_keyword():
    """Without a semicolon, recovery resumes at the next statement keyword."""
    ast, errors = parse_with_errors("var = 3 print 4;")
    assert [node[0] for node in ast] == [Node.SKIPPED, Node.PRINT]
    assert "Expected variable name after 'var'" in str(errors[0])


def test_every_error_is_collected():
    """One pass reports all malformed statements."""
    ast, errors = parse_with_errors("print ;\nvar x = 1;\n(1;\nprint x;\n1 = 2;")
    assert [node[0] for node in ast] == [
        Node.SKIPPED, Node.VAR, Node.SKIPPED, Node.PRINT, Node.SKIPPED,
    ]
    assert [e.line for e in errors] == [1, 3, 5]


def test_recovery_inside_block_keeps_the_block():
    """A broken statement inside braces is skipped on its own."""
    ast, errors = parse_with_errors("{ print 1; print *; print 3; }")
    (block,) = ast
    assert block[0] == Node.BLOCK
    assert [s[0] for s in block[1]] == [Node.PRINT, Node.SKIPPED, Node.PRINT]
    assert len(errors) == 1


def test_missing_semicolon_at_end_of_input():
    """Errors caused by running out of tokens are flagged as such."""
    _, errors = parse_with_errors("print 1")
    assert errors[0].at_eof
    assert "got end of input" in str(errors[0])

    _, errors = parse_with_errors("{ print 1;")
    assert errors[0].at_eof
    assert "Expected '}' after block" in str(errors[0])


def test_declaration_not_allowed_as_branch():
    """The body of an if is a statement, not a declaration."""
    ast, errors = parse_with_errors("if (1) var y = 2; print 3;")
    assert is_skipped(ast[0])
    assert ast[-1][0] == Node.PRINT
    assert len(errors) == 1


def test_nesting_limit():
    """Runaway nesting is a syntax error, not a crash."""
    depth = MAX_NESTING_DEPTH + 5
    source = "print " + "(" * depth + "1" + ")" * depth + "; print 2;"
    ast, errors = parse_with_errors(source)
    assert is_skipped(ast[0])
    assert ast[-1][0] == Node.PRINT
    assert "Nesting deeper than" in str(errors[0])


def test_nesting_within_limit():
    """Reasonable nesting parses normally."""
    source = "print " + "(" * 20 + "1" + ")" * 20 + ";"
    ast, errors = parse_with_errors(source)
    assert errors == []
    assert ast[0][1] == (Node.LITERAL, 1.0, 1)


def test_nesting_at_limit_is_accepted():
    """A print statement may hold exactly the maximum number of parentheses."""
    depth = MAX_NESTING_DEPTH
    source = "print " + "(" * depth + "1" + ")" * depth + ";"
    ast, errors = parse_with_errors(source)
    assert errors == []
    assert ast[0] == (Node.PRINT, (Node.LITERAL, 1.0, 1), 1)


def test_nesting_one_past_limit_is_rejected():
    depth = MAX_NESTING_DEPTH + 1
    source = "print " + "(" * depth + "1" + ")" * depth + ";"
    ast, errors = parse_with_errors(source)
    assert is_skipped(ast[0])
    assert len(errors) == 1
    assert f"Nesting deeper than {MAX_NESTING_DEPTH} levels" in str(errors[0])


def test_nested_blocks_count_one_level_each():
    """Blocks nest to the same depth as parentheses."""
    depth = MAX_NESTING_DEPTH
    _, errors = parse_with_errors("{" * depth + "print 1;" + "}" * depth)
    assert errors == []
    _, errors = parse_with_errors("{" * (depth + 1) + "print 1;" + "}" * (depth + 1))
    assert "Nesting deeper than" in str(errors[0])
