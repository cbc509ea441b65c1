"""
Utility functions shared across Quill Language tests.
"""
from quill.interpreter import Interpreter
from quill.lexer import tokenize
from quill.parser import Parser


def parse_source(source: str):
    """
    Parse source code and return the AST.
    """
    parser = Parser(tokenize(source), "<test>")
    return parser.parse()


def parse_with_errors(source: str):
    """
    Parse source code and return the AST and the recovered errors.
    """
    parser = Parser(tokenize(source), "<test>")
    ast = parser.parse()
    return ast, parser.errors


def run_program(source: str) -> Interpreter:
    """
    Run source code and return the interpreter instance after execution.
    """
    interpreter = Interpreter("<test>")
    interpreter.run(parse_source(source))
    return interpreter


def output_lines(capsys) -> list[str]:
    """
    Return captured stdout split into lines.
    """
    return capsys.readouterr().out.strip().splitlines()
