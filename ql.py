"""
Quill Language Interpreter

This is the main entry point for the Quill language interpreter.

Workflow:
1. The source script is read from the file specified on the command line.
2. The Lexer tokenizes the source code into meaningful tokens.
3. The Parser processes tokens into an AST following the language grammar,
   reporting and skipping malformed statements.
4. The Interpreter walks the AST, evaluating expressions and executing statements.

Set the ``QUILLDEBUG`` environment variable to print the tokens and the AST
before execution.
"""
import os
import sys

from quill.exceptions import LexError
from quill.interpreter import Interpreter
from quill.runner import debug_print_tokens_ast, parse_program, report, run_source


def print_usage():
    """
    Print usage.
    """
    print()
    print("Quill Language Interpreter")
    print()
    print("Usage:")
    print("    ql <script.ql>")
    print()
    print("Arguments:")
    print("    <script.ql>")
    print("        Path to a Quill source file to execute.")
    print()
    print("Example:")
    print("    ql factorial.ql")
    print()
    print("Or run with no arguments to enter interactive mode (REPL).")
    print()
    print("Options:")
    print("    -h, --help")
    print("        Show this help message and exit.")
    print()
    print("Environment:")
    print("    QUILLDEBUG")
    print("        When set, print the tokens and AST before running.")


def run_script(script_name: str) -> int:
    """
    Run a Quill script, returning the process exit code.
    """
    try:
        with open(script_name, "r", encoding="utf-8") as f:
            code = f.read()
    except OSError as e:
        report(e)
        return 1

    ok = run_source(code, script_name, debug=bool(os.environ.get('QUILLDEBUG')))
    return 0 if ok else 1


def run_repl():
    """
    Run the interactive REPL

    Variables persist between inputs. Input that stops in the middle of a
    statement is buffered until the statement is complete.
    """
    print("Quill Language Interpreter - REPL")
    print("Type `exit` or `quit` to leave.")
    interpreter = Interpreter("<stdin>")
    debug = bool(os.environ.get('QUILLDEBUG'))
    buffer: list[str] = []
    while True:
        try:
            prompt = ">>> " if not buffer else "... "
            line = input(prompt)
            if not buffer and line.strip() in {"exit", "quit"}:
                break
            buffer.append(line)
            source = "\n".join(buffer)
            try:
                tokens, ast, errors = parse_program(source, "<stdin>")
            except LexError as e:
                report(e)
                buffer.clear()
                continue

            # A statement cut off by the end of input is incomplete, not wrong
            if errors and errors[-1].at_eof:
                continue

            if debug:
                debug_print_tokens_ast(tokens, ast)
            run_source(source, "<stdin>", interpreter=interpreter)
            buffer.clear()
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No arguments: enter the REPL.
    - One argument equal to ``-h`` or ``--help``: print usage and exit.
    - One argument that is not an option: treat it as the path to a script and run it.
    - Any other pattern: print usage and return a non-zero exit code.
    """
    if argv is None:
        argv = sys.argv
    args = argv[1:]
    if not args:
        run_repl()
        return 0
    if len(args) == 1 and args[0] in ('-h', '--help'):
        print_usage()
        return 0
    if len(args) == 1:
        return run_script(args[0])
    print_usage()
    return 1


if __name__ == "__main__":
    sys.exit(main(sys.argv))
