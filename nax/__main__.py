"""CLI entry point for the Nax interpreter.

Usage:
    python -m nax [-v|-vv|-vvv|-vvvv] [script]
    python -m nax [-v...] --emit-ast <script>
    python -m nax [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .nax file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --no-color    Do not colour error messages

Without a script the interpreter starts an interactive prompt. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.

Exit codes: 0 on success, 65 on syntax errors, 66 when the input file is
missing, 70 on a runtime error.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj, ast_from_obj
from .errors import ConsoleReporter, Status
from .interpreter import Interpreter, parse_program, run_program
from .repl import Shell

EX_NOINPUT = 66


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(EX_NOINPUT)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='nax', description="Nax language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--no-color', action='store_true', help='do not colour error messages')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='NAX_FILE', help='emit AST JSON for the given .nax file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('script', nargs='?', help='Nax script (.nax) to execute; omit for a prompt')
    args = parser.parse_args(argv)

    reporter = ConsoleReporter(color=not args.no_color and sys.stderr.isatty())
    interpreter = Interpreter(reporter=reporter, debug_level=args.v)
    try:
        # Emit AST mode
        if args.emit_ast:
            program_file = Path(args.emit_ast)
            statements, status = parse_program(read_source(program_file), reporter, interpreter)
            if status is not Status.OK:
                sys.exit(status.exit_code)
            obj = ast_to_obj(statements)
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(obj, out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                print(f"Error: file {ast_path} not found", file=sys.stderr)
                sys.exit(EX_NOINPUT)
            with open(ast_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            status = interpreter.interpret(ast_from_obj(data))
            if status is not Status.OK:
                sys.exit(status.exit_code)
            return

        if not args.script:
            Shell(interpreter).cmdloop()
            return

        status = run_program(read_source(Path(args.script)), interpreter, reporter)
        if status is not Status.OK:
            sys.exit(status.exit_code)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
