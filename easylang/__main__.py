"""CLI entry point for the EasyLang interpreter.

Usage:
    python -m easylang [-v|-vv|-vvv] <program_file>
    python -m easylang [-v...] --emit-ast <program_file>
    python -m easylang [-v...] --ast <ast_json_file>
    python -m easylang --tokens <program_file>
    python -m easylang --check <program_file>
    python -m easylang [-v...] --repl

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .easy file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --tokens      Print the token stream of the given file
  --check       Report every syntax error in the given file without running it
  --repl        Start an interactive shell

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Program output goes to stdout; errors go
to stderr and make the process exit with status 1.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .errors import EasyLangError
from .interpreter import Interpreter
from .lexer import tokenize
from .parser import Parser, parse
from .shell import Shell, console_input

DEBUG_FILE = 'debug.txt'


def read_source(path_arg: str) -> str:
    program_file = Path(path_arg)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str) -> Program:
    try:
        return parse(tokenize(source))
    except EasyLangError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


def execute(ast_program: Program, debug_level: int):
    interpreter = Interpreter(input_provider=console_input, debug_level=debug_level,
                              debug_file=DEBUG_FILE if debug_level > 0 else None)
    try:
        result = interpreter.interpret(ast_program)
    finally:
        interpreter.close()
    for line in result.output:
        print(line)
    if result.error:
        print(f"Runtime error: {result.error}", file=sys.stderr)
        sys.exit(1)


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(prog='easylang', description="EasyLang interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='EASY_FILE', help='emit AST JSON for the given .easy file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--tokens', metavar='EASY_FILE', help='print the tokens of the given .easy file')
    group.add_argument('--check', metavar='EASY_FILE', help='report syntax errors without running')
    group.add_argument('--repl', action='store_true', help='start an interactive shell')
    parser.add_argument('program', nargs='?', help='EasyLang program file (.easy) to execute')
    args = parser.parse_args(argv)

    if args.repl:
        Shell(debug_level=args.v, debug_file=DEBUG_FILE if args.v > 0 else None).cmdloop()
        return

    if args.tokens:
        try:
            tokens = tokenize(read_source(args.tokens))
        except EasyLangError as e:
            print(str(e), file=sys.stderr)
            sys.exit(1)
        for token in tokens:
            print(f"{token.line}:{token.column}\t{token.type.name}\t{token.value!r}")
        return

    if args.check:
        try:
            errors = Parser(tokenize(read_source(args.check))).diagnose()
        except EasyLangError as e:
            errors = [e]
        for error in errors:
            print(str(error))
        if errors:
            sys.exit(1)
        print('OK')
        return

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = parse_or_exit(read_source(args.emit_ast))
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_suffix(program_file.suffix + '.ast.json') if program_file.suffix != '' else program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        execute(ast_from_obj(data), args.v)
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast/--tokens/--check/--repl')
    execute(parse_or_exit(read_source(args.program)), args.v)


if __name__ == '__main__':
    main()
