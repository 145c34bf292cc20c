"""Interactive shell for EasyLang. Uses cmd as backend."""

import cmd
from typing import List, Optional

from .errors import EasyLangError
from .interpreter import Interpreter
from .parser import parse_program


def console_input(prompt: str) -> str:
    try:
        return input(prompt)
    except EOFError:
        return ''


class Shell(cmd.Cmd):
    """EasyLang shell.

    One interpreter is kept alive across submissions, so declarations made
    on earlier lines stay visible. A line ending in ':' or '{' starts a
    multi-line block, which runs once an empty line is entered.
    """
    intro = "EasyLang shell\nEnd a block with an empty line. ':reset' clears all variables, ':q' exits."
    prompt = ">>> "
    secondary_prompt = "... "

    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.interpreter = self.new_interpreter()
        self.pending: List[str] = []

    def new_interpreter(self) -> Interpreter:
        return Interpreter(input_provider=console_input, debug_level=self.debug_level, debug_file=self.debug_file)

    def cmdloop(self, intro=None):
        """Reads lines until ':q' or end of input.

        End of input is detected from the EOFError itself, so a line that
        reads `EOF` is still run as EasyLang source.
        """
        print(self.intro if intro is None else intro)
        stop = False
        while not stop:
            try:
                line = input(self.prompt)
            except EOFError:
                if self.pending:
                    self.onecmd('')
                stop = self.do_EOF('')
                continue
            stop = self.onecmd(line)

    def onecmd(self, line: str) -> bool:
        # cmd.Cmd would strip the line; indentation matters here
        stripped = line.strip()
        if self.pending:
            if stripped:
                self.pending.append(line)
                return False
            source = '\n'.join(self.pending)
            self.pending = []
            self.prompt = Shell.prompt
            self.run_source(source)
            return False
        if not stripped:
            return False
        if stripped in (':q', ':quit'):
            return self.do_exit('')
        if stripped == ':reset':
            self.interpreter.close()
            self.interpreter = self.new_interpreter()
            print('Interpreter reset')
            return False
        if stripped.endswith(':') or stripped.endswith('{'):
            self.pending = [line]
            self.prompt = self.secondary_prompt
            return False
        self.run_source(line)
        return False

    def run_source(self, source: str):
        try:
            program = parse_program(source)
        except EasyLangError as e:
            print(f"Error: {e}")
            return
        result = self.interpreter.interpret(program)
        for out in result.output:
            print(out)
        if result.error:
            print(f"Error: {result.error}")

    def do_EOF(self, arg):
        """Exits the shell."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits the shell."""
        self.interpreter.close()
        return True
