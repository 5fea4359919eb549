"""Interactive prompt for Nax. Uses cmd as backend."""

import cmd

from .errors import CollectingReporter, Status
from .interpreter import Interpreter, parse_program
from .parser import Parser
from .scanner import scan


class Shell(cmd.Cmd):
    """Nax read-eval-print loop.

    One interpreter lives for the whole session, so variables defined on one
    line are visible on the next. A line holding a single bare expression
    (no trailing semicolon) is evaluated and its value echoed.
    """
    intro = "Nax interpreter\nType 'exit' or press Ctrl-D to quit."
    prompt = "> "

    def __init__(self, interpreter: Interpreter, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter

    def parseline(self, line):
        """Only a bare command word is a shell command; any other line is Nax."""
        line = line.strip()
        if line in ('exit', 'help', 'EOF'):
            return line, '', line
        return None, None, line

    def default(self, line):
        """Executes an arbitrary line of Nax."""
        reporter = self.interpreter.reporter
        reporter.reset()

        # Try the line as a lone expression first, without reporting anything.
        probe_reporter = CollectingReporter()
        expr = Parser(scan(line, probe_reporter), probe_reporter).parse_expression()
        if expr is not None and not probe_reporter.had_error:
            self.interpreter.interpret_expression(expr)
            return

        statements, status = parse_program(line, reporter, self.interpreter)
        if status is Status.OK:
            self.interpreter.interpret(statements)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
