# Nax language package
# This package provides a scanner, parser and tree-walking interpreter for the Nax language.
from .errors import CollectingReporter, ConsoleReporter, NaxRuntimeError, Reporter, Status
from .interpreter import Interpreter, parse_program, run_program
from .parser import Parser, parse
from .scanner import Scanner, scan

__all__ = [
    'scan',
    'parse',
    'parse_program',
    'run_program',
    'Scanner',
    'Parser',
    'Interpreter',
    'Reporter',
    'ConsoleReporter',
    'CollectingReporter',
    'NaxRuntimeError',
    'Status',
]
