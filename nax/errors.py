"""Error types and error sinks for Nax.

Syntax problems found by the scanner and parser are never raised to the
caller; they are handed to a `Reporter`. Runtime problems are raised as
`NaxRuntimeError` inside the interpreter and reported once, at the top of
`Interpreter.interpret`. The outcome of a run is described by `Status`
rather than by any process-wide flag.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import List, Optional, TextIO, Tuple, TYPE_CHECKING

from termcolor import colored

if TYPE_CHECKING:
    from .tokens import Token


class Status(Enum):
    """Outcome of parsing or running a program."""
    OK = 0
    SYNTAX_ERROR = 65
    RUNTIME_ERROR = 70

    @property
    def exit_code(self) -> int:
        return self.value


class NaxRuntimeError(Exception):
    """Exception type used to propagate Nax runtime errors."""
    def __init__(self, token: 'Token', message: str):
        super().__init__(message)
        self.token = token
        self.message = message


class Reporter:
    """Base error sink.

    Subclasses implement `report` and `report_runtime`; the public `error`
    and `runtime_error` entry points keep track of whether anything was
    reported during the reporter's lifetime.
    """

    def __init__(self):
        self.had_error = False
        self.had_runtime_error = False

    def error(self, line: int, message: str, where: str = '') -> None:
        self.had_error = True
        self.report(line, where, message)

    def runtime_error(self, error: NaxRuntimeError) -> None:
        self.had_runtime_error = True
        self.report_runtime(error)

    def reset(self) -> None:
        self.had_error = False
        self.had_runtime_error = False

    def report(self, line: int, where: str, message: str) -> None:
        raise NotImplementedError

    def report_runtime(self, error: NaxRuntimeError) -> None:
        raise NotImplementedError


def format_error(line: int, where: str, message: str) -> str:
    return f"[line {line}] Error{where}: {message}"


def format_runtime_error(error: NaxRuntimeError) -> str:
    return f"{error.message}\n[line {error.token.line}]"


class ConsoleReporter(Reporter):
    """Writes diagnostics to a text stream (stderr by default)."""

    def __init__(self, stream: Optional[TextIO] = None, color: bool = False):
        super().__init__()
        self.stream = stream
        self.color = color

    def _write(self, text: str) -> None:
        stream = self.stream if self.stream is not None else sys.stderr
        if self.color:
            # the caller already decided on colour, so skip termcolor's tty check
            text = colored(text, 'red', force_color=True)
        print(text, file=stream)

    def report(self, line: int, where: str, message: str) -> None:
        self._write(format_error(line, where, message))

    def report_runtime(self, error: NaxRuntimeError) -> None:
        self._write(format_runtime_error(error))


class CollectingReporter(Reporter):
    """Keeps diagnostics in memory instead of printing them."""

    def __init__(self):
        super().__init__()
        self.errors: List[Tuple[int, str]] = []
        self.runtime_errors: List[NaxRuntimeError] = []

    def report(self, line: int, where: str, message: str) -> None:
        self.errors.append((line, format_error(line, where, message)))

    def report_runtime(self, error: NaxRuntimeError) -> None:
        self.runtime_errors.append(error)

    @property
    def messages(self) -> List[str]:
        return [text for _, text in self.errors] + [format_runtime_error(e) for e in self.runtime_errors]
