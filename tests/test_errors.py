import io

from nax.errors import CollectingReporter, ConsoleReporter, NaxRuntimeError, Status
from nax.tokens import Token, TokenType


def test_console_reporter_formats_syntax_errors():
    stream = io.StringIO()
    reporter = ConsoleReporter(stream)
    reporter.error(3, "Expect expression.", " at ';'")
    assert stream.getvalue() == "[line 3] Error at ';': Expect expression.\n"
    assert reporter.had_error
    assert not reporter.had_runtime_error


def test_console_reporter_formats_runtime_errors():
    stream = io.StringIO()
    reporter = ConsoleReporter(stream)
    token = Token(TokenType.MINUS, '-', None, 9)
    reporter.runtime_error(NaxRuntimeError(token, "Operand must be a number."))
    assert stream.getvalue() == "Operand must be a number.\n[line 9]\n"
    assert reporter.had_runtime_error


def test_console_reporter_colour():
    stream = io.StringIO()
    ConsoleReporter(stream, color=True).error(1, "Unexpected character.")
    assert "[line 1] Error: Unexpected character." in stream.getvalue()
    assert '\x1b[' in stream.getvalue()


def test_console_reporter_plain_by_default():
    stream = io.StringIO()
    ConsoleReporter(stream).error(1, "Unexpected character.")
    assert '\x1b[' not in stream.getvalue()


def test_collecting_reporter_reset():
    reporter = CollectingReporter()
    reporter.error(1, "Unexpected character.")
    assert reporter.had_error
    reporter.reset()
    assert not reporter.had_error
    assert reporter.messages == ["[line 1] Error: Unexpected character."]


def test_status_exit_codes():
    assert Status.OK.exit_code == 0
    assert Status.SYNTAX_ERROR.exit_code == 65
    assert Status.RUNTIME_ERROR.exit_code == 70
