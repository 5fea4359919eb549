import io
import math

from nax.errors import CollectingReporter, Status
from nax.interpreter import Interpreter, parse_program
from nax.types import is_equal, is_truthy, stringify


def evaluate(source: str):
    """Parse `source` as one expression statement and return its value."""
    statements, status = parse_program(source + ";", CollectingReporter())
    assert status is Status.OK
    return Interpreter().evaluate(statements[0].expression)


def test_precedence_of_star_over_plus():
    assert evaluate("1+2*3") == 7.0


def test_plus_on_numbers_and_strings():
    assert evaluate("1 + 2") == 3.0
    assert evaluate('"foo" + "bar"') == 'foobar'


def test_arithmetic_and_comparison():
    assert evaluate("10 - 4 / 2") == 8.0
    assert evaluate("-(3)") == -3.0
    assert evaluate("2 >= 2") is True
    assert evaluate("2 < 1") is False


def test_equality_never_crosses_kinds():
    assert evaluate("nil == nil") is True
    assert evaluate("nil == false") is False
    assert evaluate('"1" == 1') is False
    assert evaluate("true == 1") is False
    assert evaluate("1 != 2") is True
    assert evaluate('"a" == "a"') is True
    assert evaluate("0/0 == 0/0") is True
    assert evaluate("0/0 != 0/0") is False
    assert evaluate("0 == -0") is False
    assert evaluate("1/0 == 1/0") is True


def test_nan_variable_equals_itself(run_nax, capsys):
    status, _ = run_nax("var x = 0/0; print x == x; print x == 1;")
    assert status is Status.OK
    assert capsys.readouterr().out.splitlines() == ['true', 'false']


def test_logical_operators_return_operands():
    assert evaluate('nil or "yes"') == 'yes'
    assert evaluate('"left" or "right"') == 'left'
    assert evaluate('false and "never"') is False
    assert evaluate('1 and 2') == 2.0


def test_logical_operators_short_circuit():
    # the right side would be an undefined variable error if evaluated
    assert evaluate("true or missing") is True
    assert evaluate("nil and missing") is None


def test_truthiness():
    assert not is_truthy(None)
    assert not is_truthy(False)
    assert is_truthy(0.0)
    assert is_truthy('')
    assert evaluate("!0") is False
    assert evaluate("!nil") is True


def test_is_equal_helper():
    assert is_equal(1.0, 1.0)
    assert not is_equal(True, 1.0)
    assert not is_equal(None, False)


def test_stringify():
    assert stringify(None) == 'nil'
    assert stringify(True) == 'true'
    assert stringify(3.0) == '3'
    assert stringify(-0.5) == '-0.5'
    assert stringify(1 / 3) == '0.3333333333333333'
    assert stringify('text') == 'text'
    assert stringify(math.inf) == 'Infinity'
    assert stringify(-math.inf) == '-Infinity'
    assert stringify(math.nan) == 'NaN'


def test_division_by_zero_follows_ieee():
    assert evaluate("1 / 0") == math.inf
    assert evaluate("-1 / 0") == -math.inf
    assert math.isnan(evaluate("0 / 0"))


def test_print_number_formatting(run_nax, capsys):
    status, _ = run_nax("print 6 / 2; print 1 / 3;")
    assert status is Status.OK
    assert capsys.readouterr().out.splitlines() == ['3', '0.3333333333333333']


def test_block_shadowing_does_not_leak(run_nax, capsys):
    status, _ = run_nax("{ var a = 1; { var a = 2; } print a; }")
    assert status is Status.OK
    assert capsys.readouterr().out.strip() == '1'


def test_assignment_reaches_enclosing_scope(run_nax, capsys):
    run_nax("var a = 1; { a = 2; } print a;")
    assert capsys.readouterr().out.strip() == '2'


def test_block_scope_is_discarded(run_nax, capsys):
    status, reporter = run_nax("{ var inner = 1; } print inner;")
    assert status is Status.RUNTIME_ERROR
    assert reporter.runtime_errors[0].message == "Undefined variable 'inner'."


def test_assignment_to_unbound_name(run_nax, capsys):
    status, reporter = run_nax("x = 1;")
    assert status is Status.RUNTIME_ERROR
    assert capsys.readouterr().out == ''
    assert len(reporter.runtime_errors) == 1
    assert reporter.runtime_errors[0].message == "Undefined variable 'x'."
    assert reporter.messages == ["Undefined variable 'x'.\n[line 1]"]


def test_for_loop_output(run_nax, capsys):
    status, _ = run_nax("for (var i = 0; i < 3; i = i + 1) print i;")
    assert status is Status.OK
    assert capsys.readouterr().out.splitlines() == ['0', '1', '2']


def test_type_error_halts_the_run(run_nax, capsys):
    status, reporter = run_nax('print "start";\nprint "a" + 1;\nprint "unreachable";')
    assert status is Status.RUNTIME_ERROR
    assert capsys.readouterr().out.splitlines() == ['start']
    error = reporter.runtime_errors[0]
    assert error.message == "Operands must be two numbers or two strings."
    assert error.token.line == 2


def test_operand_type_errors(run_nax):
    _, reporter = run_nax('-"a";')
    assert reporter.runtime_errors[0].message == "Operand must be a number."
    _, reporter = run_nax('1 < "2";')
    assert reporter.runtime_errors[0].message == "Operands must be numbers."
    assert reporter.runtime_errors[0].token.lexeme == '<'


def test_if_truthiness(run_nax, capsys):
    run_nax('if (nil) print "a"; else print "b";')
    run_nax('if (0) print "a"; else print "b";')
    run_nax('if (false) print "a";')
    assert capsys.readouterr().out.splitlines() == ['b', 'a']


def test_while_loop(run_nax, capsys):
    run_nax("var n = 0; while (n < 3) n = n + 1; print n;")
    assert capsys.readouterr().out.strip() == '3'


def test_var_without_initializer_is_nil(run_nax, capsys):
    run_nax("var a; print a;")
    assert capsys.readouterr().out.strip() == 'nil'


def test_syntax_errors_prevent_execution(run_nax, capsys):
    status, reporter = run_nax('print "never";\nprint ;')
    assert status is Status.SYNTAX_ERROR
    assert capsys.readouterr().out == ''
    assert reporter.errors == [(2, "[line 2] Error at ';': Expect expression.")]


def test_output_sink_and_state_across_runs():
    out = io.StringIO()
    reporter = CollectingReporter()
    interpreter = Interpreter(output=out, reporter=reporter)
    statements, _ = parse_program("var total = 40;", reporter)
    assert interpreter.interpret(statements) is Status.OK
    statements, _ = parse_program("total = total + 2; print total;", reporter)
    assert interpreter.interpret(statements) is Status.OK
    assert out.getvalue() == '42\n'


def test_interpret_expression_echoes_value():
    out = io.StringIO()
    interpreter = Interpreter(output=out, reporter=CollectingReporter())
    statements, _ = parse_program('"a" + "b";', CollectingReporter())
    assert interpreter.interpret_expression(statements[0].expression) is Status.OK
    assert out.getvalue() == 'ab\n'


def test_debug_trace(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    interpreter = Interpreter(output=io.StringIO(), reporter=CollectingReporter(),
                              debug_level=3, debug_file=str(debug_file))
    statements, _ = parse_program("var a = 1; if (a) a = 2;", CollectingReporter())
    interpreter.interpret(statements)
    interpreter.close()
    trace = debug_file.read_text(encoding='utf-8').splitlines()
    assert trace == ['define a = 1', 'if condition 1 -> True', 'assign a = 2']


def test_no_debug_file_at_level_zero(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    interpreter = Interpreter(output=io.StringIO(), debug_file=str(debug_file))
    statements, _ = parse_program("var a = 1;", CollectingReporter())
    interpreter.interpret(statements)
    interpreter.close()
    assert not debug_file.exists()


def test_deep_nesting_is_reported_not_raised(run_nax, capsys):
    status, reporter = run_nax("print " + "(" * 3000 + "1" + ")" * 3000 + ";")
    assert status is Status.SYNTAX_ERROR
    assert reporter.messages[0].endswith("Too much nesting.")
    assert capsys.readouterr().out == ''
