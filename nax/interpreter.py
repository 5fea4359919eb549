"""Tree-walking interpreter for the Nax language.

This module executes the statement list produced by `nax.parser` directly,
with no intermediate compilation. Control flow is plain recursion: each
`Block` gets a child `Environment` for as long as its statements run, and
loops and conditionals are Python loops and conditionals over the tree.

Runtime errors are raised as `NaxRuntimeError` from wherever they are
detected, abort everything that is still running and are reported exactly
once by `Interpreter.interpret`. The `parse_program` and `run_program`
helpers tie the scanner, parser and interpreter together for callers that
just have source text.
"""

from __future__ import annotations

from typing import Any, List, Optional, TextIO, Tuple

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Logical, Variable, Assign,
    ExpressionStmt, PrintStmt, VarStmt, Block, IfStmt, WhileStmt,
)
from .environment import Environment
from .errors import ConsoleReporter, NaxRuntimeError, Reporter, Status
from .parser import Parser
from .scanner import Scanner
from .tokens import Token, TokenType
from .types import divide, is_equal, is_number, is_truthy, stringify


class Interpreter:
    """Core interpreter that executes Nax statements."""
    def __init__(self, output: Optional[TextIO] = None, reporter: Optional[Reporter] = None,
                 debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.global_env = Environment()
        self.output = output
        self.reporter = reporter if reporter is not None else ConsoleReporter()
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level:
            if self.debug_fp is None:
                self.debug_fp = open(self.debug_file, 'w', encoding='utf-8')
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def write(self, text: str):
        if self.output is not None:
            print(text, file=self.output)
        else:
            print(text)

    # Public API
    def interpret(self, statements: List[Stmt]) -> Status:
        try:
            self.execute_block(statements, self.global_env)
        except NaxRuntimeError as error:
            self.debug(f"runtime error on line {error.token.line}: {error.message}")
            self.reporter.runtime_error(error)
            return Status.RUNTIME_ERROR
        return Status.OK

    def interpret_expression(self, expr: Expr) -> Status:
        """Evaluate a single expression and print its value."""
        try:
            value = self.evaluate(expr)
        except NaxRuntimeError as error:
            self.reporter.runtime_error(error)
            return Status.RUNTIME_ERROR
        self.write(stringify(value))
        return Status.OK

    def execute_block(self, statements: List[Stmt], env: Environment):
        for stmt in statements:
            self.execute(stmt, env)

    def execute(self, node: Stmt, env: Environment):
        if isinstance(node, ExpressionStmt):
            self.evaluate(node.expression, env)
            return
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expression, env)
            self.write(stringify(value))
            return
        if isinstance(node, VarStmt):
            value = None
            if node.initializer is not None:
                value = self.evaluate(node.initializer, env)
            env.define(node.name.lexeme, value)
            self.debug(f"define {node.name.lexeme} = {stringify(value)}", 2)
            return
        if isinstance(node, Block):
            # the child scope is dropped as soon as this call returns or raises
            self.execute_block(node.statements, Environment(env))
            return
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition, env)
            truthy = is_truthy(cond)
            self.debug(f"if condition {stringify(cond)} -> {truthy}", 3)
            if truthy:
                self.execute(node.then_branch, env)
            elif node.else_branch is not None:
                self.execute(node.else_branch, env)
            return
        if isinstance(node, WhileStmt):
            while True:
                cond = self.evaluate(node.condition, env)
                if not is_truthy(cond):
                    self.debug(f"while condition {stringify(cond)} -> False", 3)
                    break
                self.execute(node.body, env)
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr, env: Optional[Environment] = None) -> Any:
        if env is None:
            env = self.global_env
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression, env)
        if isinstance(node, Variable):
            return env.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.assign(node.name, value)
            self.debug(f"assign {node.name.lexeme} = {stringify(value)}", 2)
            return value
        if isinstance(node, Logical):
            left = self.evaluate(node.left, env)
            if node.operator.kind == TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right, env)
        if isinstance(node, Unary):
            right = self.evaluate(node.right, env)
            if node.operator.kind == TokenType.BANG:
                return not is_truthy(right)
            if node.operator.kind == TokenType.MINUS:
                check_number_operand(node.operator, right)
                return -right
            raise NotImplementedError(f"unsupported unary operator {node.operator.lexeme}")
        if isinstance(node, Binary):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return apply_binary_op(node.operator, left, right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")


def check_number_operand(operator: Token, operand: Any):
    if is_number(operand):
        return
    raise NaxRuntimeError(operator, "Operand must be a number.")


def check_number_operands(operator: Token, left: Any, right: Any):
    if is_number(left) and is_number(right):
        return
    raise NaxRuntimeError(operator, "Operands must be numbers.")


def apply_binary_op(operator: Token, left: Any, right: Any) -> Any:
    kind = operator.kind
    if kind == TokenType.EQUAL_EQUAL:
        return is_equal(left, right)
    if kind == TokenType.BANG_EQUAL:
        return not is_equal(left, right)
    if kind == TokenType.PLUS:
        # overloaded for string concatenation
        if is_number(left) and is_number(right):
            return left + right
        if isinstance(left, str) and isinstance(right, str):
            return left + right
        raise NaxRuntimeError(operator, "Operands must be two numbers or two strings.")

    check_number_operands(operator, left, right)
    if kind == TokenType.MINUS:
        return left - right
    if kind == TokenType.STAR:
        return left * right
    if kind == TokenType.SLASH:
        return divide(left, right)
    if kind == TokenType.GREATER:
        return left > right
    if kind == TokenType.GREATER_EQUAL:
        return left >= right
    if kind == TokenType.LESS:
        return left < right
    if kind == TokenType.LESS_EQUAL:
        return left <= right
    raise NotImplementedError(f"unsupported binary operator {operator.lexeme}")


def parse_program(source: str, reporter: Optional[Reporter] = None,
                  interpreter: Optional[Interpreter] = None) -> Tuple[List[Stmt], Status]:
    """Scan and parse Nax source code.

    Returns the parsed statements together with `Status.SYNTAX_ERROR` if the
    scanner or the parser reported anything, `Status.OK` otherwise. The
    statement list is still returned on error, minus the declarations that
    failed to parse.
    """
    if reporter is None:
        reporter = interpreter.reporter if interpreter is not None else ConsoleReporter()
    scanner = Scanner(source, reporter)
    tokens = scanner.scan_tokens()
    if interpreter is not None:
        interpreter.debug(f"scanned {len(tokens)} tokens")
        for token in tokens:
            interpreter.debug(f"  {token.line}: {token}", 4)
    parser = Parser(tokens, reporter)
    statements = parser.parse()
    if interpreter is not None:
        interpreter.debug(f"parsed {len(statements)} statements")
    if scanner.had_error or parser.had_error:
        return statements, Status.SYNTAX_ERROR
    return statements, Status.OK


def run_program(source: str, interpreter: Optional[Interpreter] = None,
                reporter: Optional[Reporter] = None) -> Status:
    """Run Nax source code end to end; nothing executes if it has syntax errors."""
    if interpreter is None:
        interpreter = Interpreter(reporter=reporter)
    statements, status = parse_program(source, reporter, interpreter)
    if status is not Status.OK:
        return status
    status = interpreter.interpret(statements)
    interpreter.debug(f"run finished: {status.name}")
    return status
