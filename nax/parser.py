"""Parser for the Nax language.

A recursive-descent parser with one method per grammar rule. Expression
rules are listed from lowest to highest precedence, each one calling the
next, so precedence falls out of the call structure:

    expression  -> assignment
    assignment  -> IDENT "=" assignment | logic_or
    logic_or    -> logic_and ("or" logic_and)*
    logic_and   -> equality ("and" equality)*
    equality    -> comparison (("!=" | "==") comparison)*
    comparison  -> term ((">" | ">=" | "<" | "<=") term)*
    term        -> factor (("-" | "+") factor)*
    factor      -> unary (("/" | "*") unary)*
    unary       -> ("!" | "-") unary | primary
    primary     -> NUMBER | STRING | "true" | "false" | "nil"
                 | IDENT | "(" expression ")"

Syntax errors are reported immediately and then raised as `ParseError`,
which only unwinds as far as the enclosing declaration. There the parser
synchronizes (panic mode) by skipping to the next statement boundary, so one
pass can report several independent errors.

`for` loops are desugared here into blocks and `while` loops.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Logical, Variable, Assign,
    ExpressionStmt, PrintStmt, VarStmt, Block, IfStmt, WhileStmt,
)
from .errors import Reporter, ConsoleReporter
from .tokens import Token, TokenType


class ParseError(Exception):
    """Unwinds a failed declaration back to the point where it can resync."""
    pass


SYNC_KEYWORDS = frozenset({
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
})


class Parser:
    def __init__(self, tokens: List[Token], reporter: Optional[Reporter] = None):
        self.tokens = tokens
        self.reporter = reporter if reporter is not None else ConsoleReporter()
        self.pos = 0
        self.had_error = False

    # Public entry points

    def parse(self) -> List[Stmt]:
        """Parse a whole program. Declarations that fail to parse are left out."""
        statements: List[Stmt] = []
        while not self.is_at_end():
            stmt = self.parse_declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    def parse_expression(self) -> Optional[Expr]:
        """Parse a single expression that must span all of the input."""
        try:
            expr = self.parse_expr()
            if not self.is_at_end():
                raise self.error(self.peek(), "Expect end of expression.")
            return expr
        except ParseError:
            return None
        except RecursionError:
            self.error(self.peek(), "Too much nesting.")
            return None

    # Token helpers

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.peek().kind == TokenType.EOF

    def check(self, kind: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().kind == kind

    def advance(self) -> Token:
        if not self.is_at_end():
            self.pos += 1
        return self.previous()

    def match(self, *kinds: TokenType) -> bool:
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind: TokenType, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise self.error(self.peek(), message)

    def error(self, token: Token, message: str) -> ParseError:
        self.had_error = True
        if token.kind == TokenType.EOF:
            self.reporter.error(token.line, message, ' at end')
        else:
            self.reporter.error(token.line, message, f" at '{token.lexeme}'")
        return ParseError(message)

    def synchronize(self):
        self.advance()
        while not self.is_at_end():
            if self.previous().kind == TokenType.SEMICOLON:
                return
            if self.peek().kind in SYNC_KEYWORDS:
                return
            self.advance()

    # Statements

    def parse_declaration(self) -> Optional[Stmt]:
        try:
            if self.match(TokenType.VAR):
                return self.parse_var_declaration()
            return self.parse_statement()
        except ParseError:
            self.synchronize()
            return None
        except RecursionError:
            self.error(self.peek(), "Too much nesting.")
            self.synchronize()
            return None

    def parse_var_declaration(self) -> VarStmt:
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.parse_expr()
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return VarStmt(name, initializer)

    def parse_statement(self) -> Stmt:
        if self.match(TokenType.FOR):
            return self.parse_for_stmt()
        if self.match(TokenType.IF):
            return self.parse_if_stmt()
        if self.match(TokenType.PRINT):
            return self.parse_print_stmt()
        if self.match(TokenType.WHILE):
            return self.parse_while_stmt()
        if self.match(TokenType.LEFT_BRACE):
            return Block(self.parse_block())
        return self.parse_expression_stmt()

    def parse_for_stmt(self) -> Stmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        initializer: Optional[Stmt]
        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.parse_var_declaration()
        else:
            initializer = self.parse_expression_stmt()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.parse_expr()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.parse_expr()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.parse_statement()

        # { init; while (cond) { body; increment } }
        if increment is not None:
            body = Block([body, ExpressionStmt(increment)])
        if condition is None:
            condition = Literal(True)
        body = WhileStmt(condition, body)
        if initializer is not None:
            body = Block([initializer, body])
        return body

    def parse_if_stmt(self) -> IfStmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.parse_expr()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch = self.parse_statement()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.parse_statement()
        return IfStmt(condition, then_branch, else_branch)

    def parse_print_stmt(self) -> PrintStmt:
        value = self.parse_expr()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return PrintStmt(value)

    def parse_while_stmt(self) -> WhileStmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.parse_expr()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        body = self.parse_statement()
        return WhileStmt(condition, body)

    def parse_block(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.parse_declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def parse_expression_stmt(self) -> ExpressionStmt:
        expr = self.parse_expr()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ExpressionStmt(expr)

    # Expressions

    def parse_expr(self) -> Expr:
        return self.parse_assignment()

    def parse_assignment(self) -> Expr:
        expr = self.parse_or()
        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.parse_assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            # Reported but not raised: the parser is not lost, so there is
            # nothing to synchronize.
            self.error(equals, "Invalid assignment target.")
        return expr

    def parse_or(self) -> Expr:
        expr = self.parse_and()
        while self.match(TokenType.OR):
            operator = self.previous()
            right = self.parse_and()
            expr = Logical(expr, operator, right)
        return expr

    def parse_and(self) -> Expr:
        expr = self.parse_equality()
        while self.match(TokenType.AND):
            operator = self.previous()
            right = self.parse_equality()
            expr = Logical(expr, operator, right)
        return expr

    def parse_equality(self) -> Expr:
        expr = self.parse_comparison()
        while self.match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            operator = self.previous()
            right = self.parse_comparison()
            expr = Binary(expr, operator, right)
        return expr

    def parse_comparison(self) -> Expr:
        expr = self.parse_term()
        while self.match(TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL):
            operator = self.previous()
            right = self.parse_term()
            expr = Binary(expr, operator, right)
        return expr

    def parse_term(self) -> Expr:
        expr = self.parse_factor()
        while self.match(TokenType.MINUS, TokenType.PLUS):
            operator = self.previous()
            right = self.parse_factor()
            expr = Binary(expr, operator, right)
        return expr

    def parse_factor(self) -> Expr:
        expr = self.parse_unary()
        while self.match(TokenType.SLASH, TokenType.STAR):
            operator = self.previous()
            right = self.parse_unary()
            expr = Binary(expr, operator, right)
        return expr

    def parse_unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.parse_unary()
            return Unary(operator, right)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.parse_expr()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        raise self.error(self.peek(), "Expect expression.")


def parse(tokens: List[Token], reporter: Optional[Reporter] = None) -> List[Stmt]:
    """Parse `tokens` into statements. Errors go to `reporter`."""
    return Parser(tokens, reporter).parse()
