"""Scanner for the Nax language.

The raw lexical layer is a Lark basic lexer configured with one terminal per
token shape. The scanner drives it over the source, turns Lark tokens into
Nax `Token` records (classifying identifiers against the keyword table and
converting number and string literals) and keeps going past bad input:

* an unexpected character is reported for its line and skipped, and lexing
  resumes on the following character. The restart lexes a `TextSlice` view
  of the source, so no text is copied and line numbers stay absolute; Lark
  still recounts newlines up to the restart point each time;
* an unterminated string is reported at the line it starts on and swallows
  the rest of the input.

Scanning never raises. Problems are sent to the reporter and recorded in
`Scanner.had_error`.
"""

from __future__ import annotations

from typing import List, Optional

from lark import Lark, TextSlice
from lark.exceptions import UnexpectedCharacters

from .errors import Reporter, ConsoleReporter
from .tokens import KEYWORDS, Token, TokenType


NAX_LEXICON = r"""
    start: _token*

    _token: LEFT_PAREN | RIGHT_PAREN | LEFT_BRACE | RIGHT_BRACE
          | COMMA | DOT | MINUS | PLUS | SEMICOLON | SLASH | STAR
          | BANG_EQUAL | BANG | EQUAL_EQUAL | EQUAL
          | GREATER_EQUAL | GREATER | LESS_EQUAL | LESS
          | IDENTIFIER | STRING | UNTERMINATED_STRING | NUMBER

    LEFT_PAREN: "("
    RIGHT_PAREN: ")"
    LEFT_BRACE: "{"
    RIGHT_BRACE: "}"
    COMMA: ","
    DOT: "."
    MINUS: "-"
    PLUS: "+"
    SEMICOLON: ";"
    SLASH: "/"
    STAR: "*"

    BANG_EQUAL: "!="
    BANG: "!"
    EQUAL_EQUAL: "=="
    EQUAL: "="
    GREATER_EQUAL: ">="
    GREATER: ">"
    LESS_EQUAL: "<="
    LESS: "<"

    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/
    NUMBER: /[0-9]+(?:\.[0-9]+)?/
    STRING.2: /"[^"]*"/
    UNTERMINATED_STRING: /"[^"]*/

    COMMENT: /\/\/[^\n]*/
    WHITESPACE: /[ \t\r\n]+/
    %ignore COMMENT
    %ignore WHITESPACE
"""


NAX_LEXER = Lark(
    NAX_LEXICON,
    parser='lalr',
    lexer='basic',
)


class Scanner:
    """Turns Nax source text into a list of tokens ending with EOF."""

    def __init__(self, source: str, reporter: Optional[Reporter] = None):
        self.source = source
        self.reporter = reporter if reporter is not None else ConsoleReporter()
        self.tokens: List[Token] = []
        self.had_error = False

    def scan_tokens(self) -> List[Token]:
        offset = 0
        while True:
            try:
                for lark_token in NAX_LEXER.lex(TextSlice(self.source, offset, None)):
                    self.add_token(lark_token, lark_token.line)
            except UnexpectedCharacters as e:
                self.error(e.line, "Unexpected character.")
                # positions and lines stay absolute across restarts
                offset = e.pos_in_stream + 1
                continue
            break
        self.tokens.append(Token(TokenType.EOF, '', None, self.source.count('\n') + 1))
        return self.tokens

    def add_token(self, lark_token, line: int) -> None:
        kind = lark_token.type
        text = str(lark_token)
        if kind == 'UNTERMINATED_STRING':
            self.error(line, "Unterminated string.")
            return
        if kind == 'IDENTIFIER':
            self.tokens.append(Token(KEYWORDS.get(text, TokenType.IDENTIFIER), text, None, line))
        elif kind == 'NUMBER':
            self.tokens.append(Token(TokenType.NUMBER, text, float(text), line))
        elif kind == 'STRING':
            self.tokens.append(Token(TokenType.STRING, text, text[1:-1], line))
        else:
            self.tokens.append(Token(TokenType[kind], text, None, line))

    def error(self, line: int, message: str) -> None:
        self.had_error = True
        self.reporter.error(line, message)


def scan(source: str, reporter: Optional[Reporter] = None) -> List[Token]:
    """Scan `source` and return its tokens. Errors go to `reporter`."""
    return Scanner(source, reporter).scan_tokens()
