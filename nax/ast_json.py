"""JSON serialization/deserialization for the Nax AST.

This module converts between Nax AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Tokens are stored with
their kind name, lexeme, literal and line so that runtime errors raised
while executing a loaded AST still point at the right source line.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Literal,
    Grouping,
    Unary,
    Binary,
    Logical,
    Variable,
    Assign,
    ExpressionStmt,
    PrintStmt,
    VarStmt,
    Block,
    IfStmt,
    WhileStmt,
)
from .tokens import Token, TokenType


def token_to_obj(t: Token) -> Dict[str, Any]:
    return {"kind": t.kind.name, "lexeme": t.lexeme, "literal": t.literal, "line": t.line}


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType[o["kind"]], o["lexeme"], o.get("literal"), o["line"])


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]
    if isinstance(node, Token):
        return token_to_obj(node)

    # Expressions
    if isinstance(node, Literal):
        return {"type": "Literal", "value": node.value}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Unary):
        return {
            "type": "Unary",
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, (Binary, Logical)):
        return {
            "type": type(node).__name__,
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Variable):
        return {"type": "Variable", "name": token_to_obj(node.name)}
    if isinstance(node, Assign):
        return {
            "type": "Assign",
            "name": token_to_obj(node.name),
            "value": ast_to_obj(node.value),
        }

    # Statements
    if isinstance(node, ExpressionStmt):
        return {"type": "ExpressionStmt", "expression": ast_to_obj(node.expression)}
    if isinstance(node, PrintStmt):
        return {"type": "PrintStmt", "expression": ast_to_obj(node.expression)}
    if isinstance(node, VarStmt):
        return {
            "type": "VarStmt",
            "name": token_to_obj(node.name),
            "initializer": ast_to_obj(node.initializer),
        }
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, WhileStmt):
        return {
            "type": "WhileStmt",
            "condition": ast_to_obj(node.condition),
            "body": ast_to_obj(node.body),
        }

    raise TypeError(f"Unsupported AST node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, list):
        return [ast_from_obj(x) for x in obj]
    if not isinstance(obj, dict):
        raise TypeError(f"Expected a dict for an AST node, got {type(obj).__name__}")

    t = obj.get("type")
    if t == "Literal":
        value = obj.get("value")
        # JSON has no float/int distinction; Nax numbers are always floats
        if isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        return Literal(value)
    if t == "Grouping":
        return Grouping(ast_from_obj(obj["expression"]))
    if t == "Unary":
        return Unary(token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Binary":
        return Binary(ast_from_obj(obj["left"]), token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Logical":
        return Logical(ast_from_obj(obj["left"]), token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Variable":
        return Variable(token_from_obj(obj["name"]))
    if t == "Assign":
        return Assign(token_from_obj(obj["name"]), ast_from_obj(obj["value"]))

    if t == "ExpressionStmt":
        return ExpressionStmt(ast_from_obj(obj["expression"]))
    if t == "PrintStmt":
        return PrintStmt(ast_from_obj(obj["expression"]))
    if t == "VarStmt":
        return VarStmt(token_from_obj(obj["name"]), ast_from_obj(obj.get("initializer")))
    if t == "Block":
        statements: List[Any] = [ast_from_obj(s) for s in obj.get("statements", [])]
        return Block(statements)
    if t == "IfStmt":
        return IfStmt(
            ast_from_obj(obj["condition"]),
            ast_from_obj(obj["then_branch"]),
            ast_from_obj(obj.get("else_branch")),
        )
    if t == "WhileStmt":
        return WhileStmt(ast_from_obj(obj["condition"]), ast_from_obj(obj["body"]))

    raise ValueError(f"Unknown AST node type: {t}")
