from typing import Any, Dict, Optional

from nax.errors import NaxRuntimeError
from nax.tokens import Token


class Environment:
    """Represents a scope mapping variable names to runtime values.

    `enclosing` points at the lexically surrounding scope and is None for
    the global scope. A child scope never outlives its enclosing scope.
    """
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.enclosing = enclosing
        self.values: Dict[str, Any] = {}

    def define(self, name: str, value: Any):
        # Redefinition in the same scope replaces the old binding.
        self.values[name] = value

    def get(self, name: Token) -> Any:
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        if self.enclosing is not None:
            return self.enclosing.get(name)
        raise NaxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name: Token, value: Any):
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
            return
        if self.enclosing is not None:
            self.enclosing.assign(name, value)
            return
        raise NaxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")
