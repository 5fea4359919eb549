"""Runtime values and helpers for Nax.

Nax has four kinds of runtime value, mapped directly onto Python objects:

* nil     -> None
* boolean -> bool
* number  -> float (every numeric literal is scanned as a float)
* text    -> str

Because `bool` is a subclass of `int` in Python, and `True == 1.0`, the
helpers here compare kinds explicitly instead of relying on `==` alone.
"""

from __future__ import annotations

import math
from typing import Any


def is_number(value: Any) -> bool:
    return isinstance(value, float)


def is_truthy(value: Any) -> bool:
    """nil and false are falsy; every other value (0 and "" included) is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    """Nax equality: nil only equals nil, and values of different kinds never match.

    Numbers compare by value, except that NaN equals NaN and 0 differs
    from -0.
    """
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    if type(a) is not type(b):
        return False
    if isinstance(a, float):
        if math.isnan(a) or math.isnan(b):
            return math.isnan(a) and math.isnan(b)
        return a == b and math.copysign(1.0, a) == math.copysign(1.0, b)
    return a == b


def divide(a: float, b: float) -> float:
    """Divide with IEEE-754 results for a zero divisor."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def type_name(value: Any) -> str:
    """Return the Nax type name of a runtime value."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    return type(value).__name__


def stringify(value: Any) -> str:
    """Convert a Nax value to the text `print` writes.

    Integral numbers drop their trailing ".0" so `6 / 2` prints as `3`.
    """
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return 'Infinity' if value > 0 else '-Infinity'
        text = repr(value)
        if text.endswith('.0'):
            text = text[:-2]
        return text
    return str(value)
