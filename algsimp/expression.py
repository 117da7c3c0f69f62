"""
Expression model for ALGSIMP

This module defines the base Expression class and the two terminal
variants, Constant and Variable. The associative operators live in
operators.py.

Every expression supports:
    evaluate()          - reduce to a terminal value (terminals only)
    simplify(trace)     - apply the simplification rules, returns a new tree
    render_to_text()    - infix text suitable for a Typst document
    structural_debug()  - indented tree dump for diagnostics

Trees are immutable. Nothing in this package mutates a node after
construction, so simplify() may return terminals unchanged.
"""

import math
from typing import Optional, Union

NumericType = Union[int, float]


def format_number(value: float) -> str:
    """
    Format a constant value in its shortest decimal form.

    Examples:
        3.0 -> "3"
        -1.0 -> "-1"
        0.5 -> "0.5"
    """
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


class Expression:
    """
    Base class of all expression nodes.

    Subclasses must implement evaluate, simplify, render_to_text and
    structural_debug.
    """

    __slots__ = ()

    def evaluate(self) -> "Expression":
        raise NotImplementedError(f"evaluate is not supported for {type(self).__name__}")

    def simplify(self, trace=None) -> "Expression":
        """
        Simplify the expression and return a new expression.

        Args:
            trace: Optional SimplifyTrace that records each rule applied

        Returns:
            The simplified expression. The receiver is never modified.
        """
        raise NotImplementedError

    def render_to_text(self) -> str:
        raise NotImplementedError

    def structural_debug(self, indent: int = 0) -> str:
        raise NotImplementedError

    def is_constant(self, value: Optional[float] = None) -> bool:
        """True if this is a Constant, optionally with the given value."""
        return False

    def __str__(self) -> str:
        return self.render_to_text()


class Constant(Expression):
    """A numeric literal."""

    __slots__ = ("_value",)

    def __init__(self, value: NumericType):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Constant value must be a number, got {value!r}")
        self._value = float(value)

    @property
    def value(self) -> float:
        return self._value

    def evaluate(self) -> Expression:
        return self

    def simplify(self, trace=None) -> Expression:
        return self

    def render_to_text(self) -> str:
        return format_number(self._value)

    def structural_debug(self, indent: int = 0) -> str:
        return f"{' ' * indent}Constant {{ value: {format_number(self._value)} }}\n"

    def is_constant(self, value: Optional[float] = None) -> bool:
        return value is None or self._value == value

    def __eq__(self, other) -> bool:
        if not isinstance(other, Constant):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(("Constant", self._value))

    def __repr__(self) -> str:
        return f"Constant({self._value!r})"


class Variable(Expression):
    """A named variable such as x."""

    __slots__ = ("_name",)

    def __init__(self, name: str):
        if not isinstance(name, str) or not name:
            raise TypeError(f"Variable name must be a non-empty string, got {name!r}")
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def evaluate(self) -> Expression:
        return self

    def simplify(self, trace=None) -> Expression:
        return self

    def render_to_text(self) -> str:
        return self._name

    def structural_debug(self, indent: int = 0) -> str:
        return f"{' ' * indent}Variable {{ name: {self._name} }}\n"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Variable):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash(("Variable", self._name))

    def __repr__(self) -> str:
        return f"Variable({self._name!r})"
