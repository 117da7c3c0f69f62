"""
ALGSIMP - Algebraic Simplification of arithmetic expressions

Parses infix arithmetic over numbers, the variables x, y and z, +, -, *
and parentheses into an expression tree, and simplifies the tree by
flattening nested sums and products and folding constants.

Quick Start:
    from algsimp import parse_expression

    expr = parse_expression("3 + 2*4 + x")
    print(expr.simplify().render_to_text())  # => "x + 11"

Building trees directly:
    from algsimp import Add, Multiply, Constant, Variable

    expr = Multiply(Constant(4), Multiply(Constant(2), Constant(3)))
    expr.simplify()  # => Constant(24.0)

Simplification rules:
    Add:       flatten, drop zeros, fold constants (appended last)
    Multiply:  flatten, zero short-circuit, drop ones,
               fold when every factor is constant

Tracing:
    from algsimp import simplify_text

    result, trace = simplify_text("(1 + 0) * x", trace=True)
    print(trace.format("rules"))
"""

__version__ = "0.1.0"

# Expression model
from .expression import (
    Expression,
    Constant,
    Variable,
    NumericType,
    format_number,
)
from .operators import (
    AssociativeOperator,
    Add,
    Multiply,
)

# Parser
from .parser import (
    parse_expression,
    ParseError,
)

# Tracing
from .trace import (
    SimplifyStep,
    SimplifyTrace,
)

# Pipeline
from .engine import (
    simplify,
    simplify_text,
    typst_source,
    write_typst_source,
)

# Public API
__all__ = [
    # Version
    "__version__",
    # Model
    "Expression",
    "Constant",
    "Variable",
    "NumericType",
    "format_number",
    "AssociativeOperator",
    "Add",
    "Multiply",
    # Parser
    "parse_expression",
    "ParseError",
    # Tracing
    "SimplifyStep",
    "SimplifyTrace",
    # Pipeline
    "simplify",
    "simplify_text",
    "typst_source",
    "write_typst_source",
]
