"""
Simplification pipeline for ALGSIMP

Ties the parser, the simplifier and the text renderer together:

    source text -> parse_expression -> simplify -> render_to_text

Each stage is a pure function of its input. The rendered text uses Typst
conventions (juxtaposition for products) so it can be handed to a
typesetting tool unchanged; write_typst_source produces that hand-off file.

Tracing:
    result, trace = simplify(expr, trace=True)
    print(trace.format("rules"))
"""

from pathlib import Path
from typing import Tuple, Union

from .expression import Expression
from .parser import parse_expression
from .trace import SimplifyTrace

SimplifyResult = Union[Expression, Tuple[Expression, SimplifyTrace]]


# ============================================================
# Simplification
# ============================================================

def simplify(expr: Expression, trace: bool = False) -> SimplifyResult:
    """
    Simplify an expression tree.

    Args:
        expr: Expression to simplify
        trace: If True, also return a SimplifyTrace

    Returns:
        The simplified expression, or (expression, trace) if trace=True

    Examples:
        simplify(Add(Constant(1), Constant(2))) -> Constant(3.0)
        result, t = simplify(expr, trace=True)
    """
    if not isinstance(expr, Expression):
        raise TypeError(f"simplify expects an Expression, got {type(expr).__name__}")

    if not trace:
        return expr.simplify()

    steps = SimplifyTrace()
    steps.initial = expr
    result = expr.simplify(steps)
    steps.final = result
    return result, steps


def simplify_text(source: str, trace: bool = False) -> SimplifyResult:
    """
    Parse source text and simplify the resulting tree.

    Raises:
        ParseError: If the source does not parse.
    """
    return simplify(parse_expression(source), trace=trace)


# ============================================================
# Typst hand-off
# ============================================================

def typst_source(expr: Expression) -> str:
    """Return the Typst document text for an expression."""
    return expr.render_to_text() + "\n\n"


def write_typst_source(expr: Expression, path: Union[str, Path]) -> Path:
    """
    Write the Typst document for an expression.

    Compiling the document and displaying the image are left to
    external tools.

    Args:
        expr: Expression to render
        path: Destination file, conventionally ending in .typ

    Returns:
        The path written
    """
    path = Path(path)
    path.write_text(typst_source(expr))
    return path
