#!/usr/bin/env python3
"""
ALGSIMP Feature Demonstration

This script walks through parsing, simplification, tracing and the
Typst hand-off.
"""

import tempfile
from pathlib import Path

from algsimp import (
    parse_expression, simplify, simplify_text, write_typst_source,
    Add, Multiply, Constant, Variable, ParseError,
)


def section(title: str):
    """Print a section header."""
    print(f"\n{'='*60}")
    print(f" {title}")
    print('='*60)


def demo_basic_usage():
    """Demonstrate parsing and simplifying text."""
    section("Basic Usage")

    examples = [
        "3 + 2*4",
        "x + 0",
        "x * 1 * y",
        "(x + y) * 0",
        "10 - 2 - 3",
        "x + 2*3 + y",
    ]

    for source in examples:
        result = simplify_text(source)
        print(f"  {source} => {result.render_to_text()}")


def demo_building_trees():
    """Demonstrate building trees without the parser."""
    section("Building Trees Directly")

    x = Variable("x")
    examples = [
        Add(Constant(1), Constant(0), Constant(2)),
        Multiply(Constant(4), Multiply(Constant(2), Constant(3))),
        Multiply(Constant(2), x, Constant(3)),
        Add(x, Add(Constant(5), Constant(-3))),
    ]

    for expr in examples:
        print(f"  {expr!r}")
        print(f"    => {simplify(expr)!r}")


def demo_structure():
    """Demonstrate the structural dump and subtraction desugaring."""
    section("Tree Structure")

    expr = parse_expression("3 - 2*x")
    print("  3 - 2*x parses to:")
    for line in expr.structural_debug(4).splitlines():
        print(line)


def demo_tracing():
    """Demonstrate simplification traces."""
    section("Tracing")

    result, trace = simplify_text("(1 + 0) * x + (2 + 0) * 3", trace=True)
    print(f"  Result: {result}")
    print(f"  Rules: {trace.format('rules')}")
    print(f"  {trace.summary()}")
    print("\n  Chain:")
    for line in trace.format("chain").splitlines():
        print(f"    {line}")


def demo_errors():
    """Demonstrate parse errors."""
    section("Parse Errors")

    for source in ["3+*4", "-3", "(x + 1", "2x"]:
        try:
            parse_expression(source)
        except ParseError as e:
            print(f"  {source!r}: {e}")


def demo_typst():
    """Demonstrate writing the Typst hand-off file."""
    section("Typst Output")

    with tempfile.TemporaryDirectory() as tmp:
        path = write_typst_source(simplify_text("2*(x + 1) + 0"), Path(tmp) / "expression.typ")
        print(f"  Wrote {path.name}:")
        print(f"    {path.read_text().strip()}")


def main():
    """Run all demonstrations."""
    print("ALGSIMP - Algebraic Simplification of arithmetic expressions")
    print("Feature Demonstration")

    demo_basic_usage()
    demo_building_trees()
    demo_structure()
    demo_tracing()
    demo_errors()
    demo_typst()

    print("\n" + "="*60)
    print(" Demo complete!")
    print("="*60)


if __name__ == "__main__":
    main()
