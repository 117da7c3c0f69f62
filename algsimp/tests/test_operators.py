"""Tests for Add and Multiply simplification."""

import pytest
from algsimp import Expression, Constant, Variable, Add, Multiply


def C(value):
    return Constant(value)


x, y, z = Variable("x"), Variable("y"), Variable("z")


class Exploding(Expression):
    """An operand that fails if anything tries to simplify it."""

    def simplify(self, trace=None):
        raise AssertionError("operand should not have been simplified")

    def render_to_text(self):
        return "boom"


class TestOperatorBasics:
    """Tests for construction, rendering and equality."""

    def test_operands_are_a_tuple(self):
        """Operands are stored immutably."""
        add = Add(C(1), x)
        assert add.operands == (C(1), x)
        assert isinstance(add.operands, tuple)

    def test_rejects_non_expressions(self):
        """Operands must be expressions."""
        with pytest.raises(TypeError):
            Add(C(1), 2)
        with pytest.raises(TypeError):
            Multiply("x")

    def test_len_and_iter(self):
        """Operators expose their operands."""
        mul = Multiply(C(2), x, y)
        assert len(mul) == 3
        assert list(mul) == [C(2), x, y]

    def test_equality(self):
        """Operators compare by kind and ordered operands."""
        assert Add(x, C(1)) == Add(x, C(1))
        assert Add(x, C(1)) != Add(C(1), x)
        assert Add(x, C(1)) != Multiply(x, C(1))
        assert hash(Add(x, C(1))) == hash(Add(x, C(1)))

    def test_repr(self):
        """Repr is constructor-like."""
        assert repr(Add(C(3), x)) == "Add(Constant(3.0), Variable('x'))"
        assert repr(Multiply()) == "Multiply()"

    def test_render_add(self):
        """Sums join with +."""
        assert Add(x, y, C(2)).render_to_text() == "x + y + 2"

    def test_render_multiply(self):
        """Products join by juxtaposition."""
        assert Multiply(C(2), x).render_to_text() == "2 x"

    def test_render_parenthesizes_operators(self):
        """Nested operators are parenthesized, terminals are not."""
        assert Add(x, Multiply(C(2), y)).render_to_text() == "x + (2 y)"
        assert Multiply(Add(x, C(1)), y).render_to_text() == "(x + 1) y"
        assert Add(Add(x, y), z).render_to_text() == "(x + y) + z"

    def test_render_empty(self):
        """Empty operators render as their identity element."""
        assert Add().render_to_text() == "0"
        assert Multiply().render_to_text() == "1"

    def test_structural_debug(self):
        """Debug dump nests children two spaces deeper."""
        expected = (
            "Add {\n"
            "  Constant { value: 3 }\n"
            "  Multiply {\n"
            "    Variable { name: x }\n"
            "  }\n"
            "}\n"
        )
        assert Add(C(3), Multiply(x)).structural_debug() == expected

    def test_evaluate_not_implemented(self):
        """Composite nodes cannot be evaluated."""
        with pytest.raises(NotImplementedError):
            Add(C(1), C(2)).evaluate()
        with pytest.raises(NotImplementedError):
            Multiply(C(1), C(2)).evaluate()

    def test_flatten(self):
        """Flatten inlines nested nodes of the same kind only."""
        add = Add(C(1), Add(C(2), Add(C(3), x)), Multiply(y, Multiply(z)))
        assert add.flatten() == [C(1), C(2), C(3), x, Multiply(y, Multiply(z))]


class TestAddSimplify:
    """Tests for Add.simplify."""

    def test_simplify_with_zero(self):
        """1 + 0 + 2 folds to 3."""
        assert Add(C(1), C(0), C(2)).simplify() == C(3)

    def test_simplify_with_no_zero(self):
        """1 + 2 + 3 folds to 6."""
        assert Add(C(1), C(2), C(3)).simplify() == C(6)

    def test_simplify_nested_add(self):
        """Nested sums are flattened before folding."""
        assert Add(C(3), Add(C(1), C(2))).simplify() == C(6)

    def test_simplify_negative_constant(self):
        """5 + -3 renders as 2."""
        assert Add(C(5), C(-3)).simplify().render_to_text() == "2"

    def test_folded_constant_appended(self):
        """Constants are folded after the non-constant terms."""
        result = Add(x, C(2), y, C(3)).simplify()
        assert result == Add(x, y, C(5))
        assert result.render_to_text() == "x + y + 5"

    def test_folded_zero_kept(self):
        """The folded constant is present even when it is zero."""
        assert Add(x, C(0)).simplify() == Add(x, C(0))
        assert Add(x, y).simplify() == Add(x, y, C(0))

    def test_zero_terms_dropped(self):
        """Zero operands never survive in the simplified list."""
        result = Add(C(0), x, C(0), C(1)).simplify()
        assert result == Add(x, C(1))
        assert C(0) not in result.operands

    def test_operands_simplified(self):
        """Operands are simplified recursively."""
        result = Add(Multiply(C(2), C(3)), x).simplify()
        assert result == Add(x, C(6))

    def test_zero_product_dropped(self):
        """A product that simplifies to zero is dropped."""
        result = Add(x, Multiply(y, C(0)), C(4)).simplify()
        assert result == Add(x, C(4))

    def test_no_like_term_combination(self):
        """x - x is not reduced to 0."""
        result = Add(x, Add(C(0), Multiply(C(-1), x))).simplify()
        assert result == Add(x, Multiply(C(-1), x), C(0))

    def test_order_preserved(self):
        """Non-constant terms keep their relative order."""
        result = Add(z, C(1), x, y).simplify()
        assert result.operands[:3] == (z, x, y)

    def test_empty_add(self):
        """An empty sum is zero."""
        assert Add().simplify() == C(0)

    def test_does_not_mutate(self):
        """Simplify returns a new tree."""
        add = Add(C(1), Add(C(2), x))
        add.simplify()
        assert add == Add(C(1), Add(C(2), x))


class TestMultiplySimplify:
    """Tests for Multiply.simplify."""

    def test_simplify_with_zero_and_one(self):
        """1 * 0 * 2 is 0."""
        assert Multiply(C(1), C(0), C(2)).simplify() == C(0)

    def test_simplify_with_no_zero_or_one(self):
        """2 * 3 * 4 folds to 24."""
        assert Multiply(C(2), C(3), C(4)).simplify() == C(24)

    def test_simplify_nested_multiply(self):
        """Nested products give the same result as a flat product."""
        nested = Multiply(C(4), Multiply(C(2), C(3))).simplify()
        flat = Multiply(C(4), C(2), C(3)).simplify()
        assert nested == flat == C(24)

    def test_simplify_nested_add(self):
        """4 * (2 + 3) folds to 20."""
        assert Multiply(C(4), Add(C(2), C(3))).simplify() == C(20)

    def test_nested_zero_short_circuits(self):
        """A zero anywhere in the nested product gives 0."""
        assert Multiply(x, Multiply(y, C(0))).simplify() == C(0)

    def test_zero_skips_other_operands(self):
        """Zero short-circuits before other operands are simplified."""
        assert Multiply(Exploding(), C(0)).simplify() == C(0)

    def test_operand_simplifying_to_zero(self):
        """An operand that simplifies to zero gives 0."""
        assert Multiply(x, Add(C(0))).simplify() == C(0)

    def test_ones_dropped(self):
        """Factors equal to one are removed."""
        assert Multiply(x, C(1), y).simplify() == Multiply(x, y)

    def test_single_factor_kept_as_product(self):
        """A single remaining factor stays wrapped."""
        result = Multiply(C(1), x).simplify()
        assert result == Multiply(x)
        assert result.render_to_text() == "x"

    def test_no_partial_folding(self):
        """Constants are not folded while variables are present."""
        assert Multiply(C(2), x, C(3)).simplify() == Multiply(C(2), x, C(3))

    def test_all_ones(self):
        """A product of ones is one."""
        assert Multiply(C(1), C(1)).simplify() == C(1)

    def test_empty_multiply(self):
        """An empty product is one."""
        assert Multiply().simplify() == C(1)

    def test_does_not_mutate(self):
        """Simplify returns a new tree."""
        mul = Multiply(C(1), Multiply(x, C(1)))
        mul.simplify()
        assert mul == Multiply(C(1), Multiply(x, C(1)))


class TestIdempotence:
    """simplify(simplify(e)) renders the same as simplify(e)."""

    @pytest.mark.parametrize("expr", [
        Add(C(1), C(0), C(2)),
        Add(x, C(0)),
        Add(x, y),
        Add(x, Add(C(0), Multiply(C(-1), x))),
        Multiply(C(2), x, C(3)),
        Multiply(x, Add(C(0))),
        Multiply(C(1), x),
        Multiply(Add(x, C(1)), Add(y, C(0))),
        Add(Multiply(C(2), Add(x, C(0))), Multiply(C(1), C(1))),
        Add(),
        Multiply(),
    ])
    def test_idempotent(self, expr):
        once = expr.simplify()
        twice = once.simplify()
        assert twice.render_to_text() == once.render_to_text()
