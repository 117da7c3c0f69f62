"""
Associative operators for ALGSIMP

Add and Multiply are n-ary nodes. Both flatten nested nodes of their own
kind before simplifying, so (+ 1 (+ 2 3)) is treated as (+ 1 2 3).

Add rules, in order:
    1. Flatten nested sums
    2. Simplify every operand
    3. Drop zero terms
    4. Fold the constant terms into one sum, appended after the
       non-constant terms (which keep their relative order)

Multiply rules, in order:
    1. Flatten nested products
    2. Any zero factor makes the whole product zero
    3. Simplify every operand and drop factors equal to one
    4. If only constants remain, multiply them out

Neither operator combines like terms, distributes, or reorders its
operands.
"""

from typing import List, Tuple

from .expression import Expression, Constant


class AssociativeOperator(Expression):
    """Shared behavior of Add and Multiply."""

    __slots__ = ("_operands",)

    # Separator used by render_to_text and the text of an empty operator
    joiner = ""
    identity = ""

    def __init__(self, *operands: Expression):
        for op in operands:
            if not isinstance(op, Expression):
                raise TypeError(
                    f"{type(self).__name__} operands must be expressions, got {op!r}"
                )
        self._operands: Tuple[Expression, ...] = tuple(operands)

    @property
    def operands(self) -> Tuple[Expression, ...]:
        return self._operands

    def flatten(self) -> List[Expression]:
        """
        Inline operands that are nodes of the same operator, recursively.

        Example:
            Add(1, Add(2, Add(3, x))).flatten() -> [1, 2, 3, x]
        """
        flattened = []
        for op in self._operands:
            if isinstance(op, type(self)):
                flattened.extend(op.flatten())
            else:
                flattened.append(op)
        return flattened

    def evaluate(self) -> Expression:
        raise NotImplementedError(f"evaluate is not supported for {type(self).__name__}")

    def render_to_text(self) -> str:
        if not self._operands:
            return self.identity
        parts = []
        for op in self._operands:
            part = op.render_to_text()
            # Terminals never need parentheses
            if isinstance(op, AssociativeOperator):
                part = f"({part})"
            parts.append(part)
        return self.joiner.join(parts)

    def structural_debug(self, indent: int = 0) -> str:
        pad = " " * indent
        lines = [f"{pad}{type(self).__name__} {{\n"]
        for op in self._operands:
            lines.append(op.structural_debug(indent + 2))
        lines.append(f"{pad}}}\n")
        return "".join(lines)

    def __len__(self) -> int:
        return len(self._operands)

    def __iter__(self):
        return iter(self._operands)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AssociativeOperator):
            return NotImplemented
        return type(self) is type(other) and self._operands == other._operands

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._operands))

    def __repr__(self) -> str:
        args = ", ".join(repr(op) for op in self._operands)
        return f"{type(self).__name__}({args})"


class Add(AssociativeOperator):
    """An n-ary sum."""

    __slots__ = ()

    joiner = " + "
    identity = "0"

    def simplify(self, trace=None) -> Expression:
        flat = Add(*self.flatten())
        if trace is not None:
            trace.record("add-flatten", self, flat)

        operands = [op.simplify(trace) for op in flat.operands]

        nonzero = [op for op in operands if not op.is_constant(0)]
        if trace is not None:
            trace.record("add-drop-zero", Add(*operands), Add(*nonzero))

        terms = [op for op in nonzero if not op.is_constant()]
        total = 0.0
        for op in nonzero:
            if op.is_constant():
                total += op.value

        # The folded constant is always appended, even when it is zero.
        # Only a sum with no other terms left collapses to a bare Constant.
        if terms:
            result = Add(*terms, Constant(total))
        else:
            result = Constant(total)

        if trace is not None:
            trace.record("add-fold-constants", Add(*nonzero), result)
        return result


class Multiply(AssociativeOperator):
    """An n-ary product. Renders by juxtaposition, as Typst does."""

    __slots__ = ()

    joiner = " "
    identity = "1"

    def simplify(self, trace=None) -> Expression:
        flat = Multiply(*self.flatten())
        if trace is not None:
            trace.record("mul-flatten", self, flat)

        # Short-circuit before touching the other operands
        if any(op.is_constant(0) for op in flat.operands):
            return self._zero(flat, trace)

        operands = [op.simplify(trace) for op in flat.operands]
        if any(op.is_constant(0) for op in operands):
            return self._zero(Multiply(*operands), trace)

        factors = [op for op in operands if not op.is_constant(1)]
        if trace is not None:
            trace.record("mul-drop-one", Multiply(*operands), Multiply(*factors))

        # TODO: fold the constant factors of a mixed product, e.g. 2 x 3 -> 6 x
        if all(op.is_constant() for op in factors):
            product = 1.0
            for op in factors:
                product *= op.value
            result = Constant(product)
            if trace is not None:
                trace.record("mul-fold-constants", Multiply(*factors), result)
            return result

        return Multiply(*factors)

    @staticmethod
    def _zero(before: Expression, trace) -> Expression:
        result = Constant(0)
        if trace is not None:
            trace.record("mul-zero", before, result)
        return result
