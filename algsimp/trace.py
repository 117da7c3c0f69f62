"""
Simplification traces for ALGSIMP

A SimplifyTrace records every rule that changed a node while an
expression was being simplified. Steps are appended bottom-up in the
order the rules fired, so the trace reads like a derivation.

Rule names:
    add-flatten          - nested sums inlined into one sum
    add-drop-zero        - zero terms removed from a sum
    add-fold-constants   - constant terms of a sum added together
    mul-flatten          - nested products inlined into one product
    mul-zero             - a zero factor collapsed the product to 0
    mul-drop-one         - factors equal to one removed from a product
    mul-fold-constants   - an all-constant product multiplied out
"""

from typing import Dict, List, Optional

from .expression import Expression


def _text(expr: Optional[Expression]) -> str:
    return "<none>" if expr is None else expr.render_to_text()


class SimplifyStep:
    """A single rule application."""

    def __init__(self, rule: str, before: Expression, after: Expression):
        self.rule = rule
        self.before = before
        self.after = after

    def __repr__(self) -> str:
        return f"{self.rule}: {_text(self.before)} → {_text(self.after)}"

    def to_dict(self) -> Dict:
        """Convert step to dictionary for serialization."""
        return {
            "rule": self.rule,
            "before": _text(self.before),
            "after": _text(self.after),
        }


class SimplifyTrace:
    """
    A trace of all simplification steps applied.

    Provides multiple formatting options:
        - Default repr: verbose multi-line format
        - format("compact"): single line showing rule chain
        - format("rules"): just the rule names applied
        - format("chain"): expression after each step
        - to_dict(): JSON-serializable dictionary
    """

    def __init__(self):
        self.steps: List[SimplifyStep] = []
        self.initial: Optional[Expression] = None
        self.final: Optional[Expression] = None

    def add_step(self, step: SimplifyStep):
        self.steps.append(step)

    def record(self, rule: str, before: Expression, after: Expression):
        """Add a step, unless the rule left the node unchanged."""
        if before != after:
            self.add_step(SimplifyStep(rule, before, after))

    def format(self, style: str = "verbose") -> str:
        """
        Format the trace in different styles.

        Args:
            style: One of "verbose", "compact", "rules", "chain"

        Returns:
            Formatted string representation of the trace.
        """
        if style == "compact":
            rules = self.rules_applied()
            return f"{_text(self.initial)} --[{', '.join(rules)}]--> {_text(self.final)}"

        elif style == "rules":
            rules = self.rules_applied()
            return " -> ".join(rules) if rules else "(no rules applied)"

        elif style == "chain":
            if not self.steps:
                return _text(self.initial)
            parts = [_text(self.initial)]
            for step in self.steps:
                parts.append(f"  --({step.rule})-->")
                parts.append(_text(step.after))
            return "\n".join(parts)

        else:  # verbose (default)
            return repr(self)

    def __repr__(self) -> str:
        lines = [f"Initial: {_text(self.initial)}"]
        for i, step in enumerate(self.steps, 1):
            lines.append(f"  {i}. {step}")
        lines.append(f"Final: {_text(self.final)}")
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)

    def __bool__(self) -> bool:
        """True if any rule changed the expression."""
        return len(self.steps) > 0

    def to_dict(self) -> Dict:
        """Convert trace to dictionary for JSON serialization."""
        return {
            "initial": _text(self.initial),
            "final": _text(self.final),
            "steps": [step.to_dict() for step in self.steps],
            "step_count": len(self.steps),
        }

    def rule_counts(self) -> Dict[str, int]:
        """Count how many times each rule was applied."""
        counts: Dict[str, int] = {}
        for step in self.steps:
            counts[step.rule] = counts.get(step.rule, 0) + 1
        return counts

    def rules_applied(self) -> List[str]:
        """Get list of rule names in order of application."""
        return [step.rule for step in self.steps]

    def summary(self) -> str:
        """Get a brief summary of the simplification."""
        if not self.steps:
            return "No simplification performed"
        counts = self.rule_counts()
        most_used = max(counts.items(), key=lambda x: x[1])
        return (f"{len(self.steps)} steps using {len(counts)} unique rules. "
                f"Most used: {most_used[0]} ({most_used[1]}x)")
