"""Roll formulas with advantage / disadvantage resolution."""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel

from engine.dice import evaluate
from engine.errors import FormatError

Evaluator = Callable[[str], int]

INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")


class RollKind(str, Enum):
    """How many draws a roll takes and which one it keeps."""
    NORMAL = "Normal"
    ADVANTAGE = "Advantage"
    DISADVANTAGE = "Disadvantage"
    CANCELLED = "Cancelled"          # Advantage and disadvantage both applied


class Roll(BaseModel):
    """A dice formula (or plain integer) plus its advantage state."""
    formula: str
    kind: RollKind = RollKind.NORMAL

    @classmethod
    def from_formula(cls, formula: str) -> Roll:
        """Create a normal roll. The formula is only checked when resolved."""
        return cls(formula=formula)

    def with_kind(self, kind: RollKind) -> Roll:
        """Apply advantage or disadvantage to this roll, in place.

        The first modifier sets the kind. Applying the same modifier again
        changes nothing; applying the opposite one cancels both, and a
        cancelled roll stays cancelled.

        Args:
            kind: The modifier to apply.

        Returns:
            This roll, for chaining.
        """
        if kind == RollKind.NORMAL:
            return self
        if self.kind == RollKind.NORMAL:
            self.kind = kind
        elif self.kind != kind:
            self.kind = RollKind.CANCELLED
        return self

    def is_constant(self) -> bool:
        """True if the formula has no dice in it."""
        return "d" not in self.formula.lower()

    def resolve(self, evaluator: Evaluator | None = None) -> int:
        """Resolve the roll to a single integer.

        Plain integers are returned as-is. Otherwise the formula is
        evaluated once, or twice for advantage (higher) and
        disadvantage (lower).

        Args:
            evaluator: Optional formula evaluator, for seeded/testing rolls.

        Returns:
            The resolved total.

        Raises:
            FormatError: If the formula is not a dice expression or integer.
        """
        if self.is_constant():
            literal = self.formula.strip()
            if not INTEGER_PATTERN.match(literal):
                raise FormatError(self.formula, "not an integer")
            return int(literal)

        evaluator = evaluator or evaluate

        if self.kind == RollKind.ADVANTAGE:
            return max(evaluator(self.formula), evaluator(self.formula))

        if self.kind == RollKind.DISADVANTAGE:
            return min(evaluator(self.formula), evaluator(self.formula))

        return evaluator(self.formula)

    def check(self, threshold: int, evaluator: Evaluator | None = None) -> bool:
        """Resolve the roll and compare it against a DC."""
        return self.resolve(evaluator) >= threshold
