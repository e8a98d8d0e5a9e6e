"""Hit point tracking: max, current and temporary HP."""

from __future__ import annotations

from pydantic import BaseModel

from models.rolls import Evaluator, Roll


class HitPoints(BaseModel):
    """Hit point state for one character.

    A max of 0 means HP were never set for this character.
    """
    max: int = 0
    current: int = 0
    temp: int = 0

    @classmethod
    def from_formula(cls, formula: str, evaluator: Evaluator | None = None) -> HitPoints:
        """Roll a max HP formula once and start at full health."""
        total = Roll.from_formula(formula).resolve(evaluator)
        return cls(max=total, current=total)

    def set_max(self, formula: str, evaluator: Evaluator | None = None) -> int:
        """Roll a new max HP, keeping the damage already taken.

        Current HP moves by the same amount as max. It is not clamped
        here; the next deal() or heal() brings it back in range.

        Args:
            formula: Max HP value or formula.
            evaluator: Optional formula evaluator, for seeded/testing rolls.

        Returns:
            The new max HP.
        """
        new_max = Roll.from_formula(formula).resolve(evaluator)
        self.current += new_max - self.max
        self.max = new_max
        return new_max

    def is_set(self) -> bool:
        return self.max > 0

    def add_temp(self, amount: int) -> None:
        """Grant temporary HP. Pools don't stack; the higher one is kept."""
        self.temp = max(self.temp, amount)

    def deal(self, amount: int) -> None:
        """Apply damage, draining temporary HP before current HP."""
        overflow = max(0, amount - self.temp)
        self.temp = max(0, self.temp - amount)
        self.current = max(0, self.current - overflow)

    def heal(self, amount: int) -> None:
        """Restore current HP up to max. Temporary HP is not restored."""
        self.current = max(0, min(self.current + amount, self.max))
