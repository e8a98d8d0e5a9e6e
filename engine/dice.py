"""Dice formula evaluation backed by the d20 library."""

import d20
from pydantic import BaseModel

from engine.errors import FormatError


class DiceResult(BaseModel):
    """Result of evaluating a dice formula."""
    total: int
    notation: str
    detail: str                     # e.g. "1d20 (14) + 3 = `17`"


def roll(notation: str) -> DiceResult:
    """Evaluate a dice formula like '2d6+3', 'd20', '4d6kh3'.

    Every call is an independent random draw.

    Args:
        notation: Dice formula accepted by the d20 library.

    Returns:
        DiceResult with the total and a readable breakdown.

    Raises:
        FormatError: If the formula cannot be parsed or rolled.
    """
    notation = notation.strip()
    try:
        result = d20.roll(notation)
    except d20.RollError as exc:
        raise FormatError(notation, str(exc)) from exc

    return DiceResult(
        total=result.total,
        notation=notation,
        detail=str(result),
    )


def evaluate(formula: str) -> int:
    """Evaluate a dice formula and return only its total."""
    return roll(formula).total
