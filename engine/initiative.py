"""Initiative listings for the whole roster."""

from __future__ import annotations

from pydantic import BaseModel

from config import LAIR_INITIATIVE, LAIR_NAME
from models.rolls import Evaluator
from models.roster import Roster


class InitiativeEntry(BaseModel):
    """One line of the initiative order."""
    value: int
    name: str
    status: str = ""


def initiative_order(
    roster: Roster,
    lair: bool = False,
    evaluator: Evaluator | None = None,
) -> list[InitiativeEntry]:
    """Roll initiative for every character and sort highest first.

    Args:
        roster: The roster to roll for.
        lair: Add a lair actions entry at initiative 20.
        evaluator: Optional formula evaluator, for seeded/testing rolls.

    Returns:
        Entries sorted by initiative, descending. Empty if the roster is.
    """
    entries = [
        InitiativeEntry(value=value, name=name, status=roster.get(name).status)
        for value, name in roster.roll_inits(evaluator)
    ]
    if not entries:
        return []

    if lair:
        entries.append(InitiativeEntry(value=LAIR_INITIATIVE, name=LAIR_NAME))

    entries.sort(key=lambda e: e.value, reverse=True)
    return entries
