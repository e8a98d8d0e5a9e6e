"""Character models for the combat roster."""

from enum import Enum

from pydantic import BaseModel, Field

from config import DEFAULT_INIT_FORMULA
from models.hit_points import HitPoints
from models.rolls import Evaluator, Roll


class CharacterKind(str, Enum):
    """Player or non-player character. Rules don't differ yet."""
    PC = "PC"
    NPC = "NPC"


class Character(BaseModel):
    """A combatant tracked in the roster."""
    name: str                       # Unique key in the roster
    kind: CharacterKind = CharacterKind.PC
    init: Roll = Field(default_factory=lambda: Roll.from_formula(DEFAULT_INIT_FORMULA))
    hp: HitPoints = Field(default_factory=HitPoints)

    @property
    def dead(self) -> bool:
        """Dead once HP are set and current HP drop below 1."""
        return self.hp.is_set() and self.hp.current < 1

    @property
    def status(self) -> str:
        """Short status for listings: 'DEAD', 'N HP', or '' if HP aren't set."""
        if self.dead:
            return "DEAD"
        if self.hp.is_set():
            return f"{self.hp.current} HP"
        return ""

    def roll_init(self, evaluator: Evaluator | None = None) -> int:
        """Roll initiative for this character."""
        return self.init.resolve(evaluator)
