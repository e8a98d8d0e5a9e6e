"""The roster: every combatant in the session, keyed by name."""

from __future__ import annotations

from typing import Any

from pydantic import Field, RootModel, model_validator

from engine.errors import NotFoundError
from models.characters import Character, CharacterKind
from models.rolls import Evaluator, Roll


class Roster(RootModel[dict[str, Character]]):
    """Characters that roll initiative together, keyed by name.

    Serializes as a plain JSON object of name -> character.
    """
    root: dict[str, Character] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def name_from_key(cls, data: Any) -> Any:
        # The key is authoritative: a character's name always matches it.
        if isinstance(data, dict):
            data = {
                key: {**value, "name": key} if isinstance(value, dict) else value
                for key, value in data.items()
            }
        return data

    def __len__(self) -> int:
        return len(self.root)

    def __contains__(self, name: object) -> bool:
        return name in self.root

    def join(
        self,
        name: str,
        init: Roll,
        kind: CharacterKind = CharacterKind.PC,
    ) -> Character:
        """Add a character, or replace one with the same name.

        Replacing discards the old character's HP.

        Args:
            name: Character name.
            init: Initiative roll for the character.
            kind: PC or NPC.

        Returns:
            The new character.
        """
        character = Character(name=name, kind=kind, init=init)
        self.root[name] = character
        return character

    def exists(self, name: str) -> bool:
        return name in self.root

    def kill(self, name: str) -> None:
        """Remove a character. Unknown names are ignored."""
        self.root.pop(name, None)

    def get(self, name: str) -> Character:
        """Look up a character by name.

        Raises:
            NotFoundError: If no character has that name.
        """
        try:
            return self.root[name]
        except KeyError:
            raise NotFoundError(name) from None

    def roll_inits(self, evaluator: Evaluator | None = None) -> list[tuple[int, str]]:
        """Roll initiative once for every character, in no particular order."""
        return [
            (character.roll_init(evaluator), name)
            for name, character in self.root.items()
        ]

    def wipe(self) -> list[str]:
        """Remove every dead character.

        Returns:
            Names of the removed characters.
        """
        dead_names = [
            name for name, character in self.root.items()
            if character.dead
        ]
        for name in dead_names:
            del self.root[name]
        return dead_names
