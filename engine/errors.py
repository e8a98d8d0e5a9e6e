"""Exception types raised by the combat tracker core and storage layer."""


class CombatError(Exception):
    """Base class for all combat tracker errors."""


class FormatError(CombatError, ValueError):
    """A formula is neither a valid dice expression nor a plain integer."""

    def __init__(self, formula: str, reason: str = "") -> None:
        self.formula = formula
        message = f"Invalid formula: {formula!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class NotFoundError(CombatError, LookupError):
    """A roster lookup named a character that is not in the roster."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name} is not in the roster")


class RosterReadError(CombatError):
    """The roster file is missing, unreadable or not a valid snapshot."""


class RosterWriteError(CombatError):
    """The roster snapshot could not be written."""
