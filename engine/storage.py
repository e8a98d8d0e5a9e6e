"""Roster persistence: whole-file JSON snapshots."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from engine.errors import RosterReadError, RosterWriteError
from models.roster import Roster

logger = logging.getLogger(__name__)


def read_roster(path: str) -> Roster:
    """Read a roster snapshot from a JSON file.

    Args:
        path: File path to read from.

    Returns:
        The loaded Roster.

    Raises:
        RosterReadError: If the file can't be read or isn't a roster.
    """
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, ValueError, RecursionError) as exc:
        raise RosterReadError(f"Could not read roster file {path}: {exc}") from exc

    try:
        return Roster.model_validate(data)
    except ValidationError as exc:
        raise RosterReadError(f"Invalid roster data in {path}: {exc}") from exc


def load_roster(path: str) -> Roster:
    """Load a roster, falling back to an empty one.

    A missing or corrupt file is not an error: the tool starts over with
    a blank roster, and the next save replaces the file.

    Args:
        path: File path to read from.

    Returns:
        The loaded Roster, or an empty Roster.
    """
    if not Path(path).exists():
        logger.warning("File %s could not be read, create blank roster.", path)
        return Roster()
    try:
        roster = read_roster(path)
    except RosterReadError as exc:
        logger.warning("%s; create blank roster.", exc)
        return Roster()
    logger.info("Using roster data from file %s", path)
    return roster


def save_roster(roster: Roster, path: str) -> None:
    """Persist the whole roster to a JSON file.

    Writes to a temporary file first, then renames for atomicity.

    Args:
        roster: The roster to save.
        path: File path to write to.

    Raises:
        RosterWriteError: If the file can't be written.
    """
    tmp_path = path + ".tmp"
    data = roster.model_dump(mode="json")
    try:
        with open(tmp_path, "w") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, path)
    except OSError as exc:
        raise RosterWriteError(f"Unable to write roster to {path}: {exc}") from exc
