"""Configuration constants for the combat tracker."""

import os

DATA_DIR = os.environ.get("COMBAT_DATA_DIR", ".")   # Where the roster lives
ROSTER_FILE = os.environ.get("COMBAT_ROSTER", os.path.join(DATA_DIR, "roster.json"))
DEFAULT_INIT_FORMULA = "d20"     # Initiative formula when none is given
LAIR_INITIATIVE = 20             # Lair actions always act on 20
LAIR_NAME = "LAIR ACTIONS"
