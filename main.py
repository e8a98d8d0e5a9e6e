"""Command line combat assistant: dice rolls, initiative and hit points.

Every command loads the roster, runs, and saves the roster back.

Usage:
    combat roll 2d6+3
    combat join Grog -i d20+2 --adv --hp 4d10+8
    combat init --lair
    combat deal Grog 2d6
    combat heal Grog 7
    combat temp Grog 5
    combat kill Grog
    combat wipe

Environment variables:
    COMBAT_ROSTER    Roster file (default: ./roster.json)
    COMBAT_DATA_DIR  Directory for the default roster file
"""

import argparse
import logging
import sys

from config import DEFAULT_INIT_FORMULA, ROSTER_FILE
from engine.dice import roll
from engine.errors import FormatError, NotFoundError, RosterWriteError
from engine.initiative import initiative_order
from engine.storage import load_roster, save_roster
from models.characters import CharacterKind
from models.rolls import Roll, RollKind
from models.roster import Roster


def _apply_modifiers(r: Roll, args: argparse.Namespace) -> Roll:
    """Apply --adv / --dis flags to a roll."""
    if args.adv:
        r.with_kind(RollKind.ADVANTAGE)
    if args.dis:
        r.with_kind(RollKind.DISADVANTAGE)
    return r


def roll_formula(args: argparse.Namespace, roster: Roster) -> None:
    """Roll an arbitrary formula."""
    r = _apply_modifiers(Roll.from_formula(args.formula), args)
    if r.is_constant() or r.kind in (RollKind.ADVANTAGE, RollKind.DISADVANTAGE):
        print(f"Roll {args.formula} = {r.resolve()}")
    else:
        result = roll(args.formula)
        print(f"Roll {args.formula} = {result.total}  [{result.detail}]")


def roll_initiative(args: argparse.Namespace, roster: Roster) -> None:
    """Roll initiative for the entire party and encounter."""
    entries = initiative_order(roster, lair=args.lair)
    if not entries:
        print("Roster is empty.")
        return
    print("Initiative rolls:")
    for entry in entries:
        print(f"{entry.value}: {entry.name} {entry.status}".rstrip())


def join(args: argparse.Namespace, roster: Roster) -> None:
    """Add a character to the roster, or update one."""
    init = _apply_modifiers(Roll.from_formula(args.init), args)
    kind = CharacterKind.NPC if args.npc else CharacterKind.PC

    if roster.exists(args.name):
        print(f"Update {args.name} in the roster.")
    else:
        print(f"Add {args.name} to the roster.")

    character = roster.join(args.name, init, kind=kind)

    if args.hp is not None:
        character.hp.set_max(args.hp)
        print(f"Set max HP to {args.hp} ({character.hp.max}).")


def kill(args: argparse.Namespace, roster: Roster) -> None:
    """Remove a character from the roster."""
    if roster.exists(args.name):
        roster.kill(args.name)
        print(f"{args.name} has been removed from the roster.")
    else:
        print(f"{args.name} is not in the roster.")


def deal(args: argparse.Namespace, roster: Roster) -> None:
    """Deal damage to a character."""
    character = roster.get(args.name)
    damage = Roll.from_formula(args.amount).resolve()
    character.hp.deal(damage)
    print(f"{args.name} took {damage} damage, now has {character.hp.current} HP.")
    if character.dead:
        print(f"{args.name} is DEAD.")


def heal(args: argparse.Namespace, roster: Roster) -> None:
    """Heal damage on a character."""
    character = roster.get(args.name)
    amount = Roll.from_formula(args.amount).resolve()
    character.hp.heal(amount)
    print(f"{args.name} healed {amount} damage, now has {character.hp.current} HP.")


def add_temp(args: argparse.Namespace, roster: Roster) -> None:
    """Grant temporary hit points to a character."""
    character = roster.get(args.name)
    amount = Roll.from_formula(args.amount).resolve()
    character.hp.add_temp(amount)
    print(f"{args.name} has {character.hp.temp} temporary HP.")


def wipe(args: argparse.Namespace, roster: Roster) -> None:
    """Remove every dead character from the roster."""
    removed = roster.wipe()
    if not removed:
        print("Nobody is dead.")
        return
    for name in sorted(removed):
        print(f"{name} has been removed from the roster.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="combat", description="D&D combat tools")
    parser.add_argument(
        "-r", "--roster",
        default=ROSTER_FILE,
        help=f"Roster definition file (default: {ROSTER_FILE}, or set COMBAT_ROSTER env var)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show diagnostics")

    subparsers = parser.add_subparsers(dest="command", required=True)

    roll_parser = subparsers.add_parser("roll", help="Roll an arbitrary formula")
    roll_parser.add_argument("formula", help="Formula to roll, example: d20+3")
    roll_parser.add_argument("-a", "--adv", action="store_true", help="Roll with advantage")
    roll_parser.add_argument("-d", "--dis", action="store_true", help="Roll with disadvantage")
    roll_parser.set_defaults(func=roll_formula)

    init_parser = subparsers.add_parser("init", help="Roll initiative")
    init_parser.add_argument(
        "-l", "--lair", action="store_true", help="Include lair actions at initiative 20",
    )
    init_parser.set_defaults(func=roll_initiative)

    join_parser = subparsers.add_parser("join", help="Add a character to the roster")
    join_parser.add_argument("name", help="Character name")
    join_parser.add_argument(
        "-i", "--init", default=DEFAULT_INIT_FORMULA, help="Initiative formula (default: d20)",
    )
    join_parser.add_argument("-a", "--adv", action="store_true", help="Roll initiative with advantage")
    join_parser.add_argument("-d", "--dis", action="store_true", help="Roll initiative with disadvantage")
    join_parser.add_argument("--hp", help="Max HP value or formula")
    join_parser.add_argument("--npc", action="store_true", help="Mark the character as an NPC")
    join_parser.set_defaults(func=join)

    kill_parser = subparsers.add_parser("kill", help="Remove a character from the roster")
    kill_parser.add_argument("name", help="Character name")
    kill_parser.set_defaults(func=kill)

    deal_parser = subparsers.add_parser("deal", help="Deal damage to a character")
    deal_parser.add_argument("name", help="Character name")
    deal_parser.add_argument("amount", help="Amount or formula of damage")
    deal_parser.set_defaults(func=deal)

    heal_parser = subparsers.add_parser("heal", help="Heal damage on a character")
    heal_parser.add_argument("name", help="Character name")
    heal_parser.add_argument("amount", help="Amount or formula of healing")
    heal_parser.set_defaults(func=heal)

    temp_parser = subparsers.add_parser("temp", help="Give a character temporary HP")
    temp_parser.add_argument("name", help="Character name")
    temp_parser.add_argument("amount", help="Amount or formula of temporary HP")
    temp_parser.set_defaults(func=add_temp)

    wipe_parser = subparsers.add_parser("wipe", help="Remove dead characters from the roster")
    wipe_parser.set_defaults(func=wipe)

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )

    roster = load_roster(args.roster)

    try:
        args.func(args, roster)
    except (FormatError, NotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        save_roster(roster, args.roster)
    except RosterWriteError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
