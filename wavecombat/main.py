"""
Main entry point for the wave combat engine.

Loads the hero and enemy definitions shipped in the data folder, builds a
party and a sequence of enemy waves, and runs the battle in the terminal.
Player turns are read through the prompt-based interface unless the battle
runs in automated mode.
"""

import argparse
import logging
import time
from collections import Counter
from copy import deepcopy
from pathlib import Path

from catchery import log_warning

from wavecombat.combat.battle import Battle
from wavecombat.core.config import BattleSettings
from wavecombat.core.rng import RNG
from wavecombat.core.logging import setup_logging
from wavecombat.core.utils import cprint, crule
from wavecombat.ui.cli_interface import PlayerInterface
from wavecombat.units.loader import load_units
from wavecombat.units.unit_definition import UnitDefinition

# Get the path to the data folder.
data_dir = Path(__file__).parent / "data"

DEFAULT_PARTY = ["Aldric", "Lyra", "Merin", "Sylva"]
DEFAULT_WAVES = [
    ["Goblin", "Goblin", "Imp"],
    ["Skeleton", "Cultist", "Skeleton"],
    ["Frost Wyrm"],
]


def pick_units(source: dict[str, UnitDefinition], names: list[str]) -> list[UnitDefinition]:
    """
    Copies the named definitions out of a loaded group.

    Logs a warning for every name that is not found in the group.

    Args:
        source (dict[str, UnitDefinition]): Loaded definitions by name.
        names (list[str]): Names to pick, duplicates allowed.

    Returns:
        list[UnitDefinition]: Independent copies of the picked definitions.

    """
    picked: list[UnitDefinition] = []
    for name in names:
        if name in source:
            picked.append(deepcopy(source[name]))
        else:
            log_warning(
                f"Unit '{name}' not found in unit data",
                {"unit_name": name, "available_units": list(source.keys())},
            )
    return picked


def make_names_unique(units: list[UnitDefinition]) -> None:
    """
    Ensure all unit names in a list are unique by appending numbers.

    Example:
        Input: ["Goblin", "Goblin", "Imp"]
        Output: ["Goblin (1)", "Goblin (2)", "Imp"]

    """
    name_counts = Counter(unit.name for unit in units)
    seen: Counter[str] = Counter()
    for unit in units:
        base = unit.name
        if name_counts[base] > 1:
            seen[base] += 1
            unit.name = f"{base} ({seen[base]})"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a wave combat encounter in the terminal.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random number generator.")
    parser.add_argument("--auto", action="store_true", help="Let the AI control the party.")
    parser.add_argument("--waves", type=int, default=len(DEFAULT_WAVES), help="Number of waves to fight.")
    parser.add_argument("--full-heal", action="store_true", help="Fully heal the party between waves.")
    parser.add_argument("--tick-delay", type=float, default=0.0, help="Seconds to pause after each tick.")
    parser.add_argument("--turn-delay", type=float, default=0.0, help="Seconds to pause after each turn.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Level of the diagnostic log.",
    )
    parser.add_argument("--log-file", default=None, help="Also write diagnostics to this file.")
    return parser


def final_report(battle: Battle) -> None:
    """Prints the outcome of the battle and the experience earned."""
    result = battle.get_result()
    crule(":scroll:  Final Report", style="bold blue")
    if result.victory:
        cprint("[bold green]Victory![/]")
    else:
        cprint("[bold red]Defeat.[/]")
    cprint(f"Waves cleared: {result.waves_cleared}/{len(battle.waves)}")
    cprint(f"Battle duration: {result.duration_ticks} ticks, {battle.turn} turns")
    for name, exp in result.survivor_exp_grants.items():
        cprint(f"  {name} earned [yellow]{exp}[/] exp")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    crule("Wave Combat", style="bold green")

    heroes = load_units(data_dir / "heroes.json")
    enemies = load_units(data_dir / "enemies.json")
    party = pick_units(heroes, DEFAULT_PARTY)
    waves = [pick_units(enemies, names) for names in DEFAULT_WAVES[: max(args.waves, 1)]]
    for wave in waves:
        make_names_unique(wave)

    settings = BattleSettings(
        automated=args.auto,
        full_heal_between_waves=args.full_heal,
        tick_delay=args.tick_delay,
        turn_delay=args.turn_delay,
    )
    battle = Battle(settings=settings, rng=RNG(args.seed))
    battle.battle_log.subscribe(lambda line: cprint(f"[white]{line}[/]"))
    interface = PlayerInterface()

    try:
        battle.start(party, waves)
        crule(":crossed_swords:  Combat Started", style="bold green")
        while not battle.is_over():
            if battle.is_waiting():
                interface.display_status(battle)
                interface.play_turn(battle)
                continue
            turn = battle.turn
            battle.step()
            if settings.tick_delay:
                time.sleep(settings.tick_delay)
            if battle.turn != turn and settings.turn_delay:
                time.sleep(settings.turn_delay)
        final_report(battle)
        crule(":crossed_swords:  Combat Finished", style="bold green")
    except KeyboardInterrupt:
        cprint("")
        crule(":crossed_swords:  Combat Interrupted", style="bold red")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
