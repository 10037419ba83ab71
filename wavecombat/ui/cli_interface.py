"""
User interface module for the combat engine.

Provides console-based user interface components for driving a battle from
the terminal, including the ability and target menus and the status display.
"""

from typing import Any

from prompt_toolkit import ANSI, PromptSession
from rich.table import Table

from wavecombat.combat.battle import Battle, TargetRef
from wavecombat.core.constants import AREA_TARGET, TargetClass
from wavecombat.core.utils import ccapture, cprint
from wavecombat.units.combatant import Combatant

AUTO_ENTRY = "Auto mode"


class PlayerInterface:
    """
    Command-line interface for player turns.

    Provides Rich table-based menus for ability and target selection. Uses
    prompt_toolkit for interactive input with numeric and alphabetic
    shortcuts.
    """

    def __init__(self, session: PromptSession | None = None) -> None:
        """Initialize the PlayerInterface.

        Args:
            session (PromptSession | None): Prompt session to read from. One
                that keeps history is created on first use if omitted.

        """
        self._session = session

    @property
    def session(self) -> PromptSession:
        if self._session is None:
            self._session = PromptSession(erase_when_done=True)
        return self._session

    def build_ability_table(self, battle: Battle, unit: Combatant) -> Table:
        """Builds the table listing the pending unit's abilities.

        Args:
            battle (Battle): The running battle.
            unit (Combatant): The unit whose turn is pending.

        Returns:
            Table: One row per ability slot, numbered from 1.

        """
        table = Table(title=f"{unit.name}'s Abilities", pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Name", style="bold")
        table.add_column("Target", style="magenta")
        table.add_column("Cooldown", justify="right")
        table.add_column("Description", style="dim")
        for i, reference in enumerate(unit.abilities, 1):
            descriptor = battle.catalog.get(reference.ability_id)
            if descriptor is None:
                table.add_row(str(i), reference.ability_id, "?", "", "[red]unknown ability[/]")
                continue
            if descriptor.is_aura:
                cooldown = "[dim]passive[/]"
            elif unit.cooldowns[i - 1] > 0:
                cooldown = f"[red]{unit.cooldowns[i - 1]}[/]"
            else:
                cooldown = "[green]ready[/]"
            name = descriptor.name + (" [yellow]★[/]" if reference.is_ultimate else "")
            table.add_row(
                str(i),
                name,
                descriptor.target_class.display_name,
                cooldown,
                descriptor.description,
            )
        return table

    def build_target_table(self, targets: list[Combatant]) -> Table:
        """Builds the table listing valid targets.

        Args:
            targets (list[Combatant]): The valid targets, in roster order.

        Returns:
            Table: One row per target, numbered from 1.

        """
        table = Table(title="Targets", pad_edge=False)
        table.add_column("#", style="cyan", no_wrap=True)
        table.add_column("Name", style="bold")
        table.add_column("HP", justify="right")
        table.add_column("Shield", justify="right")
        for i, target in enumerate(targets, 1):
            table.add_row(
                str(i),
                target.colored_name,
                f"{target.current_hp:>4}/{target.max_hp:<4}",
                str(target.shield),
            )
        return table

    def choose_ability(self, battle: Battle, unit: Combatant) -> int | str:
        """Asks the player for the ability to use.

        Args:
            battle (Battle): The running battle.
            unit (Combatant): The unit whose turn is pending.

        Returns:
            int | str: The ability slot, or "auto" to hand the party to the AI.

        """
        table = self.build_ability_table(battle, unit)
        table.add_row()
        table.add_row("a", AUTO_ENTRY, "", "", "Let the AI play the rest of the battle.")
        prompt = "\n" + ccapture(table) + "\nAbility > "
        while True:
            answer = self.session.prompt(ANSI(prompt))
            if not answer:
                continue
            index = self.get_digit_choice(answer) - 1
            if 0 <= index < len(unit.abilities):
                descriptor = battle.catalog.get(unit.abilities[index].ability_id)
                if descriptor is not None and descriptor.is_aura:
                    cprint("[red]Passive abilities cannot be used.[/]")
                elif unit.can_use_ability(index):
                    return index
                else:
                    cprint("[red]That ability is not ready.[/]")
                continue
            if self.get_alpha_choice(answer) == 0:
                return "auto"

    def choose_target(self, targets: list[Combatant], exit_entry: str | None = "Back") -> Combatant | str | None:
        """Asks the player for a target.

        Args:
            targets (list[Combatant]): The valid targets.
            exit_entry (str | None): Text for the exit option. Defaults to "Back".

        Returns:
            Combatant | str | None: The selected target, "q" for exit, or None
            if there are no targets.

        """
        if not targets:
            return None
        table = self.build_target_table(targets)
        if exit_entry:
            table.add_row()
            table.add_row("q", exit_entry, "", "")
        prompt = "\n" + ccapture(table) + "\nTarget > "
        while True:
            answer = self.session.prompt(ANSI(prompt))
            if not answer:
                continue
            index = self.get_digit_choice(answer) - 1
            if 0 <= index < len(targets):
                return targets[index]
            if exit_entry and answer.lower() == "q":
                return "q"

    def play_turn(self, battle: Battle) -> None:
        """Reads a full action for the pending unit and submits it.

        Args:
            battle (Battle): A battle waiting for the player.

        """
        unit = battle.pending_unit
        assert unit is not None
        while battle.is_waiting():
            choice = self.choose_ability(battle, unit)
            if choice == "auto":
                battle.set_automated_mode(True)
                return
            assert isinstance(choice, int)
            descriptor = battle.catalog.get(unit.abilities[choice].ability_id)
            if descriptor is None or descriptor.target_class.is_area:
                battle.submit_player_action(choice, AREA_TARGET if descriptor else None)
                return
            if descriptor.target_class is TargetClass.SELF:
                battle.submit_player_action(choice, None)
                return
            targets = battle.valid_targets(choice)
            target = self.choose_target(targets)
            if isinstance(target, Combatant):
                battle.submit_player_action(choice, TargetRef(side=target.side, slot=target.slot))
                return
            if target is None:
                cprint("[red]No valid targets for that ability.[/]")

    def display_status(self, battle: Battle) -> None:
        """Prints a status line for every combatant."""
        for unit in battle.roster:
            cprint(unit.get_status_line())

    @staticmethod
    def get_digit_choice(answer: str) -> int:
        """
        Convert a numeric string input to its integer value.

        Args:
            answer (str): User input string to parse.

        Returns:
            int: The integer value, or -1 if invalid input.

        """
        if isinstance(answer, str) and answer.strip().isdigit():
            return int(answer.strip())
        return -1

    @staticmethod
    def get_alpha_choice(answer: Any) -> int:
        """
        Convert a single alphabetic character to its index position.

        Maps 'a' or 'A' to 0, 'b' or 'B' to 1, etc. Case-insensitive.

        Args:
            answer (Any): User input to parse.

        Returns:
            int: The index position (0-25 for a-z), or -1 if invalid input.

        """
        if isinstance(answer, str) and len(answer) == 1 and answer.isalpha():
            return ord(answer.lower()) - ord("a")
        return -1
