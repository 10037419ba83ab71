"""
Battle module for the combat engine.

Runs a multi-wave encounter: the action meter scheduler grants turns, the
turn processor walks each turn through upkeep, damage over time, stun, the
player or AI decision and ability dispatch, and the encounter state machine
moves between waves until victory or defeat.
"""

from __future__ import annotations

from collections.abc import Sequence

from catchery import log_debug, log_error, log_info
from pydantic import BaseModel, ConfigDict, Field

from wavecombat.abilities import ROUTINES, AbilityCatalog, RoutineRegistry, default_catalog
from wavecombat.abilities.descriptor import AbilityDescriptor
from wavecombat.core.config import BattleSettings
from wavecombat.core.constants import (
    AREA_TARGET,
    EncounterState,
    Side,
    TargetClass,
    TurnPhase,
)
from wavecombat.core.errors import (
    BattleError,
    InvalidActionError,
    InvalidTargetError,
    NotWaitingError,
)
from wavecombat.core.rng import RNG
from wavecombat.units.combatant import Combatant, CombatantSnapshot
from wavecombat.units.unit_definition import UnitDefinition

from .battle_log import BattleLog
from .npc_ai import choose_action
from .resolution import ResolutionEngine
from .scheduler import Scheduler

Target = Combatant | str | None


class TargetRef(BaseModel):
    """Addresses a combatant by roster and slot."""

    model_config = ConfigDict(frozen=True)

    side: Side
    slot: int = Field(ge=0)


class BattleResult(BaseModel):
    """The outcome of a finished encounter."""

    model_config = ConfigDict(frozen=True)

    victory: bool = Field(
        description="Whether every wave was defeated.",
    )
    survivor_exp_grants: dict[str, int] = Field(
        default_factory=dict,
        description="Experience granted during the battle to each surviving ally.",
    )
    duration_ticks: int = Field(
        description="Scheduler ticks spent in the battle.",
    )
    waves_cleared: int = Field(
        default=0,
        description="Number of waves defeated.",
    )


class Battle:
    """Manages the flow of an encounter, including turn order, actions and waves.

    The battle is driven by `step`, which runs one scheduler tick and, when a
    turn is granted, the whole turn. A turn owned by the player halts in
    PLAYER_WAIT until `submit_player_action` or `set_automated_mode(True)` is
    called; while halted no tick runs and no end check is made.
    """

    def __init__(
        self,
        catalog: AbilityCatalog | None = None,
        routines: RoutineRegistry | None = None,
        settings: BattleSettings | None = None,
        rng: RNG | None = None,
    ) -> None:
        """Initialize the battle with its collaborators.

        Args:
            catalog (AbilityCatalog | None): Ability descriptors. Defaults to the built-ins.
            routines (RoutineRegistry | None): Routine registry. Defaults to the built-ins.
            settings (BattleSettings | None): Encounter policies. Defaults to BattleSettings().
            rng (RNG | None): Random source. Defaults to an unseeded RNG.

        """
        self.catalog: AbilityCatalog = catalog if catalog is not None else default_catalog()
        self.routines: RoutineRegistry = routines if routines is not None else ROUTINES
        self.settings: BattleSettings = settings if settings is not None else BattleSettings()
        self.rng: RNG = rng if rng is not None else RNG()

        self.battle_log = BattleLog()
        self.engine = ResolutionEngine(self.settings, self.rng, self.battle_log)
        self.scheduler = Scheduler()

        self.party: list[Combatant] = []
        self.enemies: list[Combatant] = []
        self.waves: list[list[UnitDefinition]] = []
        self.current_wave: int = 0
        self.waves_cleared: int = 0

        self.state: EncounterState = EncounterState.PENDING
        self.phase: TurnPhase = TurnPhase.SCHEDULING
        self.automated: bool = self.settings.automated
        self.transition_lock: bool = False
        self.transition_remaining: int = 0

        self.current_unit: Combatant | None = None
        self.pending_unit: Combatant | None = None
        self.turn: int = 0

        self._exp_grants: dict[int, int] = {}
        self._result: BattleResult | None = None

    # ============================================================================
    # ROSTERS
    # ============================================================================

    @property
    def roster(self) -> list[Combatant]:
        """All combatants in roster order: the party, then the enemies, by slot."""
        return self.party + self.enemies

    def log(self, message: str) -> None:
        self.battle_log.append(message)

    def get_side(self, side: Side) -> list[Combatant]:
        return self.party if side is Side.ALLY else self.enemies

    def get_party(self, unit: Combatant) -> list[Combatant]:
        """Returns the full roster the unit fights for."""
        return self.get_side(unit.side)

    def get_opponents(self, unit: Combatant) -> list[Combatant]:
        """Returns the full roster the unit fights against."""
        return self.get_side(unit.side.opposite)

    def get_alive_participants(self) -> list[Combatant]:
        """Returns every combatant still alive.

        Returns:
            list[Combatant]: The living combatants, in roster order.

        """
        return [unit for unit in self.roster if unit.is_alive()]

    def get_alive_opponents(self, actor: Combatant) -> list[Combatant]:
        """Returns a list of opponents for the actor, who are still alive.

        Args:
            actor (Combatant): The combatant for whom to find opponents.

        Returns:
            list[Combatant]: A list of alive opponents.

        """
        return [unit for unit in self.get_opponents(actor) if unit.is_alive()]

    def get_alive_friendlies(self, actor: Combatant) -> list[Combatant]:
        """Returns a list of friendly combatants for the actor, who are still alive.

        Args:
            actor (Combatant): The combatant for whom to find friendlies.

        Returns:
            list[Combatant]: A list of alive friendly combatants, actor included.

        """
        return [unit for unit in self.get_party(actor) if unit.is_alive()]

    def get_dead_friendlies(self, actor: Combatant) -> list[Combatant]:
        return [unit for unit in self.get_party(actor) if not unit.is_alive()]

    def find(self, ref: TargetRef) -> Combatant | None:
        """Looks a combatant up by side and slot."""
        units = self.get_side(ref.side)
        for unit in units:
            if unit.slot == ref.slot:
                return unit
        return None

    def snapshot(self) -> list[CombatantSnapshot]:
        """Returns a frozen copy of every combatant, in roster order."""
        return [unit.snapshot() for unit in self.roster]

    # ============================================================================
    # CONTROL SURFACE
    # ============================================================================

    def start(
        self,
        party_defs: Sequence[UnitDefinition],
        wave_defs: Sequence[Sequence[UnitDefinition]],
    ) -> None:
        """Builds the rosters, loads the first wave and applies every aura.

        Args:
            party_defs (Sequence[UnitDefinition]): The player's party.
            wave_defs (Sequence[Sequence[UnitDefinition]]): The enemy waves, in order.

        Raises:
            BattleError: If the battle was already started or a roster is empty.

        """
        if self.state is not EncounterState.PENDING:
            raise BattleError("The battle has already been started.")
        if not party_defs:
            raise BattleError("The party must have at least one unit.")
        if not wave_defs or any(not wave for wave in wave_defs):
            raise BattleError("Every wave must have at least one unit.")

        self.party = [self._make_combatant(d, Side.ALLY, i) for i, d in enumerate(party_defs)]
        self.waves = [list(wave) for wave in wave_defs]
        self._exp_grants = {unit.slot: 0 for unit in self.party}

        self.log("Battle started!")
        self.log(f"Your party: {', '.join(unit.name for unit in self.party)}")
        log_info(
            "Battle started.",
            {"party": len(self.party), "waves": len(self.waves)},
        )
        self._load_wave(0)

    def step(self) -> None:
        """Runs one iteration of the battle loop.

        Does nothing once the battle is over or while waiting for the player.
        While the next wave is loading, the iteration only advances the load.
        Otherwise the end conditions are checked, the scheduler ticks, and a
        granted turn is processed to completion or to PLAYER_WAIT.
        """
        if self.state is EncounterState.PENDING:
            raise BattleError("The battle has not been started.")
        if self.state.is_terminal or self.is_waiting():
            return
        if self.state is EncounterState.NEXT_WAVE_LOADING:
            self._advance_wave_transition()
            return
        if self.check_encounter():
            return
        if self.state is not EncounterState.WAVE_ACTIVE:
            return
        self.phase = TurnPhase.SCHEDULING
        actor = self.scheduler.tick(self.roster)
        if actor is not None:
            self._begin_turn(actor)

    def run(self, max_ticks: int = 100000) -> BattleResult | None:
        """Steps the battle until it ends, waits for the player, or runs out of ticks.

        Args:
            max_ticks (int): Scheduler ticks allowed in this call.

        Returns:
            BattleResult | None: The result if the battle is over, None otherwise.

        """
        start = self.scheduler.ticks
        while not self.is_over() and not self.is_waiting():
            if self.scheduler.ticks - start >= max_ticks:
                log_debug("Battle run stopped at the tick limit.", {"ticks": max_ticks})
                break
            self.step()
        return self._result

    def is_waiting(self) -> bool:
        return self.phase is TurnPhase.PLAYER_WAIT and self.pending_unit is not None

    def is_over(self) -> bool:
        return self.state.is_terminal

    def set_automated_mode(self, enabled: bool) -> None:
        """Hands the party to the AI, or back to the player.

        Enabling automation while a player turn is pending resolves that turn
        through the AI immediately.
        """
        self.automated = enabled
        if enabled and self.is_waiting():
            unit = self.pending_unit
            assert unit is not None
            self.pending_unit = None
            self._run_ai_turn(unit)

    def valid_targets(self, ability_index: int) -> list[Combatant]:
        """Lists the combatants the pending unit may aim an ability at.

        Args:
            ability_index (int): The ability slot.

        Returns:
            list[Combatant]: The valid targets; area abilities list everyone they hit.

        Raises:
            NotWaitingError: If no player turn is pending.
            InvalidActionError: If the slot is empty or its ability is unknown.

        """
        unit = self._require_pending()
        descriptor = self._require_descriptor(unit, ability_index)
        return self._targets_for(unit, descriptor.target_class)

    def submit_player_action(
        self,
        ability_index: int,
        target_ref: TargetRef | str | None = None,
    ) -> None:
        """Resolves the pending player turn with the chosen ability and target.

        Args:
            ability_index (int): The ability slot to use.
            target_ref (TargetRef | str | None): The target; "all" or None for
                area and self abilities.

        Raises:
            NotWaitingError: If no player turn is pending.
            InvalidActionError: If the ability cannot be used now.
            InvalidTargetError: If the target is not valid for the ability.

        """
        unit = self._require_pending()
        if not unit.can_use_ability(ability_index):
            raise InvalidActionError(
                f"{unit.name} cannot use ability slot {ability_index} now."
            )
        descriptor = self.catalog.get(unit.abilities[ability_index].ability_id)
        target: Target = None
        if descriptor is not None:
            if descriptor.is_aura:
                raise InvalidActionError(f"{descriptor.name} is passive and cannot be used.")
            target = self._resolve_target(unit, descriptor, target_ref)

        self.pending_unit = None
        self.phase = TurnPhase.ABILITY_DISPATCH
        self.execute_ability(unit, ability_index, target)
        self._end_turn(unit)

    def get_result(self) -> BattleResult:
        """Returns the outcome of the finished battle.

        Raises:
            BattleError: If the battle is not over.

        """
        if self._result is None:
            raise BattleError("The battle is not over yet.")
        return self._result

    # ============================================================================
    # ENCOUNTER STATE MACHINE
    # ============================================================================

    def check_encounter(self) -> bool:
        """Checks the end conditions and starts wave transitions.

        Returns:
            bool: True if the battle has ended.

        """
        if self.state.is_terminal:
            return True
        if self.is_waiting():
            return False
        if not any(unit.is_alive() for unit in self.party):
            self.log("Defeat! Your party has been wiped out!")
            self._finish(False)
            return True
        if any(unit.is_alive() for unit in self.enemies):
            return False
        # Only the first check after a wave falls acts on it.
        if self.transition_lock:
            return False
        self.transition_lock = True
        self.state = EncounterState.WAVE_CLEARED
        self.waves_cleared += 1
        self._grant_wave_experience()

        if self.current_wave < len(self.waves) - 1:
            self.log("Wave cleared!")
            self.state = EncounterState.NEXT_WAVE_LOADING
            self.transition_remaining = self.settings.wave_transition_ticks
            if self.transition_remaining == 0:
                self._advance_wave_transition()
            return False

        self.log("Victory! All waves defeated!")
        self._finish(True)
        return True

    def _advance_wave_transition(self) -> None:
        if self.transition_remaining > 0:
            self.transition_remaining -= 1
        if self.transition_remaining == 0:
            self._load_wave(self.current_wave + 1)

    def _load_wave(self, index: int) -> None:
        """Replaces the enemy roster with the given wave and reapplies auras."""
        self.current_wave = index
        self.enemies = [
            self._make_combatant(definition, Side.ENEMY, slot)
            for slot, definition in enumerate(self.waves[index])
        ]
        if index > 0 and self.settings.full_heal_between_waves:
            for unit in self.party:
                self.engine.full_heal(unit)

        self.log(f"Wave {index + 1} begins!")
        self.log(f"Enemies: {', '.join(unit.name for unit in self.enemies)}")
        self._apply_auras()

        self.transition_lock = False
        self.transition_remaining = 0
        self.state = EncounterState.WAVE_ACTIVE
        self.phase = TurnPhase.SCHEDULING

    def _apply_auras(self) -> None:
        """Resolves every aura of every living unit, then rebuilds all derived stats."""
        for unit in self.get_alive_participants():
            for reference in unit.abilities:
                descriptor = self.catalog.get(reference.ability_id)
                if descriptor is None or not descriptor.is_aura:
                    continue
                self._dispatch(unit, descriptor, None)
        for unit in self.roster:
            unit.recompute()

    def _grant_wave_experience(self) -> None:
        if not self.settings.grant_wave_experience:
            return
        wave_exp = self.settings.exp_per_enemy_level * sum(
            definition.level for definition in self.waves[self.current_wave]
        )
        for unit in self.party:
            if unit.is_alive() and wave_exp > 0:
                self._grant(unit, wave_exp)
                self.log(f"{unit.name} earned {wave_exp} exp from wave {self.current_wave + 1}")

    def _grant(self, unit: Combatant, amount: int) -> None:
        unit.definition.grant_experience(amount)
        self._exp_grants[unit.slot] = self._exp_grants.get(unit.slot, 0) + amount

    def _finish(self, victory: bool) -> None:
        self.state = EncounterState.VICTORY if victory else EncounterState.DEFEAT
        self.phase = TurnPhase.TURN_END
        self.current_unit = None
        self.pending_unit = None
        survivors = [unit for unit in self.party if unit.is_alive()]
        if victory and self.settings.victory_bonus_exp > 0:
            for unit in survivors:
                self._grant(unit, self.settings.victory_bonus_exp)
        self._result = BattleResult(
            victory=victory,
            survivor_exp_grants={unit.name: self._exp_grants.get(unit.slot, 0) for unit in survivors},
            duration_ticks=self.scheduler.ticks,
            waves_cleared=self.waves_cleared,
        )
        log_info(
            "Battle finished.",
            {"victory": victory, "ticks": self.scheduler.ticks, "turns": self.turn},
        )

    # ============================================================================
    # TURN PROCESSOR
    # ============================================================================

    def _begin_turn(self, actor: Combatant) -> None:
        self.phase = TurnPhase.SELECTED
        self.current_unit = actor
        self.turn += 1
        actor.turns_taken += 1
        self.log(f"{actor.name}'s turn! (Action: {int(actor.action_meter)})")

        self.phase = TurnPhase.EFFECT_UPKEEP
        actor.tick_effects()
        actor.recompute()

        self.phase = TurnPhase.DOT_RESOLVE
        self.engine.apply_dot(actor)

        self.phase = TurnPhase.DEATH_CHECK
        if not actor.is_alive():
            self._end_turn(actor)
            return

        self.phase = TurnPhase.STUN_CHECK
        if actor.is_stunned():
            self.log(f"{actor.name} is stunned!")
            self._end_turn(actor)
            return

        if actor.side is Side.ALLY and not self.automated:
            if not self._has_usable_ability(actor):
                self.log(f"{actor.name} has no abilities available!")
                self._end_turn(actor)
                return
            self.phase = TurnPhase.PLAYER_WAIT
            self.pending_unit = actor
            return

        self._run_ai_turn(actor)

    def _run_ai_turn(self, unit: Combatant) -> None:
        self.phase = TurnPhase.AI_DECISION
        selection = choose_action(self, unit)
        if selection is None:
            self.log(f"{unit.name} has no abilities available!")
        elif not selection.has_target:
            log_debug(
                f"{unit.name} has no valid target for {selection.descriptor.name}.",
                {"target_class": str(selection.descriptor.target_class)},
            )
        else:
            self.phase = TurnPhase.ABILITY_DISPATCH
            self.execute_ability(unit, selection.index, selection.target)
        self._end_turn(unit)

    def _end_turn(self, unit: Combatant) -> None:
        self.phase = TurnPhase.COOLDOWN_REGEN
        unit.reduce_cooldowns()
        self.engine.regenerate(unit)

        self.phase = TurnPhase.TURN_END
        self.current_unit = None
        self.pending_unit = None
        self.phase = TurnPhase.SCHEDULING

    # ============================================================================
    # ABILITY DISPATCH
    # ============================================================================

    def execute_ability(self, caster: Combatant, ability_index: int, target: Target) -> bool:
        """Uses an ability: starts its cooldown and runs its routine.

        Args:
            caster (Combatant): The unit using the ability.
            ability_index (int): The ability slot.
            target (Target): A combatant, the area sentinel, or None.

        Returns:
            bool: True if the routine ran to completion.

        """
        if not caster.can_use_ability(ability_index):
            return False
        reference = caster.abilities[ability_index]
        caster.start_cooldown(ability_index)
        descriptor = self.catalog.get(reference.ability_id)
        if descriptor is None:
            log_error(
                "Ability descriptor not found.",
                {"caster": caster.name, "ability_id": reference.ability_id},
            )
            return False
        return self._dispatch(caster, descriptor, target)

    def _dispatch(self, caster: Combatant, descriptor: AbilityDescriptor, target: Target) -> bool:
        """Runs a routine inside a failure boundary."""
        handler = self.routines.get(descriptor.routine_key)
        if handler is None:
            log_error(
                "Ability routine not registered.",
                {"ability_id": descriptor.ability_id, "routine_key": descriptor.routine_key},
            )
            self.log(f"{caster.name} failed to use {descriptor.name}!")
            return False
        try:
            handler(self, caster, target, descriptor)
        except Exception as e:
            log_error(
                f"Error executing {descriptor.name}.",
                {"caster": caster.name, "routine_key": descriptor.routine_key},
                e,
            )
            self.log(f"{caster.name} failed to use {descriptor.name}!")
            return False
        return True

    # ============================================================================
    # HELPERS
    # ============================================================================

    def _make_combatant(self, definition: UnitDefinition, side: Side, slot: int) -> Combatant:
        unit = Combatant(definition, side, slot, self.settings.base_crit_chance)
        limit = self.settings.ultimate_initial_cooldown_max
        if limit > 0:
            for index, reference in enumerate(definition.abilities):
                if reference.is_ultimate:
                    unit.cooldowns[index] = self.rng.randint(1, limit)
        return unit

    def _require_pending(self) -> Combatant:
        if not self.is_waiting():
            raise NotWaitingError("No player turn is pending.")
        assert self.pending_unit is not None
        return self.pending_unit

    def _has_usable_ability(self, unit: Combatant) -> bool:
        for index, reference in enumerate(unit.abilities):
            descriptor = self.catalog.get(reference.ability_id)
            if unit.can_use_ability(index) and descriptor is not None and not descriptor.is_aura:
                return True
        return False

    def _require_descriptor(self, unit: Combatant, ability_index: int) -> AbilityDescriptor:
        if ability_index < 0 or ability_index >= len(unit.abilities):
            raise InvalidActionError(f"{unit.name} has no ability in slot {ability_index}.")
        descriptor = self.catalog.get(unit.abilities[ability_index].ability_id)
        if descriptor is None:
            raise InvalidActionError(
                f"Ability '{unit.abilities[ability_index].ability_id}' is not in the catalog."
            )
        return descriptor

    def _targets_for(self, unit: Combatant, target_class: TargetClass) -> list[Combatant]:
        if target_class is TargetClass.SELF:
            return [unit]
        if target_class is TargetClass.ENEMY:
            return [t for t in self.get_alive_opponents(unit) if not t.is_untargetable()]
        if target_class is TargetClass.ALL_ENEMIES:
            return self.get_alive_opponents(unit)
        if target_class in (TargetClass.ALLY, TargetClass.ALL_ALLIES):
            return self.get_alive_friendlies(unit)
        if target_class is TargetClass.DEAD_ALLY:
            return self.get_dead_friendlies(unit)
        return []

    def _resolve_target(
        self,
        unit: Combatant,
        descriptor: AbilityDescriptor,
        target_ref: TargetRef | str | None,
    ) -> Target:
        target_class = descriptor.target_class
        if target_class.is_area:
            if target_ref not in (None, AREA_TARGET):
                raise InvalidTargetError(f"{descriptor.name} hits an entire roster.")
            return AREA_TARGET
        if target_class is TargetClass.SELF:
            if target_ref is None or target_ref == TargetRef(side=unit.side, slot=unit.slot):
                return unit
            raise InvalidTargetError(f"{descriptor.name} can only target its user.")
        if not isinstance(target_ref, TargetRef):
            raise InvalidTargetError(f"{descriptor.name} needs a single target.")
        target = self.find(target_ref)
        if target is None or target not in self._targets_for(unit, target_class):
            raise InvalidTargetError(
                f"{target_ref.side} slot {target_ref.slot} is not a valid target "
                f"for {descriptor.name}."
            )
        return target
