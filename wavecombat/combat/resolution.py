"""
Resolution engine for the combat engine.

Applies damage, healing, shields, buffs, debuffs, damage over time, death and
resurrection to combatants. Every operation is a no-op on a dead target and
clamps before returning, so no combatant is ever left out of bounds.
"""

import math
from typing import Any

from catchery import log_debug

from wavecombat.core.config import BattleSettings
from wavecombat.core.constants import DamageType
from wavecombat.core.rng import RNG
from wavecombat.effects.base_effect import Effect, make_effect, upsert_effect
from wavecombat.units.combatant import Combatant

from .battle_log import BattleLog


class ResolutionEngine:
    """
    Mutates combatants on behalf of ability routines and the turn processor.

    Args:
        settings (BattleSettings): The encounter policies.
        rng (RNG): The random source used for crits and avoidance.
        log (BattleLog): The log that receives player-facing messages.

    """

    def __init__(self, settings: BattleSettings, rng: RNG, log: BattleLog) -> None:
        self.settings = settings
        self.rng = rng
        self.log = log

    # ============================================================================
    # DAMAGE
    # ============================================================================

    def avoid_chance(self, attacker: Combatant, target: Combatant) -> float:
        """
        Chance that an attack from attacker to target misses.

        Args:
            attacker (Combatant): The attacking unit.
            target (Combatant): The unit being attacked.

        Returns:
            float: The combined miss, dodge and evasion chance, capped.

        """
        total = (
            attacker.derived.miss_chance
            + target.derived.dodge_chance
            + target.derived.evasion
        )
        if total <= 0:
            return 0.0
        if attacker.derived.accuracy > 0:
            total /= attacker.derived.accuracy
        return min(total, self.settings.max_avoid_chance)

    def compute_damage(
        self,
        attacker: Combatant,
        target: Combatant,
        base_amount: float,
        damage_type: DamageType = DamageType.PHYSICAL,
    ) -> int:
        """
        Runs the damage pipeline without touching the target.

        Args:
            attacker (Combatant): The attacking unit.
            target (Combatant): The unit being hit.
            base_amount (float): The raw damage of the ability.
            damage_type (DamageType): The damage type of the hit.

        Returns:
            int: The damage the hit would deal before shields and clamping.

        """
        if target.is_immune():
            return 0
        damage = float(math.floor(base_amount))
        damage *= attacker.derived.damage_multiplier
        if not damage_type.is_physical:
            damage *= attacker.derived.spell_power
        if self.rng.chance(attacker.derived.crit_chance):
            damage *= self.settings.crit_multiplier
            self.log.append(f"Critical hit on {target.name}!")
        if damage_type.is_physical:
            damage *= 1 - target.physical_reduction
        else:
            damage *= 1 - target.magic_reduction
        if target.derived.defense_multiplier > 0:
            damage /= target.derived.defense_multiplier
        for buff in target.buffs.values():
            if buff.payload.damage_reduction is not None:
                damage *= 1 - buff.payload.damage_reduction
        for debuff in target.debuffs.values():
            if debuff.payload.damage_taken_multiplier is not None:
                damage *= debuff.payload.damage_taken_multiplier
        # Round off float noise before flooring.
        return max(0, math.floor(round(damage, 6)))

    def deal_damage(
        self,
        attacker: Combatant,
        target: Combatant,
        base_amount: float,
        damage_type: DamageType = DamageType.PHYSICAL,
    ) -> int:
        """
        Deals damage from attacker to target.

        Args:
            attacker (Combatant): The attacking unit.
            target (Combatant): The unit being hit.
            base_amount (float): The raw damage of the ability.
            damage_type (DamageType): The damage type of the hit.

        Returns:
            int: The hit points actually removed from the target.

        """
        if not target.is_alive() or not attacker.is_alive():
            return 0
        if attacker is not target and self.rng.chance(self.avoid_chance(attacker, target)):
            self.log.append(f"{attacker.name}'s attack misses {target.name}!")
            return 0
        damage = self.compute_damage(attacker, target, base_amount, damage_type)
        actual = self._apply_hit(target, damage)
        log_debug(
            f"{attacker.name} deals {actual} {damage_type} damage to {target.name}.",
            {"base": base_amount, "computed": damage, "hp": target.current_hp},
        )
        reflect = target.derived.damage_reflect
        if reflect > 0 and actual > 0 and attacker is not target:
            self._reflect(target, attacker, reflect * actual, damage_type)
        self._check_death(target)
        return actual

    def _reflect(self, source: Combatant, attacker: Combatant, amount: float, damage_type: DamageType) -> None:
        """Sends part of a hit back to its attacker.

        The reflected hit runs through the same pipeline as any other hit, with
        the reflecting unit as its source, but it never misses and is never
        reflected again.
        """
        damage = self.compute_damage(source, attacker, amount, damage_type)
        reflected = self._apply_hit(attacker, damage)
        if reflected > 0:
            self.log.append(f"{source.name} reflects {reflected} damage to {attacker.name}!")
        self._check_death(attacker)

    def _apply_hit(self, target: Combatant, damage: int, blocked: bool = False) -> int:
        """Applies final damage through the shield pool, then to hit points."""
        if blocked or damage <= 0:
            return 0
        absorbed = min(target.shield, damage)
        target.shield -= absorbed
        actual = min(damage - absorbed, target.current_hp)
        target.current_hp -= actual
        return actual

    def _check_death(self, target: Combatant) -> None:
        if target.current_hp <= 0 and not target.is_dead:
            self.kill(target)

    def kill(self, target: Combatant) -> None:
        """Marks a combatant dead and drops its shield."""
        target.current_hp = 0
        target.shield = 0
        if not target.is_dead:
            target.is_dead = True
            self.log.append(f"{target.name} has been defeated!")

    def execute(self, caster: Combatant, target: Combatant) -> int:
        """
        Kills the target outright, unless it is immune.

        Returns:
            int: The hit points removed.

        """
        if not target.is_alive() or target.is_immune():
            return 0
        removed = target.current_hp
        self.kill(target)
        return removed

    # ============================================================================
    # HEALING
    # ============================================================================

    def heal_unit(
        self,
        target: Combatant,
        base_amount: float,
        caster: Combatant | None = None,
    ) -> int:
        """
        Heals the target, scaled by its healing received and the caster's spell power.

        Args:
            target (Combatant): The unit being healed.
            base_amount (float): The raw healing of the ability.
            caster (Combatant | None): The healer, if any.

        Returns:
            int: The hit points actually restored.

        """
        if not target.is_alive():
            return 0
        heal = float(math.floor(base_amount))
        heal *= target.derived.healing_received
        if caster is not None:
            heal *= caster.derived.spell_power
        heal = max(0, math.floor(round(heal, 6)))
        actual = min(heal, target.max_hp - target.current_hp)
        target.current_hp += actual
        return actual

    def full_heal(self, target: Combatant) -> int:
        if not target.is_alive():
            return 0
        restored = target.max_hp - target.current_hp
        target.current_hp = target.max_hp
        return restored

    def regenerate(self, unit: Combatant) -> int:
        """Applies end of turn regeneration proportional to strength."""
        if not unit.is_alive():
            return 0
        regen = math.floor(unit.stats.strength * self.settings.regen_str_ratio)
        actual = min(max(regen, 0), unit.max_hp - unit.current_hp)
        if actual > 0:
            unit.current_hp += actual
            self.log.append(f"{unit.name} regenerates {actual} HP.")
        return actual

    def apply_shield(self, target: Combatant, amount: float) -> int:
        """
        Adds temporary hit points to the target's shield pool.

        Returns:
            int: The shield added.

        """
        if not target.is_alive():
            return 0
        shield = max(0, math.floor(amount))
        target.shield += shield
        return shield

    def resurrect(self, target: Combatant, hp_fraction: float = 0.5) -> bool:
        """
        Brings a dead combatant back with a fraction of its hit points.

        Args:
            target (Combatant): The dead unit.
            hp_fraction (float): The fraction of max HP restored.

        Returns:
            bool: True if the target was resurrected.

        """
        if target.is_alive():
            return False
        target.is_dead = False
        target.current_hp = max(1, min(target.max_hp, math.floor(target.max_hp * hp_fraction)))
        target.debuffs.clear()
        return True

    # ============================================================================
    # EFFECTS
    # ============================================================================

    def apply_buff(self, target: Combatant, name: str, duration: int, **payload: Any) -> bool:
        """
        Applies or refreshes a named buff.

        Args:
            target (Combatant): The unit receiving the buff.
            name (str): The buff name.
            duration (int): Turns the buff lasts, or -1 for permanent.
            **payload: The buff's stat changes.

        Returns:
            bool: True if the buff was applied.

        """
        if not target.is_alive():
            return False
        upsert_effect(target.buffs, make_effect(name, duration, **payload))
        return True

    def apply_debuff(self, target: Combatant, name: str, duration: int, **payload: Any) -> bool:
        """
        Applies or refreshes a named debuff, unless the target resists it.

        Returns:
            bool: True if the debuff was applied.

        """
        if not target.is_alive():
            return False
        effect = make_effect(name, duration, **payload)
        if target.resists_debuffs():
            self.log.append(f"{target.name} resisted {effect.display_name}!")
            return False
        upsert_effect(target.debuffs, effect)
        return True

    def remove_buffs(self, target: Combatant) -> list[str]:
        """Purges every buff except the permanent ones."""
        removed = [name for name, buff in target.buffs.items() if not buff.is_permanent()]
        for name in removed:
            del target.buffs[name]
        return removed

    def remove_debuffs(self, target: Combatant) -> list[str]:
        """Cleanses every debuff."""
        removed = list(target.debuffs)
        target.debuffs.clear()
        return removed

    def apply_dot(self, target: Combatant) -> int:
        """
        Deals the combined damage over time of all the target's debuffs as one hit.

        Returns:
            int: The hit points removed.

        """
        if not target.is_alive():
            return 0
        sources: list[Effect] = [
            debuff for debuff in target.debuffs.values() if debuff.payload.dot_damage
        ]
        total = target.total_dot_damage()
        if total <= 0:
            return 0
        actual = self._apply_hit(target, total, target.is_immune())
        if actual > 0:
            names = ", ".join(debuff.display_name for debuff in sources)
            self.log.append(f"{target.name} takes {actual} damage from {names}!")
        self._check_death(target)
        return actual
