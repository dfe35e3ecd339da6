"""Round resolver - turns one attack into hit/miss, damage and wounds."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import FailureReason, Outcome
from ..models.enums import DefenseChoice, WoundLevel
from ..models.wounds import classify_damage
from ..rules.hit_location import determine_location
from ..rules.ranged import calculate_ranged_modifier
from .types import ActionGate, CombatResult, Modifiers, ModifierSources, RoundPhase, aggregate

if TYPE_CHECKING:
    from ..models.character import Combatant
    from ..rules.hit_location import AttackDirection, HitLocation, LocationalDamage, LocationWoundResult
    from ..rules.ranged import RangedAttackState, RangedShot
    from .dice import DieRoller
    from .logging import CombatLogger


def raw_damage(
    attack_roll: int,
    defense_roll: int,
    strength_bonus: int,
    weapon_damage: int,
    protection: int,
    damage_modifier: int = 0,
) -> int:
    """Damage of a hit before classification, never below zero."""
    return max(0, attack_roll - defense_roll + strength_bonus + weapon_damage + damage_modifier - protection)


class CombatResolver:
    """Resolves single attacker/defender exchanges.

    The only side effects are on the defender's wound trackers and on the
    optional state objects passed in (stance, ranged state). Every phase
    change is written to the combat logger when one is attached.
    """

    def __init__(self, die: DieRoller, logger: CombatLogger | None = None) -> None:
        self.die = die
        self.logger = logger

    def resolve(
        self,
        attacker: Combatant,
        defender: Combatant,
        defense_choice: DefenseChoice,
        modifier_sources: ModifierSources | None = None,
        direction: AttackDirection | None = None,
        locations: LocationalDamage | None = None,
        round_number: int = 0,
    ) -> CombatResult:
        """Resolve a melee attack.

        Args:
            attacker: Combatant making the attack
            defender: Combatant defending
            defense_choice: PARRY (weapon skill) or DODGE (dodge skill)
            modifier_sources: Optional sources active for each side
            direction: When given, a location is rolled for a hit
            locations: Defender's per-location tracker to wound

        Returns:
            CombatResult describing the exchange
        """
        sources = modifier_sources or ModifierSources()

        gate = self._check_gates(attacker, sources.attacker)
        if not gate:
            return self._blocked(attacker, defender, gate, round_number)
        self._commit_gates(sources.attacker)

        attacker_mods = aggregate([*attacker.intrinsic_sources(), *sources.attacker])
        defender_mods = aggregate([*defender.intrinsic_sources(), *sources.defender])

        attack_die = self.die.roll()
        attack_roll = attacker.weapon_skill + attack_die + attacker_mods.attack
        self._log_roll(round_number, attacker, "attack", attack_die, attack_roll, RoundPhase.ATTACK_ROLLED)

        defense_roll = self._defense_roll(defender, defense_choice, defender_mods, round_number)

        if attack_roll <= defense_roll:
            return self._miss(attacker, defender, attack_roll, defense_roll, round_number)

        damage = raw_damage(
            attack_roll,
            defense_roll,
            attacker.strength_bonus,
            attacker.weapon.damage,
            defender.armor.protection,
            attacker_mods.damage,
        )
        return self._apply_hit(
            attacker,
            defender,
            damage,
            attack_roll,
            defense_roll,
            direction,
            locations,
            round_number,
        )

    def resolve_ranged(
        self,
        attacker: Combatant,
        defender: Combatant,
        state: RangedAttackState,
        shot: RangedShot,
        current_round: int,
        ranged_skill: int,
        modifier_sources: ModifierSources | None = None,
        direction: AttackDirection | None = None,
        locations: LocationalDamage | None = None,
    ) -> CombatResult:
        """Resolve a shot against a dodging defender.

        The weapon in `state` is fired first; preparation and rate-of-fire
        failures come back as blocked results. Beyond maximum range the shot
        misses without a roll.
        """
        sources = modifier_sources or ModifierSources()

        gate = self._check_gates(attacker, sources.attacker)
        if not gate:
            return self._blocked(attacker, defender, gate, current_round)

        ranged = calculate_ranged_modifier(state, shot)
        fired = state.fire(current_round)
        if not fired:
            return self._blocked(attacker, defender, fired, current_round)
        self._commit_gates(sources.attacker)

        if self.logger:
            self.logger.log_shot_fired(current_round, attacker.name, defender.name, state.weapon.name, shot.distance)

        if ranged.automatic_miss:
            return self._miss(attacker, defender, 0, 0, current_round, reason="out of range")

        attacker_mods = aggregate([*attacker.intrinsic_sources(), *sources.attacker])
        defender_mods = aggregate([*defender.intrinsic_sources(), *sources.defender])

        attack_die = self.die.roll()
        attack_roll = ranged_skill + attack_die + ranged.total + attacker_mods.attack
        self._log_roll(current_round, attacker, "ranged attack", attack_die, attack_roll, RoundPhase.ATTACK_ROLLED)

        defense_roll = self._defense_roll(defender, DefenseChoice.DODGE, defender_mods, current_round)

        if attack_roll <= defense_roll:
            return self._miss(attacker, defender, attack_roll, defense_roll, current_round)

        damage = raw_damage(
            attack_roll,
            defense_roll,
            0,
            state.weapon.damage,
            defender.armor.protection,
            attacker_mods.damage,
        )
        return self._apply_hit(
            attacker,
            defender,
            damage,
            attack_roll,
            defense_roll,
            direction,
            locations,
            current_round,
        )

    def _check_gates(self, attacker: Combatant, sources: list[object]) -> Outcome:
        if not attacker.can_act:
            state = "dead" if not attacker.is_alive else "incapacitated"
            return Outcome.fail(FailureReason.ACTION_NOT_ALLOWED, f"{attacker.name} is {state}")
        for source in sources:
            if isinstance(source, ActionGate):
                outcome = source.check_attack(attacker, self.die)
                if not outcome:
                    return outcome
        return Outcome.ok()

    @staticmethod
    def _commit_gates(sources: list[object]) -> None:
        for source in sources:
            if isinstance(source, ActionGate):
                source.commit_attack()

    def _defense_roll(
        self,
        defender: Combatant,
        choice: DefenseChoice,
        mods: Modifiers,
        round_number: int,
    ) -> int:
        skill = defender.weapon_skill if choice == DefenseChoice.PARRY else defender.dodge_skill
        defense_die = self.die.roll()
        defense_roll = skill + defense_die + mods.defense
        self._log_roll(round_number, defender, choice.value, defense_die, defense_roll, RoundPhase.DEFENSE_ROLLED)
        return defense_roll

    def _apply_hit(
        self,
        attacker: Combatant,
        defender: Combatant,
        damage: int,
        attack_roll: int,
        defense_roll: int,
        direction: AttackDirection | None,
        locations: LocationalDamage | None,
        round_number: int,
    ) -> CombatResult:
        self._log_phase(round_number, attacker, RoundPhase.DAMAGE_COMPUTED)

        hit_location: HitLocation | None = None
        location_wound: LocationWoundResult | None = None
        if direction is not None:
            hit_location = determine_location(direction, self.die.roll())
            if locations is not None:
                location_wound = locations.apply_damage(hit_location, damage)
                if self.logger:
                    self.logger.log_location_wound(round_number, defender.name, location_wound)

        level = classify_damage(damage, defender.attributes.constitution)
        where = f" in the {hit_location.value.replace('_', ' ')}" if hit_location else ""

        if level is None:
            if self.logger:
                self.logger.log_graze(round_number, attacker.name, defender.name)
            self._log_phase(round_number, attacker, RoundPhase.WOUND_APPLIED)
            return CombatResult(
                attacker=attacker.name,
                defender=defender.name,
                hit=True,
                damage=0,
                wound_level=None,
                narrative=f"{attacker.name} grazes {defender.name}{where}, but the armor holds.",
                attack_roll=attack_roll,
                defense_roll=defense_roll,
                hit_location=hit_location,
                location_wound=location_wound,
                phase=RoundPhase.WOUND_APPLIED,
            )

        before = self.logger.snapshot_state(defender) if self.logger else None
        update = defender.wounds.add(level)
        if self.logger:
            self.logger.log_hit(round_number, attacker.name, defender.name, damage)
            self.logger.log_wound(round_number, defender, level, damage, before)

        phase = RoundPhase.DEAD if update.became_dead else RoundPhase.WOUND_APPLIED
        self._log_phase(round_number, attacker, phase)
        if update.became_dead and self.logger:
            self.logger.log_death(round_number, defender.name)

        return CombatResult(
            attacker=attacker.name,
            defender=defender.name,
            hit=True,
            damage=damage,
            wound_level=level,
            narrative=self._hit_narrative(attacker, defender, damage, level, where, update.became_dead),
            attack_roll=attack_roll,
            defense_roll=defense_roll,
            defender_died=update.became_dead,
            hit_location=hit_location,
            location_wound=location_wound,
            phase=phase,
        )

    @staticmethod
    def _hit_narrative(
        attacker: Combatant,
        defender: Combatant,
        damage: int,
        level: WoundLevel,
        where: str,
        died: bool,
    ) -> str:
        text = f"{attacker.name} hits {defender.name}{where} for {damage} damage: {level.value} wound."
        if died:
            text += f" {defender.name} falls dead."
        return text

    def _miss(
        self,
        attacker: Combatant,
        defender: Combatant,
        attack_roll: int,
        defense_roll: int,
        round_number: int,
        reason: str | None = None,
    ) -> CombatResult:
        if self.logger:
            self.logger.log_miss(round_number, attacker.name, defender.name)
        self._log_phase(round_number, attacker, RoundPhase.MISS)
        detail = reason or f"{attack_roll} vs {defense_roll}"
        return CombatResult(
            attacker=attacker.name,
            defender=defender.name,
            hit=False,
            damage=0,
            wound_level=None,
            narrative=f"{attacker.name} misses {defender.name} ({detail}).",
            attack_roll=attack_roll,
            defense_roll=defense_roll,
            phase=RoundPhase.MISS,
        )

    def _blocked(
        self,
        attacker: Combatant,
        defender: Combatant,
        outcome: Outcome,
        round_number: int,
    ) -> CombatResult:
        reason = outcome.reason or FailureReason.ACTION_NOT_ALLOWED
        if self.logger:
            self.logger.log_action_blocked(round_number, attacker.name, reason, outcome.message)
        self._log_phase(round_number, attacker, RoundPhase.BLOCKED)
        return CombatResult(
            attacker=attacker.name,
            defender=defender.name,
            hit=False,
            damage=0,
            wound_level=None,
            narrative=f"{attacker.name} does not attack: {outcome.message}",
            blocked_by=reason,
            phase=RoundPhase.BLOCKED,
        )

    def _log_roll(
        self,
        round_number: int,
        combatant: Combatant,
        roll_type: str,
        die: int,
        total: int,
        phase: RoundPhase,
    ) -> None:
        if self.logger:
            self.logger.log_roll(round_number, combatant.name, roll_type, die, total)
        self._log_phase(round_number, combatant, phase)

    def _log_phase(self, round_number: int, combatant: Combatant, phase: RoundPhase) -> None:
        if self.logger:
            self.logger.log_phase_change(round_number, combatant.name, phase)
