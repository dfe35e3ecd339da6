"""Combat maneuvers and the stance that holds the current one."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from ..errors import FailureReason, Outcome

if TYPE_CHECKING:
    from ..engine.dice import DieRoller
    from ..models.character import Combatant


class Maneuver(str, Enum):
    """Mutually exclusive combat maneuvers."""

    NORMAL = "normal"
    DEFENSIVE_POSITION = "defensive_position"
    CHARGE = "charge"
    ALL_OUT_ATTACK = "all_out_attack"
    AIMED_ATTACK = "aimed_attack"

    @property
    def modifiers(self) -> tuple[int, int, int]:
        """(attack, defense, damage)"""
        return _MANEUVER_MODIFIERS[self]

    @property
    def allows_attack(self) -> bool:
        return self != Maneuver.DEFENSIVE_POSITION


_MANEUVER_MODIFIERS = {
    Maneuver.NORMAL: (0, 0, 0),
    Maneuver.DEFENSIVE_POSITION: (0, 2, 0),
    Maneuver.CHARGE: (1, -2, 1),
    Maneuver.ALL_OUT_ATTACK: (2, -4, 0),
    Maneuver.AIMED_ATTACK: (-2, 0, 2),
}


class Stance:
    """The maneuver a combatant currently fights with.

    A charge needs a run-up: selecting CHARGE without one only marks it as
    pending, and the charge modifiers apply from the round after. Once
    delivered, the charge has to be built up again.
    """

    def __init__(self) -> None:
        self.maneuver = Maneuver.NORMAL
        self.aiming = False
        self.run_up = False
        self.charge_pending = False
        self.charging = False
        self._charge_delivered = False

    def select(self, maneuver: Maneuver) -> Outcome:
        if maneuver == Maneuver.AIMED_ATTACK:
            if not self.aiming:
                return Outcome.fail(FailureReason.NOT_PREPARED, "Aimed attack requires taking aim first")
            self.aiming = False

        if maneuver == Maneuver.CHARGE:
            if self.maneuver != Maneuver.CHARGE:
                self.charging = self.run_up
                self.charge_pending = not self.run_up
                self.run_up = False
        else:
            self.charging = False
            self.charge_pending = False
            self._charge_delivered = False

        self.maneuver = maneuver
        return Outcome.ok(f"Maneuver set to {maneuver.value}")

    def take_aim(self) -> Outcome:
        self.aiming = True
        return Outcome.ok("Taking aim")

    def begin_charge(self) -> Outcome:
        """Record a run-up so a following CHARGE gets its bonus at once."""
        self.run_up = True
        return Outcome.ok("Building up a charge")

    def end_round(self) -> None:
        if self.maneuver != Maneuver.CHARGE:
            return
        if self._charge_delivered:
            self.charging = False
            self.charge_pending = True
            self._charge_delivered = False
        elif self.charge_pending:
            self.charge_pending = False
            self.charging = True

    def can_attack(self) -> Outcome:
        if not self.maneuver.allows_attack:
            return Outcome.fail(FailureReason.ACTION_NOT_ALLOWED, "Cannot attack from a defensive position")
        return Outcome.ok()

    def declare_attack(self) -> Outcome:
        """Check and commit in one step."""
        outcome = self.can_attack()
        if outcome:
            self.commit_attack()
        return outcome

    @property
    def _active(self) -> tuple[int, int, int]:
        if self.maneuver == Maneuver.CHARGE and not self.charging:
            return Maneuver.NORMAL.modifiers
        return self.maneuver.modifiers

    def attack_modifier(self) -> int:
        return self._active[0]

    def defense_modifier(self) -> int:
        return self._active[1]

    def damage_modifier(self) -> int:
        return self._active[2]

    def check_attack(self, combatant: Combatant, die: DieRoller) -> Outcome:
        outcome = self.can_attack()
        if not outcome:
            return Outcome.fail(outcome.reason, f"{combatant.name}: {outcome.message}")
        return outcome

    def commit_attack(self) -> None:
        if self.charging:
            self._charge_delivered = True
