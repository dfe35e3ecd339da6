"""Physical exhaustion."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from ..errors import FailureReason, Outcome

if TYPE_CHECKING:
    from ..engine.dice import DieRoller
    from ..models.character import Combatant

WILLPOWER_TARGET = 10


class ExhaustionLevel(str, Enum):
    """Exhaustion bands."""

    NONE = "none"
    LIGHT = "light"
    SEVERE = "severe"
    CRITICAL = "critical"

    @property
    def penalty(self) -> int:
        return _LEVEL_PENALTIES[self]

    @property
    def status(self) -> str:
        return _LEVEL_STATUS[self]


_LEVEL_PENALTIES = {
    ExhaustionLevel.NONE: 0,
    ExhaustionLevel.LIGHT: -1,
    ExhaustionLevel.SEVERE: -2,
    ExhaustionLevel.CRITICAL: -4,
}

_LEVEL_STATUS = {
    ExhaustionLevel.NONE: "Fresh",
    ExhaustionLevel.LIGHT: "Tired",
    ExhaustionLevel.SEVERE: "Exhausted",
    ExhaustionLevel.CRITICAL: "Completely Drained",
}


def exhaustion_level(points: int, ceiling: int) -> ExhaustionLevel:
    """Band exhaustion points against a ceiling (stamina, or empathy for magic)."""
    if points >= ceiling * 3:
        return ExhaustionLevel.CRITICAL
    if points >= ceiling * 2:
        return ExhaustionLevel.SEVERE
    if points > ceiling:
        return ExhaustionLevel.LIGHT
    return ExhaustionLevel.NONE


class Exhaustion:
    """Fatigue of one combatant, banded against its stamina.

    From Severe upwards the combatant has to pass a willpower check before
    each attack.
    """

    def __init__(self, stamina: int, points: int = 0, rest_units_per_point: int = 2) -> None:
        if stamina < 1:
            raise ValueError(f"Stamina must be positive, got {stamina}")
        if points < 0:
            raise ValueError(f"Exhaustion points cannot be negative, got {points}")
        if rest_units_per_point < 1:
            raise ValueError(f"Rest rate must be positive, got {rest_units_per_point}")
        self.stamina = stamina
        self.points = points
        self.rest_units_per_point = rest_units_per_point

    def add_points(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Cannot add negative exhaustion, got {amount}")
        self.points += amount

    def rest(self, units: int) -> int:
        """Rest for some time units. Returns the points actually recovered."""
        if units < 0:
            raise ValueError(f"Cannot rest for negative time, got {units}")
        recovered = min(self.points, units // self.rest_units_per_point)
        self.points -= recovered
        return recovered

    @property
    def level(self) -> ExhaustionLevel:
        return exhaustion_level(self.points, self.stamina)

    @property
    def penalty(self) -> int:
        return self.level.penalty

    @property
    def status(self) -> str:
        return self.level.status

    @property
    def needs_willpower_check(self) -> bool:
        return self.level in (ExhaustionLevel.SEVERE, ExhaustionLevel.CRITICAL)

    @property
    def can_exert(self) -> bool:
        return self.level != ExhaustionLevel.CRITICAL

    def willpower_check(self, willpower: int, die: DieRoller) -> Outcome:
        """Roll willpower + d10 + exhaustion penalty against the target."""
        roll = die.roll()
        total = willpower + roll + self.penalty
        if total >= WILLPOWER_TARGET:
            return Outcome.ok(f"Willpower check passed ({total} vs {WILLPOWER_TARGET})")
        return Outcome.fail(
            FailureReason.WILLPOWER_CHECK_FAILED,
            f"Willpower check failed ({total} vs {WILLPOWER_TARGET})",
        )

    def attack_modifier(self) -> int:
        return self.penalty

    def defense_modifier(self) -> int:
        return self.penalty

    def damage_modifier(self) -> int:
        return 0

    def check_attack(self, combatant: Combatant, die: DieRoller) -> Outcome:
        if not self.needs_willpower_check:
            return Outcome.ok()
        return self.willpower_check(combatant.attributes.willpower, die)

    def commit_attack(self) -> None:
        pass
