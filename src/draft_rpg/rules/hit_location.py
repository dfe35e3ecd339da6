"""Hit locations and per-location wound tracking."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..errors import FailureReason, Outcome
from ..models.enums import WoundLevel
from ..models.wounds import LIGHT_WOUNDS_PER_SEVERE, SEVERE_WOUNDS_PER_CRITICAL, classify_damage

if TYPE_CHECKING:
    from ..engine.dice import DieRoller
    from ..models.character import Combatant

CRITICAL_WOUNDS_TO_SEVER = 2
DISABLED_PENALTY = -4


class AttackDirection(str, Enum):
    """Side of the defender the attack comes from."""

    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"
    ABOVE = "above"
    BELOW = "below"


class HitLocation(str, Enum):
    """Body locations."""

    HEAD = "head"
    TORSO = "torso"
    LEFT_ARM = "left_arm"
    RIGHT_ARM = "right_arm"
    LEFT_LEG = "left_leg"
    RIGHT_LEG = "right_leg"

    @property
    def multiplier(self) -> float:
        return _LOCATION_MULTIPLIERS[self]

    @property
    def is_limb(self) -> bool:
        return self not in (HitLocation.HEAD, HitLocation.TORSO)


_LOCATION_MULTIPLIERS = {
    HitLocation.HEAD: 1.5,
    HitLocation.TORSO: 1.0,
    HitLocation.LEFT_ARM: 0.75,
    HitLocation.RIGHT_ARM: 0.75,
    HitLocation.LEFT_LEG: 0.75,
    HitLocation.RIGHT_LEG: 0.75,
}


class LocationStatus(str, Enum):
    """Whether a location can still be used."""

    FUNCTIONAL = "functional"
    DISABLED = "disabled"
    SEVERED = "severed"


def _table(*bands: tuple[int, HitLocation]) -> list[HitLocation]:
    # Bands are (highest roll, location) pairs in ascending order
    rows: list[HitLocation] = []
    for upper, location in bands:
        rows.extend([location] * (upper - len(rows)))
    return rows


_FRONT_BACK = _table(
    (2, HitLocation.LEFT_LEG),
    (4, HitLocation.RIGHT_LEG),
    (6, HitLocation.TORSO),
    (7, HitLocation.LEFT_ARM),
    (8, HitLocation.RIGHT_ARM),
    (10, HitLocation.HEAD),
)

LOCATION_TABLES: dict[AttackDirection, list[HitLocation]] = {
    AttackDirection.FRONT: _FRONT_BACK,
    AttackDirection.BACK: _FRONT_BACK,
    AttackDirection.LEFT: _table(
        (2, HitLocation.LEFT_LEG),
        (4, HitLocation.TORSO),
        (7, HitLocation.LEFT_ARM),
        (8, HitLocation.RIGHT_ARM),
        (10, HitLocation.HEAD),
    ),
    AttackDirection.RIGHT: _table(
        (2, HitLocation.RIGHT_LEG),
        (4, HitLocation.TORSO),
        (7, HitLocation.RIGHT_ARM),
        (8, HitLocation.LEFT_ARM),
        (10, HitLocation.HEAD),
    ),
    AttackDirection.ABOVE: _table(
        (1, HitLocation.LEFT_LEG),
        (2, HitLocation.RIGHT_LEG),
        (3, HitLocation.TORSO),
        (5, HitLocation.LEFT_ARM),
        (7, HitLocation.RIGHT_ARM),
        (10, HitLocation.HEAD),
    ),
    AttackDirection.BELOW: _table(
        (2, HitLocation.LEFT_LEG),
        (4, HitLocation.RIGHT_LEG),
        (7, HitLocation.TORSO),
        (8, HitLocation.LEFT_ARM),
        (9, HitLocation.RIGHT_ARM),
        (10, HitLocation.HEAD),
    ),
}


def determine_location(direction: AttackDirection, roll: int) -> HitLocation:
    """Look up the location struck for a d10 roll from the given direction."""
    if not 1 <= roll <= 10:
        raise ValueError(f"Location roll must be 1-10, got {roll}")
    return LOCATION_TABLES[direction][roll - 1]


def location_damage(location: HitLocation, raw_damage: int) -> int:
    """Scale raw damage by the location multiplier, truncating."""
    return math.floor(max(0, raw_damage) * location.multiplier)


@dataclass(frozen=True)
class LocationWoundResult:
    """What a hit did to one location."""

    location: HitLocation
    damage: int
    level: WoundLevel | None
    status: LocationStatus
    newly_disabled: bool = False
    newly_severed: bool = False
    no_effect: bool = False


@dataclass
class LocationState:
    """Wounds and status of one body location."""

    location: HitLocation
    light: int = 0
    severe: int = 0
    critical: int = 0
    status: LocationStatus = LocationStatus.FUNCTIONAL

    @property
    def is_functional(self) -> bool:
        return self.status == LocationStatus.FUNCTIONAL

    @property
    def is_severed(self) -> bool:
        return self.status == LocationStatus.SEVERED

    @property
    def penalty(self) -> int:
        if not self.is_functional:
            return DISABLED_PENALTY
        return -(self.light + 2 * self.severe)

    def add_wound(self, level: WoundLevel) -> tuple[bool, bool]:
        """Add a wound, returning (newly_disabled, newly_severed)."""
        was_functional = self.is_functional
        match level:
            case WoundLevel.LIGHT:
                self.light += 1
            case WoundLevel.SEVERE:
                self.severe += 1
            case WoundLevel.CRITICAL | WoundLevel.MORTAL:
                self.critical += 1

        while self.light >= LIGHT_WOUNDS_PER_SEVERE or self.severe >= SEVERE_WOUNDS_PER_CRITICAL:
            if self.light >= LIGHT_WOUNDS_PER_SEVERE:
                self.light -= LIGHT_WOUNDS_PER_SEVERE
                self.severe += 1
            else:
                self.severe -= SEVERE_WOUNDS_PER_CRITICAL
                self.critical += 1

        newly_severed = False
        if self.location.is_limb and self.critical >= CRITICAL_WOUNDS_TO_SEVER:
            self.status = LocationStatus.SEVERED
            newly_severed = True
        elif self.severe or self.critical:
            self.status = LocationStatus.DISABLED

        return was_functional and not self.is_functional, newly_severed


class LocationalDamage:
    """Per-location wounds for one combatant.

    Tracks all six locations independently of the main wound tracker. The
    penalty of the weapon arm is applied to attack rolls, and a disabled or
    severed weapon arm stops the combatant from attacking at all.
    """

    def __init__(self, constitution: int, weapon_arm: HitLocation = HitLocation.RIGHT_ARM) -> None:
        if weapon_arm not in (HitLocation.LEFT_ARM, HitLocation.RIGHT_ARM):
            raise ValueError(f"Weapon arm must be an arm, got {weapon_arm.value}")
        self.constitution = constitution
        self.weapon_arm = weapon_arm
        self.locations: dict[HitLocation, LocationState] = {loc: LocationState(location=loc) for loc in HitLocation}

    def state(self, location: HitLocation) -> LocationState:
        return self.locations[location]

    def apply_damage(self, location: HitLocation, raw_damage: int) -> LocationWoundResult:
        """Classify scaled damage against CON and wound the location."""
        damage = location_damage(location, raw_damage)
        level = classify_damage(damage, self.constitution)
        if level is None:
            return LocationWoundResult(
                location=location,
                damage=damage,
                level=None,
                status=self.locations[location].status,
            )
        return self.add_wound(location, level, damage)

    def add_wound(self, location: HitLocation, level: WoundLevel, damage: int = 0) -> LocationWoundResult:
        """Wound a location directly. `damage` is only recorded in the result."""
        state = self.locations[location]
        if state.is_severed:
            return LocationWoundResult(
                location=location,
                damage=damage,
                level=level,
                status=state.status,
                no_effect=True,
            )
        newly_disabled, newly_severed = state.add_wound(level)
        return LocationWoundResult(
            location=location,
            damage=damage,
            level=level,
            status=state.status,
            newly_disabled=newly_disabled,
            newly_severed=newly_severed,
        )

    def penalty(self, location: HitLocation) -> int:
        return self.locations[location].penalty

    def is_functional(self, location: HitLocation) -> bool:
        return self.locations[location].is_functional

    @property
    def disabled_locations(self) -> list[HitLocation]:
        return [loc for loc, state in self.locations.items() if not state.is_functional]

    def attack_modifier(self) -> int:
        return self.penalty(self.weapon_arm)

    def defense_modifier(self) -> int:
        return 0

    def damage_modifier(self) -> int:
        return 0

    def check_attack(self, combatant: Combatant, die: DieRoller) -> Outcome:
        arm = self.locations[self.weapon_arm]
        if not arm.is_functional:
            return Outcome.fail(
                FailureReason.ACTION_NOT_ALLOWED,
                f"{combatant.name}'s weapon arm is {arm.status.value}",
            )
        return Outcome.ok()

    def commit_attack(self) -> None:
        pass

