"""Ranged weapons, preparation, aiming and range modifiers."""

from dataclasses import dataclass
from enum import Enum

from ..errors import FailureReason, Outcome


class RangeBand(str, Enum):
    """Distance bands of a ranged weapon."""

    POINT_BLANK = "point_blank"
    EXTENDED = "extended"
    BEYOND_MAX = "beyond_max"


class TargetSize(str, Enum):
    """Target size classes."""

    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    HUGE = "huge"
    GIGANTIC = "gigantic"

    @property
    def modifier(self) -> int:
        return _SIZE_MODIFIERS[self]


_SIZE_MODIFIERS = {
    TargetSize.TINY: -4,
    TargetSize.SMALL: -2,
    TargetSize.MEDIUM: 0,
    TargetSize.LARGE: 2,
    TargetSize.HUGE: 4,
    TargetSize.GIGANTIC: 6,
}


class Cover(str, Enum):
    """How much of the target is hidden."""

    NONE = "none"
    PARTIAL = "partial"
    THREE_QUARTERS = "three_quarters"
    FULL = "full"

    @property
    def modifier(self) -> int:
        return _COVER_MODIFIERS[self]


_COVER_MODIFIERS = {
    Cover.NONE: 0,
    Cover.PARTIAL: -2,
    Cover.THREE_QUARTERS: -4,
    Cover.FULL: -8,
}


@dataclass(frozen=True)
class RangedWeapon:
    """A missile weapon. Ranges are in metres, preparation in segments."""

    name: str
    damage: int
    point_blank_range: int
    max_range: int
    preparation_time: int
    rate_of_fire: int
    range_increment: int = 10

    def __post_init__(self) -> None:
        if self.damage < 1:
            raise ValueError(f"Damage must be positive, got {self.damage}")
        if not 0 < self.point_blank_range <= self.max_range:
            raise ValueError("Point blank range must be positive and within max range")
        if self.preparation_time < 1 or self.rate_of_fire < 1 or self.range_increment < 1:
            raise ValueError("Preparation time, rate of fire and range increment must be positive")

    @classmethod
    def short_bow(cls) -> "RangedWeapon":
        return cls("Short Bow", damage=4, point_blank_range=20, max_range=100, preparation_time=3, rate_of_fire=1)

    @classmethod
    def long_bow(cls) -> "RangedWeapon":
        return cls("Long Bow", damage=6, point_blank_range=30, max_range=120, preparation_time=3, rate_of_fire=1)

    @classmethod
    def crossbow(cls) -> "RangedWeapon":
        return cls("Crossbow", damage=6, point_blank_range=30, max_range=100, preparation_time=6, rate_of_fire=1)

    @classmethod
    def javelin(cls) -> "RangedWeapon":
        return cls("Javelin", damage=4, point_blank_range=15, max_range=40, preparation_time=1, rate_of_fire=1)

    @classmethod
    def pistol(cls) -> "RangedWeapon":
        return cls(
            "Pistol",
            damage=6,
            point_blank_range=20,
            max_range=80,
            preparation_time=1,
            rate_of_fire=3,
            range_increment=20,
        )

    @classmethod
    def rifle(cls) -> "RangedWeapon":
        return cls(
            "Rifle",
            damage=8,
            point_blank_range=40,
            max_range=200,
            preparation_time=2,
            rate_of_fire=2,
            range_increment=20,
        )

    def range_band(self, distance: int) -> RangeBand:
        if distance <= self.point_blank_range:
            return RangeBand.POINT_BLANK
        if distance <= self.max_range:
            return RangeBand.EXTENDED
        return RangeBand.BEYOND_MAX

    def distance_modifier(self, distance: int) -> int:
        """0 at point blank, then -1 per full range increment beyond it."""
        if distance <= self.point_blank_range:
            return 0
        return -((distance - self.point_blank_range) // self.range_increment)


@dataclass(frozen=True)
class RangedShot:
    """Circumstances of one shot."""

    distance: int
    target_size: TargetSize = TargetSize.MEDIUM
    cover: Cover = Cover.NONE

    def __post_init__(self) -> None:
        if self.distance < 0:
            raise ValueError(f"Distance cannot be negative, got {self.distance}")


@dataclass(frozen=True)
class RangedModifier:
    """Net modifier for a shot and the parts it is made of."""

    total: int
    band: RangeBand
    automatic_miss: bool
    distance: int = 0
    size: int = 0
    cover: int = 0
    aiming: int = 0


class RangedAttackState:
    """Preparation, aiming and firing state of one ranged weapon.

    Preparation accumulates in segments until the weapon's preparation time
    is met, which readies `rate_of_fire` shots. Each full round of aiming adds
    +1 up to the cap; firing or an interruption resets it.
    """

    def __init__(self, weapon: RangedWeapon, max_aim_bonus: int = 3) -> None:
        self.weapon = weapon
        self.max_aim_bonus = max_aim_bonus
        self.preparation_progress = 0
        self.shots_ready = 0
        self.aim_rounds = 0
        self.last_fired_round: int | None = None
        self.shots_this_round = 0

    @property
    def is_prepared(self) -> bool:
        return self.shots_ready > 0

    @property
    def aiming_bonus(self) -> int:
        return min(self.aim_rounds, self.max_aim_bonus)

    def prepare(self, segments: int | None = None) -> Outcome:
        """Spend time readying the weapon (all of it by default)."""
        if segments is None:
            segments = self.weapon.preparation_time - self.preparation_progress
        if segments < 0:
            raise ValueError(f"Segments cannot be negative, got {segments}")
        self.preparation_progress += segments
        if self.preparation_progress < self.weapon.preparation_time:
            return Outcome.ok(
                f"Preparing {self.weapon.name} ({self.preparation_progress}/{self.weapon.preparation_time})"
            )
        self.preparation_progress = 0
        self.shots_ready = self.weapon.rate_of_fire
        return Outcome.ok(f"{self.weapon.name} ready")

    def aim(self) -> None:
        self.aim_rounds += 1

    def interrupt_aim(self) -> None:
        self.aim_rounds = 0

    def fire(self, current_round: int) -> Outcome:
        if self.last_fired_round != current_round:
            self.shots_this_round = 0
        if self.shots_this_round >= self.weapon.rate_of_fire:
            return Outcome.fail(
                FailureReason.RATE_EXCEEDED,
                f"{self.weapon.name} fires at most {self.weapon.rate_of_fire} per round",
            )
        if not self.is_prepared:
            return Outcome.fail(FailureReason.NOT_PREPARED, f"{self.weapon.name} is not prepared")

        self.shots_ready -= 1
        self.shots_this_round += 1
        self.last_fired_round = current_round
        self.aim_rounds = 0
        return Outcome.ok(f"{self.weapon.name} fired")


def calculate_ranged_modifier(state: RangedAttackState, shot: RangedShot) -> RangedModifier:
    """Combine range band, target size, cover and aiming for a shot."""
    weapon = state.weapon
    band = weapon.range_band(shot.distance)
    distance = weapon.distance_modifier(shot.distance)
    size = shot.target_size.modifier
    cover = shot.cover.modifier
    aiming = state.aiming_bonus
    return RangedModifier(
        total=distance + size + cover + aiming,
        band=band,
        automatic_miss=band == RangeBand.BEYOND_MAX,
        distance=distance,
        size=size,
        cover=cover,
        aiming=aiming,
    )
