"""Wound classification, stacking and mortality."""

from dataclasses import dataclass, field

from .enums import WoundLevel

LIGHT_WOUNDS_PER_SEVERE = 4
SEVERE_WOUNDS_PER_CRITICAL = 3
CRITICAL_WOUNDS_TO_DIE = 2

WOUND_PENALTIES = {
    WoundLevel.LIGHT: -1,
    WoundLevel.SEVERE: -2,
    WoundLevel.CRITICAL: -4,
}


def classify_damage(damage: int, constitution: int) -> WoundLevel | None:
    """Classify damage against a constitution score.

    Args:
        damage: Damage after armor (0 or less is a graze)
        constitution: CON of the combatant taking the hit

    Returns:
        Wound level, or None when the hit does not wound
    """
    if damage <= 0:
        return None
    if damage <= constitution // 2:
        return WoundLevel.LIGHT
    if damage <= constitution:
        return WoundLevel.SEVERE
    if damage <= constitution * 2:
        return WoundLevel.CRITICAL
    return WoundLevel.MORTAL


@dataclass
class WoundUpdate:
    """What happened when a wound was added."""

    level: WoundLevel
    conversions: list[tuple[WoundLevel, WoundLevel]] = field(default_factory=list)
    became_dead: bool = False


@dataclass
class Wounds:
    """Outstanding wounds of one combatant.

    Counts are re-normalized after every change, so four Light or three
    Severe wounds are never observable.
    """

    light: int = 0
    severe: int = 0
    critical: int = 0
    dead: bool = False

    def __post_init__(self) -> None:
        if min(self.light, self.severe, self.critical) < 0:
            raise ValueError("Wound counts cannot be negative")
        self._normalize()

    def add(self, level: WoundLevel) -> WoundUpdate:
        """Add a wound and apply stacking."""
        was_dead = self.dead
        match level:
            case WoundLevel.LIGHT:
                self.light += 1
            case WoundLevel.SEVERE:
                self.severe += 1
            case WoundLevel.CRITICAL:
                self.critical += 1
            case WoundLevel.MORTAL:
                self.dead = True

        update = WoundUpdate(level=level, conversions=self._normalize())
        update.became_dead = self.dead and not was_dead
        return update

    def _normalize(self) -> list[tuple[WoundLevel, WoundLevel]]:
        conversions: list[tuple[WoundLevel, WoundLevel]] = []
        while True:
            if self.light >= LIGHT_WOUNDS_PER_SEVERE:
                self.light -= LIGHT_WOUNDS_PER_SEVERE
                self.severe += 1
                conversions.append((WoundLevel.LIGHT, WoundLevel.SEVERE))
            elif self.severe >= SEVERE_WOUNDS_PER_CRITICAL:
                self.severe -= SEVERE_WOUNDS_PER_CRITICAL
                self.critical += 1
                conversions.append((WoundLevel.SEVERE, WoundLevel.CRITICAL))
            else:
                break
        if self.critical >= CRITICAL_WOUNDS_TO_DIE:
            self.dead = True
        return conversions

    @property
    def penalty(self) -> int:
        """Total roll penalty from outstanding wounds."""
        return (
            self.light * WOUND_PENALTIES[WoundLevel.LIGHT]
            + self.severe * WOUND_PENALTIES[WoundLevel.SEVERE]
            + self.critical * WOUND_PENALTIES[WoundLevel.CRITICAL]
        )

    @property
    def is_dead(self) -> bool:
        return self.dead

    @property
    def is_incapacitated(self) -> bool:
        """A Critical wound takes the combatant out of the fight."""
        return self.critical >= 1

    def attack_modifier(self) -> int:
        return self.penalty

    def defense_modifier(self) -> int:
        return self.penalty

    def damage_modifier(self) -> int:
        return 0
