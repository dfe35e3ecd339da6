"""Attributes, equipment and combatants."""

from dataclasses import dataclass, field, fields

from .enums import ArmorType, WeaponImpact
from .wounds import Wounds

ATTRIBUTE_MIN = 1
ATTRIBUTE_MAX = 10
SKILL_MIN = 0
SKILL_MAX = 10
WEAPON_DAMAGE_MIN = 3
WEAPON_DAMAGE_MAX = 9
PROTECTION_MIN = 0
PROTECTION_MAX = 5
MOVEMENT_PENALTIES = (0, -1, -2)


@dataclass(frozen=True)
class Attributes:
    """The nine attribute scores of a character."""

    # Physical
    strength: int
    dexterity: int
    constitution: int
    # Mental
    reason: int
    intuition: int
    willpower: int
    # Interactive
    charisma: int
    perception: int
    empathy: int

    def __post_init__(self) -> None:
        for attr in fields(self):
            value = getattr(self, attr.name)
            if not ATTRIBUTE_MIN <= value <= ATTRIBUTE_MAX:
                raise ValueError(f"{attr.name} must be {ATTRIBUTE_MIN}-{ATTRIBUTE_MAX}, got {value}")

    @property
    def stamina(self) -> int:
        """(STR + CON) / 2, halves rounded up."""
        return (self.strength + self.constitution + 1) // 2

    @property
    def strength_bonus(self) -> int:
        """Damage bonus from strength."""
        if self.strength >= 9:
            return 2
        if self.strength >= 7:
            return 1
        if self.strength <= 2:
            return -1
        return 0


@dataclass(frozen=True)
class Weapon:
    """Melee weapon. Damage defaults to impact x 2 + 1 for pointed blades."""

    name: str
    impact: WeaponImpact
    damage: int | None = None

    def __post_init__(self) -> None:
        if self.damage is None:
            object.__setattr__(self, "damage", self.impact.rating * 2 + 1)
        if not WEAPON_DAMAGE_MIN <= self.damage <= WEAPON_DAMAGE_MAX:
            raise ValueError(f"Weapon damage must be {WEAPON_DAMAGE_MIN}-{WEAPON_DAMAGE_MAX}, got {self.damage}")

    @classmethod
    def dagger(cls) -> "Weapon":
        return cls("Dagger", WeaponImpact.SMALL)

    @classmethod
    def long_sword(cls) -> "Weapon":
        return cls("Long Sword", WeaponImpact.MEDIUM)

    @classmethod
    def two_handed_sword(cls) -> "Weapon":
        return cls("Two-Handed Sword", WeaponImpact.LARGE)

    @classmethod
    def great_axe(cls) -> "Weapon":
        return cls("Great Axe", WeaponImpact.HUGE)


@dataclass(frozen=True)
class Armor:
    """Body armor. Its movement penalty applies to every combat roll."""

    name: str
    armor_type: ArmorType
    protection: int | None = None
    movement_penalty: int = 0

    def __post_init__(self) -> None:
        if self.protection is None:
            object.__setattr__(self, "protection", self.armor_type.rating)
        if not PROTECTION_MIN <= self.protection <= PROTECTION_MAX:
            raise ValueError(f"Protection must be {PROTECTION_MIN}-{PROTECTION_MAX}, got {self.protection}")
        if self.movement_penalty not in MOVEMENT_PENALTIES:
            raise ValueError(f"Movement penalty must be one of {MOVEMENT_PENALTIES}, got {self.movement_penalty}")

    @classmethod
    def none(cls) -> "Armor":
        return cls("None", ArmorType.HEAVY_CLOTH, protection=0)

    @classmethod
    def leather(cls) -> "Armor":
        return cls("Leather Armor", ArmorType.LEATHER)

    @classmethod
    def chain_mail(cls) -> "Armor":
        return cls("Chain Mail", ArmorType.CHAIN, movement_penalty=-1)

    @classmethod
    def plate(cls) -> "Armor":
        return cls("Plate Armor", ArmorType.PLATE, movement_penalty=-1)

    @classmethod
    def full_plate(cls) -> "Armor":
        return cls("Full Plate", ArmorType.FULL_PLATE, movement_penalty=-2)

    def attack_modifier(self) -> int:
        return self.movement_penalty

    def defense_modifier(self) -> int:
        return self.movement_penalty

    def damage_modifier(self) -> int:
        return 0


@dataclass
class Combatant:
    """A character taking part in combat.

    Owns its weapon, armor and wounds. Optional rule modules (stance,
    exhaustion, ...) are kept outside and passed to the resolver.
    """

    name: str
    attributes: Attributes
    weapon_skill: int
    dodge_skill: int
    weapon: Weapon
    armor: Armor
    wounds: Wounds = field(default_factory=Wounds)

    def __post_init__(self) -> None:
        for skill_name in ("weapon_skill", "dodge_skill"):
            value = getattr(self, skill_name)
            if not SKILL_MIN <= value <= SKILL_MAX:
                raise ValueError(f"{skill_name} must be {SKILL_MIN}-{SKILL_MAX}, got {value}")

    @property
    def is_alive(self) -> bool:
        return not self.wounds.is_dead

    @property
    def can_act(self) -> bool:
        """Alive and not incapacitated by a Critical wound."""
        return self.is_alive and not self.wounds.is_incapacitated

    @property
    def strength_bonus(self) -> int:
        return self.attributes.strength_bonus

    def intrinsic_sources(self) -> list:
        """Modifier sources every combatant carries."""
        return [self.wounds, self.armor]
