"""Enums for the combat model."""

from enum import Enum


class WeaponImpact(str, Enum):
    """Weapon size class - drives base damage."""

    SMALL = "small"  # Daggers, knives
    MEDIUM = "medium"  # Swords, maces
    LARGE = "large"  # Two-handed weapons
    HUGE = "huge"  # Great axes, mauls

    @property
    def rating(self) -> int:
        return _IMPACT_RATINGS[self]


_IMPACT_RATINGS = {
    WeaponImpact.SMALL: 1,
    WeaponImpact.MEDIUM: 2,
    WeaponImpact.LARGE: 3,
    WeaponImpact.HUGE: 4,
}


class ArmorType(str, Enum):
    """Armor categories, ordered from lightest to heaviest."""

    HEAVY_CLOTH = "heavy_cloth"
    LEATHER = "leather"
    CHAIN = "chain"
    PLATE = "plate"
    FULL_PLATE = "full_plate"

    @property
    def rating(self) -> int:
        return _ARMOR_RATINGS[self]


_ARMOR_RATINGS = {
    ArmorType.HEAVY_CLOTH: 1,
    ArmorType.LEATHER: 2,
    ArmorType.CHAIN: 3,
    ArmorType.PLATE: 4,
    ArmorType.FULL_PLATE: 5,
}


class WoundLevel(str, Enum):
    """Wound severities."""

    LIGHT = "light"  # -1 per wound
    SEVERE = "severe"  # -2 per wound
    CRITICAL = "critical"  # -4 per wound, cannot act
    MORTAL = "mortal"  # Damage above twice CON - instant death


class DefenseChoice(str, Enum):
    """How the defender meets an attack."""

    PARRY = "parry"  # Uses weapon skill
    DODGE = "dodge"  # Uses dodge skill
