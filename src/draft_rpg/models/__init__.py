"""Character models - attributes, equipment, wounds and combatants."""

from .enums import ArmorType, DefenseChoice, WeaponImpact, WoundLevel
from .wounds import Wounds, WoundUpdate, classify_damage
from .character import Armor, Attributes, Combatant, Weapon
from .factory import CharacterFactory, ConstructionIssue, ConstructionResult
from .schemas import ArmorSpec, AttributeSpec, CharacterSpec, WeaponSpec

__all__ = [
    # Enums
    "ArmorType",
    "DefenseChoice",
    "WeaponImpact",
    "WoundLevel",
    # Wounds
    "Wounds",
    "WoundUpdate",
    "classify_damage",
    # Entities
    "Armor",
    "Attributes",
    "Combatant",
    "Weapon",
    # Construction
    "CharacterFactory",
    "ConstructionIssue",
    "ConstructionResult",
    "ArmorSpec",
    "AttributeSpec",
    "CharacterSpec",
    "WeaponSpec",
]
