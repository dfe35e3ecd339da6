"""Character descriptor schemas accepted by the character factory."""

from pydantic import BaseModel, Field

from .enums import ArmorType, WeaponImpact


class AttributeSpec(BaseModel):
    """The nine attribute scores, each 1-10."""

    strength: int = Field(ge=1, le=10, description="Physical power, drives the damage bonus")
    dexterity: int = Field(ge=1, le=10, description="Agility and coordination")
    constitution: int = Field(ge=1, le=10, description="Toughness, sets the wound thresholds")
    reason: int = Field(ge=1, le=10, description="Logic and memory")
    intuition: int = Field(ge=1, le=10, description="Insight and instinct")
    willpower: int = Field(ge=1, le=10, description="Resolve, used for exhaustion checks")
    charisma: int = Field(ge=1, le=10, description="Force of personality")
    perception: int = Field(ge=1, le=10, description="Awareness of surroundings")
    empathy: int = Field(ge=1, le=10, description="Sensitivity, governs magic")


class WeaponSpec(BaseModel):
    """Melee weapon descriptor."""

    name: str = Field(min_length=1, description="Weapon name")
    impact: WeaponImpact = Field(description="Size class: small, medium, large or huge")
    damage: int | None = Field(default=None, ge=3, le=9, description="Override for impact x 2 + 1")


class ArmorSpec(BaseModel):
    """Armor descriptor."""

    name: str = Field(min_length=1, description="Armor name")
    armor_type: ArmorType = Field(description="Armor type")
    protection: int | None = Field(default=None, ge=0, le=5, description="Override for the type rating")
    movement_penalty: int = Field(default=0, ge=-2, le=0, description="Penalty applied to combat rolls")


class CharacterSpec(BaseModel):
    """Everything needed to build a combatant."""

    name: str = Field(min_length=1, description="Character name")
    attributes: AttributeSpec
    weapon_skill: int = Field(ge=0, le=10, description="Weapon skill level")
    dodge_skill: int = Field(ge=0, le=10, description="Dodge skill level")
    weapon: WeaponSpec
    armor: ArmorSpec
