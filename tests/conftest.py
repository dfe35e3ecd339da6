"""Shared fixtures for rules engine tests."""

import pytest

from draft_rpg.engine import CombatLogger, SequenceDie
from draft_rpg.models import Armor, ArmorType, Attributes, Combatant, Weapon


def make_attributes(**overrides) -> Attributes:
    """Average attributes (5 across the board) with overrides."""
    scores = dict(
        strength=5,
        dexterity=5,
        constitution=5,
        reason=5,
        intuition=5,
        willpower=5,
        charisma=5,
        perception=5,
        empathy=5,
    )
    scores.update(overrides)
    return Attributes(**scores)


def make_combatant(
    name: str = "Fighter",
    weapon_skill: int = 5,
    dodge_skill: int = 5,
    weapon: Weapon | None = None,
    armor: Armor | None = None,
    **attributes,
) -> Combatant:
    return Combatant(
        name=name,
        attributes=make_attributes(**attributes),
        weapon_skill=weapon_skill,
        dodge_skill=dodge_skill,
        weapon=weapon or Weapon.long_sword(),
        armor=armor or Armor.none(),
    )


@pytest.fixture
def attacker() -> Combatant:
    """STR 9 swordsman: attack = 6 + die, damage bonus +2, long sword 5."""
    return make_combatant(name="Aldric", weapon_skill=6, dodge_skill=3, strength=9, constitution=7)


@pytest.fixture
def defender() -> Combatant:
    """CON 7 defender in unencumbering protection-3 armor."""
    return make_combatant(
        name="Brena",
        weapon_skill=5,
        dodge_skill=4,
        armor=Armor("Brigandine", ArmorType.CHAIN),
        constitution=7,
    )


@pytest.fixture
def logger() -> CombatLogger:
    return CombatLogger(combat_id=1)


@pytest.fixture
def scripted_die():
    """Factory for scripted dice."""

    def _make(*rolls: int) -> SequenceDie:
        return SequenceDie(rolls)

    return _make
