"""Tests for character construction."""

import copy

import pytest

from draft_rpg.errors import FailureReason
from draft_rpg.models import ArmorType, CharacterFactory, CharacterSpec, WeaponImpact

VALID = {
    "name": "Aldric",
    "attributes": {
        "strength": 7,
        "dexterity": 6,
        "constitution": 7,
        "reason": 5,
        "intuition": 5,
        "willpower": 6,
        "charisma": 4,
        "perception": 6,
        "empathy": 3,
    },
    "weapon_skill": 6,
    "dodge_skill": 3,
    "weapon": {"name": "Long Sword", "impact": "medium"},
    "armor": {"name": "Chain Mail", "armor_type": "chain", "movement_penalty": -1},
}


@pytest.fixture
def data() -> dict:
    return copy.deepcopy(VALID)


@pytest.fixture
def factory() -> CharacterFactory:
    return CharacterFactory()


class TestCharacterFactory:
    """Tests for CharacterFactory.create."""

    def test_valid_mapping(self, factory, data):
        """Test a complete descriptor builds a combatant."""
        result = factory.create(data)
        assert result.success
        assert result.errors == []
        fighter = result.combatant
        assert fighter.name == "Aldric"
        assert fighter.attributes.stamina == 7
        assert fighter.weapon.impact == WeaponImpact.MEDIUM
        assert fighter.weapon.damage == 5
        assert fighter.armor.armor_type == ArmorType.CHAIN
        assert fighter.armor.protection == 3
        assert fighter.armor.movement_penalty == -1

    def test_valid_spec(self, factory, data):
        """Test a CharacterSpec is accepted directly."""
        result = factory.create(CharacterSpec.model_validate(data))
        assert result.success

    @pytest.mark.parametrize("value", [0, 11])
    def test_invalid_attribute(self, factory, data, value):
        """Test out-of-range attributes are reported, not raised."""
        data["attributes"]["constitution"] = value
        result = factory.create(data)
        assert not result.success
        assert result.combatant is None
        assert result.reasons == {FailureReason.INVALID_ATTRIBUTE}
        assert result.errors[0].field == "attributes.constitution"

    def test_invalid_skill(self, factory, data):
        """Test out-of-range skills are reported."""
        data["dodge_skill"] = 12
        result = factory.create(data)
        assert result.reasons == {FailureReason.INVALID_SKILL}

    def test_invalid_equipment(self, factory, data):
        """Test malformed equipment is reported."""
        data["weapon"]["impact"] = "colossal"
        data["armor"]["protection"] = 9
        result = factory.create(data)
        assert result.reasons == {FailureReason.INVALID_EQUIPMENT}
        assert len(result.errors) == 2

    def test_several_problems(self, factory, data):
        """Test every problem is collected."""
        data["attributes"]["strength"] = 0
        data["weapon_skill"] = -1
        result = factory.create(data)
        assert result.reasons == {FailureReason.INVALID_ATTRIBUTE, FailureReason.INVALID_SKILL}

    @pytest.mark.parametrize("name", ["", None])
    def test_invalid_name(self, factory, data, name):
        """Test an empty or missing name is a name problem."""
        if name is None:
            del data["name"]
        else:
            data["name"] = name
        result = factory.create(data)
        assert result.reasons == {FailureReason.INVALID_NAME}
        assert result.errors[0].field == "name"

    def test_missing_attribute(self, factory, data):
        """Test a missing attribute is an attribute problem."""
        del data["attributes"]["empathy"]
        result = factory.create(data)
        assert result.reasons == {FailureReason.INVALID_ATTRIBUTE}

    def test_weapon_damage_override(self, factory, data):
        """Test an explicit weapon damage is kept."""
        data["weapon"]["damage"] = 4
        result = factory.create(data)
        assert result.combatant.weapon.damage == 4
