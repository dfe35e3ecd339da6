"""Tests for attributes, equipment and combatants."""

import pytest
from conftest import make_attributes, make_combatant

from draft_rpg.models import Armor, ArmorType, Weapon, WeaponImpact, WoundLevel


class TestAttributes:
    """Tests for Attributes."""

    @pytest.mark.parametrize("value", [0, 11, -3])
    def test_out_of_range_rejected(self, value):
        """Test scores outside 1-10 raise."""
        with pytest.raises(ValueError):
            make_attributes(dexterity=value)

    @pytest.mark.parametrize(
        "strength,constitution,stamina",
        [(5, 5, 5), (7, 6, 7), (1, 2, 2), (10, 9, 10), (1, 1, 1)],
    )
    def test_stamina_rounds_half_up(self, strength, constitution, stamina):
        """Test stamina is the rounded-up mean of STR and CON."""
        assert make_attributes(strength=strength, constitution=constitution).stamina == stamina

    @pytest.mark.parametrize(
        "strength,bonus",
        [(1, -1), (2, -1), (3, 0), (6, 0), (7, 1), (8, 1), (9, 2), (10, 2)],
    )
    def test_strength_bonus(self, strength, bonus):
        """Test the strength damage bonus table."""
        assert make_attributes(strength=strength).strength_bonus == bonus

    def test_frozen(self):
        """Test attributes cannot be changed after creation."""
        attributes = make_attributes()
        with pytest.raises(AttributeError):
            attributes.strength = 9


class TestWeapon:
    """Tests for Weapon."""

    def test_catalog_damage(self):
        """Test catalog weapons use impact x 2 + 1."""
        assert Weapon.dagger().damage == 3
        assert Weapon.long_sword().damage == 5
        assert Weapon.two_handed_sword().damage == 7
        assert Weapon.great_axe().damage == 9

    def test_override(self):
        """Test explicit damage overrides the default."""
        assert Weapon("Club", WeaponImpact.MEDIUM, damage=4).damage == 4

    @pytest.mark.parametrize("damage", [2, 10])
    def test_damage_out_of_range(self, damage):
        """Test weapon damage must stay within 3-9."""
        with pytest.raises(ValueError):
            Weapon("Odd", WeaponImpact.SMALL, damage=damage)


class TestArmor:
    """Tests for Armor."""

    def test_catalog(self):
        """Test catalog protection and movement penalties."""
        assert (Armor.none().protection, Armor.none().movement_penalty) == (0, 0)
        assert (Armor.leather().protection, Armor.leather().movement_penalty) == (2, 0)
        assert (Armor.chain_mail().protection, Armor.chain_mail().movement_penalty) == (3, -1)
        assert (Armor.plate().protection, Armor.plate().movement_penalty) == (4, -1)
        assert (Armor.full_plate().protection, Armor.full_plate().movement_penalty) == (5, -2)

    def test_protection_defaults_to_rating(self):
        """Test protection defaults to the armor type rating."""
        assert Armor("Padded", ArmorType.HEAVY_CLOTH).protection == 1

    def test_invalid_movement_penalty(self):
        """Test movement penalty must be 0, -1 or -2."""
        with pytest.raises(ValueError):
            Armor("Odd", ArmorType.PLATE, movement_penalty=-3)

    def test_modifier_source(self):
        """Test armor penalizes attack and defense but not damage."""
        plate = Armor.full_plate()
        assert plate.attack_modifier() == -2
        assert plate.defense_modifier() == -2
        assert plate.damage_modifier() == 0


class TestCombatant:
    """Tests for Combatant."""

    @pytest.mark.parametrize("skill", [-1, 11])
    def test_skill_range(self, skill):
        """Test skills outside 0-10 raise."""
        with pytest.raises(ValueError):
            make_combatant(weapon_skill=skill)

    def test_fresh_combatant_can_act(self):
        """Test a new combatant is alive and able to act."""
        fighter = make_combatant()
        assert fighter.is_alive
        assert fighter.can_act

    def test_critical_wound_incapacitates(self):
        """Test a Critical wound stops the combatant acting without killing."""
        fighter = make_combatant()
        fighter.wounds.add(WoundLevel.CRITICAL)
        assert fighter.is_alive
        assert not fighter.can_act

    def test_intrinsic_sources(self):
        """Test wounds and armor are always active sources."""
        fighter = make_combatant(armor=Armor.plate())
        assert fighter.intrinsic_sources() == [fighter.wounds, fighter.armor]
