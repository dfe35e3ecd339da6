"""Tests for hit locations and per-location wounds."""

import dataclasses

import pytest
from conftest import make_combatant

from draft_rpg.engine import SequenceDie
from draft_rpg.errors import FailureReason
from draft_rpg.models import WoundLevel
from draft_rpg.rules.hit_location import (
    LOCATION_TABLES,
    AttackDirection,
    HitLocation,
    LocationalDamage,
    LocationStatus,
    determine_location,
    location_damage,
)


class TestLocationTables:
    """Tests for the direction tables."""

    def test_every_roll_covered(self):
        """Test each table maps all ten rolls."""
        for direction in AttackDirection:
            assert len(LOCATION_TABLES[direction]) == 10

    @pytest.mark.parametrize(
        "roll,location",
        [
            (1, HitLocation.LEFT_LEG),
            (4, HitLocation.RIGHT_LEG),
            (5, HitLocation.TORSO),
            (6, HitLocation.TORSO),
            (7, HitLocation.LEFT_ARM),
            (8, HitLocation.RIGHT_ARM),
            (9, HitLocation.HEAD),
            (10, HitLocation.HEAD),
        ],
    )
    def test_front(self, roll, location):
        """Test the front table."""
        assert determine_location(AttackDirection.FRONT, roll) == location

    def test_back_matches_front(self):
        """Test attacks from behind use the front table."""
        assert LOCATION_TABLES[AttackDirection.BACK] == LOCATION_TABLES[AttackDirection.FRONT]

    def test_sides_favour_near_arm(self):
        """Test the near arm is struck on 5-7 from either side."""
        assert {determine_location(AttackDirection.LEFT, r) for r in (5, 6, 7)} == {HitLocation.LEFT_ARM}
        assert {determine_location(AttackDirection.RIGHT, r) for r in (5, 6, 7)} == {HitLocation.RIGHT_ARM}

    def test_above_favours_head(self):
        """Test attacks from above strike the head on 8-10."""
        assert {determine_location(AttackDirection.ABOVE, r) for r in (8, 9, 10)} == {HitLocation.HEAD}

    def test_below_favours_legs_and_torso(self):
        """Test attacks from below strike legs or torso on 1-7."""
        struck = {determine_location(AttackDirection.BELOW, r) for r in range(1, 8)}
        assert struck == {HitLocation.LEFT_LEG, HitLocation.RIGHT_LEG, HitLocation.TORSO}

    def test_roll_out_of_range(self):
        """Test rolls outside 1-10 are rejected."""
        with pytest.raises(ValueError):
            determine_location(AttackDirection.FRONT, 11)


class TestLocationDamage:
    """Tests for location multipliers."""

    def test_multipliers(self):
        """Test head, torso and limb multipliers."""
        assert HitLocation.HEAD.multiplier == 1.5
        assert HitLocation.TORSO.multiplier == 1.0
        assert all(loc.multiplier == 0.75 for loc in HitLocation if loc.is_limb)

    def test_truncates(self):
        """Test scaled damage rounds down."""
        assert location_damage(HitLocation.HEAD, 5) == 7
        assert location_damage(HitLocation.LEFT_LEG, 5) == 3
        assert location_damage(HitLocation.TORSO, 5) == 5

    def test_limbs(self):
        """Test only arms and legs are limbs."""
        assert not HitLocation.HEAD.is_limb
        assert not HitLocation.TORSO.is_limb
        assert HitLocation.LEFT_ARM.is_limb


class TestLocationalDamage:
    """Tests for the per-location tracker."""

    def test_light_wound_keeps_location_functional(self):
        """Test a Light wound only adds a penalty."""
        body = LocationalDamage(constitution=8)
        result = body.apply_damage(HitLocation.LEFT_LEG, 4)
        assert result.damage == 3
        assert result.level == WoundLevel.LIGHT
        assert body.is_functional(HitLocation.LEFT_LEG)
        assert body.penalty(HitLocation.LEFT_LEG) == -1

    def test_severe_disables(self):
        """Test a Severe wound disables the location."""
        body = LocationalDamage(constitution=8)
        result = body.add_wound(HitLocation.RIGHT_ARM, WoundLevel.SEVERE)
        assert result.newly_disabled
        assert result.status == LocationStatus.DISABLED
        assert body.penalty(HitLocation.RIGHT_ARM) == -4
        assert HitLocation.RIGHT_ARM in body.disabled_locations

    def test_light_wounds_stack_to_disable(self):
        """Test four Light wounds on a location stack into a Severe one."""
        body = LocationalDamage(constitution=8)
        for _ in range(4):
            result = body.add_wound(HitLocation.TORSO, WoundLevel.LIGHT)
        state = body.state(HitLocation.TORSO)
        assert (state.light, state.severe) == (0, 1)
        assert result.newly_disabled

    def test_two_criticals_sever_limb(self):
        """Test a second Critical wound severs a limb."""
        body = LocationalDamage(constitution=8)
        body.add_wound(HitLocation.LEFT_ARM, WoundLevel.CRITICAL)
        result = body.add_wound(HitLocation.LEFT_ARM, WoundLevel.CRITICAL)
        assert result.newly_severed
        assert body.state(HitLocation.LEFT_ARM).is_severed

    def test_head_is_never_severed(self):
        """Test head and torso stay disabled rather than severed."""
        body = LocationalDamage(constitution=8)
        body.add_wound(HitLocation.HEAD, WoundLevel.CRITICAL)
        body.add_wound(HitLocation.HEAD, WoundLevel.CRITICAL)
        assert body.state(HitLocation.HEAD).status == LocationStatus.DISABLED

    def test_severed_is_idempotent(self):
        """Test further wounds to a severed limb have no effect."""
        body = LocationalDamage(constitution=8)
        body.add_wound(HitLocation.LEFT_LEG, WoundLevel.CRITICAL)
        body.add_wound(HitLocation.LEFT_LEG, WoundLevel.CRITICAL)
        before = body.state(HitLocation.LEFT_LEG).critical

        result = body.apply_damage(HitLocation.LEFT_LEG, 8)

        assert result.no_effect
        assert not result.newly_severed
        assert body.state(HitLocation.LEFT_LEG).critical == before

    def test_other_locations_independent(self):
        """Test wounding one location leaves the others untouched."""
        body = LocationalDamage(constitution=8)
        body.add_wound(HitLocation.LEFT_ARM, WoundLevel.SEVERE)
        assert body.disabled_locations == [HitLocation.LEFT_ARM]

    def test_zero_damage_no_wound(self):
        """Test damage scaling to zero does not wound."""
        body = LocationalDamage(constitution=8)
        result = body.apply_damage(HitLocation.RIGHT_LEG, 1)
        assert result.damage == 0
        assert result.level is None

    def test_weapon_arm_penalty(self):
        """Test the weapon arm's penalty becomes an attack modifier."""
        body = LocationalDamage(constitution=8, weapon_arm=HitLocation.LEFT_ARM)
        body.add_wound(HitLocation.LEFT_ARM, WoundLevel.LIGHT)
        body.add_wound(HitLocation.RIGHT_ARM, WoundLevel.SEVERE)
        assert body.attack_modifier() == -1
        assert body.defense_modifier() == 0

    def test_severed_weapon_arm_blocks(self):
        """Test losing the weapon arm forbids attacking."""
        body = LocationalDamage(constitution=8)
        die = SequenceDie([5])
        assert body.check_attack(make_combatant(), die).success
        body.add_wound(HitLocation.RIGHT_ARM, WoundLevel.CRITICAL)
        body.add_wound(HitLocation.RIGHT_ARM, WoundLevel.CRITICAL)
        assert body.check_attack(make_combatant(), die).reason == FailureReason.ACTION_NOT_ALLOWED

    def test_disabled_weapon_arm_blocks(self):
        """Test a Severe wound to the weapon arm forbids attacking."""
        body = LocationalDamage(constitution=8)
        body.add_wound(HitLocation.RIGHT_ARM, WoundLevel.SEVERE)
        outcome = body.check_attack(make_combatant(name="Cedric"), SequenceDie([5]))
        assert outcome.reason == FailureReason.ACTION_NOT_ALLOWED
        assert "disabled" in outcome.message

    def test_off_arm_does_not_block(self):
        """Test losing the other arm still allows attacking."""
        body = LocationalDamage(constitution=8)
        body.add_wound(HitLocation.LEFT_ARM, WoundLevel.SEVERE)
        assert body.check_attack(make_combatant(), SequenceDie([5])).success

    def test_result_carries_scaled_damage(self):
        """Test the wound result records the scaled damage and cannot be changed."""
        body = LocationalDamage(constitution=8)
        result = body.apply_damage(HitLocation.HEAD, 5)
        assert result.damage == 7
        assert result.level == WoundLevel.SEVERE
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.damage = 0

    def test_weapon_arm_must_be_arm(self):
        """Test the weapon arm cannot be a leg."""
        with pytest.raises(ValueError):
            LocationalDamage(constitution=8, weapon_arm=HitLocation.LEFT_LEG)
