"""Tests for lore, spells and casting."""

import pytest

from draft_rpg.engine import CombatLogger, LogEventType, SequenceDie
from draft_rpg.errors import FailureReason
from draft_rpg.rules.exhaustion import ExhaustionLevel
from draft_rpg.rules.magic import MagicBranch, MagicUser, Spell, SpellDifficulty
from draft_rpg.rules.skills import SkillDifficulty


@pytest.fixture
def firebolt() -> Spell:
    return Spell("Firebolt", MagicBranch.ELEMENTALISM, SpellDifficulty.NORMAL)


@pytest.fixture
def mage(firebolt) -> MagicUser:
    """Empathy 7 caster knowing Firebolt at level 4."""
    caster = MagicUser(empathy=7)
    caster.add_lore(MagicBranch.ELEMENTALISM, 5)
    caster.learn_spell(firebolt, level=4)
    return caster


class TestSpells:
    """Tests for spell definitions."""

    def test_target_numbers(self):
        """Test Easy 8, Normal 10, Hard 12."""
        assert SpellDifficulty.EASY.target_number == 8
        assert SpellDifficulty.NORMAL.target_number == 10
        assert SpellDifficulty.HARD.target_number == 12

    def test_default_power(self):
        """Test power follows difficulty unless set."""
        assert Spell("Light", MagicBranch.THAUMATURGY, SpellDifficulty.EASY).power == 1
        assert Spell("Storm", MagicBranch.ELEMENTALISM, SpellDifficulty.HARD).power == 3
        assert Spell("Storm", MagicBranch.ELEMENTALISM, SpellDifficulty.HARD, power=5).power == 5

    def test_branch_lore_difficulty(self):
        """Test lore difficulty per branch."""
        assert MagicBranch.DIVINATION.lore_difficulty == SkillDifficulty.NORMAL
        assert MagicBranch.ALCHEMY.lore_difficulty == SkillDifficulty.HARD
        assert MagicBranch.NECROMANCY.lore_difficulty == SkillDifficulty.VERY_HARD
        assert len(MagicBranch) == 9


class TestLearning:
    """Tests for lore and spell learning."""

    def test_learn_without_lore(self, firebolt):
        """Test a spell cannot be learned without branch lore."""
        caster = MagicUser(empathy=7)
        outcome = caster.learn_spell(firebolt, level=1)
        assert outcome.reason == FailureReason.INSUFFICIENT_LORE
        assert not caster.knows("Firebolt")

    def test_learn_above_lore(self, firebolt):
        """Test a spell level cannot exceed the branch lore level."""
        caster = MagicUser(empathy=7)
        caster.add_lore(MagicBranch.ELEMENTALISM, 2)
        assert caster.learn_spell(firebolt, level=3).reason == FailureReason.INSUFFICIENT_LORE
        assert caster.learn_spell(firebolt, level=2).success

    def test_lore_cost(self):
        """Test lore follows the skill cost curve against empathy."""
        caster = MagicUser(empathy=5)
        assert caster.lore_cost(MagicBranch.DIVINATION, 0, 3) == 3
        assert caster.lore_cost(MagicBranch.CONJURATION, 0, 2) == 6
        assert caster.lore_cost(MagicBranch.DIVINATION, 5, 6) == 2

    def test_lore_out_of_range(self):
        """Test lore levels outside 0-10 are rejected."""
        with pytest.raises(ValueError):
            MagicUser(empathy=5).add_lore(MagicBranch.ALCHEMY, 11)


class TestCasting:
    """Tests for casting."""

    def test_worked_example(self, mage):
        """Test skill 4 + empathy 7 + roll 2 against 10 succeeds with quality 3."""
        result = mage.cast("Firebolt", SequenceDie([2]))
        assert result.success
        assert result.total == 13
        assert result.target == 10
        assert result.quality == 3
        assert result.exhaustion_added == 2
        assert mage.exhaustion == 2

    def test_exact_target_succeeds(self, mage):
        """Test meeting the target is a success of quality 0."""
        mage.spells["Firebolt"].level = 1
        result = mage.cast("Firebolt", SequenceDie([2]))
        assert result.success
        assert result.quality == 0

    def test_failure_costs_double(self, firebolt):
        """Test a failed cast still adds twice the power in exhaustion."""
        caster = MagicUser(empathy=2)
        caster.add_lore(MagicBranch.ELEMENTALISM, 1)
        caster.learn_spell(firebolt, level=1)
        result = caster.cast("Firebolt", SequenceDie([1]))
        assert not result.success
        assert result.quality == 0
        assert result.exhaustion_added == 4
        assert caster.exhaustion == 4

    def test_unknown_spell(self, mage):
        """Test casting an unlearned spell fails without cost."""
        die = SequenceDie([5])
        result = mage.cast("Teleport", die)
        assert result.reason == FailureReason.SPELL_UNKNOWN
        assert not result.attempted
        assert mage.exhaustion == 0
        assert die.rolls_made == 0

    def test_lore_lost(self, mage):
        """Test a caster whose lore is gone cannot cast."""
        mage.add_lore(MagicBranch.ELEMENTALISM, 0)
        result = mage.cast("Firebolt", SequenceDie([5]))
        assert result.reason == FailureReason.INSUFFICIENT_LORE


class TestCastLogging:
    """Tests for casts recorded in a combat log."""

    def test_cast_logged(self, firebolt):
        """Test an attempted cast writes a SPELL_CAST entry for the caster."""
        caster = MagicUser(empathy=7, name="Morwen")
        caster.add_lore(MagicBranch.ELEMENTALISM, 5)
        caster.learn_spell(firebolt, level=4)
        logger = CombatLogger(combat_id=2)

        caster.cast("Firebolt", SequenceDie([2]), logger=logger, round_number=3)

        casts = logger.get_log().get_entries_by_type(LogEventType.SPELL_CAST)
        assert len(casts) == 1
        assert casts[0].combatant == "Morwen"
        assert casts[0].round_number == 3
        assert casts[0].value == 3
        assert "Firebolt: success (quality 3)" in logger.get_log().format_readable()

    def test_refused_cast_not_logged(self, mage):
        """Test a cast refused before rolling leaves the log empty."""
        logger = CombatLogger(combat_id=2)
        mage.cast("Teleport", SequenceDie([5]), logger=logger)
        assert logger.get_log().entries == []


class TestMagicalExhaustion:
    """Tests for magical exhaustion and recovery."""

    def test_banded_against_empathy(self):
        """Test magical exhaustion levels use empathy as the ceiling."""
        caster = MagicUser(empathy=3)
        caster.exhaustion = 4
        assert caster.exhaustion_level == ExhaustionLevel.LIGHT
        caster.exhaustion = 6
        assert caster.exhaustion_level == ExhaustionLevel.SEVERE
        assert caster.attack_modifier() == -2
        assert caster.defense_modifier() == -2
        assert caster.damage_modifier() == 0

    def test_recover(self, mage):
        """Test recovery removes one point per hour, never below zero."""
        mage.exhaustion = 5
        assert mage.recover(3) == 3
        assert mage.exhaustion == 2
        assert mage.recover(10) == 2
        assert mage.exhaustion == 0
