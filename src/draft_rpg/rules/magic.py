"""Lore, spells and casting."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..errors import FailureReason, Outcome
from .exhaustion import ExhaustionLevel
from .exhaustion import exhaustion_level as band_exhaustion
from .skills import SKILL_LEVEL_CAP, SkillDifficulty, upgrade_cost

if TYPE_CHECKING:
    from ..engine.dice import DieRoller
    from ..engine.logging import CombatLogger


class MagicBranch(str, Enum):
    """Branches of magical lore."""

    ALCHEMY = "alchemy"
    ANIMATION = "animation"
    CONJURATION = "conjuration"
    DIVINATION = "divination"
    ELEMENTALISM = "elementalism"
    MENTALISM = "mentalism"
    NECROMANCY = "necromancy"
    THAUMATURGY = "thaumaturgy"
    TRANSPORTATION = "transportation"

    @property
    def lore_difficulty(self) -> SkillDifficulty:
        return _LORE_DIFFICULTY[self]


_LORE_DIFFICULTY = {
    MagicBranch.ALCHEMY: SkillDifficulty.HARD,
    MagicBranch.ANIMATION: SkillDifficulty.HARD,
    MagicBranch.CONJURATION: SkillDifficulty.VERY_HARD,
    MagicBranch.DIVINATION: SkillDifficulty.NORMAL,
    MagicBranch.ELEMENTALISM: SkillDifficulty.VERY_HARD,
    MagicBranch.MENTALISM: SkillDifficulty.HARD,
    MagicBranch.NECROMANCY: SkillDifficulty.VERY_HARD,
    MagicBranch.THAUMATURGY: SkillDifficulty.HARD,
    MagicBranch.TRANSPORTATION: SkillDifficulty.VERY_HARD,
}


class SpellDifficulty(str, Enum):
    """Spell difficulty and its casting target number."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"

    @property
    def target_number(self) -> int:
        return _SPELL_TARGETS[self]

    @property
    def default_power(self) -> int:
        return _SPELL_POWER[self]


_SPELL_TARGETS = {
    SpellDifficulty.EASY: 8,
    SpellDifficulty.NORMAL: 10,
    SpellDifficulty.HARD: 12,
}

_SPELL_POWER = {
    SpellDifficulty.EASY: 1,
    SpellDifficulty.NORMAL: 2,
    SpellDifficulty.HARD: 3,
}


@dataclass(frozen=True)
class Spell:
    """A spell definition. Power is the magical exhaustion one cast costs."""

    name: str
    branch: MagicBranch
    difficulty: SpellDifficulty = SpellDifficulty.NORMAL
    power: int | None = None
    preparation_time: int = 1
    casting_time: int = 1

    def __post_init__(self) -> None:
        if self.power is None:
            object.__setattr__(self, "power", self.difficulty.default_power)
        if self.power < 1:
            raise ValueError(f"Spell power must be positive, got {self.power}")


@dataclass
class KnownSpell:
    spell: Spell
    level: int


@dataclass(frozen=True)
class CastingResult:
    """Outcome of a casting attempt."""

    success: bool
    message: str
    spell_name: str
    reason: FailureReason | None = None
    roll: int = 0
    total: int = 0
    target: int = 0
    quality: int = 0
    exhaustion_added: int = 0

    @property
    def attempted(self) -> bool:
        """False when the cast was refused before rolling."""
        return self.target > 0


class MagicUser:
    """Lore, known spells and magical exhaustion of a caster.

    Magical exhaustion is banded against empathy the same way physical
    exhaustion is banded against stamina, and its penalty reaches combat
    rolls through the modifier protocol.
    """

    def __init__(self, empathy: int, name: str = "Caster") -> None:
        if not 1 <= empathy <= 10:
            raise ValueError(f"Empathy must be 1-10, got {empathy}")
        self.empathy = empathy
        self.name = name
        self.lore: dict[MagicBranch, int] = {}
        self.spells: dict[str, KnownSpell] = {}
        self.exhaustion = 0

    def add_lore(self, branch: MagicBranch, level: int) -> None:
        if not 0 <= level <= SKILL_LEVEL_CAP:
            raise ValueError(f"Lore level must be 0-{SKILL_LEVEL_CAP}, got {level}")
        self.lore[branch] = level

    def lore_level(self, branch: MagicBranch) -> int:
        return self.lore.get(branch, 0)

    def lore_cost(self, branch: MagicBranch, from_level: int, to_level: int) -> int:
        """Skill points needed to study a branch from one level to another."""
        return upgrade_cost(from_level, to_level, self.empathy, branch.lore_difficulty)

    def learn_spell(self, spell: Spell, level: int = 1) -> Outcome:
        lore = self.lore_level(spell.branch)
        if lore == 0:
            return Outcome.fail(
                FailureReason.INSUFFICIENT_LORE,
                f"{spell.name} requires {spell.branch.value} lore",
            )
        if level > lore:
            return Outcome.fail(
                FailureReason.INSUFFICIENT_LORE,
                f"{spell.name} at level {level} requires {spell.branch.value} lore {level}, have {lore}",
            )
        if level < 1:
            return Outcome.fail(FailureReason.INVALID_SKILL, f"Spell level must be at least 1, got {level}")
        self.spells[spell.name] = KnownSpell(spell=spell, level=level)
        return Outcome.ok(f"Learned {spell.name} at level {level}")

    def knows(self, name: str) -> bool:
        return name in self.spells

    def cast(
        self,
        name: str,
        die: DieRoller,
        logger: CombatLogger | None = None,
        round_number: int = 0,
    ) -> CastingResult:
        """Cast a known spell: skill + empathy + d10 against the target number.

        Refused casts make no roll and are not logged.
        """
        known = self.spells.get(name)
        if known is None:
            return CastingResult(
                success=False,
                message=f"{name} is not known",
                spell_name=name,
                reason=FailureReason.SPELL_UNKNOWN,
            )
        spell = known.spell
        if self.lore_level(spell.branch) == 0:
            return CastingResult(
                success=False,
                message=f"No {spell.branch.value} lore to cast {name}",
                spell_name=name,
                reason=FailureReason.INSUFFICIENT_LORE,
            )

        roll = die.roll()
        total = known.level + self.empathy + roll
        target = spell.difficulty.target_number
        success = total >= target
        exhaustion = spell.power if success else spell.power * 2
        self.exhaustion += exhaustion
        quality = max(0, total - target)
        if logger:
            logger.log_spell_cast(round_number, self.name, name, success, quality)

        return CastingResult(
            success=success,
            message=f"{name} {'succeeds' if success else 'fails'} ({total} vs {target})",
            spell_name=name,
            roll=roll,
            total=total,
            target=target,
            quality=quality,
            exhaustion_added=exhaustion,
        )

    def recover(self, hours: int) -> int:
        """Rest off magical exhaustion, one point per hour."""
        if hours < 0:
            raise ValueError(f"Cannot recover for negative time, got {hours}")
        recovered = min(self.exhaustion, hours)
        self.exhaustion -= recovered
        return recovered

    @property
    def exhaustion_level(self) -> ExhaustionLevel:
        return band_exhaustion(self.exhaustion, self.empathy)

    @property
    def penalty(self) -> int:
        return self.exhaustion_level.penalty

    def attack_modifier(self) -> int:
        return self.penalty

    def defense_modifier(self) -> int:
        return self.penalty

    def damage_modifier(self) -> int:
        return 0
