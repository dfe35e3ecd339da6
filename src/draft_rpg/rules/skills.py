"""Skill progression with a point budget."""

from dataclasses import dataclass, field
from enum import Enum

from ..errors import FailureReason, Outcome

SKILL_LEVEL_CAP = 10


class SkillDifficulty(str, Enum):
    """How hard a skill is to learn."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    VERY_HARD = "very_hard"

    @property
    def multiplier(self) -> int:
        return _DIFFICULTY_MULTIPLIERS[self]


_DIFFICULTY_MULTIPLIERS = {
    SkillDifficulty.EASY: 1,
    SkillDifficulty.NORMAL: 1,
    SkillDifficulty.HARD: 2,
    SkillDifficulty.VERY_HARD: 3,
}


def marginal_cost(level: int, attribute: int, difficulty: SkillDifficulty) -> int:
    """Cost of reaching `level` from the level below it.

    Up to the governing attribute, Easy skills cost a single point in total
    (paid at level 1) and the others cost their multiplier per level. Past
    the attribute every level costs (level - attribute + 1) x multiplier.
    """
    if level < 1:
        raise ValueError(f"Level must be at least 1, got {level}")
    if level > attribute:
        return (level - attribute + 1) * difficulty.multiplier
    if difficulty == SkillDifficulty.EASY:
        return 1 if level == 1 else 0
    return difficulty.multiplier


def upgrade_cost(from_level: int, to_level: int, attribute: int, difficulty: SkillDifficulty) -> int:
    """Total cost of raising a skill from one level to a higher one."""
    return sum(marginal_cost(level, attribute, difficulty) for level in range(from_level + 1, to_level + 1))


@dataclass(frozen=True)
class SkillPrerequisite:
    """Another skill that must be known at a minimum level."""

    skill_name: str
    minimum_level: int = 1


@dataclass
class Skill:
    """A learned skill.

    `attribute` is the score of the governing attribute, which sets where
    the cost curve starts climbing.
    """

    name: str
    attribute: int
    difficulty: SkillDifficulty = SkillDifficulty.NORMAL
    level: int = 0
    prerequisites: list[SkillPrerequisite] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not 0 <= self.level <= SKILL_LEVEL_CAP:
            raise ValueError(f"Skill level must be 0-{SKILL_LEVEL_CAP}, got {self.level}")

    def next_level_cost(self) -> int:
        return marginal_cost(self.level + 1, self.attribute, self.difficulty)


class SkillSet:
    """Skills of one character and the points left to spend on them.

    Every operation either succeeds completely or leaves both the skills and
    the budget untouched.
    """

    def __init__(self, points: int) -> None:
        if points < 0:
            raise ValueError(f"Skill points cannot be negative, got {points}")
        self.points = points
        self.skills: dict[str, Skill] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.skills

    def level_of(self, name: str) -> int:
        skill = self.skills.get(name)
        return skill.level if skill else 0

    def prerequisites_met(self, skill: Skill) -> bool:
        return all(self.level_of(req.skill_name) >= req.minimum_level for req in skill.prerequisites)

    def _missing_prerequisites(self, skill: Skill) -> str:
        missing = [
            f"{req.skill_name} {req.minimum_level}"
            for req in skill.prerequisites
            if self.level_of(req.skill_name) < req.minimum_level
        ]
        return ", ".join(missing)

    def add_skill(self, skill: Skill) -> Outcome:
        """Learn a new skill, paying for its starting level (at least 1)."""
        if skill.name in self.skills:
            return Outcome.fail(FailureReason.DUPLICATE_SKILL, f"{skill.name} is already known")
        if not self.prerequisites_met(skill):
            return Outcome.fail(
                FailureReason.PREREQUISITE_NOT_MET,
                f"{skill.name} requires {self._missing_prerequisites(skill)}",
            )

        target = max(1, skill.level)
        cost = upgrade_cost(0, target, skill.attribute, skill.difficulty)
        if cost > self.points:
            return Outcome.fail(
                FailureReason.BUDGET_EXCEEDED,
                f"{skill.name} costs {cost} points, {self.points} available",
            )

        self.points -= cost
        skill.level = target
        self.skills[skill.name] = skill
        return Outcome.ok(f"Learned {skill.name} at level {target} for {cost} points")

    def raise_skill(self, name: str) -> Outcome:
        """Raise a known skill by one level."""
        skill = self.skills.get(name)
        if skill is None:
            return Outcome.fail(FailureReason.UNKNOWN_SKILL, f"{name} has not been learned")
        if skill.level >= SKILL_LEVEL_CAP:
            return Outcome.fail(FailureReason.AT_CAP, f"{name} is already at level {SKILL_LEVEL_CAP}")
        if not self.prerequisites_met(skill):
            return Outcome.fail(
                FailureReason.PREREQUISITE_NOT_MET,
                f"{name} requires {self._missing_prerequisites(skill)}",
            )

        cost = skill.next_level_cost()
        if cost > self.points:
            return Outcome.fail(
                FailureReason.BUDGET_EXCEEDED,
                f"Raising {name} to {skill.level + 1} costs {cost} points, {self.points} available",
            )

        self.points -= cost
        skill.level += 1
        return Outcome.ok(f"{name} raised to {skill.level} for {cost} points")
