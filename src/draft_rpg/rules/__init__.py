"""Optional rule modules that plug into round resolution as modifier sources."""

from .exhaustion import Exhaustion, ExhaustionLevel, exhaustion_level
from .hit_location import (
    AttackDirection,
    HitLocation,
    LocationalDamage,
    LocationState,
    LocationStatus,
    LocationWoundResult,
    determine_location,
)
from .magic import CastingResult, MagicBranch, MagicUser, Spell, SpellDifficulty
from .maneuvers import Maneuver, Stance
from .ranged import (
    Cover,
    RangeBand,
    RangedAttackState,
    RangedModifier,
    RangedShot,
    RangedWeapon,
    TargetSize,
    calculate_ranged_modifier,
)
from .skills import Skill, SkillDifficulty, SkillPrerequisite, SkillSet, marginal_cost, upgrade_cost

__all__ = [
    "Exhaustion",
    "ExhaustionLevel",
    "exhaustion_level",
    "AttackDirection",
    "HitLocation",
    "LocationalDamage",
    "LocationState",
    "LocationStatus",
    "LocationWoundResult",
    "determine_location",
    "CastingResult",
    "MagicBranch",
    "MagicUser",
    "Spell",
    "SpellDifficulty",
    "Maneuver",
    "Stance",
    "Cover",
    "RangeBand",
    "RangedAttackState",
    "RangedModifier",
    "RangedShot",
    "RangedWeapon",
    "TargetSize",
    "calculate_ranged_modifier",
    "Skill",
    "SkillDifficulty",
    "SkillPrerequisite",
    "SkillSet",
    "marginal_cost",
    "upgrade_cost",
]
