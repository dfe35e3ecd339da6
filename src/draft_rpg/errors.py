"""Rule failure outcomes.

Rule violations are local and recoverable, so fallible operations report them
as values instead of raising.
"""

from dataclasses import dataclass
from enum import Enum


class FailureReason(str, Enum):
    """Why a rule operation was refused."""

    # Character construction
    INVALID_NAME = "invalid_name"
    INVALID_ATTRIBUTE = "invalid_attribute"
    INVALID_SKILL = "invalid_skill"
    INVALID_EQUIPMENT = "invalid_equipment"

    # Combat actions
    ACTION_NOT_ALLOWED = "action_not_allowed"
    WILLPOWER_CHECK_FAILED = "willpower_check_failed"

    # Skill advancement
    UNKNOWN_SKILL = "unknown_skill"
    DUPLICATE_SKILL = "duplicate_skill"
    PREREQUISITE_NOT_MET = "prerequisite_not_met"
    AT_CAP = "at_cap"
    BUDGET_EXCEEDED = "budget_exceeded"

    # Magic
    INSUFFICIENT_LORE = "insufficient_lore"
    SPELL_UNKNOWN = "spell_unknown"

    # Ranged combat
    NOT_PREPARED = "not_prepared"
    RATE_EXCEEDED = "rate_exceeded"


@dataclass(frozen=True)
class Outcome:
    """Result of a fallible rule operation."""

    success: bool
    message: str
    reason: FailureReason | None = None

    @classmethod
    def ok(cls, message: str = "OK") -> "Outcome":
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, reason: FailureReason, message: str) -> "Outcome":
        return cls(success=False, message=message, reason=reason)

    def __bool__(self) -> bool:
        return self.success
