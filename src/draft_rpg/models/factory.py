"""Character factory - builds combatants from validated descriptors."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from ..errors import FailureReason
from .character import Armor, Attributes, Combatant, Weapon
from .schemas import CharacterSpec

# Top-level descriptor field -> failure reason
_FIELD_REASONS = {
    "name": FailureReason.INVALID_NAME,
    "attributes": FailureReason.INVALID_ATTRIBUTE,
    "weapon_skill": FailureReason.INVALID_SKILL,
    "dodge_skill": FailureReason.INVALID_SKILL,
    "weapon": FailureReason.INVALID_EQUIPMENT,
    "armor": FailureReason.INVALID_EQUIPMENT,
}


@dataclass
class ConstructionIssue:
    """A single construction problem."""

    field: str
    message: str
    reason: FailureReason
    value: str | None = None


@dataclass
class ConstructionResult:
    """Result of building a combatant."""

    success: bool
    message: str
    combatant: Combatant | None = None
    errors: list[ConstructionIssue] = field(default_factory=list)

    def add_error(
        self,
        field: str,
        message: str,
        reason: FailureReason,
        value: str | None = None,
    ) -> None:
        """Add a construction problem."""
        self.errors.append(ConstructionIssue(field=field, message=message, reason=reason, value=value))
        self.success = False

    @property
    def reasons(self) -> set[FailureReason]:
        return {issue.reason for issue in self.errors}


class CharacterFactory:
    """Build combatants from character descriptors.

    Input is either a CharacterSpec or a plain mapping in the same shape
    (for example parsed from a file by the caller). Bad input is reported in
    the result, never raised.
    """

    def create(self, data: CharacterSpec | Mapping[str, Any]) -> ConstructionResult:
        """Create a combatant.

        Args:
            data: Character descriptor

        Returns:
            ConstructionResult with the combatant, or the problems found
        """
        result = ConstructionResult(success=True, message="Character created")

        if isinstance(data, CharacterSpec):
            spec = data
        else:
            try:
                spec = CharacterSpec.model_validate(data)
            except ValidationError as e:
                for error in e.errors():
                    self._add_validation_error(result, error)
                result.message = f"Invalid character: {len(result.errors)} problem(s)"
                return result

        try:
            attributes = Attributes(**spec.attributes.model_dump())
        except ValueError as e:
            result.add_error("attributes", str(e), FailureReason.INVALID_ATTRIBUTE)

        try:
            weapon = Weapon(name=spec.weapon.name, impact=spec.weapon.impact, damage=spec.weapon.damage)
        except ValueError as e:
            result.add_error("weapon", str(e), FailureReason.INVALID_EQUIPMENT)

        try:
            armor = Armor(
                name=spec.armor.name,
                armor_type=spec.armor.armor_type,
                protection=spec.armor.protection,
                movement_penalty=spec.armor.movement_penalty,
            )
        except ValueError as e:
            result.add_error("armor", str(e), FailureReason.INVALID_EQUIPMENT)

        if not result.success:
            result.message = f"Invalid character: {len(result.errors)} problem(s)"
            return result

        try:
            result.combatant = Combatant(
                name=spec.name,
                attributes=attributes,
                weapon_skill=spec.weapon_skill,
                dodge_skill=spec.dodge_skill,
                weapon=weapon,
                armor=armor,
            )
        except ValueError as e:
            result.add_error("skills", str(e), FailureReason.INVALID_SKILL)
            result.message = "Invalid character: 1 problem(s)"
            return result

        result.message = f"Created {spec.name}"
        return result

    @staticmethod
    def _add_validation_error(result: ConstructionResult, error: Mapping[str, Any]) -> None:
        loc = tuple(str(part) for part in error.get("loc", ()))
        top = loc[0] if loc else ""
        reason = _FIELD_REASONS.get(top, FailureReason.INVALID_ATTRIBUTE)
        value = error.get("input")
        result.add_error(
            ".".join(loc),
            error.get("msg", "invalid value"),
            reason,
            None if value is None or isinstance(value, dict) else str(value),
        )
