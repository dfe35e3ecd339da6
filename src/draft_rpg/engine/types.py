"""Type definitions for the combat engine."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..errors import FailureReason, Outcome
from ..models.enums import WoundLevel

if TYPE_CHECKING:
    from ..models.character import Combatant
    from ..rules.hit_location import HitLocation, LocationWoundResult
    from .dice import DieRoller


@runtime_checkable
class ModifierSource(Protocol):
    """Something that shifts attack rolls, defense rolls or damage.

    Each query reads only the owning entity's state.
    """

    def attack_modifier(self) -> int: ...

    def defense_modifier(self) -> int: ...

    def damage_modifier(self) -> int: ...


@runtime_checkable
class ActionGate(Protocol):
    """Something that can forbid its owner from attacking this round.

    `check_attack` only decides. `commit_attack` is called once every gate
    has passed and the attack goes ahead.
    """

    def check_attack(self, combatant: Combatant, die: DieRoller) -> Outcome: ...

    def commit_attack(self) -> None: ...


@dataclass(frozen=True)
class Modifiers:
    """Summed modifiers for one combatant."""

    attack: int = 0
    defense: int = 0
    damage: int = 0

    def __add__(self, other: Modifiers) -> Modifiers:
        return Modifiers(
            attack=self.attack + other.attack,
            defense=self.defense + other.defense,
            damage=self.damage + other.damage,
        )

    @classmethod
    def of(cls, source: ModifierSource) -> Modifiers:
        return cls(
            attack=source.attack_modifier(),
            defense=source.defense_modifier(),
            damage=source.damage_modifier(),
        )


def aggregate(sources: Iterable[object]) -> Modifiers:
    """Sum every category over the sources that implement the protocol."""
    total = Modifiers()
    for source in sources:
        if isinstance(source, ModifierSource):
            total = total + Modifiers.of(source)
    return total


@dataclass
class ModifierSources:
    """Optional modifier sources active for each side of a round."""

    attacker: list[object] = field(default_factory=list)
    defender: list[object] = field(default_factory=list)


class RoundPhase(str, Enum):
    """States a round passes through."""

    IDLE = "idle"
    ATTACK_ROLLED = "attack_rolled"
    DEFENSE_ROLLED = "defense_rolled"
    MISS = "miss"
    DAMAGE_COMPUTED = "damage_computed"
    WOUND_APPLIED = "wound_applied"
    DEAD = "dead"
    BLOCKED = "blocked"  # An action gate refused the attack


@dataclass(frozen=True)
class CombatResult:
    """Outcome of one attacker/defender exchange."""

    attacker: str
    defender: str
    hit: bool
    damage: int
    wound_level: WoundLevel | None
    narrative: str
    attack_roll: int = 0
    defense_roll: int = 0
    defender_died: bool = False
    hit_location: HitLocation | None = None
    location_wound: LocationWoundResult | None = None
    blocked_by: FailureReason | None = None
    phase: RoundPhase = RoundPhase.IDLE

    @property
    def performed(self) -> bool:
        """False when the attack was refused before any roll."""
        return self.blocked_by is None

    @property
    def is_graze(self) -> bool:
        """A hit whose damage was fully absorbed."""
        return self.hit and self.wound_level is None
