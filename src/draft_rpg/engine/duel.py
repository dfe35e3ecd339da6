"""Duel engine - runs two fighters against each other round by round."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..models.enums import DefenseChoice
from .resolver import CombatResolver
from .types import CombatResult, ModifierSources

if TYPE_CHECKING:
    from ..config import Settings
    from ..models.character import Combatant
    from ..rules.exhaustion import Exhaustion
    from ..rules.hit_location import AttackDirection, LocationalDamage
    from ..rules.magic import MagicUser
    from ..rules.maneuvers import Stance
    from .dice import DieRoller
    from .logging import CombatLog, CombatLogger

logger = logging.getLogger(__name__)


@dataclass
class Fighter:
    """A combatant together with the optional rule modules it fights with."""

    combatant: Combatant
    stance: Stance | None = None
    exhaustion: Exhaustion | None = None
    locations: LocationalDamage | None = None
    magic: MagicUser | None = None
    defense: DefenseChoice = DefenseChoice.PARRY
    direction: AttackDirection | None = None  # Side this fighter attacks from

    @property
    def name(self) -> str:
        return self.combatant.name

    def sources(self) -> list[object]:
        """Optional modifier sources this fighter brings to a round."""
        modules = (self.stance, self.exhaustion, self.locations, self.magic)
        return [module for module in modules if module is not None]


@dataclass
class DuelResult:
    """Result of a duel."""

    success: bool
    message: str
    winner: str | None = None
    rounds_played: int = 0
    results: list[CombatResult] = field(default_factory=list)
    combat_log: CombatLog | None = None

    @property
    def is_draw(self) -> bool:
        return self.winner is None


class DuelEngine:
    """Main duel engine - plays rounds until someone falls or time runs out."""

    def __init__(
        self,
        die: DieRoller,
        logger: CombatLogger | None = None,
        max_rounds: int = 10,
        fatigue_per_round: int = 1,
    ) -> None:
        if max_rounds < 1:
            raise ValueError(f"max_rounds must be positive, got {max_rounds}")
        self.die = die
        self.logger = logger
        self.max_rounds = max_rounds
        self.fatigue_per_round = fatigue_per_round
        self.resolver = CombatResolver(die, logger=logger)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        die: DieRoller,
        combat_logger: CombatLogger | None = None,
    ) -> DuelEngine:
        return cls(
            die,
            logger=combat_logger,
            max_rounds=settings.max_rounds,
            fatigue_per_round=settings.fatigue_per_round,
        )

    def play_round(self, first: Fighter, second: Fighter, round_number: int) -> list[CombatResult]:
        """Play one round: each fighter able to act attacks once, first goes first.

        Args:
            first: Fighter attacking first
            second: Fighter attacking second
            round_number: Number used in the combat log

        Returns:
            Results of the attacks made this round
        """
        combatants = [first.combatant, second.combatant]
        if self.logger:
            self.logger.log_round_start(round_number, combatants)

        results: list[CombatResult] = []
        for attacker, defender in ((first, second), (second, first)):
            if not attacker.combatant.can_act or not defender.combatant.is_alive:
                continue
            result = self.resolver.resolve(
                attacker.combatant,
                defender.combatant,
                defender.defense,
                ModifierSources(attacker=attacker.sources(), defender=defender.sources()),
                direction=attacker.direction,
                locations=defender.locations,
                round_number=round_number,
            )
            logger.debug("Round %d: %s", round_number, result.narrative)
            results.append(result)

        for fighter in (first, second):
            if fighter.exhaustion is not None and fighter.combatant.is_alive:
                fighter.exhaustion.add_points(self.fatigue_per_round)
            if fighter.stance is not None:
                fighter.stance.end_round()

        if self.logger:
            self.logger.log_round_end(round_number, combatants)
        return results

    def run(self, first: Fighter, second: Fighter) -> DuelResult:
        """Run a duel to its end."""
        results: list[CombatResult] = []
        rounds_played = 0

        for round_number in range(1, self.max_rounds + 1):
            results.extend(self.play_round(first, second, round_number))
            rounds_played = round_number
            if self._is_over(first, second):
                break

        winner = self._determine_winner(first, second)
        if winner is not None:
            message = f"{winner} wins after {rounds_played} rounds"
            if self.logger:
                self.logger.log_winner(rounds_played, winner)
        else:
            message = f"Draw after {rounds_played} rounds"
        logger.info(message)

        return DuelResult(
            success=True,
            message=message,
            winner=winner,
            rounds_played=rounds_played,
            results=results,
            combat_log=self.logger.get_log() if self.logger else None,
        )

    @staticmethod
    def _is_over(first: Fighter, second: Fighter) -> bool:
        a, b = first.combatant, second.combatant
        if not a.is_alive or not b.is_alive:
            return True
        return not a.can_act and not b.can_act

    @staticmethod
    def _determine_winner(first: Fighter, second: Fighter) -> str | None:
        """The fighter still able to act when the other is not."""
        a, b = first.combatant, second.combatant
        if a.can_act and not b.can_act:
            return a.name
        if b.can_act and not a.can_act:
            return b.name
        return None
