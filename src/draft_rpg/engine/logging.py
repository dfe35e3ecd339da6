"""Combat logging system for tracking and verifying round resolution.

Provides structured logging of all combat events including:
- Round lifecycle and phase transitions
- Dice rolls with their totals
- Hits, misses and grazes with before/after wound state
- Blocked actions, shots fired and spells cast

A logger belongs to exactly one combat and is passed in explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from .types import RoundPhase

if TYPE_CHECKING:
    from ..errors import FailureReason
    from ..models.character import Combatant
    from ..models.enums import WoundLevel
    from ..rules.hit_location import LocationWoundResult


class LogEventType(str, Enum):
    """Types of log events."""

    # Round lifecycle
    ROUND_START = "round_start"
    ROUND_END = "round_end"
    PHASE_CHANGE = "phase_change"

    # Resolution
    ROLL = "roll"
    HIT = "hit"
    MISS = "miss"
    GRAZE = "graze"  # Hit that did not wound

    # Wounds
    WOUND_APPLIED = "wound_applied"
    LOCATION_WOUND = "location_wound"
    DEATH = "death"

    # Other actions
    ACTION_BLOCKED = "action_blocked"
    SHOT_FIRED = "shot_fired"
    SPELL_CAST = "spell_cast"

    # Win condition
    WINNER_DETERMINED = "winner_determined"


@dataclass
class StateSnapshot:
    """Snapshot of a combatant's wounds at a point in time."""

    name: str
    light: int
    severe: int
    critical: int
    dead: bool
    penalty: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "light": self.light,
            "severe": self.severe,
            "critical": self.critical,
            "dead": self.dead,
            "penalty": self.penalty,
        }


@dataclass
class LogEntry:
    """A single log entry representing a combat event."""

    event_type: LogEventType
    round_number: int
    timestamp_order: int = 0  # Order within the log for deterministic sorting

    # Event-specific data
    combatant: str | None = None
    target: str | None = None
    phase: RoundPhase | None = None
    roll_type: str | None = None
    die: int | None = None
    value: int | None = None
    wound_level: str | None = None
    location: str | None = None
    reason: str | None = None
    description: str | None = None

    # State before/after for wound events
    state_before: StateSnapshot | None = None
    state_after: StateSnapshot | None = None

    # For round boundaries - all combatants
    all_states: dict[str, StateSnapshot] | None = None

    winner: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "event_type": self.event_type.value,
            "round_number": self.round_number,
            "timestamp_order": self.timestamp_order,
        }

        if self.combatant is not None:
            result["combatant"] = self.combatant
        if self.target is not None:
            result["target"] = self.target
        if self.phase is not None:
            result["phase"] = self.phase.value
        if self.roll_type is not None:
            result["roll_type"] = self.roll_type
        if self.die is not None:
            result["die"] = self.die
        if self.value is not None:
            result["value"] = self.value
        if self.wound_level is not None:
            result["wound_level"] = self.wound_level
        if self.location is not None:
            result["location"] = self.location
        if self.reason is not None:
            result["reason"] = self.reason
        if self.description is not None:
            result["description"] = self.description
        if self.state_before is not None:
            result["state_before"] = self.state_before.to_dict()
        if self.state_after is not None:
            result["state_after"] = self.state_after.to_dict()
        if self.all_states is not None:
            result["all_states"] = {name: state.to_dict() for name, state in self.all_states.items()}
        if self.winner is not None:
            result["winner"] = self.winner

        return result


@dataclass
class CombatLog:
    """Complete log of a combat encounter."""

    combat_id: int
    entries: list[LogEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "combat_id": self.combat_id,
            "entries": [entry.to_dict() for entry in self.entries],
        }

    def get_entries_by_type(self, event_type: LogEventType) -> list[LogEntry]:
        """Get all entries of a specific type."""
        return [e for e in self.entries if e.event_type == event_type]

    def get_entries_for_round(self, round_number: int) -> list[LogEntry]:
        """Get all entries for a specific round."""
        return [e for e in self.entries if e.round_number == round_number]

    def get_entries_for_combatant(self, name: str) -> list[LogEntry]:
        """Get all entries where the combatant acted or was acted upon."""
        return [e for e in self.entries if name in (e.combatant, e.target)]

    def format_readable(self) -> str:
        """Format the log in a human-readable format."""
        lines: list[str] = []
        lines.append(f"=== Combat Log (Combat #{self.combat_id}) ===\n")

        current_round = -1
        for entry in self.entries:
            if entry.round_number != current_round:
                current_round = entry.round_number
                lines.append(f"\n--- Round {current_round} ---\n")
            lines.append(self._format_entry(entry))

        return "\n".join(lines)

    def _format_entry(self, entry: LogEntry) -> str:
        """Format a single log entry."""
        match entry.event_type:
            case LogEventType.ROUND_START:
                return f"  Round {entry.round_number} begins"

            case LogEventType.ROUND_END:
                if entry.all_states:
                    states = ", ".join(
                        f"{name}: L{s.light}/S{s.severe}/C{s.critical}{' (dead)' if s.dead else ''}"
                        for name, s in entry.all_states.items()
                    )
                    return f"  Round {entry.round_number} ends [{states}]"
                return f"  Round {entry.round_number} ends"

            case LogEventType.PHASE_CHANGE:
                return f"    {entry.combatant} -> {entry.phase.value if entry.phase else '?'}"

            case LogEventType.ROLL:
                return f"    {entry.combatant} rolls {entry.roll_type}: d10={entry.die}, total {entry.value}"

            case LogEventType.HIT:
                return f"    {entry.combatant} hits {entry.target} for {entry.value} damage"

            case LogEventType.MISS:
                return f"    {entry.combatant} misses {entry.target}"

            case LogEventType.GRAZE:
                return f"    {entry.combatant} grazes {entry.target} (no wound)"

            case LogEventType.WOUND_APPLIED:
                penalty = ""
                if entry.state_before and entry.state_after:
                    penalty = f" [penalty: {entry.state_before.penalty} -> {entry.state_after.penalty}]"
                return f"    {entry.target} takes a {entry.wound_level} wound{penalty}"

            case LogEventType.LOCATION_WOUND:
                return f"    {entry.target}'s {entry.location}: {entry.description}"

            case LogEventType.DEATH:
                return f"    *** {entry.combatant} dies ***"

            case LogEventType.ACTION_BLOCKED:
                return f"    {entry.combatant} cannot attack ({entry.reason}): {entry.description}"

            case LogEventType.SHOT_FIRED:
                return f"    {entry.combatant} fires: {entry.description}"

            case LogEventType.SPELL_CAST:
                return f"    {entry.combatant} casts {entry.description}"

            case LogEventType.WINNER_DETERMINED:
                return f"  *** WINNER: {entry.winner} ***"

            case _:
                return f"    {entry.event_type.value}: {entry.description or ''}"


class CombatLogger:
    """Logger for tracking combat events.

    Usage:
        logger = CombatLogger(combat_id=1)
        logger.log_round_start(round_number=1, combatants=[alice, bob])
        # ... resolve attacks with CombatResolver(die, logger) ...
        logger.log_round_end(round_number=1, combatants=[alice, bob])

        # Get the complete log
        log = logger.get_log()
        print(log.format_readable())
    """

    def __init__(self, combat_id: int = 1) -> None:
        """Initialize the logger for a combat."""
        self.combat_id = combat_id
        self._log = CombatLog(combat_id=combat_id)
        self._order_counter = 0

    def _next_order(self) -> int:
        """Get the next timestamp order value."""
        self._order_counter += 1
        return self._order_counter

    def _append(self, event_type: LogEventType, round_number: int, **data: Any) -> LogEntry:
        entry = LogEntry(
            event_type=event_type,
            round_number=round_number,
            timestamp_order=self._next_order(),
            **data,
        )
        self._log.entries.append(entry)
        return entry

    def get_log(self) -> CombatLog:
        """Get the complete combat log."""
        return self._log

    def clear(self) -> None:
        """Clear all log entries."""
        self._log.entries.clear()
        self._order_counter = 0

    @staticmethod
    def snapshot_state(combatant: Combatant) -> StateSnapshot:
        """Create a snapshot of a combatant's wounds."""
        wounds = combatant.wounds
        return StateSnapshot(
            name=combatant.name,
            light=wounds.light,
            severe=wounds.severe,
            critical=wounds.critical,
            dead=wounds.dead,
            penalty=wounds.penalty,
        )

    def log_round_start(self, round_number: int, combatants: list[Combatant]) -> None:
        """Log the start of a round with initial state snapshot."""
        self._append(
            LogEventType.ROUND_START,
            round_number,
            all_states={c.name: self.snapshot_state(c) for c in combatants},
        )

    def log_round_end(self, round_number: int, combatants: list[Combatant]) -> None:
        """Log the end of a round with final state snapshot."""
        self._append(
            LogEventType.ROUND_END,
            round_number,
            all_states={c.name: self.snapshot_state(c) for c in combatants},
        )

    def log_phase_change(self, round_number: int, combatant: str, phase: RoundPhase) -> None:
        self._append(LogEventType.PHASE_CHANGE, round_number, combatant=combatant, phase=phase)

    def log_roll(self, round_number: int, combatant: str, roll_type: str, die: int, total: int) -> None:
        """Log a die roll and the total it produced."""
        self._append(
            LogEventType.ROLL,
            round_number,
            combatant=combatant,
            roll_type=roll_type,
            die=die,
            value=total,
        )

    def log_hit(self, round_number: int, attacker: str, defender: str, damage: int) -> None:
        self._append(LogEventType.HIT, round_number, combatant=attacker, target=defender, value=damage)

    def log_miss(self, round_number: int, attacker: str, defender: str) -> None:
        self._append(LogEventType.MISS, round_number, combatant=attacker, target=defender)

    def log_graze(self, round_number: int, attacker: str, defender: str) -> None:
        self._append(LogEventType.GRAZE, round_number, combatant=attacker, target=defender, value=0)

    def log_wound(
        self,
        round_number: int,
        defender: Combatant,
        level: WoundLevel,
        damage: int,
        state_before: StateSnapshot,
    ) -> None:
        """Log a wound with before/after state."""
        self._append(
            LogEventType.WOUND_APPLIED,
            round_number,
            target=defender.name,
            wound_level=level.value,
            value=damage,
            state_before=state_before,
            state_after=self.snapshot_state(defender),
        )

    def log_location_wound(self, round_number: int, defender: str, result: LocationWoundResult) -> None:
        if result.no_effect:
            description = "already severed, no effect"
        elif result.level is None:
            description = f"{result.damage} damage, no wound"
        else:
            description = f"{result.level.value} wound ({result.damage} damage), {result.status.value}"
        self._append(
            LogEventType.LOCATION_WOUND,
            round_number,
            target=defender,
            location=result.location.value,
            wound_level=result.level.value if result.level else None,
            value=result.damage,
            description=description,
        )

    def log_death(self, round_number: int, combatant: str) -> None:
        self._append(LogEventType.DEATH, round_number, combatant=combatant)

    def log_action_blocked(self, round_number: int, combatant: str, reason: FailureReason, message: str) -> None:
        """Log an attack that a stance, exhaustion or injury refused."""
        self._append(
            LogEventType.ACTION_BLOCKED,
            round_number,
            combatant=combatant,
            reason=reason.value,
            description=message,
        )

    def log_shot_fired(self, round_number: int, combatant: str, target: str, weapon: str, distance: int) -> None:
        self._append(
            LogEventType.SHOT_FIRED,
            round_number,
            combatant=combatant,
            target=target,
            value=distance,
            description=f"{weapon} at {target}, {distance} m",
        )

    def log_spell_cast(self, round_number: int, caster: str, spell_name: str, success: bool, quality: int) -> None:
        self._append(
            LogEventType.SPELL_CAST,
            round_number,
            combatant=caster,
            value=quality,
            description=f"{spell_name}: {'success' if success else 'failure'} (quality {quality})",
        )

    def log_winner(self, round_number: int, winner: str) -> None:
        """Log the winner determination."""
        self._append(LogEventType.WINNER_DETERMINED, round_number, winner=winner)
