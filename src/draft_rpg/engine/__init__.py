"""Combat engine module - dice, round resolution, combat log and duels."""

from .dice import DIE_MAX, DIE_MIN, DieRoller, RandomDie, SequenceDie
from .duel import DuelEngine, DuelResult, Fighter
from .logging import CombatLog, CombatLogger, LogEntry, LogEventType, StateSnapshot
from .resolver import CombatResolver, raw_damage
from .types import (
    ActionGate,
    CombatResult,
    Modifiers,
    ModifierSource,
    ModifierSources,
    RoundPhase,
    aggregate,
)

__all__ = [
    "DIE_MAX",
    "DIE_MIN",
    "DieRoller",
    "RandomDie",
    "SequenceDie",
    "DuelEngine",
    "DuelResult",
    "Fighter",
    "CombatLogger",
    "CombatLog",
    "LogEntry",
    "LogEventType",
    "StateSnapshot",
    "CombatResolver",
    "raw_damage",
    "ActionGate",
    "CombatResult",
    "Modifiers",
    "ModifierSource",
    "ModifierSources",
    "RoundPhase",
    "aggregate",
]
