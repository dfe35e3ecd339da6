"""Randomness source for round resolution.

Every resolver and duel takes its die as a constructor argument, so a combat
can be replayed exactly by handing it a seeded or scripted die.
"""

import random
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

DIE_MIN = 1
DIE_MAX = 10


@runtime_checkable
class DieRoller(Protocol):
    """Anything that produces a d10 result."""

    def roll(self) -> int: ...


class RandomDie:
    """Uniform d10 backed by a private random generator."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def roll(self) -> int:
        return self._rng.randint(DIE_MIN, DIE_MAX)


class SequenceDie:
    """Replays a fixed sequence of rolls, wrapping around at the end."""

    def __init__(self, rolls: Iterable[int]) -> None:
        self._rolls = list(rolls)
        if not self._rolls:
            raise ValueError("SequenceDie needs at least one roll")
        for value in self._rolls:
            if not DIE_MIN <= value <= DIE_MAX:
                raise ValueError(f"Roll {value} outside {DIE_MIN}-{DIE_MAX}")
        self._index = 0
        self.rolls_made = 0

    def roll(self) -> int:
        value = self._rolls[self._index]
        self._index = (self._index + 1) % len(self._rolls)
        self.rolls_made += 1
        return value
