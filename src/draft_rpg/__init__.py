"""Draft RPG - a deterministic tabletop combat rules engine."""

__version__ = "0.1.0"
