"""Custom exception hierarchy for the program engine.

Domain edge cases (tiny budgets, odd ages, missing counters) are clamped or
defaulted and never raise. These exceptions mark caller contract violations.
"""

from __future__ import annotations


class ProgramEngineError(Exception):
    """Base exception for all program_engine errors."""


class InvalidConfigError(ProgramEngineError, ValueError):
    """The configuration cannot be planned (bad horizon, unparseable start date)."""


class PhaseTransitionError(ProgramEngineError):
    """A requested phase command is not valid from the current phase."""

    def __init__(self, message: str, phase: object | None = None) -> None:
        super().__init__(message)
        self.phase = phase


class RecordError(ProgramEngineError, ValueError):
    """A persisted record is too malformed to map."""
