"""Context handed to allocation rules for the day being planned."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from program_engine.models.enums import Weekday
from program_engine.models.phase import PhaseDefinition


@dataclass(frozen=True)
class DayContext:
    """Everything about one training day that the allocator and rules read.

    The progression state is passed alongside, never stored here.
    """

    date: date
    weekday: Weekday
    phase: PhaseDefinition
    session_minutes: float
    is_game_day: bool = False
    is_overspeed_day: bool = False
