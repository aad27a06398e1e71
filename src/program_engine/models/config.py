"""Program configuration: the immutable half of the generator's input."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from program_engine.models.enums import Weekday


@dataclass(frozen=True)
class ProgramConfig:
    """A player's long-term training settings.

    Values are taken as given; the policy resolver clamps age-dependent
    limits and the engine validates the start date and horizon.
    """

    age: int
    program_start_date: date | str
    horizon_weeks: int = 2
    in_season: bool = False
    game_days: frozenset[Weekday] = field(default_factory=frozenset)
    training_days: frozenset[Weekday] = field(
        default_factory=lambda: frozenset({Weekday.MON, Weekday.WED, Weekday.FRI})
    )
    desired_sessions_per_week: int = 3
    desired_session_minutes: float = 45.0
    has_space_to_hit_balls: bool = True

    def is_game_day(self, weekday: Weekday) -> bool:
        """Game days only count while the player is in season."""
        return self.in_season and weekday in self.game_days

    def is_candidate_training_day(self, weekday: Weekday) -> bool:
        return weekday in self.training_days
