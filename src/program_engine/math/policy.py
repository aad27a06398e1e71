"""Age policy: session length and weekly frequency caps.

Every input is coerced into range, never rejected.
"""

from __future__ import annotations

from dataclasses import dataclass

from program_engine.models.config import ProgramConfig
from program_engine.models.enums import (
    MAX_TRAINING_DAYS_PER_WEEK,
    MIN_SESSION_MINUTES,
    SESSION_MINUTES_CAP,
    AgeBracket,
)


@dataclass(frozen=True)
class ProgramPolicy:
    """Age-resolved limits applied to every week of one generation run."""

    bracket: AgeBracket
    session_minutes: float
    max_training_days: int


def get_age_bracket(age: int) -> AgeBracket:
    if age <= 9:
        return AgeBracket.U9
    if age <= 14:
        return AgeBracket.AGE_10_14
    return AgeBracket.AGE_15_PRO


def resolve_session_minutes(age: int, desired_minutes: float) -> float:
    """Clamp desired session length into [15, cap] for the player's age.

    Caps: 30 min for age <= 9, 60 for 10-14, 90 for 15+.
    """
    cap = SESSION_MINUTES_CAP[get_age_bracket(age)]
    return max(MIN_SESSION_MINUTES, min(float(desired_minutes), cap))


def resolve_max_training_days(age: int, desired_per_week: int) -> int:
    """Clamp desired sessions/week to 3 (age <= 9) or 5, never below zero."""
    cap = MAX_TRAINING_DAYS_PER_WEEK[get_age_bracket(age)]
    return max(0, min(int(desired_per_week), cap))


def resolve_policy(config: ProgramConfig) -> ProgramPolicy:
    return ProgramPolicy(
        bracket=get_age_bracket(config.age),
        session_minutes=resolve_session_minutes(
            config.age, config.desired_session_minutes
        ),
        max_training_days=resolve_max_training_days(
            config.age, config.desired_sessions_per_week
        ),
    )
