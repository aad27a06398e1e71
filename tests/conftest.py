"""Shared test fixtures: player configs, progression states, day contexts."""

from __future__ import annotations

from datetime import date
from typing import Any, Callable

import pytest

from program_engine.models.config import ProgramConfig
from program_engine.models.day_context import DayContext
from program_engine.models.enums import PhaseId, Weekday
from program_engine.models.phase import get_phase_definition
from program_engine.models.progression import ProgressionState

MONDAY = date(2026, 1, 5)


@pytest.fixture
def monday() -> date:
    """A Monday, so week offsets line up with weekday values."""
    return MONDAY


@pytest.fixture
def fresh_state() -> ProgressionState:
    """Brand-new player on RAMP1 with no sessions or assessments."""
    return ProgressionState(
        current_phase=PhaseId.RAMP1,
        phase_start_date=MONDAY,
        program_start_date=MONDAY,
    )


@pytest.fixture
def standard_config() -> ProgramConfig:
    """12-year-old, off-season, Mon/Wed/Fri, 3 x 45 min."""
    return ProgramConfig(age=12, program_start_date=MONDAY)


@pytest.fixture
def state_factory() -> Callable[..., ProgressionState]:
    """Factory fixture for ProgressionState with keyword overrides.

    Usage:
        state = state_factory(current_phase=PhaseId.PRIMARY1, total_overspeed_sessions=15)
    """

    def factory(**overrides: Any) -> ProgressionState:
        kwargs: dict[str, Any] = {
            "current_phase": PhaseId.RAMP1,
            "phase_start_date": MONDAY,
            "program_start_date": MONDAY,
        }
        kwargs.update(overrides)
        return ProgressionState(**kwargs)

    return factory


@pytest.fixture
def config_factory() -> Callable[..., ProgramConfig]:
    """Factory fixture for ProgramConfig starting on MONDAY."""

    def factory(**overrides: Any) -> ProgramConfig:
        kwargs: dict[str, Any] = {"age": 12, "program_start_date": MONDAY}
        kwargs.update(overrides)
        return ProgramConfig(**kwargs)

    return factory


@pytest.fixture
def day_factory() -> Callable[..., DayContext]:
    """Factory fixture for a DayContext; defaults to a 45-min RAMP1 overspeed Monday."""

    def factory(
        phase_id: PhaseId = PhaseId.RAMP1,
        session_minutes: float = 45.0,
        on: date = MONDAY,
        is_game_day: bool = False,
        is_overspeed_day: bool = True,
    ) -> DayContext:
        return DayContext(
            date=on,
            weekday=Weekday(on.weekday()),
            phase=get_phase_definition(phase_id),
            session_minutes=session_minutes,
            is_game_day=is_game_day,
            is_overspeed_day=is_overspeed_day,
        )

    return factory
