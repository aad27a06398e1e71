"""Periodized training-schedule generator.

    from program_engine import ProgramConfig, ProgressionState, generate

    schedule = generate(config, state)
"""

from program_engine.engine import ProgramEngine, generate
from program_engine.exceptions import (
    InvalidConfigError,
    PhaseTransitionError,
    ProgramEngineError,
    RecordError,
)
from program_engine.models.config import ProgramConfig
from program_engine.models.progression import ProgressionState
from program_engine.models.schedule import ContentBlock, DayPlan, Schedule, WeekPlan

__all__ = [
    "ContentBlock",
    "DayPlan",
    "InvalidConfigError",
    "PhaseTransitionError",
    "ProgramConfig",
    "ProgramEngine",
    "ProgramEngineError",
    "ProgressionState",
    "RecordError",
    "Schedule",
    "WeekPlan",
    "generate",
]
