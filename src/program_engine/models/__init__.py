"""Data models for the program engine."""

from program_engine.models.config import ProgramConfig
from program_engine.models.enums import (
    AgeBracket,
    BlockKind,
    LeveledModality,
    PhaseId,
    PhaseType,
    Weekday,
)
from program_engine.models.phase import PhaseDefinition, get_phase_definition
from program_engine.models.progression import ProgressionState
from program_engine.models.schedule import ContentBlock, DayPlan, Schedule, WeekPlan
from program_engine.models.trace import AllocationResult, AllocationStatus, DayTrace

__all__ = [
    "AgeBracket",
    "AllocationResult",
    "AllocationStatus",
    "BlockKind",
    "ContentBlock",
    "DayPlan",
    "DayTrace",
    "LeveledModality",
    "PhaseDefinition",
    "PhaseId",
    "PhaseType",
    "ProgramConfig",
    "ProgressionState",
    "Schedule",
    "WeekPlan",
    "Weekday",
    "get_phase_definition",
]
