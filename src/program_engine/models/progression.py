"""Progression state: the mutable running snapshot of cumulative training.

Unlike the other models this one is not frozen: the day
allocator advances it block by block so later decisions in the same run see
every earlier commit. The engine always works on a ``copy()``; a caller's
snapshot is never touched.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date

from program_engine.models.enums import LeveledModality, PhaseId


@dataclass
class ProgressionState:
    """Cumulative and phase-scoped counters plus the "needs" flags."""

    # Phase + timing
    current_phase: PhaseId = PhaseId.RAMP1
    phase_start_date: date | None = None
    program_start_date: date | None = None

    # Session counts
    total_overspeed_sessions: int = 0
    overspeed_sessions_in_current_phase: int = 0
    total_counterweight_sessions: int = 0
    total_sessions_completed: int = 0

    # Level -> cumulative sessions at that level
    ground_force_sessions_by_level: dict[int, int] = field(default_factory=dict)
    sequencing_sessions_by_level: dict[int, int] = field(default_factory=dict)
    exit_velo_sessions_by_level: dict[int, int] = field(default_factory=dict)

    # Assessment timing
    last_full_assessment_date: date | None = None
    last_quick_assessment_date: date | None = None

    # Optional modality gates
    needs_ground_force: bool = False
    needs_sequencing: bool = False
    needs_exit_velo: bool = False
    needs_bat_delivery: bool = False

    # Externally requested phase commands
    maintenance_extension_requested: bool = False
    next_ramp_up_requested: bool = False

    def copy(self) -> ProgressionState:
        """Independent copy; level maps are duplicated, not shared."""
        return replace(
            self,
            ground_force_sessions_by_level=dict(self.ground_force_sessions_by_level),
            sequencing_sessions_by_level=dict(self.sequencing_sessions_by_level),
            exit_velo_sessions_by_level=dict(self.exit_velo_sessions_by_level),
        )

    # -- Queries ----------------------------------------------------------

    def levels(self, modality: LeveledModality) -> dict[int, int]:
        """The live level map for *modality* (mutations affect the state)."""
        if modality == LeveledModality.GROUND_FORCE:
            return self.ground_force_sessions_by_level
        if modality == LeveledModality.SEQUENCING:
            return self.sequencing_sessions_by_level
        return self.exit_velo_sessions_by_level

    def sessions_at_level(self, modality: LeveledModality, level: int) -> int:
        return self.levels(modality).get(level, 0)

    def total_sessions(self, modality: LeveledModality, max_level: int | None = None) -> int:
        """Sessions across all levels, or only levels 1..*max_level*."""
        return sum(
            count
            for level, count in self.levels(modality).items()
            if max_level is None or level <= max_level
        )

    # -- Advance ----------------------------------------------------------

    def record_overspeed(self) -> None:
        self.total_overspeed_sessions += 1
        self.overspeed_sessions_in_current_phase += 1

    def record_counterweight(self) -> None:
        self.total_counterweight_sessions += 1

    def record_level(self, modality: LeveledModality, level: int) -> None:
        if level < 1:
            raise ValueError(f"Levels are positive integers, got {level}")
        counts = self.levels(modality)
        counts[level] = counts.get(level, 0) + 1

    def record_full_assessment(self, on: date) -> None:
        self.last_full_assessment_date = on

    def record_quick_assessment(self, on: date) -> None:
        self.last_quick_assessment_date = on
