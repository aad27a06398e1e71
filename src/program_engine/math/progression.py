"""Progression queries: which level of each modality a player is ready for.

Pure functions over a ProgressionState. None means "not eligible yet" (or the
modality is switched off by its needs flag). Thresholds live in enums.py.
"""

from __future__ import annotations

from datetime import date

from program_engine.models.enums import (
    BAT_DELIVERY_MIN_COUNTERWEIGHT,
    BAT_DELIVERY_MIN_SEQUENCING_L2,
    COUNTERWEIGHT_MIN_OVERSPEED,
    EXIT_VELO_L2_SESSIONS,
    EXIT_VELO_L3_SESSIONS,
    EXIT_VELO_MAX_LEVEL,
    FULL_ASSESSMENT_INTERVAL_DAYS,
    GROUND_FORCE_L1_MIN_OVERSPEED,
    GROUND_FORCE_L2_MIN_OVERSPEED,
    GROUND_FORCE_L3_MIN_OVERSPEED,
    GROUND_FORCE_LEVEL_UP_SESSIONS,
    OVERSPEED_FIRST_CYCLE_STEPS,
    OVERSPEED_LATER_CYCLE_STEPS,
    SEQUENCING_L1_MIN_OVERSPEED,
    SEQUENCING_L2_MIN_OVERSPEED,
    SEQUENCING_LEVEL_UP_SESSIONS,
    LeveledModality,
    PhaseType,
)
from program_engine.models.phase import PhaseDefinition
from program_engine.models.progression import ProgressionState


def pick_overspeed_level(phase: PhaseDefinition, total_overspeed_sessions: int) -> int:
    """Overspeed level from the current phase and cumulative overspeed volume.

    First Ramp is always level 1. The rest of the first cycle moves 1 -> 2 -> 3
    at 10 and 20 sessions; later cycles move 2 -> 5 at 15, 30 and 45.
    """
    if phase.is_first_ramp:
        return 1

    if phase.cycle == 1 and phase.phase_type in (PhaseType.PRIMARY, PhaseType.MAINTENANCE):
        steps, base_level = OVERSPEED_FIRST_CYCLE_STEPS, 1
    else:
        steps, base_level = OVERSPEED_LATER_CYCLE_STEPS, 2

    level = base_level
    for threshold in steps:
        if total_overspeed_sessions < threshold:
            return level
        level += 1
    return level


def can_do_counterweight(state: ProgressionState) -> bool:
    return state.total_overspeed_sessions >= COUNTERWEIGHT_MIN_OVERSPEED


def pick_ground_force_level(state: ProgressionState) -> int | None:
    if not state.needs_ground_force:
        return None

    total_os = state.total_overspeed_sessions
    gf1 = state.sessions_at_level(LeveledModality.GROUND_FORCE, 1)
    gf2 = state.sessions_at_level(LeveledModality.GROUND_FORCE, 2)

    if total_os >= GROUND_FORCE_L3_MIN_OVERSPEED and gf2 >= GROUND_FORCE_LEVEL_UP_SESSIONS:
        return 3
    if total_os >= GROUND_FORCE_L2_MIN_OVERSPEED and gf1 >= GROUND_FORCE_LEVEL_UP_SESSIONS:
        return 2
    if total_os >= GROUND_FORCE_L1_MIN_OVERSPEED:
        return 1
    return None


def pick_sequencing_level(state: ProgressionState) -> int | None:
    if not state.needs_sequencing:
        return None

    total_os = state.total_overspeed_sessions
    seq1 = state.sessions_at_level(LeveledModality.SEQUENCING, 1)

    if total_os >= SEQUENCING_L2_MIN_OVERSPEED and seq1 >= SEQUENCING_LEVEL_UP_SESSIONS:
        return 2
    if total_os >= SEQUENCING_L1_MIN_OVERSPEED:
        return 1
    return None


def can_do_bat_delivery(state: ProgressionState) -> bool:
    """Capstone gate: needs flag, counterweight volume and top sequencing volume."""
    if not state.needs_bat_delivery:
        return False
    seq2 = state.sessions_at_level(LeveledModality.SEQUENCING, 2)
    return (
        state.total_counterweight_sessions >= BAT_DELIVERY_MIN_COUNTERWEIGHT
        and seq2 >= BAT_DELIVERY_MIN_SEQUENCING_L2
    )


def pick_exit_velo_level(state: ProgressionState) -> int | None:
    if not state.needs_exit_velo:
        return None

    # Only levels 1-3 count toward escalation.
    total_ev = state.total_sessions(LeveledModality.EXIT_VELO, max_level=EXIT_VELO_MAX_LEVEL)
    if total_ev < EXIT_VELO_L2_SESSIONS:
        return 1
    if total_ev < EXIT_VELO_L3_SESSIONS:
        return 2
    return 3


def days_since_full_assessment(state: ProgressionState, on: date) -> int | None:
    if state.last_full_assessment_date is None:
        return None
    return (on - state.last_full_assessment_date).days


def full_assessment_due(state: ProgressionState, on: date) -> bool:
    """True when no full assessment exists or the last is >= 14 days old."""
    elapsed = days_since_full_assessment(state, on)
    return elapsed is None or elapsed >= FULL_ASSESSMENT_INTERVAL_DAYS
