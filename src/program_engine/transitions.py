"""Externally triggered updates to a ProgressionState.

These run between generation calls: when the player completes a session,
and when they (or a coach) explicitly ask to stay in maintenance or start
the next ramp-up. Completed overspeed sessions advance Ramp -> Primary and
Primary -> Maintenance; leaving Maintenance is always an explicit command.
Every function returns a new state and leaves its input untouched.
"""

from __future__ import annotations

import logging
import re
from datetime import date

from program_engine.exceptions import PhaseTransitionError
from program_engine.models.enums import (
    PRIMARY_EXIT_OVERSPEED_IN_PHASE,
    PRIMARY_MAX_DAYS_IN_PHASE,
    RAMP_EXIT_OVERSPEED_IN_PHASE,
    BlockKind,
    LeveledModality,
    PhaseId,
    PhaseType,
)
from program_engine.models.phase import get_phase_definition
from program_engine.models.progression import ProgressionState
from program_engine.models.schedule import ContentBlock

logger = logging.getLogger(__name__)

_LEVEL_PATTERN = re.compile(r"level\s*([1-5])", re.IGNORECASE)

_LEVELED_KINDS: dict[BlockKind, LeveledModality] = {
    BlockKind.PM_GROUND_FORCE: LeveledModality.GROUND_FORCE,
    BlockKind.PM_SEQUENCING: LeveledModality.SEQUENCING,
    BlockKind.EXIT_VELO: LeveledModality.EXIT_VELO,
}

# Maintenance is the only phase a ramp-up can be started from.
_NEXT_RAMP: dict[PhaseId, PhaseId] = {
    PhaseId.MAINT1: PhaseId.RAMP2,
    PhaseId.MAINT2: PhaseId.RAMP3,
}

_RAMP_TO_PRIMARY: dict[PhaseId, PhaseId] = {
    PhaseId.RAMP1: PhaseId.PRIMARY1,
    PhaseId.RAMP2: PhaseId.PRIMARY2,
    PhaseId.RAMP3: PhaseId.PRIMARY3,
}

_PRIMARY_TO_MAINT: dict[PhaseId, PhaseId] = {
    PhaseId.PRIMARY1: PhaseId.MAINT1,
    PhaseId.PRIMARY2: PhaseId.MAINT2,
    PhaseId.PRIMARY3: PhaseId.MAINT3,
}


def parse_level(title: str | None) -> int | None:
    """Extract ``Level N`` (1-5) from a protocol title."""
    if not title:
        return None
    match = _LEVEL_PATTERN.search(title)
    return int(match.group(1)) if match else None


def block_from_protocol(category: str | None, title: str | None) -> ContentBlock | None:
    """Map an external protocol record to the block kind it represents.

    Categories: ``overspeed``, ``counterweight``, ``power_mechanics``
    (ground force / sequencing / bat delivery by title),
    ``exit_velo_application`` and ``assessments`` (full if the title says so,
    otherwise quick). Leveled protocols default to level 1.

    Returns:
        The matching ContentBlock, or None for protocols the program does not
        track (warm-ups, unknown categories).
    """
    category_key = (category or "").strip().lower()
    title_key = (title or "").lower()
    level = parse_level(title)

    if category_key == "overspeed":
        return ContentBlock.of(BlockKind.OVERSPEED, level=level or 1)
    if category_key == "counterweight":
        return ContentBlock.of(BlockKind.COUNTERWEIGHT)
    if category_key == "power_mechanics":
        if "ground force" in title_key:
            return ContentBlock.of(BlockKind.PM_GROUND_FORCE, level=level or 1)
        if "sequencing" in title_key:
            return ContentBlock.of(BlockKind.PM_SEQUENCING, level=level or 1)
        if "bat delivery" in title_key:
            return ContentBlock.of(BlockKind.PM_BAT_DELIVERY)
        return None
    if category_key == "exit_velo_application":
        return ContentBlock.of(BlockKind.EXIT_VELO, level=level or 1)
    if category_key == "assessments":
        if "full" in title_key:
            return ContentBlock.of(BlockKind.FULL_ASSESSMENT)
        return ContentBlock.of(BlockKind.QUICK_ASSESSMENT)
    return None


def record_completed_block(
    state: ProgressionState, block: ContentBlock | None, completed_on: date
) -> ProgressionState:
    """Return the state after the player completes *block* on *completed_on*.

    Every completed session counts toward ``total_sessions_completed``; the
    modality counters follow the block kind. Bat delivery is not counted
    separately. A completed overspeed session may also advance the phase
    (see advance_phase).
    """
    nxt = state.copy()
    nxt.total_sessions_completed += 1
    if block is None:
        return nxt

    if block.kind == BlockKind.OVERSPEED:
        nxt.record_overspeed()
        advance_phase(nxt, state.phase_start_date, completed_on)
    elif block.kind == BlockKind.COUNTERWEIGHT:
        nxt.record_counterweight()
    elif block.kind in _LEVELED_KINDS:
        nxt.record_level(_LEVELED_KINDS[block.kind], block.level or 1)
    elif block.kind == BlockKind.FULL_ASSESSMENT:
        nxt.record_full_assessment(completed_on)
    elif block.kind == BlockKind.QUICK_ASSESSMENT:
        nxt.record_quick_assessment(completed_on)

    return nxt


def advance_phase(
    state: ProgressionState, phase_start: date | None, completed_on: date
) -> None:
    """Move *state* to the next phase once the current one is done.

    Ramp ends after 6 overspeed sessions in the phase. Primary ends after 25
    in-phase sessions or 70 days since *phase_start*. Maintenance is left
    alone. Mutates *state*; called after the overspeed count is bumped.
    """
    in_phase = state.overspeed_sessions_in_current_phase
    days_in_phase = (completed_on - phase_start).days if phase_start else 0

    next_phase: PhaseId | None = None
    if state.current_phase in _RAMP_TO_PRIMARY:
        if in_phase >= RAMP_EXIT_OVERSPEED_IN_PHASE:
            next_phase = _RAMP_TO_PRIMARY[state.current_phase]
    elif state.current_phase in _PRIMARY_TO_MAINT:
        if (
            in_phase >= PRIMARY_EXIT_OVERSPEED_IN_PHASE
            or days_in_phase >= PRIMARY_MAX_DAYS_IN_PHASE
        ):
            next_phase = _PRIMARY_TO_MAINT[state.current_phase]

    if next_phase is None:
        return

    logger.info(
        "Phase %s -> %s on %s after %d in-phase overspeed sessions",
        state.current_phase.name,
        next_phase.name,
        completed_on,
        in_phase,
    )
    state.current_phase = next_phase
    state.phase_start_date = completed_on
    state.overspeed_sessions_in_current_phase = 0


def request_maintenance_extension(state: ProgressionState) -> ProgressionState:
    """Flag that the player wants to stay in maintenance for now."""
    phase = get_phase_definition(state.current_phase)
    if phase.phase_type != PhaseType.MAINTENANCE:
        logger.info(
            "Maintenance extension requested while in %s", state.current_phase.name
        )
    nxt = state.copy()
    nxt.maintenance_extension_requested = True
    nxt.next_ramp_up_requested = False
    return nxt


def start_next_ramp_up(state: ProgressionState, on: date) -> ProgressionState:
    """Advance from maintenance into the next cycle's ramp phase.

    Valid only from MAINT1 (-> RAMP2) and MAINT2 (-> RAMP3). Resets the
    in-phase overspeed count and both request flags.

    Raises:
        PhaseTransitionError: From any other phase.
    """
    next_phase = _NEXT_RAMP.get(state.current_phase)
    if next_phase is None:
        raise PhaseTransitionError(
            f"Cannot start next ramp-up from {state.current_phase.name}; "
            "only valid from MAINT1 or MAINT2.",
            phase=state.current_phase,
        )

    nxt = state.copy()
    nxt.current_phase = next_phase
    nxt.phase_start_date = on
    nxt.overspeed_sessions_in_current_phase = 0
    nxt.maintenance_extension_requested = False
    nxt.next_ramp_up_requested = False
    logger.info("Phase %s -> %s on %s", state.current_phase.name, next_phase.name, on)
    return nxt
