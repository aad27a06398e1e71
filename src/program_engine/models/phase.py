"""Macro phase definitions: cycle, type and weekly overspeed cap."""

from __future__ import annotations

from dataclasses import dataclass

from program_engine.models.enums import PHASE_OVERSPEED_CAP, PhaseId, PhaseType


@dataclass(frozen=True)
class PhaseDefinition:
    """Fixed policy attached to one macro phase identifier."""

    phase_id: PhaseId
    cycle: int  # 1-indexed
    phase_type: PhaseType
    max_overspeed_per_week: int

    @property
    def is_first_ramp(self) -> bool:
        return self.cycle == 1 and self.phase_type == PhaseType.RAMP


def _define(phase_id: PhaseId, cycle: int, phase_type: PhaseType) -> PhaseDefinition:
    return PhaseDefinition(
        phase_id=phase_id,
        cycle=cycle,
        phase_type=phase_type,
        max_overspeed_per_week=PHASE_OVERSPEED_CAP[phase_type],
    )


PHASE_DEFS: dict[PhaseId, PhaseDefinition] = {
    PhaseId.RAMP1: _define(PhaseId.RAMP1, 1, PhaseType.RAMP),
    PhaseId.PRIMARY1: _define(PhaseId.PRIMARY1, 1, PhaseType.PRIMARY),
    PhaseId.MAINT1: _define(PhaseId.MAINT1, 1, PhaseType.MAINTENANCE),
    PhaseId.RAMP2: _define(PhaseId.RAMP2, 2, PhaseType.RAMP),
    PhaseId.PRIMARY2: _define(PhaseId.PRIMARY2, 2, PhaseType.PRIMARY),
    PhaseId.MAINT2: _define(PhaseId.MAINT2, 2, PhaseType.MAINTENANCE),
    PhaseId.RAMP3: _define(PhaseId.RAMP3, 3, PhaseType.RAMP),
    PhaseId.PRIMARY3: _define(PhaseId.PRIMARY3, 3, PhaseType.PRIMARY),
    PhaseId.MAINT3: _define(PhaseId.MAINT3, 3, PhaseType.MAINTENANCE),
}


def get_phase_definition(phase_id: PhaseId) -> PhaseDefinition:
    """Look up the definition for *phase_id*, falling back to RAMP1."""
    return PHASE_DEFS.get(phase_id, PHASE_DEFS[PhaseId.RAMP1])
