"""Allocation trace: audit trail of how each day's blocks were chosen."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import auto, IntEnum

from program_engine.models.schedule import ContentBlock


class AllocationStatus(IntEnum):
    """Outcome of one allocation rule on one day."""

    SCHEDULED = auto()
    NOT_ELIGIBLE = auto()
    NO_BUDGET = auto()


@dataclass(frozen=True)
class AllocationResult:
    """Record of a single rule's evaluation during day allocation."""

    rule_id: str
    status: AllocationStatus
    block: ContentBlock | None = None
    explanation: str = ""


@dataclass(frozen=True)
class DayTrace:
    """Every rule outcome for one training day, in evaluation order.

    Rules that were never reached (e.g. stimulus rules on a game day) do not
    appear.
    """

    date: date
    results: tuple[AllocationResult, ...] = field(default_factory=tuple)
    session_minutes: float = 0.0
    remaining_minutes: float = 0.0

    @property
    def scheduled_rule_ids(self) -> tuple[str, ...]:
        return tuple(
            r.rule_id for r in self.results if r.status == AllocationStatus.SCHEDULED
        )
