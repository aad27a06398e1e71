"""Assessment rules: the first-session baseline and the recurring check.

Both prefer a full assessment and fall back to a quick one when the budget
is short. Only a full assessment resets the 14-day clock.
"""

from __future__ import annotations

from program_engine.math.progression import days_since_full_assessment, full_assessment_due
from program_engine.models.day_context import DayContext
from program_engine.models.enums import BLOCK_MINUTES, BlockKind
from program_engine.models.progression import ProgressionState
from program_engine.models.schedule import ContentBlock
from program_engine.rules.base import AllocationRule

_FULL_THEN_QUICK = (
    ContentBlock.of(BlockKind.FULL_ASSESSMENT),
    ContentBlock.of(BlockKind.QUICK_ASSESSMENT),
)


def _record_assessment(state: ProgressionState, block: ContentBlock, day: DayContext) -> None:
    if block.kind == BlockKind.FULL_ASSESSMENT:
        state.record_full_assessment(day.date)
    else:
        state.record_quick_assessment(day.date)


class BaselineAssessmentRule(AllocationRule):
    """Assessment before the player's very first overspeed session.

    Only scheduled when the overspeed block still fits afterwards.
    """

    rule_id = "baseline_assessment"
    reserve_minutes = BLOCK_MINUTES[BlockKind.OVERSPEED]

    def candidates(
        self, state: ProgressionState, day: DayContext
    ) -> tuple[ContentBlock, ...]:
        if not day.is_overspeed_day or state.total_overspeed_sessions != 0:
            return ()
        return _FULL_THEN_QUICK

    def commit(
        self, state: ProgressionState, block: ContentBlock, day: DayContext
    ) -> None:
        _record_assessment(state, block, day)

    def describe_ineligible(self, state: ProgressionState, day: DayContext) -> str:
        return "Not the first overspeed session."


class PeriodicAssessmentRule(AllocationRule):
    """End-of-session assessment whenever a full assessment is due."""

    rule_id = "periodic_assessment"

    def candidates(
        self, state: ProgressionState, day: DayContext
    ) -> tuple[ContentBlock, ...]:
        if not full_assessment_due(state, day.date):
            return ()
        return _FULL_THEN_QUICK

    def commit(
        self, state: ProgressionState, block: ContentBlock, day: DayContext
    ) -> None:
        _record_assessment(state, block, day)

    def describe_ineligible(self, state: ProgressionState, day: DayContext) -> str:
        elapsed = days_since_full_assessment(state, day.date)
        return f"Last full assessment {elapsed} day(s) ago."
