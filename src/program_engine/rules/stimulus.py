"""Primary and secondary stimulus rules: overspeed and counterweight."""

from __future__ import annotations

from program_engine.math.progression import can_do_counterweight, pick_overspeed_level
from program_engine.models.day_context import DayContext
from program_engine.models.enums import COUNTERWEIGHT_MIN_OVERSPEED, BlockKind
from program_engine.models.progression import ProgressionState
from program_engine.models.schedule import ContentBlock
from program_engine.rules.base import AllocationRule


class OverspeedRule(AllocationRule):
    """The primary-stimulus block of an overspeed day.

    The level comes from the phase and the cumulative overspeed count at the
    moment of scheduling, so consecutive days see each other's sessions.
    """

    rule_id = "overspeed"

    def candidates(
        self, state: ProgressionState, day: DayContext
    ) -> tuple[ContentBlock, ...]:
        if not day.is_overspeed_day or day.is_game_day:
            return ()
        level = pick_overspeed_level(day.phase, state.total_overspeed_sessions)
        return (ContentBlock.of(BlockKind.OVERSPEED, level=level),)

    def commit(
        self, state: ProgressionState, block: ContentBlock, day: DayContext
    ) -> None:
        state.record_overspeed()

    def describe_ineligible(self, state: ProgressionState, day: DayContext) -> str:
        return "Not an overspeed day."


class CounterweightRule(AllocationRule):
    """Secondary modality, unlocked by cumulative overspeed volume."""

    rule_id = "counterweight"

    def candidates(
        self, state: ProgressionState, day: DayContext
    ) -> tuple[ContentBlock, ...]:
        if not day.is_overspeed_day or not can_do_counterweight(state):
            return ()
        return (ContentBlock.of(BlockKind.COUNTERWEIGHT),)

    def commit(
        self, state: ProgressionState, block: ContentBlock, day: DayContext
    ) -> None:
        state.record_counterweight()

    def describe_ineligible(self, state: ProgressionState, day: DayContext) -> str:
        return (
            f"Requires {COUNTERWEIGHT_MIN_OVERSPEED} overspeed sessions, "
            f"have {state.total_overspeed_sessions}."
        )
