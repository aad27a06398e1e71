"""Warm-up rules: every session opens with one, game days stop after two."""

from __future__ import annotations

from program_engine.models.day_context import DayContext
from program_engine.models.enums import BlockKind
from program_engine.models.progression import ProgressionState
from program_engine.models.schedule import ContentBlock
from program_engine.rules.base import AllocationRule


class DynamicWarmupRule(AllocationRule):
    """Opens every training session."""

    rule_id = "dynamic_warmup"

    def candidates(
        self, state: ProgressionState, day: DayContext
    ) -> tuple[ContentBlock, ...]:
        return (ContentBlock.of(BlockKind.DYNAMIC_WARMUP),)

    def commit(
        self, state: ProgressionState, block: ContentBlock, day: DayContext
    ) -> None:
        return None


class PregameWarmupRule(AllocationRule):
    """Game-day companion to the dynamic warm-up. Nothing follows it."""

    rule_id = "pregame_warmup"

    def candidates(
        self, state: ProgressionState, day: DayContext
    ) -> tuple[ContentBlock, ...]:
        if not day.is_game_day:
            return ()
        return (ContentBlock.of(BlockKind.PREGAME_WARMUP),)

    def commit(
        self, state: ProgressionState, block: ContentBlock, day: DayContext
    ) -> None:
        return None

    def describe_ineligible(self, state: ProgressionState, day: DayContext) -> str:
        return "Pre-game warm-up is only scheduled on game days."
