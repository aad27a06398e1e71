"""Abstract base class for all allocation rules."""

from __future__ import annotations

from abc import ABC, abstractmethod

from program_engine.models.day_context import DayContext
from program_engine.models.progression import ProgressionState
from program_engine.models.schedule import ContentBlock


class AllocationRule(ABC):
    """One step of the day allocator's fixed priority list.

    A rule is the (eligibility, cost, mutation) triple for one kind of
    content:

        candidates(): blocks the player is eligible for right now, most
            preferred first (e.g. full assessment, then quick). Empty when
            not eligible. Budget is not considered here.
        reserve_minutes: extra minutes that must still be free after the
            block, for content that has to follow it.
        commit(): advance the progression state for a scheduled block.

    Subclasses must define:
        rule_id: unique identifier (e.g. "ground_force")
        candidates(), commit()
    """

    rule_id: str
    reserve_minutes: float = 0.0

    @abstractmethod
    def candidates(
        self, state: ProgressionState, day: DayContext
    ) -> tuple[ContentBlock, ...]:
        """Return the blocks this rule would schedule, in preference order."""
        ...

    @abstractmethod
    def commit(
        self, state: ProgressionState, block: ContentBlock, day: DayContext
    ) -> None:
        """Advance *state* for a block that has just been scheduled."""
        ...

    def fits(self, block: ContentBlock, remaining_minutes: float) -> bool:
        """Budget gate: the block plus any reserved follow-up must fit."""
        return remaining_minutes >= block.minutes + self.reserve_minutes

    def describe_ineligible(self, state: ProgressionState, day: DayContext) -> str:
        """Explanation recorded in the trace when candidates() is empty."""
        return "Not eligible today."
