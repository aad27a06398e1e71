"""Leveled modality rules (ground force, sequencing, exit velo) and the
bat-delivery capstone.

Each runs on any non-game training day once its level selector returns a
level; committing a block bumps that level's counter immediately.
"""

from __future__ import annotations

from abc import abstractmethod

from program_engine.math.progression import (
    can_do_bat_delivery,
    pick_exit_velo_level,
    pick_ground_force_level,
    pick_sequencing_level,
)
from program_engine.models.day_context import DayContext
from program_engine.models.enums import BlockKind, LeveledModality
from program_engine.models.progression import ProgressionState
from program_engine.models.schedule import ContentBlock
from program_engine.rules.base import AllocationRule


class _LeveledRule(AllocationRule):
    """Shared shape of the three leveled modalities."""

    kind: BlockKind
    modality: LeveledModality
    needs_flag: str

    @abstractmethod
    def pick_level(self, state: ProgressionState) -> int | None:
        """Level to schedule today, or None when not yet unlocked."""
        ...

    def candidates(
        self, state: ProgressionState, day: DayContext
    ) -> tuple[ContentBlock, ...]:
        level = self.pick_level(state)
        if level is None:
            return ()
        return (ContentBlock.of(self.kind, level=level),)

    def commit(
        self, state: ProgressionState, block: ContentBlock, day: DayContext
    ) -> None:
        state.record_level(self.modality, block.level or 1)

    def describe_ineligible(self, state: ProgressionState, day: DayContext) -> str:
        if not getattr(state, self.needs_flag):
            return f"{self.needs_flag} is off."
        return (
            f"Prerequisites not met ({state.total_overspeed_sessions} "
            f"overspeed sessions)."
        )


class GroundForceRule(_LeveledRule):
    rule_id = "ground_force"
    kind = BlockKind.PM_GROUND_FORCE
    modality = LeveledModality.GROUND_FORCE
    needs_flag = "needs_ground_force"

    def pick_level(self, state: ProgressionState) -> int | None:
        return pick_ground_force_level(state)


class SequencingRule(_LeveledRule):
    rule_id = "sequencing"
    kind = BlockKind.PM_SEQUENCING
    modality = LeveledModality.SEQUENCING
    needs_flag = "needs_sequencing"

    def pick_level(self, state: ProgressionState) -> int | None:
        return pick_sequencing_level(state)


class ExitVeloRule(_LeveledRule):
    rule_id = "exit_velo"
    kind = BlockKind.EXIT_VELO
    modality = LeveledModality.EXIT_VELO
    needs_flag = "needs_exit_velo"

    def pick_level(self, state: ProgressionState) -> int | None:
        return pick_exit_velo_level(state)


class BatDeliveryRule(AllocationRule):
    """Capstone modality. Not counted separately once scheduled."""

    rule_id = "bat_delivery"

    def candidates(
        self, state: ProgressionState, day: DayContext
    ) -> tuple[ContentBlock, ...]:
        if not can_do_bat_delivery(state):
            return ()
        return (ContentBlock.of(BlockKind.PM_BAT_DELIVERY),)

    def commit(
        self, state: ProgressionState, block: ContentBlock, day: DayContext
    ) -> None:
        return None

    def describe_ineligible(self, state: ProgressionState, day: DayContext) -> str:
        if not state.needs_bat_delivery:
            return "needs_bat_delivery is off."
        return (
            f"Requires 5 counterweight and 5 sequencing L2 sessions, have "
            f"{state.total_counterweight_sessions} and "
            f"{state.sessions_at_level(LeveledModality.SEQUENCING, 2)}."
        )
