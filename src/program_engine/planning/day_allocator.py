"""Day content allocator: greedy, budgeted packing of blocks for one day.

Rules are evaluated in a literal, fixed order. Each either schedules its
first candidate that fits the remaining minutes (committing the progression
update immediately) or is skipped; a skipped rule never aborts the day, so
later and cheaper rules still get their turn.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from program_engine.models.day_context import DayContext
from program_engine.models.progression import ProgressionState
from program_engine.models.schedule import ContentBlock
from program_engine.models.trace import AllocationResult, AllocationStatus
from program_engine.rules import (
    AllocationRule,
    BaselineAssessmentRule,
    BatDeliveryRule,
    CounterweightRule,
    DynamicWarmupRule,
    ExitVeloRule,
    GroundForceRule,
    OverspeedRule,
    PeriodicAssessmentRule,
    PregameWarmupRule,
    SequencingRule,
)

OPENING_RULE: AllocationRule = DynamicWarmupRule()

GAME_DAY_RULES: tuple[AllocationRule, ...] = (PregameWarmupRule(),)

_MECHANICS_RULES: tuple[AllocationRule, ...] = (
    GroundForceRule(),
    SequencingRule(),
    BatDeliveryRule(),
    ExitVeloRule(),
)

OVERSPEED_DAY_RULES: tuple[AllocationRule, ...] = (
    BaselineAssessmentRule(),
    OverspeedRule(),
    CounterweightRule(),
    *_MECHANICS_RULES,
    PeriodicAssessmentRule(),
)

TRAINING_DAY_RULES: tuple[AllocationRule, ...] = (
    *_MECHANICS_RULES,
    PeriodicAssessmentRule(),
)


@dataclass
class DayAllocation:
    """Blocks chosen for one day plus the outcome of every rule consulted."""

    session_minutes: float
    remaining_minutes: float
    blocks: list[ContentBlock] = field(default_factory=list)
    results: list[AllocationResult] = field(default_factory=list)

    def apply(self, rule: AllocationRule, state: ProgressionState, day: DayContext) -> bool:
        """Evaluate one rule. Returns True when a block was scheduled."""
        candidates = rule.candidates(state, day)
        if not candidates:
            self.results.append(
                AllocationResult(
                    rule_id=rule.rule_id,
                    status=AllocationStatus.NOT_ELIGIBLE,
                    explanation=rule.describe_ineligible(state, day),
                )
            )
            return False

        for block in candidates:
            if rule.fits(block, self.remaining_minutes):
                self.blocks.append(block)
                self.remaining_minutes -= block.minutes
                rule.commit(state, block, day)
                self.results.append(
                    AllocationResult(
                        rule_id=rule.rule_id,
                        status=AllocationStatus.SCHEDULED,
                        block=block,
                        explanation=f"Scheduled {block.title} ({block.minutes:g} min).",
                    )
                )
                return True

        self.results.append(
            AllocationResult(
                rule_id=rule.rule_id,
                status=AllocationStatus.NO_BUDGET,
                explanation=(
                    f"{self.remaining_minutes:g} min left; needs "
                    f"{candidates[-1].minutes + rule.reserve_minutes:g}."
                ),
            )
        )
        return False


def rules_for_day(day: DayContext) -> tuple[AllocationRule, ...]:
    """The ordered rules that follow the opening warm-up on *day*."""
    if day.is_game_day:
        return GAME_DAY_RULES
    if day.is_overspeed_day:
        return OVERSPEED_DAY_RULES
    return TRAINING_DAY_RULES


def allocate_day(day: DayContext, state: ProgressionState) -> DayAllocation:
    """Build the ordered block list for one training day.

    Mutates *state* as blocks are committed. If even the dynamic warm-up does
    not fit, the day has no blocks at all. Game days get the pre-game warm-up
    and nothing else.

    Args:
        day: The training day being planned.
        state: The run's progression state (exclusive mutable reference).

    Returns:
        A DayAllocation with blocks in allocation order.
    """
    allocation = DayAllocation(
        session_minutes=day.session_minutes,
        remaining_minutes=day.session_minutes,
    )

    if not allocation.apply(OPENING_RULE, state, day):
        return allocation

    for rule in rules_for_day(day):
        allocation.apply(rule, state, day)

    return allocation
