"""Week planner: which days of a week are training days and overspeed days.

Training days are the configured candidate weekdays, capped earliest-first
at the age-resolved maximum. Overspeed days are picked from the non-game
training days with a best-effort "no back-to-back" spacing heuristic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

from program_engine.math.policy import ProgramPolicy
from program_engine.models.config import ProgramConfig
from program_engine.models.enums import MAX_OVERSPEED_DAYS_PER_WEEK, Weekday
from program_engine.models.phase import PhaseDefinition

DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class DaySlot:
    """Calendar facts about one day of a planned week."""

    offset: int  # 0-6 from the week's start date
    date: date
    weekday: Weekday
    is_game_day: bool
    is_training_day: bool
    is_overspeed_day: bool


@dataclass(frozen=True)
class WeekLayout:
    """The seven day slots of one week, before any content is allocated."""

    week_index: int
    start_date: date
    slots: tuple[DaySlot, ...] = field(default_factory=tuple)

    @property
    def training_offsets(self) -> tuple[int, ...]:
        return tuple(s.offset for s in self.slots if s.is_training_day)

    @property
    def overspeed_offsets(self) -> tuple[int, ...]:
        return tuple(s.offset for s in self.slots if s.is_overspeed_day)


def overspeed_target(phase: PhaseDefinition, eligible_days: int) -> int:
    """Overspeed days wanted this week: phase cap, eligible days, hard cap of 3."""
    return max(0, min(phase.max_overspeed_per_week, eligible_days, MAX_OVERSPEED_DAYS_PER_WEEK))


def select_overspeed_offsets(eligible: list[int], target: int) -> list[int]:
    """Pick *target* overspeed day offsets from *eligible* (ascending).

    Pass 1 walks the eligible days in order, always taking the first and then
    only days that are not the same as or the day after the most recently
    taken one. If that leaves the target unmet, pass 2 fills the remaining
    slots from any untaken eligible day in order, ignoring spacing. Spacing
    is therefore best-effort: scarce eligible days can still end up
    back-to-back.

    Returns:
        Chosen offsets in the order they were taken (not necessarily sorted).
    """
    chosen: list[int] = []

    for offset in eligible:
        if len(chosen) >= target:
            break
        if not chosen:
            chosen.append(offset)
            continue
        last = chosen[-1]
        if offset in (last, last + 1):
            continue
        chosen.append(offset)

    if len(chosen) < target:
        for offset in eligible:
            if len(chosen) >= target:
                break
            if offset not in chosen:
                chosen.append(offset)

    return chosen


def plan_week(
    config: ProgramConfig,
    policy: ProgramPolicy,
    phase: PhaseDefinition,
    week_index: int,
    week_start: date,
) -> WeekLayout:
    """Lay out one week: training days, game days and overspeed days.

    Args:
        config: Player configuration (training days, game days, season).
        policy: Age-resolved limits.
        phase: Current macro phase; bounds weekly overspeed frequency.
        week_index: 0-indexed week within the schedule.
        week_start: Date of the week's first day (offset 0).

    Returns:
        A WeekLayout with exactly seven slots.
    """
    dates = [week_start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]
    weekdays = [Weekday(d.weekday()) for d in dates]

    candidate_offsets = [
        offset
        for offset in range(DAYS_PER_WEEK)
        if config.is_candidate_training_day(weekdays[offset])
    ]
    training_offsets = candidate_offsets[: policy.max_training_days]

    eligible = [
        offset for offset in training_offsets if not config.is_game_day(weekdays[offset])
    ]
    overspeed_offsets = set(
        select_overspeed_offsets(eligible, overspeed_target(phase, len(eligible)))
    )

    slots = tuple(
        DaySlot(
            offset=offset,
            date=dates[offset],
            weekday=weekdays[offset],
            is_game_day=config.is_game_day(weekdays[offset]),
            is_training_day=offset in training_offsets,
            is_overspeed_day=offset in overspeed_offsets,
        )
        for offset in range(DAYS_PER_WEEK)
    )
    return WeekLayout(week_index=week_index, start_date=week_start, slots=slots)
