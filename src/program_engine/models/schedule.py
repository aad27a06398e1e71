"""Schedule output models: ContentBlock -> DayPlan -> WeekPlan -> Schedule.

All frozen. A schedule holds no references back to the configuration or
progression state it was generated from.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date

from program_engine.models.enums import BLOCK_MINUTES, BLOCK_TITLES, BlockKind, Weekday


@dataclass(frozen=True)
class ContentBlock:
    """One scheduled unit of training."""

    kind: BlockKind
    minutes: float
    title: str
    level: int | None = None

    @classmethod
    def of(cls, kind: BlockKind, level: int | None = None) -> ContentBlock:
        """Build a block with its canonical cost and protocol title."""
        title = BLOCK_TITLES[kind]
        if level is not None:
            title = f"{title} Level {level}"
        return cls(kind=kind, minutes=BLOCK_MINUTES[kind], title=title, level=level)


@dataclass(frozen=True)
class DayPlan:
    """A single calendar day and the blocks allocated to it, in order."""

    date: date
    weekday: Weekday
    is_game_day: bool = False
    is_training_day: bool = False
    is_overspeed_day: bool = False
    blocks: tuple[ContentBlock, ...] = field(default_factory=tuple)

    @property
    def total_minutes(self) -> float:
        return sum(b.minutes for b in self.blocks)

    def kinds(self) -> tuple[BlockKind, ...]:
        return tuple(b.kind for b in self.blocks)


@dataclass(frozen=True)
class WeekPlan:
    """Seven consecutive DayPlans starting at ``start_date``."""

    week_index: int  # 0 = first week of the schedule
    start_date: date
    days: tuple[DayPlan, ...] = field(default_factory=tuple)

    @property
    def overspeed_day_count(self) -> int:
        return sum(1 for d in self.days if d.is_overspeed_day)

    @property
    def training_day_count(self) -> int:
        return sum(1 for d in self.days if d.is_training_day)

    @property
    def total_minutes(self) -> float:
        return sum(d.total_minutes for d in self.days)


@dataclass(frozen=True)
class Schedule:
    """Output of ``generate()``: a bounded horizon of weeks."""

    start_date: date
    horizon_weeks: int
    weeks: tuple[WeekPlan, ...] = field(default_factory=tuple)

    def days(self) -> Iterator[DayPlan]:
        """Every day of the schedule in date order."""
        for week in self.weeks:
            yield from week.days

    def blocks(self) -> Iterator[tuple[DayPlan, ContentBlock]]:
        """Every (day, block) pair in allocation order."""
        for day in self.days():
            for block in day.blocks:
                yield day, block
