"""Tabular views of a Schedule for reporting and CSV export."""

from __future__ import annotations

import pandas as pd

from program_engine.models.schedule import Schedule

FRAME_COLUMNS = (
    "week_index",
    "date",
    "weekday",
    "is_game_day",
    "is_training_day",
    "is_overspeed_day",
    "block_order",
    "kind",
    "minutes",
    "title",
    "level",
)


def schedule_to_frame(schedule: Schedule) -> pd.DataFrame:
    """Flatten a schedule to one row per block.

    Days without blocks (rest days, non-training game days, days whose
    budget could not fit a warm-up) still get a single row with empty block
    columns so the calendar stays complete.
    """
    rows: list[dict] = []
    for week in schedule.weeks:
        for day in week.days:
            base = {
                "week_index": week.week_index,
                "date": day.date.isoformat(),
                "weekday": day.weekday.key,
                "is_game_day": day.is_game_day,
                "is_training_day": day.is_training_day,
                "is_overspeed_day": day.is_overspeed_day,
            }
            if not day.blocks:
                rows.append(
                    {**base, "block_order": None, "kind": None, "minutes": 0.0,
                     "title": None, "level": None}
                )
                continue
            for order, block in enumerate(day.blocks, start=1):
                rows.append(
                    {
                        **base,
                        "block_order": order,
                        "kind": block.kind.name,
                        "minutes": block.minutes,
                        "title": block.title,
                        "level": block.level,
                    }
                )

    frame = pd.DataFrame(rows, columns=list(FRAME_COLUMNS))
    frame["block_order"] = frame["block_order"].astype("Int64")
    frame["level"] = frame["level"].astype("Int64")
    return frame


def minutes_by_kind(schedule: Schedule) -> pd.DataFrame:
    """Planned minutes per week (rows) and block kind (columns)."""
    frame = schedule_to_frame(schedule).dropna(subset=["kind"])
    if frame.empty:
        return pd.DataFrame(index=pd.Index([], name="week_index"))
    return frame.pivot_table(
        index="week_index",
        columns="kind",
        values="minutes",
        aggfunc="sum",
        fill_value=0.0,
    )
