"""Schedule <-> plain JSON structure.

Field names follow the calendar client's camelCase contract
(``startDate``, ``isOverspeedDay``, ``protocolTitle``, ``meta.level``).
All functions are pure (no I/O). ``schedule_from_dict(schedule_to_dict(s))``
reproduces ``s`` exactly.
"""

from __future__ import annotations

import json
from datetime import date
from typing import Any

from program_engine.models.enums import BlockKind, Weekday
from program_engine.models.schedule import ContentBlock, DayPlan, Schedule, WeekPlan


def schedule_to_dict(schedule: Schedule) -> dict[str, Any]:
    """Convert a Schedule to a JSON-compatible dict."""
    return {
        "startDate": schedule.start_date.isoformat(),
        "horizonWeeks": schedule.horizon_weeks,
        "weeks": [_week_to_dict(w) for w in schedule.weeks],
    }


def schedule_to_json_string(schedule: Schedule, indent: int = 2) -> str:
    """Serialize a Schedule to a JSON string. Identical schedules give identical bytes."""
    return json.dumps(schedule_to_dict(schedule), indent=indent)


def schedule_from_dict(data: dict[str, Any]) -> Schedule:
    """Rebuild a Schedule from schedule_to_dict() output.

    Raises:
        KeyError: Missing field or unknown block kind / weekday.
        ValueError: Malformed date.
    """
    return Schedule(
        start_date=date.fromisoformat(data["startDate"]),
        horizon_weeks=int(data["horizonWeeks"]),
        weeks=tuple(_week_from_dict(w) for w in data["weeks"]),
    )


def schedule_from_json_string(text: str) -> Schedule:
    return schedule_from_dict(json.loads(text))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _week_to_dict(week: WeekPlan) -> dict[str, Any]:
    return {
        "weekIndex": week.week_index,
        "startDate": week.start_date.isoformat(),
        "days": [_day_to_dict(d) for d in week.days],
    }


def _day_to_dict(day: DayPlan) -> dict[str, Any]:
    return {
        "date": day.date.isoformat(),
        "weekday": day.weekday.key,
        "isGameDay": day.is_game_day,
        "isTrainingDay": day.is_training_day,
        "isOverspeedDay": day.is_overspeed_day,
        "blocks": [_block_to_dict(b) for b in day.blocks],
    }


def _block_to_dict(block: ContentBlock) -> dict[str, Any]:
    result: dict[str, Any] = {
        "kind": block.kind.name,
        "minutes": block.minutes,
        "protocolTitle": block.title,
    }
    if block.level is not None:
        result["meta"] = {"level": block.level}
    return result


def _week_from_dict(data: dict[str, Any]) -> WeekPlan:
    return WeekPlan(
        week_index=int(data["weekIndex"]),
        start_date=date.fromisoformat(data["startDate"]),
        days=tuple(_day_from_dict(d) for d in data["days"]),
    )


def _day_from_dict(data: dict[str, Any]) -> DayPlan:
    return DayPlan(
        date=date.fromisoformat(data["date"]),
        weekday=Weekday.from_key(data["weekday"]),
        is_game_day=bool(data["isGameDay"]),
        is_training_day=bool(data["isTrainingDay"]),
        is_overspeed_day=bool(data["isOverspeedDay"]),
        blocks=tuple(_block_from_dict(b) for b in data.get("blocks", ())),
    )


def _block_from_dict(data: dict[str, Any]) -> ContentBlock:
    meta = data.get("meta") or {}
    level = meta.get("level")
    return ContentBlock(
        kind=BlockKind[data["kind"]],
        minutes=float(data["minutes"]),
        title=data["protocolTitle"],
        level=int(level) if level is not None else None,
    )
