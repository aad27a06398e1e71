"""Mapping between persisted snake_case records and engine models.

The storage layer keeps one flat row per player: scalar counters, small
level -> count maps, ISO date strings and the program settings. Absent or
null fields default to zero / False / empty map; individual bad entries are
dropped with a warning rather than failing the whole load.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from program_engine.engine import parse_iso_date
from program_engine.exceptions import RecordError
from program_engine.models.config import ProgramConfig
from program_engine.models.enums import PhaseId, Weekday
from program_engine.models.progression import ProgressionState

logger = logging.getLogger(__name__)

DEFAULT_TRAINING_DAYS: tuple[Weekday, ...] = (Weekday.MON, Weekday.WED, Weekday.FRI)
DEFAULT_SESSIONS_PER_WEEK = 3
DEFAULT_SESSION_MINUTES = 45
DEFAULT_HAS_SPACE_TO_HIT_BALLS = True

_LEVEL_MAP_FIELDS = (
    "ground_force_sessions_by_level",
    "sequencing_sessions_by_level",
    "exit_velo_sessions_by_level",
)
_COUNT_FIELDS = (
    "total_overspeed_sessions",
    "overspeed_sessions_in_current_phase",
    "total_counterweight_sessions",
    "total_sessions_completed",
)
_FLAG_FIELDS = (
    "needs_ground_force",
    "needs_sequencing",
    "needs_exit_velo",
    "needs_bat_delivery",
    "maintenance_extension_requested",
    "next_ramp_up_requested",
)
_DATE_FIELDS = (
    "phase_start_date",
    "program_start_date",
    "last_full_assessment_date",
    "last_quick_assessment_date",
)


# ---------------------------------------------------------------------------
# Progression state
# ---------------------------------------------------------------------------


def default_state(start: date) -> ProgressionState:
    """Fresh state for a player starting the program on *start*."""
    return ProgressionState(
        current_phase=PhaseId.RAMP1,
        phase_start_date=start,
        program_start_date=start,
    )


def state_from_record(row: Mapping[str, Any]) -> ProgressionState:
    """Build a ProgressionState from a persisted row.

    Raises:
        RecordError: If *row* is not a mapping or a date field is not ISO.
    """
    if not isinstance(row, Mapping):
        raise RecordError(f"Expected a mapping, got {type(row).__name__}")

    kwargs: dict[str, Any] = {"current_phase": _parse_phase(row.get("current_phase"))}
    for name in _COUNT_FIELDS:
        kwargs[name] = _parse_count(row.get(name), name)
    for name in _LEVEL_MAP_FIELDS:
        kwargs[name] = normalize_level_counts(row.get(name), name)
    for name in _FLAG_FIELDS:
        kwargs[name] = _parse_flag(row.get(name), name)
    for name in _DATE_FIELDS:
        kwargs[name] = parse_optional_date(row.get(name), name)

    return ProgressionState(**kwargs)


def state_to_record(state: ProgressionState) -> dict[str, Any]:
    """Inverse of state_from_record(). Level keys become strings."""
    record: dict[str, Any] = {"current_phase": state.current_phase.name}
    for name in _DATE_FIELDS:
        value = getattr(state, name)
        record[name] = value.isoformat() if value is not None else None
    for name in _COUNT_FIELDS:
        record[name] = getattr(state, name)
    for name in _LEVEL_MAP_FIELDS:
        counts = getattr(state, name)
        record[name] = {str(level): counts[level] for level in sorted(counts)}
    for name in _FLAG_FIELDS:
        record[name] = getattr(state, name)
    return record


def normalize_level_counts(value: Any, field_name: str = "levels") -> dict[int, int]:
    """Coerce a stored level map to ``{positive level: positive count}``.

    Keys may be ints or numeric strings; non-numeric or non-positive entries
    are dropped.
    """
    if not value:
        return {}
    if not isinstance(value, Mapping):
        logger.warning("Ignoring %s: expected a mapping, got %r", field_name, value)
        return {}

    counts: dict[int, int] = {}
    for raw_level, raw_count in value.items():
        try:
            level = int(raw_level)
            count = int(float(raw_count))
        except (TypeError, ValueError):
            logger.warning("Dropping %s entry %r: %r", field_name, raw_level, raw_count)
            continue
        if level >= 1 and count > 0:
            counts[level] = count
    return counts


def parse_optional_date(value: Any, field_name: str = "date") -> date | None:
    """Parse an ISO date (or datetime) string; None stays None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value))
    except ValueError as exc:
        raise RecordError(f"{field_name}: not an ISO date: {value!r}") from exc


def _parse_phase(value: Any) -> PhaseId:
    if isinstance(value, PhaseId):
        return value
    if isinstance(value, str):
        try:
            return PhaseId[value.strip().upper()]
        except KeyError:
            pass
    if value is not None:
        logger.warning("Unknown phase %r, falling back to RAMP1", value)
    return PhaseId.RAMP1


def _parse_flag(value: Any, field_name: str) -> bool:
    if value is None or isinstance(value, bool):
        return bool(value)
    logger.warning("Ignoring %s: not a boolean: %r", field_name, value)
    return False


def _parse_count(value: Any, field_name: str) -> int:
    if value is None:
        return 0
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        logger.warning("Ignoring %s: not a number: %r", field_name, value)
        return 0


# ---------------------------------------------------------------------------
# Program settings
# ---------------------------------------------------------------------------


def normalize_weekdays(raw: Any, fallback: Iterable[Weekday]) -> frozenset[Weekday]:
    """Case-insensitive weekday keys; unknown keys dropped, empty -> fallback."""
    if not raw or isinstance(raw, str) or not isinstance(raw, Iterable):
        return frozenset(fallback)

    days: set[Weekday] = set()
    for item in raw:
        if isinstance(item, Weekday):
            days.add(item)
            continue
        try:
            days.add(Weekday.from_key(str(item)))
        except KeyError:
            logger.warning("Dropping unknown weekday %r", item)
    return frozenset(days) if days else frozenset(fallback)


def config_from_record(
    row: Mapping[str, Any],
    *,
    age: int,
    horizon_weeks: int,
    start_date: date | str | None = None,
) -> ProgramConfig:
    """Build a ProgramConfig from stored program settings.

    Args:
        row: Settings record (``in_season``, ``training_days``, ``game_days``,
            ``sessions_per_week``, ``session_minutes``,
            ``has_space_to_hit_balls``, ``program_start_date``).
        age: Player age, which lives on the profile rather than the settings.
        horizon_weeks: Weeks to plan.
        start_date: Overrides ``program_start_date`` when given.

    Raises:
        RecordError: If *row* is not a mapping or has no usable start date.
    """
    if not isinstance(row, Mapping):
        raise RecordError(f"Expected a mapping, got {type(row).__name__}")

    start = start_date if start_date is not None else row.get("program_start_date")
    if start is None:
        raise RecordError("program_start_date is required")

    sessions = row.get("sessions_per_week")
    minutes = row.get("session_minutes")
    has_space = row.get("has_space_to_hit_balls")

    return ProgramConfig(
        age=int(age),
        program_start_date=start,
        horizon_weeks=horizon_weeks,
        in_season=_parse_flag(row.get("in_season"), "in_season"),
        game_days=normalize_weekdays(row.get("game_days"), ()),
        training_days=normalize_weekdays(row.get("training_days"), DEFAULT_TRAINING_DAYS),
        desired_sessions_per_week=(
            int(sessions) if isinstance(sessions, (int, float)) else DEFAULT_SESSIONS_PER_WEEK
        ),
        desired_session_minutes=(
            float(minutes) if isinstance(minutes, (int, float)) else DEFAULT_SESSION_MINUTES
        ),
        has_space_to_hit_balls=(
            has_space if isinstance(has_space, bool) else DEFAULT_HAS_SPACE_TO_HIT_BALLS
        ),
    )


def config_to_record(config: ProgramConfig) -> dict[str, Any]:
    """Settings record for *config*; weekdays are emitted in calendar order."""
    start = config.program_start_date
    return {
        "in_season": config.in_season,
        "training_days": [d.key for d in sorted(config.training_days)],
        "game_days": [d.key for d in sorted(config.game_days)],
        "sessions_per_week": config.desired_sessions_per_week,
        "session_minutes": config.desired_session_minutes,
        "has_space_to_hit_balls": config.has_space_to_hit_balls,
        "program_start_date": start.isoformat() if isinstance(start, date) else start,
    }
