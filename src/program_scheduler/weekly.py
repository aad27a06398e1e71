"""Generate a player's upcoming training schedule from stored records.

Usage:
    program-schedule                               # paths from environment
    program-schedule --settings s.json --state p.json --out plan.json
    program-schedule --format csv --out plan.csv --horizon 4 --trace
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any

from program_engine.engine import ProgramEngine, parse_start_date
from program_engine.exceptions import ProgramEngineError, RecordError
from program_engine.models.config import ProgramConfig
from program_engine.models.progression import ProgressionState
from program_engine.models.schedule import Schedule
from program_engine.models.trace import DayTrace
from program_engine.serialization import (
    config_from_record,
    default_state,
    schedule_to_frame,
    schedule_to_json_string,
    state_from_record,
)

from program_scheduler.config import (
    HORIZON_WEEKS,
    LOG_LEVEL,
    OUTPUT_PATH,
    PLAYER_AGE,
    SETTINGS_PATH,
    STATE_PATH,
)

logger = logging.getLogger(__name__)


def _load_json(path: Path) -> dict[str, Any]:
    with open(path) as f:
        return json.load(f)


def _resolve_age(age: int | None, settings: dict[str, Any]) -> int:
    if age is not None:
        return age
    raw = settings.get("age", PLAYER_AGE)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise RecordError(f"age: not a number: {raw!r}") from exc


def build_inputs(
    settings: dict[str, Any],
    state_row: dict[str, Any] | None,
    *,
    age: int | None,
    horizon_weeks: int,
    today: date | None = None,
) -> tuple[ProgramConfig, ProgressionState]:
    """Map raw records to engine inputs.

    Age comes from the argument, then the settings record, then the
    environment default. Without a stored state the player starts fresh on
    the program start date (or *today*).
    """
    resolved_age = _resolve_age(age, settings)
    start = settings.get("program_start_date") or (today or date.today()).isoformat()
    config = config_from_record(
        settings, age=resolved_age, horizon_weeks=horizon_weeks, start_date=start
    )

    if state_row is None:
        state = default_state(parse_start_date(start))
    else:
        state = state_from_record(state_row)
    return config, state


def _log_traces(traces: tuple[DayTrace, ...]) -> None:
    for trace in traces:
        for result in trace.results:
            logger.info(
                "%s %-20s %-12s %s",
                trace.date.isoformat(),
                result.rule_id,
                result.status.name,
                result.explanation,
            )


def write_schedule(schedule: Schedule, out_path: Path, fmt: str) -> None:
    if fmt == "csv":
        schedule_to_frame(schedule).to_csv(out_path, index=False)
    else:
        out_path.write_text(schedule_to_json_string(schedule) + "\n")


def run(
    settings_path: Path,
    state_path: Path,
    out_path: Path,
    *,
    horizon_weeks: int,
    age: int | None = None,
    fmt: str = "json",
    trace: bool = False,
) -> int:
    """Load records, generate, write. Returns a process exit code."""
    try:
        settings = _load_json(settings_path)
    except FileNotFoundError:
        logger.error("Settings not found at %s", settings_path)
        return 1
    except json.JSONDecodeError as exc:
        logger.error("Settings at %s are not valid JSON: %s", settings_path, exc)
        return 1
    if not isinstance(settings, dict):
        logger.error("Settings at %s must be a JSON object", settings_path)
        return 1

    state_row: dict[str, Any] | None
    try:
        state_row = _load_json(state_path)
    except FileNotFoundError:
        logger.info("No progression state at %s, starting fresh", state_path)
        state_row = None
    except json.JSONDecodeError as exc:
        logger.error("Progression state at %s is not valid JSON: %s", state_path, exc)
        return 1

    try:
        config, state = build_inputs(
            settings, state_row, age=age, horizon_weeks=horizon_weeks
        )
        schedule, traces = ProgramEngine().generate_traced(config, state)
    except ProgramEngineError as exc:
        logger.error("Cannot generate schedule: %s", exc)
        return 1

    logger.info(
        "Generated %d week(s) from %s in %s phase",
        schedule.horizon_weeks,
        schedule.start_date.isoformat(),
        state.current_phase.name,
    )
    if trace:
        _log_traces(traces)

    write_schedule(schedule, out_path, fmt)
    logger.info("Wrote %s schedule to %s", fmt, out_path)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a periodized training schedule")
    parser.add_argument("--settings", type=Path, default=SETTINGS_PATH, help="Program settings JSON")
    parser.add_argument("--state", type=Path, default=STATE_PATH, help="Progression state JSON")
    parser.add_argument("--out", type=Path, default=OUTPUT_PATH, help="Output file")
    parser.add_argument("--horizon", type=int, default=HORIZON_WEEKS, help="Weeks to plan")
    parser.add_argument("--age", type=int, default=None, help="Player age (overrides settings)")
    parser.add_argument("--format", choices=("json", "csv"), default="json")
    parser.add_argument("--trace", action="store_true", help="Log every allocation decision")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    return run(
        args.settings,
        args.state,
        args.out,
        horizon_weeks=args.horizon,
        age=args.age,
        fmt=args.format,
        trace=args.trace,
    )


if __name__ == "__main__":
    sys.exit(main())
