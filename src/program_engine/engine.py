"""ProgramEngine: assembles a multi-week schedule from config and progress."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from program_engine.exceptions import InvalidConfigError
from program_engine.math.policy import ProgramPolicy, resolve_policy
from program_engine.models.config import ProgramConfig
from program_engine.models.day_context import DayContext
from program_engine.models.phase import PhaseDefinition, get_phase_definition
from program_engine.models.progression import ProgressionState
from program_engine.models.schedule import ContentBlock, DayPlan, Schedule, WeekPlan
from program_engine.models.trace import DayTrace
from program_engine.planning.day_allocator import allocate_day
from program_engine.planning.week_planner import DAYS_PER_WEEK, WeekLayout, plan_week

logger = logging.getLogger(__name__)


def parse_iso_date(text: str) -> date:
    """Parse an ISO date or datetime string (a trailing ``Z`` means UTC).

    Raises:
        ValueError: When *text* is neither.
    """
    text = text.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text).date()


def parse_start_date(value: date | str) -> date:
    """Normalise a configured start date; unparseable input is a caller error."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return parse_iso_date(value)
        except ValueError as exc:
            raise InvalidConfigError(f"Unparseable start date: {value!r}") from exc
    raise InvalidConfigError(f"Start date must be a date or ISO string, got {value!r}")


def validate_horizon(horizon_weeks: int) -> int:
    if isinstance(horizon_weeks, bool) or not isinstance(horizon_weeks, int):
        raise InvalidConfigError(f"Horizon must be an integer, got {horizon_weeks!r}")
    if horizon_weeks <= 0:
        raise InvalidConfigError(f"Horizon must be at least 1 week, got {horizon_weeks}")
    return horizon_weeks


class ProgramEngine:
    """Folds per-day allocations into weeks and weeks into a schedule.

    Usage:
        engine = ProgramEngine()
        schedule = engine.generate(config, state)
        schedule, traces = engine.generate_traced(config, state)

    The engine is stateless; each call owns its own copy of the progression
    state, so one instance can be shared freely.
    """

    def generate(self, config: ProgramConfig, initial_state: ProgressionState) -> Schedule:
        """Produce the schedule for *config* starting from *initial_state*.

        Args:
            config: Player configuration.
            initial_state: Progress snapshot. Never mutated.

        Returns:
            The Schedule covering ``config.horizon_weeks`` weeks.

        Raises:
            InvalidConfigError: Horizon below one week or unparseable start date.
        """
        schedule, _, _ = self._run(config, initial_state)
        return schedule

    def generate_traced(
        self, config: ProgramConfig, initial_state: ProgressionState
    ) -> tuple[Schedule, tuple[DayTrace, ...]]:
        """Like generate(), plus the allocation trace of every training day."""
        schedule, traces, _ = self._run(config, initial_state)
        return schedule, traces

    def simulate(
        self, config: ProgramConfig, initial_state: ProgressionState
    ) -> tuple[Schedule, ProgressionState]:
        """Like generate(), plus the progression state at the end of the horizon.

        Useful for previewing where the player would be if every scheduled
        block were completed as planned.
        """
        schedule, _, final_state = self._run(config, initial_state)
        return schedule, final_state

    def _run(
        self, config: ProgramConfig, initial_state: ProgressionState
    ) -> tuple[Schedule, tuple[DayTrace, ...], ProgressionState]:
        start_date = parse_start_date(config.program_start_date)
        horizon = validate_horizon(config.horizon_weeks)

        policy = resolve_policy(config)
        phase = get_phase_definition(initial_state.current_phase)
        state = initial_state.copy()

        weeks: list[WeekPlan] = []
        traces: list[DayTrace] = []

        for week_index in range(horizon):
            week_start = start_date + timedelta(days=week_index * DAYS_PER_WEEK)
            layout = plan_week(config, policy, phase, week_index, week_start)
            weeks.append(self._build_week(layout, policy, phase, state, traces))

        logger.debug(
            "Generated %d week(s) from %s in %s: %d training days, %d overspeed days",
            horizon,
            start_date.isoformat(),
            phase.phase_id.name,
            sum(w.training_day_count for w in weeks),
            sum(w.overspeed_day_count for w in weeks),
        )

        schedule = Schedule(start_date=start_date, horizon_weeks=horizon, weeks=tuple(weeks))
        return schedule, tuple(traces), state

    @staticmethod
    def _build_week(
        layout: WeekLayout,
        policy: ProgramPolicy,
        phase: PhaseDefinition,
        state: ProgressionState,
        traces: list[DayTrace],
    ) -> WeekPlan:
        days: list[DayPlan] = []
        for slot in layout.slots:
            blocks: tuple[ContentBlock, ...] = ()
            if slot.is_training_day:
                day = DayContext(
                    date=slot.date,
                    weekday=slot.weekday,
                    phase=phase,
                    session_minutes=policy.session_minutes,
                    is_game_day=slot.is_game_day,
                    is_overspeed_day=slot.is_overspeed_day,
                )
                allocation = allocate_day(day, state)
                blocks = tuple(allocation.blocks)
                traces.append(
                    DayTrace(
                        date=slot.date,
                        results=tuple(allocation.results),
                        session_minutes=allocation.session_minutes,
                        remaining_minutes=allocation.remaining_minutes,
                    )
                )

            days.append(
                DayPlan(
                    date=slot.date,
                    weekday=slot.weekday,
                    is_game_day=slot.is_game_day,
                    is_training_day=slot.is_training_day,
                    is_overspeed_day=slot.is_overspeed_day,
                    blocks=blocks,
                )
            )

        return WeekPlan(week_index=layout.week_index, start_date=layout.start_date, days=tuple(days))


_DEFAULT_ENGINE = ProgramEngine()


def generate(config: ProgramConfig, initial_state: ProgressionState) -> Schedule:
    """Generate a schedule. The single entry point of the program engine."""
    return _DEFAULT_ENGINE.generate(config, initial_state)
