"""Tests for age policy: brackets, session length and weekly frequency caps."""

import pytest

from program_engine.math.policy import (
    get_age_bracket,
    resolve_max_training_days,
    resolve_policy,
    resolve_session_minutes,
)
from program_engine.models.config import ProgramConfig
from program_engine.models.enums import AgeBracket


class TestAgeBracket:
    @pytest.mark.parametrize(
        "age, expected",
        [
            (0, AgeBracket.U9),
            (9, AgeBracket.U9),
            (10, AgeBracket.AGE_10_14),
            (14, AgeBracket.AGE_10_14),
            (15, AgeBracket.AGE_15_PRO),
            (40, AgeBracket.AGE_15_PRO),
        ],
    )
    def test_bracket_boundaries(self, age: int, expected: AgeBracket) -> None:
        assert get_age_bracket(age) == expected


class TestSessionMinutes:
    def test_desired_within_cap_is_kept(self) -> None:
        assert resolve_session_minutes(12, 45) == 45.0

    def test_capped_by_age(self) -> None:
        assert resolve_session_minutes(8, 45) == 30.0
        assert resolve_session_minutes(12, 120) == 60.0
        assert resolve_session_minutes(20, 120) == 90.0

    def test_never_below_fifteen(self) -> None:
        assert resolve_session_minutes(12, 5) == 15.0
        assert resolve_session_minutes(8, 0) == 15.0
        assert resolve_session_minutes(20, -30) == 15.0

    def test_fractional_minutes_preserved(self) -> None:
        assert resolve_session_minutes(12, 37.5) == 37.5


class TestMaxTrainingDays:
    def test_under_nine_capped_at_three(self) -> None:
        assert resolve_max_training_days(8, 5) == 3

    def test_older_capped_at_five(self) -> None:
        assert resolve_max_training_days(12, 7) == 5
        assert resolve_max_training_days(25, 6) == 5

    def test_desired_below_cap_is_kept(self) -> None:
        assert resolve_max_training_days(12, 2) == 2

    def test_negative_clamped_to_zero(self) -> None:
        assert resolve_max_training_days(12, -1) == 0


class TestResolvePolicy:
    def test_policy_from_config(self) -> None:
        config = ProgramConfig(
            age=9,
            program_start_date="2026-01-05",
            desired_sessions_per_week=4,
            desired_session_minutes=50,
        )
        policy = resolve_policy(config)
        assert policy.bracket == AgeBracket.U9
        assert policy.session_minutes == 30.0
        assert policy.max_training_days == 3
