"""Tests for externally triggered progression updates and phase commands."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Callable

import pytest

from program_engine.exceptions import PhaseTransitionError
from program_engine.models.enums import BlockKind, PhaseId
from program_engine.models.progression import ProgressionState
from program_engine.models.schedule import ContentBlock
from program_engine.transitions import (
    block_from_protocol,
    parse_level,
    record_completed_block,
    request_maintenance_extension,
    start_next_ramp_up,
)

StateFactory = Callable[..., ProgressionState]


class TestParseLevel:
    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Overspeed Level 3", 3),
            ("Exit Velo Application level2", 2),
            ("Power Mechanics Ground Force LEVEL 1", 1),
            ("Overspeed Level 7", None),
            ("Warm Up - Dynamic", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse(self, title: str | None, expected: int | None) -> None:
        assert parse_level(title) == expected


class TestBlockFromProtocol:
    def test_overspeed(self) -> None:
        block = block_from_protocol("overspeed", "Overspeed Level 2")
        assert block == ContentBlock.of(BlockKind.OVERSPEED, level=2)

    def test_counterweight_has_single_level(self) -> None:
        block = block_from_protocol("counterweight", "Counterweight")
        assert block == ContentBlock.of(BlockKind.COUNTERWEIGHT)
        assert block is not None and block.level is None

    def test_power_mechanics_by_title(self) -> None:
        gf = block_from_protocol("power_mechanics", "Power Mechanics Ground Force Level 3")
        seq = block_from_protocol("Power_Mechanics", "Power Mechanics Sequencing Level 2")
        bat = block_from_protocol("power_mechanics", "Power Mechanics Bat Delivery")
        assert gf is not None and gf.kind == BlockKind.PM_GROUND_FORCE and gf.level == 3
        assert seq is not None and seq.kind == BlockKind.PM_SEQUENCING and seq.level == 2
        assert bat is not None and bat.kind == BlockKind.PM_BAT_DELIVERY
        assert block_from_protocol("power_mechanics", "Hip Hinge Drill") is None

    def test_assessments(self) -> None:
        full = block_from_protocol("assessments", "Assessments Speed Full")
        quick = block_from_protocol("assessments", "Assessments Bat Speed Quick")
        assert full is not None and full.kind == BlockKind.FULL_ASSESSMENT
        assert quick is not None and quick.kind == BlockKind.QUICK_ASSESSMENT

    def test_untracked_categories(self) -> None:
        assert block_from_protocol("warm_up", "Warm Up - Dynamic") is None
        assert block_from_protocol(None, None) is None


class TestRecordCompletedBlock:
    def test_overspeed_counts_and_input_untouched(
        self, fresh_state: ProgressionState, monday: date
    ) -> None:
        block = ContentBlock.of(BlockKind.OVERSPEED, level=1)
        nxt = record_completed_block(fresh_state, block, monday)
        assert nxt.total_overspeed_sessions == 1
        assert nxt.overspeed_sessions_in_current_phase == 1
        assert nxt.total_sessions_completed == 1
        assert fresh_state.total_overspeed_sessions == 0
        assert fresh_state.total_sessions_completed == 0

    def test_leveled_block_counts_at_its_level(
        self, state_factory: StateFactory, monday: date
    ) -> None:
        state = state_factory(ground_force_sessions_by_level={1: 5})
        block = ContentBlock.of(BlockKind.PM_GROUND_FORCE, level=2)
        nxt = record_completed_block(state, block, monday)
        assert nxt.ground_force_sessions_by_level == {1: 5, 2: 1}
        assert state.ground_force_sessions_by_level == {1: 5}

    def test_counterweight_and_exit_velo(
        self, fresh_state: ProgressionState, monday: date
    ) -> None:
        state = record_completed_block(
            fresh_state, ContentBlock.of(BlockKind.COUNTERWEIGHT), monday
        )
        state = record_completed_block(
            state, ContentBlock.of(BlockKind.EXIT_VELO, level=1), monday
        )
        assert state.total_counterweight_sessions == 1
        assert state.exit_velo_sessions_by_level == {1: 1}
        assert state.total_sessions_completed == 2

    def test_assessments_set_dates(self, fresh_state: ProgressionState, monday: date) -> None:
        full = record_completed_block(
            fresh_state, ContentBlock.of(BlockKind.FULL_ASSESSMENT), monday
        )
        quick = record_completed_block(
            fresh_state, ContentBlock.of(BlockKind.QUICK_ASSESSMENT), monday
        )
        assert full.last_full_assessment_date == monday
        assert quick.last_quick_assessment_date == monday
        assert quick.last_full_assessment_date is None

    def test_untracked_block_only_counts_session(
        self, fresh_state: ProgressionState, monday: date
    ) -> None:
        for block in (None, ContentBlock.of(BlockKind.PM_BAT_DELIVERY)):
            nxt = record_completed_block(fresh_state, block, monday)
            assert nxt.total_sessions_completed == 1
            assert nxt.total_overspeed_sessions == 0

    def test_phase_follows_in_phase_count_not_total(
        self, state_factory: StateFactory, monday: date
    ) -> None:
        state = state_factory(total_overspeed_sessions=99)
        nxt = record_completed_block(
            state, ContentBlock.of(BlockKind.OVERSPEED, level=1), monday
        )
        assert nxt.current_phase == PhaseId.RAMP1


class TestPhaseAdvance:
    def test_ramp_to_primary_after_six_sessions(
        self, fresh_state: ProgressionState, monday: date
    ) -> None:
        state = fresh_state
        block = ContentBlock.of(BlockKind.OVERSPEED, level=1)
        for offset in range(5):
            state = record_completed_block(state, block, monday + timedelta(days=offset))
        assert state.current_phase == PhaseId.RAMP1
        assert state.overspeed_sessions_in_current_phase == 5

        sixth_day = monday + timedelta(days=12)
        state = record_completed_block(state, block, sixth_day)
        assert state.current_phase == PhaseId.PRIMARY1
        assert state.phase_start_date == sixth_day
        assert state.overspeed_sessions_in_current_phase == 0
        assert state.total_overspeed_sessions == 6

    def test_repeated_completions_leave_ramp1(
        self, fresh_state: ProgressionState, monday: date
    ) -> None:
        state = fresh_state
        block = ContentBlock.of(BlockKind.OVERSPEED, level=1)
        for offset in range(30):
            state = record_completed_block(state, block, monday + timedelta(days=2 * offset))
        assert state.current_phase == PhaseId.PRIMARY1
        assert state.phase_start_date == monday + timedelta(days=10)
        assert state.overspeed_sessions_in_current_phase == 24
        assert state.total_overspeed_sessions == 30

        state = record_completed_block(state, block, monday + timedelta(days=60))
        assert state.current_phase == PhaseId.MAINT1

    def test_primary_to_maintenance_after_twenty_five_sessions(
        self, state_factory: StateFactory, monday: date
    ) -> None:
        state = state_factory(
            current_phase=PhaseId.PRIMARY1,
            phase_start_date=monday,
            total_overspeed_sessions=30,
            overspeed_sessions_in_current_phase=24,
        )
        on = monday + timedelta(days=40)
        nxt = record_completed_block(state, ContentBlock.of(BlockKind.OVERSPEED, level=3), on)
        assert nxt.current_phase == PhaseId.MAINT1
        assert nxt.phase_start_date == on
        assert nxt.overspeed_sessions_in_current_phase == 0

    def test_primary_to_maintenance_after_seventy_days(
        self, state_factory: StateFactory, monday: date
    ) -> None:
        state = state_factory(
            current_phase=PhaseId.PRIMARY2,
            phase_start_date=monday,
            overspeed_sessions_in_current_phase=3,
        )
        block = ContentBlock.of(BlockKind.OVERSPEED, level=3)
        early = record_completed_block(state, block, monday + timedelta(days=69))
        assert early.current_phase == PhaseId.PRIMARY2
        late = record_completed_block(state, block, monday + timedelta(days=70))
        assert late.current_phase == PhaseId.MAINT2

    def test_only_overspeed_completions_advance(
        self, state_factory: StateFactory, monday: date
    ) -> None:
        state = state_factory(
            current_phase=PhaseId.PRIMARY3,
            phase_start_date=monday,
            overspeed_sessions_in_current_phase=30,
        )
        nxt = record_completed_block(
            state, ContentBlock.of(BlockKind.EXIT_VELO, level=1), monday + timedelta(days=90)
        )
        assert nxt.current_phase == PhaseId.PRIMARY3

    def test_maintenance_never_advances(
        self, state_factory: StateFactory, monday: date
    ) -> None:
        state = state_factory(
            current_phase=PhaseId.MAINT1,
            phase_start_date=monday,
            overspeed_sessions_in_current_phase=40,
        )
        nxt = record_completed_block(
            state, ContentBlock.of(BlockKind.OVERSPEED, level=3), monday + timedelta(days=200)
        )
        assert nxt.current_phase == PhaseId.MAINT1
        assert nxt.overspeed_sessions_in_current_phase == 41

    def test_input_state_untouched(self, state_factory: StateFactory, monday: date) -> None:
        state = state_factory(overspeed_sessions_in_current_phase=5)
        record_completed_block(state, ContentBlock.of(BlockKind.OVERSPEED, level=1), monday)
        assert state.current_phase == PhaseId.RAMP1
        assert state.overspeed_sessions_in_current_phase == 5


class TestMaintenanceExtension:
    def test_sets_flag_and_clears_ramp_request(self, state_factory: StateFactory) -> None:
        state = state_factory(current_phase=PhaseId.MAINT1, next_ramp_up_requested=True)
        nxt = request_maintenance_extension(state)
        assert nxt.maintenance_extension_requested is True
        assert nxt.next_ramp_up_requested is False
        assert nxt.current_phase == PhaseId.MAINT1
        assert state.maintenance_extension_requested is False

    def test_logs_outside_maintenance(
        self, state_factory: StateFactory, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="program_engine.transitions"):
            request_maintenance_extension(state_factory(current_phase=PhaseId.PRIMARY1))
        assert "PRIMARY1" in caplog.text


class TestStartNextRampUp:
    @pytest.mark.parametrize(
        "current, expected",
        [(PhaseId.MAINT1, PhaseId.RAMP2), (PhaseId.MAINT2, PhaseId.RAMP3)],
    )
    def test_advances_from_maintenance(
        self, state_factory: StateFactory, current: PhaseId, expected: PhaseId
    ) -> None:
        state = state_factory(
            current_phase=current,
            total_overspeed_sessions=40,
            overspeed_sessions_in_current_phase=8,
            maintenance_extension_requested=True,
        )
        on = date(2026, 5, 4)
        nxt = start_next_ramp_up(state, on)
        assert nxt.current_phase == expected
        assert nxt.phase_start_date == on
        assert nxt.overspeed_sessions_in_current_phase == 0
        assert nxt.total_overspeed_sessions == 40
        assert nxt.maintenance_extension_requested is False
        assert state.current_phase == current

    @pytest.mark.parametrize("current", [PhaseId.RAMP1, PhaseId.PRIMARY2, PhaseId.MAINT3])
    def test_rejected_elsewhere(self, state_factory: StateFactory, current: PhaseId) -> None:
        with pytest.raises(PhaseTransitionError) as excinfo:
            start_next_ramp_up(state_factory(current_phase=current), date(2026, 5, 4))
        assert excinfo.value.phase == current
