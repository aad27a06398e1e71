"""Enumerations and fixed constants for the program engine.

Block costs, age caps and progression thresholds are fixed program policy,
not computed values. Changing one changes every generated schedule.
"""

from __future__ import annotations

from enum import IntEnum, auto


class Weekday(IntEnum):
    """Calendar weekday. Values match ``datetime.date.weekday()``."""

    MON = 0
    TUE = 1
    WED = 2
    THU = 3
    FRI = 4
    SAT = 5
    SUN = 6

    @property
    def key(self) -> str:
        """Three-letter lowercase key used in records and JSON, e.g. "mon"."""
        return self.name.lower()

    @classmethod
    def from_key(cls, key: str) -> Weekday:
        """Parse a weekday key ("mon", "Tue", ...). Raises KeyError if unknown."""
        return cls[key.strip().upper()[:3]]


class AgeBracket(IntEnum):
    """Age bands that drive session length and frequency caps."""

    U9 = auto()
    AGE_10_14 = auto()
    AGE_15_PRO = auto()


class PhaseType(IntEnum):
    """Macro phase type within one training cycle."""

    RAMP = auto()
    PRIMARY = auto()
    MAINTENANCE = auto()


class PhaseId(IntEnum):
    """The nine macro phases, three cycles of Ramp -> Primary -> Maintenance."""

    RAMP1 = auto()
    PRIMARY1 = auto()
    MAINT1 = auto()
    RAMP2 = auto()
    PRIMARY2 = auto()
    MAINT2 = auto()
    RAMP3 = auto()
    PRIMARY3 = auto()
    MAINT3 = auto()


class BlockKind(IntEnum):
    """Every kind of content block the allocator can schedule."""

    DYNAMIC_WARMUP = auto()
    PREGAME_WARMUP = auto()
    OVERSPEED = auto()          # Primary stimulus
    COUNTERWEIGHT = auto()      # Secondary modality
    PM_GROUND_FORCE = auto()
    PM_SEQUENCING = auto()
    PM_BAT_DELIVERY = auto()    # Capstone
    EXIT_VELO = auto()
    FULL_ASSESSMENT = auto()
    QUICK_ASSESSMENT = auto()


class LeveledModality(IntEnum):
    """Skill tracks that progress through integer levels."""

    GROUND_FORCE = auto()
    SEQUENCING = auto()
    EXIT_VELO = auto()


# ---------------------------------------------------------------------------
# Block costs (minutes)
# ---------------------------------------------------------------------------
BLOCK_MINUTES: dict[BlockKind, float] = {
    BlockKind.DYNAMIC_WARMUP: 5.0,
    BlockKind.PREGAME_WARMUP: 5.0,
    BlockKind.OVERSPEED: 10.0,
    BlockKind.COUNTERWEIGHT: 7.5,
    BlockKind.PM_GROUND_FORCE: 12.5,
    BlockKind.PM_SEQUENCING: 12.5,
    BlockKind.PM_BAT_DELIVERY: 12.5,
    BlockKind.EXIT_VELO: 10.0,
    BlockKind.FULL_ASSESSMENT: 7.5,
    BlockKind.QUICK_ASSESSMENT: 2.5,
}

# Protocol titles; leveled kinds get " Level N" appended.
BLOCK_TITLES: dict[BlockKind, str] = {
    BlockKind.DYNAMIC_WARMUP: "Warm Up - Dynamic",
    BlockKind.PREGAME_WARMUP: "Warm Up - Pre Game",
    BlockKind.OVERSPEED: "Overspeed",
    BlockKind.COUNTERWEIGHT: "Counterweight Level 1",
    BlockKind.PM_GROUND_FORCE: "Power Mechanics Ground Force",
    BlockKind.PM_SEQUENCING: "Power Mechanics Sequencing",
    BlockKind.PM_BAT_DELIVERY: "Power Mechanics Bat Delivery",
    BlockKind.EXIT_VELO: "Exit Velo Application",
    BlockKind.FULL_ASSESSMENT: "Assessments Speed Full",
    BlockKind.QUICK_ASSESSMENT: "Assessments Bat Speed Quick",
}

# ---------------------------------------------------------------------------
# Age policy
# ---------------------------------------------------------------------------
MIN_SESSION_MINUTES = 15.0
SESSION_MINUTES_CAP: dict[AgeBracket, float] = {
    AgeBracket.U9: 30.0,
    AgeBracket.AGE_10_14: 60.0,
    AgeBracket.AGE_15_PRO: 90.0,
}
MAX_TRAINING_DAYS_PER_WEEK: dict[AgeBracket, int] = {
    AgeBracket.U9: 3,
    AgeBracket.AGE_10_14: 5,
    AgeBracket.AGE_15_PRO: 5,
}

# ---------------------------------------------------------------------------
# Weekly overspeed policy
# ---------------------------------------------------------------------------
MAX_OVERSPEED_DAYS_PER_WEEK = 3
PHASE_OVERSPEED_CAP: dict[PhaseType, int] = {
    PhaseType.RAMP: 3,
    PhaseType.PRIMARY: 3,
    PhaseType.MAINTENANCE: 1,
}

# ---------------------------------------------------------------------------
# Progression thresholds (cumulative session counts)
# ---------------------------------------------------------------------------
COUNTERWEIGHT_MIN_OVERSPEED = 15

GROUND_FORCE_L1_MIN_OVERSPEED = 3
GROUND_FORCE_L2_MIN_OVERSPEED = 15
GROUND_FORCE_L3_MIN_OVERSPEED = 30
GROUND_FORCE_LEVEL_UP_SESSIONS = 5

SEQUENCING_L1_MIN_OVERSPEED = 3
SEQUENCING_L2_MIN_OVERSPEED = 15
SEQUENCING_LEVEL_UP_SESSIONS = 5

BAT_DELIVERY_MIN_COUNTERWEIGHT = 5
BAT_DELIVERY_MIN_SEQUENCING_L2 = 5

EXIT_VELO_L2_SESSIONS = 10
EXIT_VELO_L3_SESSIONS = 20
EXIT_VELO_MAX_LEVEL = 3

# Overspeed level by total sessions: first Primary/Maintenance, then later cycles.
OVERSPEED_FIRST_CYCLE_STEPS = (10, 20)          # -> levels 1, 2, 3
OVERSPEED_LATER_CYCLE_STEPS = (15, 30, 45)      # -> levels 2, 3, 4, 5

FULL_ASSESSMENT_INTERVAL_DAYS = 14

# Automatic phase advancement on a completed overspeed session
RAMP_EXIT_OVERSPEED_IN_PHASE = 6
PRIMARY_EXIT_OVERSPEED_IN_PHASE = 25
PRIMARY_MAX_DAYS_IN_PHASE = 70
