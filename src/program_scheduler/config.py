"""Environment-variable-based configuration for the schedule command."""

from __future__ import annotations

import os
from pathlib import Path

SETTINGS_PATH: Path = Path(
    os.environ.get("PROGRAM_CONFIG_PATH", "~/.program_engine/settings.json")
).expanduser()
STATE_PATH: Path = Path(
    os.environ.get("PROGRAM_STATE_PATH", "~/.program_engine/state.json")
).expanduser()
OUTPUT_PATH: Path = Path(
    os.environ.get("PROGRAM_OUTPUT_PATH", "schedule.json")
).expanduser()
HORIZON_WEEKS: int = int(os.environ.get("PROGRAM_HORIZON_WEEKS", "2"))
PLAYER_AGE: int = int(os.environ.get("PROGRAM_PLAYER_AGE", "12"))
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
