"""Serialization: persisted records, schedule JSON and tabular export."""

from program_engine.serialization.frame import FRAME_COLUMNS, minutes_by_kind, schedule_to_frame
from program_engine.serialization.records import (
    config_from_record,
    config_to_record,
    default_state,
    state_from_record,
    state_to_record,
)
from program_engine.serialization.schedule_json import (
    schedule_from_dict,
    schedule_from_json_string,
    schedule_to_dict,
    schedule_to_json_string,
)

__all__ = [
    "FRAME_COLUMNS",
    "config_from_record",
    "config_to_record",
    "default_state",
    "minutes_by_kind",
    "schedule_from_dict",
    "schedule_from_json_string",
    "schedule_to_dict",
    "schedule_to_frame",
    "schedule_to_json_string",
    "state_from_record",
    "state_to_record",
]
