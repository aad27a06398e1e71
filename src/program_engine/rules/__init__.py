"""Allocation rules, evaluated by the day allocator in a fixed order."""

from program_engine.rules.assessment import BaselineAssessmentRule, PeriodicAssessmentRule
from program_engine.rules.base import AllocationRule
from program_engine.rules.mechanics import (
    BatDeliveryRule,
    ExitVeloRule,
    GroundForceRule,
    SequencingRule,
)
from program_engine.rules.stimulus import CounterweightRule, OverspeedRule
from program_engine.rules.warmup import DynamicWarmupRule, PregameWarmupRule

__all__ = [
    "AllocationRule",
    "BaselineAssessmentRule",
    "BatDeliveryRule",
    "CounterweightRule",
    "DynamicWarmupRule",
    "ExitVeloRule",
    "GroundForceRule",
    "OverspeedRule",
    "PeriodicAssessmentRule",
    "PregameWarmupRule",
    "SequencingRule",
]
