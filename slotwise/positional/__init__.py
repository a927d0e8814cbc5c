"""
Slotwise

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .allocator import SequentialAllocator
from .cursor import TokenCursor
from .evaluator import CandidateCollector, ConcurrentEligibilityEvaluator
from .parser import PositionalParser, static_candidates
from .policy import AllocationMode, is_eligible, walk_slot
from .slot import UNBOUNDED, CandidateSource, Slot, SlotSpec, parse_range
from .slot_value import (
    Converter,
    ListValue,
    ScalarValue,
    SlotValue,
    choice_converter,
    coerce_into,
    coerce_value,
)
from .table import SlotTable

__all__ = [
    "AllocationMode",
    "CandidateCollector",
    "CandidateSource",
    "ConcurrentEligibilityEvaluator",
    "Converter",
    "ListValue",
    "PositionalParser",
    "ScalarValue",
    "SequentialAllocator",
    "Slot",
    "SlotSpec",
    "SlotTable",
    "SlotValue",
    "TokenCursor",
    "UNBOUNDED",
    "choice_converter",
    "coerce_into",
    "coerce_value",
    "is_eligible",
    "parse_range",
    "static_candidates",
    "walk_slot",
]
