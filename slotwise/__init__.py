"""
Slotwise

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .exceptions import (
    ArgumentCountError,
    ConversionError,
    RequiredArgumentError,
    SlotConfigError,
    SlotwiseError,
    TooManyArgumentsError,
)
from .positional import (
    UNBOUNDED,
    ConcurrentEligibilityEvaluator,
    PositionalParser,
    SequentialAllocator,
    SlotSpec,
    SlotTable,
)

logger = logging.getLogger("slotwise")


__all__ = [
    "ArgumentCountError",
    "ConcurrentEligibilityEvaluator",
    "ConversionError",
    "PositionalParser",
    "RequiredArgumentError",
    "SequentialAllocator",
    "SlotConfigError",
    "SlotSpec",
    "SlotTable",
    "SlotwiseError",
    "TooManyArgumentsError",
    "UNBOUNDED",
]
