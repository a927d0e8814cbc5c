# Slotwise — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by Slotwise.

These exceptions provide structured error handling for the failure cases of
positional allocation: invalid slot declarations, slots that did not receive
enough tokens, a bounded final slot that received too many, and converter
failures while binding a single token.

All exceptions inherit from `SlotwiseError`, the base exception for the package.

Exception Hierarchy:
- SlotwiseError
    ├── SlotConfigError
    ├── ArgumentCountError
    │     ├── RequiredArgumentError
    │     └── TooManyArgumentsError
    └── ConversionError

Completion never raises: failures inside a single slot's eligibility task are
logged and dropped by the evaluator.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from slotwise.positional.slot import Slot


class SlotwiseError(Exception):
    """Base exception for Slotwise."""


class SlotConfigError(SlotwiseError):
    """Exception raised when a positional slot table cannot be built."""

    def __init__(self, message: str, slot_name: str | None = None) -> None:
        self.slot_name = slot_name
        if slot_name:
            message = f"invalid positional '{slot_name}': {message}"
        super().__init__(message)


class ArgumentCountError(SlotwiseError):
    """
    Base for errors about how many tokens positional slots received.

    Attributes:
        clauses (list[str]): One rendered clause per offending slot, in
            declaration order (e.g. "`files (at least 2 arguments)`").
        slots (list[Slot]): The offending slots, aligned with `clauses`.
    """

    def __init__(
        self,
        message: str,
        clauses: list[str] | None = None,
        slots: list[Slot] | None = None,
    ) -> None:
        super().__init__(message)
        self.clauses: list[str] = clauses or []
        self.slots: list[Slot] = slots or []

    @property
    def names(self) -> list[str]:
        return [slot.name for slot in self.slots]


class RequiredArgumentError(ArgumentCountError):
    """Exception raised when one or more slots did not reach their minimum."""


class TooManyArgumentsError(ArgumentCountError):
    """Exception raised when the bounded last slot is full and tokens remain."""


class ConversionError(SlotwiseError):
    """
    Exception raised when the converter fails on a single token.

    The converter's own exception is chained as `__cause__` and kept as `error`.
    """

    def __init__(self, slot: Slot, token: str, error: Exception) -> None:
        self.slot = slot
        self.token = token
        self.error = error
        super().__init__(f"Invalid value for '{slot.name}': {token!r}: {error}")
