# Slotwise — (c) 2025 rtj.dev LLC — MIT Licensed
"""User-facing clauses and sentences for positional count errors."""
from __future__ import annotations

from slotwise.positional.slot import Slot


def _arguments(count: int) -> str:
    return "argument" if count == 1 else "arguments"


def not_enough_clause(slot: Slot) -> str:
    """Clause for a slot that is short of its minimum."""
    if not slot.is_collection:
        return f"`{slot.name}`"
    return f"`{slot.name} (at least {slot.minimum} {_arguments(slot.minimum)})`"


def too_many_clause(slot: Slot) -> str:
    """Clause for a slot that received more tokens than it accepts."""
    if slot.maximum == 0:
        return f"`{slot.name} (zero arguments)`"
    return f"`{slot.name} (at most {slot.maximum} {_arguments(slot.maximum)})`"


def join_clauses(clauses: list[str]) -> str:
    """Join clauses with commas and a final 'and'."""
    if not clauses:
        return ""
    if len(clauses) == 1:
        return clauses[0]
    return f"{', '.join(clauses[:-1])} and {clauses[-1]}"


def required_message(clauses: list[str]) -> str:
    if len(clauses) == 1:
        return f"the required argument {clauses[0]} was not provided"
    return f"the required arguments {join_clauses(clauses)} were not provided"


def too_many_message(clauses: list[str], extra: list[str]) -> str:
    plural = "s" if len(extra) > 1 else ""
    return (
        f"too many arguments for {join_clauses(clauses)}: "
        f"unexpected value{plural} {', '.join(extra)}"
    )
