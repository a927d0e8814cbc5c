# Slotwise — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The single allocation policy shared by final parsing and completion.

`walk_slot()` decides how many tokens one slot takes from a cursor. The mode
selects between the two regimes:

- `AllocationMode.DESTRUCTIVE`: the final parse. The cursor is shared by every
  slot in turn, claimed tokens are handed to `on_claim`, and a slot that has
  met its minimum leaves the rest to successors once the remaining tokens are
  all owed to their minimums.
- `AllocationMode.EXPLORATORY`: completion. The cursor is a private snapshot
  starting at `slot.start_min`, and the first `slot.drift` tokens are
  attributed to a predecessor that may still be open. Nothing is converted.

`is_eligible()` then tells whether a slot could still take another token.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable

from slotwise.positional.cursor import TokenCursor
from slotwise.positional.slot import Slot


class AllocationMode(Enum):
    """Whether a walk binds values or only explores a partial command line."""

    DESTRUCTIVE = "destructive"
    EXPLORATORY = "exploratory"

    def __str__(self) -> str:
        return self.value


def walk_slot(
    slot: Slot,
    cursor: TokenCursor,
    mode: AllocationMode,
    on_claim: Callable[[str], None] | None = None,
) -> int:
    """
    Let `slot` take tokens from `cursor` and return how many it took.

    Args:
        slot (Slot): The slot taking its turn.
        cursor (TokenCursor): Positioned at the first token this slot may see.
        mode (AllocationMode): Final parse or completion.
        on_claim (Callable[[str], None] | None): Called with every token the slot
            claims; exceptions propagate and abort the walk.

    Returns:
        int: Tokens attributed to this slot.
    """
    drift = slot.drift if mode is AllocationMode.EXPLORATORY else 0

    while not cursor.empty():
        if slot.is_full(cursor.claimed_by_slot):
            break

        if (
            mode is AllocationMode.DESTRUCTIVE
            and cursor.claimed_by_slot >= slot.minimum
            and cursor.reserved_for_successors()
        ):
            break

        if drift > 0:
            cursor.pop(attribute=False)
            drift -= 1
            continue

        token = cursor.pop()
        if on_claim is not None:
            on_claim(token)

        if mode is AllocationMode.DESTRUCTIVE and not slot.is_collection:
            break

    return cursor.claimed_by_slot


def is_eligible(slot: Slot, parsed: int) -> bool:
    """True if `slot` could legitimately accept another token after `parsed`."""
    if slot.unbounded:
        return True
    if parsed < slot.minimum:
        return True
    return parsed < slot.maximum
