# Slotwise — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `TokenCursor`, the mutable view over the tokens still to be claimed.

One cursor is shared, by explicit reference, across the whole sequential walk
of a final parse. Completion never shares it: each slot task works on its own
`snapshot()`, which only shares the read-only token tuple.
"""
from __future__ import annotations

from typing import Sequence

from slotwise.positional.slot import Slot


class TokenCursor:
    """
    Tracks the remaining tokens and the shared claim counters.

    Attributes:
        claimed_globally (int): Tokens claimed by any slot so far.
        claimed_by_slot (int): Tokens attributed to the current slot.
        still_required (int): Tokens still owed to the minimums of the current
            and following slots.
    """

    def __init__(
        self,
        tokens: Sequence[str],
        still_required: int = 0,
        start: int = 0,
    ) -> None:
        self._tokens: tuple[str, ...] = tuple(tokens)
        self._position = start
        self.claimed_globally = start
        self.claimed_by_slot = 0
        self.still_required = still_required
        self._owed = 0

    @property
    def remaining(self) -> list[str]:
        """Tokens not yet claimed, in order."""
        return list(self._tokens[self._position :])

    def __len__(self) -> int:
        return len(self._tokens) - self._position

    def empty(self) -> bool:
        return self._position >= len(self._tokens)

    def peek(self) -> str | None:
        if self.empty():
            return None
        return self._tokens[self._position]

    def begin_slot(self, slot: Slot, remaining_min: int) -> None:
        """
        Reset the per-slot counters before `slot` takes its turn.

        Args:
            slot (Slot): The slot about to claim tokens.
            remaining_min (int): Sum of the minimums from `slot` onward.
        """
        self.claimed_by_slot = 0
        self.still_required = remaining_min
        self._owed = slot.minimum

    def pop(self, attribute: bool = True) -> str:
        """
        Remove and return the next token.

        Args:
            attribute (bool): Count the token toward the current slot. Tokens
                that still belong to a predecessor only advance the global count.

        Raises:
            IndexError: If no tokens remain.
        """
        if self.empty():
            raise IndexError("pop from an exhausted token cursor")
        token = self._tokens[self._position]
        self._position += 1
        self.claimed_globally += 1
        if attribute:
            self.claimed_by_slot += 1
            if self._owed > 0:
                self._owed -= 1
                self.still_required -= 1
        return token

    def reserved_for_successors(self) -> bool:
        """True if every remaining token is needed by the minimums still owed."""
        return len(self) <= self.still_required

    def snapshot(self, slot: Slot, total_min: int) -> TokenCursor:
        """
        Return an independent cursor starting at `slot.start_min`.

        The token tuple is shared read-only; every counter is private.
        """
        start = min(slot.start_min, len(self._tokens))
        cursor = TokenCursor(
            self._tokens,
            still_required=max(total_min - slot.start_min, 0),
            start=start,
        )
        cursor.begin_slot(slot, cursor.still_required)
        return cursor

    def __repr__(self) -> str:
        return (
            f"TokenCursor(remaining={len(self)}, claimed_globally={self.claimed_globally}, "
            f"claimed_by_slot={self.claimed_by_slot}, still_required={self.still_required})"
        )
