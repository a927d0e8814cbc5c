# Slotwise — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements `SequentialAllocator`, the final-parse regime of positional
allocation.

Slots are walked once, in declaration order, over one shared `TokenCursor`.
Each slot takes tokens until it is full, or until it has met its minimum and
every remaining token is owed to the minimums of the slots after it. Every
claimed token goes through the converter into the slot's value.

Failures:
- converter error: `ConversionError`, raised at once with the slot and token
- a slot short of its minimum: `RequiredArgumentError`, listing every required
  slot from the failing one onward that is still short
- the last slot is a bounded collection (or disabled) and full while tokens
  remain: `TooManyArgumentsError`

Example:
    table = SlotTable.build([SlotSpec("target", required=1), SlotSpec("files", collection=True)])
    remainder = SequentialAllocator(table).allocate(["a", "b", "c"])
    table.values()  # {'target': 'a', 'files': ['b', 'c']}
"""
from __future__ import annotations

from typing import Sequence

from slotwise.exceptions import (
    ConversionError,
    RequiredArgumentError,
    TooManyArgumentsError,
)
from slotwise.logger import logger
from slotwise.positional.cursor import TokenCursor
from slotwise.positional.messages import (
    not_enough_clause,
    required_message,
    too_many_clause,
    too_many_message,
)
from slotwise.positional.policy import AllocationMode, walk_slot
from slotwise.positional.slot import Slot
from slotwise.positional.slot_value import Converter, coerce_into
from slotwise.positional.table import SlotTable


class SequentialAllocator:
    """
    Distributes a complete token stream across a `SlotTable`.

    Args:
        table (SlotTable): The slots to fill.
        converter (Converter): Writes one token into a slot value. Slots with
            their own converter use it instead.

    Attributes:
        last_claims (dict[str, int]): Tokens claimed per slot by the last call.
    """

    def __init__(self, table: SlotTable, converter: Converter = coerce_into) -> None:
        self.table = table
        self.converter = converter
        self.last_claims: dict[str, int] = {}

    def _claim(self, slot: Slot, token: str) -> None:
        converter = slot.converter or self.converter
        try:
            converter(token, slot.value)
        except Exception as error:
            raise ConversionError(slot, token, error) from error

    def allocate(self, tokens: Sequence[str]) -> list[str]:
        """
        Claim tokens for every slot and return the unclaimed remainder.

        Slot values are reset first, so repeated calls do not accumulate.

        Args:
            tokens (Sequence[str]): The complete positional token stream.

        Returns:
            list[str]: Tokens no slot claimed, in order.

        Raises:
            ConversionError: If the converter rejects a token.
            RequiredArgumentError: If a slot cannot reach its minimum.
            TooManyArgumentsError: If the bounded last slot overflows.
        """
        self.table.reset_values()
        self.last_claims = {slot.name: 0 for slot in self.table}
        cursor = TokenCursor(tokens, still_required=self.table.total_min)

        for slot in self.table:
            cursor.begin_slot(slot, self.table.remaining_min(slot.index))
            claimed = walk_slot(
                slot,
                cursor,
                AllocationMode.DESTRUCTIVE,
                on_claim=lambda token, slot=slot: self._claim(slot, token),
            )
            self.last_claims[slot.name] = claimed
            logger.debug(
                "Slot '%s' claimed %d token(s); %d remaining, %d still required.",
                slot.name,
                claimed,
                len(cursor),
                cursor.still_required,
            )

            if claimed < slot.minimum:
                raise self._required_error(slot)

        self._check_overflow(cursor)
        return cursor.remaining

    def _required_error(self, failing: Slot) -> RequiredArgumentError:
        deficient = [
            slot
            for slot in self.table.slots[failing.index :]
            if slot.is_required and self.last_claims[slot.name] < slot.minimum
        ]
        clauses = [not_enough_clause(slot) for slot in deficient]
        logger.debug("Positional requirements not met: %s", ", ".join(clauses))
        return RequiredArgumentError(required_message(clauses), clauses, deficient)

    def _check_overflow(self, cursor: TokenCursor) -> None:
        if not self.table.slots or cursor.empty():
            return
        last = self.table.slots[-1]
        if last.unbounded or not (last.is_collection or last.maximum == 0):
            return
        if self.last_claims[last.name] < last.maximum:
            return
        clauses = [too_many_clause(last)]
        extra = cursor.remaining
        logger.debug("Slot '%s' is full with %d token(s) left.", last.name, len(extra))
        raise TooManyArgumentsError(too_many_message(clauses, extra), clauses, [last])
