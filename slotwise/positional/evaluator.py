# Slotwise — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements `ConcurrentEligibilityEvaluator`, the completion regime of
positional allocation.

Given the tokens typed so far, every slot is evaluated in its own asyncio task
on a private cursor snapshot:

1. A slot whose `start_min` lies beyond the typed tokens is skipped.
2. The snapshot starts at `start_min`; the first `drift` tokens are attributed
   to a predecessor that may still be open, the rest count for the slot,
   stopping once it is full.
3. The slot is eligible if it is unbounded, short of its minimum, or below its
   maximum. Eligible slots register their candidate source.

Once every task has finished, each registered source is invoked once, tokens
already typed are filtered out, and the results are unioned.

Failures never escape `evaluate()`: a failing slot task or candidate source is
logged at debug level and simply contributes nothing. No timeout is applied
here; callers wrap the whole call if they need one.
"""
from __future__ import annotations

import asyncio
from typing import Iterable, Sequence

from slotwise.logger import logger
from slotwise.positional.cursor import TokenCursor
from slotwise.positional.policy import AllocationMode, is_eligible, walk_slot
from slotwise.positional.slot import Slot
from slotwise.positional.table import SlotTable
from slotwise.utils import ensure_async


class CandidateCollector:
    """
    Collects the candidate sources of eligible slots.

    Registration is guarded by a lock so slot tasks can insert concurrently.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._slots: dict[int, Slot] = {}

    async def register(self, slot: Slot) -> None:
        async with self._lock:
            self._slots[slot.index] = slot

    @property
    def slots(self) -> list[Slot]:
        """Registered slots, in declaration order."""
        return [self._slots[index] for index in sorted(self._slots)]

    async def _invoke(self, slot: Slot, partial: list[str]) -> set[str]:
        assert slot.candidates is not None, "only slots with a source are invoked"
        source = ensure_async(slot.candidates, in_thread=True)
        try:
            candidates: Iterable[str] = await source(list(partial))
        except Exception as error:
            logger.debug("Candidate source for '%s' failed: %s", slot.name, error)
            return set()
        if candidates is None:
            return set()
        return {str(candidate) for candidate in candidates}

    async def flush(self, partial: Sequence[str]) -> set[str]:
        """Invoke every registered source once and merge the results."""
        sources = [slot for slot in self.slots if slot.candidates is not None]
        if not sources:
            return set()
        results = await asyncio.gather(
            *(self._invoke(slot, list(partial)) for slot in sources)
        )
        typed = set(partial)
        merged: set[str] = set()
        for candidates in results:
            merged.update(candidate for candidate in candidates if candidate not in typed)
        return merged


class ConcurrentEligibilityEvaluator:
    """
    Decides which slots could take the next token of a partial command line.

    Args:
        table (SlotTable): The slots to evaluate. Their values are never touched.
    """

    def __init__(self, table: SlotTable) -> None:
        self.table = table

    def parsed_count(self, slot: Slot, partial: Sequence[str]) -> int | None:
        """
        Return how many typed tokens `slot` would hold, or None if the slot
        cannot be current yet.
        """
        if len(partial) < slot.start_min:
            return None
        snapshot = TokenCursor(partial).snapshot(slot, self.table.total_min)
        return walk_slot(slot, snapshot, AllocationMode.EXPLORATORY)

    def slot_is_eligible(self, slot: Slot, partial: Sequence[str]) -> bool:
        parsed = self.parsed_count(slot, partial)
        return parsed is not None and is_eligible(slot, parsed)

    def eligible_slots(self, partial: Sequence[str]) -> list[Slot]:
        """Slots that would contribute candidates for `partial`, in order."""
        return [slot for slot in self.table if self.slot_is_eligible(slot, partial)]

    async def _evaluate_slot(
        self, slot: Slot, partial: tuple[str, ...], collector: CandidateCollector
    ) -> None:
        if self.slot_is_eligible(slot, partial):
            await collector.register(slot)

    async def evaluate(self, partial: Sequence[str]) -> set[str]:
        """
        Return the merged candidates of every eligible slot.

        Args:
            partial (Sequence[str]): Positional tokens typed so far.

        Returns:
            set[str]: Deduplicated candidates, without tokens already typed.
        """
        tokens = tuple(partial)
        collector = CandidateCollector()
        tasks = [
            asyncio.create_task(self._evaluate_slot(slot, tokens, collector))
            for slot in self.table
        ]
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for slot, result in zip(self.table, results):
            if isinstance(result, Exception):
                logger.debug("Eligibility of '%s' failed: %s", slot.name, result)

        logger.debug(
            "Eligible positionals for %r: %s",
            list(tokens),
            [slot.name for slot in collector.slots],
        )
        return await collector.flush(tokens)

    def evaluate_sync(self, partial: Sequence[str]) -> set[str]:
        """Run `evaluate()` to completion from synchronous code."""
        return asyncio.run(self.evaluate(partial))
