# Slotwise — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Builds the Slot Descriptor Table: the ordered, immutable list of `Slot`
entries for one parse or completion call, with the cumulative bounds both
allocation regimes rely on.

For every slot:
- `start_min` is the sum of the minimums of the slots before it, the earliest
  token index its own guaranteed tokens could begin at.
- `start_max` is the sum of the bounded maximums before it, the latest index
  before which tokens may still belong to a predecessor. An unbounded
  predecessor propagates its own `start_min`. It is never below `start_min`.

Table construction rejects malformed range strings, duplicate names, and an
unbounded slot that is not declared last.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Iterator

from slotwise.exceptions import SlotConfigError
from slotwise.logger import logger
from slotwise.positional.slot import UNBOUNDED, Slot, SlotSpec, resolve_requirements
from slotwise.positional.slot_value import ListValue, ScalarValue, SlotValue


def _normalize_spec(spec: SlotSpec) -> SlotSpec:
    """Make `collection` agree with the write target, creating one if needed."""
    if spec.value is None:
        value: SlotValue = ListValue() if spec.collection else ScalarValue()
        return replace(spec, value=value)
    if not isinstance(spec.value, SlotValue):
        raise SlotConfigError(
            f"value must implement SlotValue, got {type(spec.value).__name__}",
            spec.name,
        )
    return replace(spec, collection=spec.value.is_collection)


class SlotTable:
    """
    Ordered positional slots with their cumulative bounds.

    Attributes:
        slots (tuple[Slot, ...]): Slots in declaration order.
        total_min (int): Sum of all minimums.
        total_max (int | None): Sum of all maximums, or None if any slot is unbounded.
        required_all (bool): Whether the "all fields required" policy was active.
    """

    def __init__(
        self,
        slots: Iterable[Slot],
        total_min: int,
        total_max: int | None,
        required_all: bool = False,
    ) -> None:
        self.slots: tuple[Slot, ...] = tuple(slots)
        self.total_min = total_min
        self.total_max = total_max
        self.required_all = required_all

    @classmethod
    def build(cls, specs: Iterable[SlotSpec], required_all: bool = False) -> SlotTable:
        """
        Build a table from raw slot specs, in declaration order.

        Args:
            specs (Iterable[SlotSpec]): Raw slot declarations.
            required_all (bool): Scalars without a declared minimum become required.

        Returns:
            SlotTable: The resolved, immutable table.

        Raises:
            SlotConfigError: On any invalid declaration; no partial table is returned.
        """
        specs = [_normalize_spec(spec) for spec in specs]
        names: set[str] = set()
        slots: list[Slot] = []
        total_min = 0
        bounded_max = 0
        unbounded_seen = False

        for index, spec in enumerate(specs):
            if spec.name in names:
                raise SlotConfigError("name is already used by another slot", spec.name)
            names.add(spec.name)

            minimum, maximum = resolve_requirements(spec, required_all)
            if maximum == UNBOUNDED and index != len(specs) - 1:
                raise SlotConfigError(
                    "only the last positional can take an unbounded number of "
                    "arguments; declare a maximum (e.g. '1-3')",
                    spec.name,
                )

            start_min = total_min
            start_max = max(bounded_max, start_min)
            assert spec.value is not None, "value should be set by _normalize_spec"
            slots.append(
                Slot(
                    index=index,
                    name=spec.name,
                    minimum=minimum,
                    maximum=maximum,
                    start_min=start_min,
                    start_max=start_max,
                    value=spec.value,
                    candidates=spec.candidates,
                    converter=spec.converter,
                    help=spec.help,
                )
            )

            total_min += minimum
            if maximum == UNBOUNDED:
                unbounded_seen = True
                bounded_max = max(bounded_max, start_min)
            else:
                bounded_max = max(bounded_max, start_min) + maximum

        table = cls(
            slots,
            total_min=total_min,
            total_max=None if unbounded_seen else bounded_max,
            required_all=required_all,
        )
        logger.debug("Built %s", table)
        return table

    def remaining_min(self, index: int) -> int:
        """Sum of the minimums of the slot at `index` and every slot after it."""
        return sum(slot.minimum for slot in self.slots[index:])

    def reset_values(self) -> None:
        for slot in self.slots:
            slot.value.reset()

    def values(self) -> dict[str, object]:
        """Current value of every slot, keyed by name."""
        return {slot.name: slot.value.get() for slot in self.slots}

    def get(self, name: str) -> Slot | None:
        return next((slot for slot in self.slots if slot.name == name), None)

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self) -> Iterator[Slot]:
        return iter(self.slots)

    def __getitem__(self, index: int) -> Slot:
        return self.slots[index]

    def __str__(self) -> str:
        return (
            f"SlotTable(slots={len(self.slots)}, total_min={self.total_min}, "
            f"total_max={self.total_max})"
        )

    def __repr__(self) -> str:
        return str(self)
