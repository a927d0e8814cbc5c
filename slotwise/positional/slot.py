# Slotwise — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `SlotSpec` and `Slot`, the raw and resolved forms of one positional
parameter declaration.

A `SlotSpec` is what a schema scanner (or `PositionalParser.add_argument()`)
hands over: a name, an optional minimum spec, and whether the slot collects
several tokens. `SlotTable.build()` turns the ordered specs into `Slot`
entries with their cumulative start bounds filled in.

Minimum specs:
- `None`: nothing declared, defaults depend on the slot kind
- `int` / `"a"`: at least `a` tokens, no upper bound
- `"a-b"`: between `a` and `b` tokens
- `True` / `False`: shorthand for `1` / `0`

Scalars (non-collection slots) never take more than one token: their maximum
is pinned to 1 unless explicitly disabled with a maximum of 0.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable, Union

from slotwise.exceptions import SlotConfigError
from slotwise.positional.slot_value import Converter, SlotValue

UNBOUNDED = -1

CandidateSource = Callable[
    [list[str]], Union[Iterable[str], Awaitable[Iterable[str]]]
]


def parse_range(required: str | int | bool, name: str) -> tuple[int, int]:
    """
    Parse a minimum spec into a `(minimum, maximum)` pair.

    Args:
        required (str | int | bool): The declared spec, e.g. `2`, `"2"` or `"1-3"`.
        name (str): Owning slot name, used in error messages.

    Returns:
        tuple[int, int]: The bounds; maximum is `UNBOUNDED` when not given.

    Raises:
        SlotConfigError: If the spec is malformed or the range is inverted.
    """
    if isinstance(required, bool):
        return (1 if required else 0), UNBOUNDED

    if isinstance(required, int):
        if required < 0:
            raise SlotConfigError(f"minimum must not be negative, got {required}", name)
        return required, UNBOUNDED

    if not isinstance(required, str):
        raise SlotConfigError(
            f"required must be an int or a 'min-max' string, got {type(required).__name__}",
            name,
        )

    text = required.strip()
    parts = text.split("-", 1)
    bounds = []
    for part in parts:
        part = part.strip()
        if not (part.isascii() and part.isdecimal()):
            raise SlotConfigError(f"malformed range {required!r}", name)
        bounds.append(int(part))

    if len(bounds) == 1:
        return bounds[0], UNBOUNDED

    minimum, maximum = bounds
    if maximum < minimum:
        raise SlotConfigError(
            f"maximum {maximum} is smaller than minimum {minimum} in {required!r}", name
        )
    return minimum, maximum


@dataclass
class SlotSpec:
    """
    Raw declaration of one positional slot.

    Attributes:
        name (str): Display name used in diagnostics.
        required (str | int | bool | None): Minimum spec (see module docs).
        collection (bool): True if the slot collects several tokens.
        value (SlotValue | None): Write target; a default one is created if None.
        candidates (CandidateSource | None): Completion source for this slot.
        converter (Converter | None): Per-slot converter overriding the allocator's.
        help (str): Help text for usage rendering.
    """

    name: str
    required: str | int | bool | None = None
    collection: bool = False
    value: SlotValue | None = None
    candidates: CandidateSource | None = None
    converter: Converter | None = None
    help: str = ""


def resolve_requirements(spec: SlotSpec, required_all: bool = False) -> tuple[int, int]:
    """Return the `(minimum, maximum)` a spec resolves to."""
    if spec.required is not None:
        minimum, maximum = parse_range(spec.required, spec.name)
    elif spec.collection:
        minimum, maximum = 0, UNBOUNDED
    elif required_all:
        minimum, maximum = 1, 1
    else:
        minimum, maximum = 0, 1

    if not spec.collection:
        if maximum != 0:
            maximum = 1
        minimum = min(minimum, maximum)
    return minimum, maximum


@dataclass(frozen=True)
class Slot:
    """
    A resolved positional slot.

    Attributes:
        index (int): 0-based declaration order.
        name (str): Display name for diagnostics.
        minimum (int): Smallest number of tokens this slot must receive.
        maximum (int): Largest number of tokens it may receive, or `UNBOUNDED`.
        start_min (int): Sum of the minimums of all preceding slots.
        start_max (int): Sum of the bounded maximums of all preceding slots,
            never smaller than `start_min`.
        value (SlotValue): Opaque write target handed to the converter.
        candidates (CandidateSource | None): Completion source, if any.
        converter (Converter | None): Per-slot converter, if any.
        help (str): Help text.
    """

    index: int
    name: str
    minimum: int
    maximum: int
    start_min: int
    start_max: int
    value: SlotValue = field(compare=False, repr=False)
    candidates: CandidateSource | None = field(default=None, compare=False, repr=False)
    converter: Converter | None = field(default=None, compare=False, repr=False)
    help: str = field(default="", compare=False, repr=False)

    @property
    def is_collection(self) -> bool:
        return self.value.is_collection

    @property
    def unbounded(self) -> bool:
        return self.maximum == UNBOUNDED

    @property
    def drift(self) -> int:
        """Width of the token window whose ownership is ambiguous with predecessors."""
        return self.start_max - self.start_min

    @property
    def is_required(self) -> bool:
        return self.minimum > 0

    def is_full(self, count: int) -> bool:
        """True if `count` tokens fill this slot."""
        return not self.unbounded and count >= self.maximum

    def get_usage_text(self) -> str:
        """Render this slot the way it appears in a usage line."""
        if not self.is_collection:
            if self.maximum == 0:
                return ""
            return self.name if self.is_required else f"[{self.name}]"
        head = " ".join([self.name] * self.minimum)
        if self.unbounded:
            tail = f"[{self.name} ...]"
        elif self.maximum > self.minimum:
            tail = f"[{self.name} x{self.maximum - self.minimum}]"
        else:
            tail = ""
        return " ".join(part for part in (head, tail) if part)

    def describe(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "name": self.name,
            "minimum": self.minimum,
            "maximum": self.maximum,
            "start_min": self.start_min,
            "start_max": self.start_max,
            "collection": self.is_collection,
        }
