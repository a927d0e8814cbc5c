# Slotwise — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Write targets and the default value converter for positional slots.

The allocation core never inspects a slot's value. It only asks whether the
target is a collection, how many items it holds, and hands each claimed token
to a converter that writes into it.

Contents:
- `SlotValue`: the protocol every write target implements.
- `ScalarValue` / `ListValue`: typed write targets for one or many tokens.
- `coerce_value`: convert a string to a target type (Literal, unions, Enum,
  bool, datetime, or any callable type).
- `coerce_into`: the default `Converter`, coercing a token and writing it.
- `choice_converter`: a converter restricted to a set of choices.
"""
from __future__ import annotations

import types
from copy import deepcopy
from datetime import datetime
from enum import EnumMeta
from typing import (
    Any,
    Callable,
    Iterable,
    Literal,
    Protocol,
    Union,
    get_args,
    get_origin,
    runtime_checkable,
)

from dateutil import parser as date_parser


@runtime_checkable
class SlotValue(Protocol):
    """Opaque write target of a positional slot."""

    type: Any

    @property
    def is_collection(self) -> bool: ...

    def __len__(self) -> int: ...

    def write(self, item: Any) -> None: ...

    def get(self) -> Any: ...

    def reset(self) -> None: ...


Converter = Callable[[str, SlotValue], None]


class ScalarValue:
    """Holds at most one converted token."""

    def __init__(self, type: Any = str, default: Any = None) -> None:
        self.type = type
        self.default = default
        self._value: Any = None
        self._set = False

    @property
    def is_collection(self) -> bool:
        return False

    def __len__(self) -> int:
        return 1 if self._set else 0

    def write(self, item: Any) -> None:
        self._value = item
        self._set = True

    def get(self) -> Any:
        if self._set:
            return self._value
        return deepcopy(self.default)

    def reset(self) -> None:
        self._value = None
        self._set = False

    def __repr__(self) -> str:
        return f"ScalarValue(type={getattr(self.type, '__name__', self.type)}, value={self.get()!r})"


class ListValue:
    """Collects every converted token, in order."""

    def __init__(self, type: Any = str, default: list[Any] | None = None) -> None:
        self.type = type
        self.default = default
        self._items: list[Any] = []

    @property
    def is_collection(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._items)

    def write(self, item: Any) -> None:
        self._items.append(item)

    def get(self) -> list[Any]:
        if not self._items and self.default is not None:
            return deepcopy(self.default)
        return list(self._items)

    def reset(self) -> None:
        self._items = []

    def __repr__(self) -> str:
        return f"ListValue(type={getattr(self.type, '__name__', self.type)}, items={self._items!r})"


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Accepts various truthy and falsy representations such as 'true', 'yes', '0', 'off', etc.
    """
    if isinstance(value, bool):
        return value
    value = value.strip().lower()
    if value in {"true", "t", "1", "yes", "on"}:
        return True
    elif value in {"false", "f", "0", "no", "off"}:
        return False
    return bool(value)


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Convert a raw value or string to an Enum instance.

    Tries to resolve by name, value, or coerced base type.

    Raises:
        ValueError: If the value cannot be resolved to a valid Enum member.
    """
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        try:
            return enum_type[value]
        except KeyError:
            pass

    base_type = type(next(iter(enum_type)).value)
    try:
        coerced_value = base_type(value)
        return enum_type(coerced_value)
    except (ValueError, TypeError):
        values = [str(enum.value) for enum in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(values)}}}") from None


def coerce_value(value: str, target_type: Any) -> Any:
    """
    Attempt to convert a string to the given target type.

    Handles complex typing constructs such as Union, Literal, Enum, and datetime.

    Raises:
        ValueError: If conversion fails or the value is invalid.
    """
    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Literal:
        if value not in args:
            raise ValueError(
                f"Value '{value}' is not a valid literal for type {target_type}"
            )
        return value

    if isinstance(target_type, types.UnionType) or origin is Union:
        for arg in args:
            try:
                return coerce_value(value, arg)
            except (ValueError, TypeError):
                continue
        raise ValueError(f"Value '{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if target_type is bool:
        return coerce_bool(value)

    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as error:
            raise ValueError(f"Value '{value}' could not be parsed as a datetime") from error

    return target_type(value)


def coerce_into(token: str, target: SlotValue) -> None:
    """Default converter: coerce `token` to the target's type and write it."""
    target.write(coerce_value(token, target.type))


def choice_converter(
    choices: Iterable[Any], converter: Converter | None = None
) -> Converter:
    """
    Build a converter that only accepts values found in `choices`.

    Choices are compared against the coerced value and its string form. An
    accepted token is written by `converter`, or stored as the coerced value
    when none is given.
    """
    allowed = list(choices)
    allowed_text = {str(choice) for choice in allowed}

    def convert(token: str, target: SlotValue) -> None:
        value = coerce_value(token, target.type)
        if value not in allowed and str(value) not in allowed_text:
            raise ValueError(
                f"must be one of {{{', '.join(str(choice) for choice in allowed)}}}"
            )
        if converter is None:
            target.write(value)
        else:
            converter(token, target)

    return convert
