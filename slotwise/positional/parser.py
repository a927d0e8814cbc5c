# Slotwise — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `PositionalParser`, a declarative front end over the
positional allocation core.

Arguments are registered in order with `add_argument()`. The parser turns
them into `SlotSpec` entries, builds the `SlotTable` on first use, and then
runs either regime:

- `parse_args(...)`: final parse through `SequentialAllocator`, returning a
  `dict[str, Any]` of bound values.
- `suggest_next(...)`: completion through `ConcurrentEligibilityEvaluator`,
  returning a sorted list of candidates.

Example Usage:
    parser = PositionalParser(command_key="cp")
    parser.add_argument("sources", collection=True, required="1-8", type=Path)
    parser.add_argument("dest", type=Path, required=True)

    args = parser.parse_args(["a.txt", "b.txt", "out/"])
    # args == {'sources': [Path('a.txt'), Path('b.txt')], 'dest': Path('out')}

    parser.render_help()  # Rich output
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from rich.console import Console
from rich.markup import escape

from slotwise.console import console
from slotwise.exceptions import SlotConfigError
from slotwise.positional.allocator import SequentialAllocator
from slotwise.positional.evaluator import ConcurrentEligibilityEvaluator
from slotwise.positional.slot import CandidateSource, SlotSpec
from slotwise.positional.slot_value import (
    Converter,
    ListValue,
    ScalarValue,
    choice_converter,
    coerce_into,
    coerce_value,
)
from slotwise.positional.table import SlotTable


def static_candidates(values: Iterable[Any]) -> CandidateSource:
    """Candidate source that always offers the same values."""
    candidates = [str(value) for value in values]

    def source(_: list[str]) -> list[str]:
        return list(candidates)

    return source


class PositionalParser:
    """
    Ordered positional arguments for one command.

    Args:
        command_key (str): Name shown in the usage line.
        help_text (str): Description printed under the usage line.
        help_epilog (str): Dimmed text printed after the arguments.
        required_all (bool): Scalars without an explicit minimum are required.
        converter (Converter): Default converter for every slot.
    """

    def __init__(
        self,
        command_key: str = "",
        help_text: str = "",
        help_epilog: str = "",
        required_all: bool = False,
        converter: Converter = coerce_into,
    ) -> None:
        self.console: Console = console
        self.command_key = command_key
        self.help_text = help_text
        self.help_epilog = help_epilog
        self.required_all = required_all
        self.converter = converter
        self._specs: list[SlotSpec] = []
        self._table: SlotTable | None = None
        self.last_remainder: list[str] = []

    def _validate_name(self, name: str) -> str:
        if not isinstance(name, str) or not name:
            raise SlotConfigError("name must be a non-empty string")
        if name.startswith("-"):
            raise SlotConfigError("positional names cannot start with '-'", name)
        if any(spec.name == name for spec in self._specs):
            raise SlotConfigError("name is already used by another slot", name)
        return name

    def _validate_default(
        self, name: str, default: Any, expected_type: Any, choices: list[Any] | None
    ) -> None:
        if default is None:
            return
        items = default if isinstance(default, list) else [default]
        for item in items:
            if isinstance(item, str):
                try:
                    coerce_value(item, expected_type)
                except Exception as error:
                    raise SlotConfigError(
                        f"default {default!r} cannot be coerced: {error}", name
                    ) from error
            if choices and item not in choices:
                raise SlotConfigError(
                    f"default {item!r} not in allowed choices: {choices}", name
                )

    def add_argument(
        self,
        name: str,
        type: Any = str,
        required: str | int | bool | None = None,
        collection: bool = False,
        default: Any = None,
        choices: Iterable[Any] | None = None,
        suggestions: Sequence[str] | None = None,
        completer: CandidateSource | None = None,
        help: str = "",
    ) -> None:
        """
        Register the next positional argument.

        Args:
            name (str): Display name and result key.
            type (Any): Type each token is coerced to.
            required (str | int | bool | None): Minimum spec: `True`, `2`, `"1-3"`.
            collection (bool): Collect several tokens into a list.
            default (Any): Value reported when nothing was claimed.
            choices (Iterable | None): Allowed values; also offered as completions.
            suggestions (Sequence[str] | None): Completion candidates.
            completer (CandidateSource | None): Dynamic completion source, sync or
                async, called with the tokens typed so far.
            help (str): Help text.
        """
        name = self._validate_name(name)
        choice_list = list(choices) if choices is not None else None
        if suggestions is not None and not isinstance(suggestions, Sequence):
            raise SlotConfigError(
                f"suggestions must be a list or None, got {suggestions.__class__.__name__}",
                name,
            )
        if completer is not None and not callable(completer):
            raise SlotConfigError("completer must be callable", name)
        self._validate_default(name, default, type, choice_list)

        value = ListValue(type, default) if collection else ScalarValue(type, default)
        candidates: CandidateSource | None = completer
        if candidates is None and choice_list:
            candidates = static_candidates(choice_list)
        elif candidates is None and suggestions:
            candidates = static_candidates(suggestions)

        spec = SlotSpec(
            name=name,
            required=required,
            collection=collection,
            value=value,
            candidates=candidates,
            converter=(
                choice_converter(choice_list, self.converter) if choice_list else None
            ),
            help=help,
        )
        self._specs.append(spec)
        self._table = None

    @property
    def table(self) -> SlotTable:
        """The slot table, built on first use after any registration."""
        if self._table is None:
            self._table = SlotTable.build(self._specs, required_all=self.required_all)
        return self._table

    def parse_args_split(
        self, tokens: Sequence[str] | None = None
    ) -> tuple[dict[str, Any], list[str]]:
        """
        Parse tokens and return the bound values with the unclaimed remainder.

        Raises:
            ArgumentCountError: If a slot got too few, or the last slot too many.
            ConversionError: If a token cannot be converted.
        """
        allocator = SequentialAllocator(self.table, converter=self.converter)
        remainder = allocator.allocate(list(tokens or []))
        self.last_remainder = remainder
        return self.table.values(), remainder

    def parse_args(self, tokens: Sequence[str] | None = None) -> dict[str, Any]:
        """Parse tokens into a dictionary of bound values."""
        values, _ = self.parse_args_split(tokens)
        return values

    async def suggest_next(self, partial: Sequence[str]) -> list[str]:
        """
        Suggest candidates for the next positional token.

        Args:
            partial (Sequence[str]): Positional tokens typed so far, without the
                stub under the cursor.

        Returns:
            list[str]: Sorted candidates from every eligible slot.
        """
        evaluator = ConcurrentEligibilityEvaluator(self.table)
        return sorted(await evaluator.evaluate(partial))

    def get_usage(self, plain_text: bool = False) -> str:
        parts = [slot.get_usage_text() for slot in self.table]
        usage = " ".join(part for part in [self.command_key, *parts] if part)
        return usage if plain_text else escape(usage)

    def render_help(self) -> None:
        """Print formatted help text for these positionals using Rich output."""
        self.console.print(f"[bold]usage: {self.get_usage()}[/bold]\n")
        if self.help_text:
            self.console.print(escape(self.help_text) + "\n")

        if len(self.table):
            self.console.print("[bold]positional:[/bold]")
            for slot in self.table:
                flags = escape(slot.get_usage_text() or slot.name)
                arg_line = f"  {flags:<30} "
                help_text = escape(slot.help or "")
                if help_text and len(flags) > 30:
                    help_text = f"\n{'':<33}{help_text}"
                self.console.print(f"{arg_line}{help_text}")

        if self.help_epilog:
            self.console.print("\n" + escape(self.help_epilog), style="dim")

    def __str__(self) -> str:
        return (
            f"PositionalParser(command_key={self.command_key!r}, "
            f"positional={len(self._specs)})"
        )

    def __repr__(self) -> str:
        return str(self)
