# Slotwise — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `SlotCompleter`, a Prompt Toolkit completer for positional arguments.

The text before the cursor is split shell-style. Complete tokens are fed to
`PositionalParser.suggest_next()`, which evaluates every slot concurrently and
merges the candidates of the slots that could take the next token. The token
under the cursor (the stub) then filters those candidates.

Completion behavior:
- A single match is inserted fully.
- Several matches sharing a longer prefix insert that prefix and list all matches.
- Candidates containing whitespace are quoted.
- Unbalanced quotes or a failing evaluation yield no completions.

`get_completions_async()` awaits the evaluator on the running loop;
`get_completions()` runs it to completion for synchronous callers.
"""
from __future__ import annotations

import asyncio
import os
import shlex
from typing import TYPE_CHECKING, AsyncGenerator, Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from slotwise.logger import logger

if TYPE_CHECKING:
    from slotwise.positional.parser import PositionalParser


class SlotCompleter(Completer):
    """
    Prompt Toolkit completer for the positional arguments of one parser.

    Args:
        parser (PositionalParser): Provides the slots and their candidate sources.
        strip_command_key (bool): Drop a leading token equal to the parser's
            command key before evaluating.
    """

    def __init__(self, parser: "PositionalParser", strip_command_key: bool = True):
        self.parser = parser
        self.strip_command_key = strip_command_key

    def _split(self, document: Document) -> tuple[list[str], str] | None:
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
        except ValueError:
            return None
        cursor_at_end_of_token = text.endswith((" ", "\t")) or not text
        if (
            self.strip_command_key
            and self.parser.command_key
            and tokens
            and tokens[0] == self.parser.command_key
            and (len(tokens) > 1 or cursor_at_end_of_token)
        ):
            tokens = tokens[1:]
        if cursor_at_end_of_token:
            return tokens, ""
        return tokens[:-1], tokens[-1] if tokens else ""

    def get_completions(
        self, document: Document, complete_event: CompleteEvent | None
    ) -> Iterable[Completion]:
        """
        Compute completions for the current user input.

        Args:
            document (Document): The current Prompt Toolkit document.
            complete_event: The triggering event, not used here.

        Yields:
            Completion: One or more completions matching the current stub text.
        """
        split = self._split(document)
        if split is None:
            return
        parsed_args, stub = split
        try:
            suggestions = asyncio.run(self.parser.suggest_next(parsed_args))
        except Exception as error:
            logger.debug("Completion failed for %r: %s", parsed_args, error)
            return
        yield from self._yield_lcp_completions(suggestions, stub)

    async def get_completions_async(
        self, document: Document, complete_event: CompleteEvent
    ) -> AsyncGenerator[Completion, None]:
        split = self._split(document)
        if split is None:
            return
        parsed_args, stub = split
        try:
            suggestions = await self.parser.suggest_next(parsed_args)
        except Exception as error:
            logger.debug("Completion failed for %r: %s", parsed_args, error)
            return
        for completion in self._yield_lcp_completions(suggestions, stub):
            yield completion

    def _ensure_quote(self, text: str) -> str:
        """Quote `text` if it contains whitespace so it stays one token."""
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(
        self, suggestions: Iterable[str], stub: str
    ) -> Iterable[Completion]:
        """
        Yield completions for the current stub using longest-common-prefix logic.

        Args:
            suggestions (Iterable[str]): The raw suggestions to consider.
            stub (str): The currently typed prefix (used to offset insertion).

        Yields:
            Completion: Completion objects for the Prompt Toolkit menu.
        """
        matches = sorted(s for s in suggestions if s.startswith(stub))
        if not matches:
            return

        lcp = os.path.commonprefix(matches)

        if len(matches) == 1:
            yield Completion(
                self._ensure_quote(matches[0]),
                start_position=-len(stub),
                display=matches[0],
            )
        elif len(lcp) > len(stub):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
        else:
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
