from types import SimpleNamespace

import pytest
from prompt_toolkit.document import Document

from slotwise.completer import SlotCompleter


@pytest.fixture
def fake_parser():
    async def suggest_next(tokens):
        return ["AETHERWARP", "AETHERZOOM"]

    return SimpleNamespace(command_key="R", suggest_next=suggest_next)


def test_lcp_completions(fake_parser):
    completer = SlotCompleter(fake_parser)
    doc = Document("R A")
    results = list(completer.get_completions(doc, None))
    assert any(c.text == "AETHER" for c in results)
    assert any(c.text == "AETHERWARP" for c in results)
    assert any(c.text == "AETHERZOOM" for c in results)


def test_lcp_completions_space(fake_parser):
    completer = SlotCompleter(fake_parser)
    suggestions = ["London", "New York", "San Francisco"]
    stub = "N"
    completions = list(completer._yield_lcp_completions(suggestions, stub))
    assert any(c.text == '"New York"' for c in completions)
    assert all(c.start_position == -1 for c in completions)


def test_lcp_completions_no_common_prefix(fake_parser):
    completer = SlotCompleter(fake_parser)
    completions = list(completer._yield_lcp_completions(["alpha", "beta"], ""))
    assert [c.text for c in completions] == ["alpha", "beta"]


def test_lcp_completions_display_is_unquoted(fake_parser):
    completer = SlotCompleter(fake_parser)
    completions = list(completer._yield_lcp_completions(["log store"], "l"))
    assert completions[0].text == '"log store"'
    assert completions[0].display_text == "log store"
