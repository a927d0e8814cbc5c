import pytest
from rich.console import Console

import slotwise.__main__
import slotwise.positional.parser


@pytest.fixture(autouse=True)
def plain_console(monkeypatch):
    """Print without ANSI styles so captured output can be matched as text."""
    console = Console(color_system=None, force_terminal=False)
    monkeypatch.setattr(slotwise.__main__, "console", console)
    monkeypatch.setattr(slotwise.positional.parser, "console", console)
    return console
