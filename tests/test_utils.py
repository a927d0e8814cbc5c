import asyncio
import logging

import pytest
from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

from slotwise.utils import ensure_async, setup_logging


@pytest.mark.asyncio
async def test_ensure_async_wraps_sync():
    wrapped = ensure_async(lambda x: x * 2)
    assert await wrapped(4) == 8


@pytest.mark.asyncio
async def test_ensure_async_in_thread():
    wrapped = ensure_async(lambda: ["a"], in_thread=True)
    assert await wrapped() == ["a"]


@pytest.mark.asyncio
async def test_ensure_async_passes_coroutines_through():
    async def source():
        await asyncio.sleep(0)
        return 1

    assert ensure_async(source) is source
    assert await ensure_async(source)() == 1


@pytest.mark.asyncio
async def test_ensure_async_awaits_returned_awaitables():
    async def inner():
        return "done"

    wrapped = ensure_async(lambda: inner())
    assert await wrapped() == "done"


def test_ensure_async_rejects_non_callables():
    with pytest.raises(TypeError):
        ensure_async(42)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging_cli(restore_root_logger):
    setup_logging(mode="cli")
    assert any(isinstance(h, RichHandler) for h in restore_root_logger.handlers)


def test_setup_logging_json_from_env(restore_root_logger, monkeypatch):
    monkeypatch.setenv("SLOTWISE_LOG_MODE", "json")
    setup_logging()
    formatters = [h.formatter for h in restore_root_logger.handlers]
    assert any(isinstance(f, JsonFormatter) for f in formatters)


def test_setup_logging_file(restore_root_logger, tmp_path):
    log_file = tmp_path / "slotwise.log"
    setup_logging(mode="cli", log_filename=str(log_file), json_log_to_file=True)
    logging.getLogger("slotwise").debug("hello")
    for handler in restore_root_logger.handlers:
        handler.flush()
    assert "hello" in log_file.read_text()


def test_setup_logging_invalid_mode(restore_root_logger):
    with pytest.raises(ValueError, match="Invalid log mode"):
        setup_logging(mode="xml")
