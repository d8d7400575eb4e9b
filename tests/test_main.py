# tests/test_main.py

from __future__ import annotations

import signal
import threading

import pytest

from remindbot.cli.main import make_signal_handler


def test_signal_handler_interrupts_console() -> None:
    stop_main = threading.Event()
    handler = make_signal_handler(stop_main, interrupt_console=True)

    with pytest.raises(KeyboardInterrupt):
        handler(signal.SIGTERM, None)
    assert stop_main.is_set()


def test_signal_handler_without_console_only_sets_event() -> None:
    stop_main = threading.Event()
    handler = make_signal_handler(stop_main, interrupt_console=False)

    handler(signal.SIGTERM, None)
    assert stop_main.is_set()
