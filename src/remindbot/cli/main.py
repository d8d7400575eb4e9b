# src/remindbot/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts:
- Telegram connector in a background thread (optional),
- reminder scanner in a background thread,
- console REPL in the main thread (optional).
"""

from __future__ import annotations

import contextlib
import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import ConsoleMessenger, run_console_loop
from ..connectors.routing import RoutingMessenger
from ..connectors.telegram_connector import TelegramBackgroundRunner, start_telegram_in_background
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..tasks.task_scheduler import ScannerBackgroundRunner, start_scanner_in_background

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.shutdown()
    except Exception:
        logger.exception("State shutdown failed.")


def make_signal_handler(stop_main: threading.Event, *, interrupt_console: bool):
    """
    SIGTERM/SIGINT handler.

    With the console REPL running, the main thread sits in input(), which is
    restarted after a signal; raising KeyboardInterrupt unwinds it instead.
    """

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()
        if interrupt_console:
            raise KeyboardInterrupt

    return _handle_signal


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    telegram_runner: TelegramBackgroundRunner | None = None
    if settings.telegram_enabled:
        telegram_runner = start_telegram_in_background(state)

    messenger = RoutingMessenger(
        console=ConsoleMessenger() if settings.console_enabled else None,
        telegram=telegram_runner.messenger if telegram_runner is not None else None,
        console_chat_id=settings.console_chat_id,
    )
    scanner_runner: ScannerBackgroundRunner | None = start_scanner_in_background(state, messenger)

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    _handle_signal = make_signal_handler(stop_main, interrupt_console=settings.console_enabled)

    with contextlib.suppress(ValueError, OSError):
        signal.signal(signal.SIGTERM, _handle_signal)
        # The console REPL handles Ctrl+C itself (KeyboardInterrupt out of input()).
        if not settings.console_enabled:
            signal.signal(signal.SIGINT, _handle_signal)

    try:
        if settings.console_enabled:
            try:
                run_console_loop(state)
            except KeyboardInterrupt:
                logger.info("Console interrupted.")
            stop_main.set()
        else:
            logger.info("Console disabled. Running background connectors only. Press Ctrl+C to stop.")
            stop_main.wait()

    finally:
        if scanner_runner is not None:
            scanner_runner.stop()
        if telegram_runner is not None:
            telegram_runner.stop()

        if scanner_runner is not None:
            scanner_runner.join(timeout=5.0)
        if telegram_runner is not None:
            telegram_runner.join(timeout=10.0)

        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
