# src/remindbot/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from datetime import datetime

from ..cli.commands import Reply
from ..core import texts
from ..core.chat import handle_message
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _rewrite_prev_line(line: str) -> None:
    """
    Replace the last terminal line with `line`.
    Best-effort: if not a TTY, just print a new line.
    """
    if sys.stdout.isatty():
        sys.stdout.write("\033[1A\033[2K\r")
        sys.stdout.write(line + "\n")
        sys.stdout.flush()
    else:
        print(line)


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def render_menu() -> str:
    rows = [" | ".join(f"[{label}]" for label in row) for row in texts.MAIN_MENU]
    return "\n".join(rows)


def print_reply(reply: Reply) -> None:
    _print_ts(f"<<< {reply.text}")
    if reply.show_menu:
        print(render_menu(), flush=True)


class ConsoleMessenger:
    """OutboundMessenger for the local console chat (reminders are printed)."""

    async def send_text(self, *, chat_id: int, text: str, show_menu: bool = False) -> None:
        print_reply(Reply(text, show_menu=show_menu))


def run_console_loop(state: AppState) -> None:
    chat_id = int(getattr(state.settings, "console_chat_id", 0))
    logger.info("Console connector started (chat_id=%s).", chat_id)
    _print_ts("[CONSOLE] Type messages or menu labels. Use /start to begin, /exit to quit.\n")

    while True:
        try:
            user_input = input(">>> You: ").strip()
            _rewrite_prev_line(f"[{_ts_local()}] >>> You: {user_input}")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = handle_message(state, chat_id, user_input)
        except Exception:
            logger.exception("Message handler crashed.")
            reply = Reply(texts.INTERNAL_ERROR)

        if reply is not None:
            print_reply(reply)

    logger.info("Console connector finished.")
