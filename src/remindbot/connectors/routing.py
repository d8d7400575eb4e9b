# src/remindbot/connectors/routing.py

from __future__ import annotations

import logging

from ..core.ports import OutboundMessenger

logger = logging.getLogger(__name__)


class RoutingMessenger:
    """
    Picks the connector that owns a chat id.

    The console chat id goes to the console; every other id is a Telegram chat.
    A chat nobody can reach raises, so the scanner keeps the task for retry.
    """

    def __init__(
        self,
        *,
        console: OutboundMessenger | None = None,
        telegram: OutboundMessenger | None = None,
        console_chat_id: int = 0,
    ) -> None:
        self._console = console
        self._telegram = telegram
        self._console_chat_id = console_chat_id

    def _target(self, chat_id: int) -> OutboundMessenger | None:
        if self._console is not None and chat_id == self._console_chat_id:
            return self._console
        return self._telegram

    async def send_text(self, *, chat_id: int, text: str, show_menu: bool = False) -> None:
        target = self._target(chat_id)
        if target is None:
            raise RuntimeError(f"no connector can deliver to chat {chat_id}")
        await target.send_text(chat_id=chat_id, text=text, show_menu=show_menu)
