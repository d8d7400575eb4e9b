# src/remindbot/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core import texts
from ..core.state import AppState
from ..tasks.task_api import format_task_lines

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Reply:
    """What the dispatcher wants sent back; the connector decides how."""

    text: str
    show_menu: bool = False


CommandHandler = Callable[[AppState, int], Reply]


def normalize_command(text: str) -> str:
    """'/start@SomeBot' -> '/start'. Menu labels pass through unchanged."""
    if text.startswith("/") and "@" in text:
        return text.split("@", 1)[0]
    return text


class CommandRegistry:
    """
    Exact-text command registry (slash commands and menu labels).

    Matching is plain string equality: menu buttons send their label verbatim.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        self._handlers[name] = handler
        self._help[name] = help_text
        for alias in aliases:
            self._handlers[alias] = handler

    def __contains__(self, text: str) -> bool:
        return normalize_command(text) in self._handlers

    def handle(self, state: AppState, text: str, chat_id: int) -> Reply | None:
        """
        Run the handler registered for `text`.
        Returns a Reply or None if `text` is not a registered command.
        """
        handler = self._handlers.get(normalize_command(text))
        if handler is None:
            return None
        return handler(state, chat_id)

    def build_help(self) -> str:
        lines = [texts.HELP_HEADER]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _scope(state: AppState, chat_id: int) -> int | None:
    # Listings are global unless per-chat scoping is switched on.
    if getattr(state.settings, "scope_tasks_per_chat", False):
        return chat_id
    return None


def _display_format(state: AppState) -> str:
    return getattr(state.settings, "display_datetime_format", "%Y-%m-%d %H:%M:%S")


def cmd_start(state: AppState, chat_id: int) -> Reply:
    state.stopped_chats.resume(chat_id)
    logger.info("Chat %s started a session", chat_id)
    return Reply(texts.GREETING, show_menu=True)


def cmd_stop(state: AppState, chat_id: int) -> Reply:
    state.stopped_chats.stop(chat_id)
    logger.info("Chat %s stopped the session", chat_id)
    return Reply(texts.FAREWELL)


def cmd_help(state: AppState, chat_id: int) -> Reply:
    return Reply(registry.build_help(), show_menu=True)


def cmd_add_task(state: AppState, chat_id: int) -> Reply:
    return Reply(texts.ADD_TASK_PROMPT)


def cmd_list_tasks(state: AppState, chat_id: int) -> Reply:
    tasks = state.task_store.list_tasks(_scope(state, chat_id))
    if not tasks:
        return Reply(texts.NO_TASKS)
    lines = [texts.LIST_HEADER, *format_task_lines(tasks, _display_format(state))]
    return Reply("\n".join(lines))


def cmd_delete_task(state: AppState, chat_id: int) -> Reply:
    tasks = state.task_store.list_tasks(_scope(state, chat_id))
    if not tasks:
        return Reply(texts.NO_TASKS_TO_DELETE)
    lines = [texts.DELETE_HEADER, *format_task_lines(tasks, _display_format(state))]
    return Reply("\n".join(lines))


registry.register(texts.CMD_START, cmd_start, help_text="Start a session and show the menu.")
registry.register(texts.CMD_STOP, cmd_stop, help_text="End the session.")
registry.register(texts.CMD_HELP, cmd_help, help_text="Show available commands.")
registry.register(texts.LABEL_ADD_TASK, cmd_add_task, help_text="How to enter a task.")
registry.register(texts.LABEL_LIST_TASKS, cmd_list_tasks, help_text="List tasks.")
registry.register(texts.LABEL_DELETE_TASK, cmd_delete_task, help_text="Pick a task to delete.")
