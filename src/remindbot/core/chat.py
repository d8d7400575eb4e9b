# src/remindbot/core/chat.py

"""
Core message dispatch.

This module is transport-agnostic:
- connectors provide inbound (chat_id, text),
- the dispatcher returns at most one Reply,
- connectors decide how to send it (console print, Telegram keyboard, etc.).

Rules are tried in a fixed priority order:
  stopped-chat gate -> exact commands/menu labels -> delete by number
  -> "description;date-time" entry -> no reply.
"""

from __future__ import annotations

import logging
import re

from ..cli.commands import Reply, normalize_command, registry
from ..tasks.task_api import DEFAULT_SEPARATOR, TaskFormatError, add_task_from_entry
from . import texts
from .state import AppState

logger = logging.getLogger(__name__)

_POSITIVE_INT = re.compile(r"^\s*\+?(\d+)\s*$")


def _parse_position(text: str) -> int | None:
    m = _POSITIVE_INT.match(text)
    if not m:
        return None
    n = int(m.group(1))
    return n if n > 0 else None


def _try_delete(state: AppState, chat_id: int, text: str) -> Reply | None:
    position = _parse_position(text)
    if position is None:
        return None

    scope = chat_id if getattr(state.settings, "scope_tasks_per_chat", False) else None
    removed = state.task_store.delete_at_position(position, scope)
    if removed is None:
        # Out of range behaves like any other unmatched text.
        logger.debug("Chat %s: position %d out of range, ignored", chat_id, position)
        return None

    logger.info("Chat %s deleted task %s at position %d", chat_id, removed.id, position)
    return Reply(texts.TASK_DELETED.format(description=removed.description))


def _try_add(state: AppState, chat_id: int, text: str) -> Reply | None:
    separator = getattr(state.settings, "task_separator", DEFAULT_SEPARATOR)
    if separator not in text:
        return None

    try:
        add_task_from_entry(state, chat_id, text)
    except TaskFormatError as e:
        logger.info("Chat %s: bad task entry (%s)", chat_id, e)
        return Reply(texts.TASK_FORMAT_ERROR)
    return Reply(texts.TASK_ADDED)


def handle_message(state: AppState, chat_id: int, text: str) -> Reply | None:
    """
    Dispatch one inbound text message.

    Returns the reply to send, or None when the message is intentionally
    ignored (unrecognized text, out-of-range number).
    """
    text = text or ""

    if state.stopped_chats.is_stopped(chat_id) and normalize_command(text) != texts.CMD_START:
        return Reply(texts.SESSION_ENDED)

    reply = registry.handle(state, text, chat_id)
    if reply is not None:
        return reply

    reply = _try_delete(state, chat_id, text)
    if reply is not None:
        return reply

    reply = _try_add(state, chat_id, text)
    if reply is not None:
        return reply

    # Unmatched input is dropped silently.
    logger.debug("Chat %s: no rule matched %r", chat_id, text)
    return None
