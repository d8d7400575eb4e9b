# tests/test_commands.py

from __future__ import annotations

from remindbot.cli.commands import CommandRegistry, Reply, normalize_command, registry
from remindbot.core import texts


def test_command_registry_routes_exact_text(state) -> None:
    reg = CommandRegistry()
    called: list[int] = []

    def handler(state, chat_id):
        called.append(chat_id)
        return Reply("ok")

    reg.register("/ping", handler, "ping", aliases=["Пинг"])

    assert reg.handle(state, "/ping", 7) == Reply("ok")
    assert reg.handle(state, "Пинг", 8) == Reply("ok")
    assert called == [7, 8]


def test_command_registry_unknown_and_partial(state) -> None:
    reg = CommandRegistry()
    reg.register("/ping", lambda s, c: Reply("ok"), "ping")

    assert reg.handle(state, "hello", 1) is None
    assert reg.handle(state, "/ping extra", 1) is None
    assert reg.handle(state, "/PING", 1) is None


def test_normalize_command_strips_bot_mention() -> None:
    assert normalize_command("/start@ReminderBot") == "/start"
    assert normalize_command("/stop") == "/stop"
    assert normalize_command("mail@example.com;2099-01-01 10:00") == "mail@example.com;2099-01-01 10:00"


def test_default_registry_has_menu_labels() -> None:
    for label in (texts.LABEL_ADD_TASK, texts.LABEL_LIST_TASKS, texts.LABEL_DELETE_TASK):
        assert label in registry
    assert texts.CMD_START in registry
    assert texts.CMD_STOP in registry


def test_help_lists_commands(state) -> None:
    reply = registry.handle(state, texts.CMD_HELP, 1)
    assert reply is not None
    assert reply.text.startswith(texts.HELP_HEADER)
    assert "/start" in reply.text
    assert texts.LABEL_LIST_TASKS in reply.text
