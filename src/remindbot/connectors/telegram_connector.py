# src/remindbot/connectors/telegram_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from dataclasses import dataclass

from telegram import KeyboardButton, ReplyKeyboardMarkup, Update
from telegram.error import BadRequest, NetworkError, TelegramError
from telegram.ext import Application, ApplicationBuilder, ContextTypes, MessageHandler, filters

from ..cli.commands import Reply
from ..core import texts
from ..core.chat import handle_message
from ..core.state import AppState

logger = logging.getLogger(__name__)


def build_main_menu() -> ReplyKeyboardMarkup:
    """Two-row persistent menu: [add, list] / [delete]."""
    keyboard = [[KeyboardButton(label) for label in row] for row in texts.MAIN_MENU]
    return ReplyKeyboardMarkup(keyboard, resize_keyboard=True, one_time_keyboard=False)


class TelegramMessenger:
    """
    OutboundMessenger backed by a telegram.Bot.

    The bot's HTTP client belongs to the connector's event loop; calls from
    any other loop (the scanner thread) are marshalled onto it.
    """

    def __init__(self, bot, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._bot = bot
        self._loop = loop

    async def send_text(self, *, chat_id: int, text: str, show_menu: bool = False) -> None:
        coro = self._bot.send_message(
            chat_id=chat_id,
            text=text,
            reply_markup=build_main_menu() if show_menu else None,
        )
        if self._loop is None or self._loop is asyncio.get_running_loop():
            await coro
            return
        await asyncio.wrap_future(asyncio.run_coroutine_threadsafe(coro, self._loop))


def make_text_handler(state: AppState):
    async def on_text(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        # Edits of earlier messages are not new input.
        message = update.message
        chat = update.effective_chat
        if message is None or chat is None or not message.text:
            return

        chat_id = chat.id
        logger.info("Telegram <%s>: %r", chat_id, message.text)

        try:
            reply = handle_message(state, chat_id, message.text)
        except Exception:
            logger.exception("Message handler crashed.")
            reply = Reply(texts.INTERNAL_ERROR)

        if reply is None:
            return

        try:
            await message.reply_text(
                reply.text,
                reply_markup=build_main_menu() if reply.show_menu else None,
            )
        except TelegramError:
            logger.exception("Failed to send reply to chat %s.", chat_id)

    return on_text


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Errors raised inside handlers or while fetching updates."""
    error = context.error
    # BadRequest subclasses NetworkError but is an API-level rejection.
    if isinstance(error, NetworkError) and not isinstance(error, BadRequest):
        logger.warning("Telegram network error: %s", error)
    elif isinstance(error, TelegramError):
        logger.error("Telegram API error [%s]: %s", type(error).__name__, error.message)
    else:
        logger.error("Unhandled error in Telegram handler", exc_info=error)


def _polling_error_callback(error: TelegramError) -> None:
    if isinstance(error, NetworkError):
        logger.warning("Telegram polling network error: %s", error)
    else:
        logger.error("Telegram polling error: %s", error, exc_info=error)


def build_application(state: AppState, token: str) -> Application:
    app = ApplicationBuilder().token(token).build()
    # Commands go through the dispatcher too: /start must pass the stopped-chat gate.
    app.add_handler(MessageHandler(filters.TEXT & filters.UpdateType.MESSAGE, make_text_handler(state)))
    app.add_error_handler(error_handler)
    return app


async def _run_telegram_bot(app: Application, stop_event: asyncio.Event) -> None:
    """
    Telegram connector (async):

    initialize -> start polling -> wait for stop_event -> stop/shutdown
    """
    try:
        await app.initialize()
        me = await app.bot.get_me()
        logger.info("Telegram bot started: @%s", me.username)

        await app.updater.start_polling(
            poll_interval=0.5,
            timeout=15,
            bootstrap_retries=-1,
            drop_pending_updates=False,
            error_callback=_polling_error_callback,
        )
        await app.start()
        logger.info("Telegram polling started.")

        await stop_event.wait()

    except asyncio.CancelledError:
        logger.info("Telegram connector cancelled.")
    except Exception:
        logger.exception("Telegram connector crashed.")
    finally:
        if app.updater is not None and app.updater.running:
            await app.updater.stop()
        if app.running:
            await app.stop()
        await app.shutdown()
        logger.info("Telegram connector stopped.")


@dataclass
class TelegramBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event
    messenger: TelegramMessenger

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            logger.debug("Telegram loop already closed.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_telegram_in_background(state: AppState) -> TelegramBackgroundRunner | None:
    """
    Start the Telegram connector in a background thread with its own event loop,
    so the console REPL can run in parallel.
    """
    settings = state.settings
    if not getattr(settings, "telegram_enabled", False):
        logger.info("Telegram connector disabled, not starting.")
        return None

    token = (getattr(settings, "telegram_bot_token", None) or "").strip()
    if not token:
        logger.error("Telegram is enabled but REMINDBOT_TELEGRAM_BOT_TOKEN is not set.")
        return None

    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()
        app = build_application(state, token)

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        holder["messenger"] = TelegramMessenger(app.bot, loop)
        ready.set()

        try:
            loop.run_until_complete(_run_telegram_bot(app, stop_event))
        finally:
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="telegram-connector", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")
    messenger = holder.get("messenger")

    if (
        not isinstance(loop, asyncio.AbstractEventLoop)
        or not isinstance(stop_event, asyncio.Event)
        or not isinstance(messenger, TelegramMessenger)
    ):
        logger.error("Telegram thread did not initialize properly.")
        return None

    logger.info("Telegram background thread started.")
    return TelegramBackgroundRunner(thread=t, loop=loop, stop_event=stop_event, messenger=messenger)
