"""Per-chat typing indicator shown while a transcription is running."""
import asyncio
import logging

from telegram import Bot
from telegram.constants import ChatAction

from echoscript.bot_client import TypingIndicator
from echoscript.constants import TELEGRAM_TYPING_INTERVAL

logger = logging.getLogger(__name__)


async def _keep_typing(bot: Bot, chat_id: str, stop: asyncio.Event) -> None:
    while not stop.is_set():
        try:
            await bot.send_chat_action(chat_id=int(chat_id), action=ChatAction.TYPING)
        except Exception as exc:
            logger.debug("Typing action failed for %s: %s", chat_id, exc)
        try:
            await asyncio.wait_for(stop.wait(), timeout=TELEGRAM_TYPING_INTERVAL)
        except asyncio.TimeoutError:
            pass


class TelegramTypingIndicator(TypingIndicator):
    """Keeps one background typing task per chat."""

    def __init__(self, bot: Bot) -> None:
        self._bot = bot
        self._running: dict[str, tuple[asyncio.Event, asyncio.Task]] = {}

    async def start(self, to: str) -> None:
        match self._running.get(to):
            case None:
                stop = asyncio.Event()
                task = asyncio.create_task(_keep_typing(self._bot, to, stop))
                self._running[to] = (stop, task)
            case _:
                pass

    async def stop(self, to: str) -> None:
        match self._running.pop(to, None):
            case None:
                return
            case (stop, task):
                stop.set()
                await task
