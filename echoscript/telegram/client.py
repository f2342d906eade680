"""TelegramClient — event-driven transport via python-telegram-bot.

Voice notes and round video notes count as live recordings; audio, video and
document uploads count as files. Each chat gets its own SessionController,
and the client renders every state the controller moves into.
"""
import logging
from typing import Awaitable, Callable, Optional

from telegram import Message, Update
from telegram.ext import Application, CommandHandler, ContextTypes
from telegram.ext import MessageHandler as TGMessageHandler
from telegram.ext import filters

from echoscript.bot_client import BotClient, SessionFactory
from echoscript.capture import AudioCapture, is_accepted_mime_type, resolve_mime_type
from echoscript.config import Config
from echoscript.constants import (
    CMD_HELP,
    CMD_RESET,
    CMD_START,
    CMD_STATUS,
    CMD_TRANSCRIBE,
    MSG_AUDIO_READY,
    MSG_BLOCKED_CHAT,
    MSG_BUSY,
    MSG_ERR_DOWNLOAD_FAILED,
    MSG_ERR_INVALID_TYPE,
    MSG_ERR_TOO_LARGE,
    MSG_HELP,
    MSG_NOTHING_CAPTURED,
    MSG_PROCESSING,
    MSG_SEND_FAIL,
    MSG_SESSION_CLEARED,
    MSG_STATUS,
    RECORDING_MIME_TYPE,
    TELEGRAM_MAX_DOWNLOAD_BYTES,
    VIDEO_NOTE_MIME_TYPE,
)
from echoscript.errors import ValidationError
from echoscript.render import format_size, format_transcript, split_message
from echoscript.session import (
    Failed,
    Idle,
    Processing,
    Ready,
    SessionController,
    SessionState,
    Success,
)
from echoscript.telegram.indicator import TelegramTypingIndicator

logger = logging.getLogger(__name__)

MEDIA_FILTER = (
    filters.VOICE
    | filters.AUDIO
    | filters.VIDEO
    | filters.VIDEO_NOTE
    | filters.Document.ALL
)


def normalize_chat_id(s: str) -> str:
    return "".join(c for c in s if c.isdigit())


class TelegramClient(BotClient):

    def __init__(self, config: Config, session_factory: SessionFactory) -> None:
        self._token = config.telegram_bot_token
        self._allowed_chat_id = config.allowed_chat_id
        self._backend = config.transcription_backend
        self._model = config.transcription_model
        self._session_factory = session_factory
        self._app: Optional[Application] = None
        self._indicator: Optional[TelegramTypingIndicator] = None
        self._sessions: dict[str, SessionController] = {}
        self._captures: dict[str, AudioCapture] = {}

    # ── BotClient interface ───────────────────────────────────────────────────

    def run(self) -> None:
        # Concurrent updates keep /reset and new captures responsive while a
        # transcription is awaiting the service.
        self._app = (
            Application.builder().token(self._token).concurrent_updates(True).build()
        )
        self._indicator = TelegramTypingIndicator(self._app.bot)
        self._app.add_handler(CommandHandler(CMD_START, self._make_command_handler(self._send_help)))
        self._app.add_handler(CommandHandler(CMD_HELP, self._make_command_handler(self._send_help)))
        self._app.add_handler(
            CommandHandler(CMD_TRANSCRIBE, self._make_command_handler(self._transcribe))
        )
        self._app.add_handler(CommandHandler(CMD_RESET, self._make_command_handler(self._reset)))
        self._app.add_handler(CommandHandler(CMD_STATUS, self._make_command_handler(self._status)))
        self._app.add_handler(TGMessageHandler(MEDIA_FILTER, self._make_media_handler()))
        self._app.run_polling()

    async def send_message(self, to: str, text: str) -> bool:
        match self._app:
            case None:
                logger.error("send_message called before run()")
                return False
            case app:
                try:
                    for chunk in split_message(text):
                        await app.bot.send_message(chat_id=int(to), text=chunk)
                    return True
                except Exception as exc:
                    logger.error("Telegram send_message failed: %s", exc)
                    return False

    # ── sessions ──────────────────────────────────────────────────────────────

    def session_for(self, sender: str) -> SessionController:
        match self._sessions.get(sender):
            case None:
                session = self._session_factory()
                session.subscribe(self._make_state_listener(sender))
                self._sessions[sender] = session
                return session
            case session:
                return session

    def capture_for(self, sender: str) -> AudioCapture:
        return self._captures.setdefault(sender, AudioCapture())

    def _make_state_listener(self, sender: str) -> Callable[[SessionState], Awaitable[None]]:
        async def _on_state(state: SessionState) -> None:
            match (state, self._indicator):
                case (Processing(), TelegramTypingIndicator() as indicator):
                    await indicator.start(sender)
                case (_, TelegramTypingIndicator() as indicator):
                    await indicator.stop(sender)
                case _:
                    pass

            match state:
                case Ready(payload=payload):
                    await self._reply(sender, MSG_AUDIO_READY % (payload.mime_type, format_size(payload.size)))
                case Processing():
                    await self._reply(sender, MSG_PROCESSING)
                case Success(response=response):
                    await self._reply(sender, format_transcript(response))
                case Failed(message=message):
                    await self._reply(sender, message)
                case Idle():
                    self.capture_for(sender).clear()
                    await self._reply(sender, MSG_SESSION_CLEARED)
                case _:
                    pass

        return _on_state

    # ── helpers (also used in tests) ─────────────────────────────────────────

    def _is_allowed(self, update: Update) -> bool:
        if update.effective_chat is None:
            return False
        incoming = normalize_chat_id(str(update.effective_chat.id))
        allowed = normalize_chat_id(self._allowed_chat_id)
        return incoming == allowed

    @staticmethod
    def _extract_media(message: Message) -> Optional[tuple[object, Optional[str], Optional[str], bool]]:
        """Return (attachment, mime_type, filename, is_recording) or None."""
        if message.voice is not None:
            return (message.voice, message.voice.mime_type or RECORDING_MIME_TYPE, None, True)
        if message.video_note is not None:
            return (message.video_note, VIDEO_NOTE_MIME_TYPE, None, True)
        if message.audio is not None:
            return (message.audio, message.audio.mime_type, message.audio.file_name, False)
        if message.video is not None:
            return (message.video, message.video.mime_type, message.video.file_name, False)
        if message.document is not None:
            return (message.document, message.document.mime_type, message.document.file_name, False)
        return None

    async def _reply(self, sender: str, text: str) -> None:
        match await self.send_message(sender, text):
            case True:
                pass
            case False:
                logger.error(MSG_SEND_FAIL, sender)

    # ── commands ──────────────────────────────────────────────────────────────

    async def _send_help(self, sender: str) -> None:
        await self._reply(sender, MSG_HELP)

    async def _status(self, sender: str) -> None:
        state = self.session_for(sender).state
        await self._reply(sender, MSG_STATUS % (state.name, self._backend, self._model))

    async def _transcribe(self, sender: str) -> None:
        session = self.session_for(sender)
        match session.state:
            case Processing():
                await self._reply(sender, MSG_BUSY)
            case Ready() | Failed():
                await session.on_transcribe_requested()
            case _:
                await self._reply(sender, MSG_NOTHING_CAPTURED)

    async def _reset(self, sender: str) -> None:
        await self.session_for(sender).on_reset_requested()

    async def _reply_if_busy(self, sender: str, session: SessionController) -> bool:
        match session.state:
            case Processing():
                await self._reply(sender, MSG_BUSY)
                return True
            case _:
                return False

    async def _capture(self, sender: str, message: Message) -> None:
        media = self._extract_media(message)
        match media:
            case None:
                return
            case (attachment, declared_mime, filename, is_recording):
                pass

        session = self.session_for(sender)
        if await self._reply_if_busy(sender, session):
            return

        # Reject before downloading anything we would refuse anyway.
        if not is_accepted_mime_type(resolve_mime_type(declared_mime, filename)):
            await self._reply(sender, MSG_ERR_INVALID_TYPE)
            return
        if (getattr(attachment, "file_size", None) or 0) > TELEGRAM_MAX_DOWNLOAD_BYTES:
            await self._reply(sender, MSG_ERR_TOO_LARGE)
            return

        try:
            tg_file = await attachment.get_file()
            data = bytes(await tg_file.download_as_bytearray())
        except Exception:
            logger.exception("Media download failed")
            await self._reply(sender, MSG_ERR_DOWNLOAD_FAILED)
            return

        # /transcribe may have started while the file was downloading.
        if await self._reply_if_busy(sender, session):
            return

        capture = self.capture_for(sender)
        try:
            payload = (
                capture.accept_recording(data, declared_mime)
                if is_recording
                else capture.accept_file(data, declared_mime, filename)
            )
        except ValidationError as exc:
            await self._reply(sender, str(exc))
            return
        await session.on_capture_complete(payload)

    # ── internal handler factory ──────────────────────────────────────────────

    def _sender_if_allowed(self, update: Update) -> Optional[str]:
        match self._is_allowed(update):
            case False:
                chat_id = update.effective_chat.id if update.effective_chat else "?"
                logger.warning(MSG_BLOCKED_CHAT, chat_id)
                return None
            case True:
                return str(update.effective_chat.id)

    def _make_command_handler(self, callback: Callable[[str], Awaitable[None]]) -> Callable:
        """Handler for commands that only need the sender ID."""
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            match self._sender_if_allowed(update):
                case None:
                    return
                case sender:
                    await callback(sender)

        return _handler

    def _make_media_handler(self) -> Callable:
        async def _handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            match (self._sender_if_allowed(update), update.message):
                case (None, _) | (_, None):
                    return
                case (sender, message):
                    await self._capture(sender, message)

        return _handler
