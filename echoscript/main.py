"""Entry point — wires Config → TranscriptionClient → TelegramClient."""
import logging

from rich.logging import RichHandler

from echoscript.config import Config
from echoscript.constants import MSG_BOT_STARTING
from echoscript.session import SessionController
from echoscript.telegram.client import TelegramClient
from echoscript.transcription.client import TranscriptionClient
from echoscript.transcription.gemini import GeminiTranscriptionClient
from echoscript.transcription.openai import OpenAITranscriptionClient


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def build_transcriber(config: Config) -> TranscriptionClient:
    match config.transcription_backend:
        case "openai":
            return OpenAITranscriptionClient(config.openai_api_key, config.openai_audio_model)
        case _:
            return GeminiTranscriptionClient(config.gemini_api_key, config.gemini_model)


def main() -> None:
    config = Config.from_env()
    _setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(MSG_BOT_STARTING)
    match config.transcription_api_key:
        case None:
            logger.warning("No API key for %s — transcription attempts will fail", config.transcription_backend)
        case _:
            pass

    transcriber = build_transcriber(config)
    client = TelegramClient(config, session_factory=lambda: SessionController(transcriber))
    client.run()


if __name__ == "__main__":
    main()
