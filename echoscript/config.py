from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from echoscript.constants import (
    BACKEND_GEMINI,
    BACKEND_OPENAI,
    DEFAULT_BACKEND,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_OPENAI_AUDIO_MODEL,
)


@dataclass(frozen=True)
class Config:
    telegram_bot_token: str
    allowed_chat_id: str
    log_level: str
    transcription_backend: str
    gemini_api_key: Optional[str]
    gemini_model: str
    openai_api_key: Optional[str]
    openai_audio_model: str

    @property
    def transcription_api_key(self) -> Optional[str]:
        match self.transcription_backend:
            case "openai":
                return self.openai_api_key
            case _:
                return self.gemini_api_key

    @property
    def transcription_model(self) -> str:
        match self.transcription_backend:
            case "openai":
                return self.openai_audio_model
            case _:
                return self.gemini_model

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        token = os.getenv("TELEGRAM_BOT_TOKEN")
        chat_id = os.getenv("ALLOWED_CHAT_ID")
        log_level = os.getenv("LOG_LEVEL", "INFO")
        backend = os.getenv("TRANSCRIPTION_BACKEND", DEFAULT_BACKEND).strip().lower()
        gemini_api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None
        gemini_model = os.getenv("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL
        openai_api_key = os.getenv("OPENAI_API_KEY") or None
        openai_audio_model = os.getenv("OPENAI_AUDIO_MODEL") or DEFAULT_OPENAI_AUDIO_MODEL

        return cls._validate(
            telegram_bot_token=token,
            allowed_chat_id=chat_id,
            log_level=log_level,
            transcription_backend=backend,
            gemini_api_key=gemini_api_key,
            gemini_model=gemini_model,
            openai_api_key=openai_api_key,
            openai_audio_model=openai_audio_model,
        )

    @staticmethod
    def _validate(
        telegram_bot_token: Optional[str],
        allowed_chat_id: Optional[str],
        log_level: str,
        transcription_backend: str,
        gemini_api_key: Optional[str],
        gemini_model: str,
        openai_api_key: Optional[str],
        openai_audio_model: str,
    ) -> "Config":
        match telegram_bot_token:
            case None | "":
                raise ValueError("TELEGRAM_BOT_TOKEN must be set in .env")
            case _:
                pass

        match allowed_chat_id:
            case None | "":
                raise ValueError("ALLOWED_CHAT_ID must be set in .env")
            case _:
                pass

        match transcription_backend:
            case "gemini" | "openai":
                pass
            case other:
                raise ValueError(
                    f"TRANSCRIPTION_BACKEND must be {BACKEND_GEMINI!r} or "
                    f"{BACKEND_OPENAI!r}, got {other!r}"
                )

        # Transcription keys stay optional: a missing key fails each attempt
        # with ConfigurationError instead of blocking startup.
        return Config(
            telegram_bot_token=telegram_bot_token,
            allowed_chat_id=allowed_chat_id,
            log_level=log_level,
            transcription_backend=transcription_backend,
            gemini_api_key=gemini_api_key,
            gemini_model=gemini_model,
            openai_api_key=openai_api_key,
            openai_audio_model=openai_audio_model,
        )
