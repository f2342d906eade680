"""Config tests — environment parsing and validation."""
import pytest
from echoscript.config import Config

OPTIONAL_VARS = (
    "LOG_LEVEL",
    "TRANSCRIPTION_BACKEND",
    "GEMINI_API_KEY",
    "API_KEY",
    "GEMINI_MODEL",
    "OPENAI_API_KEY",
    "OPENAI_AUDIO_MODEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr("echoscript.config.load_dotenv", lambda **_: None)
    for name in OPTIONAL_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "bot123:ABC")
    monkeypatch.setenv("ALLOWED_CHAT_ID", "987654321")


def make_config(**overrides) -> Config:
    values = dict(
        telegram_bot_token="token",
        allowed_chat_id="123456789",
        log_level="INFO",
        transcription_backend="gemini",
        gemini_api_key=None,
        gemini_model="gemini-3-flash-preview",
        openai_api_key=None,
        openai_audio_model="gpt-4o-audio-preview",
    )
    values.update(overrides)
    return Config(**values)


def test_config_from_env_success():
    config = Config.from_env()

    assert config.telegram_bot_token == "bot123:ABC"
    assert config.allowed_chat_id == "987654321"


def test_config_missing_token_fails(monkeypatch):
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)

    with pytest.raises(ValueError, match="TELEGRAM_BOT_TOKEN"):
        Config.from_env()


def test_config_missing_chat_id_fails(monkeypatch):
    monkeypatch.delenv("ALLOWED_CHAT_ID", raising=False)

    with pytest.raises(ValueError, match="ALLOWED_CHAT_ID"):
        Config.from_env()


def test_config_unknown_backend_fails(monkeypatch):
    monkeypatch.setenv("TRANSCRIPTION_BACKEND", "whisper")

    with pytest.raises(ValueError, match="TRANSCRIPTION_BACKEND"):
        Config.from_env()


def test_config_defaults():
    config = Config.from_env()

    assert config.log_level == "INFO"
    assert config.transcription_backend == "gemini"
    assert config.gemini_model == "gemini-3-flash-preview"
    assert config.openai_audio_model == "gpt-4o-audio-preview"


def test_missing_transcription_key_does_not_block_startup():
    """A missing key is reported per attempt, not at startup."""
    config = Config.from_env()

    assert config.gemini_api_key is None
    assert config.transcription_api_key is None


def test_gemini_key_read_from_env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")

    assert Config.from_env().transcription_api_key == "g-key"


def test_gemini_key_falls_back_to_api_key(monkeypatch):
    monkeypatch.setenv("API_KEY", "legacy-key")

    assert Config.from_env().gemini_api_key == "legacy-key"


def test_openai_backend_selects_openai_key_and_model(monkeypatch):
    monkeypatch.setenv("TRANSCRIPTION_BACKEND", "OpenAI")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test123")
    monkeypatch.setenv("OPENAI_AUDIO_MODEL", "gpt-audio")

    config = Config.from_env()

    assert config.transcription_backend == "openai"
    assert config.transcription_api_key == "sk-test123"
    assert config.transcription_model == "gpt-audio"


def test_blank_key_becomes_none(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "")

    assert Config.from_env().gemini_api_key is None


def test_config_immutable():
    config = make_config()

    with pytest.raises(Exception):
        config.gemini_api_key = "other"
