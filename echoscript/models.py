"""Domain types shared by capture, transcription and the session controller."""
import base64
import binascii
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from echoscript.constants import ACCEPTED_MIME_PREFIXES


class Emotion(str, Enum):
    HAPPY = "Happy"
    SAD = "Sad"
    ANGRY = "Angry"
    NEUTRAL = "Neutral"


@dataclass(frozen=True)
class AudioPayload:
    raw_bytes: bytes = field(repr=False)
    base64: str = field(repr=False)
    mime_type: str

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str) -> "AudioPayload":
        return cls(
            raw_bytes=data,
            base64=base64.standard_b64encode(data).decode("ascii"),
            mime_type=mime_type,
        )

    @property
    def size(self) -> int:
        return len(self.raw_bytes)

    def check(self) -> None:
        """Raise ValueError when the payload breaks its own invariants."""
        if not self.mime_type.startswith(ACCEPTED_MIME_PREFIXES):
            raise ValueError(f"Unsupported payload MIME type: {self.mime_type!r}")
        try:
            decoded = base64.b64decode(self.base64, validate=True)
        except binascii.Error as exc:
            raise ValueError("Payload base64 is not valid") from exc
        if decoded != self.raw_bytes:
            raise ValueError("Payload base64 does not match its raw bytes")


def _is_english(language: str, language_code: str) -> bool:
    return (
        language.strip().lower() == "english"
        or language_code.strip().lower().split("-")[0] == "en"
    )


@dataclass(frozen=True)
class TranscriptionSegment:
    speaker: str
    timestamp: str
    content: str
    language: str
    language_code: str
    translation: Optional[str] = None
    emotion: Optional[Emotion] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TranscriptionSegment":
        """Build a segment from the wire shape. Raises KeyError/ValueError/TypeError."""
        language = str(data["language"])
        language_code = str(data["language_code"])
        raw_translation = data.get("translation")
        translation = raw_translation.strip() or None if isinstance(raw_translation, str) else None
        match translation:
            case str() if _is_english(language, language_code):
                translation = None
            case _:
                pass
        raw_emotion = data.get("emotion") or None
        return cls(
            speaker=str(data["speaker"]),
            timestamp=str(data["timestamp"]),
            content=str(data["content"]),
            language=language,
            language_code=language_code,
            translation=translation,
            emotion=Emotion(raw_emotion) if raw_emotion is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "speaker": self.speaker,
            "timestamp": self.timestamp,
            "content": self.content,
            "language": self.language,
            "language_code": self.language_code,
        }
        if self.translation is not None:
            out["translation"] = self.translation
        if self.emotion is not None:
            out["emotion"] = self.emotion.value
        return out


@dataclass(frozen=True)
class TranscriptionResponse:
    summary: str
    segments: tuple[TranscriptionSegment, ...] = ()

    @classmethod
    def empty(cls) -> "TranscriptionResponse":
        return cls(summary="", segments=())

    @property
    def is_empty(self) -> bool:
        return not self.segments

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TranscriptionResponse":
        """Build a response from the wire shape. Raises KeyError/ValueError/TypeError."""
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
        raw_segments = data.get("segments") or []
        if not isinstance(raw_segments, list):
            raise TypeError("'segments' must be a list")
        return cls(
            summary=str(data.get("summary") or ""),
            segments=tuple(map(TranscriptionSegment.from_dict, raw_segments)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "segments": [s.to_dict() for s in self.segments],
        }
