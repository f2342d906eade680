"""TranscriptionRequest — prompt + output schema for one audio payload."""
import copy
from dataclasses import dataclass, field
from typing import Any

from echoscript.constants import TRANSCRIPTION_PROMPT
from echoscript.models import AudioPayload, Emotion

REQUIRED_SEGMENT_FIELDS = (
    "speaker",
    "timestamp",
    "content",
    "language",
    "language_code",
    "emotion",
)

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "summary": {
            "type": "string",
            "description": "A concise summary of the audio content.",
        },
        "segments": {
            "type": "array",
            "description": "List of transcribed segments with speaker and timestamp.",
            "items": {
                "type": "object",
                "properties": {
                    "speaker": {"type": "string"},
                    "timestamp": {"type": "string"},
                    "content": {"type": "string"},
                    "language": {"type": "string"},
                    "language_code": {"type": "string"},
                    "translation": {"type": "string"},
                    "emotion": {
                        "type": "string",
                        "description": "The emotion of the speaker.",
                        "enum": [e.value for e in Emotion],
                    },
                },
                "required": list(REQUIRED_SEGMENT_FIELDS),
            },
        },
    },
    "required": ["summary", "segments"],
}


@dataclass(frozen=True)
class TranscriptionRequest:
    audio: bytes = field(repr=False)
    audio_base64: str = field(repr=False)
    mime_type: str
    prompt: str
    schema: dict[str, Any] = field(repr=False)


def build_request(payload: AudioPayload) -> TranscriptionRequest:
    payload.check()
    return TranscriptionRequest(
        audio=payload.raw_bytes,
        audio_base64=payload.base64,
        mime_type=payload.mime_type,
        prompt=TRANSCRIPTION_PROMPT,
        # SDKs annotate the schema in place; each request gets its own copy.
        schema=copy.deepcopy(RESPONSE_SCHEMA),
    )
