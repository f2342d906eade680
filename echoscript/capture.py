"""AudioCapture — turns uploads and live recordings into AudioPayloads."""
import logging
import mimetypes
from typing import Optional

from echoscript.constants import (
    ACCEPTED_MIME_PREFIXES,
    MSG_ERR_EMPTY_AUDIO,
    MSG_ERR_INVALID_TYPE,
    RECORDING_MIME_TYPE,
)
from echoscript.errors import ValidationError
from echoscript.models import AudioPayload

logger = logging.getLogger(__name__)


def resolve_mime_type(mime_type: Optional[str], filename: Optional[str] = None) -> str:
    """Return the declared MIME type, falling back to a guess from the filename."""
    declared = (mime_type or "").split(";", 1)[0].strip().lower()
    match (declared, filename):
        case ("" | "application/octet-stream", str() as name) if name:
            guessed, _ = mimetypes.guess_type(name)
            return (guessed or declared).lower()
        case _:
            return declared


def is_accepted_mime_type(mime_type: str) -> bool:
    return mime_type.startswith(ACCEPTED_MIME_PREFIXES)


class AudioCapture:
    """Holds the most recent capture. A new capture replaces the previous one."""

    def __init__(self) -> None:
        self._current: Optional[AudioPayload] = None

    @property
    def current(self) -> Optional[AudioPayload]:
        return self._current

    def accept_file(
        self, data: bytes, mime_type: Optional[str], filename: Optional[str] = None
    ) -> AudioPayload:
        """Validate an uploaded file. Raises ValidationError on rejection."""
        return self._accept(data, resolve_mime_type(mime_type, filename))

    def accept_recording(
        self, data: bytes, mime_type: Optional[str] = RECORDING_MIME_TYPE
    ) -> AudioPayload:
        """Validate a finished microphone recording."""
        return self._accept(data, resolve_mime_type(mime_type) or RECORDING_MIME_TYPE)

    def clear(self) -> None:
        self._current = None

    def _accept(self, data: bytes, mime_type: str) -> AudioPayload:
        if not is_accepted_mime_type(mime_type):
            logger.info("Rejected capture with MIME type %r", mime_type)
            raise ValidationError(MSG_ERR_INVALID_TYPE)
        if not data:
            raise ValidationError(MSG_ERR_EMPTY_AUDIO)

        payload = AudioPayload.from_bytes(bytes(data), mime_type)
        self._current = payload
        logger.debug("Captured %d bytes of %s", payload.size, mime_type)
        return payload
