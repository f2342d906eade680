"""TranscriptionClient — abstract base for multimodal transcription backends."""
import logging
from abc import ABC, abstractmethod
from typing import Optional

from echoscript.constants import MSG_ERR_MISSING_KEY, MSG_ERR_NO_RESPONSE_TEXT
from echoscript.errors import ConfigurationError, EchoScriptError, TransportError
from echoscript.transcription.request import TranscriptionRequest

logger = logging.getLogger(__name__)


class TranscriptionClient(ABC):
    """One request in, raw response text out. Holds no state between calls."""

    backend_name: str = "transcription service"
    api_key_env: str = "API_KEY"

    def __init__(self, api_key: Optional[str], model: str) -> None:
        self._api_key = api_key
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def transcribe(self, request: TranscriptionRequest) -> str:
        """Send the request and return the raw text payload.

        Raises ConfigurationError when no credential is configured (before any
        network attempt) and TransportError when the service fails or answers
        with an empty body.
        """
        match self._api_key:
            case None | "":
                raise ConfigurationError(MSG_ERR_MISSING_KEY % self.api_key_env)
            case _:
                pass

        logger.info("Sending %s audio to %s (%s)", request.mime_type, self.backend_name, self._model)
        try:
            text = await self._generate(request)
        except EchoScriptError:
            raise
        except Exception as exc:
            raise TransportError(f"{self.backend_name} request failed: {exc}") from exc

        match (text or "").strip():
            case "":
                raise TransportError(MSG_ERR_NO_RESPONSE_TEXT % self.backend_name)
            case stripped:
                return stripped

    @abstractmethod
    async def _generate(self, request: TranscriptionRequest) -> Optional[str]:
        """Perform the service call and return its text, if any."""
        ...
