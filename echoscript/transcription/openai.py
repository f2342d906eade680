"""OpenAITranscriptionClient — OpenAI audio-input chat backend."""
from typing import Optional

from openai import AsyncOpenAI

from echoscript.constants import (
    DEFAULT_OPENAI_AUDIO_MODEL,
    MSG_ERR_UNSUPPORTED_FORMAT,
    OPENAI_AUDIO_FORMATS,
    RESPONSE_SCHEMA_NAME,
)
from echoscript.errors import TransportError
from echoscript.transcription.client import TranscriptionClient
from echoscript.transcription.request import TranscriptionRequest


class OpenAITranscriptionClient(TranscriptionClient):

    backend_name = "OpenAI"
    api_key_env = "OPENAI_API_KEY"

    def __init__(self, api_key: Optional[str], model: str = DEFAULT_OPENAI_AUDIO_MODEL) -> None:
        super().__init__(api_key, model)

    async def _generate(self, request: TranscriptionRequest) -> Optional[str]:
        audio_format = OPENAI_AUDIO_FORMATS.get(request.mime_type)
        if audio_format is None:
            raise TransportError(MSG_ERR_UNSUPPORTED_FORMAT % (self.backend_name, request.mime_type))

        client = AsyncOpenAI(api_key=self._api_key)
        response = await client.chat.completions.create(
            model=self._model,
            modalities=["text"],
            messages=[
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "input_audio",
                            "input_audio": {
                                "data": request.audio_base64,
                                "format": audio_format,
                            },
                        },
                        {"type": "text", "text": request.prompt},
                    ],
                }
            ],
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": RESPONSE_SCHEMA_NAME,
                    "schema": request.schema,
                },
            },
        )
        return response.choices[0].message.content
