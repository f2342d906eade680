"""GeminiTranscriptionClient — Google Gemini multimodal backend."""
from typing import Optional

from google import genai
from google.genai import types

from echoscript.constants import DEFAULT_GEMINI_MODEL, RESPONSE_MIME_TYPE
from echoscript.transcription.client import TranscriptionClient
from echoscript.transcription.request import TranscriptionRequest


class GeminiTranscriptionClient(TranscriptionClient):

    backend_name = "Gemini"
    api_key_env = "GEMINI_API_KEY"

    def __init__(self, api_key: Optional[str], model: str = DEFAULT_GEMINI_MODEL) -> None:
        super().__init__(api_key, model)

    async def _generate(self, request: TranscriptionRequest) -> Optional[str]:
        client = genai.Client(api_key=self._api_key)
        response = await client.aio.models.generate_content(
            model=self._model,
            contents=[
                types.Part.from_bytes(data=request.audio, mime_type=request.mime_type),
                types.Part.from_text(text=request.prompt),
            ],
            config=types.GenerateContentConfig(
                response_mime_type=RESPONSE_MIME_TYPE,
                response_schema=request.schema,
            ),
        )
        return response.text
