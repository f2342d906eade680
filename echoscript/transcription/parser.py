"""ResponseParser — raw service text → TranscriptionResponse, never raising."""
import json
import logging
import re

from echoscript.constants import FENCE_PATTERN, MSG_PARSE_FAILED
from echoscript.errors import MalformedResponseError
from echoscript.models import TranscriptionResponse

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(FENCE_PATTERN)


def strip_fences(text: str) -> str:
    """Remove ```json / ``` wrapper lines the service sometimes adds."""
    return _FENCE_RE.sub("", text).strip()


def load_response(text: str) -> TranscriptionResponse:
    """Strict variant: raises MalformedResponseError on anything unparseable."""
    try:
        data = json.loads(strip_fences(text))
        return TranscriptionResponse.from_dict(data)
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError, RecursionError) as exc:
        raise MalformedResponseError(str(exc)) from exc


def parse_response(text: str) -> TranscriptionResponse:
    try:
        return load_response(text)
    except MalformedResponseError as exc:
        logger.warning(MSG_PARSE_FAILED, exc)
        return TranscriptionResponse.empty()
