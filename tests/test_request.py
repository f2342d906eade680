import copy

import pytest

from echoscript.models import AudioPayload
from echoscript.transcription.request import RESPONSE_SCHEMA, build_request


def segment_schema(request) -> dict:
    return request.schema["properties"]["segments"]["items"]


def test_request_carries_audio_and_mime_type():
    payload = AudioPayload.from_bytes(b"audio-bytes", "audio/wav")

    request = build_request(payload)

    assert request.audio == b"audio-bytes"
    assert request.audio_base64 == payload.base64
    assert request.mime_type == "audio/wav"


def test_schema_marks_segment_fields_mandatory():
    request = build_request(AudioPayload.from_bytes(b"x", "audio/ogg"))

    required = set(segment_schema(request)["required"])

    assert required == {"speaker", "timestamp", "content", "language", "language_code", "emotion"}
    assert "translation" not in required


def test_schema_constrains_emotion_to_closed_set():
    request = build_request(AudioPayload.from_bytes(b"x", "video/mp4"))

    emotion = segment_schema(request)["properties"]["emotion"]

    assert emotion["enum"] == ["Happy", "Sad", "Angry", "Neutral"]


def test_schema_requires_summary_and_segments():
    assert RESPONSE_SCHEMA["required"] == ["summary", "segments"]


@pytest.mark.parametrize(
    "requirement",
    ["speakers", "MM:SS", "language", "English translation", "Happy, Sad, Angry, Neutral", "summary"],
)
def test_prompt_lists_every_transformation(requirement):
    request = build_request(AudioPayload.from_bytes(b"x", "audio/wav"))

    assert requirement in request.prompt


def test_payload_with_wrong_mime_type_is_a_programming_error():
    payload = AudioPayload.from_bytes(b"x", "image/png")

    with pytest.raises(ValueError):
        build_request(payload)


def test_payload_with_mismatched_base64_is_a_programming_error():
    payload = AudioPayload(raw_bytes=b"one", base64="dHdv", mime_type="audio/wav")

    with pytest.raises(ValueError):
        build_request(payload)


def test_each_request_gets_its_own_schema_copy():
    snapshot = copy.deepcopy(RESPONSE_SCHEMA)
    first = build_request(AudioPayload.from_bytes(b"x", "audio/ogg"))

    first.schema["property_ordering"] = ["summary", "segments"]
    segment_schema(first)["property_ordering"] = ["speaker"]
    second = build_request(AudioPayload.from_bytes(b"y", "audio/ogg"))

    assert first.schema is not RESPONSE_SCHEMA
    assert RESPONSE_SCHEMA == snapshot
    assert second.schema == snapshot
