import base64

import pytest

from echoscript.capture import AudioCapture, is_accepted_mime_type, resolve_mime_type
from echoscript.constants import MSG_ERR_EMPTY_AUDIO, MSG_ERR_INVALID_TYPE
from echoscript.errors import ValidationError


@pytest.mark.parametrize("data", [b"\x00", b"RIFF....WAVEfmt ", bytes(range(256)) * 3])
def test_accepted_file_base64_round_trips(data):
    payload = AudioCapture().accept_file(data, "audio/wav")

    assert base64.b64decode(payload.base64) == data
    assert payload.raw_bytes == data
    assert not payload.base64.startswith("data:")


@pytest.mark.parametrize("mime", ["audio/mpeg", "audio/webm", "video/mp4", "video/quicktime"])
def test_audio_and_video_types_are_accepted(mime):
    payload = AudioCapture().accept_file(b"clip", mime)

    assert payload.mime_type == mime


@pytest.mark.parametrize("mime", ["image/png", "text/plain", "application/pdf", ""])
def test_non_media_types_are_rejected(mime):
    capture = AudioCapture()

    with pytest.raises(ValidationError, match=MSG_ERR_INVALID_TYPE):
        capture.accept_file(b"data", mime)

    assert capture.current is None


def test_rejection_keeps_previous_payload():
    capture = AudioCapture()
    first = capture.accept_file(b"first", "audio/ogg")

    with pytest.raises(ValidationError):
        capture.accept_file(b"doc", "application/pdf")

    assert capture.current is first


def test_empty_content_is_rejected():
    with pytest.raises(ValidationError, match=MSG_ERR_EMPTY_AUDIO):
        AudioCapture().accept_file(b"", "audio/wav")


def test_new_capture_replaces_previous():
    capture = AudioCapture()
    capture.accept_file(b"first", "audio/ogg")

    second = capture.accept_recording(b"second", "audio/webm")

    assert capture.current is second
    assert base64.b64decode(capture.current.base64) == b"second"


def test_clear_drops_payload():
    capture = AudioCapture()
    capture.accept_recording(b"voice")

    capture.clear()

    assert capture.current is None


def test_recording_defaults_to_ogg_when_mime_missing():
    payload = AudioCapture().accept_recording(b"voice", None)

    assert payload.mime_type == "audio/ogg"


def test_mime_type_parameters_are_dropped():
    payload = AudioCapture().accept_recording(b"voice", "audio/webm;codecs=opus")

    assert payload.mime_type == "audio/webm"


def test_resolve_mime_type_guesses_from_filename():
    assert resolve_mime_type(None, "meeting.mp3") == "audio/mpeg"
    assert resolve_mime_type("application/octet-stream", "clip.mp4") == "video/mp4"


def test_resolve_mime_type_prefers_declared_type():
    assert resolve_mime_type("Audio/OGG", "notes.txt") == "audio/ogg"


def test_is_accepted_mime_type():
    assert is_accepted_mime_type("audio/wav")
    assert is_accepted_mime_type("video/webm")
    assert not is_accepted_mime_type("image/jpeg")
