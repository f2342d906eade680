"""All magic values live here — no inline literals anywhere else."""

# Telegram typing indicator re-send interval (seconds).
# The TYPING action expires after ~5 s, so we refresh every 4 s.
TELEGRAM_TYPING_INTERVAL: float = 4.0

# Bot API limits
TELEGRAM_MAX_MESSAGE_LENGTH = 4096
TELEGRAM_MAX_DOWNLOAD_BYTES = 20 * 1024 * 1024

# Inference backends
BACKEND_GEMINI = "gemini"
BACKEND_OPENAI = "openai"
DEFAULT_BACKEND = BACKEND_GEMINI
DEFAULT_GEMINI_MODEL = "gemini-3-flash-preview"
DEFAULT_OPENAI_AUDIO_MODEL = "gpt-4o-audio-preview"
RESPONSE_MIME_TYPE = "application/json"
RESPONSE_SCHEMA_NAME = "transcription"

# OpenAI input_audio only accepts these container formats
OPENAI_AUDIO_FORMATS = {
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
}

# Capture
ACCEPTED_MIME_PREFIXES = ("audio/", "video/")
RECORDING_MIME_TYPE = "audio/ogg"
VIDEO_NOTE_MIME_TYPE = "video/mp4"

# Parser fence markers, stripped before JSON parsing
FENCE_PATTERN = r"```json\n|\n```"

EMOTION_ICONS = {
    "Happy": "😊",
    "Sad": "😢",
    "Angry": "😠",
    "Neutral": "😐",
}

TRANSCRIPTION_PROMPT = """\
You are an expert audio transcription assistant.
Process the provided audio file and generate a detailed transcription.

Requirements:
1. Identify distinct speakers (e.g., Speaker 1, Speaker 2, or names if context allows).
2. Provide accurate timestamps for each segment (Format: MM:SS).
3. Detect the primary language of each segment.
4. If the segment is in a language different than English, also provide the English translation.
5. Identify the primary emotion of the speaker in this segment. You MUST choose exactly one of the following: Happy, Sad, Angry, Neutral.
6. Provide a brief summary of the entire audio at the beginning.

Output Format: JSON object with the following structure:
{
  "summary": "A brief summary of the conversation...",
  "segments": [
    {
      "speaker": "Speaker 1",
      "timestamp": "00:00 - 00:15",
      "content": "Hello, how are you doing today?",
      "language": "English",
      "language_code": "en",
      "translation": "",
      "emotion": "Happy"
    }
  ]
}
"""

# Log messages
MSG_BOT_STARTING = "Starting EchoScript bot…"
MSG_BLOCKED_CHAT = "Blocked update from chat_id: %s"
MSG_SEND_FAIL = "✗ Send failed to %s"
MSG_TRANSITION = "Session %s → %s"
MSG_STALE_RESPONSE = "Dropping stale transcription result (attempt %d, current %d)"
MSG_ALREADY_PROCESSING = "Transcription already in progress — ignoring request"
MSG_NOTHING_TO_TRANSCRIBE = "No audio captured — ignoring transcription request"
MSG_CAPTURE_WHILE_PROCESSING = "Capture ignored while a transcription is running"
MSG_PARSE_FAILED = "Failed to parse transcription response: %s"
MSG_TRANSCRIPTION_DONE = "✓ Transcribed %d segment(s) (%.1fs)"
MSG_TRANSCRIPTION_FAILED = "✗ Transcription failed (%.1fs)"

# User-facing messages
MSG_ERR_INVALID_TYPE = "Please upload a valid audio file."
MSG_ERR_EMPTY_AUDIO = "The audio you sent is empty."
MSG_ERR_TOO_LARGE = "That file is too large — the limit is 20 MB."
MSG_ERR_DOWNLOAD_FAILED = "Could not download that file — please try again."
MSG_ERR_NOT_CONFIGURED = "Transcription is not available in this setup."
MSG_ERR_TRANSCRIPTION = "An error occurred during transcription. Please try again."
MSG_ERR_UNEXPECTED = "Something went wrong. Please try again."
MSG_ERR_NO_RESPONSE_TEXT = "No response text received from %s."
MSG_ERR_MISSING_KEY = "%s must be set in .env"
MSG_ERR_UNSUPPORTED_FORMAT = "%s does not accept %s audio"

MSG_AUDIO_READY = "Got %s (%s). Send /transcribe to generate the transcript."
MSG_PROCESSING = "Analyzing audio… identifying speakers, languages and emotions."
MSG_SESSION_CLEARED = "Session cleared — send a new voice note or file."
MSG_NOTHING_CAPTURED = "Send a voice note or an audio/video file first."
MSG_BUSY = "Still working on the previous transcription…"
MSG_EMPTY_TRANSCRIPT = "No speech segments were found in this audio."
MSG_SUMMARY_HEADER = "📝 Summary"
MSG_TRANSLATION_LABEL = "🌐 English translation:"

CMD_START = "start"
CMD_HELP = "help"
CMD_TRANSCRIBE = "transcribe"
CMD_RESET = "reset"
CMD_STATUS = "status"

MSG_STATUS = (
    "Status\n"
    "  Session : %s\n"
    "  Backend : %s\n"
    "  Model   : %s\n"
)

MSG_HELP = (
    "EchoScript — speaker-labelled transcripts of your audio\n"
    "\n"
    "Send:\n"
    "  Voice note                — record live\n"
    "  Audio / video file        — upload a clip\n"
    "\n"
    "Commands:\n"
    "  /transcribe               — generate the transcript\n"
    "  /reset                    — discard audio and results\n"
    "  /status                   — current session at a glance\n"
    "  /help                     — show this message\n"
    "\n"
    "Each transcript has speakers, MM:SS timestamps, the detected\n"
    "language, an English translation and the speaker's emotion.\n"
)
