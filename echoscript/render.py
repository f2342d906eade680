"""Plain-text rendering of transcripts for chat transports."""
from echoscript.constants import (
    EMOTION_ICONS,
    MSG_EMPTY_TRANSCRIPT,
    MSG_SUMMARY_HEADER,
    MSG_TRANSLATION_LABEL,
    TELEGRAM_MAX_MESSAGE_LENGTH,
)
from echoscript.models import TranscriptionResponse, TranscriptionSegment


def format_size(num_bytes: int) -> str:
    match num_bytes:
        case n if n < 1024:
            return f"{n} B"
        case n if n < 1024 * 1024:
            return f"{n / 1024:.1f} KB"
        case n:
            return f"{n / (1024 * 1024):.1f} MB"


def format_segment(segment: TranscriptionSegment) -> str:
    header = [f"👤 {segment.speaker}", f"🕒 {segment.timestamp}", f"🗣 {segment.language}"]
    match segment.emotion:
        case None:
            pass
        case emotion:
            header.append(f"{EMOTION_ICONS.get(emotion.value, '')} {emotion.value}".strip())

    lines = [" · ".join(header), segment.content]
    match segment.translation:
        case str() as translation if translation:
            lines.append(f"{MSG_TRANSLATION_LABEL} {translation}")
        case _:
            pass
    return "\n".join(lines)


def format_transcript(response: TranscriptionResponse) -> str:
    blocks = []
    match response.summary.strip():
        case "":
            pass
        case summary:
            blocks.append(f"{MSG_SUMMARY_HEADER}\n{summary}")

    match response.segments:
        case ():
            blocks.append(MSG_EMPTY_TRANSCRIPT)
        case segments:
            blocks.extend(map(format_segment, segments))
    return "\n\n".join(blocks)


def split_message(text: str, limit: int = TELEGRAM_MAX_MESSAGE_LENGTH) -> list[str]:
    """Split text into chunks no longer than limit, preferring line breaks."""
    chunks: list[str] = []
    current = ""
    for line in text.split("\n"):
        # A single over-long line is hard-wrapped.
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]
        candidate = f"{current}\n{line}" if current else line
        match len(candidate) <= limit:
            case True:
                current = candidate
            case False:
                chunks.append(current)
                current = line
    if current:
        chunks.append(current)
    return chunks
