"""SessionController — the capture → transcribe state machine.

The controller owns a single ``SessionState`` value and changes it only through
its named triggers. Presentation code subscribes to transitions instead of
holding any logic of its own:

    idle ──capture──▶ capturing ──▶ ready ──transcribe──▶ processing ──▶ success
                                      ▲                        │
                                      └──── retry ◀── error ◀──┘

Every transcription attempt is tagged with a generation number. Resets and new
captures advance the generation, so a response that arrives for a superseded
attempt is dropped rather than overwriting the newer state.
"""
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, ClassVar, Union

from echoscript.constants import (
    MSG_ALREADY_PROCESSING,
    MSG_CAPTURE_WHILE_PROCESSING,
    MSG_ERR_NOT_CONFIGURED,
    MSG_ERR_TRANSCRIPTION,
    MSG_ERR_UNEXPECTED,
    MSG_NOTHING_TO_TRANSCRIBE,
    MSG_STALE_RESPONSE,
    MSG_TRANSCRIPTION_DONE,
    MSG_TRANSCRIPTION_FAILED,
    MSG_TRANSITION,
)
from echoscript.errors import ConfigurationError, TransportError
from echoscript.models import AudioPayload, TranscriptionResponse
from echoscript.transcription.client import TranscriptionClient
from echoscript.transcription.parser import parse_response
from echoscript.transcription.request import TranscriptionRequest, build_request

logger = logging.getLogger(__name__)


# ── states ────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Idle:
    name: ClassVar[str] = "idle"


@dataclass(frozen=True)
class Capturing:
    name: ClassVar[str] = "capturing"


@dataclass(frozen=True)
class Ready:
    payload: AudioPayload
    name: ClassVar[str] = "ready"


@dataclass(frozen=True)
class Processing:
    payload: AudioPayload
    name: ClassVar[str] = "processing"


@dataclass(frozen=True)
class Success:
    payload: AudioPayload
    response: TranscriptionResponse
    name: ClassVar[str] = "success"


@dataclass(frozen=True)
class Failed:
    payload: AudioPayload
    message: str
    name: ClassVar[str] = "error"


SessionState = Union[Idle, Capturing, Ready, Processing, Success, Failed]
StateListener = Callable[[SessionState], Awaitable[None]]


# ── controller ────────────────────────────────────────────────────────────────


class SessionController:
    """Sequences request building, the client call and parsing for one session."""

    def __init__(
        self,
        client: TranscriptionClient,
        build: Callable[[AudioPayload], TranscriptionRequest] = build_request,
        parse: Callable[[str], TranscriptionResponse] = parse_response,
    ) -> None:
        self._client = client
        self._build = build
        self._parse = parse
        self._state: SessionState = Idle()
        self._generation = 0
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register an async observer; returns a callable that removes it."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # ── triggers ──────────────────────────────────────────────────────────────

    async def begin_capture(self) -> SessionState:
        match self._state:
            case Processing():
                logger.info(MSG_CAPTURE_WHILE_PROCESSING)
                return self._state
            case Capturing():
                return self._state
            case _:
                self._generation += 1
                await self._transition(Capturing())
                return self._state

    async def on_capture_complete(self, payload: AudioPayload) -> SessionState:
        match self._state:
            case Processing():
                logger.info(MSG_CAPTURE_WHILE_PROCESSING)
                return self._state
            case Capturing():
                pass
            case _:
                await self.begin_capture()
        await self._transition(Ready(payload))
        return self._state

    async def on_transcribe_requested(self) -> SessionState:
        match self._state:
            case Processing():
                logger.info(MSG_ALREADY_PROCESSING)
                return self._state
            case Ready(payload=payload) | Failed(payload=payload):
                pass
            case _:
                logger.info(MSG_NOTHING_TO_TRANSCRIBE)
                return self._state

        self._generation += 1
        attempt = self._generation
        # State flips before the first await so a second request sees Processing.
        await self._transition(Processing(payload))

        result = await self._run(payload)

        match attempt == self._generation:
            case True:
                await self._transition(result)
            case False:
                logger.warning(MSG_STALE_RESPONSE, attempt, self._generation)
        return self._state

    async def on_reset_requested(self) -> SessionState:
        self._generation += 1
        await self._transition(Idle())
        return self._state

    # ── internals ─────────────────────────────────────────────────────────────

    async def _run(self, payload: AudioPayload) -> Union[Success, Failed]:
        start = time.time()
        try:
            request = self._build(payload)
            raw = await self._client.transcribe(request)
            response = self._parse(raw)
        except ConfigurationError as exc:
            logger.error("Transcription not configured: %s", exc)
            return Failed(payload, MSG_ERR_NOT_CONFIGURED)
        except TransportError:
            logger.exception(MSG_TRANSCRIPTION_FAILED, time.time() - start)
            return Failed(payload, MSG_ERR_TRANSCRIPTION)
        except Exception:
            logger.exception("Unexpected transcription error")
            return Failed(payload, MSG_ERR_UNEXPECTED)

        logger.info(MSG_TRANSCRIPTION_DONE, len(response.segments), time.time() - start)
        return Success(payload, response)

    async def _transition(self, new_state: SessionState) -> None:
        old_state, self._state = self._state, new_state
        logger.debug(MSG_TRANSITION, old_state.name, new_state.name)
        for listener in list(self._listeners):
            await listener(new_state)
