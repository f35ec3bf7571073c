"""Audio endpoint: speech synthesis, transcription and translation."""

from __future__ import annotations

import asyncio
import inspect
import logging
from contextlib import aclosing
from typing import AsyncIterator, Awaitable, Callable, Union, cast

import httpx

from .audio_request import TranscriptionRequest, TranslationRequest
from .errors import RequestFailedError
from .interpreter import interpret, interpret_text, require_structured_format
from .models import AudioResponse, AudioResult, SpeechRequest
from .multipart import MultipartBody, build_transcription_body, build_translation_body
from .validation import check_response

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[memoryview], Union[Awaitable[None], None]]

DEFAULT_CHUNK_SIZE = 8192


class AudioEndpoint:
    """Turns text into audio and audio into text.

    Paths are resolved against the base URL of the ``httpx.AsyncClient``
    passed in, under the ``audio`` root.
    """

    root = "audio"

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        debug: bool = False,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._http = http
        self.chunk_size = chunk_size
        self.debug = debug

    def _url(self, path: str) -> str:
        return f"{self.root}/{path.lstrip('/')}"

    async def stream_speech(self, request: SpeechRequest) -> AsyncIterator[bytes]:
        """Yield synthesized audio chunks as they arrive.

        Chunks are at most ``chunk_size`` bytes. A failure status raises
        ``RequestFailedError`` before the first chunk.
        """
        payload = request.model_dump_json(exclude_none=True)
        try:
            async with self._http.stream(
                "POST", self._url("/speech"), json=request.to_payload()
            ) as response:
                await check_response(
                    response, debug=self.debug, payload=payload, read_body=False
                )
                async for chunk in response.aiter_bytes(self.chunk_size):
                    yield chunk
                await check_response(response, debug=self.debug, payload=payload)
        except httpx.HTTPError as exc:
            raise RequestFailedError(
                f"Speech request failed: {exc}",
                payload=payload if self.debug else None,
            ) from exc

    async def create_speech(
        self,
        request: SpeechRequest,
        chunk_callback: ChunkCallback | None = None,
    ) -> bytes:
        """Synthesize speech and return the complete audio payload.

        Args:
            request: Speech synthesis parameters.
            chunk_callback: Optional sync or async callable that receives a
                read-only view of each newly read chunk, in order. Errors it
                raises are logged and do not stop the transfer.

        Returns:
            All audio bytes received.
        """
        buffer = bytearray()
        async with aclosing(self.stream_speech(request)) as chunks:
            async for chunk in chunks:
                offset = len(buffer)
                buffer.extend(chunk)
                if chunk_callback is not None:
                    await _deliver_chunk(chunk_callback, chunk, offset)
        return bytes(buffer)

    async def create_transcription(self, request: TranscriptionRequest) -> AudioResult:
        """Transcribe audio; the result type follows ``request.response_format``."""
        response_format = request.response_format
        raw_text = await self._post_form(
            "/transcriptions", await _build_body(build_transcription_body, request)
        )
        return interpret(raw_text, response_format)

    async def create_transcription_text(self, request: TranscriptionRequest) -> str:
        response_format = request.response_format
        raw_text = await self._post_form(
            "/transcriptions", await _build_body(build_transcription_body, request)
        )
        return interpret_text(raw_text, response_format)

    async def create_transcription_json(
        self, request: TranscriptionRequest
    ) -> AudioResponse:
        """Transcribe audio into a structured response.

        Raises:
            ResponseFormatError: ``request.response_format`` is not ``json``
                or ``verbose_json``. Nothing is sent and the request keeps
                its audio.
        """
        require_structured_format(request.response_format)
        result = await self.create_transcription(request)
        return cast(AudioResponse, result)

    async def create_translation(self, request: TranslationRequest) -> AudioResult:
        """Translate audio into English; the result type follows the format."""
        response_format = request.response_format
        raw_text = await self._post_form(
            "/translations", await _build_body(build_translation_body, request)
        )
        return interpret(raw_text, response_format)

    async def create_translation_text(self, request: TranslationRequest) -> str:
        response_format = request.response_format
        raw_text = await self._post_form(
            "/translations", await _build_body(build_translation_body, request)
        )
        return interpret_text(raw_text, response_format)

    async def create_translation_json(
        self, request: TranslationRequest
    ) -> AudioResponse:
        require_structured_format(request.response_format)
        result = await self.create_translation(request)
        return cast(AudioResponse, result)

    async def _post_form(self, path: str, body: MultipartBody) -> str:
        payload = body.describe()
        try:
            response = await self._http.post(self._url(path), **body.to_httpx())
        except httpx.HTTPError as exc:
            raise RequestFailedError(
                f"Audio request to {path} failed: {exc}",
                payload=payload if self.debug else None,
            ) from exc
        await check_response(response, debug=self.debug, payload=payload)
        return response.text


async def _deliver_chunk(callback: ChunkCallback, chunk: bytes, offset: int) -> None:
    view = memoryview(chunk)
    try:
        result = callback(view)
        if inspect.isawaitable(result):
            await result
    except Exception:
        logger.exception(
            "Chunk callback failed at offset %d (%d bytes); continuing",
            offset,
            len(view),
        )


async def _build_body(builder: Callable[..., MultipartBody], request) -> MultipartBody:
    # builder closes the audio even if this await is cancelled
    return await asyncio.to_thread(builder, request)
