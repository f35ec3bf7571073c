"""Transcription and translation requests that own an audio stream."""

from __future__ import annotations

import io
from pathlib import Path
from typing import BinaryIO

from .errors import RequestConsumedError
from .models import AudioResponseFormat, ChunkingStrategy, TimestampGranularity


class _AudioRequest:
    """Common state for requests that upload an audio file.

    The request owns ``audio`` until a multipart body is built from it. The
    build closes the stream whether or not it succeeds; the request cannot be
    built twice.
    """

    def __init__(
        self,
        audio: BinaryIO | bytes,
        audio_name: str,
        model: str,
        response_format: AudioResponseFormat | str = AudioResponseFormat.JSON,
        prompt: str | None = None,
        temperature: float | None = None,
    ) -> None:
        if not model:
            raise ValueError("model is required")
        if not audio_name:
            raise ValueError("audio_name is required")
        if temperature is not None and not 0.0 <= temperature <= 1.0:
            raise ValueError(f"temperature must be between 0 and 1, got {temperature}")
        if isinstance(audio, (bytes, bytearray, memoryview)):
            audio = io.BytesIO(bytes(audio))
        self.audio: BinaryIO = audio
        self.audio_name = audio_name
        self.model = model
        self.response_format = AudioResponseFormat(response_format)
        self.prompt = prompt
        self.temperature = temperature
        self._closed = False

    @classmethod
    def from_path(cls, path: str | Path, **kwargs):
        """Open ``path`` and hand the file handle to a new request."""
        path = Path(path)
        kwargs.setdefault("audio_name", path.name)
        handle = path.open("rb")
        try:
            return cls(handle, **kwargs)
        except Exception:
            handle.close()
            raise

    @property
    def closed(self) -> bool:
        return self._closed

    def take_audio(self) -> BinaryIO:
        """Return the owned stream for a single build, or raise if already used."""
        if self._closed:
            raise RequestConsumedError(
                f"Request for '{self.audio_name}' was already consumed"
            )
        return self.audio

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.audio.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class TranscriptionRequest(_AudioRequest):
    """Audio to transcribe in its spoken language."""

    def __init__(
        self,
        audio: BinaryIO | bytes,
        audio_name: str,
        model: str = "whisper-1",
        response_format: AudioResponseFormat | str = AudioResponseFormat.JSON,
        prompt: str | None = None,
        temperature: float | None = None,
        language: str | None = None,
        timestamp_granularities: TimestampGranularity | str = TimestampGranularity.NONE,
        chunking_strategy: ChunkingStrategy | None = None,
        include: list[str] | None = None,
    ) -> None:
        super().__init__(
            audio,
            audio_name,
            model,
            response_format=response_format,
            prompt=prompt,
            temperature=temperature,
        )
        self.language = language
        self.timestamp_granularities = TimestampGranularity(timestamp_granularities)
        self.chunking_strategy = chunking_strategy
        self.include = list(include) if include else []


class TranslationRequest(_AudioRequest):
    """Audio to translate into English."""

    def __init__(
        self,
        audio: BinaryIO | bytes,
        audio_name: str,
        model: str = "whisper-1",
        response_format: AudioResponseFormat | str = AudioResponseFormat.JSON,
        prompt: str | None = None,
        temperature: float | None = None,
    ) -> None:
        super().__init__(
            audio,
            audio_name,
            model,
            response_format=response_format,
            prompt=prompt,
            temperature=temperature,
        )
