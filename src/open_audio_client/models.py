"""Pydantic models for the OpenAI-compatible audio API."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class AudioResponseFormat(str, Enum):
    """Output format for transcription and translation responses."""

    TEXT = "text"
    JSON = "json"
    VERBOSE_JSON = "verbose_json"
    SRT = "srt"
    VTT = "vtt"


class TimestampGranularity(str, Enum):
    """Time-alignment detail requested from a transcription."""

    NONE = "none"
    SEGMENT = "segment"
    WORD = "word"


class SpeechResponseFormat(str, Enum):
    """Audio container produced by speech synthesis."""

    MP3 = "mp3"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"
    WAV = "wav"
    PCM = "pcm"


class SpeechRequest(BaseModel):
    """Body of a speech synthesis request."""

    model: str
    input: str
    voice: str = "alloy"
    response_format: SpeechResponseFormat = SpeechResponseFormat.MP3
    speed: float = Field(default=1.0, ge=0.25, le=4.0)
    instructions: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ChunkingStrategy(BaseModel):
    """How the service splits long audio before processing it.

    ``type="auto"`` lets the service pick; ``server_vad`` carries the
    detection parameters used to find chunk boundaries.
    """

    type: Literal["auto", "server_vad"] = "server_vad"
    prefix_padding_ms: int | None = Field(default=None, ge=0)
    silence_duration_ms: int | None = Field(default=None, ge=0)
    threshold: float | None = Field(default=None, ge=0.0, le=1.0)

    @classmethod
    def auto(cls) -> "ChunkingStrategy":
        return cls(type="auto")

    def to_form_value(self) -> str:
        """Wire text for the ``chunking_strategy`` multipart field."""
        if self.type == "auto":
            return "auto"
        return self.model_dump_json(exclude_none=True)


class WordResponse(BaseModel):
    """Word-level timestamp."""

    word: str
    start: float
    end: float


class SegmentResponse(BaseModel):
    """Segment (sentence/phrase) with timing and decoder statistics."""

    model_config = ConfigDict(extra="ignore")

    id: int
    seek: int = 0
    start: float
    end: float
    text: str
    tokens: list[int] = []
    temperature: float = 0.0
    avg_logprob: float = 0.0
    compression_ratio: float = 1.0
    no_speech_prob: float = 0.0


class TokenLogProb(BaseModel):
    """Log probability of a transcript token (``include[]=logprobs``)."""

    model_config = ConfigDict(extra="ignore")

    token: str
    logprob: float
    bytes: list[int] | None = None


class AudioResponse(BaseModel):
    """Structured response for ``json`` and ``verbose_json`` formats."""

    model_config = ConfigDict(extra="ignore")

    text: str
    task: str | None = None
    language: str | None = None
    duration: float | None = None
    words: list[WordResponse] | None = None
    segments: list[SegmentResponse] | None = None
    logprobs: list[TokenLogProb] | None = None
    usage: dict[str, Any] | None = None


AudioResult = str | AudioResponse
