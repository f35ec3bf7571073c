"""Async client for OpenAI-compatible speech, transcription and translation APIs."""

from .audio_request import TranscriptionRequest, TranslationRequest
from .client import AudioClient
from .config import ClientConfig
from .endpoint import AudioEndpoint
from .errors import (
    AudioClientError,
    RequestConsumedError,
    RequestFailedError,
    ResponseDecodeError,
    ResponseFormatError,
)
from .models import (
    AudioResponse,
    AudioResponseFormat,
    ChunkingStrategy,
    SpeechRequest,
    SpeechResponseFormat,
    TimestampGranularity,
)
from .vad import VoiceActivityDetectionSettings

__version__ = "0.1.0"

__all__ = [
    "AudioClient",
    "AudioClientError",
    "AudioEndpoint",
    "AudioResponse",
    "AudioResponseFormat",
    "ChunkingStrategy",
    "ClientConfig",
    "RequestConsumedError",
    "RequestFailedError",
    "ResponseDecodeError",
    "ResponseFormatError",
    "SpeechRequest",
    "SpeechResponseFormat",
    "TimestampGranularity",
    "TranscriptionRequest",
    "TranslationRequest",
    "VoiceActivityDetectionSettings",
    "__version__",
]
