"""Multipart form bodies for transcription and translation requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .audio_request import TranscriptionRequest, TranslationRequest, _AudioRequest
from .models import TimestampGranularity

_FILE_CONTENT_TYPE = "application/octet-stream"


def format_decimal(value: float) -> str:
    """Render a number as locale-independent decimal text (``0.5``, ``1``)."""
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text


@dataclass
class MultipartBody:
    """Ordered multipart form: one file part plus text fields."""

    file_name: str
    file_content: bytes
    fields: list[tuple[str, str]] = field(default_factory=list)
    file_field: str = "file"

    def add(self, name: str, value: str) -> None:
        self.fields.append((name, value))

    def get(self, name: str) -> str | None:
        for field_name, value in self.fields:
            if field_name == name:
                return value
        return None

    def get_all(self, name: str) -> list[str]:
        return [value for field_name, value in self.fields if field_name == name]

    def names(self) -> list[str]:
        return [self.file_field] + [name for name, _ in self.fields]

    def describe(self) -> str:
        """Printable summary for diagnostics; file bytes are not included."""
        parts = [f"{self.file_field}={self.file_name} ({len(self.file_content)} bytes)"]
        parts.extend(f"{name}={value}" for name, value in self.fields)
        return ", ".join(parts)

    def to_httpx(self) -> dict[str, Any]:
        """Keyword arguments for ``httpx.AsyncClient.post``.

        Repeated names become lists, which httpx encodes as one part per item.
        """
        data: dict[str, list[str]] = {}
        for name, value in self.fields:
            data.setdefault(name, []).append(value)
        files = {
            self.file_field: (self.file_name, self.file_content, _FILE_CONTENT_TYPE)
        }
        return {"data": data, "files": files}


def _start_body(request: _AudioRequest) -> MultipartBody:
    audio = request.take_audio()
    content = audio.read()
    body = MultipartBody(file_name=request.audio_name, file_content=content)
    body.add("model", request.model)
    return body


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


def _add_common_tail(body: MultipartBody, request: _AudioRequest) -> None:
    body.add("response_format", request.response_format.value.lower())
    if request.temperature is not None:
        body.add("temperature", format_decimal(request.temperature))


def build_transcription_body(request: TranscriptionRequest) -> MultipartBody:
    """Build the transcription form and release the request's audio."""
    try:
        body = _start_body(request)

        if request.chunking_strategy is not None:
            body.add("chunking_strategy", request.chunking_strategy.to_form_value())

        for item in request.include:
            body.add("include[]", item)

        if _has_text(request.language):
            body.add("language", request.language)

        if _has_text(request.prompt):
            body.add("prompt", request.prompt)

        _add_common_tail(body, request)

        if request.timestamp_granularities in (
            TimestampGranularity.SEGMENT,
            TimestampGranularity.WORD,
        ):
            body.add(
                "timestamp_granularities[]",
                request.timestamp_granularities.value.lower(),
            )
    finally:
        request.close()

    return body


def build_translation_body(request: TranslationRequest) -> MultipartBody:
    """Build the translation form and release the request's audio."""
    try:
        body = _start_body(request)

        if _has_text(request.prompt):
            body.add("prompt", request.prompt)

        _add_common_tail(body, request)
    finally:
        request.close()

    return body
