"""Decode transcription and translation responses by response format."""

from __future__ import annotations

from typing import Callable

from pydantic import ValidationError

from .errors import ResponseDecodeError, ResponseFormatError
from .models import AudioResponse, AudioResponseFormat, AudioResult


def _decode_envelope(raw_text: str) -> AudioResponse:
    try:
        return AudioResponse.model_validate_json(raw_text)
    except ValidationError as exc:
        raise ResponseDecodeError(
            f"Malformed audio response: {exc.error_count()} validation error(s)",
            body=raw_text,
        ) from exc


def _passthrough(raw_text: str) -> str:
    return raw_text


_DECODERS: dict[AudioResponseFormat, Callable[[str], AudioResult]] = {
    AudioResponseFormat.JSON: _decode_envelope,
    AudioResponseFormat.VERBOSE_JSON: _decode_envelope,
    AudioResponseFormat.TEXT: _passthrough,
    AudioResponseFormat.SRT: _passthrough,
    AudioResponseFormat.VTT: _passthrough,
}

STRUCTURED_FORMATS = frozenset(
    response_format
    for response_format, decoder in _DECODERS.items()
    if decoder is _decode_envelope
)


def is_structured(response_format: AudioResponseFormat | str) -> bool:
    return AudioResponseFormat(response_format) in STRUCTURED_FORMATS


def require_structured_format(response_format: AudioResponseFormat | str) -> None:
    """Raise ``ResponseFormatError`` unless the format decodes to an envelope."""
    if not is_structured(response_format):
        raise ResponseFormatError(
            str(getattr(response_format, "value", response_format)),
            sorted(fmt.value for fmt in STRUCTURED_FORMATS),
        )


def interpret(
    raw_text: str, response_format: AudioResponseFormat | str
) -> AudioResult:
    """Decode ``raw_text`` according to ``response_format``.

    Returns an ``AudioResponse`` for ``json`` and ``verbose_json``, and the
    untouched text for ``text``, ``srt`` and ``vtt``.
    """
    return _DECODERS[AudioResponseFormat(response_format)](raw_text)


def interpret_text(raw_text: str, response_format: AudioResponseFormat | str) -> str:
    result = interpret(raw_text, response_format)
    if isinstance(result, AudioResponse):
        return result.text
    return result
