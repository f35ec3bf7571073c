import io
import json

import pytest

from open_audio_client.audio_request import TranscriptionRequest, TranslationRequest
from open_audio_client.errors import RequestConsumedError
from open_audio_client.models import ChunkingStrategy
from open_audio_client.multipart import (
    build_transcription_body,
    build_translation_body,
    format_decimal,
)


class OneShotStream(io.RawIOBase):
    """Readable, non-seekable stream."""

    def __init__(self, data: bytes):
        self._data = data

    def readable(self):
        return True

    def read(self, size=-1):
        data, self._data = self._data, b""
        return data


class BrokenStream(io.BytesIO):
    def read(self, size=-1):
        raise OSError("disk went away")


def _transcription(**kwargs) -> TranscriptionRequest:
    kwargs.setdefault("audio", b"RIFF....WAVE")
    kwargs.setdefault("audio_name", "clip.wav")
    return TranscriptionRequest(**kwargs)


def test_required_parts_only():
    body = build_transcription_body(_transcription())

    assert body.file_name == "clip.wav"
    assert body.file_content == b"RIFF....WAVE"
    assert body.names() == ["file", "model", "response_format"]
    assert body.get("model") == "whisper-1"
    assert body.get("response_format") == "json"


def test_language_part_only_when_set():
    unset = build_transcription_body(_transcription())
    blank = build_transcription_body(_transcription(language="   "))
    present = build_transcription_body(_transcription(language="es"))

    assert unset.get_all("language") == []
    assert blank.get_all("language") == []
    assert present.get_all("language") == ["es"]


def test_include_is_one_part_per_item_in_order():
    body = build_transcription_body(_transcription(include=["a", "b"]))

    assert body.get_all("include[]") == ["a", "b"]
    assert body.names().count("include[]") == 2


def test_empty_include_produces_no_parts():
    body = build_transcription_body(_transcription(include=[]))

    assert "include[]" not in body.names()


def test_chunking_strategy_auto_is_bare_literal():
    body = build_transcription_body(
        _transcription(chunking_strategy=ChunkingStrategy.auto())
    )

    assert body.get("chunking_strategy") == "auto"


def test_chunking_strategy_object_is_json():
    strategy = ChunkingStrategy(threshold=0.5, silence_duration_ms=300)
    body = build_transcription_body(_transcription(chunking_strategy=strategy))

    assert json.loads(body.get("chunking_strategy")) == {
        "type": "server_vad",
        "threshold": 0.5,
        "silence_duration_ms": 300,
    }


def test_temperature_uses_invariant_decimal_text():
    body = build_transcription_body(_transcription(temperature=0.5))

    assert body.get("temperature") == "0.5"


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.5, "0.5"), (0.25, "0.25"), (1.0, "1"), (0, "0"), (0.123456789, "0.123456789")],
)
def test_format_decimal(value, expected):
    assert format_decimal(value) == expected


def test_timestamp_granularity_none_is_omitted():
    body = build_transcription_body(_transcription(timestamp_granularities="none"))

    assert body.get_all("timestamp_granularities[]") == []


@pytest.mark.parametrize("granularity", ["segment", "word"])
def test_timestamp_granularity_emitted(granularity):
    body = build_transcription_body(
        _transcription(timestamp_granularities=granularity)
    )

    assert body.get_all("timestamp_granularities[]") == [granularity]


def test_response_format_wire_name():
    body = build_transcription_body(_transcription(response_format="verbose_json"))

    assert body.get("response_format") == "verbose_json"


def test_full_transcription_part_order():
    body = build_transcription_body(
        _transcription(
            chunking_strategy=ChunkingStrategy.auto(),
            include=["logprobs"],
            language="en",
            prompt="Names: Ada, Grace",
            response_format="verbose_json",
            temperature=0.2,
            timestamp_granularities="word",
        )
    )

    assert body.names() == [
        "file",
        "model",
        "chunking_strategy",
        "include[]",
        "language",
        "prompt",
        "response_format",
        "temperature",
        "timestamp_granularities[]",
    ]


def test_translation_parts():
    request = TranslationRequest(
        b"audio", "clip.mp3", prompt="formal", response_format="text", temperature=0.0
    )
    body = build_translation_body(request)

    assert body.names() == ["file", "model", "prompt", "response_format", "temperature"]
    assert body.get("temperature") == "0"
    assert body.get("response_format") == "text"


def test_non_seekable_stream_is_read_fully():
    stream = OneShotStream(b"x" * 50_000)
    body = build_transcription_body(_transcription(audio=stream))

    assert body.file_content == b"x" * 50_000
    assert stream.closed


def test_audio_released_after_build():
    stream = io.BytesIO(b"audio")
    request = _transcription(audio=stream)

    build_transcription_body(request)

    assert stream.closed
    assert request.closed


def test_audio_released_when_build_fails():
    stream = BrokenStream(b"audio")
    request = _transcription(audio=stream)

    with pytest.raises(OSError):
        build_transcription_body(request)

    assert stream.closed


def test_request_cannot_be_built_twice():
    request = _transcription()
    build_transcription_body(request)

    with pytest.raises(RequestConsumedError):
        build_transcription_body(request)


def test_to_httpx_groups_repeated_fields():
    body = build_transcription_body(_transcription(include=["a", "b"], language="en"))

    kwargs = body.to_httpx()

    assert kwargs["files"] == {
        "file": ("clip.wav", b"RIFF....WAVE", "application/octet-stream")
    }
    assert kwargs["data"]["include[]"] == ["a", "b"]
    assert kwargs["data"]["language"] == ["en"]


def test_describe_omits_file_bytes():
    body = build_transcription_body(_transcription(language="en"))

    summary = body.describe()

    assert "file=clip.wav (12 bytes)" in summary
    assert "language=en" in summary
    assert "RIFF" not in summary


def test_from_path_takes_ownership(tmp_path):
    audio_path = tmp_path / "note.m4a"
    audio_path.write_bytes(b"m4a-bytes")

    request = TranscriptionRequest.from_path(audio_path, language="fr")
    body = build_transcription_body(request)

    assert body.file_name == "note.m4a"
    assert body.file_content == b"m4a-bytes"
    assert request.audio.closed


def test_temperature_out_of_range_rejected():
    with pytest.raises(ValueError):
        _transcription(temperature=1.5)
