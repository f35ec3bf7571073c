import json

import httpx
import pytest
from typer.testing import CliRunner

from open_audio_client import cli
from open_audio_client.client import AudioClient

runner = CliRunner()


def _patch_client(monkeypatch, handler):
    calls = {"requests": []}

    def recording_handler(request):
        calls["requests"].append(request)
        return handler(request)

    def factory(config):
        calls["config"] = config
        return AudioClient(config, transport=httpx.MockTransport(recording_handler))

    monkeypatch.setattr(cli, "AudioClient", factory)
    return calls


def test_speak_writes_streamed_audio(monkeypatch, tmp_path):
    calls = _patch_client(
        monkeypatch, lambda request: httpx.Response(200, content=b"ID3" + b"\x00" * 20000)
    )
    output = tmp_path / "hello.mp3"

    result = runner.invoke(
        cli.app,
        ["speak", "Hello there", "--output", str(output), "--voice", "echo"],
    )

    assert result.exit_code == 0, result.output
    assert output.read_bytes() == b"ID3" + b"\x00" * 20000
    assert "Wrote 20003 bytes" in result.output
    body = json.loads(calls["requests"][0].content)
    assert body["voice"] == "echo"
    assert body["input"] == "Hello there"


def test_transcribe_prints_text(monkeypatch, tmp_path):
    calls = _patch_client(monkeypatch, lambda request: httpx.Response(200, text="hola"))
    audio = tmp_path / "clip.wav"
    audio.write_bytes(b"RIFF")

    result = runner.invoke(
        cli.app,
        [
            "transcribe",
            str(audio),
            "--language",
            "es",
            "--include",
            "logprobs",
            "--base-url",
            "http://localhost:9000/v1",
        ],
    )

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "hola"
    assert calls["config"].base_url == "http://localhost:9000/v1"
    sent = calls["requests"][0]
    assert sent.url.path == "/v1/audio/transcriptions"
    assert b'name="language"\r\n\r\nes' in sent.content
    assert b'name="include[]"\r\n\r\nlogprobs' in sent.content
    assert b'filename="clip.wav"' in sent.content


def test_translate_prints_json(monkeypatch, tmp_path):
    _patch_client(
        monkeypatch,
        lambda request: httpx.Response(200, json={"text": "hello", "language": "french"}),
    )
    audio = tmp_path / "bonjour.wav"
    audio.write_bytes(b"RIFF")

    result = runner.invoke(
        cli.app, ["translate", str(audio), "--response-format", "json"]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"text": "hello", "language": "french"}


def test_request_failure_exits_nonzero(monkeypatch, tmp_path):
    _patch_client(monkeypatch, lambda request: httpx.Response(500, text="boom"))
    audio = tmp_path / "clip.wav"
    audio.write_bytes(b"RIFF")

    result = runner.invoke(cli.app, ["transcribe", str(audio)])

    assert result.exit_code != 0


@pytest.mark.parametrize(
    ("command", "request_type"),
    [
        ("transcribe", "TranscriptionRequest"),
        ("translate", "TranslationRequest"),
    ],
)
def test_audio_file_closed_when_client_cannot_start(
    monkeypatch, tmp_path, command, request_type
):
    created = []
    base = getattr(cli, request_type)

    class RecordingRequest(base):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            created.append(self)

    def broken_client(config):
        raise RuntimeError("no client for you")

    monkeypatch.setattr(cli, request_type, RecordingRequest)
    monkeypatch.setattr(cli, "AudioClient", broken_client)
    audio = tmp_path / "clip.wav"
    audio.write_bytes(b"RIFF")

    result = runner.invoke(cli.app, [command, str(audio)])

    assert result.exit_code != 0
    assert isinstance(result.exception, RuntimeError)
    (request,) = created
    assert request.closed
    assert request.audio.closed
