"""CLI entry point for the audio client."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from .audio_request import TranscriptionRequest, TranslationRequest
from .client import AudioClient
from .config import ClientConfig
from .models import (
    AudioResponseFormat,
    SpeechRequest,
    SpeechResponseFormat,
    TimestampGranularity,
)

app = typer.Typer(
    name="open-audio-client",
    help="Client for OpenAI-compatible speech, transcription and translation APIs.",
)


def _client(base_url: Optional[str]) -> AudioClient:
    config = ClientConfig.from_env()
    if base_url:
        config.base_url = base_url
    return AudioClient(config)


@app.callback()
def configure(
    log_level: Annotated[
        str, typer.Option("--log-level", help="Logging level")
    ] = "WARNING",
):
    """Configure logging for all commands."""
    logging.basicConfig(level=log_level.upper())


@app.command()
def speak(
    text: Annotated[str, typer.Argument(help="Text to synthesize")],
    output: Annotated[
        Path, typer.Option("--output", "-o", help="File to write audio to")
    ],
    model: Annotated[str, typer.Option("--model", "-m", help="Speech model")] = "tts-1",
    voice: Annotated[str, typer.Option("--voice", help="Voice name")] = "alloy",
    audio_format: Annotated[
        SpeechResponseFormat, typer.Option("--format", help="Audio format")
    ] = SpeechResponseFormat.MP3,
    speed: Annotated[float, typer.Option("--speed", help="Playback speed")] = 1.0,
    base_url: Annotated[
        Optional[str], typer.Option("--base-url", help="API base URL")
    ] = None,
):
    """Synthesize speech, writing audio to OUTPUT as it streams in."""
    request = SpeechRequest(
        model=model,
        input=text,
        voice=voice,
        response_format=audio_format,
        speed=speed,
    )

    async def run() -> int:
        async with _client(base_url) as client:
            with output.open("wb") as sink:
                audio = await client.audio.create_speech(request, sink.write)
        return len(audio)

    size = asyncio.run(run())
    typer.echo(f"Wrote {size} bytes to {output}")


@app.command()
def transcribe(
    audio: Annotated[Path, typer.Argument(help="Audio file", exists=True, dir_okay=False)],
    model: Annotated[
        str, typer.Option("--model", "-m", help="Transcription model")
    ] = "whisper-1",
    response_format: Annotated[
        AudioResponseFormat, typer.Option("--response-format", help="Output format")
    ] = AudioResponseFormat.TEXT,
    language: Annotated[
        Optional[str], typer.Option("--language", "-l", help="ISO-639-1 language code")
    ] = None,
    prompt: Annotated[Optional[str], typer.Option("--prompt", help="Style prompt")] = None,
    temperature: Annotated[
        Optional[float], typer.Option("--temperature", help="Sampling temperature")
    ] = None,
    timestamps: Annotated[
        TimestampGranularity,
        typer.Option("--timestamps", help="Timestamp granularity"),
    ] = TimestampGranularity.NONE,
    include: Annotated[
        Optional[list[str]],
        typer.Option("--include", help="Extra response fields (repeatable)"),
    ] = None,
    base_url: Annotated[
        Optional[str], typer.Option("--base-url", help="API base URL")
    ] = None,
):
    """Transcribe an audio file."""
    request = TranscriptionRequest.from_path(
        audio,
        model=model,
        response_format=response_format,
        language=language,
        prompt=prompt,
        temperature=temperature,
        timestamp_granularities=timestamps,
        include=include,
    )

    async def run():
        async with _client(base_url) as client:
            return await client.audio.create_transcription(request)

    with request:
        result = asyncio.run(run())
    _echo_result(result)


@app.command()
def translate(
    audio: Annotated[Path, typer.Argument(help="Audio file", exists=True, dir_okay=False)],
    model: Annotated[
        str, typer.Option("--model", "-m", help="Translation model")
    ] = "whisper-1",
    response_format: Annotated[
        AudioResponseFormat, typer.Option("--response-format", help="Output format")
    ] = AudioResponseFormat.TEXT,
    prompt: Annotated[Optional[str], typer.Option("--prompt", help="Style prompt")] = None,
    temperature: Annotated[
        Optional[float], typer.Option("--temperature", help="Sampling temperature")
    ] = None,
    base_url: Annotated[
        Optional[str], typer.Option("--base-url", help="API base URL")
    ] = None,
):
    """Translate an audio file into English."""
    request = TranslationRequest.from_path(
        audio,
        model=model,
        response_format=response_format,
        prompt=prompt,
        temperature=temperature,
    )

    async def run():
        async with _client(base_url) as client:
            return await client.audio.create_translation(request)

    with request:
        result = asyncio.run(run())
    _echo_result(result)


def _echo_result(result) -> None:
    if isinstance(result, str):
        typer.echo(result)
    else:
        typer.echo(result.model_dump_json(indent=2, exclude_none=True))


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
