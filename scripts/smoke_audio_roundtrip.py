#!/usr/bin/env python

"""Smoke test against a live OpenAI-compatible audio service.

Synthesizes a phrase, then transcribes the result back to text.
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from open_audio_client import AudioClient, ClientConfig, SpeechRequest, TranscriptionRequest


async def run(args: argparse.Namespace) -> int:
    config = ClientConfig.from_env()
    if args.base_url:
        config.base_url = args.base_url

    async with AudioClient(config) as client:
        received = 0

        def on_chunk(chunk: memoryview) -> None:
            nonlocal received
            received += len(chunk)

        audio = await client.audio.create_speech(
            SpeechRequest(model=args.tts_model, input=args.text, response_format="wav"),
            on_chunk,
        )
        Path(args.output).write_bytes(audio)
        print(f"speech: {len(audio)} bytes ({received} streamed) -> {args.output}")

        request = TranscriptionRequest(audio, Path(args.output).name, model=args.stt_model)
        text = await client.audio.create_transcription_text(request)
        print(f"transcript: {text}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Smoke test speech + transcription")
    parser.add_argument("--base-url", default=None, help="API base URL")
    parser.add_argument("--text", default="The quick brown fox jumps over the lazy dog.")
    parser.add_argument("--tts-model", default="tts-1")
    parser.add_argument("--stt-model", default="whisper-1")
    parser.add_argument("--output", default="smoke.wav")
    args = parser.parse_args()
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
