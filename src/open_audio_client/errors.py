"""Exceptions raised by the audio client."""

from __future__ import annotations


class AudioClientError(Exception):
    """Base error for audio client failures."""


class ResponseFormatError(AudioClientError, ValueError):
    """The requested response format cannot be decoded as requested."""

    def __init__(self, response_format: str, allowed: list[str]):
        super().__init__(
            f"Response format must be one of {allowed}, got '{response_format}'"
        )
        self.response_format = response_format
        self.allowed = allowed


class RequestConsumedError(AudioClientError):
    """A request that owns an audio stream was built more than once."""


class RequestFailedError(AudioClientError):
    """The service answered with an error or the transfer broke down."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
        payload: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.payload = payload


class ResponseDecodeError(RequestFailedError):
    """A structured response body could not be decoded."""
