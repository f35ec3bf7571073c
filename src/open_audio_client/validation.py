"""Response validation shared by the audio endpoints."""

from __future__ import annotations

import logging

import httpx

from .errors import RequestFailedError

logger = logging.getLogger(__name__)


async def check_response(
    response: httpx.Response,
    *,
    debug: bool = False,
    payload: str | None = None,
    read_body: bool = True,
) -> None:
    """Raise ``RequestFailedError`` if ``response`` is not a success.

    With ``read_body=False`` a successful streaming response is left unread;
    only an error response has its body read, so the error text is never
    mixed into the streamed payload.

    Args:
        response: Response to check.
        debug: Include ``payload`` in the error message and log a summary.
        payload: Printable summary of the request body.
        read_body: Whether the body may be read on success.
    """
    if debug:
        logger.debug(
            "%s %s -> %s payload=%s",
            response.request.method,
            response.request.url,
            response.status_code,
            payload,
        )

    if response.is_success:
        if read_body and not response.is_stream_consumed:
            await response.aread()
        return

    try:
        await response.aread()
        body = response.text
    except httpx.StreamError:
        # already streamed to the caller
        body = None
    message = f"{response.request.method} {response.request.url} failed with status {response.status_code}: {body}"
    if debug and payload is not None:
        message = f"{message}\nRequest payload: {payload}"
    raise RequestFailedError(
        message,
        status_code=response.status_code,
        body=body,
        payload=payload if debug else None,
    )
