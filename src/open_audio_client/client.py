"""Client factory for the audio API."""

from __future__ import annotations

import httpx

from .config import ClientConfig
from .endpoint import AudioEndpoint


class AudioClient:
    """Owns the HTTP connection pool and exposes the audio endpoint.

    Use as an async context manager, or call ``aclose()`` when done.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create a client.

        Args:
            config: Client configuration. Read from the environment if not provided.
            transport: Optional httpx transport, mostly for tests.
        """
        self.config = config or ClientConfig.from_env()
        self._http = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers=self.config.headers(),
            timeout=self.config.timeout_seconds,
            transport=transport,
        )
        self.audio = AudioEndpoint(
            self._http,
            chunk_size=self.config.chunk_size,
            debug=self.config.debug,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AudioClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
