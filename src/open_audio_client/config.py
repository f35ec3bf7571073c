"""Client configuration."""

import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://api.openai.com/v1"


def _parse_env_int(value: str | None, default: int) -> int:
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _parse_env_float(value: str | None, default: float) -> float:
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _parse_env_bool(value: str | None, default: bool) -> bool:
    if not value:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ClientConfig:
    """Configuration for the audio client."""

    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = None
    organization: str | None = None
    project: str | None = None
    timeout_seconds: float = 600.0
    chunk_size: int = 8192
    debug: bool = False

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create configuration from environment variables."""
        defaults = cls()
        api_key = os.getenv("OPEN_AUDIO_CLIENT_API_KEY") or os.getenv(
            "OPENAI_API_KEY"
        )
        return cls(
            base_url=os.getenv("OPEN_AUDIO_CLIENT_BASE_URL", defaults.base_url),
            api_key=api_key,
            organization=os.getenv("OPEN_AUDIO_CLIENT_ORGANIZATION"),
            project=os.getenv("OPEN_AUDIO_CLIENT_PROJECT"),
            timeout_seconds=_parse_env_float(
                os.getenv("OPEN_AUDIO_CLIENT_TIMEOUT_SECONDS"),
                defaults.timeout_seconds,
            ),
            chunk_size=_parse_env_int(
                os.getenv("OPEN_AUDIO_CLIENT_CHUNK_SIZE"), defaults.chunk_size
            ),
            debug=_parse_env_bool(
                os.getenv("OPEN_AUDIO_CLIENT_DEBUG"), defaults.debug
            ),
        )

    def headers(self) -> dict[str, str]:
        """Default request headers for this configuration."""
        headers: dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        if self.organization:
            headers["OpenAI-Organization"] = self.organization
        if self.project:
            headers["OpenAI-Project"] = self.project
        return headers
