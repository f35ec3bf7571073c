import pytest

_ENV_VARS = (
    "OPEN_AUDIO_CLIENT_BASE_URL",
    "OPEN_AUDIO_CLIENT_API_KEY",
    "OPEN_AUDIO_CLIENT_ORGANIZATION",
    "OPEN_AUDIO_CLIENT_PROJECT",
    "OPEN_AUDIO_CLIENT_TIMEOUT_SECONDS",
    "OPEN_AUDIO_CLIENT_CHUNK_SIZE",
    "OPEN_AUDIO_CLIENT_DEBUG",
    "OPENAI_API_KEY",
)


@pytest.fixture(autouse=True)
def reset_open_audio_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
