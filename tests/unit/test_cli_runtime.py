"""Unit tests for CLI runtime source resolution and client execution."""

from __future__ import annotations

from voicelab.api.voices import VoicesClient
from voicelab.cli_runtime import resolve_runtime_sources, run_client_call
from voicelab.config import RuntimeConfigSources


class InMemoryCredentialStore:
    """In-memory credential store implementation for runtime-resolution tests."""

    def __init__(self, initial_api_key: str | None = None) -> None:
        """Initialize the store with an optional initial API key."""

        self._api_key = initial_api_key
        self.reads = 0

    def is_available(self) -> bool:
        return True

    def get_api_key(self) -> str | None:
        """Return currently stored API key value and count lookups."""

        self.reads += 1
        return self._api_key

    def set_api_key(self, api_key: str) -> None:
        self._api_key = api_key

    def clear_api_key(self) -> bool:
        existed = self._api_key is not None
        self._api_key = None
        return existed


def test_resolve_runtime_sources_collects_cli_secure_and_env_values() -> None:
    """Resolver should normalize CLI values, read keyring, and keep only known env keys."""

    store = InMemoryCredentialStore(initial_api_key="secure-key")
    sources = resolve_runtime_sources(
        api_key=None,
        api_url=" https://cli.test ",
        verbose=True,
        credential_store_factory=lambda: store,
        env={"ELEVENLABS_API_KEY": "env-key", "UNRELATED": "x"},
    )

    assert sources.cli == {"api_url": "https://cli.test", "verbose": "true"}
    assert sources.secure == {"api_key": "secure-key"}
    assert sources.env == {"ELEVENLABS_API_KEY": "env-key"}
    assert sources.resolve_config().api_key == "secure-key"


def test_resolve_runtime_sources_skips_keyring_when_key_given() -> None:
    """An explicit `--api-key` should bypass the keyring lookup."""

    store = InMemoryCredentialStore(initial_api_key="secure-key")
    sources = resolve_runtime_sources(
        api_key=" cli-key ",
        api_url=None,
        verbose=None,
        credential_store_factory=lambda: store,
        env={},
    )

    assert store.reads == 0
    assert sources.cli == {"api_key": "cli-key"}
    assert sources.resolve_config().api_key == "cli-key"


def test_run_client_call_awaits_one_call_with_resolved_config() -> None:
    """Runner should build the client from resolved config and return the call result."""

    seen: dict[str, object] = {}

    async def _call(client: VoicesClient) -> str:
        seen["api_url"] = client.config.api_url
        seen["api_key"] = client.config.api_key
        seen["logger_enabled"] = client.logger.enabled
        return "done"

    sources = RuntimeConfigSources(cli={"api_key": "cli-key", "api_url": "https://cli.test/"})

    assert run_client_call(VoicesClient, sources, _call) == "done"
    assert seen == {
        "api_url": "https://cli.test",
        "api_key": "cli-key",
        "logger_enabled": False,
    }
