"""Unit tests for the keyring-backed API key store."""

from __future__ import annotations

import pytest
from keyring.backends import fail
from keyring.errors import PasswordDeleteError

from voicelab import credentials
from voicelab.credentials import KeyringCredentialStore


class InMemoryKeyring:
    """In-memory keyring backend for deterministic credential store tests."""

    def __init__(self) -> None:
        """Initialize empty password storage."""

        self.storage: dict[tuple[str, str], str] = {}

    def get_password(self, service: str, username: str) -> str | None:
        """Return previously stored password if present."""

        return self.storage.get((service, username))

    def set_password(self, service: str, username: str, password: str) -> None:
        """Store password value for the service/account key."""

        self.storage[(service, username)] = password

    def delete_password(self, service: str, username: str) -> None:
        """Delete password value or raise like real backends do."""

        if (service, username) not in self.storage:
            raise PasswordDeleteError("not found")
        del self.storage[(service, username)]


@pytest.fixture
def memory_keyring(monkeypatch: pytest.MonkeyPatch) -> InMemoryKeyring:
    """Install an in-memory keyring backend for the duration of one test."""

    backend = InMemoryKeyring()
    monkeypatch.setattr(credentials.keyring, "get_keyring", lambda: backend)
    monkeypatch.setattr(credentials.keyring, "get_password", backend.get_password)
    monkeypatch.setattr(credentials.keyring, "set_password", backend.set_password)
    monkeypatch.setattr(credentials.keyring, "delete_password", backend.delete_password)
    return backend


def test_store_roundtrip_set_get_clear(memory_keyring: InMemoryKeyring) -> None:
    """Store should set/get/clear normalized API key values via the keyring backend."""

    store = KeyringCredentialStore()

    assert store.is_available() is True
    assert store.get_api_key() is None

    store.set_api_key("  sk_abc123  ")
    assert memory_keyring.storage == {("voicelab", "elevenlabs_api_key"): "sk_abc123"}
    assert store.get_api_key() == "sk_abc123"

    assert store.clear_api_key() is True
    assert store.get_api_key() is None
    assert store.clear_api_key() is False


def test_store_rejects_blank_key(memory_keyring: InMemoryKeyring) -> None:
    """Blank keys should never be persisted."""

    with pytest.raises(ValueError, match="non-empty"):
        KeyringCredentialStore().set_api_key("   ")
    assert memory_keyring.storage == {}


def test_store_degrades_without_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    """With only the failing backend, reads return nothing and writes raise."""

    monkeypatch.setattr(credentials.keyring, "get_keyring", lambda: fail.Keyring())
    store = KeyringCredentialStore()

    assert store.is_available() is False
    assert store.get_api_key() is None
    assert store.clear_api_key() is False
    with pytest.raises(RuntimeError, match="No keyring backend is configured"):
        store.set_api_key("sk_abc123")
