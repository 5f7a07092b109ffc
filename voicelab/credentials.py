"""Keyring-backed storage for the ElevenLabs API key used by the CLI.

Responsibilities:
- Persist, read, and delete the API key in the OS credential store.
- Report whether a usable keyring backend is configured.
- Never log or echo the stored value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import keyring
from keyring.backends import fail
from keyring.errors import KeyringError, PasswordDeleteError

from .parsing import normalize_optional_string


SERVICE_NAME = "voicelab"
ACCOUNT_NAME = "elevenlabs_api_key"


class CredentialStore(Protocol):
    """Operations the CLI needs from an API key store."""

    def is_available(self) -> bool: ...

    def get_api_key(self) -> str | None: ...

    def set_api_key(self, api_key: str) -> None: ...

    def clear_api_key(self) -> bool: ...


@dataclass(slots=True)
class KeyringCredentialStore:
    """API key store backed by the active `keyring` backend."""

    service_name: str = SERVICE_NAME
    account_name: str = ACCOUNT_NAME

    def is_available(self) -> bool:
        """Return `False` when keyring resolved to its always-failing backend."""

        return not isinstance(keyring.get_keyring(), fail.Keyring)

    def get_api_key(self) -> str | None:
        if not self.is_available():
            return None
        try:
            value = keyring.get_password(self.service_name, self.account_name)
        except KeyringError:
            return None
        return normalize_optional_string(value)

    def set_api_key(self, api_key: str) -> None:
        """Persist a normalized API key.

        Raises:
            ValueError: If the key is blank.
            RuntimeError: If no keyring backend is configured.
        """

        normalized = normalize_optional_string(api_key)
        if normalized is None:
            raise ValueError("API key must be a non-empty string.")
        if not self.is_available():
            raise RuntimeError(
                "No keyring backend is configured; install or configure one to store "
                "the API key securely."
            )
        keyring.set_password(self.service_name, self.account_name, normalized)

    def clear_api_key(self) -> bool:
        """Delete the stored key and report whether one existed."""

        if self.get_api_key() is None:
            return False
        try:
            keyring.delete_password(self.service_name, self.account_name)
        except PasswordDeleteError:
            return False
        return True


def create_credential_store() -> CredentialStore:
    """Create the default API key store."""

    return KeyringCredentialStore()
