"""Client configuration and environment loaders.

Responsibilities:
- Define the immutable API endpoint/key configuration shared by every client.
- Load configuration values from `ELEVENLABS_API_KEY` / `ELEVENLABS_API_URL`.
- Resolve CLI runtime values with deterministic source precedence.

Key types:
- `Config`: API base URL and API key.
- `RuntimeConfigSources`: optional value sources for precedence resolution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Mapping

from .errors import MissingEnvironmentVariableError
from .parsing import normalize_optional_string, parse_permissive_boolean


DEFAULT_API_URL = "https://api.elevenlabs.io"
API_KEY_ENV = "ELEVENLABS_API_KEY"
API_URL_ENV = "ELEVENLABS_API_URL"
VERBOSE_ENV = "VOICELAB_VERBOSE"


@dataclass(frozen=True, slots=True)
class Config:
    """Connection settings for the ElevenLabs REST API.

    Attributes:
        api_url: Base URL without a trailing slash, e.g. `https://api.elevenlabs.io`.
        api_key: Key sent as the `xi-api-key` header on every request.
    """

    api_url: str
    api_key: str = field(repr=False)

    def __post_init__(self) -> None:
        api_url = normalize_optional_string(self.api_url)
        api_key = normalize_optional_string(self.api_key)
        if api_url is None:
            raise ValueError("`api_url` must be a non-empty string.")
        if api_key is None:
            raise ValueError("`api_key` must be a non-empty string.")
        object.__setattr__(self, "api_url", api_url.rstrip("/"))
        object.__setattr__(self, "api_key", api_key)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Config:
        """Create config from `ELEVENLABS_API_URL` and `ELEVENLABS_API_KEY`."""

        return cls(api_url=load_api_url(env), api_key=load_api_key(env))

    def endpoint(self, path: str) -> str:
        """Join a `/v1/...` resource path onto the base URL."""

        return f"{self.api_url}/{path.lstrip('/')}"


def _load_required_env(env: Mapping[str, str] | None, key: str) -> str:
    """Read a required environment variable and return its exact value."""

    env_map: Mapping[str, str] = os.environ if env is None else env
    value = env_map.get(key)
    if value is None or not value.strip():
        raise MissingEnvironmentVariableError(key)
    return value


def load_api_key(env: Mapping[str, str] | None = None) -> str:
    """Return the API key from `ELEVENLABS_API_KEY`."""

    return _load_required_env(env, API_KEY_ENV)


def load_api_url(env: Mapping[str, str] | None = None) -> str:
    """Return the API base URL from `ELEVENLABS_API_URL`."""

    return _load_required_env(env, API_URL_ENV)


@dataclass(frozen=True, slots=True)
class RuntimeConfigSources:
    """Source mappings used for deterministic runtime value precedence.

    Attributes:
        cli: Values explicitly provided by CLI arguments.
        secure: Values loaded from secure local credential storage.
        env: Values loaded from environment variables.
    """

    cli: Mapping[str, str] = field(default_factory=dict)
    secure: Mapping[str, str] = field(default_factory=dict)
    env: Mapping[str, str] = field(default_factory=dict)

    def resolve_config(self) -> Config:
        """Resolve a `Config` with `cli` > `secure` > `env` > default precedence.

        Raises:
            MissingEnvironmentVariableError: If no source provides an API key.
        """

        api_key = (
            _normalized_lookup(self.cli, "api_key")
            or _normalized_lookup(self.secure, "api_key")
            or _normalized_lookup(self.env, API_KEY_ENV)
        )
        if api_key is None:
            raise MissingEnvironmentVariableError(API_KEY_ENV)

        api_url = (
            _normalized_lookup(self.cli, "api_url")
            or _normalized_lookup(self.env, API_URL_ENV)
            or DEFAULT_API_URL
        )
        return Config(api_url=api_url, api_key=api_key)

    def resolve_verbose(self, default_value: bool = False) -> bool:
        """Resolve verbose logging from CLI flag or `VOICELAB_VERBOSE`."""

        for value in (self.cli.get("verbose"), self.env.get(VERBOSE_ENV)):
            parsed = parse_permissive_boolean(value)
            if parsed is not None:
                return parsed
        return default_value


def _normalized_lookup(mapping: Mapping[str, str], key: str) -> str | None:
    """Return a stripped mapping value for a key or `None` when missing/blank."""

    if key not in mapping:
        return None
    return normalize_optional_string(mapping.get(key))
