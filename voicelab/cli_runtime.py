"""CLI runtime resolution helpers.

This module isolates config source assembly, keyring lookup, logger creation,
and coroutine execution from the command wiring layer.
"""

from __future__ import annotations

import asyncio
import os
from typing import Awaitable, Callable, Mapping, TypeVar

from .api.base import BaseClient
from .config import API_KEY_ENV, API_URL_ENV, VERBOSE_ENV, Config, RuntimeConfigSources
from .credentials import CredentialStore, create_credential_store
from .parsing import normalize_optional_string
from .telemetry.logger import ClientLogger, setup_logging


ClientT = TypeVar("ClientT", bound=BaseClient)
ResultT = TypeVar("ResultT")

_ENV_KEYS = (API_KEY_ENV, API_URL_ENV, VERBOSE_ENV)


def resolve_runtime_sources(
    api_key: str | None,
    api_url: str | None,
    verbose: bool | None,
    credential_store_factory: Callable[[], CredentialStore] | None = None,
    env: Mapping[str, str] | None = None,
) -> RuntimeConfigSources:
    """Collect CLI, keyring, and environment values for config precedence resolution.

    The keyring is only consulted when no API key was passed on the command line.
    """

    cli_values: dict[str, str] = {}
    normalized_key = normalize_optional_string(api_key)
    if normalized_key is not None:
        cli_values["api_key"] = normalized_key
    normalized_url = normalize_optional_string(api_url)
    if normalized_url is not None:
        cli_values["api_url"] = normalized_url
    if verbose is not None:
        cli_values["verbose"] = "true" if verbose else "false"

    secure_values: dict[str, str] = {}
    if "api_key" not in cli_values:
        factory = credential_store_factory or create_credential_store
        stored_api_key = factory().get_api_key()
        if stored_api_key is not None:
            secure_values["api_key"] = stored_api_key

    env_map: Mapping[str, str] = os.environ if env is None else env
    env_values = {key: env_map[key] for key in _ENV_KEYS if key in env_map}
    return RuntimeConfigSources(cli=cli_values, secure=secure_values, env=env_values)


def build_logger(verbose: bool) -> ClientLogger:
    """Return a stderr logging handle in verbose mode, otherwise a silent one."""

    if verbose:
        return setup_logging(level="INFO")
    return ClientLogger()


async def _call_with_client(
    client_type: type[ClientT],
    config: Config,
    logger: ClientLogger,
    call: Callable[[ClientT], Awaitable[ResultT]],
) -> ResultT:
    async with client_type(config, logger=logger) as client:
        return await call(client)


def run_client_call(
    client_type: type[ClientT],
    sources: RuntimeConfigSources,
    call: Callable[[ClientT], Awaitable[ResultT]],
) -> ResultT:
    """Resolve config, run one client coroutine to completion, and release resources."""

    config = sources.resolve_config()
    logger = build_logger(sources.resolve_verbose())
    try:
        return asyncio.run(_call_with_client(client_type, config, logger, call))
    finally:
        logger.close()
