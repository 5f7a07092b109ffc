"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
voice metadata, and user/subscription summaries.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import NoReturn

import typer

from .errors import ApiError, MissingEnvironmentVariableError, VoiceLabError
from .models.datatypes import SubscriptionInfo, UserInfo, VoiceMetadata


_HINTS = {
    "invalid_api_key": "Check the API key passed via `--api-key`, keyring, or `ELEVENLABS_API_KEY`.",
    "not_found": "Verify the voice id, e.g. with `voicelab voice-info <voice_id>`.",
    "rate_limited": "Wait before retrying or check your subscription quota.",
    "timeout": "Retry the command or check network connectivity.",
    "transport": "Check network connectivity and `--api-url` / `ELEVENLABS_API_URL`.",
}


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    hint: str | None = None
    if isinstance(exc, MissingEnvironmentVariableError):
        hint = (
            f"Set `{exc.variable_name}`, pass `--api-key`, or store a key with "
            "`voicelab credentials --set-api-key`."
        )
    elif isinstance(exc, VoiceLabError):
        hint = _HINTS.get(exc.failure_kind)
    if hint:
        typer.secho(f"Hint: {hint}", fg=typer.colors.YELLOW, err=True)
    if isinstance(exc, ApiError) and exc.provider_status:
        typer.secho(f"Provider status: {exc.provider_status}", err=True)
    raise typer.Exit(code=1) from exc


def _format_unix(timestamp: int) -> str:
    """Render a unix timestamp as an ISO-8601 UTC date-time."""

    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def echo_voice_metadata(metadata: VoiceMetadata) -> None:
    """Print voice identity, labels, and settings when present."""

    typer.echo(f"Voice id: {metadata.voice_id}")
    typer.echo(f"Name: {metadata.name or '(unnamed)'}")
    if metadata.category:
        typer.echo(f"Category: {metadata.category}")
    if metadata.description:
        typer.echo(f"Description: {metadata.description}")
    for key in sorted(metadata.labels):
        typer.echo(f"Label {key}: {metadata.labels[key]}")
    settings = metadata.settings
    if settings is not None:
        typer.echo(f"Stability: {settings.stability:.2f}")
        typer.echo(f"Similarity boost: {settings.similarity_boost:.2f}")
        if settings.style is not None:
            typer.echo(f"Style: {settings.style:.2f}")
        if settings.use_speaker_boost is not None:
            typer.echo(f"Speaker boost: {'on' if settings.use_speaker_boost else 'off'}")


def echo_subscription(subscription: SubscriptionInfo) -> None:
    """Print subscription tier, character usage, and next invoice."""

    typer.echo(f"Tier: {subscription.tier} ({subscription.status})")
    typer.echo(
        f"Characters: {subscription.character_count}/{subscription.character_limit} "
        f"(remaining {subscription.remaining_characters})"
    )
    typer.echo(
        f"Character reset: {_format_unix(subscription.next_character_count_reset_unix)}"
    )
    typer.echo(f"Voices: limit {subscription.voice_limit}")
    invoice = subscription.next_invoice
    if invoice is not None:
        amount = invoice.amount_due_cents / 100
        typer.echo(
            f"Next invoice: {amount:.2f} {subscription.currency.upper()} "
            f"on {_format_unix(invoice.next_payment_attempt_unix)}"
        )


def echo_user_info(user: UserInfo) -> None:
    """Print user profile flags followed by the subscription summary."""

    typer.echo(f"First name: {user.first_name or '(not set)'}")
    typer.echo(f"New user: {'yes' if user.is_new_user else 'no'}")
    typer.echo(f"Onboarding completed: {'yes' if user.is_onboarding_completed else 'no'}")
    echo_subscription(user.subscription)
