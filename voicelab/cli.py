"""Command-line interface for voicelab.

Responsibilities:
- Expose one command per ElevenLabs client operation.
- Resolve API key/URL from options, keyring, and environment for each command.
- Manage the keyring-stored API key.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any, Awaitable, Callable

import typer

from .api import TextToSpeechClient, UserClient, VoicesClient
from .cli_rendering import (
    echo_subscription,
    echo_user_info,
    echo_voice_metadata,
    exit_with_command_error,
)
from .cli_runtime import resolve_runtime_sources, run_client_call
from .credentials import create_credential_store
from .models.datatypes import TtsRequest, VoiceSettings
from .parsing import normalize_optional_string

app = typer.Typer(
    name="voicelab",
    no_args_is_help=True,
    help="ElevenLabs REST API command-line client.",
)


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Connection options shared by every command."""

    api_key: str | None = None
    api_url: str | None = None
    verbose: bool | None = None


@app.callback()
def main_callback(
    ctx: typer.Context,
    api_key: Annotated[
        str | None,
        typer.Option("--api-key", help="API key (overrides keyring and ELEVENLABS_API_KEY)."),
    ] = None,
    api_url: Annotated[
        str | None,
        typer.Option("--api-url", help="API base URL (overrides ELEVENLABS_API_URL)."),
    ] = None,
    verbose: Annotated[
        bool | None,
        typer.Option("--verbose/--quiet", help="Log request outcomes to stderr."),
    ] = None,
) -> None:
    """ElevenLabs REST API command-line client."""

    ctx.obj = GlobalOptions(api_key=api_key, api_url=api_url, verbose=verbose)


def _run(
    ctx: typer.Context,
    command_name: str,
    client_type: type[Any],
    call: Callable[[Any], Awaitable[Any]],
) -> Any:
    """Run one client call for a command, mapping every failure to exit code 1."""

    options = ctx.obj if isinstance(ctx.obj, GlobalOptions) else GlobalOptions()
    try:
        sources = resolve_runtime_sources(options.api_key, options.api_url, options.verbose)
        return run_client_call(client_type, sources, call)
    except Exception as exc:
        exit_with_command_error(command_name, exc)


def _parse_labels(labels: list[str] | None) -> dict[str, str] | None:
    """Parse repeated `key=value` label options into a mapping."""

    if not labels:
        return None
    parsed: dict[str, str] = {}
    for raw in labels:
        key, separator, value = raw.partition("=")
        key = key.strip()
        if not separator or not key:
            raise typer.BadParameter(f"Label `{raw}` must use `key=value` form.", param_hint="--label")
        parsed[key] = value.strip()
    return parsed


def _build_settings(
    stability: float | None,
    similarity_boost: float | None,
    style: float | None,
    speaker_boost: bool | None,
) -> VoiceSettings | None:
    """Build voice settings when both required values are present."""

    if stability is None and similarity_boost is None:
        if style is not None or speaker_boost is not None:
            raise typer.BadParameter(
                "`--style` / `--speaker-boost` require `--stability` and `--similarity-boost`."
            )
        return None
    if stability is None or similarity_boost is None:
        raise typer.BadParameter("`--stability` and `--similarity-boost` must be given together.")
    return VoiceSettings(
        stability=stability,
        similarity_boost=similarity_boost,
        style=style,
        use_speaker_boost=speaker_boost,
    )


@app.command("synthesize")
def synthesize_command(
    ctx: typer.Context,
    voice_id: Annotated[str, typer.Argument(help="Voice id to synthesize with.")],
    text: Annotated[str, typer.Argument(help="Text to synthesize.")],
    out: Annotated[Path, typer.Option("--out", help="Output MPEG file.")] = Path("speech.mp3"),
    model_id: Annotated[str | None, typer.Option("--model-id", help="Model id.")] = None,
    stability: Annotated[
        float | None, typer.Option("--stability", min=0.0, max=1.0, help="Stability 0..1.")
    ] = None,
    similarity_boost: Annotated[
        float | None,
        typer.Option("--similarity-boost", min=0.0, max=1.0, help="Similarity boost 0..1."),
    ] = None,
    style: Annotated[
        float | None, typer.Option("--style", min=0.0, max=1.0, help="Style 0..1.")
    ] = None,
    speaker_boost: Annotated[
        bool | None, typer.Option("--speaker-boost/--no-speaker-boost", help="Speaker boost.")
    ] = None,
) -> None:
    """Synthesize text to an MPEG audio file."""

    request = TtsRequest(
        text=text,
        model_id=normalize_optional_string(model_id),
        voice_settings=_build_settings(stability, similarity_boost, style, speaker_boost),
    )
    audio = _run(
        ctx,
        "synthesize",
        TextToSpeechClient,
        lambda client: client.synthesize(voice_id, request),
    )
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(audio)
    except OSError as exc:
        exit_with_command_error("synthesize", exc)
    typer.echo(f"Audio: {out} ({len(audio)} bytes)")


@app.command("voice-info")
def voice_info_command(
    ctx: typer.Context,
    voice_id: Annotated[str, typer.Argument(help="Voice id.")],
    with_settings: Annotated[
        bool, typer.Option("--with-settings/--without-settings", help="Include voice settings.")
    ] = False,
) -> None:
    """Show metadata for one voice."""

    metadata = _run(
        ctx,
        "voice-info",
        VoicesClient,
        lambda client: client.get_voice_metadata(voice_id, with_settings),
    )
    echo_voice_metadata(metadata)


@app.command("delete-voice")
def delete_voice_command(
    ctx: typer.Context,
    voice_id: Annotated[str, typer.Argument(help="Voice id.")],
) -> None:
    """Delete one voice."""

    _run(ctx, "delete-voice", VoicesClient, lambda client: client.delete_voice(voice_id))
    typer.echo(f"Deleted voice: {voice_id}")


@app.command("add-voice")
def add_voice_command(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Name of the new voice.")],
    files: Annotated[list[Path], typer.Argument(help="Audio sample files.")],
    description: Annotated[
        str | None, typer.Option("--description", help="Voice description.")
    ] = None,
    label: Annotated[
        list[str] | None, typer.Option("--label", help="Voice label as key=value (repeatable).")
    ] = None,
) -> None:
    """Add a cloned voice from audio samples."""

    labels = _parse_labels(label)
    response_body = _run(
        ctx,
        "add-voice",
        VoicesClient,
        lambda client: client.add_voice(name, files, description, labels),
    )
    typer.echo(f"Added voice: {response_body}")


@app.command("edit-voice")
def edit_voice_command(
    ctx: typer.Context,
    voice_id: Annotated[str, typer.Argument(help="Voice id.")],
    name: Annotated[str, typer.Argument(help="New voice name.")],
    files: Annotated[
        list[Path] | None, typer.Argument(help="Additional audio sample files.")
    ] = None,
    description: Annotated[
        str | None, typer.Option("--description", help="Voice description.")
    ] = None,
    label: Annotated[
        list[str] | None, typer.Option("--label", help="Voice label as key=value (repeatable).")
    ] = None,
) -> None:
    """Rename a voice and optionally add samples, description, or labels."""

    labels = _parse_labels(label)
    _run(
        ctx,
        "edit-voice",
        VoicesClient,
        lambda client: client.edit_voice(voice_id, name, files or [], description, labels),
    )
    typer.echo(f"Edited voice: {voice_id}")


@app.command("edit-voice-settings")
def edit_voice_settings_command(
    ctx: typer.Context,
    voice_id: Annotated[str, typer.Argument(help="Voice id.")],
    stability: Annotated[
        float, typer.Option("--stability", min=0.0, max=1.0, help="Stability 0..1.")
    ],
    similarity_boost: Annotated[
        float,
        typer.Option("--similarity-boost", min=0.0, max=1.0, help="Similarity boost 0..1."),
    ],
    style: Annotated[
        float | None, typer.Option("--style", min=0.0, max=1.0, help="Style 0..1.")
    ] = None,
    speaker_boost: Annotated[
        bool | None, typer.Option("--speaker-boost/--no-speaker-boost", help="Speaker boost.")
    ] = None,
) -> None:
    """Replace the default settings of a voice."""

    settings = VoiceSettings(
        stability=stability,
        similarity_boost=similarity_boost,
        style=style,
        use_speaker_boost=speaker_boost,
    )
    _run(
        ctx,
        "edit-voice-settings",
        VoicesClient,
        lambda client: client.edit_voice_settings(voice_id, settings),
    )
    typer.echo(f"Updated settings for voice: {voice_id}")


@app.command("user-info")
def user_info_command(ctx: typer.Context) -> None:
    """Show the profile of the user owning the API key."""

    user = _run(ctx, "user-info", UserClient, lambda client: client.get_user_info())
    echo_user_info(user)


@app.command("subscription")
def subscription_command(ctx: typer.Context) -> None:
    """Show subscription tier and character usage."""

    subscription = _run(
        ctx,
        "subscription",
        UserClient,
        lambda client: client.get_user_subscription_info(),
    )
    echo_subscription(subscription)


@app.command("credentials")
def credentials_command(
    set_api_key: Annotated[
        bool,
        typer.Option("--set-api-key", help="Prompt for an API key and store it in the keyring."),
    ] = False,
    clear_api_key: Annotated[
        bool,
        typer.Option("--clear-api-key", help="Delete the keyring-stored API key."),
    ] = False,
) -> None:
    """Show, store, or clear the keyring-stored API key."""

    if set_api_key and clear_api_key:
        exit_with_command_error(
            "credentials",
            ValueError("`--set-api-key` and `--clear-api-key` cannot be used together."),
        )

    credential_store = create_credential_store()
    if set_api_key:
        prompted_api_key = normalize_optional_string(
            typer.prompt(
                "ElevenLabs API key (hidden input)",
                default="",
                hide_input=True,
                show_default=False,
            )
        )
        if prompted_api_key is None:
            exit_with_command_error("credentials", ValueError("No API key entered."))
        try:
            credential_store.set_api_key(prompted_api_key)
        except Exception as exc:
            exit_with_command_error("credentials", exc)
        typer.echo("API key stored in secure credential storage.")
        return

    if clear_api_key:
        if credential_store.clear_api_key():
            typer.echo("Stored API key cleared from secure credential storage.")
        else:
            typer.echo("No stored API key found in secure credential storage.")
        return

    availability = "available" if credential_store.is_available() else "unavailable"
    status = "present" if credential_store.get_api_key() is not None else "not set"
    typer.echo(f"Secure credential storage: {availability}")
    typer.echo(f"Stored ElevenLabs API key: {status}")


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
