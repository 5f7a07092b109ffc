"""Unit tests for the text-to-speech client."""

from __future__ import annotations

import asyncio
import json

import pytest
import requests

from tests.session_fakes import SessionFactory
from voicelab.api.tts import TextToSpeechClient
from voicelab.config import Config
from voicelab.errors import ApiError, TransportError
from voicelab.models.datatypes import TtsRequest, VoiceSettings


def test_synthesize_returns_raw_audio_bytes(config: Config, fake_session: SessionFactory) -> None:
    """A 200 response body should be returned byte-for-byte."""

    session = fake_session((200, b"\x00\x01"))
    client = TextToSpeechClient(config, session=session)

    audio = asyncio.run(client.synthesize("voice-1", TtsRequest(text="Hello, world!")))

    assert audio == b"\x00\x01"
    assert list(audio) == [0, 1]


def test_synthesize_sends_audio_headers_and_json_body(
    config: Config, fake_session: SessionFactory
) -> None:
    """Synthesis should POST JSON to the voice path and request MPEG audio."""

    session = fake_session((200, b"ID3"))
    client = TextToSpeechClient(config, session=session, timeout_seconds=12.5)
    request = TtsRequest(
        text="Hello",
        model_id="eleven_multilingual_v2",
        voice_settings=VoiceSettings(stability=0.4, similarity_boost=0.9),
    )

    asyncio.run(client.synthesize("voice-1", request))

    prepared = session.sent[0]
    assert prepared.method == "POST"
    assert prepared.url == "https://api.test.local/v1/text-to-speech/voice-1"
    assert prepared.headers["Accept"] == "audio/mpeg"
    assert prepared.headers["Content-Type"] == "application/json"
    assert prepared.headers["xi-api-key"] == config.api_key
    assert json.loads(prepared.body) == {
        "text": "Hello",
        "model_id": "eleven_multilingual_v2",
        "voice_settings": {"stability": 0.4, "similarity_boost": 0.9},
    }
    assert session.send_kwargs[0] == {"timeout": 12.5}


def test_synthesize_maps_401_to_api_error(config: Config, fake_session: SessionFactory) -> None:
    """A 401 should raise a structured API error mentioning the status."""

    body = b'{"detail":{"status":"invalid_api_key","message":"Invalid API key"}}'
    client = TextToSpeechClient(config, session=fake_session((401, body)))

    with pytest.raises(ApiError, match="401") as exc_info:
        asyncio.run(client.synthesize("voice-1", TtsRequest(text="Hi")))

    error = exc_info.value
    assert error.status_code == 401
    assert error.body == body.decode("utf-8")
    assert error.failure_kind == "invalid_api_key"
    assert error.provider_status == "invalid_api_key"
    assert error.provider_message == "Invalid API key"
    assert error.operation == "synthesize"
    assert error.is_client_error is True
    assert error.is_server_error is False


def test_synthesize_maps_connection_failure_to_transport_error(
    config: Config, fake_session: SessionFactory
) -> None:
    """Transport exceptions should surface as `TransportError` with the original cause."""

    cause = requests.ConnectionError("network down")
    client = TextToSpeechClient(config, session=fake_session(cause))

    with pytest.raises(TransportError, match="transport error: network down") as exc_info:
        asyncio.run(client.synthesize("voice-1", TtsRequest(text="Hi")))

    assert exc_info.value.cause is cause
    assert exc_info.value.failure_kind == "transport"


def test_synthesize_sends_exactly_one_request_per_call(
    config: Config, fake_session: SessionFactory
) -> None:
    """A failed call should not be retried."""

    session = fake_session((503, b"upstream unavailable"), (200, b"unused"))
    client = TextToSpeechClient(config, session=session)

    with pytest.raises(ApiError) as exc_info:
        asyncio.run(client.synthesize("voice-1", TtsRequest(text="Hi")))

    assert exc_info.value.failure_kind == "server_error"
    assert len(session.sent) == 1
