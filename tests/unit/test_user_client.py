"""Unit tests for the user and subscription client."""

from __future__ import annotations

import asyncio
import io
import json
from typing import Any

import pytest

from tests.session_fakes import SessionFactory
from voicelab.api.user import UserClient
from voicelab.config import Config
from voicelab.errors import ApiError, ResponseDecodeError
from voicelab.telemetry.logger import ClientLogger


def test_get_user_info_decodes_profile(
    config: Config, fake_session: SessionFactory, user_payload: dict[str, Any]
) -> None:
    """User info should GET `/v1/user` and decode the nested record."""

    session = fake_session((200, json.dumps(user_payload).encode("utf-8")))
    client = UserClient(config, session=session)

    user = asyncio.run(client.get_user_info())

    prepared = session.sent[0]
    assert prepared.method == "GET"
    assert prepared.url == "https://api.test.local/v1/user"
    assert prepared.headers["xi-api-key"] == config.api_key
    assert user.is_onboarding_completed is True
    assert user.subscription.character_limit == 100000


def test_get_user_subscription_info_decodes_subscription(
    config: Config, fake_session: SessionFactory, subscription_payload: dict[str, Any]
) -> None:
    """Subscription info should GET `/v1/user/subscription`."""

    session = fake_session((200, json.dumps(subscription_payload).encode("utf-8")))
    client = UserClient(config, session=session)

    subscription = asyncio.run(client.get_user_subscription_info())

    assert session.sent[0].url == "https://api.test.local/v1/user/subscription"
    assert subscription.tier == "creator"
    assert subscription.next_invoice is not None
    assert subscription.next_invoice.next_payment_attempt_unix == 1767225600


def test_user_request_failure_is_logged_and_raised(
    config: Config, fake_session: SessionFactory
) -> None:
    """A non-2xx status should be logged with its status code before raising."""

    sink = io.StringIO()
    logger = ClientLogger(sink=sink)
    client = UserClient(config, logger=logger, session=fake_session((401, b"")))

    with pytest.raises(ApiError, match=r"get_user_info failed \(HTTP 401\)\.") as exc_info:
        asyncio.run(client.get_user_info())
    logger.close()

    assert exc_info.value.status_code == 401
    assert exc_info.value.body == ""
    lines = sink.getvalue().splitlines()
    assert "[voicelab] level=ERROR event=user_request_failed path=/v1/user status=401" in lines
    assert config.api_key not in sink.getvalue()


def test_user_info_missing_fields_raise_decode_error(
    config: Config, fake_session: SessionFactory
) -> None:
    """Incomplete user payloads should raise `ResponseDecodeError`."""

    client = UserClient(config, session=fake_session((200, b'{"is_new_user": true}')))

    with pytest.raises(ResponseDecodeError, match="missing required field `subscription`"):
        asyncio.run(client.get_user_info())
