"""Shared pytest fixtures for the voicelab test suite."""

from __future__ import annotations

from typing import Any

import pytest

from tests.session_fakes import FakeSession, MockResponse, SessionFactory
from voicelab.config import Config


@pytest.fixture
def config() -> Config:
    """Provide a deterministic API config used across client tests."""

    return Config(api_url="https://api.test.local/", api_key="sk_testkey123456")


@pytest.fixture
def fake_session() -> SessionFactory:
    """Build fake sessions from `(status, payload)` tuples or exceptions."""

    def _factory(*outcomes: tuple[int, bytes] | Exception) -> FakeSession:
        """Create one fake session replaying the given outcomes in order."""

        responses: list[MockResponse | Exception] = []
        for outcome in outcomes:
            if isinstance(outcome, Exception):
                responses.append(outcome)
            else:
                status_code, payload = outcome
                responses.append(MockResponse(status_code=status_code, payload=payload))
        return FakeSession(responses)

    return _factory


@pytest.fixture
def subscription_payload() -> dict[str, Any]:
    """Provide a complete `/v1/user/subscription` JSON payload."""

    return {
        "tier": "creator",
        "character_count": 1200,
        "character_limit": 100000,
        "can_extend_character_limit": True,
        "allowed_to_extend_character_limit": True,
        "next_character_count_reset_unix": 1767225600,
        "voice_limit": 30,
        "max_voice_add_edits": 95,
        "voice_add_edit_counter": 4,
        "professional_voice_limit": 1,
        "can_extend_voice_limit": False,
        "can_use_instant_voice_cloning": True,
        "can_use_professional_voice_cloning": True,
        "currency": "usd",
        "status": "active",
        "billing_period": "monthly_period",
        "next_invoice": {
            "amount_due_cents": 2200,
            "next_payment_attempt_unix": 1767225600,
        },
        "has_open_invoices": False,
    }


@pytest.fixture
def user_payload(subscription_payload: dict[str, Any]) -> dict[str, Any]:
    """Provide a complete `/v1/user` JSON payload."""

    return {
        "subscription": subscription_payload,
        "is_new_user": False,
        "xi_api_key": "sk_testkey123456",
        "can_use_delayed_payment_methods": False,
        "is_onboarding_completed": True,
        "first_name": "Ada",
    }
