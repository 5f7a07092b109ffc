"""Request and response records for the ElevenLabs REST API.

Responsibilities:
- Mirror the JSON schema of request bodies and response payloads as dataclasses.
- Convert records to JSON-ready mappings and validate decoded payloads.

Key types:
- `VoiceSettings`, `PronunciationDictionaryLocator`, `TtsRequest`,
  `VoiceMetadata`, `NextInvoiceDetails`, `SubscriptionInfo`, and `UserInfo`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..parsing import optional_field, require_field


MAX_PRONUNCIATION_DICTIONARY_LOCATORS = 3


def _drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    """Remove `None` values so optional fields are omitted from request bodies."""

    return {key: value for key, value in payload.items() if value is not None}


def _require_mapping(payload: object, owner: str) -> Mapping[str, Any]:
    """Validate that a decoded JSON value is an object."""

    if not isinstance(payload, Mapping):
        raise ValueError(f"`{owner}` payload must be a JSON object.")
    return payload


@dataclass(frozen=True, slots=True)
class VoiceSettings:
    """Tunable synthesis parameters for one voice.

    Attributes:
        stability: Voice stability in range `0.0..1.0`.
        similarity_boost: Similarity enhancement in range `0.0..1.0`.
        style: Optional style exaggeration in range `0.0..1.0`.
        use_speaker_boost: Optional speaker boost toggle.
    """

    stability: float
    similarity_boost: float
    style: float | None = None
    use_speaker_boost: bool | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "stability", float(self.stability))
        object.__setattr__(self, "similarity_boost", float(self.similarity_boost))
        if self.style is not None:
            object.__setattr__(self, "style", float(self.style))

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "stability": self.stability,
                "similarity_boost": self.similarity_boost,
                "style": self.style,
                "use_speaker_boost": self.use_speaker_boost,
            }
        )

    @classmethod
    def from_dict(cls, payload: object) -> VoiceSettings:
        data = _require_mapping(payload, "VoiceSettings")
        return cls(
            stability=require_field(data, "stability", float, "VoiceSettings"),
            similarity_boost=require_field(data, "similarity_boost", float, "VoiceSettings"),
            style=optional_field(data, "style", float, "VoiceSettings"),
            use_speaker_boost=optional_field(data, "use_speaker_boost", bool, "VoiceSettings"),
        )


@dataclass(frozen=True, slots=True)
class PronunciationDictionaryLocator:
    """Reference to one versioned pronunciation dictionary."""

    pronunciation_dictionary_id: str
    version_id: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "pronunciation_dictionary_id": self.pronunciation_dictionary_id,
            "version_id": self.version_id,
        }

    @classmethod
    def from_dict(cls, payload: object) -> PronunciationDictionaryLocator:
        owner = "PronunciationDictionaryLocator"
        data = _require_mapping(payload, owner)
        return cls(
            pronunciation_dictionary_id=require_field(
                data, "pronunciation_dictionary_id", str, owner
            ),
            version_id=require_field(data, "version_id", str, owner),
        )


@dataclass(frozen=True, slots=True)
class TtsRequest:
    """Request payload for one text-to-speech synthesis call.

    Attributes:
        text: Text to synthesize.
        model_id: Optional model identifier, e.g. `eleven_multilingual_v2`.
        voice_settings: Optional per-request voice settings override.
        pronunciation_dictionary_locators: Optional dictionaries applied in order
            (at most three).
    """

    text: str
    model_id: str | None = None
    voice_settings: VoiceSettings | None = None
    pronunciation_dictionary_locators: tuple[PronunciationDictionaryLocator, ...] | None = None

    def __post_init__(self) -> None:
        locators = self.pronunciation_dictionary_locators
        if locators is None:
            return
        locators = tuple(locators)
        if len(locators) > MAX_PRONUNCIATION_DICTIONARY_LOCATORS:
            raise ValueError(
                "At most "
                f"{MAX_PRONUNCIATION_DICTIONARY_LOCATORS} pronunciation dictionary "
                f"locators are allowed per request, got {len(locators)}."
            )
        object.__setattr__(self, "pronunciation_dictionary_locators", locators)

    def to_dict(self) -> dict[str, Any]:
        locators = self.pronunciation_dictionary_locators
        return _drop_none(
            {
                "text": self.text,
                "model_id": self.model_id,
                "voice_settings": (
                    self.voice_settings.to_dict() if self.voice_settings is not None else None
                ),
                "pronunciation_dictionary_locators": (
                    [locator.to_dict() for locator in locators] if locators is not None else None
                ),
            }
        )

    @classmethod
    def from_dict(cls, payload: object) -> TtsRequest:
        data = _require_mapping(payload, "TtsRequest")
        settings_payload = data.get("voice_settings")
        locators_payload = optional_field(
            data, "pronunciation_dictionary_locators", list, "TtsRequest"
        )
        return cls(
            text=require_field(data, "text", str, "TtsRequest"),
            model_id=optional_field(data, "model_id", str, "TtsRequest"),
            voice_settings=(
                VoiceSettings.from_dict(settings_payload)
                if settings_payload is not None
                else None
            ),
            pronunciation_dictionary_locators=(
                tuple(PronunciationDictionaryLocator.from_dict(item) for item in locators_payload)
                if locators_payload is not None
                else None
            ),
        )


@dataclass(frozen=True, slots=True)
class VoiceMetadata:
    """Voice profile as returned by `GET /v1/voices/{voice_id}`.

    Response keys without a dedicated attribute are kept in `extra`.
    """

    voice_id: str
    name: str | None = None
    category: str | None = None
    description: str | None = None
    labels: dict[str, str] = field(default_factory=dict)
    preview_url: str | None = None
    settings: VoiceSettings | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    _KNOWN_KEYS = frozenset(
        {"voice_id", "name", "category", "description", "labels", "preview_url", "settings"}
    )

    def to_dict(self) -> dict[str, Any]:
        payload = dict(self.extra)
        payload.update(
            _drop_none(
                {
                    "voice_id": self.voice_id,
                    "name": self.name,
                    "category": self.category,
                    "description": self.description,
                    "labels": dict(self.labels) if self.labels else None,
                    "preview_url": self.preview_url,
                    "settings": self.settings.to_dict() if self.settings is not None else None,
                }
            )
        )
        return payload

    @classmethod
    def from_dict(cls, payload: object) -> VoiceMetadata:
        data = _require_mapping(payload, "VoiceMetadata")
        labels = optional_field(data, "labels", dict, "VoiceMetadata") or {}
        settings_payload = data.get("settings")
        return cls(
            voice_id=require_field(data, "voice_id", str, "VoiceMetadata"),
            name=optional_field(data, "name", str, "VoiceMetadata"),
            category=optional_field(data, "category", str, "VoiceMetadata"),
            description=optional_field(data, "description", str, "VoiceMetadata"),
            labels={str(key): str(value) for key, value in labels.items()},
            preview_url=optional_field(data, "preview_url", str, "VoiceMetadata"),
            settings=(
                VoiceSettings.from_dict(settings_payload) if settings_payload is not None else None
            ),
            extra={key: value for key, value in data.items() if key not in cls._KNOWN_KEYS},
        )


@dataclass(frozen=True, slots=True)
class NextInvoiceDetails:
    """Amount and timing of the next subscription invoice."""

    amount_due_cents: int
    next_payment_attempt_unix: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount_due_cents": self.amount_due_cents,
            "next_payment_attempt_unix": self.next_payment_attempt_unix,
        }

    @classmethod
    def from_dict(cls, payload: object) -> NextInvoiceDetails:
        data = _require_mapping(payload, "NextInvoiceDetails")
        return cls(
            amount_due_cents=require_field(data, "amount_due_cents", int, "NextInvoiceDetails"),
            next_payment_attempt_unix=require_field(
                data, "next_payment_attempt_unix", int, "NextInvoiceDetails"
            ),
        )


_SUBSCRIPTION_FIELDS: tuple[tuple[str, type], ...] = (
    ("tier", str),
    ("character_count", int),
    ("character_limit", int),
    ("can_extend_character_limit", bool),
    ("allowed_to_extend_character_limit", bool),
    ("next_character_count_reset_unix", int),
    ("voice_limit", int),
    ("max_voice_add_edits", int),
    ("voice_add_edit_counter", int),
    ("professional_voice_limit", int),
    ("can_extend_voice_limit", bool),
    ("can_use_instant_voice_cloning", bool),
    ("can_use_professional_voice_cloning", bool),
    ("currency", str),
    ("status", str),
    ("billing_period", str),
    ("has_open_invoices", bool),
)


@dataclass(frozen=True, slots=True)
class SubscriptionInfo:
    """Subscription tier, usage counters, and permissions of the current user."""

    tier: str
    character_count: int
    character_limit: int
    can_extend_character_limit: bool
    allowed_to_extend_character_limit: bool
    next_character_count_reset_unix: int
    voice_limit: int
    max_voice_add_edits: int
    voice_add_edit_counter: int
    professional_voice_limit: int
    can_extend_voice_limit: bool
    can_use_instant_voice_cloning: bool
    can_use_professional_voice_cloning: bool
    currency: str
    status: str
    billing_period: str
    has_open_invoices: bool
    next_invoice: NextInvoiceDetails | None = None

    @property
    def remaining_characters(self) -> int:
        """Characters left in the current billing period, never negative."""

        return max(self.character_limit - self.character_count, 0)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {name: getattr(self, name) for name, _ in _SUBSCRIPTION_FIELDS}
        if self.next_invoice is not None:
            payload["next_invoice"] = self.next_invoice.to_dict()
        return payload

    @classmethod
    def from_dict(cls, payload: object) -> SubscriptionInfo:
        data = _require_mapping(payload, "SubscriptionInfo")
        values = {
            name: require_field(data, name, kind, "SubscriptionInfo")
            for name, kind in _SUBSCRIPTION_FIELDS
        }
        invoice_payload = data.get("next_invoice")
        return cls(
            **values,
            next_invoice=(
                NextInvoiceDetails.from_dict(invoice_payload)
                if invoice_payload is not None
                else None
            ),
        )


@dataclass(frozen=True, slots=True)
class UserInfo:
    """Profile of the user owning the API key.

    The echoed `xi_api_key` is excluded from `repr` to keep it out of logs.
    """

    subscription: SubscriptionInfo
    is_new_user: bool
    xi_api_key: str = field(repr=False)
    can_use_delayed_payment_methods: bool
    is_onboarding_completed: bool
    first_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "subscription": self.subscription.to_dict(),
                "is_new_user": self.is_new_user,
                "xi_api_key": self.xi_api_key,
                "can_use_delayed_payment_methods": self.can_use_delayed_payment_methods,
                "is_onboarding_completed": self.is_onboarding_completed,
                "first_name": self.first_name,
            }
        )

    @classmethod
    def from_dict(cls, payload: object) -> UserInfo:
        data = _require_mapping(payload, "UserInfo")
        return cls(
            subscription=SubscriptionInfo.from_dict(
                require_field(data, "subscription", dict, "UserInfo")
            ),
            is_new_user=require_field(data, "is_new_user", bool, "UserInfo"),
            xi_api_key=require_field(data, "xi_api_key", str, "UserInfo"),
            can_use_delayed_payment_methods=require_field(
                data, "can_use_delayed_payment_methods", bool, "UserInfo"
            ),
            is_onboarding_completed=require_field(
                data, "is_onboarding_completed", bool, "UserInfo"
            ),
            first_name=optional_field(data, "first_name", str, "UserInfo"),
        )
