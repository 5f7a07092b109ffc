"""Typed request and response records for the ElevenLabs REST API."""

from .datatypes import (
    NextInvoiceDetails,
    PronunciationDictionaryLocator,
    SubscriptionInfo,
    TtsRequest,
    UserInfo,
    VoiceMetadata,
    VoiceSettings,
)

__all__ = [
    "NextInvoiceDetails",
    "PronunciationDictionaryLocator",
    "SubscriptionInfo",
    "TtsRequest",
    "UserInfo",
    "VoiceMetadata",
    "VoiceSettings",
]
