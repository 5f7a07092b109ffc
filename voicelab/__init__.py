"""Top-level package for voicelab.

Typed asynchronous bindings for the ElevenLabs REST API: text-to-speech
synthesis (`TextToSpeechClient`), voice profile management (`VoicesClient`),
and user/subscription data (`UserClient`). Every client is constructed from a
`Config` and an optional `ClientLogger` handle.
"""

from .api import TextToSpeechClient, UserClient, VoicesClient, create_request
from .config import Config, load_api_key, load_api_url
from .errors import (
    ApiError,
    FileAccessError,
    MissingEnvironmentVariableError,
    ResponseDecodeError,
    TransportError,
    VoiceLabError,
)
from .models import (
    NextInvoiceDetails,
    PronunciationDictionaryLocator,
    SubscriptionInfo,
    TtsRequest,
    UserInfo,
    VoiceMetadata,
    VoiceSettings,
)
from .serialization import deserialize, serialize
from .telemetry import ClientLogger, setup_logging

__all__ = [
    "ApiError",
    "ClientLogger",
    "Config",
    "FileAccessError",
    "MissingEnvironmentVariableError",
    "NextInvoiceDetails",
    "PronunciationDictionaryLocator",
    "ResponseDecodeError",
    "SubscriptionInfo",
    "TextToSpeechClient",
    "TransportError",
    "TtsRequest",
    "UserClient",
    "UserInfo",
    "VoiceLabError",
    "VoiceMetadata",
    "VoiceSettings",
    "VoicesClient",
    "__version__",
    "create_request",
    "deserialize",
    "load_api_key",
    "load_api_url",
    "serialize",
    "setup_logging",
]

__version__ = "0.1.0"
