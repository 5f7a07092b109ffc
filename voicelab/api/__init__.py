"""Clients for the ElevenLabs REST API resource groups.

Each client wraps one resource group and shares the request building and error
mapping defined in `voicelab.api.base`.
"""

from .base import BaseClient, create_request
from .tts import TextToSpeechClient
from .user import UserClient
from .voices import VoicesClient

__all__ = [
    "BaseClient",
    "TextToSpeechClient",
    "UserClient",
    "VoicesClient",
    "create_request",
]
