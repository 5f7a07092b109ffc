"""Text-to-speech endpoint client."""

from __future__ import annotations

from .base import BaseClient, path_segment
from ..models.datatypes import TtsRequest


class TextToSpeechClient(BaseClient):
    """Client for `POST /v1/text-to-speech/{voice_id}`."""

    async def synthesize(self, voice_id: str, request: TtsRequest) -> bytes:
        """Synthesize `request.text` with the given voice and return MPEG audio bytes.

        Raises:
            ApiError: If the API rejects the request (e.g. HTTP 401 for a bad key).
            TransportError: If the request could not complete.
        """

        http_request = self._json_request(
            "POST",
            f"/v1/text-to-speech/{path_segment(voice_id)}",
            request,
            headers={"Accept": "audio/mpeg"},
        )
        response = await self._send(http_request, operation="synthesize")
        return bytes(response.content)
