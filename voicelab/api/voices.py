"""Voice profile endpoints client.

Responsibilities:
- Fetch voice metadata, optionally with the voice's settings.
- Delete voices and update voice settings.
- Add and edit voices through multipart uploads of local sample files.
"""

from __future__ import annotations

from contextlib import ExitStack
import json
from pathlib import Path
from typing import Iterable, Mapping

from .base import BaseClient, path_segment
from ..models.datatypes import VoiceMetadata, VoiceSettings
from ..parsing import query_boolean


def _encode_labels(labels: str | Mapping[str, str] | None) -> str | None:
    """Return labels as the serialized JSON object string the API expects."""

    if labels is None or isinstance(labels, str):
        return labels
    return json.dumps(dict(labels), separators=(",", ":"), ensure_ascii=False)


class VoicesClient(BaseClient):
    """Client for the `/v1/voices` resource group."""

    async def get_voice_metadata(self, voice_id: str, with_settings: bool = False) -> VoiceMetadata:
        """Return metadata for one voice.

        Args:
            voice_id: Voice identifier.
            with_settings: Include the voice's `settings` object in the response.
        """

        request = self._request(
            "GET",
            f"/v1/voices/{path_segment(voice_id)}",
            params={"with_settings": query_boolean(with_settings)},
        )
        response = await self._send(request, operation="get_voice_metadata")
        return self._decode_json(response, VoiceMetadata, operation="get_voice_metadata")

    async def delete_voice(self, voice_id: str) -> None:
        """Delete a voice; any 2xx status counts as success."""

        request = self._request("DELETE", f"/v1/voices/{path_segment(voice_id)}")
        await self._send(request, operation="delete_voice")

    async def add_voice(
        self,
        name: str,
        files: Iterable[str | Path],
        description: str | None = None,
        labels: str | Mapping[str, str] | None = None,
    ) -> str:
        """Add a cloned voice from one or more audio samples.

        Args:
            name: Display name of the new voice.
            files: Paths of audio samples, each sent as one `files` form part.
            description: Optional voice description.
            labels: Labels as a serialized JSON object string, or a mapping to serialize.

        Returns:
            The response body as-is (the API answers with the new voice id).

        Raises:
            FileAccessError: If a sample file cannot be read; nothing is sent.
        """

        with ExitStack() as stack:
            request = self._multipart_request(
                "/v1/voices/add",
                fields={
                    "name": name,
                    "description": description,
                    "labels": _encode_labels(labels),
                },
                files=files,
                stack=stack,
            )
            prepared = self._prepare(request, operation="add_voice")
        response = await self._send_prepared(prepared, operation="add_voice")
        return response.text

    async def edit_voice(
        self,
        voice_id: str,
        name: str,
        files: Iterable[str | Path] = (),
        description: str | None = None,
        labels: str | Mapping[str, str] | None = None,
    ) -> None:
        """Rename a voice and optionally attach more samples, description, or labels."""

        with ExitStack() as stack:
            request = self._multipart_request(
                f"/v1/voices/{path_segment(voice_id)}/edit",
                fields={
                    "name": name,
                    "description": description,
                    "labels": _encode_labels(labels),
                },
                files=files,
                stack=stack,
            )
            prepared = self._prepare(request, operation="edit_voice")
        await self._send_prepared(prepared, operation="edit_voice")

    async def edit_voice_settings(self, voice_id: str, settings: VoiceSettings) -> None:
        """Replace the default settings of a voice."""

        request = self._json_request(
            "POST", f"/v1/voices/{path_segment(voice_id)}/settings/edit", settings
        )
        await self._send(request, operation="edit_voice_settings")
