"""Shared request building, sending, and error mapping for API clients.

Responsibilities:
- Build `requests` requests with default JSON headers and the `xi-api-key` header.
- Send one request per call on a worker thread so client methods are awaitable.
- Map transport failures and non-2xx statuses to typed `voicelab.errors` exceptions.
"""

from __future__ import annotations

import asyncio
from contextlib import ExitStack
import json
import mimetypes
from pathlib import Path
import re
from typing import Any, Iterable, Mapping
from urllib.parse import quote

import requests

from ..config import Config
from ..errors import (
    ApiError,
    FileAccessError,
    ResponseDecodeError,
    TransportError,
)
from ..serialization import deserialize, serialize
from ..telemetry.logger import ClientLogger


API_KEY_HEADER = "xi-api-key"
JSON_CONTENT_TYPE = "application/json"

_DEFAULT_JSON_HEADERS = {
    "Accept": JSON_CONTENT_TYPE,
    "Content-Type": JSON_CONTENT_TYPE,
}


def create_request(
    method: str,
    url: str,
    *,
    headers: Mapping[str, str] | None = None,
    **kwargs: Any,
) -> requests.Request:
    """Create a request carrying default JSON `Accept`/`Content-Type` headers.

    Explicit `headers` override the defaults. Remaining keyword arguments are
    passed to `requests.Request` (`params`, `data`, `files`, ...).
    """

    merged_headers = dict(_DEFAULT_JSON_HEADERS)
    if headers:
        merged_headers.update(headers)
    return requests.Request(method=method.upper(), url=url, headers=merged_headers, **kwargs)


def path_segment(value: str) -> str:
    """Percent-encode an identifier for use as a single URL path segment."""

    return quote(value, safe="")


class BaseClient:
    """Connection settings and send/error-mapping helpers shared by API clients."""

    _MAX_PROVIDER_MESSAGE_CHARS = 180

    def __init__(
        self,
        config: Config,
        *,
        logger: ClientLogger | None = None,
        session: requests.Session | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize a client bound to one config, logger handle, and HTTP session.

        Args:
            config: API endpoint and key.
            logger: Logging handle; a silent handle is used when omitted.
            session: Connection-pooling session; one is created (and owned) when omitted.
            timeout_seconds: Optional per-request timeout passed to `requests`.
        """

        self.config = config
        self.logger = logger if logger is not None else ClientLogger()
        self.timeout_seconds = timeout_seconds
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    def close(self) -> None:
        """Close the HTTP session when this client created it."""

        if self._owns_session:
            self._session.close()

    async def __aenter__(self) -> BaseClient:
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> requests.Request:
        """Build a request for an API path with the `xi-api-key` header attached."""

        request_headers = dict(headers or {})
        request_headers[API_KEY_HEADER] = self.config.api_key
        return create_request(
            method,
            self.config.endpoint(path),
            headers=request_headers,
            **kwargs,
        )

    def _json_request(self, method: str, path: str, body: Any, **kwargs: Any) -> requests.Request:
        """Build a request whose body is the serialized JSON form of `body`."""

        return self._request(method, path, data=serialize(body).encode("utf-8"), **kwargs)

    def _multipart_request(
        self,
        path: str,
        *,
        fields: Mapping[str, str | None],
        files: Iterable[str | Path],
        stack: ExitStack,
    ) -> requests.Request:
        """Build a multipart POST; opened files are registered on `stack` for closing.

        `requests` derives the multipart `Content-Type` boundary itself, so the
        default JSON content type is dropped.

        Raises:
            FileAccessError: If any file cannot be opened for reading.
        """

        # (None, value) parts become plain form fields, so the body is multipart even
        # when no files are attached
        parts: list[tuple[str, tuple[Any, ...]]] = [
            (key, (None, value)) for key, value in fields.items() if value is not None
        ]
        for file_path in files:
            resolved = Path(file_path)
            try:
                handle = stack.enter_context(resolved.open("rb"))
            except OSError as exc:
                self.logger.log_warning("file_access_failed", path=resolved.name)
                raise FileAccessError(
                    f"Cannot read upload file `{resolved}`: {exc.strerror or exc}",
                    path=resolved,
                ) from exc
            mime_type = mimetypes.guess_type(resolved.name)[0] or "application/octet-stream"
            parts.append(("files", (resolved.name, handle, mime_type)))

        request = self._request("POST", path, files=parts)
        request.headers.pop("Content-Type", None)
        return request

    async def _send(self, request: requests.Request, *, operation: str) -> requests.Response:
        """Prepare and send one request, returning the response only for 2xx statuses.

        Raises:
            TransportError: If the request could not be built or could not complete.
            ApiError: If the API answered with a non-2xx status.
        """

        prepared = self._prepare(request, operation=operation)
        return await self._send_prepared(prepared, operation=operation)

    def _prepare(self, request: requests.Request, *, operation: str) -> requests.PreparedRequest:
        """Prepare a request; a malformed URL or header value raises `TransportError`."""

        try:
            return request.prepare()
        except requests.RequestException as exc:
            raise self._transport_error(exc, operation=operation) from exc

    def _transport_error(
        self, exc: requests.RequestException, *, operation: str
    ) -> TransportError:
        """Log a transport failure and return the typed error to raise."""

        if isinstance(exc, requests.Timeout):
            self.logger.log_error("transport_failure", operation=operation, kind="timeout")
            return TransportError(f"{operation} failed: request timed out.", failure_kind="timeout")
        self.logger.log_error("transport_failure", operation=operation, kind="transport")
        return TransportError(
            f"{operation} failed: transport error: "
            f"{self._short_message(self._redact(str(exc)))}",
        )

    async def _send_prepared(
        self, prepared: requests.PreparedRequest, *, operation: str
    ) -> requests.Response:
        try:
            response = await asyncio.to_thread(
                self._session.send,
                prepared,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise self._transport_error(exc, operation=operation) from exc

        status_code = int(response.status_code)
        if not 200 <= status_code < 300:
            error = self._api_error(response, operation=operation)
            self.logger.log_error(
                "api_error",
                operation=operation,
                status=status_code,
                kind=error.failure_kind,
            )
            raise error

        self.logger.log_info(
            "request_complete",
            operation=operation,
            method=prepared.method,
            status=status_code,
        )
        return response

    def _decode_json(self, response: requests.Response, model: type[Any], *, operation: str) -> Any:
        """Decode a buffered JSON response body into `model`."""

        try:
            return deserialize(bytes(response.content), model)
        except ValueError as exc:
            raise ResponseDecodeError(
                f"{operation} returned an unexpected payload: {self._short_message(str(exc))}"
            ) from exc

    def _redact(self, text: str) -> str:
        """Redact the configured API key and key-like tokens from diagnostic text."""

        redacted = text
        # header validation errors quote the key in its escaped `repr` form
        for secret in (self.config.api_key, repr(self.config.api_key)[1:-1]):
            redacted = redacted.replace(secret, "[redacted-key]")
        return re.sub(r"\bsk_[A-Za-z0-9]{8,}\b", "[redacted-key]", redacted)

    @classmethod
    def _short_message(cls, text: str) -> str:
        """Normalize and cap user-facing provider message length."""

        compact = " ".join(text.split())
        if len(compact) <= cls._MAX_PROVIDER_MESSAGE_CHARS:
            return compact
        return f"{compact[: cls._MAX_PROVIDER_MESSAGE_CHARS - 1]}..."

    @staticmethod
    def _decode_body(response: requests.Response) -> str:
        """Decode a response body into a best-effort UTF-8 string."""

        content = response.content
        if not content:
            return ""
        return bytes(content).decode("utf-8", errors="replace").strip()

    @staticmethod
    def _extract_provider_detail(body: str) -> tuple[str | None, str | None]:
        """Extract `(status, message)` from an API error body.

        Handles `{"detail": {"status": ..., "message": ...}}`, `{"detail": "..."}`,
        and validation lists `{"detail": [{"loc": [...], "msg": ...}]}`.
        """

        if not body:
            return None, None
        try:
            payload = json.loads(body)
        except json.JSONDecodeError:
            return None, body

        if not isinstance(payload, dict):
            return None, body
        detail = payload.get("detail")
        if isinstance(detail, dict):
            status = detail.get("status")
            message = detail.get("message")
            return (
                status if isinstance(status, str) and status.strip() else None,
                message if isinstance(message, str) and message.strip() else None,
            )
        if isinstance(detail, str) and detail.strip():
            return None, detail
        if isinstance(detail, list):
            messages = []
            for item in detail:
                if not isinstance(item, dict) or not isinstance(item.get("msg"), str):
                    continue
                location = item.get("loc")
                if isinstance(location, list) and location:
                    messages.append(f"{'.'.join(str(part) for part in location)}: {item['msg']}")
                else:
                    messages.append(item["msg"])
            if messages:
                return None, "; ".join(messages)
        return None, body

    @staticmethod
    def _classify_http_failure(status_code: int) -> str:
        """Classify HTTP failures into deterministic diagnostic kinds."""

        if status_code == 401:
            return "invalid_api_key"
        if status_code == 403:
            return "forbidden"
        if status_code == 404:
            return "not_found"
        if status_code in {400, 422}:
            return "validation"
        if status_code == 429:
            return "rate_limited"
        if status_code >= 500:
            return "server_error"
        return "http_error"

    def _api_error(self, response: requests.Response, *, operation: str) -> ApiError:
        """Convert a non-2xx response into an `ApiError` with typed fields."""

        status_code = int(response.status_code)
        body = self._decode_body(response)
        provider_status, provider_message = self._extract_provider_detail(body)
        if provider_message is not None:
            provider_message = self._short_message(self._redact(provider_message))

        if provider_message:
            detail = f"{operation} failed (HTTP {status_code}): {provider_message}"
        else:
            detail = f"{operation} failed (HTTP {status_code})."

        return ApiError(
            detail,
            status_code=status_code,
            body=body,
            operation=operation,
            failure_kind=self._classify_http_failure(status_code),
            provider_status=provider_status,
            provider_message=provider_message,
        )
