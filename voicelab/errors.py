"""Exception hierarchy for ElevenLabs client failures.

Responsibilities:
- Represent transport, local file access, API status, and decode failures as typed errors.
- Carry HTTP status code and raw body as fields so callers can branch on them.
- Expose the wrapped cause of a failure when one exists.

Key types:
- `VoiceLabError`: base class for every library failure.
- `TransportError`, `FileAccessError`, `ApiError`, `ResponseDecodeError`,
  `MissingEnvironmentVariableError`.
"""

from __future__ import annotations

from pathlib import Path


class VoiceLabError(RuntimeError):
    """Base error raised by every ElevenLabs client operation."""

    def __init__(self, message: str, *, failure_kind: str = "unknown") -> None:
        """Initialize error message and diagnostic failure kind."""

        super().__init__(message)
        self.failure_kind = failure_kind

    @property
    def cause(self) -> BaseException | None:
        """Return the wrapped lower-level exception, if any."""

        return self.__cause__


class TransportError(VoiceLabError):
    """Raised when the HTTP request could not complete (network, TLS, timeout)."""

    def __init__(self, message: str, *, failure_kind: str = "transport") -> None:
        super().__init__(message, failure_kind=failure_kind)


class FileAccessError(VoiceLabError):
    """Raised when a local file cannot be read for a multipart upload."""

    def __init__(self, message: str, *, path: Path | str) -> None:
        super().__init__(message, failure_kind="file_access")
        self.path = Path(path)


class ApiError(VoiceLabError):
    """Raised when the API answers with a non-2xx status.

    Attributes:
        status_code: HTTP status code returned by the API.
        body: Raw response body decoded as UTF-8.
        operation: Human-readable name of the failed operation.
        provider_status: Vendor error status token (`detail.status`), when present.
        provider_message: Concise vendor error message, when present.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: str = "",
        operation: str = "request",
        failure_kind: str = "http_error",
        provider_status: str | None = None,
        provider_message: str | None = None,
    ) -> None:
        super().__init__(message, failure_kind=failure_kind)
        self.status_code = status_code
        self.body = body
        self.operation = operation
        self.provider_status = provider_status
        self.provider_message = provider_message

    @property
    def is_client_error(self) -> bool:
        """Return `True` for 4xx statuses."""

        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        """Return `True` for 5xx statuses."""

        return self.status_code >= 500


class ResponseDecodeError(VoiceLabError):
    """Raised when a successful response body does not match the expected shape."""

    def __init__(self, message: str) -> None:
        super().__init__(message, failure_kind="decode")


class MissingEnvironmentVariableError(VoiceLabError):
    """Raised when a required configuration environment variable is not set."""

    def __init__(self, variable_name: str) -> None:
        super().__init__(
            f"Environment variable `{variable_name}` is not set.",
            failure_kind="config",
        )
        self.variable_name = variable_name
