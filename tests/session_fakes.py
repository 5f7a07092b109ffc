"""In-memory `requests` session doubles shared by client tests."""

from __future__ import annotations

from typing import Any, Callable

import requests


class MockResponse:
    """Minimal `requests.Response` stand-in with a buffered body."""

    def __init__(self, *, status_code: int = 200, payload: bytes = b"") -> None:
        """Initialize response with HTTP status and raw payload bytes."""

        self.status_code = status_code
        self.content = payload

    @property
    def text(self) -> str:
        """Decode the payload as UTF-8 like `requests` does for JSON/text bodies."""

        return self.content.decode("utf-8")


class FakeSession:
    """In-memory session double recording prepared requests and replaying responses."""

    def __init__(self, responses: list[MockResponse | Exception]) -> None:
        """Initialize session with responses (or exceptions) returned in order."""

        self._responses = list(responses)
        self.sent: list[requests.PreparedRequest] = []
        self.send_kwargs: list[dict[str, Any]] = []
        self.closed = False

    def send(self, prepared: requests.PreparedRequest, **kwargs: Any) -> MockResponse:
        """Record the request and return (or raise) the next canned outcome."""

        self.sent.append(prepared)
        self.send_kwargs.append(kwargs)
        outcome = self._responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        """Mark session as closed for ownership assertions."""

        self.closed = True


SessionFactory = Callable[..., FakeSession]
