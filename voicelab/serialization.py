"""JSON encode/decode helpers for API records.

Records exposing `to_dict()` / `from_dict()` are converted through those hooks;
anything else is handed to `json` unchanged.
"""

from __future__ import annotations

import json
from typing import Any, Protocol, TypeVar, overload


class _Decodable(Protocol):
    @classmethod
    def from_dict(cls, payload: object) -> Any: ...


RecordT = TypeVar("RecordT", bound=_Decodable)


def serialize(item: Any) -> str:
    """Encode a record (or plain JSON value) as a compact JSON string."""

    to_dict = getattr(item, "to_dict", None)
    payload = to_dict() if callable(to_dict) else item
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


@overload
def deserialize(raw: str | bytes) -> Any: ...


@overload
def deserialize(raw: str | bytes, model: type[RecordT]) -> RecordT: ...


def deserialize(raw: str | bytes, model: type[Any] | None = None) -> Any:
    """Decode a JSON string, optionally into a record type.

    Raises:
        ValueError: If `raw` is not valid JSON or does not match `model`.
    """

    payload = json.loads(raw)
    if model is None:
        return payload
    return model.from_dict(payload)
