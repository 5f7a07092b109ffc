"""Shared value normalization helpers for config resolution and response decoding."""

from __future__ import annotations

from typing import Any, Mapping


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off"})


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_permissive_boolean(value: object) -> bool | None:
    """Parse a permissive boolean token and return `None` for invalid values."""

    if isinstance(value, bool):
        return value

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None

    token = normalized.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None


def query_boolean(value: bool) -> str:
    """Render a boolean as the lowercase token the API expects in query strings."""

    return "true" if value else "false"


def require_field(payload: Mapping[str, Any], key: str, kind: type, owner: str) -> Any:
    """Return a required, correctly typed field from a decoded JSON mapping.

    Raises:
        ValueError: If the key is missing, `null`, or of the wrong JSON type.
    """

    if key not in payload or payload[key] is None:
        raise ValueError(f"`{owner}` payload is missing required field `{key}`.")
    return _check_kind(payload[key], key, kind, owner)


def optional_field(payload: Mapping[str, Any], key: str, kind: type, owner: str) -> Any:
    """Return an optional field, `None` when absent or `null`, validating its type."""

    value = payload.get(key)
    if value is None:
        return None
    return _check_kind(value, key, kind, owner)


def _check_kind(value: Any, key: str, kind: type, owner: str) -> Any:
    """Validate JSON value type, accepting integers where floats are expected."""

    # bool is an int subclass; JSON `true` must never pass as a number
    if kind in (int, float) and isinstance(value, bool):
        raise ValueError(f"`{owner}.{key}` must be a number, got boolean.")
    if kind is float and isinstance(value, int):
        return float(value)
    if not isinstance(value, kind):
        raise ValueError(
            f"`{owner}.{key}` must be of type `{kind.__name__}`, got `{type(value).__name__}`."
        )
    return value
