"""
Payload Sanitizer

Braze rejects structured values in user attributes and custom event
properties:
- nested objects are never accepted
- arrays are never accepted as custom event properties
- arrays of strings are accepted as custom user attributes

Sanitizing drops the offending key/value pairs and leaves every scalar
untouched. The input mapping is never modified.
"""

from collections.abc import Mapping
from typing import Any, Optional


def is_unsanitary_value(value: Any, allow_string_arrays: bool) -> bool:
    """Return True when Braze cannot accept the value."""
    if isinstance(value, Mapping):
        return True
    if isinstance(value, (list, tuple)):
        if not allow_string_arrays:
            return True
        return any(not isinstance(elem, str) for elem in value)
    return False


def sanitize_payload(
    payload: Optional[Mapping[str, Any]],
    allow_string_arrays: bool
) -> dict[str, Any]:
    """
    Return a copy of payload without the values Braze cannot accept.

    Use allow_string_arrays=True for identify traits and False for
    track properties.
    """
    if not payload:
        return {}
    return {
        key: value
        for key, value in payload.items()
        if not is_unsanitary_value(value, allow_string_arrays)
    }
