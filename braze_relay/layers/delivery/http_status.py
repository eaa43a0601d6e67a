"""
HTTP Response Classification

One pure function maps a status code onto the relay's three outcomes.
Both the profile lookup and the Braze sends go through it; the only
difference between them is whether a 404 is worth retrying (the profile
may not be materialized yet, while Braze never returns a meaningful 404
for the endpoints used here).
"""

from enum import Enum
from typing import Any

from ...core.errors import RetryableError, TerminalError


RETRY_GUIDANCE = (
    "The request will be retried up to 9 times over a four hour period, "
    "with exponential backoff."
)


class ResponseClass(Enum):
    """Outcome of a remote call."""
    SUCCESS = "success"
    RETRYABLE = "retryable"
    TERMINAL = "terminal"


def classify_status(status: int, retry_not_found: bool = False) -> ResponseClass:
    """Classify an HTTP status code."""
    if status >= 500 or status == 429:
        return ResponseClass.RETRYABLE
    if status == 404 and retry_not_found:
        return ResponseClass.RETRYABLE
    if 399 < status < 500:
        return ResponseClass.TERMINAL
    return ResponseClass.SUCCESS


def raise_for_classified_status(
    response: Any,
    service: str,
    retry_not_found: bool = False,
    terminal_hint: str = ""
) -> None:
    """
    Raise the typed relay error for a failed response.

    The message keeps the status code and reason so the invoking host
    can surface it unchanged.
    """
    status = response.status_code
    outcome = classify_status(status, retry_not_found)
    if outcome is ResponseClass.SUCCESS:
        return

    reason = (getattr(response, "reason", "") or "").strip()
    prefix = f"{service} Error: {status} {reason}".rstrip() + "."

    if outcome is ResponseClass.RETRYABLE:
        raise RetryableError(f"{prefix} {RETRY_GUIDANCE}", status_code=status)
    raise TerminalError(f"{prefix} {terminal_hint}".rstrip(), status_code=status)
