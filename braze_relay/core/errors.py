"""
Relay Error Taxonomy

Every failure raised while forwarding an event is one of four kinds:
- ValidationError: a required identity field is absent (permanent)
- RetryableError: the lookup service or Braze reported a transient condition
- TerminalError: a definite client error (bad credentials, malformed request)
- InvalidPayloadError: the event cannot be routed at all

The host that invokes the relay decides what to do with each kind.
Retryable errors are expected to be requeued with exponential backoff
(up to 9 attempts over four hours); the rest are never retried.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure reason surfaced to the invoking host."""
    VALIDATION = "validation"
    RETRYABLE = "retryable"
    TERMINAL = "terminal"
    INVALID_PAYLOAD = "invalid_payload"


class RelayError(Exception):
    """Base class for every error raised while relaying an event."""

    kind: ErrorKind = ErrorKind.TERMINAL

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        return self.kind == ErrorKind.RETRYABLE

    def to_dict(self) -> dict:
        """Convert to dictionary for the invoking host."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code
        }


class ValidationError(RelayError):
    """A required field (email, external id) is missing for this event."""
    kind = ErrorKind.VALIDATION


class RetryableError(RelayError):
    """Server-side, overload or not-yet-available condition; requeue the event."""
    kind = ErrorKind.RETRYABLE


class TerminalError(RelayError):
    """Client error reported by a remote service; never retried."""
    kind = ErrorKind.TERMINAL


class InvalidPayloadError(RelayError):
    """The event is structurally unusable."""
    kind = ErrorKind.INVALID_PAYLOAD
