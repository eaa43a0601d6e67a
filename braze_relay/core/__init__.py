"""
Core domain values, error taxonomy and logging for the relay.
"""

from .entities import EMAIL_ALIAS_LABEL, EventType, ResolvedIdentity, UserAlias
from .errors import (
    ErrorKind,
    RelayError,
    ValidationError,
    RetryableError,
    TerminalError,
    InvalidPayloadError
)

__all__ = [
    "EMAIL_ALIAS_LABEL",
    "EventType",
    "ResolvedIdentity",
    "UserAlias",
    "ErrorKind",
    "RelayError",
    "ValidationError",
    "RetryableError",
    "TerminalError",
    "InvalidPayloadError"
]
