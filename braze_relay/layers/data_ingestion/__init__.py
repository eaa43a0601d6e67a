"""
Layer 1: Event Ingestion and Identity

Inbound side of the relay:
- typed identify / track events built from raw JSON
- payload sanitization for Braze's type restrictions
- identity resolution through the profile lookup service
"""

from .event_schema import (
    EMAIL_KEY,
    Event,
    IdentifyEvent,
    TrackEvent,
    parse_event,
    resolve_event_type,
    without_email
)
from .identity_resolution import IdentityResolver
from .sanitizer import is_unsanitary_value, sanitize_payload

__all__ = [
    "EMAIL_KEY",
    "Event",
    "IdentifyEvent",
    "TrackEvent",
    "parse_event",
    "resolve_event_type",
    "without_email",
    "IdentityResolver",
    "is_unsanitary_value",
    "sanitize_payload"
]
