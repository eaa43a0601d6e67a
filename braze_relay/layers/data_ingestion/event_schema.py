"""
Inbound Event Schema

The customer data platform sends two event shapes to the relay:

    identify: {type, userId?, timestamp, traits?}
    track:    {type, userId?, timestamp, event, properties?, context?: {traits?}}

This module turns the raw JSON dictionaries into typed events. Events
are frozen: processing derives new mappings from them and never writes
back into the caller's data.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from ...core.entities import EventType
from ...core.errors import InvalidPayloadError


EMAIL_KEY = "email"


def _mapping_field(raw: Mapping, key: str, owner: str) -> dict:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidPayloadError(f"{owner}.{key} must be an object, got {type(value).__name__}")
    return dict(value)


def without_email(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of payload with the email key removed."""
    return {key: value for key, value in payload.items() if key != EMAIL_KEY}


@dataclass(frozen=True)
class IdentifyEvent:
    """An identify call carrying user traits."""
    user_id: Optional[str] = None
    timestamp: Optional[str] = None
    traits: dict = field(default_factory=dict)

    event_type = EventType.IDENTIFY

    @property
    def email(self) -> Optional[str]:
        return self.traits.get(EMAIL_KEY) or None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "type": self.event_type.value,
            "userId": self.user_id,
            "timestamp": self.timestamp,
            "traits": dict(self.traits)
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IdentifyEvent":
        """Create event from the inbound dictionary."""
        return cls(
            user_id=data.get("userId") or None,
            timestamp=data.get("timestamp"),
            traits=_mapping_field(data, "traits", "identify")
        )


@dataclass(frozen=True)
class TrackEvent:
    """
    A track call carrying a named event and its properties.

    The user's email travels in context.traits rather than in the
    properties.
    """
    user_id: Optional[str] = None
    timestamp: Optional[str] = None
    event: str = ""
    properties: dict = field(default_factory=dict)
    context_traits: dict = field(default_factory=dict)

    event_type = EventType.TRACK

    @property
    def email(self) -> Optional[str]:
        return self.context_traits.get(EMAIL_KEY) or None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "type": self.event_type.value,
            "userId": self.user_id,
            "timestamp": self.timestamp,
            "event": self.event,
            "properties": dict(self.properties),
            "context": {"traits": dict(self.context_traits)}
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrackEvent":
        """Create event from the inbound dictionary."""
        context = _mapping_field(data, "context", "track")
        return cls(
            user_id=data.get("userId") or None,
            timestamp=data.get("timestamp"),
            event=data.get("event") or "",
            properties=_mapping_field(data, "properties", "track"),
            context_traits=_mapping_field(context, "traits", "track.context")
        )


Event = Union[IdentifyEvent, TrackEvent]

EVENT_CLASSES: dict[EventType, type] = {
    EventType.IDENTIFY: IdentifyEvent,
    EventType.TRACK: TrackEvent
}


def resolve_event_type(data: Mapping[str, Any]) -> EventType:
    """Read the type field of an inbound event."""
    raw_type = data.get("type")
    try:
        return EventType(str(raw_type).lower())
    except ValueError:
        raise InvalidPayloadError(f"Unsupported event type: {raw_type}") from None


def parse_event(data: Mapping[str, Any]) -> Event:
    """Create the typed event matching the inbound type field."""
    if not isinstance(data, Mapping):
        raise InvalidPayloadError(f"Event must be an object, got {type(data).__name__}")
    return EVENT_CLASSES[resolve_event_type(data)].from_dict(data)
