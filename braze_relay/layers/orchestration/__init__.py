"""
Layer 3: Event Orchestration

Per-event call sequencing:
- Identify events become Braze user attributes
- Track events become Braze custom events
- Known users are merged from their email alias before the track call

Routing:
- Raw events are routed by their type field
- Any other event type is rejected
"""

from .dispatchers import (
    EventDispatcher,
    IdentifyDispatcher,
    TrackDispatcher,
    DispatcherRegistry,
    handle_event
)

__all__ = [
    "EventDispatcher",
    "IdentifyDispatcher",
    "TrackDispatcher",
    "DispatcherRegistry",
    "handle_event"
]
