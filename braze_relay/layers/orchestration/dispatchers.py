"""
Event Dispatchers - Identify and Track forwarding

Each dispatcher turns one inbound event into Braze API calls:

Anonymous user (no user id):
    sanitize -> require email -> users/track with an email user_alias

Known user (user id present):
    sanitize -> profile lookup -> users/identify (alias merge)
             -> users/track addressed by external_id

Email is communicated to Braze only through the alias mechanism for
known users, so it is removed from every mapping sent on that path.
The caller's event is never modified; every payload is built from
fresh copies.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Union

from ...config.settings import Settings, get_settings
from ...core.entities import EventType, ResolvedIdentity
from ...core.errors import InvalidPayloadError, ValidationError
from ...core.logging_utils import get_logger
from ..data_ingestion.event_schema import (
    Event,
    IdentifyEvent,
    TrackEvent,
    parse_event,
    without_email
)
from ..data_ingestion.identity_resolution import IdentityResolver
from ..data_ingestion.sanitizer import sanitize_payload
from ..delivery.alias_merge import build_merge_request, build_user_alias
from ..delivery.braze_client import BrazeClient
from ..delivery.transport import build_session

logger = get_logger(__name__)

DispatchResult = Union[dict, list]


class EventDispatcher(ABC):
    """
    Abstract base class for event dispatchers.

    Subclasses decide which mapping is sanitized and how the
    users/track payload is shaped; the ordering of calls and the
    anonymous/known branching live here.
    """

    def __init__(self, resolver: IdentityResolver, client: BrazeClient):
        self.resolver = resolver
        self.client = client

    @property
    @abstractmethod
    def event_type(self) -> EventType:
        """The event kind this dispatcher handles."""
        pass

    @abstractmethod
    def sanitize(self, event: Event) -> dict:
        """Sanitized copy of the event's free-form data."""
        pass

    @abstractmethod
    def redact(self, event: Event) -> Event:
        """Copy of the event with email removed from every mapping."""
        pass

    @abstractmethod
    def build_anonymous_payload(self, event: Event, email: str, cleaned: dict) -> dict:
        """users/track body for a user known only by email."""
        pass

    @abstractmethod
    def build_known_payload(self, event: Event, identity: ResolvedIdentity, cleaned: dict) -> dict:
        """users/track body for a user addressed by external id."""
        pass

    def dispatch(self, event: Event) -> DispatchResult:
        """
        Forward one event.

        Returns the single users/track response for anonymous users and
        [identify_response, track_response] for known users.
        """
        cleaned = self.sanitize(event)

        if not event.user_id:
            return self._dispatch_anonymous(event, cleaned)
        if event.user_id:
            return self._dispatch_known(event, cleaned)

        raise InvalidPayloadError("No braze_userid or email available for user")

    def _dispatch_anonymous(self, event: Event, cleaned: dict) -> Any:
        email = event.email
        if not email:
            raise ValidationError("No email available for anonymous user")

        payload = self.build_anonymous_payload(event, email, cleaned)
        response = self.client.send_track(payload)
        logger.info("Anonymous user Braze track payload: %s", payload)
        logger.info("Anonymous user Braze track response: %s", response)
        return response

    def _dispatch_known(self, event: Event, cleaned: dict) -> list:
        identity = self.resolver.resolve(event.user_id)
        redacted = self.redact(event)

        merge_payload = build_merge_request(identity.external_id, identity.last_seen_email)
        merge_response = self.client.send_identify(merge_payload)
        # Empty when no alias profile exists for the email
        logger.info("Braze alias-to-identify event: %s", redacted.to_dict())
        logger.info("Braze alias-to-identify payload: %s", merge_payload)
        logger.info("Braze alias-to-identify response: %s", merge_response)

        payload = self.build_known_payload(redacted, identity, without_email(cleaned))
        track_response = self.client.send_track(payload)
        logger.info("Known user Braze track payload: %s", payload)
        logger.info("Known user Braze track response: %s", track_response)

        return [merge_response, track_response]


class IdentifyDispatcher(EventDispatcher):
    """
    Forwards identify calls as Braze user attributes.

    Traits may carry arrays of strings; Braze accepts those as custom
    attributes.
    """

    @property
    def event_type(self) -> EventType:
        return EventType.IDENTIFY

    def sanitize(self, event: IdentifyEvent) -> dict:
        return sanitize_payload(event.traits, allow_string_arrays=True)

    def redact(self, event: IdentifyEvent) -> IdentifyEvent:
        return replace(event, traits=without_email(event.traits))

    def build_anonymous_payload(self, event: IdentifyEvent, email: str, cleaned: dict) -> dict:
        # _update_existing_only must be false for Braze to create alias-only profiles
        return {
            "attributes": [
                {
                    "user_alias": build_user_alias(email),
                    "_update_existing_only": False,
                    **cleaned
                }
            ]
        }

    def build_known_payload(
        self,
        event: IdentifyEvent,
        identity: ResolvedIdentity,
        cleaned: dict
    ) -> dict:
        return {
            "attributes": [
                {
                    "external_id": identity.external_id,
                    **cleaned
                }
            ]
        }


class TrackDispatcher(EventDispatcher):
    """
    Forwards track calls as Braze custom events.

    Braze rejects every array-valued custom event property, so
    properties are sanitized without the string-array exception.
    """

    def __init__(
        self,
        resolver: IdentityResolver,
        client: BrazeClient,
        app_id: Optional[str] = ""
    ):
        super().__init__(resolver, client)
        self.app_id = app_id or ""

    @property
    def event_type(self) -> EventType:
        return EventType.TRACK

    def sanitize(self, event: TrackEvent) -> dict:
        return sanitize_payload(event.properties, allow_string_arrays=False)

    def redact(self, event: TrackEvent) -> TrackEvent:
        return replace(
            event,
            properties=without_email(event.properties),
            context_traits=without_email(event.context_traits)
        )

    def _event_fields(self, event: TrackEvent, cleaned: dict) -> dict:
        return {
            "name": event.event,
            "app_id": self.app_id,
            "time": event.timestamp,
            "properties": cleaned
        }

    def build_anonymous_payload(self, event: TrackEvent, email: str, cleaned: dict) -> dict:
        return {
            "events": [
                {
                    "user_alias": build_user_alias(email),
                    "_update_existing_only": False,
                    **self._event_fields(event, cleaned)
                }
            ]
        }

    def build_known_payload(
        self,
        event: TrackEvent,
        identity: ResolvedIdentity,
        cleaned: dict
    ) -> dict:
        return {
            "events": [
                {
                    "external_id": identity.external_id,
                    **self._event_fields(event, cleaned)
                }
            ]
        }


@dataclass
class DispatcherRegistry:
    """
    Registry of event dispatchers.

    Routes raw inbound events to the dispatcher for their type.
    """
    _dispatchers: dict = field(default_factory=dict)

    def register(self, dispatcher: EventDispatcher) -> None:
        """Register a dispatcher for its event type."""
        self._dispatchers[dispatcher.event_type] = dispatcher

    def get(self, event_type: EventType) -> Optional[EventDispatcher]:
        """Get dispatcher for an event type."""
        return self._dispatchers.get(event_type)

    def dispatch(self, raw_event: Mapping[str, Any]) -> DispatchResult:
        """Parse a raw event and forward it with the matching dispatcher."""
        event = parse_event(raw_event)
        dispatcher = self.get(event.event_type)
        if not dispatcher:
            raise InvalidPayloadError(f"No dispatcher registered for event type: {event.event_type.value}")
        return dispatcher.dispatch(event)

    @classmethod
    def create_default(cls, settings: Settings = None, transport: Any = None) -> "DispatcherRegistry":
        """Create registry with identify and track dispatchers sharing one transport."""
        settings = settings or get_settings()
        transport = transport if transport is not None else build_session()

        resolver = IdentityResolver(settings.profile_api, transport, timeout=settings.request_timeout)
        client = BrazeClient(settings.braze, transport, timeout=settings.request_timeout)

        registry = cls()
        registry.register(IdentifyDispatcher(resolver, client))
        registry.register(TrackDispatcher(resolver, client, app_id=settings.braze.app_identifier))
        return registry


def handle_event(
    raw_event: Mapping[str, Any],
    settings: Settings = None,
    transport: Any = None
) -> DispatchResult:
    """
    Forward a single raw event with the default dispatchers.

    A session created here is closed once the event is handled; an
    injected transport is left open for the caller.
    """
    if transport is not None:
        return DispatcherRegistry.create_default(settings, transport).dispatch(raw_event)
    with build_session() as session:
        return DispatcherRegistry.create_default(settings, session).dispatch(raw_event)
