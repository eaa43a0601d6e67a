"""
Core Relay Entities

This module defines the small set of values that flow between the
ingestion, identity and delivery layers. The relay is stateless: every
entity here is created for one event and discarded once the event has
been forwarded.

Entities:
- EventType: the two event kinds the relay accepts
- UserAlias: a provisional, email-based Braze user reference
- ResolvedIdentity: the Braze external id and last seen email of a known user
"""

from dataclasses import dataclass
from enum import Enum


EMAIL_ALIAS_LABEL = "email_address"


class EventType(Enum):
    """
    Event kinds accepted from the customer data platform.
    Profiles only emit identify and track calls.
    """
    IDENTIFY = "identify"
    TRACK = "track"


@dataclass(frozen=True)
class UserAlias:
    """
    Provisional user reference keyed by email.

    Braze can address an alias-only profile before a stable external id
    exists; the alias is later merged into the external-id profile.
    """
    alias_name: str
    alias_label: str = EMAIL_ALIAS_LABEL

    def to_dict(self) -> dict:
        return {
            "alias_name": self.alias_name,
            "alias_label": self.alias_label
        }


@dataclass(frozen=True)
class ResolvedIdentity:
    """
    Identity of a known user as reported by the profile lookup service.

    Owned by a single event-processing call; never cached.
    """
    external_id: str
    last_seen_email: str
