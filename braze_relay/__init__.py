"""
Braze Relay

Forwards customer data platform identify and track events to the Braze
REST API, resolving each known user's Braze external id through the
profile lookup service and merging email alias profiles along the way.
"""

__version__ = "0.1.0"
