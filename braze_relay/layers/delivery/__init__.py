"""
Delivery Layer

Outbound calls to Braze and the status classification shared with the
profile lookup:
- alias merge request building (users/identify)
- attribute and event sends (users/track)
- retryable vs. terminal classification of HTTP failures
"""

from .alias_merge import build_merge_request, build_user_alias
from .braze_client import BrazeClient
from .http_status import ResponseClass, classify_status, raise_for_classified_status
from .transport import build_session, parse_json_body, send_request

__all__ = [
    "build_merge_request",
    "build_user_alias",
    "BrazeClient",
    "ResponseClass",
    "classify_status",
    "raise_for_classified_status",
    "build_session",
    "parse_json_body",
    "send_request"
]
