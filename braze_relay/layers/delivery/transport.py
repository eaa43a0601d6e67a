"""
HTTP transport helpers.

The relay talks to its collaborators through any object exposing the
requests.Session interface (get/post). Connection failures and timeouts
are reported as retryable errors; everything else propagates.
"""

from typing import Any, Optional

import requests

from ...core.errors import RetryableError
from ...core.logging_utils import get_logger
from .http_status import RETRY_GUIDANCE

logger = get_logger(__name__)


def build_session() -> requests.Session:
    """Create the default transport."""
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    return session


def send_request(
    transport: Any,
    method: str,
    url: str,
    service: str,
    timeout: Optional[float] = None,
    **kwargs: Any
) -> Any:
    """Perform one request, mapping network failures to RetryableError."""
    sender = getattr(transport, method.lower())
    try:
        return sender(url, timeout=timeout, **kwargs)
    except (requests.ConnectionError, requests.Timeout) as exc:
        logger.warning("%s %s %s failed: %s", service, method.upper(), url, exc)
        raise RetryableError(f"{service} Error: network failure ({exc}). {RETRY_GUIDANCE}") from exc


def parse_json_body(response: Any) -> Any:
    """Parse a successful response body; an empty body parses to {}."""
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        logger.debug("Non-JSON response body: %s", response.text)
        return {"message": response.text}
