"""
Braze REST client for the two endpoints the relay uses.

- users/identify: merge an alias profile into an external id profile
- users/track: send user attributes or custom events

Responses are classified by status only; the body of a successful
response is returned as-is. A merge against an alias that does not exist
comes back as a success and is treated as one.
"""

import json
from typing import Any, Optional

from ...config.settings import BrazeConfig
from ...core.logging_utils import get_logger
from .http_status import raise_for_classified_status
from .transport import build_session, parse_json_body, send_request

logger = get_logger(__name__)

SERVICE_NAME = "Braze"
TERMINAL_HINT = "For more information, visit https://www.braze.com/docs/api/errors/."

IDENTIFY_PATH = "/users/identify"
TRACK_PATH = "/users/track"


class BrazeClient:
    """Sends JSON payloads to the Braze REST API with a Bearer key."""

    def __init__(
        self,
        config: BrazeConfig,
        transport: Any = None,
        timeout: Optional[float] = None
    ):
        self.config = config
        self.transport = transport if transport is not None else build_session()
        self.timeout = timeout

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.rest_api_key.get_secret_value()}",
            "Content-Type": "application/json"
        }

    def post(self, path: str, payload: dict) -> Any:
        """POST payload to path and return the parsed response body."""
        url = f"{self.base_url}{path}"
        response = send_request(
            self.transport,
            "POST",
            url,
            SERVICE_NAME,
            timeout=self.timeout,
            data=json.dumps(payload),
            headers=self._headers()
        )
        logger.debug("Braze %s responded %s", path, response.status_code)
        raise_for_classified_status(response, SERVICE_NAME, terminal_hint=TERMINAL_HINT)
        return parse_json_body(response)

    def send_identify(self, payload: dict) -> Any:
        """Send an alias merge request to users/identify."""
        return self.post(IDENTIFY_PATH, payload)

    def send_track(self, payload: dict) -> Any:
        """Send attributes or events to users/track."""
        return self.post(TRACK_PATH, payload)
