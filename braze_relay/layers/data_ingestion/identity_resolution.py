"""
Identity Resolution - Profile Lookup

Known users arrive with a platform user id. Braze addresses them by a
different, stable external id which is stored as a trait on the user's
profile. This module fetches that trait, together with the last email
seen for the user, from the profile lookup service.

Lookup outcomes:
- 5xx, 429 and 404 are retryable (the profile may not exist yet)
- any other 4xx is terminal (bad credentials or unknown space)
- a profile without the two traits is a validation failure

Nothing is cached; every event performs its own lookup.
"""

from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import quote

from requests.auth import HTTPBasicAuth

from ...config.settings import ProfileApiConfig
from ...core.entities import ResolvedIdentity
from ...core.errors import ValidationError
from ...core.logging_utils import get_logger
from ..delivery.http_status import raise_for_classified_status
from ..delivery.transport import build_session, parse_json_body, send_request

logger = get_logger(__name__)

SERVICE_NAME = "Profile API"
TERMINAL_HINT = (
    "User does not exist or Profile API credentials are incorrect. "
    "The request will not be retried."
)


class IdentityResolver:
    """
    Resolves a platform user id into a Braze identity.

    Authenticates with HTTP Basic auth: the access token is the username
    and the password is empty.
    """

    def __init__(
        self,
        config: ProfileApiConfig,
        transport: Any = None,
        timeout: Optional[float] = None
    ):
        self.config = config
        self.transport = transport if transport is not None else build_session()
        self.timeout = timeout

    def profile_url(self, user_id: str) -> str:
        """Traits endpoint for user_id, restricted to the two traits we need."""
        return (
            f"https://{self.config.host}/v1/spaces/{self.config.space_id}"
            f"/collections/users/profiles/user_id:{quote(str(user_id), safe='')}"
            f"/traits?include={self.config.external_id_trait},{self.config.email_trait}"
        )

    def fetch_traits(self, user_id: str) -> dict:
        """Fetch the traits object of a profile; raises on any failure."""
        response = send_request(
            self.transport,
            "GET",
            self.profile_url(user_id),
            SERVICE_NAME,
            timeout=self.timeout,
            auth=HTTPBasicAuth(self.config.token.get_secret_value(), "")
        )
        raise_for_classified_status(
            response,
            SERVICE_NAME,
            retry_not_found=True,
            terminal_hint=TERMINAL_HINT
        )

        body = parse_json_body(response)
        traits = body.get("traits") if isinstance(body, Mapping) else None
        # An empty traits object falls through to the per-trait checks
        if not isinstance(traits, Mapping):
            raise ValidationError(
                f"No {self.config.external_id_trait} or email available for known user"
            )
        return traits

    def resolve(self, user_id: str) -> ResolvedIdentity:
        """Look up the external id and last seen email for user_id."""
        traits = self.fetch_traits(user_id)

        if self.config.external_id_trait not in traits:
            raise ValidationError(
                f"No {self.config.external_id_trait} available for known user"
            )
        if self.config.email_trait not in traits:
            raise ValidationError("No email available for known user")

        identity = ResolvedIdentity(
            external_id=traits[self.config.external_id_trait],
            last_seen_email=traits[self.config.email_trait]
        )
        logger.info("Resolved user %s to external id %s", user_id, identity.external_id)
        return identity
