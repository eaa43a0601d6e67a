import pytest
import requests
from requests.auth import HTTPBasicAuth

from braze_relay.config.settings import ProfileApiConfig
from braze_relay.core.entities import ResolvedIdentity
from braze_relay.core.errors import RetryableError, TerminalError, ValidationError
from braze_relay.layers.data_ingestion.identity_resolution import IdentityResolver

from http_fakes import FakeResponse, make_session, profile_response


def _resolver(settings, *responses):
    session = make_session(responses)
    return IdentityResolver(settings.profile_api, session, timeout=5), session


def test_resolve_returns_external_id_and_email(settings):
    resolver, session = _resolver(settings, profile_response(braze_userid="X", email="e@x.com"))

    identity = resolver.resolve("user-1")

    assert identity == ResolvedIdentity(external_id="X", last_seen_email="e@x.com")
    call = session.calls[0]
    assert call.method == "GET"
    assert call.url == (
        "https://profiles.segment.com/v1/spaces/spa_123/collections/users/profiles/"
        "user_id:user-1/traits?include=braze_userid,email"
    )
    assert call.kwargs["timeout"] == 5


def test_lookup_uses_basic_auth_with_empty_password(settings):
    resolver, session = _resolver(settings, profile_response(braze_userid="X", email="e@x.com"))
    resolver.resolve("user-1")

    auth = session.calls[0].kwargs["auth"]
    assert isinstance(auth, HTTPBasicAuth)
    assert (auth.username, auth.password) == ("profile-token", "")

    prepared = requests.Request("GET", "https://example.com", auth=auth).prepare()
    # base64("profile-token:")
    assert prepared.headers["Authorization"] == "Basic cHJvZmlsZS10b2tlbjo="


def test_user_id_is_url_encoded(settings):
    resolver, _ = _resolver(settings)
    assert "user_id:a%2Fb%20c/traits" in resolver.profile_url("a/b c")


@pytest.mark.parametrize("status", [404, 429, 500, 502])
def test_retryable_lookup_statuses(settings, status):
    resolver, _ = _resolver(settings, FakeResponse(status))

    with pytest.raises(RetryableError) as excinfo:
        resolver.resolve("user-1")

    assert excinfo.value.status_code == status
    assert excinfo.value.message.startswith(f"Profile API Error: {status}")


@pytest.mark.parametrize("status", [400, 401, 403])
def test_terminal_lookup_statuses(settings, status):
    resolver, _ = _resolver(settings, FakeResponse(status))

    with pytest.raises(TerminalError) as excinfo:
        resolver.resolve("user-1")

    assert "will not be retried" in excinfo.value.message


def test_network_failure_is_retryable(settings):
    resolver, _ = _resolver(settings, requests.ConnectionError("connection refused"))

    with pytest.raises(RetryableError):
        resolver.resolve("user-1")


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"traits": None},
        {"traits": ["braze_userid", "email"]},
        {"traits": "braze_userid,email"},
        ["braze_userid", "email"],
    ],
)
def test_missing_traits_is_validation_error(settings, body):
    resolver, _ = _resolver(settings, FakeResponse(200, body))

    with pytest.raises(ValidationError, match="No braze_userid or email available"):
        resolver.resolve("user-1")


def test_missing_external_id_trait(settings):
    resolver, _ = _resolver(settings, profile_response(email="e@x.com"))

    with pytest.raises(ValidationError, match="No braze_userid available"):
        resolver.resolve("user-1")


def test_missing_email_trait(settings):
    resolver, _ = _resolver(settings, profile_response(braze_userid="X"))

    with pytest.raises(ValidationError, match="No email available for known user"):
        resolver.resolve("user-1")


def test_custom_trait_names():
    config = ProfileApiConfig(token="t", space_id="s", external_id_trait="crm_id", email_trait="mail")
    session = make_session([profile_response(crm_id="C", mail="m@x.com")])

    identity = IdentityResolver(config, session).resolve("u")

    assert identity == ResolvedIdentity("C", "m@x.com")
    assert session.calls[0].url.endswith("traits?include=crm_id,mail")


def test_empty_traits_object_reports_missing_external_id(settings):
    resolver, _ = _resolver(settings, FakeResponse(200, {"traits": {}}))

    with pytest.raises(ValidationError, match="No braze_userid available for known user"):
        resolver.resolve("user-1")
