import pytest

from braze_relay.config.settings import Settings, get_settings

_ENV_VARS = [
    "PROFILE_API_TOKEN",
    "PROFILE_API_SPACE_ID",
    "PROFILE_API_HOST",
    "PROFILE_API_EXTERNAL_ID_TRAIT",
    "PROFILE_API_EMAIL_TRAIT",
    "BRAZE_REST_API_KEY",
    "BRAZE_CUSTOM_API_HOST",
    "BRAZE_DEFAULT_API_HOST",
    "BRAZE_APP_IDENTIFIER",
    "REQUEST_TIMEOUT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def options() -> dict:
    return {
        "profileLookupToken": "profile-token",
        "spaceId": "spa_123",
        "restApiKey": "rest-key",
        "appIdentifier": "app-42",
    }


@pytest.fixture
def settings(options) -> Settings:
    return Settings.from_options(options)
