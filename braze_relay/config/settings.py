"""
Settings Management with Pydantic

Provides type-safe configuration management with:
- Environment variable support
- Destination-function option mapping (camelCase keys)
- Validation and normalization of hosts
"""

from functools import lru_cache
from typing import Any, Mapping, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProfileApiConfig(BaseSettings):
    """Profile lookup service configuration."""
    model_config = SettingsConfigDict(
        env_prefix="PROFILE_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    token: SecretStr = SecretStr("")
    space_id: str = ""
    host: str = "profiles.segment.com"

    # Trait names requested from the profile
    external_id_trait: str = "braze_userid"
    email_trait: str = "email"


class BrazeConfig(BaseSettings):
    """Braze REST API configuration."""
    model_config = SettingsConfigDict(
        env_prefix="BRAZE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    rest_api_key: SecretStr = SecretStr("")
    custom_api_host: Optional[str] = None
    default_api_host: str = "api.appboy.com"
    app_identifier: str = ""

    @field_validator("custom_api_host", mode="before")
    @classmethod
    def normalize_host(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        host = str(value).strip()
        for scheme in ("https://", "http://"):
            if host.lower().startswith(scheme):
                host = host[len(scheme):]
        host = host.rstrip("/")
        return host or None

    @field_validator("app_identifier", mode="before")
    @classmethod
    def default_app_identifier(cls, value: Any) -> str:
        return "" if value is None else value

    @property
    def base_url(self) -> str:
        """Outbound base URL; a custom host replaces the default entirely."""
        return f"https://{self.custom_api_host or self.default_api_host}"


# Option keys understood by from_options. The last three are legacy
# destination-function names kept as aliases.
OPTION_FIELDS: dict[str, tuple[str, str]] = {
    "profileLookupToken": ("profile_api", "token"),
    "spaceId": ("profile_api", "space_id"),
    "restApiKey": ("braze", "rest_api_key"),
    "customApiHost": ("braze", "custom_api_host"),
    "appIdentifier": ("braze", "app_identifier"),
    "profileApiKey": ("profile_api", "token"),
    "personasSpaceId": ("profile_api", "space_id"),
    "customRestApiEndpoint": ("braze", "custom_api_host"),
}
_PRIMARY_OPTION_KEYS = frozenset(
    ["profileLookupToken", "spaceId", "restApiKey", "customApiHost", "appIdentifier"]
)


class Settings(BaseSettings):
    """Main relay settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Application
    app_name: str = "Braze Relay"
    log_level: str = "INFO"
    request_timeout: float = 10.0

    # Sub-configurations
    profile_api: ProfileApiConfig = Field(default_factory=ProfileApiConfig)
    braze: BrazeConfig = Field(default_factory=BrazeConfig)

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        return cls(
            profile_api=ProfileApiConfig(),
            braze=BrazeConfig()
        )

    @classmethod
    def from_options(cls, options: Mapping[str, Any], **overrides: Any) -> "Settings":
        """
        Create settings from a destination options mapping.

        Recognized keys are listed in OPTION_FIELDS; unknown keys are
        ignored. Values not present fall back to the environment.
        """
        sections: dict[str, dict[str, Any]] = {"profile_api": {}, "braze": {}}
        for key, value in options.items():
            target = OPTION_FIELDS.get(key)
            if target is None:
                continue
            section, field_name = target
            # The primary key wins over its legacy alias
            if field_name in sections[section] and key not in _PRIMARY_OPTION_KEYS:
                continue
            sections[section][field_name] = value

        return cls(
            profile_api=ProfileApiConfig(**sections["profile_api"]),
            braze=BrazeConfig(**sections["braze"]),
            **overrides
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
