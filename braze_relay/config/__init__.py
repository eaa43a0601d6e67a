"""
Configuration Management

Centralized configuration for:
- Profile lookup service (token, space, trait names)
- Braze REST API (key, host, app identifier)
- Transport timeout and log level
"""

from .settings import (
    Settings,
    ProfileApiConfig,
    BrazeConfig,
    OPTION_FIELDS,
    get_settings
)

__all__ = [
    "Settings",
    "ProfileApiConfig",
    "BrazeConfig",
    "OPTION_FIELDS",
    "get_settings"
]
