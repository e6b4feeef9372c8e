"""Application settings.

Resolution order for every key: environment variable, then the ``[custom]``
table of the active domain configuration (``domain.toml``), then the default
declared here.
"""

import os
from typing import Any

from protean.utils.globals import current_domain

_DEFAULTS: dict[str, Any] = {
    "TOKEN_SECRET": "dev-secret-change-me",
    "TOKEN_ALGORITHM": "HS256",
    "ACCESS_TOKEN_TTL_MINUTES": 60,
    "REFRESH_TOKEN_TTL_DAYS": 30,
    "IDENTITY_PROVIDER": "google",
    "GOOGLE_USERINFO_URL": "https://www.googleapis.com/oauth2/v3/userinfo",
    "IDENTITY_PROVIDER_TIMEOUT": 5,
    "VERSION_CONFLICT_RETRIES": 3,
}


def _custom_config() -> dict:
    if not current_domain:
        return {}
    return current_domain.config.get("custom") or {}


def setting(key: str) -> Any:
    """Return the configured value for ``key`` cast to the type of its default."""
    default = _DEFAULTS[key]
    raw = os.getenv(key)
    if raw is None:
        raw = _custom_config().get(key, default)
    if isinstance(default, bool):
        return str(raw).lower() in ("1", "true", "yes")
    if isinstance(default, int):
        return int(raw)
    return str(raw)
