from __future__ import annotations

from typing import Any

from hr_assistant.core.config import settings

_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]


def cors_options() -> dict[str, Any]:
    """Keyword arguments for ``CORSMiddleware`` built from settings."""
    regex = (settings.cors_allow_origin_regex or "").strip()
    return {
        "allow_origins": list(settings.cors_allowed_origins),
        "allow_origin_regex": regex or None,
        "allow_credentials": settings.cors_allow_credentials,
        "allow_methods": _ALLOWED_METHODS,
        "allow_headers": ["*"],
    }
