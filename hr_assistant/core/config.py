from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    rate_limit: str
    rate_limit_enabled: bool
    analysis_rate_limit: str
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    max_upload_bytes: int
    session_ttl_minutes: int
    session_purge_interval_s: int
    analysis_forward_url: str | None
    analysis_forward_timeout_s: float
    analysis_include_cover_letter: bool


settings = Settings(
    rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    analysis_rate_limit=_get_env("ANALYSIS_RATE_LIMIT", "10/minute") or "10/minute",
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://[::1]:5173",
            "http://localhost:3000",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX"),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
    max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
    session_ttl_minutes=_get_env_int("SESSION_TTL_MINUTES", 120),
    session_purge_interval_s=_get_env_int("SESSION_PURGE_INTERVAL_S", 300),
    analysis_forward_url=_get_env("ANALYSIS_FORWARD_URL"),
    analysis_forward_timeout_s=_get_env_float("ANALYSIS_FORWARD_TIMEOUT_S", 120.0),
    analysis_include_cover_letter=_get_env_bool("ANALYSIS_INCLUDE_COVER_LETTER", False),
)

if settings.session_ttl_minutes < 1:
    raise RuntimeError("SESSION_TTL_MINUTES must be at least 1.")
