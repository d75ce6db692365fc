import os
from dataclasses import dataclass

SUPPORTED_PROVIDERS = ("gemini", "openai")

DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
}

_PROVIDER_LABELS = {
    "gemini": "Gemini",
    "openai": "OpenAI",
}


class AIConfigurationError(RuntimeError):
    pass


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str
    temperature: float
    timeout_s: float
    max_retries: int
    base_url: str | None = None

    @property
    def provider_label(self) -> str:
        return _PROVIDER_LABELS.get(self.provider, self.provider)

    @property
    def missing_key_message(self) -> str:
        return f"The {self.provider_label} API key is not set up. Please contact the administrator."


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def _api_key_for(provider: str) -> str:
    if provider == "gemini":
        key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or ""
    elif provider == "openai":
        key = os.getenv("OPENAI_API_KEY") or ""
    else:
        key = ""
    key = key.strip()
    if not key or _looks_like_placeholder(key):
        return ""
    return key


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_ai_config() -> AIConfig:
    provider = (os.getenv("AI_PROVIDER") or "gemini").strip().lower()
    if provider not in SUPPORTED_PROVIDERS:
        raise AIConfigurationError(f"Unsupported AI_PROVIDER='{provider}'")
    model = (os.getenv("AI_MODEL") or DEFAULT_MODELS[provider]).strip()
    return AIConfig(
        provider=provider,
        model=model,
        api_key=_api_key_for(provider),
        temperature=_env_float("AI_TEMPERATURE", 0.2),
        timeout_s=_env_float("AI_TIMEOUT_S", 60.0),
        max_retries=_env_int("AI_MAX_RETRIES", 0),
        base_url=(os.getenv("OPENAI_BASE_URL") or "").strip() or None,
    )
