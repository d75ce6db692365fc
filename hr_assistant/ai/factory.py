from hr_assistant.ai.config import AIConfig, AIConfigurationError, load_ai_config
from hr_assistant.ai.types import AIClient

from hr_assistant.ai.providers.gemini_provider import GeminiProvider
from hr_assistant.ai.providers.openai_provider import OpenAIProvider


def get_ai_client(cfg: AIConfig | None = None) -> AIClient:
    cfg = cfg or load_ai_config()
    if not cfg.api_key:
        raise AIConfigurationError(cfg.missing_key_message)

    if cfg.provider == "gemini":
        return GeminiProvider(
            model=cfg.model,
            api_key=cfg.api_key,
            temperature=cfg.temperature,
            timeout_s=cfg.timeout_s,
        )

    if cfg.provider == "openai":
        return OpenAIProvider(
            model=cfg.model,
            api_key=cfg.api_key,
            base_url=cfg.base_url,
            temperature=cfg.temperature,
            timeout_s=cfg.timeout_s,
            max_retries=cfg.max_retries,
        )

    raise AIConfigurationError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
