from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from hr_assistant.ai.config import AIConfigurationError, load_ai_config
from hr_assistant.ai.factory import get_ai_client
from hr_assistant.ai.prompts import JD_KINDS, render_prompt
from hr_assistant.schemas.analysis import AnalysisKind

logger = logging.getLogger(__name__)

_RAW_LOG_MAX_CHARS = 800


@dataclass(frozen=True)
class ForwardResponse:
    status_code: int
    body: str

    @classmethod
    def error(cls, status_code: int, message: str) -> "ForwardResponse":
        return cls(status_code=status_code, body=json.dumps({"error": message}))


def _text_field(payload: dict[str, Any], name: str) -> str:
    value = payload.get(name)
    return value if isinstance(value, str) else ""


async def forward_analysis(payload: Any) -> ForwardResponse:
    """Pass one analysis request through to the AI provider.

    Injects the provider credential, renders the prompt for the requested
    type and returns the provider's JSON text untouched. Every failure is an
    ``{"error": ...}`` body with a 4xx/5xx status, never an exception.
    """
    try:
        cfg = load_ai_config()
    except AIConfigurationError as exc:
        logger.error("analysis_forward_misconfigured: %s", exc)
        return ForwardResponse.error(500, str(exc))
    if not cfg.api_key:
        logger.error("analysis_forward_missing_key provider=%s", cfg.provider)
        return ForwardResponse.error(500, cfg.missing_key_message)

    if not isinstance(payload, dict):
        return ForwardResponse.error(400, "Missing required fields: type and resumeText.")

    analysis_type = _text_field(payload, "type")
    resume_text = _text_field(payload, "resumeText")
    jd_text = _text_field(payload, "jdText")
    if not analysis_type or not resume_text:
        return ForwardResponse.error(400, "Missing required fields: type and resumeText.")

    try:
        kind = AnalysisKind(analysis_type)
    except ValueError:
        return ForwardResponse.error(400, "Invalid analysis type.")
    if kind in JD_KINDS and not jd_text:
        return ForwardResponse.error(400, f"Missing jdText for {kind.value} analysis.")

    prompt = render_prompt(kind, resume_text, jd_text)
    try:
        client = get_ai_client(cfg)
        text = await client.generate_json(prompt)
    except Exception:  # noqa: BLE001 - provider failures surface as a 500 body
        logger.exception("analysis_forward_failed type=%s model=%s", kind.value, cfg.model)
        return ForwardResponse.error(500, "An internal server error occurred.")

    if not text:
        logger.warning("analysis_forward_empty type=%s model=%s", kind.value, cfg.model)
        return ForwardResponse.error(
            500, "The AI returned an empty response. This might be due to a content policy."
        )

    try:
        json.loads(text)
    except ValueError:
        logger.warning(
            "analysis_forward_invalid_json type=%s model=%s body=%s",
            kind.value,
            cfg.model,
            text[:_RAW_LOG_MAX_CHARS],
        )
        return ForwardResponse.error(
            500, "The AI returned invalid JSON. Please try again or adjust your input."
        )

    logger.info("analysis_forward_ok type=%s model=%s chars=%s", kind.value, cfg.model, len(text))
    return ForwardResponse(status_code=200, body=text)
