from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from hr_assistant.ai.config import AIConfigurationError
from hr_assistant.schemas.analysis import RESULT_MODELS, AnalysisKind, AnalysisResult
from hr_assistant.services.analysis_transport import Transport, TransportResponse

logger = logging.getLogger(__name__)

# The forwarding edge always requires resumeText; JD-only requests carry this instead.
JD_ONLY_RESUME_PLACEHOLDER = "placeholder"

_RAW_LOG_MAX_CHARS = 800


class AnalysisGatewayError(RuntimeError):
    code = "analysis_failed"

    def __init__(self, message: str, *, kind: AnalysisKind | None = None):
        super().__init__(message)
        self.kind = kind


class TransportError(AnalysisGatewayError):
    code = "transport_error"

    def __init__(self, message: str, *, status_code: int | None = None, kind: AnalysisKind | None = None):
        super().__init__(message, kind=kind)
        self.status_code = status_code


class EmptyResponse(AnalysisGatewayError):
    code = "empty_response"


class MalformedResponse(AnalysisGatewayError):
    code = "malformed_response"

    def __init__(self, message: str, *, raw_text: str, kind: AnalysisKind | None = None):
        super().__init__(message, kind=kind)
        self.raw_text = raw_text


class ConfigurationError(AnalysisGatewayError):
    code = "configuration_error"


def _upstream_message(response: TransportResponse) -> str:
    try:
        data = json.loads(response.body)
    except ValueError:
        data = None
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return response.reason or f"HTTP {response.status_code}"


class AnalysisGateway:
    """One request per call to the AI service, validated against the kind's result shape.

    No retries happen here.
    """

    def __init__(self, transport: Transport):
        self._transport = transport

    def ensure_configured(self) -> None:
        try:
            self._transport.ensure_configured()
        except AIConfigurationError as exc:
            raise ConfigurationError(f"Configuration Error: {exc}") from exc

    async def run(self, kind: AnalysisKind, resume_text: str, jd_text: str | None = None) -> AnalysisResult:
        payload: dict[str, str] = {
            "type": kind.value,
            "resumeText": JD_ONLY_RESUME_PLACEHOLDER if kind is AnalysisKind.JD_CRITIQUE else resume_text,
        }
        if jd_text is not None:
            payload["jdText"] = jd_text

        try:
            response = await self._transport.send(payload)
        except Exception as exc:  # noqa: BLE001 - network failures become TransportError
            logger.warning("analysis_transport_failed type=%s: %s", kind.value, exc)
            raise TransportError(
                "An unknown error occurred while communicating with the server.", kind=kind
            ) from exc

        if not 200 <= response.status_code < 300:
            message = _upstream_message(response)
            logger.warning("analysis_upstream_error type=%s status=%s: %s", kind.value, response.status_code, message)
            raise TransportError(
                f"Failed to get analysis from AI: {message}",
                status_code=response.status_code,
                kind=kind,
            )

        body = response.body or ""
        if not body.strip():
            logger.warning("analysis_empty_response type=%s", kind.value)
            raise EmptyResponse("The AI returned an empty response. Please try again.", kind=kind)

        try:
            return RESULT_MODELS[kind].model_validate_json(body)
        except ValidationError as exc:
            logger.warning(
                "analysis_malformed_response type=%s errors=%s body=%s",
                kind.value,
                exc.error_count(),
                body[:_RAW_LOG_MAX_CHARS],
            )
            raise MalformedResponse(
                "The AI returned a response in an unexpected format. Please try again.",
                raw_text=body,
                kind=kind,
            ) from exc
