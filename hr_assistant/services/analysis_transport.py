from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Protocol

import httpx

from hr_assistant.ai.config import AIConfigurationError, load_ai_config
from hr_assistant.services.forwarding_service import forward_analysis


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: str
    reason: str = ""


class Transport(Protocol):
    def ensure_configured(self) -> None: ...

    async def send(self, payload: dict[str, Any]) -> TransportResponse: ...


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


class InProcessTransport:
    """Calls the forwarding edge directly, without an HTTP hop."""

    def ensure_configured(self) -> None:
        cfg = load_ai_config()
        if not cfg.api_key:
            raise AIConfigurationError(cfg.missing_key_message)

    async def send(self, payload: dict[str, Any]) -> TransportResponse:
        response = await forward_analysis(payload)
        return TransportResponse(
            status_code=response.status_code,
            body=response.body,
            reason=_reason(response.status_code),
        )


class HttpTransport:
    """POSTs to a remote forwarding edge such as another instance's ``/v1/analyze``."""

    def __init__(self, url: str | None, timeout_s: float = 120.0):
        self._url = (url or "").strip()
        self._timeout_s = timeout_s

    def ensure_configured(self) -> None:
        if not self._url:
            raise AIConfigurationError("ANALYSIS_FORWARD_URL is not set up. Please contact the administrator.")

    async def send(self, payload: dict[str, Any]) -> TransportResponse:
        async with httpx.AsyncClient(timeout=self._timeout_s) as client:
            response = await client.post(self._url, json=payload)
        return TransportResponse(
            status_code=response.status_code,
            body=response.text,
            reason=response.reason_phrase,
        )
