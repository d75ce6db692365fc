from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable

from hr_assistant.core.config import settings
from hr_assistant.schemas.analysis import AnalysisKind, AnalysisResult, ResultSet
from hr_assistant.services.analysis_gateway import AnalysisGateway, AnalysisGatewayError
from hr_assistant.services.analysis_transport import HttpTransport, InProcessTransport, Transport

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


class AnalysisRefused(ValueError):
    pass


class AnalysisRunFailed(RuntimeError):
    def __init__(self, message: str, *, failures: dict[AnalysisKind, BaseException]):
        super().__init__(message)
        self.failures = failures


@dataclass(frozen=True)
class AnalysisOutcome:
    kind: AnalysisKind
    result: AnalysisResult | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _failure_message(error: BaseException) -> str:
    if isinstance(error, AnalysisGatewayError):
        return str(error)
    return UNEXPECTED_ERROR_MESSAGE


class AnalysisOrchestrator:
    """Runs every analysis kind concurrently and commits all results or none.

    A run waits for all calls to settle. If any call failed, the results of
    the others are discarded and the earliest failure to settle is raised
    as ``AnalysisRunFailed``.
    """

    def __init__(self, gateway: AnalysisGateway, *, include_cover_letter: bool = False):
        self._gateway = gateway
        self._include_cover_letter = include_cover_letter

    @property
    def kinds(self) -> tuple[AnalysisKind, ...]:
        kinds = [AnalysisKind.RESUME_CRITIQUE, AnalysisKind.JD_CRITIQUE, AnalysisKind.FIT_SCORE]
        if self._include_cover_letter:
            kinds.append(AnalysisKind.COVER_LETTER)
        return tuple(kinds)

    def _call(self, kind: AnalysisKind, resume_text: str, jd_text: str) -> Awaitable[AnalysisResult]:
        if kind is AnalysisKind.RESUME_CRITIQUE:
            return self._gateway.run(kind, resume_text)
        if kind is AnalysisKind.JD_CRITIQUE:
            return self._gateway.run(kind, "", jd_text=jd_text)
        return self._gateway.run(kind, resume_text, jd_text=jd_text)

    async def _fan_out(self, resume_text: str, jd_text: str) -> list[AnalysisOutcome]:
        """Run every kind concurrently; outcomes come back in the order the calls settled."""
        settled: list[AnalysisOutcome] = []

        async def settle(kind: AnalysisKind) -> None:
            try:
                result = await self._call(kind, resume_text, jd_text)
            except Exception as exc:  # noqa: BLE001 - collected and reported after every call settles
                settled.append(AnalysisOutcome(kind=kind, error=exc))
            else:
                settled.append(AnalysisOutcome(kind=kind, result=result))

        await asyncio.gather(*(settle(kind) for kind in self.kinds))
        return settled

    async def analyze(self, resume_text: str, jd_text: str) -> ResultSet:
        if not (resume_text or "").strip() or not (jd_text or "").strip():
            raise AnalysisRefused("Both a resume and a job description are required.")

        self._gateway.ensure_configured()

        outcomes = await self._fan_out(resume_text, jd_text)
        failures = {outcome.kind: outcome.error for outcome in outcomes if outcome.error is not None}
        if failures:
            first_error = next(iter(failures.values()))
            for kind, error in failures.items():
                if not isinstance(error, AnalysisGatewayError):
                    logger.error("analysis_unexpected_failure type=%s", kind.value, exc_info=error)
            logger.warning(
                "analysis_run_failed failed=%s discarded=%s",
                [kind.value for kind in failures],
                [outcome.kind.value for outcome in outcomes if outcome.ok],
            )
            raise AnalysisRunFailed(_failure_message(first_error), failures=failures) from first_error

        logger.info("analysis_run_ok kinds=%s", [outcome.kind.value for outcome in outcomes])
        return ResultSet.from_results({outcome.kind: outcome.result for outcome in outcomes})


def build_transport() -> Transport:
    if settings.analysis_forward_url:
        return HttpTransport(settings.analysis_forward_url, timeout_s=settings.analysis_forward_timeout_s)
    return InProcessTransport()


def get_orchestrator() -> AnalysisOrchestrator:
    return AnalysisOrchestrator(
        AnalysisGateway(build_transport()),
        include_cover_letter=settings.analysis_include_cover_letter,
    )
