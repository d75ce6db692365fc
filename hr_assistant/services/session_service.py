from __future__ import annotations

import asyncio
import logging

from hr_assistant.core import session_store
from hr_assistant.parsing import extract
from hr_assistant.schemas.analysis import AnalysisTab
from hr_assistant.schemas.session import SessionView, SlotView
from hr_assistant.services.analysis_gateway import AnalysisGatewayError
from hr_assistant.services.analysis_orchestrator import (
    UNEXPECTED_ERROR_MESSAGE,
    AnalysisOrchestrator,
    AnalysisRefused,
    AnalysisRunFailed,
)
from hr_assistant.session.presentation import select
from hr_assistant.session.state import (
    AnalysisFailed,
    AnalysisStarted,
    AnalysisSucceeded,
    DocumentSlot,
    ExtractionFailed,
    ExtractionStarted,
    ExtractionSucceeded,
    SessionEvent,
    SessionState,
    Slot,
    SlotCleared,
    TabSelected,
    TextPasted,
    is_stale,
)

logger = logging.getLogger(__name__)


class SessionNotFound(LookupError):
    pass


class SlotBusy(RuntimeError):
    pass


class AnalysisInProgress(RuntimeError):
    pass


def _require(session_id: str) -> SessionState:
    state = session_store.get_session(session_id)
    if state is None:
        raise SessionNotFound("Session not found or expired.")
    return state


def _dispatch(session_id: str, event: SessionEvent) -> SessionState:
    state = session_store.dispatch(session_id, event)
    if state is None:
        raise SessionNotFound("Session not found or expired.")
    return state


def create_session() -> tuple[str, SessionState]:
    session_id, state = session_store.create_session()
    logger.info("session_created session=%s", session_id[:8])
    return session_id, state


def get_session(session_id: str) -> SessionState:
    return _require(session_id)


def end_session(session_id: str) -> None:
    if not session_store.delete_session(session_id):
        raise SessionNotFound("Session not found or expired.")
    logger.info("session_ended session=%s", session_id[:8])


def paste_text(session_id: str, slot: Slot, text: str) -> SessionState:
    _require(session_id)
    return _dispatch(session_id, TextPasted(slot=slot, text=text))


def clear_slot(session_id: str, slot: Slot) -> SessionState:
    _require(session_id)
    return _dispatch(session_id, SlotCleared(slot=slot))


def select_tab(session_id: str, tab: AnalysisTab) -> SessionState:
    _require(session_id)
    return _dispatch(session_id, TabSelected(tab=tab))


async def upload_document(
    session_id: str,
    slot: Slot,
    *,
    content: bytes,
    file_name: str,
    mime_type: str,
) -> SessionState:
    state = _require(session_id)
    if state.slot(slot).parsing:
        raise SlotBusy(f"A file is already being read into the {slot.value.replace('_', ' ')} slot.")

    state = _dispatch(session_id, ExtractionStarted(slot=slot, file_name=file_name, mime_type=mime_type))
    generation = state.slot(slot).generation

    try:
        result = await asyncio.to_thread(extract, content, mime_type, file_name)
    except asyncio.CancelledError:
        session_store.dispatch(
            session_id, ExtractionFailed(slot=slot, generation=generation, message="The upload was interrupted.")
        )
        raise
    if result.ok:
        event: ExtractionSucceeded | ExtractionFailed = ExtractionSucceeded(
            slot=slot, generation=generation, text=result.text or ""
        )
    else:
        event = ExtractionFailed(slot=slot, generation=generation, message=result.message or "")

    current = _require(session_id)
    if is_stale(current, event):
        logger.info("extraction_discarded session=%s slot=%s generation=%s", session_id[:8], slot.value, generation)
        return current
    if not result.ok:
        logger.info(
            "extraction_failed session=%s slot=%s reason=%s",
            session_id[:8],
            slot.value,
            result.failure.value if result.failure else "",
        )
    return _dispatch(session_id, event)


async def run_analysis(session_id: str, orchestrator: AnalysisOrchestrator) -> SessionState:
    state = _require(session_id)
    if state.analyzing:
        raise AnalysisInProgress("An analysis is already running for this session.")
    if not state.can_analyze:
        raise AnalysisRefused("Both a resume and a job description are required.")

    state = _dispatch(session_id, AnalysisStarted())
    try:
        results = await orchestrator.analyze(state.resume.text, state.job_description.text)
    except (AnalysisRunFailed, AnalysisGatewayError, AnalysisRefused) as exc:
        return _dispatch(session_id, AnalysisFailed(message=str(exc)))
    except asyncio.CancelledError:
        session_store.dispatch(session_id, AnalysisFailed(message="The analysis was interrupted."))
        raise
    except Exception:  # noqa: BLE001
        logger.exception("analysis_unexpected_error session=%s", session_id[:8])
        return _dispatch(session_id, AnalysisFailed(message=UNEXPECTED_ERROR_MESSAGE))
    return _dispatch(session_id, AnalysisSucceeded(results=results))


def _slot_view(document: DocumentSlot) -> SlotView:
    return SlotView(
        text=document.text,
        file_name=document.file_name,
        mime_type=document.mime_type,
        source_kind=document.source_kind.value if document.source_kind else None,
        parsing=document.parsing,
        error=document.error,
    )


def build_session_view(session_id: str, state: SessionState) -> SessionView:
    return SessionView(
        session_id=session_id,
        resume=_slot_view(state.resume),
        job_description=_slot_view(state.job_description),
        analyzing=state.analyzing,
        error=state.error,
        active_tab=state.active_tab,
        active_tab_label=state.active_tab.label,
        can_analyze=state.can_analyze,
        view=select(state, state.active_tab),
    )
