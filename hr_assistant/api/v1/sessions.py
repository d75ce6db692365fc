from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from hr_assistant.core.config import settings
from hr_assistant.core.rate_limit import analysis_rate_limit, rate_limit
from hr_assistant.schemas.session import PasteTextRequest, SelectTabRequest, SessionView
from hr_assistant.services import session_service
from hr_assistant.services.analysis_orchestrator import AnalysisOrchestrator, AnalysisRefused, get_orchestrator
from hr_assistant.services.session_service import AnalysisInProgress, SessionNotFound, SlotBusy
from hr_assistant.session.state import Slot

router = APIRouter()

_READ_CHUNK_BYTES = 1024 * 64


def _not_found(exc: SessionNotFound) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


async def _read_upload(file: UploadFile) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_READ_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large. Maximum allowed size is {settings.max_upload_bytes // (1024 * 1024)} MB.",
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/sessions", response_model=SessionView, status_code=status.HTTP_201_CREATED)
@rate_limit()
async def create_session(request: Request):
    session_id, state = session_service.create_session()
    return session_service.build_session_view(session_id, state)


@router.get("/sessions/{session_id}", response_model=SessionView)
async def get_session(session_id: str):
    try:
        state = session_service.get_session(session_id)
    except SessionNotFound as exc:
        raise _not_found(exc) from exc
    return session_service.build_session_view(session_id, state)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def end_session(session_id: str):
    try:
        session_service.end_session(session_id)
    except SessionNotFound as exc:
        raise _not_found(exc) from exc


@router.put("/sessions/{session_id}/slots/{slot}/text", response_model=SessionView)
@rate_limit()
async def paste_text(request: Request, session_id: str, slot: Slot, payload: PasteTextRequest):
    try:
        state = session_service.paste_text(session_id, slot, payload.text)
    except SessionNotFound as exc:
        raise _not_found(exc) from exc
    return session_service.build_session_view(session_id, state)


@router.post("/sessions/{session_id}/slots/{slot}/upload", response_model=SessionView)
@rate_limit()
async def upload_document(request: Request, session_id: str, slot: Slot, file: UploadFile = File(...)):
    content = await _read_upload(file)
    try:
        state = await session_service.upload_document(
            session_id,
            slot,
            content=content,
            file_name=file.filename or "uploaded-file",
            mime_type=file.content_type or "",
        )
    except SessionNotFound as exc:
        raise _not_found(exc) from exc
    except SlotBusy as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return session_service.build_session_view(session_id, state)


@router.delete("/sessions/{session_id}/slots/{slot}", response_model=SessionView)
@rate_limit()
async def clear_slot(request: Request, session_id: str, slot: Slot):
    try:
        state = session_service.clear_slot(session_id, slot)
    except SessionNotFound as exc:
        raise _not_found(exc) from exc
    return session_service.build_session_view(session_id, state)


@router.post("/sessions/{session_id}/analyze", response_model=SessionView)
@analysis_rate_limit()
async def analyze_session(
    request: Request,
    session_id: str,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    try:
        state = await session_service.run_analysis(session_id, orchestrator)
    except SessionNotFound as exc:
        raise _not_found(exc) from exc
    except AnalysisRefused as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except AnalysisInProgress as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return session_service.build_session_view(session_id, state)


@router.put("/sessions/{session_id}/tab", response_model=SessionView)
@rate_limit()
async def select_tab(request: Request, session_id: str, payload: SelectTabRequest):
    try:
        state = session_service.select_tab(session_id, payload.tab)
    except SessionNotFound as exc:
        raise _not_found(exc) from exc
    return session_service.build_session_view(session_id, state)
