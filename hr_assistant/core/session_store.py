from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from hr_assistant.core.config import settings
from hr_assistant.session.state import SessionEvent, SessionState, reduce

_lock = threading.Lock()
_sessions: dict[str, "_SessionRecord"] = {}


@dataclass
class _SessionRecord:
    state: SessionState
    created_at: datetime
    touched_at: datetime


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _ttl() -> timedelta:
    return timedelta(minutes=settings.session_ttl_minutes)


def _busy(state: SessionState) -> bool:
    return state.analyzing or state.parsing_resume or state.parsing_jd


def _expired(record: _SessionRecord, now: datetime) -> bool:
    return not _busy(record.state) and record.touched_at + _ttl() < now


def create_session() -> tuple[str, SessionState]:
    session_id = secrets.token_urlsafe(18)
    now = _utc_now()
    state = SessionState()
    with _lock:
        _sessions[session_id] = _SessionRecord(state=state, created_at=now, touched_at=now)
    return session_id, state


def get_session(session_id: str) -> SessionState | None:
    now = _utc_now()
    with _lock:
        record = _sessions.get(session_id)
        if record is None:
            return None
        if _expired(record, now):
            del _sessions[session_id]
            return None
        record.touched_at = now
        return record.state


def dispatch(session_id: str, event: SessionEvent) -> SessionState | None:
    """Apply ``event`` to the session. Returns ``None`` if the session is gone."""
    now = _utc_now()
    with _lock:
        record = _sessions.get(session_id)
        if record is None:
            return None
        record.state = reduce(record.state, event)
        record.touched_at = now
        return record.state


def delete_session(session_id: str) -> bool:
    with _lock:
        return _sessions.pop(session_id, None) is not None


def purge_expired_sessions(now: datetime | None = None) -> int:
    now = now or _utc_now()
    with _lock:
        expired = [session_id for session_id, record in _sessions.items() if _expired(record, now)]
        for session_id in expired:
            del _sessions[session_id]
    return len(expired)


def session_count() -> int:
    with _lock:
        return len(_sessions)


def clear_sessions() -> None:
    with _lock:
        _sessions.clear()
