"""
In-memory holding area for AI imports awaiting operator confirmation.

Sessions never expire unless a TTL is configured
(IMPORT_SESSION_TTL_MINUTES). Single-process only.
"""
from datetime import datetime, timedelta
from typing import Optional

from config import settings
from models.reconciliation import ImportSession

_sessions: dict[str, tuple[Optional[datetime], ImportSession]] = {}


def store_session(session: ImportSession, ttl_minutes: Optional[int] = None) -> str:
    """Store (or replace) a session, return its id."""
    ttl = ttl_minutes if ttl_minutes is not None else settings.import_session_ttl_minutes
    expires_at = datetime.now() + timedelta(minutes=ttl) if ttl else None
    _sessions[session.id] = (expires_at, session)
    _cleanup_expired()
    return session.id


def retrieve_session(session_id: str) -> Optional[ImportSession]:
    """Session by id. Returns None if expired/not found."""
    entry = _sessions.get(session_id)
    if entry is None:
        return None
    expires_at, session = entry
    if expires_at is not None and datetime.now() > expires_at:
        del _sessions[session_id]
        return None
    return session


def delete_session(session_id: str) -> None:
    """Remove session after confirm or discard."""
    _sessions.pop(session_id, None)


def clear_sessions() -> None:
    """Drop every pending session."""
    _sessions.clear()


def _cleanup_expired() -> None:
    """Remove all expired entries."""
    now = datetime.now()
    expired = [k for k, (exp, _) in _sessions.items() if exp is not None and now > exp]
    for k in expired:
        del _sessions[k]
