"""
Connection sessions.

A session gives a browser a stable user id across reconnects. The client
keeps the session id it was handed in `session_created` and passes it
back as `?session_id=` on the next WebSocket connection; the server then
resumes the same user, so the player keeps their seat in any game.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Session:
    """
    A client session.

    Attributes:
        id: Opaque session identifier handed to the client.
        user_id: Player id used in games. Stable for the session's lifetime.
        created_at: When the session was created (UTC).
        last_seen_at: Last time a connection used this session (UTC).
    """

    id: str
    user_id: str
    created_at: datetime = field(default_factory=_utcnow)
    last_seen_at: datetime = field(default_factory=_utcnow)

    def touch(self) -> None:
        self.last_seen_at = _utcnow()


class SessionManager:
    """In-memory session registry. A single instance is used by the server."""

    def __init__(self) -> None:
        self.sessions: dict[str, Session] = {}

    def create(self) -> Session:
        """Create a session with fresh session and user ids."""
        session = Session(id=uuid.uuid4().hex, user_id=uuid.uuid4().hex)
        self.sessions[session.id] = session
        logger.debug(f"Session created for user {session.user_id}")
        return session

    def get(self, session_id: str) -> Optional[Session]:
        return self.sessions.get(session_id)

    def resume_or_create(self, session_id: Optional[str]) -> tuple[Session, bool]:
        """
        Resume a known session, or start a new one.

        Args:
            session_id: Session id presented by the client, if any.

        Returns:
            Tuple of (session, created) where created is True for a new session.
        """
        session = self.get(session_id) if session_id else None
        if session is not None:
            session.touch()
            return session, False
        return self.create(), True
