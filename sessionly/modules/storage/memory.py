import logging
from datetime import UTC, datetime, timedelta
from typing import Dict

from ..api.models import SessionRecord
from ..session.errors import SessionNotFound
from ..session.session import Session
from .interfaces import generate_session_id

logger = logging.getLogger(__name__)


class MemorySessionStore:
    """
    In-process session store.

    Suitable for a single worker and for tests. Entries expire after `ttl`
    seconds without a write. Reads hand out copies, so handler mutations only
    become durable through write().
    """

    def __init__(self, ttl: int = 3600):
        """
        Initialize memory store.

        Args:
            ttl: Session time-to-live in seconds
        """
        self.ttl = ttl
        self._records: Dict[str, SessionRecord] = {}

    async def read(self, session_id: str) -> Session:
        record = self._records.get(session_id)
        if record is None:
            raise SessionNotFound(session_id)

        if record.expires_at <= datetime.now(UTC):
            del self._records[session_id]
            raise SessionNotFound(session_id, "Session expired")

        return record.to_session()

    async def write(self, session: Session) -> str:
        session_id = session.id
        if session_id is None:
            session_id = generate_session_id()
            while session_id in self._records:
                session_id = generate_session_id()

        session.assign_id(session_id, datetime.now(UTC) + timedelta(seconds=self.ttl))
        self._records[session_id] = SessionRecord.from_session(session)
        return session_id

    async def delete(self, session_id: str) -> None:
        self._records.pop(session_id, None)

    async def cleanup_expired(self) -> int:
        """Remove expired sessions. Returns number removed."""
        now = datetime.now(UTC)
        expired = [sid for sid, record in self._records.items() if record.expires_at <= now]
        for sid in expired:
            del self._records[sid]

        if expired:
            logger.debug(f"Removed {len(expired)} expired sessions")
        return len(expired)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._records
