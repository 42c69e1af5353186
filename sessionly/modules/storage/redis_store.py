import logging
from datetime import UTC, datetime, timedelta

from pydantic import ValidationError
from redis.exceptions import RedisError

from ..api.models import SessionRecord
from ..session.errors import SessionBackendError, SessionNotFound
from ..session.session import Session
from .interfaces import generate_session_id

logger = logging.getLogger(__name__)

# Attempts at claiming a fresh identifier before giving up
MAX_ID_ATTEMPTS = 5


class RedisSessionStore:
    def __init__(self, redis_client, ttl: int = 3600, key_prefix: str = "session:"):
        """
        Initialize Redis session store.

        Args:
            redis_client: Async Redis client (decode_responses=True)
            ttl: Session TTL in seconds, refreshed on every write
            key_prefix: Prefix for session keys
        """
        self.redis = redis_client
        self.ttl = ttl
        self.key_prefix = key_prefix

    def _key(self, session_id: str) -> str:
        return f"{self.key_prefix}{session_id}"

    async def read(self, session_id: str) -> Session:
        """
        Load a session by identifier.

        Redis expires the key itself, so a missing key covers both unknown
        and expired identifiers.
        """
        try:
            payload = await self.redis.get(self._key(session_id))
        except RedisError as e:
            raise SessionBackendError("read", str(e)) from e

        if payload is None:
            raise SessionNotFound(session_id)

        try:
            record = SessionRecord.model_validate_json(payload)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable session {session_id[:8]}...: {e}")
            raise SessionNotFound(session_id, "Stored session is unreadable") from e

        return record.to_session()

    async def write(self, session: Session) -> str:
        """
        Persist a session and refresh its TTL.

        Logic:
        1. Existing identifier: SETEX overwrites and refreshes the TTL
        2. New session: claim a random identifier with SET NX EX so two
           writers can never end up sharing one
        """
        expires_at = datetime.now(UTC) + timedelta(seconds=self.ttl)

        try:
            if session.id is not None:
                session.assign_id(session.id, expires_at)
                record = SessionRecord.from_session(session)
                await self.redis.setex(self._key(session.id), self.ttl, record.model_dump_json())
                return session.id

            for _ in range(MAX_ID_ATTEMPTS):
                candidate = generate_session_id()
                record = SessionRecord(
                    session_id=candidate,
                    data=session.data,
                    created_at=session.created_at,
                    expires_at=expires_at,
                )
                claimed = await self.redis.set(
                    self._key(candidate), record.model_dump_json(), ex=self.ttl, nx=True
                )
                if claimed:
                    session.assign_id(candidate, expires_at)
                    return candidate
        except RedisError as e:
            raise SessionBackendError("write", str(e)) from e

        raise SessionBackendError("write", "could not claim a unique session identifier")

    async def delete(self, session_id: str) -> None:
        try:
            await self.redis.delete(self._key(session_id))
        except RedisError as e:
            raise SessionBackendError("delete", str(e)) from e
