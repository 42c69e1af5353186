"""
Storage Module - Black Box Interface

Purpose: Abstract all session persistence
Interface: SessionStore (read(), write(), delete()), StoreFactory.build()
Hidden: Redis specifics, connection pooling, serialization, identifier minting

Can be replaced with any storage backend without affecting other modules.
"""

from typing import Optional

import redis.asyncio as redis

from .factory import StoreFactory
from .interfaces import SessionStore, generate_session_id
from .memory import MemorySessionStore
from .redis_store import RedisSessionStore


class StorageModule:
    """Owns the Redis connection used by the Redis session store."""

    def __init__(self, connection_url: str, password: Optional[str] = None):
        """Initialize storage with connection URL."""
        self.url = connection_url
        self.password = password
        self._client = None

    @property
    def client(self) -> redis.Redis:
        """Get storage connection (connects lazily on first command)."""
        if not self._client:
            # Password passed separately to avoid URL encoding issues
            self._client = redis.from_url(
                self.url, password=self.password, encoding="utf-8", decode_responses=True
            )
        return self._client

    async def disconnect(self):
        """Close storage connection."""
        if self._client:
            await self._client.aclose()
            self._client = None


__all__ = [
    "MemorySessionStore",
    "RedisSessionStore",
    "SessionStore",
    "StorageModule",
    "StoreFactory",
    "generate_session_id",
]
