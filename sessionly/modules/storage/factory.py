"""
Session Store Factory following Black Box Design principles.

This factory:
- Picks the session backend named by configuration
- Wires the Redis client into it when needed
- Returns only the SessionStore interface
"""

import logging
from typing import Any, Optional

from ...config.provider import StoreConfig
from .interfaces import SessionStore
from .memory import MemorySessionStore
from .redis_store import RedisSessionStore

logger = logging.getLogger(__name__)


class StoreFactory:
    """Composition root for session storage."""

    @staticmethod
    def build(store_config: StoreConfig, redis_client: Optional[Any] = None) -> SessionStore:
        """
        Build the configured session store.

        Args:
            store_config: Store configuration
            redis_client: Async Redis client, required for the redis backend

        Returns:
            SessionStore implementation

        Raises:
            ValueError: Redis backend requested without a client
        """
        if store_config.backend == "redis":
            if redis_client is None:
                raise ValueError("The redis session store needs a Redis client")
            logger.info(f"Using Redis session store (ttl={store_config.ttl}s)")
            return RedisSessionStore(
                redis_client, ttl=store_config.ttl, key_prefix=store_config.key_prefix
            )

        logger.info(f"Using in-memory session store (ttl={store_config.ttl}s)")
        return MemorySessionStore(ttl=store_config.ttl)
