"""
Session Middleware Module - Black Box Interface

Purpose: Tie a server-side session to each request through a cookie
Interface: SessionMiddleware, create_session_middleware(), session(), destroy_session()
Hidden: Cookie reconciliation, per-request caching, store orchestration

Can be used by any FastAPI/Starlette app with any SessionStore.
"""

import logging
from typing import Optional

from fastapi import Request
from starlette.responses import Response

from ...config.provider import ConfigProvider, CookieConfig, EnvConfigProvider
from ..api.models import SessionStatus
from ..session.cache import SessionCache
from ..session.errors import SessionBackendError, SessionNotFound
from ..storage.interfaces import SessionStore
from .accessors import CACHE_STATE_KEY, destroy_session, get_session, session, session_cache
from .cookies import (
    CLEAR_COOKIE_EXPIRES,
    CLEAR_COOKIE_VALUE,
    clear_session_cookie,
    set_session_cookie,
)

logger = logging.getLogger(__name__)


class SessionMiddleware:
    """
    Cookie session middleware for FastAPI applications.

    Inbound, resolves the session cookie through the store into a fresh
    per-request SessionCache. Outbound, reconciles the cache with the store
    and the response cookie:

    - a session is held: write it and (re)set the cookie
    - no session, a cookie was sent, and the session was either loaded or
      explicitly destroyed: delete the inbound id and send the clearing
      directive
    - otherwise: leave store and response alone
    """

    def __init__(
        self,
        store: SessionStore,
        cookie: Optional[CookieConfig] = None,
    ):
        """
        Initialize session middleware.

        Args:
            store: Session backend
            cookie: Cookie name and attributes (defaults to CookieConfig())
        """
        self.store = store
        self.cookie = cookie or CookieConfig()

    @property
    def cookie_name(self) -> str:
        return self.cookie.name

    async def load(self, cookie_value: Optional[str], cache: SessionCache) -> SessionStatus:
        """
        Resolve the inbound cookie into the cache.

        Lookup failures never abort the request; the cache stays empty and a
        fresh session is created on demand.
        """
        if not cookie_value:
            return SessionStatus.NO_COOKIE

        try:
            cache.populate(await self.store.read(cookie_value))
        except SessionNotFound:
            logger.debug(f"Session {cookie_value[:8]}... not found or expired")
            return SessionStatus.INVALID
        except SessionBackendError as e:
            logger.error(f"Session lookup failed, continuing without session: {e}")
            return SessionStatus.INVALID

        return SessionStatus.LOADED

    async def save(
        self,
        cache: SessionCache,
        status: SessionStatus,
        cookie_value: Optional[str],
        response: Response,
    ) -> None:
        """
        Reconcile the cache with the store and the response cookie.

        Raises:
            SessionBackendError: The write or delete failed
        """
        current = cache.peek()

        if current is not None:
            try:
                session_id = await self.store.write(current)
            except SessionBackendError as e:
                logger.error(f"Failed to persist session: {e}")
                raise
            set_session_cookie(response, self.cookie, session_id, current.expires_at)

        elif cookie_value and (status is SessionStatus.LOADED or cache.destroyed):
            try:
                await self.store.delete(cookie_value)
            except SessionBackendError as e:
                logger.error(f"Failed to destroy session {cookie_value[:8]}...: {e}")
                raise
            logger.info(f"Destroyed session {cookie_value[:8]}...")
            clear_session_cookie(response, self.cookie)

    async def __call__(self, request: Request, call_next):
        """Process the request through the session middleware."""
        cache = SessionCache()
        setattr(request.state, CACHE_STATE_KEY, cache)

        cookie_value = request.cookies.get(self.cookie.name)
        status = await self.load(cookie_value, cache)
        request.state.session_status = status

        # Exceptions and cancellation propagate before any store mutation
        response = await call_next(request)

        await self.save(cache, status, cookie_value, response)
        return response


def create_session_middleware(
    store: SessionStore,
    config_provider: Optional[ConfigProvider] = None,
) -> SessionMiddleware:
    """
    Factory function to create session middleware.

    Args:
        store: SessionStore implementation
        config_provider: Source of cookie settings (defaults to environment)

    Returns:
        Configured SessionMiddleware instance, register it with
        app.middleware("http")
    """
    provider = config_provider or EnvConfigProvider()
    cookie = provider.get_cookie_config()
    logger.info(f"Session cookie '{cookie.name}' (secure={cookie.secure}, samesite={cookie.samesite})")
    return SessionMiddleware(store=store, cookie=cookie)


# Module interface - what this module provides
__all__ = [
    "CLEAR_COOKIE_EXPIRES",
    "CLEAR_COOKIE_VALUE",
    "SessionMiddleware",
    "create_session_middleware",
    "destroy_session",
    "get_session",
    "session",
    "session_cache",
]
