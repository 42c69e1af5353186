"""Per-request session accessors for route handlers."""

from starlette.requests import Request

from ..session.cache import SessionCache
from ..session.session import Session

# Attribute of request.state holding the request's SessionCache
CACHE_STATE_KEY = "session_cache"


def session_cache(request: Request) -> SessionCache:
    """
    Return the SessionCache the middleware attached to this request.

    Raises:
        RuntimeError: If SessionMiddleware did not handle the request
    """
    cache = getattr(request.state, CACHE_STATE_KEY, None)
    if cache is None:
        raise RuntimeError("SessionMiddleware is not installed for this application")
    return cache


def session(request: Request) -> Session:
    """Return the current session, creating one if needed."""
    return session_cache(request).get()


def destroy_session(request: Request) -> None:
    """Destroy the current session, if one exists."""
    session_cache(request).clear()


async def get_session(request: Request) -> Session:
    """FastAPI dependency: the current session (get-or-create)."""
    return session(request)
