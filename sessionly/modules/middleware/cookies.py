"""Session cookie writing, including the clearing directive."""

from datetime import UTC, datetime
from typing import Optional

from starlette.responses import Response

from ...config.provider import CookieConfig

# Clearing directive: empty value, expired at the Unix epoch
CLEAR_COOKIE_VALUE = ""
CLEAR_COOKIE_EXPIRES = datetime(1970, 1, 1, tzinfo=UTC)


def set_session_cookie(
    response: Response,
    cookie: CookieConfig,
    session_id: str,
    expires_at: Optional[datetime],
) -> None:
    """Point the client at a persisted session."""
    response.set_cookie(
        key=cookie.name,
        value=session_id,
        expires=expires_at,
        path=cookie.path,
        domain=cookie.domain,
        secure=cookie.secure,
        httponly=cookie.httponly,
        samesite=cookie.samesite,
    )


def clear_session_cookie(response: Response, cookie: CookieConfig) -> None:
    """Instruct the client to discard its session cookie (no max-age)."""
    response.set_cookie(
        key=cookie.name,
        value=CLEAR_COOKIE_VALUE,
        expires=CLEAR_COOKIE_EXPIRES,
        path=cookie.path,
        domain=cookie.domain,
        secure=cookie.secure,
        httponly=cookie.httponly,
        samesite=cookie.samesite,
    )
