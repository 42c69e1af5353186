from typing import Optional

from .session import Session


class SessionCache:
    """
    Holds at most one Session for the lifetime of a single request.

    Created fresh by the middleware for every request and discarded once the
    response is built. Every handler asking for the session within one
    request gets the same instance. Not safe for concurrent mutation.
    """

    def __init__(self):
        self._session: Optional[Session] = None
        self._destroyed = False

    def get(self) -> Session:
        """Return the held session, lazily creating an empty one."""
        if self._session is None:
            self._session = Session()
        return self._session

    def peek(self) -> Optional[Session]:
        """Return the held session without creating one."""
        return self._session

    @property
    def destroyed(self) -> bool:
        """True once `clear()` has been called during this request."""
        return self._destroyed

    def clear(self) -> None:
        """Drop the held session, if any, and mark it for destruction."""
        self._session = None
        self._destroyed = True

    def populate(self, session: Session) -> None:
        """Pre-populate with a session loaded from the store."""
        self._session = session
