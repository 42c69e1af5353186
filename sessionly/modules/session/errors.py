"""Session error taxonomy shared by stores and the middleware."""

from typing import Optional


class SessionError(Exception):
    """Base class for session lifecycle errors."""


class SessionNotFound(SessionError):
    """
    The identifier is unknown to the store or has expired.

    Recoverable: callers treat it as "start with a fresh session".
    """

    def __init__(self, session_id: str, message: Optional[str] = None):
        self.session_id = session_id
        super().__init__(message or f"Session not found: {session_id[:8]}...")


class SessionBackendError(SessionError):
    """The store could not complete an operation (I/O, connectivity)."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"Session store {operation} failed: {message}")
