"""Session store interfaces following Black Box Design principles."""
import secrets
from typing import Protocol, runtime_checkable

from ..session.session import Session

# 32 random bytes, URL-safe base64 (43 characters)
SESSION_ID_BYTES = 32


def generate_session_id() -> str:
    """Mint an unguessable session identifier."""
    return secrets.token_urlsafe(SESSION_ID_BYTES)


@runtime_checkable
class SessionStore(Protocol):
    """Protocol for session backends - allows swappable implementations."""

    async def read(self, session_id: str) -> Session:
        """
        Load a session.

        Args:
            session_id: Identifier from the session cookie

        Returns:
            A fresh Session instance

        Raises:
            SessionNotFound: Unknown or expired identifier
            SessionBackendError: Storage failure
        """
        ...

    async def write(self, session: Session) -> str:
        """
        Persist a session, minting an identifier if it has none.

        Refreshes the expiration and records identifier and expiration
        on the session.

        Returns:
            The identifier to place in the cookie

        Raises:
            SessionBackendError: Storage failure
        """
        ...

    async def delete(self, session_id: str) -> None:
        """
        Remove a session. Deleting an unknown identifier is not an error.

        Raises:
            SessionBackendError: Storage failure
        """
        ...
