from datetime import UTC, datetime
from typing import Dict, Iterator, Optional


class Session:
    """
    Server-side record of per-visitor state.

    Pure in-memory data: no store or network calls happen here. A session
    without an identifier is new; the store assigns one the first time the
    session is written.
    """

    def __init__(
        self,
        session_id: Optional[str] = None,
        data: Optional[Dict[str, str]] = None,
        created_at: Optional[datetime] = None,
        expires_at: Optional[datetime] = None,
    ):
        """
        Initialize a session.

        Args:
            session_id: Store-assigned identifier, None for a new session
            data: Initial payload (copied)
            created_at: Creation time, defaults to now (UTC)
            expires_at: Expiration time, set by the store on write
        """
        self._id = session_id
        self._data: Dict[str, str] = {}
        self.created_at = created_at or datetime.now(UTC)
        self.expires_at = expires_at

        for key, value in (data or {}).items():
            self.set(key, value)

    @property
    def id(self) -> Optional[str]:
        return self._id

    @property
    def is_new(self) -> bool:
        """True until the store has assigned an identifier."""
        return self._id is None

    @property
    def data(self) -> Dict[str, str]:
        """Copy of the payload."""
        return dict(self._data)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._data.get(key, default)

    def set(self, key: str, value: str) -> None:
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError(
                f"Session keys and values must be str, got "
                f"{type(key).__name__} -> {type(value).__name__}"
            )
        self._data[key] = value

    def remove(self, key: str) -> None:
        """Remove a key if present."""
        self._data.pop(key, None)

    def assign_id(self, session_id: str, expires_at: datetime) -> None:
        """
        Record the identifier and expiration handed out by a store write.

        Raises:
            ValueError: If the session already carries a different identifier
        """
        if self._id is not None and self._id != session_id:
            raise ValueError("Session already has a different identifier")
        self._id = session_id
        self.expires_at = expires_at

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        # An empty payload is still a session
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Session):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    # Mutable entity: identity changes at first persistence
    __hash__ = None

    def __repr__(self) -> str:
        label = self._id[:8] + "..." if self._id else "new"
        return f"Session({label}, keys={len(self._data)})"
