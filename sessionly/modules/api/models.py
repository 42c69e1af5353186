"""
Sessionly shared data models.

These models define the structure of data passed between
the session middleware, the storage backends and the HTTP API.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

from ..session.session import Session

# Enums


class SessionStatus(str, Enum):
    """Inbound session state of a request."""

    NO_COOKIE = "no_cookie"
    LOADED = "loaded"
    INVALID = "invalid"


# Storage Models


class SessionRecord(BaseModel):
    """Serialized form of a session as kept by a store."""

    session_id: str = Field(..., min_length=1, description="Session identifier")
    data: Dict[str, str] = Field(default_factory=dict, description="Session payload")
    created_at: datetime = Field(..., description="Creation time (UTC)")
    expires_at: datetime = Field(..., description="Expiration time (UTC)")

    @field_validator("created_at", "expires_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        """Naive timestamps are read as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    @classmethod
    def from_session(cls, session: Session) -> "SessionRecord":
        if session.id is None or session.expires_at is None:
            raise ValueError("Only persisted sessions can be recorded")
        return cls(
            session_id=session.id,
            data=session.data,
            created_at=session.created_at,
            expires_at=session.expires_at,
        )

    def to_session(self) -> Session:
        return Session(
            session_id=self.session_id,
            data=self.data,
            created_at=self.created_at,
            expires_at=self.expires_at,
        )


# Request Models (API Input)


class SetValueRequest(BaseModel):
    """Request to store a value in the current session."""

    value: str = Field(..., max_length=4096, description="Value to store")


# Response Models (API Output)


class SessionResponse(BaseModel):
    """Current session as seen by the API."""

    session_id: Optional[str] = Field(None, description="Identifier, null until first persisted")
    data: Dict[str, str] = Field(default_factory=dict)
    is_new: bool = Field(..., description="Whether the session was created by this request")
    status: Optional[SessionStatus] = Field(None, description="Inbound session state")

    @classmethod
    def from_session(
        cls, session: Session, status: Optional[SessionStatus] = None
    ) -> "SessionResponse":
        return cls(session_id=session.id, data=session.data, is_new=session.is_new, status=status)
