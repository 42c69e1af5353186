"""
Session Module - Black Box Interface

Purpose: Per-visitor session state and its per-request cache
Interface: Session, SessionCache, SessionNotFound, SessionBackendError
Hidden: Payload validation, identifier assignment rules

Pure in-memory data. Never talks to a store.
"""

from .cache import SessionCache
from .errors import SessionBackendError, SessionError, SessionNotFound
from .session import Session

__all__ = [
    "Session",
    "SessionCache",
    "SessionError",
    "SessionNotFound",
    "SessionBackendError",
]
