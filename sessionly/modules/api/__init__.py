"""
API Module - Black Box Interface

Purpose: Shared data models for the HTTP API and storage backends
Interface: Pydantic models and enums
Hidden: Validation rules

Models are the contract between modules.
"""

from .models import SessionRecord, SessionResponse, SessionStatus, SetValueRequest

__all__ = [
    "SessionRecord",
    "SessionResponse",
    "SessionStatus",
    "SetValueRequest",
]
