"""
Shared pytest fixtures for Sessionly tests.

This module provides common fixtures including:
- RecordingStore: In-memory SessionStore that records calls and injects failures
- Redis mocks for the Redis session store
- FastAPI test app utilities for middleware tests
"""

import os
import sys
from typing import List, Optional, Tuple
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sessionly.config.provider import CookieConfig
from sessionly.modules.middleware import SessionMiddleware, destroy_session, session
from sessionly.modules.session import Session, SessionBackendError
from sessionly.modules.storage import MemorySessionStore

COOKIE_NAME = "sid"


# =============================================================================
# Session Store Doubles
# =============================================================================


class RecordingStore(MemorySessionStore):
    """
    MemorySessionStore that records every call.

    Set `fail_on` to an operation name ("read", "write", "delete") to make
    that operation raise SessionBackendError.
    """

    def __init__(self, ttl: int = 3600):
        super().__init__(ttl=ttl)
        self.calls: List[Tuple[str, Optional[str]]] = []
        self.fail_on: set = set()

    def calls_to(self, operation: str) -> List[Tuple[str, Optional[str]]]:
        return [c for c in self.calls if c[0] == operation]

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.fail_on:
            raise SessionBackendError(operation, "injected failure")

    async def read(self, session_id: str) -> Session:
        self.calls.append(("read", session_id))
        self._maybe_fail("read")
        return await super().read(session_id)

    async def write(self, session: Session) -> str:
        self.calls.append(("write", session.id))
        self._maybe_fail("write")
        return await super().write(session)

    async def delete(self, session_id: str) -> None:
        self.calls.append(("delete", session_id))
        self._maybe_fail("delete")
        await super().delete(session_id)


@pytest.fixture
def store():
    """Recording in-memory session store."""
    return RecordingStore()


# =============================================================================
# Redis Mocking Infrastructure
# =============================================================================


@pytest.fixture
def mock_redis():
    """Create a mock Redis client for async operations."""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock(return_value=True)
    redis.setex = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    return redis


@pytest.fixture
def mock_redis_with_data():
    """
    Redis mock with in-memory data storage for more realistic tests.

    This allows testing code that reads back what it writes. TTLs are
    recorded in `_ttls` rather than enforced.
    """
    storage = {}
    ttls = {}

    redis = AsyncMock()

    async def mock_set(key, value, ex=None, nx=False, **kwargs):
        if nx and key in storage:
            return None
        storage[key] = value
        ttls[key] = ex
        return True

    async def mock_setex(key, ttl, value):
        storage[key] = value
        ttls[key] = ttl
        return True

    async def mock_get(key):
        return storage.get(key)

    async def mock_delete(*keys):
        count = 0
        for key in keys:
            if key in storage:
                del storage[key]
                ttls.pop(key, None)
                count += 1
        return count

    redis.set = mock_set
    redis.setex = mock_setex
    redis.get = mock_get
    redis.delete = mock_delete
    redis._storage = storage  # Expose for test assertions
    redis._ttls = ttls

    return redis


@pytest.fixture
def failing_redis():
    """Redis mock whose every command fails with a connection error."""
    redis = AsyncMock()
    error = RedisConnectionError("Connection refused")
    redis.get = AsyncMock(side_effect=error)
    redis.set = AsyncMock(side_effect=error)
    redis.setex = AsyncMock(side_effect=error)
    redis.delete = AsyncMock(side_effect=error)
    return redis


# =============================================================================
# Test App Setup
# =============================================================================


def create_test_app(store, cookie: Optional[CookieConfig] = None) -> FastAPI:
    """
    Create a minimal FastAPI app with the session middleware installed.

    Endpoints exercise the handler-facing accessors directly.
    """
    app = FastAPI()
    middleware = SessionMiddleware(store, cookie or CookieConfig(name=COOKIE_NAME))
    app.middleware("http")(middleware)

    @app.get("/noop")
    async def noop():
        return {"ok": True}

    @app.get("/touch")
    async def touch(request: Request):
        first = session(request)
        second = session(request)
        count = int(first.get("count", "0")) + 1
        first.set("count", str(count))
        return {
            "same_instance": first is second,
            "count": second.get("count"),
            "status": request.state.session_status,
        }

    @app.get("/destroy")
    async def destroy(request: Request):
        destroy_session(request)
        return {"destroyed": True}

    @app.get("/destroy-then-create")
    async def destroy_then_create(request: Request):
        destroy_session(request)
        session(request).set("fresh", "yes")
        return {"ok": True}

    @app.get("/boom")
    async def boom(request: Request):
        session(request).set("partial", "yes")
        raise RuntimeError("handler failed")

    return app


@pytest.fixture
def client(store):
    """TestClient over the test app; server errors become 500 responses."""
    return TestClient(create_test_app(store), raise_server_exceptions=False)


def set_cookie_headers(response) -> List[str]:
    """All Set-Cookie header values of a response."""
    return response.headers.get_list("set-cookie")


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring infrastructure"
    )
