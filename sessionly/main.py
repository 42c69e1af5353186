#!/usr/bin/env python3
"""
Sessionly - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Builds the session store and middleware
3. Runs the demo session API

All session logic is in the modules, following black box principles.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request, Response

from sessionly.config.provider import ConfigProvider, EnvConfigProvider
from sessionly.logging_config import configure_logging, get_logging_config
from sessionly.modules.api import SessionResponse, SetValueRequest

# Import modules through their black box interfaces
from sessionly.modules.config import get_config
from sessionly.modules.middleware import create_session_middleware, destroy_session, get_session
from sessionly.modules.session import Session
from sessionly.modules.storage import SessionStore, StorageModule, StoreFactory

# Get configuration
config = get_config()

configure_logging(config.get("log_level"))
logger = logging.getLogger(__name__)


async def _cleanup_loop(store, interval: int) -> None:
    """Periodically drop expired sessions from stores that keep them in-process."""
    while True:
        await asyncio.sleep(interval)
        try:
            removed = await store.cleanup_expired()
        except Exception as e:
            logger.warning(f"Expired-session sweep failed, retrying next interval: {e}")
            continue
        if removed:
            logger.info(f"Cleaned up {removed} expired sessions")


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    store: Optional[SessionStore] = None,
) -> FastAPI:
    """
    Build the Sessionly API.

    Args:
        config_provider: Cookie/store settings (defaults to environment)
        store: Session store to use instead of the configured one

    Returns:
        FastAPI application with the session middleware installed
    """
    provider = config_provider or EnvConfigProvider()
    storage: Optional[StorageModule] = None

    if store is None:
        store_config = provider.get_store_config()
        redis_client = None
        if store_config.backend == "redis":
            storage = StorageModule(config.redis_url(), password=config.get("redis_password"))
            redis_client = storage.client
        store = StoreFactory.build(store_config, redis_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Run the expiry sweep and release the store connection on shutdown."""
        logger.info("Starting Sessionly API...")

        cleanup_task = None
        if hasattr(store, "cleanup_expired"):
            cleanup_task = asyncio.create_task(
                _cleanup_loop(store, config.get("cleanup_interval"))
            )

        yield

        logger.info("Shutting down Sessionly API...")
        if cleanup_task:
            cleanup_task.cancel()
            try:
                await cleanup_task
            except asyncio.CancelledError:
                pass
        if storage:
            await storage.disconnect()

    app = FastAPI(
        title="Sessionly API",
        description="Cookie-backed server-side sessions",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.session_store = store

    app.middleware("http")(create_session_middleware(store, provider))

    @app.get("/health")
    async def health():
        """Liveness probe. Never touches the session."""
        return {"status": "healthy"}

    @app.get("/session", response_model=SessionResponse)
    async def read_session(request: Request, current: Session = Depends(get_session)):
        """Return the current session, creating it if needed."""
        return SessionResponse.from_session(
            current, status=getattr(request.state, "session_status", None)
        )

    @app.put("/session/values/{key}", response_model=SessionResponse)
    async def set_value(
        key: str,
        body: SetValueRequest,
        request: Request,
        current: Session = Depends(get_session),
    ):
        """Store a value in the current session."""
        current.set(key, body.value)
        return SessionResponse.from_session(
            current, status=getattr(request.state, "session_status", None)
        )

    @app.delete("/session/values/{key}", response_model=SessionResponse)
    async def remove_value(key: str, request: Request, current: Session = Depends(get_session)):
        """Remove a value from the current session."""
        current.remove(key)
        return SessionResponse.from_session(
            current, status=getattr(request.state, "session_status", None)
        )

    @app.delete("/session", status_code=204)
    async def end_session(request: Request):
        """Destroy the current session and clear the cookie."""
        destroy_session(request)
        return Response(status_code=204)

    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn."""
    uvicorn.run(
        "sessionly.main:app",
        host=config.get("host"),
        port=config.get("port"),
        log_level=config.get("log_level").lower(),
        reload=config.get("debug"),
        log_config=get_logging_config(config.get("log_level")),
    )


if __name__ == "__main__":
    main()
