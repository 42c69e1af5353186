"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Optional, Protocol

SAMESITE_VALUES = ("lax", "strict", "none")
STORE_BACKENDS = ("memory", "redis")


@dataclass(frozen=True)
class CookieConfig:
    """Session cookie configuration."""
    name: str = "sessionly-session"
    path: str = "/"
    domain: Optional[str] = None
    secure: bool = False
    httponly: bool = True
    samesite: Optional[str] = "lax"

    def __post_init__(self):
        if not self.name:
            raise ValueError("Session cookie name must not be empty")
        if self.samesite is not None and self.samesite not in SAMESITE_VALUES:
            raise ValueError(
                f"Invalid SameSite value: {self.samesite}. Expected one of {SAMESITE_VALUES}"
            )


@dataclass(frozen=True)
class StoreConfig:
    """Session store configuration."""
    backend: str = "memory"
    ttl: int = 3600
    key_prefix: str = "session:"

    def __post_init__(self):
        if self.backend not in STORE_BACKENDS:
            raise ValueError(
                f"Unknown session store: {self.backend}. Expected one of {STORE_BACKENDS}"
            )
        if self.ttl <= 0:
            raise ValueError("Session TTL must be a positive number of seconds")


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_cookie_config(self) -> CookieConfig:
        """Get session cookie configuration."""
        ...

    def get_store_config(self) -> StoreConfig:
        """Get session store configuration."""
        ...


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_cookie_config(self) -> CookieConfig:
        """Get session cookie configuration from environment variables."""
        samesite = os.getenv("SESSION_COOKIE_SAMESITE", "lax").lower()
        return CookieConfig(
            name=os.getenv("SESSION_COOKIE_NAME", "sessionly-session"),
            path=os.getenv("SESSION_COOKIE_PATH", "/"),
            domain=os.getenv("SESSION_COOKIE_DOMAIN") or None,
            secure=_env_flag("SESSION_COOKIE_SECURE", "false"),
            httponly=_env_flag("SESSION_COOKIE_HTTPONLY", "true"),
            # "unset" leaves the attribute off the cookie
            samesite=None if samesite == "unset" else samesite,
        )

    def get_store_config(self) -> StoreConfig:
        """Get session store configuration from environment variables."""
        return StoreConfig(
            backend=os.getenv("SESSION_STORE", "memory").lower(),
            ttl=int(os.getenv("SESSION_TTL", "3600")),
            key_prefix=os.getenv("SESSION_KEY_PREFIX", "session:"),
        )
