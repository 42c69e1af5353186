"""
Config Module - Black Box Interface

Purpose: Process-level settings for the Sessionly service
Interface: get_config(), reset_config(), ConfigModule
Hidden: Environment variable names, Kubernetes port parsing, defaults

Covers where the Redis session backend lives, where the API binds, and how
often the in-memory store sweeps expired sessions. Cookie attributes and the
store backend/TTL are typed settings in sessionly.config.provider.
"""

import os
from typing import Any, Dict, Optional


# Keys every ConfigModule guarantees to hold a value for
REQUIRED_CONFIG_KEYS = {
    "redis_host": "Host of the Redis session backend",
    "redis_port": "Port of the Redis session backend",
    "redis_db": "Redis database index holding session keys",
    "host": "Bind address of the session API",
    "port": "Bind port of the session API",
    "log_level": "Level for sessionly loggers (DEBUG, INFO, WARNING, ERROR)",
    "cleanup_interval": "Seconds between expired-session sweeps of the memory store",
}

OPTIONAL_CONFIG_KEYS = {
    "redis_password": {
        "description": "Password for the Redis session backend",
        "default": None,
    },
    "debug": {
        "description": "Run uvicorn with auto reload",
        "default": False,
    },
}


def _parse_redis_port(value: str) -> int:
    """Accept both `6379` and the `tcp://10.0.0.12:6379` form Kubernetes injects."""
    if value.startswith("tcp://"):
        value = value.rsplit(":", 1)[-1]
    return int(value)


class ConfigModule:
    """Service settings read once from the environment."""

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        env = os.environ if environ is None else environ
        self._config = self._read_settings(env)
        self._check_settings()

    @staticmethod
    def _read_settings(env) -> Dict[str, Any]:
        return {
            "redis_host": env.get("REDIS_HOST", "localhost"),
            "redis_port": _parse_redis_port(env.get("REDIS_PORT", "6379")),
            "redis_db": int(env.get("REDIS_DB", "0")),
            "redis_password": env.get("REDIS_PASSWORD"),
            "host": env.get("API_HOST", "0.0.0.0"),
            "port": int(env.get("API_PORT", "8080")),
            "log_level": env.get("LOG_LEVEL", "INFO"),
            "debug": env.get("DEBUG", "false").lower() == "true",
            "cleanup_interval": int(env.get("SESSION_CLEANUP_INTERVAL", "300")),
        }

    def _check_settings(self) -> None:
        """
        Raises:
            ValueError: A required key is unset or the sweep interval is not positive
        """
        missing = [key for key in REQUIRED_CONFIG_KEYS if self._config.get(key) is None]
        if missing:
            raise ValueError(f"Missing session service settings: {', '.join(missing)}")
        if self._config["cleanup_interval"] <= 0:
            raise ValueError("SESSION_CLEANUP_INTERVAL must be a positive number of seconds")

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._config[key] = value

    def get_all(self) -> Dict[str, Any]:
        return self._config.copy()

    def redis_url(self) -> str:
        """URL of the Redis session backend; the password is passed separately."""
        return f"redis://{self.get('redis_host')}:{self.get('redis_port')}/{self.get('redis_db')}"

    @staticmethod
    def get_config_schema() -> Dict[str, Any]:
        """Required and optional setting keys with their descriptions."""
        return {
            "required": REQUIRED_CONFIG_KEYS.copy(),
            "optional": OPTIONAL_CONFIG_KEYS.copy(),
        }


_instance = None


def get_config() -> ConfigModule:
    """Get the configuration module singleton."""
    global _instance
    if _instance is None:
        _instance = ConfigModule()
    return _instance


def reset_config() -> None:
    """Drop the singleton so the next get_config() re-reads the environment."""
    global _instance
    _instance = None


__all__ = ["get_config", "reset_config", "ConfigModule"]
