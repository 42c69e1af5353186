from .provider import ConfigProvider, CookieConfig, EnvConfigProvider, StoreConfig

__all__ = ["ConfigProvider", "CookieConfig", "EnvConfigProvider", "StoreConfig"]
