from .provider import ConfigProvider, EnvConfigProvider, SessionClientConfig

__all__ = ["ConfigProvider", "EnvConfigProvider", "SessionClientConfig"]
