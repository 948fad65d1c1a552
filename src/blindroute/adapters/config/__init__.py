"""Configuration adapters."""

from blindroute.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
