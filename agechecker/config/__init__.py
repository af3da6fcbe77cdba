"""Configuration module."""

from .settings import Settings, TelegramSettings, get_settings

__all__ = ["Settings", "TelegramSettings", "get_settings"]
