"""Upstream data sources for profile resolution."""

from .telegram_client import TelegramAPIError, TelegramBotClient, TelegramClientBase

__all__ = ["TelegramAPIError", "TelegramBotClient", "TelegramClientBase"]
