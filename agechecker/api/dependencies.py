"""API dependency injection."""

import logging
from typing import Optional

from agechecker.config import get_settings
from agechecker.detection.account_lookup import AccountLookup
from agechecker.ingestion.telegram_client import TelegramBotClient, TelegramClientBase
from agechecker.monitoring.metrics import MetricsCollector

logger = logging.getLogger(__name__)

# Global instances (lazily initialized)
_telegram_client: Optional[TelegramClientBase] = None
_account_lookup: Optional[AccountLookup] = None
_metrics: Optional[MetricsCollector] = None


def get_telegram_client() -> TelegramClientBase:
    """Get Telegram Bot API client instance."""
    global _telegram_client

    if _telegram_client is not None:
        return _telegram_client

    settings = get_settings()
    if not settings.telegram.bot_token:
        logger.warning("TELEGRAM_BOT_TOKEN is not set. Lookups will use username-only estimation.")

    _telegram_client = TelegramBotClient(
        token=settings.telegram.bot_token,
        api_base_url=settings.telegram.api_base_url,
        timeout=settings.telegram.timeout,
    )
    return _telegram_client


def get_metrics() -> MetricsCollector:
    """Get MetricsCollector instance."""
    global _metrics

    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def get_account_lookup() -> AccountLookup:
    """Get AccountLookup instance with its Telegram client."""
    global _account_lookup

    if _account_lookup is not None:
        return _account_lookup

    settings = get_settings()
    _account_lookup = AccountLookup(
        client=get_telegram_client(),
        request_delay_seconds=settings.telegram.request_delay_seconds,
        metrics=get_metrics(),
    )
    return _account_lookup


async def cleanup():
    """Close upstream connections on shutdown."""
    global _telegram_client, _account_lookup

    if _telegram_client:
        try:
            await _telegram_client.close()
        except Exception as e:
            logger.warning(f"Error closing Telegram client: {e}")
        _telegram_client = None

    _account_lookup = None
    logger.info("Cleaned up all connections")
