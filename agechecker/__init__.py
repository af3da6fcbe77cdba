"""Telegram account age estimation service."""

__version__ = "1.0.0"
