"""Resolves a Telegram username and estimates its account age."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from agechecker.ingestion.telegram_client import (
    TelegramAPIError,
    TelegramChat,
    TelegramClientBase,
)
from agechecker.monitoring.metrics import MetricsCollector

from .combiner import AgeEstimateResult, estimate_account_age
from .formatting import format_date, human_age
from .username_patterns import normalize_username

logger = logging.getLogger(__name__)

RESOLVED_NOTE = (
    "This is an estimated creation date based on available data. "
    "Actual creation date may vary. This tool is not affiliated with Telegram."
)
FALLBACK_NOTE = (
    "This is an estimated creation date based on username pattern due to limited data. "
    "Actual creation date may vary. This tool is not affiliated with Telegram."
)


@dataclass
class ProfileInfo:
    """Public profile fields reported alongside the estimate."""

    username: str
    user_id: str = "0"
    nickname: str = ""
    first_name: str = ""
    last_name: str = ""
    avatar: str = ""
    followers: int = 0
    verified: bool = False
    description: str = ""


@dataclass
class LookupResult:
    """Profile plus age estimate for one username."""

    profile: ProfileInfo
    estimate: AgeEstimateResult
    note: str
    resolved: bool
    looked_up_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_response(self) -> dict:
        """Shape the result as the public JSON response."""
        estimate = self.estimate
        return {
            "username": self.profile.username,
            "nickname": self.profile.nickname,
            "avatar": self.profile.avatar,
            "followers": self.profile.followers,
            "total_likes": 0,
            "verified": self.profile.verified,
            "description": self.profile.description,
            "region": "Unknown",
            "user_id": self.profile.user_id,
            "first_name": self.profile.first_name,
            "last_name": self.profile.last_name,
            "estimated_creation_date": format_date(estimate.estimated_date),
            "estimated_creation_date_range": estimate.date_range.to_dict(),
            "account_age": human_age(estimate.estimated_date, now=self.looked_up_at),
            "estimation_confidence": estimate.confidence,
            "estimation_method": estimate.method,
            "accuracy_range": estimate.accuracy,
            "estimation_details": {
                "all_estimates": [e.to_dict() for e in estimate.all_estimates],
                "note": self.note,
            },
        }


class AccountLookup:
    """Looks up a username via the Bot API and estimates its creation date."""

    def __init__(
        self,
        client: TelegramClientBase,
        request_delay_seconds: float = 1.0,
        metrics: Optional[MetricsCollector] = None,
    ):
        """
        Initialize lookup orchestrator.

        Args:
            client: Telegram Bot API client
            request_delay_seconds: Pause before each upstream call
            metrics: Metrics collector
        """
        self.client = client
        self.request_delay_seconds = request_delay_seconds
        self.metrics = metrics or MetricsCollector()

    async def lookup(self, username: str) -> LookupResult:
        """
        Resolve a username and estimate its account age.

        Falls back to a username-only estimate when the Bot API cannot
        resolve the account.

        Args:
            username: Telegram username, with or without leading "@"

        Returns:
            LookupResult
        """
        started = time.perf_counter()
        username = normalize_username(username)

        if self.request_delay_seconds > 0:
            await asyncio.sleep(self.request_delay_seconds)

        chat = await self._resolve_chat(username)

        if chat is not None:
            avatar = await self._resolve_avatar(chat.id)
            profile = ProfileInfo(
                username=normalize_username(chat.username or "") or username,
                user_id=str(chat.id),
                nickname=chat.display_name,
                first_name=chat.first_name or "",
                last_name=chat.last_name or "",
                avatar=avatar,
                followers=chat.participant_count,
                verified=chat.verified,
                description=chat.description or chat.bio or "",
            )
            estimate = estimate_account_age(str(chat.id), chat.username or username)
            result = LookupResult(profile, estimate, RESOLVED_NOTE, resolved=True)
        else:
            logger.info(f"Falling back to static estimation for username: {username}")
            estimate = estimate_account_age("0", username)
            result = LookupResult(ProfileInfo(username=username), estimate, FALLBACK_NOTE, resolved=False)

        self.metrics.record_lookup(
            confidence=estimate.confidence,
            source="telegram" if result.resolved else "fallback",
            latency_seconds=time.perf_counter() - started,
        )
        return result

    async def _resolve_chat(self, username: str) -> Optional[TelegramChat]:
        """Fetch the chat for a username, or None if the Bot API cannot."""
        logger.info(f"Attempting Telegram Bot API for username: {username}")
        try:
            chat = await self.client.get_chat(f"@{username}")
        except TelegramAPIError as e:
            logger.info(f"Telegram Bot API failed for {username}: {e}")
            self.metrics.record_upstream_failure("chat")
            return None

        if not chat.id:
            return None
        return chat

    async def _resolve_avatar(self, user_id: int) -> str:
        """Return the URL of the user's newest profile photo, or ""."""
        try:
            photos = await self.client.get_user_profile_photos(user_id)
        except TelegramAPIError as e:
            logger.warning(f"Failed to get profile photos for {user_id}: {e}")
            self.metrics.record_upstream_failure("photos")
            return ""

        if photos.total_count == 0 or not photos.photos or not photos.photos[0]:
            return ""

        try:
            file_path = await self.client.get_file(photos.photos[0][0].file_id)
        except TelegramAPIError as e:
            logger.warning(f"Failed to get file for {user_id}: {e}")
            self.metrics.record_upstream_failure("file")
            return ""

        return self.client.file_url(file_path)
