"""Telegram Bot API client."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

import httpx

logger = logging.getLogger(__name__)


class TelegramAPIError(Exception):
    """Raised when a Bot API call fails or returns ok=false."""

    def __init__(self, message: str, error_code: Optional[int] = None):
        super().__init__(message)
        self.error_code = error_code


class TelegramConfigurationError(TelegramAPIError):
    """Raised when the client is used without a bot token."""


@dataclass
class TelegramChat:
    """Subset of the Bot API Chat object used for profile lookups."""

    id: int
    type: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    bio: Optional[str] = None
    description: Optional[str] = None
    participant_count: int = 0
    verified: bool = False

    @classmethod
    def from_api(cls, data: dict) -> "TelegramChat":
        return cls(
            id=int(data["id"]),
            type=data.get("type", "private"),
            username=data.get("username"),
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            bio=data.get("bio"),
            description=data.get("description"),
            participant_count=data.get("participant_count") or 0,
            verified=bool(data.get("verified") or data.get("is_verified")),
        )

    @property
    def display_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


@dataclass
class TelegramPhotoSize:
    """A single size of a profile photo."""

    file_id: str
    file_unique_id: str
    width: int
    height: int

    @classmethod
    def from_api(cls, data: dict) -> "TelegramPhotoSize":
        return cls(
            file_id=data["file_id"],
            file_unique_id=data.get("file_unique_id", ""),
            width=data.get("width", 0),
            height=data.get("height", 0),
        )


@dataclass
class UserProfilePhotos:
    """Profile photos of a user, each as a list of sizes."""

    total_count: int
    photos: list[list[TelegramPhotoSize]]

    @classmethod
    def from_api(cls, data: dict) -> "UserProfilePhotos":
        return cls(
            total_count=data.get("total_count", 0),
            photos=[
                [TelegramPhotoSize.from_api(size) for size in photo]
                for photo in data.get("photos", [])
            ],
        )


class TelegramClientBase(ABC):
    """Abstract base class for Telegram profile clients."""

    @abstractmethod
    async def get_chat(self, chat_id: Union[int, str]) -> TelegramChat:
        """Look up a chat or user by ID or @username."""
        pass

    @abstractmethod
    async def get_user_profile_photos(self, user_id: int, limit: int = 1) -> UserProfilePhotos:
        """Retrieve a user's profile photos."""
        pass

    @abstractmethod
    async def get_file(self, file_id: str) -> str:
        """Resolve a file ID to its server-side file path."""
        pass

    @abstractmethod
    def file_url(self, file_path: str) -> str:
        """Build the download URL for a file path."""
        pass

    async def close(self) -> None:
        """Release underlying connections."""


class TelegramBotClient(TelegramClientBase):
    """Bot API client over httpx."""

    def __init__(
        self,
        token: str,
        api_base_url: str = "https://api.telegram.org",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Bot API client.

        Args:
            token: Bot token from @BotFather
            api_base_url: Bot API server URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used for testing)
        """
        self.token = token
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def get_chat(self, chat_id: Union[int, str]) -> TelegramChat:
        result = await self._call("getChat", {"chat_id": chat_id})
        return self._decode("getChat", TelegramChat.from_api, result)

    async def get_user_profile_photos(self, user_id: int, limit: int = 1) -> UserProfilePhotos:
        result = await self._call("getUserProfilePhotos", {"user_id": user_id, "limit": limit})
        return self._decode("getUserProfilePhotos", UserProfilePhotos.from_api, result)

    async def get_file(self, file_id: str) -> str:
        result = await self._call("getFile", {"file_id": file_id})
        file_path = self._decode("getFile", lambda data: data.get("file_path"), result)
        if not file_path:
            raise TelegramAPIError(f"File {file_id} has no downloadable path")
        return file_path

    def file_url(self, file_path: str) -> str:
        return f"{self.api_base_url}/file/bot{self.token}/{file_path}"

    async def close(self) -> None:
        await self._client.aclose()

    async def _call(self, method: str, params: dict[str, Any]) -> Any:
        """Call a Bot API method and return its result payload."""
        if not self.token:
            raise TelegramConfigurationError("TELEGRAM_BOT_TOKEN is not configured")

        url = f"{self.api_base_url}/bot{self.token}/{method}"
        logger.debug(f"Calling Bot API method {method} with {params}")

        try:
            response = await self._client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise TelegramAPIError(f"{method} timed out after {self.timeout}s") from e
        except httpx.RequestError as e:
            raise TelegramAPIError(f"{method} request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise TelegramAPIError(
                f"{method} returned non-JSON response (HTTP {response.status_code})",
                error_code=response.status_code,
            ) from e

        if not isinstance(payload, dict):
            raise TelegramAPIError(
                f"{method} returned unexpected {type(payload).__name__} payload",
                error_code=response.status_code,
            )

        if not payload.get("ok"):
            raise TelegramAPIError(
                payload.get("description") or f"{method} failed (HTTP {response.status_code})",
                error_code=payload.get("error_code", response.status_code),
            )

        return payload.get("result")

    @staticmethod
    def _decode(method: str, decoder: Callable[[Any], Any], result: Any) -> Any:
        """Decode a result payload, mapping malformed data to TelegramAPIError."""
        try:
            return decoder(result)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise TelegramAPIError(f"{method} returned malformed result: {e!r}") from e
