"""Pytest configuration and shared fixtures."""

from typing import Optional, Union

import pytest

from agechecker.ingestion.telegram_client import (
    TelegramAPIError,
    TelegramChat,
    TelegramClientBase,
    TelegramPhotoSize,
    UserProfilePhotos,
)


class FakeTelegramClient(TelegramClientBase):
    """In-memory Bot API client."""

    def __init__(
        self,
        chats: Optional[dict[str, TelegramChat]] = None,
        photo_file_ids: Optional[dict[int, str]] = None,
        fail_photos: bool = False,
    ):
        self.chats = chats or {}
        self.photo_file_ids = photo_file_ids or {}
        self.fail_photos = fail_photos
        self.calls: list[tuple[str, object]] = []

    async def get_chat(self, chat_id: Union[int, str]) -> TelegramChat:
        self.calls.append(("getChat", chat_id))
        if chat_id not in self.chats:
            raise TelegramAPIError("Bad Request: chat not found", error_code=400)
        return self.chats[chat_id]

    async def get_user_profile_photos(self, user_id: int, limit: int = 1) -> UserProfilePhotos:
        self.calls.append(("getUserProfilePhotos", user_id))
        if self.fail_photos:
            raise TelegramAPIError("Too Many Requests: retry after 5", error_code=429)
        file_id = self.photo_file_ids.get(user_id)
        if file_id is None:
            return UserProfilePhotos(total_count=0, photos=[])
        return UserProfilePhotos(
            total_count=1,
            photos=[[TelegramPhotoSize(file_id=file_id, file_unique_id="u", width=160, height=160)]],
        )

    async def get_file(self, file_id: str) -> str:
        self.calls.append(("getFile", file_id))
        return f"profile_photos/{file_id}.jpg"

    def file_url(self, file_path: str) -> str:
        return f"https://api.telegram.org/file/botTEST/{file_path}"


@pytest.fixture
def durov_chat() -> TelegramChat:
    """A resolvable private chat with ID between the 100M and 500M anchors."""
    return TelegramChat(
        id=123456789,
        type="private",
        username="durov",
        first_name="Pavel",
        last_name="Durov",
        bio="Founder",
    )


@pytest.fixture
def fake_client(durov_chat) -> FakeTelegramClient:
    """Fake client that knows @durov and has one profile photo for him."""
    return FakeTelegramClient(
        chats={"@durov": durov_chat},
        photo_file_ids={durov_chat.id: "photo-file-1"},
    )
