"""Tests for the Telegram Bot API client."""

import httpx
import pytest

from agechecker.ingestion.telegram_client import (
    TelegramAPIError,
    TelegramBotClient,
    TelegramChat,
    TelegramConfigurationError,
)

TOKEN = "123:ABC"


def _client(handler) -> TelegramBotClient:
    return TelegramBotClient(token=TOKEN, transport=httpx.MockTransport(handler))


class TestTelegramChat:
    """Test chat payload decoding."""

    def test_from_api(self):
        """Test a private chat payload decodes."""
        chat = TelegramChat.from_api({
            "id": 123456789,
            "type": "private",
            "username": "durov",
            "first_name": "Pavel",
            "bio": "Founder",
        })

        assert chat.id == 123456789
        assert chat.username == "durov"
        assert chat.display_name == "Pavel"
        assert chat.participant_count == 0
        assert chat.verified is False

    def test_display_name_both_parts(self):
        """Test display name joins first and last names."""
        chat = TelegramChat(id=1, type="private", first_name="Pavel", last_name="Durov")
        assert chat.display_name == "Pavel Durov"

    def test_display_name_empty(self):
        """Test display name of a nameless chat."""
        assert TelegramChat(id=1, type="channel").display_name == ""


class TestTelegramBotClient:
    """Test TelegramBotClient over a mock transport."""

    @pytest.mark.asyncio
    async def test_get_chat(self):
        """Test getChat request and decoding."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["chat_id"] = request.url.params["chat_id"]
            return httpx.Response(200, json={
                "ok": True,
                "result": {"id": 123456789, "type": "private", "username": "durov"},
            })

        client = _client(handler)
        chat = await client.get_chat("@durov")
        await client.close()

        assert seen == {"path": f"/bot{TOKEN}/getChat", "chat_id": "@durov"}
        assert chat.id == 123456789
        assert chat.username == "durov"

    @pytest.mark.asyncio
    async def test_get_user_profile_photos(self):
        """Test getUserProfilePhotos decoding."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path.endswith("/getUserProfilePhotos")
            assert request.url.params["user_id"] == "42"
            return httpx.Response(200, json={
                "ok": True,
                "result": {
                    "total_count": 1,
                    "photos": [[{"file_id": "f1", "file_unique_id": "u1", "width": 160, "height": 160}]],
                },
            })

        client = _client(handler)
        photos = await client.get_user_profile_photos(42)

        assert photos.total_count == 1
        assert photos.photos[0][0].file_id == "f1"

    @pytest.mark.asyncio
    async def test_get_file_and_url(self):
        """Test getFile returns the path and file_url builds the download URL."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={
                "ok": True,
                "result": {"file_id": "f1", "file_path": "profile_photos/file_0.jpg"},
            })

        client = _client(handler)
        file_path = await client.get_file("f1")

        assert file_path == "profile_photos/file_0.jpg"
        assert client.file_url(file_path) == (
            f"https://api.telegram.org/file/bot{TOKEN}/profile_photos/file_0.jpg"
        )

    @pytest.mark.asyncio
    async def test_get_file_without_path(self):
        """Test files without a download path raise."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"ok": True, "result": {"file_id": "f1"}})

        with pytest.raises(TelegramAPIError):
            await _client(handler).get_file("f1")

    @pytest.mark.asyncio
    async def test_api_error(self):
        """Test ok=false responses raise with the API description and code."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={
                "ok": False,
                "error_code": 400,
                "description": "Bad Request: chat not found",
            })

        with pytest.raises(TelegramAPIError) as exc_info:
            await _client(handler).get_chat("@nobody")

        assert "chat not found" in str(exc_info.value)
        assert exc_info.value.error_code == 400

    @pytest.mark.asyncio
    async def test_non_json_response(self):
        """Test gateway errors with HTML bodies raise."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>Bad Gateway</html>")

        with pytest.raises(TelegramAPIError) as exc_info:
            await _client(handler).get_chat("@durov")

        assert exc_info.value.error_code == 502

    @pytest.mark.asyncio
    async def test_transport_error(self):
        """Test connection failures raise TelegramAPIError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TelegramAPIError):
            await _client(handler).get_chat("@durov")

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test timeouts raise TelegramAPIError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TelegramAPIError) as exc_info:
            await _client(handler).get_chat("@durov")

        assert "timed out" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_token(self):
        """Test calls without a token fail before any request."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        client = TelegramBotClient(token="", transport=httpx.MockTransport(handler))
        with pytest.raises(TelegramConfigurationError):
            await client.get_chat("@durov")


class TestMalformedResults:
    """Test malformed Bot API payloads surface as TelegramAPIError."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"ok": True, "result": {"type": "private", "username": "a"}},
            {"ok": True, "result": None},
            {"ok": True, "result": {"id": "not-a-number", "type": "private"}},
            {"ok": True, "result": ["unexpected"]},
            ["not", "an", "object"],
            "just a string",
        ],
    )
    async def test_get_chat(self, body):
        """Test chat payloads missing fields or of the wrong shape."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        with pytest.raises(TelegramAPIError):
            await _client(handler).get_chat("@a")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "result",
        [
            None,
            {"total_count": 1, "photos": [[{"width": 160}]]},
            {"total_count": 1, "photos": 5},
        ],
    )
    async def test_get_user_profile_photos(self, result):
        """Test photo payloads missing file IDs or of the wrong shape."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"ok": True, "result": result})

        with pytest.raises(TelegramAPIError):
            await _client(handler).get_user_profile_photos(42)

    @pytest.mark.asyncio
    async def test_get_file_null_result(self):
        """Test getFile with a null result."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"ok": True, "result": None})

        with pytest.raises(TelegramAPIError):
            await _client(handler).get_file("f1")
