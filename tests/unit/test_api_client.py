"""Tests for signboard.api_client module."""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp
import pytest

from signboard.api_client import SignageAPIClient, validate_records
from signboard.config import Config
from signboard.exceptions import FetchError
from signboard.models import AWARD_STUDENT, EVENT_MEDIA, NEWS_HEADLINE, EventRecord, NewsRecord

pytestmark = [pytest.mark.unit, pytest.mark.fast]


class FakeResponse:
    def __init__(self, payload: Any = None, status: int = 200, error: Exception | None = None):
        self.payload = payload
        self.status = status
        self.error = error

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                request_info=None, history=(), status=self.status  # type: ignore[arg-type]
            )

    async def json(self, content_type: Any = None) -> Any:
        if self.error is not None:
            raise self.error
        return self.payload

    async def read(self) -> bytes:
        return self.payload


class FakeSession:
    def __init__(self, response: Any) -> None:
        self.response = response
        self.requests: list[tuple[str, Any]] = []
        self.closed = False

    def get(self, url: str, params: Any = None, headers: Any = None) -> Any:
        self.requests.append((url, params))
        if isinstance(self.response, BaseException):
            raise self.response
        return self.response

    async def close(self) -> None:
        self.closed = True


def client_with(response: Any) -> tuple[SignageAPIClient, FakeSession]:
    client = SignageAPIClient(Config(backend_url="https://backend.test"))
    session = FakeSession(response)
    client._session = session  # type: ignore[assignment]
    return client, session


class TestValidateRecords:
    def test_validate_records_when_rows_invalid_then_dropped(self):
        rows = [
            {NEWS_HEADLINE: "Valid story"},
            {NEWS_HEADLINE: ""},
            "not a row",
            {"Category of the News": "Sports"},
        ]
        records = validate_records(NewsRecord, rows, "news")
        assert [r.headline for r in records] == ["Valid story"]

    def test_validate_records_when_event_without_media_then_dropped(self):
        rows = [{EVENT_MEDIA: "  "}, {EVENT_MEDIA: "https://example.com/a.png"}]
        records = validate_records(EventRecord, rows, "events")
        assert len(records) == 1


class TestSignageAPIClient:
    """Tests for the async backend client."""

    @pytest.mark.asyncio
    async def test_fetch_news_when_ok_then_requests_limit(self):
        client, session = client_with(FakeResponse([{NEWS_HEADLINE: "A"}, {NEWS_HEADLINE: "B"}]))
        records = await client.fetch_news()
        assert [r.headline for r in records] == ["A", "B"]
        assert session.requests == [("https://backend.test/kietdata/news", {"limit": 25})]

    @pytest.mark.asyncio
    async def test_fetch_awards_when_ok_then_latest_first(self):
        rows = [{AWARD_STUDENT: "First"}, {AWARD_STUDENT: "Second"}, {AWARD_STUDENT: "Third"}]
        client, session = client_with(FakeResponse(rows))
        records = await client.fetch_awards(year=3)
        assert [r.student_name for r in records] == ["Third", "Second", "First"]
        assert session.requests[0][1] == {"year": 3}

    @pytest.mark.asyncio
    async def test_fetch_events_when_ok_then_hits_events_path(self):
        client, session = client_with(FakeResponse([{EVENT_MEDIA: "https://x.test/a.mp4"}]))
        records = await client.fetch_events()
        assert records[0].media_url == "https://x.test/a.mp4"
        assert session.requests[0][0] == "https://backend.test/kietdata/events"

    @pytest.mark.asyncio
    async def test_fetch_news_when_http_error_then_fetch_error(self):
        client, _ = client_with(FakeResponse(status=503))
        with pytest.raises(FetchError) as exc_info:
            await client.fetch_news()
        assert exc_info.value.section == "news"
        assert "503" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_fetch_events_when_timeout_then_fetch_error(self):
        client, _ = client_with(asyncio.TimeoutError())
        with pytest.raises(FetchError):
            await client.fetch_events()

    @pytest.mark.asyncio
    async def test_fetch_awards_when_connection_error_then_fetch_error(self):
        client, _ = client_with(aiohttp.ClientConnectionError("refused"))
        with pytest.raises(FetchError) as exc_info:
            await client.fetch_awards()
        assert exc_info.value.section == "awards"

    @pytest.mark.asyncio
    async def test_fetch_news_when_invalid_json_then_fetch_error(self):
        client, _ = client_with(FakeResponse(error=ValueError("bad json")))
        with pytest.raises(FetchError):
            await client.fetch_news()

    @pytest.mark.asyncio
    async def test_fetch_news_when_payload_not_list_then_fetch_error(self):
        client, _ = client_with(FakeResponse({"error": "quota"}))
        with pytest.raises(FetchError, match="expected a JSON list"):
            await client.fetch_news()

    @pytest.mark.asyncio
    async def test_close_when_session_open_then_closed(self):
        client, session = client_with(FakeResponse([]))
        await client.close()
        assert session.closed
        await client.close()

    @pytest.mark.asyncio
    async def test_fetch_media_when_ok_then_returns_bytes(self):
        client, session = client_with(FakeResponse(b"\x89PNG"))
        data = await client.fetch_media("https://drive.test/thumbnail?id=abc")
        assert data == b"\x89PNG"
        assert session.requests == [("https://drive.test/thumbnail?id=abc", None)]

    @pytest.mark.asyncio
    async def test_fetch_media_when_http_error_then_fetch_error(self):
        client, _ = client_with(FakeResponse(status=404))
        with pytest.raises(FetchError) as exc_info:
            await client.fetch_media("https://drive.test/missing")
        assert exc_info.value.section == "media"
        assert "404" in str(exc_info.value)
