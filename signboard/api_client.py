"""Async API client for the department data backend.

Fetches the news, achievement and event sheets and validates every row
against the record schemas in :mod:`signboard.models`. Rows that do not
validate are dropped with a warning; transport problems are raised as
:class:`~signboard.exceptions.FetchError` for the readiness gate to report.
There is no silent retry here: a failed fetch stays failed until the
operator asks for a retry.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from signboard.config import Config
from signboard.exceptions import FetchError
from signboard.models import AwardRecord, EventRecord, NewsRecord

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def validate_records(
    model: type[RecordT], rows: list[Any], section: str
) -> tuple[RecordT, ...]:
    """Validate raw rows into records, skipping rows that do not fit.

    Args:
        model: Record schema to validate against
        rows: Decoded JSON rows
        section: Source name used in log messages

    Returns:
        Tuple of validated records in input order
    """
    records: list[RecordT] = []
    skipped = 0
    for row in rows:
        if not isinstance(row, dict):
            skipped += 1
            continue
        try:
            records.append(model.model_validate(row))
        except ValidationError as exc:
            skipped += 1
            logger.debug("Skipping invalid %s row: %s", section, exc.errors()[0]["msg"])
    if skipped:
        logger.warning("Skipped %d invalid %s row(s)", skipped, section)
    return tuple(records)


class SignageAPIClient:
    """Async HTTP client for the content backend.

    One ``aiohttp.ClientSession`` is created on first use and shared by all
    three fetches.
    """

    def __init__(self, config: Config):
        """Initialize API client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session.

        Returns:
            Active ClientSession
        """
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.api_timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)

        return self._session

    async def _get_rows(
        self, section: str, path: str, params: Optional[dict[str, Any]] = None
    ) -> list[Any]:
        """GET a JSON list from the backend.

        Raises:
            FetchError: On network error, timeout, non-2xx status or a
                payload that is not a JSON list
        """
        url = self.config.get_api_endpoint(path)
        try:
            session = await self._get_session()
            async with session.get(
                url,
                params=params,
                headers={"Accept": "application/json", "Cache-Control": "no-cache"},
            ) as response:
                response.raise_for_status()
                data = await response.json(content_type=None)
        except aiohttp.ClientResponseError as error:
            raise FetchError(section, f"HTTP {error.status} from {url}") from error
        except (aiohttp.ClientError, asyncio.TimeoutError) as error:
            raise FetchError(section, f"request to {url} failed: {error!r}") from error
        except ValueError as error:
            raise FetchError(section, f"invalid JSON from {url}") from error

        if not isinstance(data, list):
            raise FetchError(section, f"expected a JSON list, got {type(data).__name__}")

        logger.debug("Fetched %d %s rows from %s", len(data), section, url)
        return data

    async def fetch_news(self, limit: Optional[int] = None) -> tuple[NewsRecord, ...]:
        """Fetch news stories, newest as the backend orders them."""
        rows = await self._get_rows(
            "news", self.config.news_path, {"limit": limit or self.config.news_limit}
        )
        return validate_records(NewsRecord, rows, "news")

    async def fetch_awards(self, year: Optional[int] = None) -> tuple[AwardRecord, ...]:
        """Fetch student achievements for one year, latest submissions first."""
        rows = await self._get_rows(
            "awards", self.config.awards_path, {"year": year or self.config.award_year}
        )
        return tuple(reversed(validate_records(AwardRecord, rows, "awards")))

    async def fetch_events(self) -> tuple[EventRecord, ...]:
        """Fetch posted event media; rows without an upload are dropped."""
        rows = await self._get_rows("events", self.config.events_path)
        return validate_records(EventRecord, rows, "events")

    async def fetch_media(self, url: str) -> bytes:
        """Download one slide image.

        Raises:
            FetchError: On network error, timeout or non-2xx status
        """
        try:
            session = await self._get_session()
            async with session.get(url) as response:
                response.raise_for_status()
                data = await response.read()
        except aiohttp.ClientResponseError as error:
            raise FetchError("media", f"HTTP {error.status} from {url}") from error
        except (aiohttp.ClientError, asyncio.TimeoutError) as error:
            raise FetchError("media", f"request to {url} failed: {error!r}") from error

        logger.debug("Fetched %d bytes of media from %s", len(data), url)
        return data

    async def close(self) -> None:
        """Close the HTTP session.

        Should be called during shutdown to cleanly close connections.
        """
        if self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None
            logger.debug("API client session closed")
