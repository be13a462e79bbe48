"""Readiness gate: waits for all three content sources before presenting.

The aggregator issues the news, award and event fetches concurrently and
waits for every one of them to settle. The board opens only when none
failed and all three lists are non-empty; one bad source keeps the whole
presentation gated until a manual retry succeeds.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from signboard.models import AwardRecord, EventRecord, NewsRecord

logger = logging.getLogger(__name__)

SOURCE_NAMES = ("news", "awards", "events")


@dataclass(frozen=True)
class ReadinessState:
    """Outcome of the last settled load (or the pending state)."""

    ready: bool
    error: bool
    status_message: str


PENDING = ReadinessState(
    ready=False, error=False, status_message="Loading news, awards and events..."
)


class ContentGateway(Protocol):
    """The three fetches the aggregator depends on."""

    def fetch_news(self) -> Awaitable[Sequence[NewsRecord]]: ...

    def fetch_awards(self) -> Awaitable[Sequence[AwardRecord]]: ...

    def fetch_events(self) -> Awaitable[Sequence[EventRecord]]: ...


class ReadinessAggregator:
    """Collects the three content lists and derives the readiness state.

    Args:
        gateway: Object exposing ``fetch_news``/``fetch_awards``/``fetch_events``
        on_change: Optional callback invoked with each new state
    """

    def __init__(
        self,
        gateway: ContentGateway,
        *,
        on_change: Optional[Callable[[ReadinessState], None]] = None,
    ):
        self._gateway = gateway
        self._on_change = on_change
        self._state = PENDING
        self._loading = False

        self.news: tuple[NewsRecord, ...] = ()
        self.awards: tuple[AwardRecord, ...] = ()
        self.events: tuple[EventRecord, ...] = ()

    @property
    def state(self) -> ReadinessState:
        return self._state

    @property
    def ready(self) -> bool:
        return self._state.ready

    @property
    def error(self) -> bool:
        return self._state.error

    @property
    def loading(self) -> bool:
        return self._loading

    # ------------------------------------------------------------------
    async def load(self) -> ReadinessState:
        """Fetch all three sources and settle the readiness state.

        Never raises for fetch failures; they are reported through
        ``state.error``.
        """
        if self._loading:
            logger.debug("Load already in progress; ignoring duplicate request")
            return self._state

        self._loading = True
        self._set_state(PENDING)
        try:
            results = await asyncio.gather(
                self._gateway.fetch_news(),
                self._gateway.fetch_awards(),
                self._gateway.fetch_events(),
                return_exceptions=True,
            )
        finally:
            self._loading = False

        failed: list[str] = []
        for name, result in zip(SOURCE_NAMES, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning("Fetch of %s failed: %s", name, result)
                failed.append(name)
                continue
            setattr(self, name, tuple(result))
            logger.debug("Fetched %d %s records", len(result), name)

        empty = [name for name in SOURCE_NAMES if not getattr(self, name)]
        state = self._evaluate(failed, empty)
        self._set_state(state)
        if state.ready:
            logger.info(state.status_message)
        else:
            logger.warning("Display gated: %s", state.status_message)
        return state

    async def retry(self) -> ReadinessState:
        """Re-issue all three fetches from the pending state."""
        logger.info("Retrying content fetch")
        return await self.load()

    def lists(self) -> dict[str, tuple[Any, ...]]:
        return {name: getattr(self, name) for name in SOURCE_NAMES}

    # ------------------------------------------------------------------
    def _evaluate(self, failed: list[str], empty: list[str]) -> ReadinessState:
        if failed:
            return ReadinessState(
                ready=False,
                error=True,
                status_message=f"Failed to load {', '.join(failed)}. Press R to retry.",
            )
        if empty:
            return ReadinessState(
                ready=False,
                error=False,
                status_message=f"No content available for {', '.join(empty)}",
            )
        return ReadinessState(
            ready=True,
            error=False,
            status_message=(
                f"All sections loaded (news={len(self.news)}, "
                f"awards={len(self.awards)}, events={len(self.events)})"
            ),
        )

    def _set_state(self, state: ReadinessState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)
