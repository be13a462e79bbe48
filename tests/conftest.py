"""Shared fixtures for signboard tests."""

from collections.abc import Sequence
from typing import Any, Callable

import pytest

from signboard.models import AwardRecord, EventRecord, NewsRecord, PromoRecord
from signboard.paginators import SessionStore


def pytest_configure(config: Any) -> None:
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "fast: Tests that need no I/O")


class FakeTimerHandle:
    """Stand-in for ``asyncio.TimerHandle`` that records cancellation."""

    def __init__(self, delay: float, callback: Callable[..., Any], args: tuple[Any, ...]):
        self.delay = delay
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    def run(self) -> None:
        self.fired = True
        self.callback(*self.args)


class FakeLoop:
    """Minimal event loop exposing ``call_later`` for deterministic timer tests."""

    def __init__(self) -> None:
        self.handles: list[FakeTimerHandle] = []

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> FakeTimerHandle:
        handle = FakeTimerHandle(delay, callback, args)
        self.handles.append(handle)
        return handle

    @property
    def live(self) -> list[FakeTimerHandle]:
        return [h for h in self.handles if not (h.cancelled or h.fired)]


def make_news(count: int) -> tuple[NewsRecord, ...]:
    return tuple(NewsRecord(headline=f"Headline {i}") for i in range(count))


def make_awards(count: int) -> tuple[AwardRecord, ...]:
    return tuple(AwardRecord(student_name=f"Student {i}") for i in range(count))


def make_events(count: int) -> tuple[EventRecord, ...]:
    return tuple(EventRecord(media_url=f"https://example.com/poster{i}.png") for i in range(count))


def make_promos(count: int) -> tuple[PromoRecord, ...]:
    return tuple(PromoRecord(company=f"Company {i}", role="Intern") for i in range(count))


class FakeGateway:
    """Content gateway returning canned lists or raising canned errors."""

    def __init__(
        self,
        news: Sequence[Any] = (),
        awards: Sequence[Any] = (),
        events: Sequence[Any] = (),
    ) -> None:
        self.results: dict[str, Any] = {"news": news, "awards": awards, "events": events}
        self.calls = 0

    async def _result(self, name: str) -> Any:
        value = self.results[name]
        if isinstance(value, BaseException):
            raise value
        return value

    def fetch_news(self) -> Any:
        self.calls += 1
        return self._result("news")

    def fetch_awards(self) -> Any:
        return self._result("awards")

    def fetch_events(self) -> Any:
        return self._result("events")


@pytest.fixture
def fake_loop() -> FakeLoop:
    return FakeLoop()


@pytest.fixture
def session_store() -> SessionStore:
    return SessionStore()
