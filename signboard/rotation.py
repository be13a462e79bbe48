"""Rotation controller: the state machine behind the slideshow.

The board shows one :class:`Section` at a time in a fixed order. Moving
forward past the last section wraps to the first and advances the item
cursor of every multi-item section; moving backward past the first wraps to
the last and steps those cursors back (News wraps, Award and Event clamp at
zero). Every transition bumps an epoch counter which the progress bar and
the rotation timer use to resynchronise.

The controller knows nothing about rendering or timing. Callers feed it
:class:`RotationEvent` values through :meth:`RotationController.transition`
and read back an immutable :class:`RotationState`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from signboard.models import AwardRecord, EventRecord, NewsRecord, PromoRecord
from signboard.paginators import CyclicPaginator, PersistentCursor, SessionStore, WindowPaginator

logger = logging.getLogger(__name__)

PROMO_CURSOR_KEY = "promo"


class Section(Enum):
    """Rotating content sections, in display order."""

    NEWS = "news"
    AWARD = "award"
    EVENT = "event"
    PROMO = "promo"

    @classmethod
    def ordered(cls) -> tuple[Section, ...]:
        return tuple(cls)

    @property
    def position(self) -> int:
        return Section.ordered().index(self)

    def successor(self) -> Section:
        order = Section.ordered()
        return order[(self.position + 1) % len(order)]

    def predecessor(self) -> Section:
        order = Section.ordered()
        return order[(self.position - 1) % len(order)]


class RotationEvent(Enum):
    """Inputs accepted by the state machine."""

    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class RotationState:
    """Snapshot of the controller after a transition."""

    section: Section
    news_cursor: int
    award_cursor: int
    event_cursor: int
    promo_cursor: int
    epoch: int


class RotationController:
    """Finite-state machine over :class:`Section` with per-section cursors.

    Args:
        store: Session store holding the persistent promo cursor
        promos: Promo catalog shown in the PROMO section
        award_page_size: Number of achievement cards per award slide
    """

    def __init__(
        self,
        store: SessionStore,
        promos: Sequence[PromoRecord] = (),
        *,
        award_page_size: int = 3,
    ):
        self.news: CyclicPaginator[NewsRecord] = CyclicPaginator("news")
        self.awards: WindowPaginator[AwardRecord] = WindowPaginator(
            "award", page_size=award_page_size, wrap_backward=False
        )
        self.events: CyclicPaginator[EventRecord] = CyclicPaginator("event", wrap_backward=False)
        self.promos: PersistentCursor[PromoRecord] = PersistentCursor(
            store, PROMO_CURSOR_KEY, promos
        )

        self._section = Section.NEWS
        self._epoch = 0
        self.completed_cycles = 0

    # ------------------------------------------------------------------
    @property
    def section(self) -> Section:
        return self._section

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def state(self) -> RotationState:
        return RotationState(
            section=self._section,
            news_cursor=self.news.cursor,
            award_cursor=self.awards.cursor,
            event_cursor=self.events.cursor,
            promo_cursor=self.promos.cursor,
            epoch=self._epoch,
        )

    # ------------------------------------------------------------------
    def replace_content(
        self,
        news: Sequence[NewsRecord],
        awards: Sequence[AwardRecord],
        events: Sequence[EventRecord],
    ) -> None:
        """Swap in freshly fetched lists. Out-of-range cursors reset to 0."""
        self.news.replace(news)
        self.awards.replace(awards)
        self.events.replace(events)
        logger.debug(
            "Content replaced: news=%d awards=%d events=%d",
            len(self.news),
            len(self.awards),
            len(self.events),
        )

    def transition(self, event: RotationEvent) -> RotationState:
        """Apply one event and return the resulting state."""
        previous = self._section

        if event is RotationEvent.FORWARD:
            self._forward()
        elif event is RotationEvent.BACKWARD:
            self._backward()
        else:  # pragma: no cover - enum is closed
            raise ValueError(f"Unknown rotation event: {event!r}")

        if previous is Section.PROMO and self._section is not Section.PROMO:
            self.promos.on_hidden()

        self._epoch += 1
        state = self.state
        logger.debug("Rotation %s: %s -> %s (epoch %d)", event.value, previous.value,
                     state.section.value, state.epoch)
        return state

    def advance(self, direction: RotationEvent = RotationEvent.FORWARD) -> RotationState:
        """Alias of :meth:`transition` used by the timer and input dispatcher."""
        return self.transition(direction)

    # ------------------------------------------------------------------
    def _forward(self) -> None:
        if self._section is Section.ordered()[-1]:
            self._section = Section.ordered()[0]
            self.news.step_forward()
            self.awards.step_forward()
            self.events.step_forward()
            self.completed_cycles += 1
        else:
            self._section = self._section.successor()

    def _backward(self) -> None:
        if self._section is Section.ordered()[0]:
            self._section = Section.ordered()[-1]
            # News wraps; Award and Event clamp at zero (see DESIGN.md).
            self.news.step_backward()
            self.awards.step_backward()
            self.events.step_backward()
        else:
            self._section = self._section.predecessor()

    # ------------------------------------------------------------------
    def visible_content(self) -> VisibleContent:
        """Return what the active section should display right now."""
        section = self._section
        if section is Section.NEWS:
            return self._single(self.news)
        if section is Section.EVENT:
            return self._single(self.events)
        if section is Section.AWARD:
            first, last, total = self.awards.window_bounds()
            return VisibleContent(
                section, self._epoch, items=self.awards.window(),
                first=first, last=last, total=total,
            )
        promo = self.promos.current()
        count = len(self.promos.catalog)
        number = self.promos.cursor + 1 if promo is not None else 0
        return VisibleContent(
            section, self._epoch, items=(promo,) if promo is not None else (),
            first=number, last=number, total=count,
        )

    def _single(self, paginator: CyclicPaginator[Any]) -> VisibleContent:
        item = paginator.current()
        number = paginator.index + 1 if item is not None else 0
        return VisibleContent(
            self._section, self._epoch, items=(item,) if item is not None else (),
            first=number, last=number, total=len(paginator),
        )


@dataclass(frozen=True)
class VisibleContent:
    """The slice of content the active section is showing.

    ``first``/``last``/``total`` are 1-based record numbers for captions;
    all three are 0 when the section has nothing to show.
    """

    section: Section
    epoch: int
    items: tuple[Any, ...] = ()
    first: int = 0
    last: int = 0
    total: int = 0

    @property
    def item(self) -> Any:
        return self.items[0] if self.items else None
