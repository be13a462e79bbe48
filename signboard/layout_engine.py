"""Layout engine for transforming rotation state into slide view models.

This module converts what the rotation controller reports as visible into
plain display data for the renderer: formatted dates, award themes, record
captions, media plans and the progress bar epoch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Literal, Optional, Union

from dateutil import parser as date_parser

from signboard.media import MediaPlan, plan_event_media, plan_news_image
from signboard.models import AwardRecord, EventRecord, NewsRecord, PromoRecord
from signboard.promo import qr_code_url
from signboard.readiness import ReadinessState
from signboard.rotation import Section, VisibleContent

logger = logging.getLogger(__name__)


@dataclass
class NewsSlide:
    """Single news story."""

    category: str  # "General" when the sheet leaves it blank
    published: str  # "Jan 5, 2025" or empty
    headline: str
    description: str
    students_impact: Optional[str]  # Omitted from the slide when None
    image: MediaPlan
    caption: str  # "ID: 3 / 12"


@dataclass
class AwardCard:
    """One achievement card on an award slide."""

    student_name: str
    class_label: str  # "2nd Year | CS-A" or empty
    theme_label: str  # WINNER / RUNNER UP / KEEP IT UP / PARTICIPATION
    theme_color: tuple[int, int, int]
    description: str
    event_title: str
    organization: str


@dataclass
class AwardSlide:
    """A page of achievement cards."""

    cards: list[AwardCard]
    caption: str  # "Showing Records 7 to 9 of 7"


@dataclass
class EventSlide:
    """Event poster or clip."""

    title: str
    media: MediaPlan
    caption: str


@dataclass
class PromoSlide:
    """Promotional (internship) slide."""

    company: str
    role: str
    description: str
    work_type: str
    target_audience: str
    deadline: str
    stipend: str
    eligibility: list[str]
    qr_code: Optional[str]


@dataclass
class ProgressDisplay:
    """Top progress bar; restarts whenever the epoch changes."""

    epoch: int
    duration: float


@dataclass
class GateScreen:
    """Splash shown while the readiness gate is closed."""

    title: str
    message: str
    state: Literal["loading", "error", "empty", "ready"]
    hint: str = ""


Slide = Union[NewsSlide, AwardSlide, EventSlide, PromoSlide]


@dataclass
class SlideLayout:
    """Complete layout data for one frame."""

    section: Optional[Section]
    slide: Optional[Slide]
    gate: Optional[GateScreen] = None
    progress: Optional[ProgressDisplay] = None
    clock: str = ""
    date: str = ""
    has_data: bool = field(default=False)

    @property
    def media(self) -> Optional[MediaPlan]:
        """The slide's image or video plan, if it has one."""
        if isinstance(self.slide, NewsSlide):
            return self.slide.image
        if isinstance(self.slide, EventSlide):
            return self.slide.media
        return None


# Theme colours picked by position text, checked in order
_AWARD_THEMES: tuple[tuple[tuple[str, ...], str, tuple[int, int, int]], ...] = (
    (("1st", "winner", "first"), "WINNER", (245, 158, 11)),
    (("2nd", "runner", "second"), "RUNNER UP", (100, 116, 139)),
    (("3rd", "third"), "KEEP IT UP", (217, 119, 6)),
)
_PARTICIPATION_THEME = ("PARTICIPATION", (139, 92, 246))

_ORDINAL_SUFFIX = {"1": "st", "2": "nd", "3": "rd"}


def award_theme(position: Optional[str]) -> tuple[str, tuple[int, int, int]]:
    """Pick the ribbon label and colour for an achievement position."""
    text = (position or "").lower()
    for needles, label, color in _AWARD_THEMES:
        if any(needle in text for needle in needles):
            return label, color
    return _PARTICIPATION_THEME


def format_news_date(value: Optional[str]) -> str:
    """Format a sheet timestamp as "Jan 5, 2025"; empty on failure."""
    if not value:
        return ""
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError):
        logger.debug("Unparseable news timestamp: %r", value)
        return ""
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


class LayoutEngine:
    """Convert rotation output to visual layout.

    Args:
        slide_duration: Seconds the progress bar takes to fill
    """

    def __init__(self, slide_duration: float = 20.0):
        self.slide_duration = slide_duration
        # One plan per media source for the current epoch
        self._plan_epoch: Optional[int] = None
        self._plans: dict[tuple[str, bool], MediaPlan] = {}

    def process(
        self,
        content: VisibleContent,
        now: Optional[datetime] = None,
        duration: Optional[float] = None,
    ) -> SlideLayout:
        """Process visible content into layout data.

        Args:
            content: Output of ``RotationController.visible_content()``
            now: Clock time for the header (defaults to now)
            duration: Seconds until the next automatic advance (defaults
                to ``slide_duration``)

        Returns:
            SlideLayout for the active section
        """
        if content.epoch != self._plan_epoch:
            self._plan_epoch = content.epoch
            self._plans.clear()

        slide: Optional[Slide] = None
        if content.items:
            if content.section is Section.NEWS:
                slide = self._news_slide(content.item, content)
            elif content.section is Section.AWARD:
                slide = self._award_slide(content.items, content)
            elif content.section is Section.EVENT:
                slide = self._event_slide(content.item, content)
            else:
                slide = self._promo_slide(content.item)

        layout = SlideLayout(
            section=content.section,
            slide=slide,
            progress=ProgressDisplay(
                epoch=content.epoch,
                duration=duration if duration is not None else self.slide_duration,
            ),
            has_data=slide is not None,
        )
        self._stamp_clock(layout, now)
        return layout

    def gate_layout(
        self,
        readiness: ReadinessState,
        loading: bool = False,
        now: Optional[datetime] = None,
    ) -> SlideLayout:
        """Layout for the splash screen shown until the board is launched."""
        if loading:
            gate = GateScreen(
                title="Initializing Display System",
                message=readiness.status_message,
                state="loading",
            )
        elif readiness.error:
            gate = GateScreen(
                title="Connection Error",
                message=readiness.status_message,
                state="error",
                hint="Press R to retry",
            )
        elif readiness.ready:
            gate = GateScreen(
                title="Ready to Launch",
                message=readiness.status_message,
                state="ready",
                hint="Press Enter to inaugurate",
            )
        else:
            gate = GateScreen(
                title="Nothing to Show Yet",
                message=readiness.status_message,
                state="empty",
                hint="Press R to retry",
            )
        layout = SlideLayout(section=None, slide=None, gate=gate)
        self._stamp_clock(layout, now)
        return layout

    # ------------------------------------------------------------------
    def _news_slide(self, record: NewsRecord, content: VisibleContent) -> NewsSlide:
        return NewsSlide(
            category=record.category or "General",
            published=format_news_date(record.timestamp),
            headline=record.headline,
            description=record.description or "",
            students_impact=record.students_impact,
            image=self._media_plan(
                record.image or "", False, lambda: plan_news_image(record.image)
            ),
            caption=f"ID: {content.first} / {content.total}",
        )

    def _award_slide(
        self, records: tuple[AwardRecord, ...], content: VisibleContent
    ) -> AwardSlide:
        cards = []
        for record in records:
            label, color = award_theme(record.position)
            cards.append(
                AwardCard(
                    student_name=record.student_name,
                    class_label=self._class_label(record),
                    theme_label=label,
                    theme_color=color,
                    description=record.description or "",
                    event_title=record.event_title or "",
                    organization=record.organization or "",
                )
            )
        return AwardSlide(
            cards=cards,
            caption=f"Showing Records {content.first} to {content.last} of {content.total}",
        )

    def _event_slide(self, record: EventRecord, content: VisibleContent) -> EventSlide:
        return EventSlide(
            title=record.title or "",
            media=self._media_plan(
                record.media_url,
                record.is_video,
                lambda: plan_event_media(record.media_url, record.is_video),
            ),
            caption=f"{content.first} / {content.total}",
        )

    def _promo_slide(self, record: PromoRecord) -> PromoSlide:
        return PromoSlide(
            company=record.company,
            role=record.role,
            description=record.description,
            work_type=record.type,
            target_audience=record.target_audience,
            deadline=record.deadline,
            stipend=record.stipend,
            eligibility=list(record.eligibility),
            qr_code=qr_code_url(record.link) if record.link else None,
        )

    def _media_plan(
        self, url: str, is_video: bool, build: Callable[[], MediaPlan]
    ) -> MediaPlan:
        """Return the cached plan for a media source, building it on first use."""
        key = (url, is_video)
        plan = self._plans.get(key)
        if plan is None:
            plan = self._plans[key] = build()
        return plan

    @staticmethod
    def _class_label(record: AwardRecord) -> str:
        parts = []
        if record.year:
            suffix = _ORDINAL_SUFFIX.get(record.year, "th")
            parts.append(f"{record.year}{suffix} Year")
        if record.section:
            parts.append(f"CS-{record.section}")
        return " | ".join(parts)

    @staticmethod
    def _stamp_clock(layout: SlideLayout, now: Optional[datetime]) -> None:
        current = now or datetime.now()
        layout.clock = current.strftime("%I:%M %p").lstrip("0")
        layout.date = f"{current:%a}, {current:%b} {current.day}, {current.year}"
