"""Record schemas for the three content sources and the promo catalog.

The upstream sheets use natural-language column names; they are kept
verbatim as aliases so payloads validate without renaming. Every record is
validated once at the gateway boundary (see :mod:`signboard.api_client`);
downstream code only ever sees these typed, immutable shapes.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

NEWS_HEADLINE = "News Headline"
NEWS_CATEGORY = "Category of the News"
NEWS_TIMESTAMP = "Timestamp"
NEWS_DESCRIPTION = "Brief Description of the News Story"
NEWS_IMPACT = "Students Impact"
NEWS_IMAGE = "Image"

AWARD_STUDENT = "Student Name"
AWARD_POSITION = "Your position /Achievement"
AWARD_DESCRIPTION = "Short Description about the event"
AWARD_EVENT_TITLE = "Event Name/ Title"
AWARD_ORGANIZATION = "Organization \n[Organization in which event happened]"
AWARD_MEDIA_LINK = "Sharable Link"

EVENT_MEDIA = (
    "Upload your Poster Image (JPEG/PNG recommended) or Short Video (MP4/MOV recommended)"
)
EVENT_CONTENT_TYPE = "Select Content Type"
EVENT_TITLE = "Event Name"


def _cell_text(value: Any) -> Any:
    """Coerce numeric cells to text for required string columns."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _blank_to_none(value: Any) -> Any:
    """Normalise sheet cells: blanks become None, numbers become text."""
    value = _cell_text(value)
    if isinstance(value, str) and not value.strip():
        return None
    return value


class _SheetRecord(BaseModel):
    """Common configuration for records coming from the form sheets."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class NewsRecord(_SheetRecord):
    """One row of the news sheet."""

    headline: str = Field(..., alias=NEWS_HEADLINE, min_length=1)
    category: Optional[str] = Field(default=None, alias=NEWS_CATEGORY)
    timestamp: Optional[str] = Field(default=None, alias=NEWS_TIMESTAMP)
    description: Optional[str] = Field(default=None, alias=NEWS_DESCRIPTION)
    students_impact: Optional[str] = Field(default=None, alias=NEWS_IMPACT)
    image: Optional[str] = Field(default=None, alias=NEWS_IMAGE)

    @field_validator("headline", mode="before")
    @classmethod
    def coerce_headline(cls, value: Any) -> Any:
        return _cell_text(value)

    @field_validator(
        "category", "timestamp", "description", "students_impact", "image", mode="before"
    )
    @classmethod
    def normalise_cells(cls, value: Any) -> Any:
        return _blank_to_none(value)


class AwardRecord(_SheetRecord):
    """One row of the student achievements sheet."""

    student_name: str = Field(..., alias=AWARD_STUDENT, min_length=1)
    year: Optional[str] = None
    section: Optional[str] = None
    position: Optional[str] = Field(default=None, alias=AWARD_POSITION)
    description: Optional[str] = Field(default=None, alias=AWARD_DESCRIPTION)
    event_title: Optional[str] = Field(default=None, alias=AWARD_EVENT_TITLE)
    organization: Optional[str] = Field(default=None, alias=AWARD_ORGANIZATION)
    media_link: Optional[str] = Field(default=None, alias=AWARD_MEDIA_LINK)

    @field_validator("student_name", mode="before")
    @classmethod
    def coerce_student_name(cls, value: Any) -> Any:
        return _cell_text(value)

    @field_validator(
        "year",
        "section",
        "position",
        "description",
        "event_title",
        "organization",
        "media_link",
        mode="before",
    )
    @classmethod
    def normalise_cells(cls, value: Any) -> Any:
        return _blank_to_none(value)


class EventRecord(_SheetRecord):
    """One posted media item. Rows without an upload never validate."""

    media_url: str = Field(..., alias=EVENT_MEDIA, min_length=1)
    content_type: Optional[str] = Field(default=None, alias=EVENT_CONTENT_TYPE)
    title: Optional[str] = Field(default=None, alias=EVENT_TITLE)

    @field_validator("content_type", "title", mode="before")
    @classmethod
    def normalise_cells(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("media_url", mode="before")
    @classmethod
    def strip_media_url(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @property
    def is_video(self) -> bool:
        """True when the content type names a video or clip."""
        kind = (self.content_type or "").lower()
        return "video" in kind or "clip" in kind


class PromoRecord(BaseModel):
    """A promotional slide (internship or hiring drive)."""

    model_config = ConfigDict(frozen=True)

    company: str
    role: str
    description: str = ""
    logo: Optional[str] = None
    type: str = ""
    target_audience: str = ""
    deadline: str = ""
    stipend: str = ""
    link: Optional[str] = None
    eligibility: tuple[str, ...] = ()
