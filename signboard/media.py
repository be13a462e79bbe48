"""Media source planning with per-slide fallback.

A slide's image or video is described by a :class:`MediaPlan`: an ordered
list of candidate URLs. When the renderer cannot load the current candidate
it calls :meth:`MediaPlan.fail`, which moves on to the alternate source and,
once that is exhausted too, marks the slide unavailable. Failures stay
inside the plan; they never reach the readiness gate or the rotation.

Google Drive share links are rewritten to URLs that serve the file itself:
a sized thumbnail first for images (with the plain view URL as fallback) and
the download URL for videos.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import parse_qs, urlparse

logger = logging.getLogger(__name__)

DRIVE_THUMBNAIL_URL = "https://drive.google.com/thumbnail?id={id}&sz=w1000"
DRIVE_VIEW_URL = "https://drive.google.com/uc?export=view&id={id}"
DRIVE_DOWNLOAD_URL = "https://drive.google.com/uc?export=download&id={id}"

UNAVAILABLE_TEXT = "Media Not Accessible"


def extract_drive_id(url: Optional[str]) -> Optional[str]:
    """Pull the file id out of a Drive share link.

    Handles both ``...open?id=<id>`` and ``.../file/d/<id>/view`` forms.
    Returns None for anything else.
    """
    if not url:
        return None
    try:
        if "id=" in url:
            ids = parse_qs(urlparse(url).query).get("id")
            return ids[0] if ids else None
        if "/d/" in url:
            tail = url.split("/d/", 1)[1]
            file_id = tail.split("/", 1)[0].split("?", 1)[0]
            return file_id or None
    except ValueError as exc:
        logger.debug("Could not parse media URL %r: %s", url, exc)
    return None


@dataclass
class MediaPlan:
    """Candidate sources for one slide's media, tried in order."""

    candidates: tuple[str, ...]
    is_video: bool = False
    _stage: int = field(default=0, repr=False)

    @property
    def source(self) -> Optional[str]:
        """URL to try now, or None once every candidate has failed."""
        if self._stage < len(self.candidates):
            return self.candidates[self._stage]
        return None

    @property
    def unavailable(self) -> bool:
        return self.source is None

    @property
    def using_fallback(self) -> bool:
        return self._stage > 0 and not self.unavailable

    def fail(self) -> Optional[str]:
        """Record that the current source could not be loaded.

        Returns:
            The next source to try, or None when the slide should show the
            unavailable placeholder
        """
        failed = self.source
        if failed is None:
            return None
        self._stage += 1
        if self.source is None:
            logger.info("Media unavailable after %d attempt(s): %s", self._stage, failed)
        else:
            logger.debug("Media failed, falling back: %s -> %s", failed, self.source)
        return self.source

    def reset(self) -> None:
        self._stage = 0


def plan_event_media(url: str, is_video: bool = False) -> MediaPlan:
    """Build the media plan for an event poster or clip."""
    drive_id = extract_drive_id(url)
    if drive_id is None:
        return MediaPlan(candidates=(url,), is_video=is_video)
    if is_video:
        return MediaPlan(candidates=(DRIVE_DOWNLOAD_URL.format(id=drive_id),), is_video=True)
    return MediaPlan(
        candidates=(
            DRIVE_THUMBNAIL_URL.format(id=drive_id),
            DRIVE_VIEW_URL.format(id=drive_id),
        )
    )


def plan_news_image(url: Optional[str]) -> MediaPlan:
    """Build the media plan for a news story image.

    News images have no alternate source; an empty plan means the slide
    shows its generated category backdrop instead.
    """
    if not url:
        return MediaPlan(candidates=())
    drive_id = extract_drive_id(url)
    if drive_id is not None:
        return MediaPlan(
            candidates=(
                DRIVE_THUMBNAIL_URL.format(id=drive_id),
                DRIVE_VIEW_URL.format(id=drive_id),
            )
        )
    return MediaPlan(candidates=(url,))
