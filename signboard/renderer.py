"""Pygame-based renderer for the signage board.

Draws the slide view models produced by the layout engine: a header with
the department banner and clock, a progress bar that restarts on every
rotation epoch, and one body per section. The renderer is deliberately
plain; styling and animation are left to the display's deployment.
"""

from __future__ import annotations

import io
import logging
import os
import platform
import time
from typing import Optional

import pygame

from signboard.config import Config
from signboard.layout_engine import (
    AwardSlide,
    EventSlide,
    GateScreen,
    NewsSlide,
    ProgressDisplay,
    PromoSlide,
    SlideLayout,
)
from signboard.media import UNAVAILABLE_TEXT, MediaPlan

logger = logging.getLogger(__name__)

MEDIA_CACHE_SIZE = 16  # decoded images kept in memory

COLORS = {
    "background": (248, 249, 250),
    "ink": (44, 62, 80),
    "muted": (120, 132, 145),
    "accent": (230, 126, 34),
    "accent_dark": (211, 84, 0),
    "card": (255, 255, 255),
    "card_border": (229, 231, 235),
    "track": (222, 226, 230),
    "error": (192, 57, 43),
}

HEADER_HEIGHT = 120
PROGRESS_HEIGHT = 6
MARGIN = 48


class SignageRenderer:
    """Draw slide layouts to the display with pygame.

    Args:
        config: Configuration instance
    """

    def __init__(self, config: Config):
        self.config = config
        self.width = config.display_width
        self.height = config.display_height
        self._progress_epoch: Optional[int] = None
        self._progress_started = 0.0
        self._media: dict[str, pygame.Surface] = {}

        self._init_pygame()
        self._load_fonts()

        logger.info("Renderer initialized: %dx%d display", self.width, self.height)

    def _init_pygame(self) -> None:
        """Initialize pygame and create the display surface."""
        if "SDL_NOMOUSE" not in os.environ:
            os.environ["SDL_NOMOUSE"] = "1"

        pygame.init()

        flags = pygame.FULLSCREEN if self.config.fullscreen else 0
        try:
            self.screen = pygame.display.set_mode((self.width, self.height), flags)
        except pygame.error as e:
            logger.warning("Failed to create fullscreen display, falling back to windowed: %s", e)
            self.screen = pygame.display.set_mode((self.width, self.height))
        logger.info("Display created (%s, fullscreen=%s)", platform.system(), bool(flags))

        pygame.display.set_caption("Department Signage Board")
        pygame.mouse.set_visible(False)

    def _load_fonts(self) -> None:
        """Load fonts from the configured directory or fall back to pygame's default."""
        regular: Optional[str] = None
        bold: Optional[str] = None
        if self.config.font_dir:
            regular_path = self.config.font_dir / "DejaVuSans.ttf"
            bold_path = self.config.font_dir / "DejaVuSans-Bold.ttf"
            if regular_path.exists() and bold_path.exists():
                regular, bold = str(regular_path), str(bold_path)
            else:
                logger.warning("Fonts not found in %s; using default font", self.config.font_dir)

        self.fonts = {
            "banner": pygame.font.Font(bold, 34),
            "small": pygame.font.Font(regular, 22),
            "badge": pygame.font.Font(bold, 22),
            "headline": pygame.font.Font(bold, 72),
            "body": pygame.font.Font(regular, 34),
            "card_title": pygame.font.Font(bold, 32),
            "card_body": pygame.font.Font(regular, 26),
            "gate_title": pygame.font.Font(bold, 56),
        }

    # ------------------------------------------------------------------
    def render(self, layout: SlideLayout) -> None:
        """Render a complete layout to the display."""
        self.screen.fill(COLORS["background"])
        self._render_header(layout)

        if layout.gate is not None:
            self._render_gate(layout.gate)
        elif isinstance(layout.slide, NewsSlide):
            self._render_news(layout.slide)
        elif isinstance(layout.slide, AwardSlide):
            self._render_awards(layout.slide)
        elif isinstance(layout.slide, EventSlide):
            self._render_event(layout.slide)
        elif isinstance(layout.slide, PromoSlide):
            self._render_promo(layout.slide)

        if layout.progress is not None:
            self._render_progress(layout.progress)

        pygame.display.flip()

    # ------------------------------------------------------------------
    def _render_header(self, layout: SlideLayout) -> None:
        self._blit(self.fonts["banner"], "KIET UNIVERSITY", COLORS["ink"], (MARGIN, 36))
        self._blit(self.fonts["small"], "CS DEPARTMENT", COLORS["accent"], (MARGIN, 76))
        if layout.clock:
            clock = self.fonts["banner"].render(layout.clock, True, COLORS["ink"])
            self.screen.blit(clock, (self.width - MARGIN - clock.get_width(), 36))
            date = self.fonts["small"].render(layout.date, True, COLORS["accent"])
            self.screen.blit(date, (self.width - MARGIN - date.get_width(), 76))

    def _render_progress(self, progress: ProgressDisplay) -> None:
        if progress.epoch != self._progress_epoch:
            self._progress_epoch = progress.epoch
            self._progress_started = time.monotonic()
        elapsed = time.monotonic() - self._progress_started
        fraction = min(1.0, elapsed / progress.duration) if progress.duration > 0 else 1.0
        pygame.draw.rect(self.screen, COLORS["track"], (0, 0, self.width, PROGRESS_HEIGHT))
        pygame.draw.rect(
            self.screen, COLORS["accent"], (0, 0, int(self.width * fraction), PROGRESS_HEIGHT)
        )

    def _render_gate(self, gate: GateScreen) -> None:
        color = COLORS["error"] if gate.state == "error" else COLORS["ink"]
        center_y = self.height // 2
        self._blit_centered(self.fonts["gate_title"], gate.title, color, center_y - 60)
        self._blit_centered(self.fonts["body"], gate.message, COLORS["muted"], center_y + 10)
        if gate.hint:
            self._blit_centered(self.fonts["badge"], gate.hint, COLORS["accent"], center_y + 70)

    def _render_news(self, slide: NewsSlide) -> None:
        text_width = int(self.width * 0.62)
        y = HEADER_HEIGHT + 60
        badge = f"{slide.category.upper()}"
        if slide.published:
            badge += f"   Published On - {slide.published}"
        y = self._blit(self.fonts["badge"], badge, COLORS["accent_dark"], (MARGIN, y)) + 24

        for line in self._wrap_text(slide.headline, self.fonts["headline"], text_width)[:3]:
            y = self._blit(self.fonts["headline"], line, COLORS["accent"], (MARGIN, y)) + 6
        y += 24
        for line in self._wrap_text(slide.description, self.fonts["body"], text_width)[:3]:
            y = self._blit(self.fonts["body"], line, COLORS["ink"], (MARGIN + 24, y)) + 4

        if slide.students_impact:
            y += 30
            y = self._blit(self.fonts["badge"], "STUDENT IMPACT", COLORS["accent"], (MARGIN, y))
            for line in self._wrap_text(slide.students_impact, self.fonts["body"], text_width)[:3]:
                y = self._blit(self.fonts["body"], line, COLORS["muted"], (MARGIN, y + 4))

        panel = pygame.Rect(int(self.width * 0.68), HEADER_HEIGHT + 60,
                            int(self.width * 0.28), int(self.height * 0.6))
        self._render_media_panel(slide.image, panel, empty_label="Generated View")
        self._blit(self.fonts["small"], slide.caption, COLORS["ink"],
                   (panel.x, panel.bottom + 16))

    def _render_awards(self, slide: AwardSlide) -> None:
        self._blit_centered(self.fonts["small"], slide.caption, COLORS["muted"], HEADER_HEIGHT + 20)
        count = max(len(slide.cards), 1)
        gap = 32
        card_width = (self.width - 2 * MARGIN - gap * (count - 1)) // count
        card_height = int(self.height * 0.6)
        top = HEADER_HEIGHT + 80
        for index, card in enumerate(slide.cards):
            rect = pygame.Rect(MARGIN + index * (card_width + gap), top, card_width, card_height)
            pygame.draw.rect(self.screen, COLORS["card"], rect, border_radius=16)
            pygame.draw.rect(self.screen, card.theme_color, rect, width=3, border_radius=16)
            inner = rect.x + 24
            y = self._blit(self.fonts["badge"], card.theme_label, card.theme_color, (inner, rect.y + 24))
            y = self._blit(self.fonts["card_title"], card.student_name, COLORS["ink"], (inner, y + 16))
            if card.class_label:
                y = self._blit(self.fonts["small"], card.class_label, COLORS["muted"], (inner, y + 4))
            y += 20
            for line in self._wrap_text(f'"{card.description}"', self.fonts["card_body"],
                                        card_width - 48)[:5]:
                y = self._blit(self.fonts["card_body"], line, COLORS["ink"], (inner, y + 4))
            footer_y = rect.bottom - 90
            self._blit(self.fonts["badge"], card.event_title, card.theme_color, (inner, footer_y))
            if card.organization:
                self._blit(self.fonts["small"], f"@ {card.organization}", COLORS["muted"],
                           (inner, footer_y + 34))

    def _render_event(self, slide: EventSlide) -> None:
        panel = pygame.Rect(MARGIN * 3, HEADER_HEIGHT + 30,
                            self.width - MARGIN * 6, self.height - HEADER_HEIGHT - 110)
        self._render_media_panel(slide.media, panel, empty_label=UNAVAILABLE_TEXT)
        label = slide.title or ("Video" if slide.media.is_video else "Poster")
        self._blit_centered(self.fonts["small"], f"{label}   {slide.caption}", COLORS["muted"],
                            panel.bottom + 20)

    def _render_promo(self, slide: PromoSlide) -> None:
        text_width = int(self.width * 0.58)
        y = HEADER_HEIGHT + 60
        y = self._blit(self.fonts["badge"], f"{slide.company.upper()}  |  Official Campus Hiring",
                       COLORS["muted"], (MARGIN, y)) + 16
        for line in self._wrap_text(slide.role, self.fonts["headline"], text_width)[:2]:
            y = self._blit(self.fonts["headline"], line, COLORS["accent"], (MARGIN, y)) + 6
        y = self._blit(self.fonts["badge"], f"{slide.work_type}   {slide.stipend}",
                       COLORS["ink"], (MARGIN, y + 16)) + 24
        for line in self._wrap_text(slide.description, self.fonts["body"], text_width)[:4]:
            y = self._blit(self.fonts["body"], line, COLORS["ink"], (MARGIN, y)) + 4
        y = self._blit(self.fonts["badge"], "MINIMUM REQUIREMENTS", COLORS["accent"],
                       (MARGIN, y + 30)) + 8
        for requirement in slide.eligibility:
            y = self._blit(self.fonts["card_body"], f"- {requirement}", COLORS["ink"],
                           (MARGIN + 16, y)) + 4

        right = int(self.width * 0.68)
        y = self._blit(self.fonts["badge"], "APPLICATION DEADLINE", COLORS["muted"],
                       (right, HEADER_HEIGHT + 60))
        self._blit(self.fonts["headline"], slide.deadline, COLORS["accent_dark"], (right, y + 8))
        if slide.qr_code:
            self._blit(self.fonts["badge"], "Scan to Apply", COLORS["ink"],
                       (right, self.height - 160))

    def _render_media_panel(self, plan: MediaPlan, rect: pygame.Rect, empty_label: str) -> None:
        """Draw the frame for a slide's media with its current source status."""
        pygame.draw.rect(self.screen, COLORS["card"], rect, border_radius=24)
        pygame.draw.rect(self.screen, COLORS["card_border"], rect, width=4, border_radius=24)
        source = plan.source
        if source is not None and source in self._media:
            self._blit_media(self._media[source], rect.inflate(-24, -24))
            return
        if plan.unavailable:
            text, color = empty_label, COLORS["muted"]
        else:
            text = "Video" if plan.is_video else "Visual Context"
            color = COLORS["accent"]
        surf = self.fonts["badge"].render(text, True, color)
        self.screen.blit(surf, (rect.centerx - surf.get_width() // 2,
                                rect.centery - surf.get_height() // 2))

    def has_media(self, url: str) -> bool:
        return url in self._media

    def add_media(self, url: str, data: bytes) -> None:
        """Decode downloaded image bytes and keep them for drawing.

        Raises:
            pygame.error: If the bytes are not a decodable image
        """
        surface = pygame.image.load(io.BytesIO(data))
        if len(self._media) >= MEDIA_CACHE_SIZE:
            self._media.pop(next(iter(self._media)))
        self._media[url] = surface
        logger.debug("Decoded media %s (%dx%d)", url, surface.get_width(), surface.get_height())

    def _blit_media(self, surface: pygame.Surface, rect: pygame.Rect) -> None:
        """Scale an image to fit inside ``rect`` and draw it centered."""
        scale = min(rect.width / surface.get_width(), rect.height / surface.get_height())
        size = (max(1, int(surface.get_width() * scale)), max(1, int(surface.get_height() * scale)))
        scaled = pygame.transform.smoothscale(surface.convert_alpha(), size)
        self.screen.blit(scaled, scaled.get_rect(center=rect.center))

    # ------------------------------------------------------------------
    def _blit(self, font: pygame.font.Font, text: str, color: tuple[int, int, int],
              pos: tuple[int, int]) -> int:
        """Blit one line of text and return the y coordinate below it."""
        surf = font.render(text, True, color)
        self.screen.blit(surf, pos)
        return pos[1] + surf.get_height()

    def _blit_centered(self, font: pygame.font.Font, text: str, color: tuple[int, int, int],
                       y: int) -> int:
        surf = font.render(text, True, color)
        self.screen.blit(surf, (self.width // 2 - surf.get_width() // 2, y))
        return y + surf.get_height()

    def _wrap_text(self, text: str, font: pygame.font.Font, max_width: int) -> list[str]:
        """Wrap text to fit within maximum width.

        Args:
            text: Text to wrap
            font: Font to use for measuring
            max_width: Maximum width in pixels

        Returns:
            List of wrapped text lines
        """
        words = text.split()
        lines: list[str] = []
        current_line = ""

        for word in words:
            candidate = f"{current_line} {word}" if current_line else word
            if font.size(candidate)[0] <= max_width:
                current_line = candidate
            else:
                if current_line:
                    lines.append(current_line)
                current_line = word

        if current_line:
            lines.append(current_line)

        return lines if lines else [text]

    def cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.debug("Renderer cleaned up")
