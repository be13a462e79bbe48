"""Configuration management for the signage board.

Loads configuration from environment variables, matching the pattern
used by the framebuffer display client.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from signboard.exceptions import ConfigurationError


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name}={raw!r} is not an integer") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name}={raw!r} is not a number") from exc


@dataclass
class Config:
    """Signage board configuration.

    All settings loaded from environment variables. The network endpoint is
    the only externally meaningful knob; everything else tunes the display.
    """

    # Backend API settings
    backend_url: str = "https://api.krishnaaggarwal.com"
    api_timeout: int = 15  # seconds
    news_path: str = "/kietdata/news"
    awards_path: str = "/kietdata/filter"
    events_path: str = "/kietdata/events"
    news_limit: int = 25
    award_year: int = 2

    # Rotation settings
    rotation_interval: float = 20.0  # seconds - steady state
    bootstrap_interval: float = 10.0  # seconds - until the first full cycle
    award_page_size: int = 3

    # Display settings
    display_width: int = 1920
    display_height: int = 1080
    fullscreen: bool = True
    font_dir: Path | None = None

    # Logging
    log_level: str = "INFO"
    debug: bool = False

    def __post_init__(self) -> None:
        if self.rotation_interval <= 0 or self.bootstrap_interval <= 0:
            raise ConfigurationError("Rotation intervals must be positive")
        if self.award_page_size < 1:
            raise ConfigurationError("award_page_size must be at least 1")
        if self.news_limit < 1:
            raise ConfigurationError("news_limit must be at least 1")

    @classmethod
    def from_env(cls) -> Config:
        """Load configuration from environment variables.

        Environment Variables:
            SIGNBOARD_BACKEND_URL - Backend API base URL
            SIGNBOARD_API_TIMEOUT - Request timeout in seconds
            SIGNBOARD_NEWS_LIMIT - Maximum number of news records to request
            SIGNBOARD_AWARD_YEAR - Year filter for the achievements source
            SIGNBOARD_AWARD_PAGE_SIZE - Achievement cards per slide
            SIGNBOARD_ROTATION_INTERVAL - Steady-state seconds per slide
            SIGNBOARD_BOOTSTRAP_INTERVAL - Seconds per slide during the first cycle
            SIGNBOARD_DISPLAY_WIDTH / SIGNBOARD_DISPLAY_HEIGHT - Display size
            SIGNBOARD_WINDOWED - Set to 1 to disable fullscreen
            SIGNBOARD_FONT_DIR - Custom font directory path
            SIGNBOARD_LOG_LEVEL - Logging level (DEBUG, INFO, WARNING, ERROR)
            SIGNBOARD_DEBUG - Set to 1/true/yes for debug logging

        Returns:
            Config instance with values from environment

        Raises:
            ConfigurationError: If a numeric value cannot be parsed
        """
        backend_url = os.getenv("SIGNBOARD_BACKEND_URL", cls.backend_url)

        # Strip trailing slash from backend URL
        if backend_url.endswith("/"):
            backend_url = backend_url[:-1]

        font_dir_str = os.getenv("SIGNBOARD_FONT_DIR")

        return cls(
            backend_url=backend_url,
            api_timeout=_env_int("SIGNBOARD_API_TIMEOUT", cls.api_timeout),
            news_limit=_env_int("SIGNBOARD_NEWS_LIMIT", cls.news_limit),
            award_year=_env_int("SIGNBOARD_AWARD_YEAR", cls.award_year),
            award_page_size=_env_int("SIGNBOARD_AWARD_PAGE_SIZE", cls.award_page_size),
            rotation_interval=_env_float("SIGNBOARD_ROTATION_INTERVAL", cls.rotation_interval),
            bootstrap_interval=_env_float(
                "SIGNBOARD_BOOTSTRAP_INTERVAL", cls.bootstrap_interval
            ),
            display_width=_env_int("SIGNBOARD_DISPLAY_WIDTH", cls.display_width),
            display_height=_env_int("SIGNBOARD_DISPLAY_HEIGHT", cls.display_height),
            fullscreen=os.getenv("SIGNBOARD_WINDOWED", "").lower() not in ("1", "true", "yes"),
            font_dir=Path(font_dir_str) if font_dir_str else None,
            log_level=os.getenv("SIGNBOARD_LOG_LEVEL", "INFO").upper(),
            debug=os.getenv("SIGNBOARD_DEBUG", "").lower() in ("1", "true", "yes"),
        )

    def get_api_endpoint(self, path: str) -> str:
        """Get full API endpoint URL.

        Args:
            path: API path (e.g., "/kietdata/news")

        Returns:
            Full URL (e.g., "https://api.example.com/kietdata/news")
        """
        # Ensure path starts with /
        if not path.startswith("/"):
            path = "/" + path

        return f"{self.backend_url}{path}"
