"""
Central logging configuration for the signage board.

Keeps the board's own modules at INFO (or DEBUG when requested) while
suppressing verbose logs from third-party libraries that would otherwise
flood the console of an unattended display.
"""

import logging
import os
from typing import Optional

# Third-party libraries that generate excessive debug logs
_NOISY_LOGGERS: dict[str, int] = {
    "aiohttp.access": logging.WARNING,
    "aiohttp.client": logging.WARNING,
    "aiohttp.internal": logging.WARNING,
    "asyncio": logging.WARNING,
    "charset_normalizer": logging.WARNING,
    "PIL": logging.INFO,
}


def configure_logging(log_level: str = "INFO", force_debug: Optional[bool] = None) -> None:
    """
    Configure logging for the signage board.

    Args:
        log_level: Root level name (DEBUG, INFO, WARNING, ERROR)
        force_debug: Override debug mode (None to use env var detection)

    Environment Variables:
        SIGNBOARD_DEBUG: Set to '1', 'true', 'yes' to force debug logging
    """
    env_debug = os.getenv("SIGNBOARD_DEBUG", "").lower() in ("1", "true", "yes")
    final_debug = force_debug if force_debug is not None else env_debug

    root_level = getattr(logging, log_level.upper(), logging.INFO)
    if final_debug:
        root_level = logging.DEBUG

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Only add a handler if none exist (pytest and embedding apps bring their own)
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(root_level)
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        root_logger.addHandler(handler)

    for logger_name, level in _NOISY_LOGGERS.items():
        logging.getLogger(logger_name).setLevel(level)

    logging.getLogger("signboard").setLevel(logging.DEBUG if final_debug else root_level)

    root_logger.info(
        "Logging configured: level=%s debug=%s", logging.getLevelName(root_level), final_debug
    )


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in ("signboard", "aiohttp.access", "asyncio"):
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
