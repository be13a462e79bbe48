"""Department signage board - pygame slideshow for a lobby display.

Rotates four sections (news, student achievements, event media and
internship promotions) on a fixed timer once all content has loaded.

Architecture:
- api_client.py: Async HTTP client for the data backend
- models.py: Record schemas for the three content sheets
- readiness.py: Gate that opens once every source has loaded
- paginators.py: Per-section cursors (cyclic, windowed, persistent)
- rotation.py: Section state machine
- timer.py: Single-owner auto-advance timer
- input_dispatcher.py: Keyboard navigation and retry
- media.py: Image/video source fallback planning
- layout_engine.py: Rotation output to slide view models
- renderer.py: Pygame drawing
- main.py: Event loop and coordinator

Usage:
    python -m signboard

Environment Variables:
    SIGNBOARD_BACKEND_URL - Backend API URL
    SIGNBOARD_ROTATION_INTERVAL - Seconds per slide
    SIGNBOARD_DEBUG - Enable debug logging
"""

__version__ = "0.1.0"
__author__ = "KIET CS Department"

from signboard.config import Config

__all__ = ["Config"]
