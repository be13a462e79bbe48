"""Single-owner rotation timer built on the asyncio event loop.

Only one deferred callback is ever live. :meth:`RotationTimer.reset` cancels
the current handle before arming a new one, and every arm bumps a generation
token so a callback that slipped past cancellation is recognised as stale
and dropped. Two live timers would advance the board twice per period.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class RotationTimer:
    """Auto-advance timer for the slideshow.

    The timer starts out on the shorter ``bootstrap_interval`` and switches
    to ``steady_interval`` once :meth:`promote` is called. It stays inert
    until :meth:`start` is called (the readiness gate opening).

    Args:
        on_fire: Callable invoked on every tick (normally
            ``controller.advance``)
        steady_interval: Seconds between ticks once fully initialised
        bootstrap_interval: Seconds between ticks before promotion;
            defaults to ``steady_interval``
        loop: Event loop to schedule on; defaults to the running loop
    """

    def __init__(
        self,
        on_fire: Callable[[], Any],
        *,
        steady_interval: float,
        bootstrap_interval: Optional[float] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        if steady_interval <= 0:
            raise ValueError("steady_interval must be positive")
        self._on_fire = on_fire
        self.steady_interval = steady_interval
        self.bootstrap_interval = bootstrap_interval or steady_interval
        self._loop = loop

        self._handle: Optional[asyncio.TimerHandle] = None
        self._generation = 0
        self._enabled = False
        self._promoted = False
        self.fire_count = 0

    # ------------------------------------------------------------------
    @property
    def interval(self) -> float:
        return self.steady_interval if self._promoted else self.bootstrap_interval

    @property
    def armed(self) -> bool:
        return self._handle is not None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def generation(self) -> int:
        return self._generation

    # ------------------------------------------------------------------
    def start(self) -> None:
        """Enable the timer and arm the first tick."""
        self._enabled = True
        logger.info("Rotation timer started (interval %.1fs)", self.interval)
        self.reset()

    def reset(self) -> bool:
        """Cancel any pending tick and arm a fresh one.

        Returns:
            True if a tick was armed, False while the timer is inert
        """
        if not self._enabled:
            return False
        self.cancel()
        self._generation += 1
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.interval, self._fire, self._generation)
        return True

    def cancel(self) -> None:
        """Cancel the pending tick, if any. The timer stays enabled."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def stop(self) -> None:
        """Cancel the pending tick and disable the timer (session teardown)."""
        self._enabled = False
        self.cancel()
        logger.debug("Rotation timer stopped")

    def promote(self) -> None:
        """Switch to the steady-state interval, re-arming if a tick is pending."""
        if self._promoted:
            return
        self._promoted = True
        logger.info("Rotation timer promoted to steady interval %.1fs", self.steady_interval)
        if self.armed:
            self.reset()

    # ------------------------------------------------------------------
    def _fire(self, generation: int) -> None:
        if generation != self._generation or not self._enabled:
            logger.debug("Ignoring stale rotation tick (generation %d)", generation)
            return

        self._handle = None
        self.fire_count += 1
        try:
            self._on_fire()
        except Exception:
            # A broken slide must never stop the rotation
            logger.exception("Rotation tick handler failed")
        finally:
            self.reset()
