"""Main entry point for the department signage board.

This module wires the API client, readiness gate, rotation controller,
rotation timer, input dispatcher, layout engine and renderer together on a
single asyncio event loop.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
import sys
from typing import Any, Optional

import pygame

from signboard.api_client import SignageAPIClient
from signboard.config import Config
from signboard.exceptions import FetchError
from signboard.input_dispatcher import InputDispatcher
from signboard.layout_engine import LayoutEngine
from signboard.logging_config import configure_logging
from signboard.media import MediaPlan
from signboard.paginators import SessionStore
from signboard.promo import DEFAULT_PROMOS
from signboard.readiness import ReadinessAggregator, ReadinessState
from signboard.renderer import SignageRenderer
from signboard.rotation import RotationController, RotationState
from signboard.timer import RotationTimer

logger = logging.getLogger(__name__)

FRAME_INTERVAL = 0.1  # seconds between redraws (progress bar, clock)
QUIT_KEYS = ("escape", "q")


class SignageKioskApp:
    """Main application coordinator.

    The board starts gated: nothing rotates until all three content
    sources have loaded and an operator launches the presentation. Once
    launched the timer drives the rotation, and keyboard input can step it
    manually. While gated, keys can request a retry or the launch.
    """

    def __init__(self, config: Config, renderer: Optional[SignageRenderer] = None):
        """Initialize the application.

        Args:
            config: Configuration instance
            renderer: Renderer to draw with; created from ``config`` if omitted
        """
        self.config = config
        self.running = False
        self.launched = False
        self._load_task: Optional[asyncio.Task[None]] = None
        self._media_plan: Optional[MediaPlan] = None
        self._media_task: Optional[asyncio.Task[None]] = None

        self.store = SessionStore()
        self.controller = RotationController(
            self.store, DEFAULT_PROMOS, award_page_size=config.award_page_size
        )
        self.api_client = SignageAPIClient(config)
        self.aggregator = ReadinessAggregator(self.api_client, on_change=self._on_readiness)
        self.timer = RotationTimer(
            self._on_timer,
            steady_interval=config.rotation_interval,
            bootstrap_interval=config.bootstrap_interval,
        )
        self.dispatcher = InputDispatcher(
            self.controller,
            self.timer,
            is_open=lambda: self.presenting,
            on_retry=self.request_load,
            on_launch=self.launch,
            on_transition=self._on_transition,
        )
        self.layout_engine = LayoutEngine(slide_duration=config.rotation_interval)
        self.renderer = renderer if renderer is not None else SignageRenderer(config)

        logger.info("Signage board initialized")
        logger.info("Backend URL: %s", config.backend_url)
        logger.info(
            "Rotation interval: %.1fs (%.1fs during first cycle)",
            config.rotation_interval,
            config.bootstrap_interval,
        )

    async def run(self) -> None:
        """Main event loop: load content, then pump input and redraw."""
        self.running = True
        logger.info("Starting main event loop")

        self.request_load()
        try:
            while self.running:
                try:
                    self._handle_events()
                    self._render()
                except Exception:
                    logger.exception("Error in display loop")
                await asyncio.sleep(FRAME_INTERVAL)
        finally:
            for task in (self._load_task, self._media_task):
                if task is not None and not task.done():
                    task.cancel()
                    with contextlib.suppress(asyncio.CancelledError):
                        await task

        logger.info("Main event loop stopped")

    @property
    def presenting(self) -> bool:
        """True once content is ready and the presentation has been launched."""
        return self.aggregator.ready and self.launched

    def launch(self) -> None:
        """Open the presentation and start the rotation timer."""
        if self.launched or not self.aggregator.ready:
            logger.debug("Launch ignored (launched=%s, ready=%s)", self.launched,
                         self.aggregator.ready)
            return
        self.launched = True
        logger.info("Presentation launched")
        self.timer.start()

    # ------------------------------------------------------------------
    def request_load(self) -> None:
        """Schedule a content load unless one is already running."""
        if self._load_task is not None and not self._load_task.done():
            logger.debug("Content load already scheduled")
            return
        self._load_task = asyncio.create_task(self._load_content())

    async def _load_content(self) -> None:
        self.timer.stop()
        state = await self.aggregator.load()
        if not state.ready:
            return
        lists = self.aggregator.lists()
        self.controller.replace_content(lists["news"], lists["awards"], lists["events"])
        if self.launched:
            self.timer.start()

    def _on_readiness(self, state: ReadinessState) -> None:
        logger.debug("Readiness changed: ready=%s error=%s", state.ready, state.error)

    def _on_timer(self) -> None:
        self._on_transition(self.controller.advance())

    def _on_transition(self, state: RotationState) -> None:
        if self.controller.completed_cycles >= 1:
            self.timer.promote()
        logger.debug("Showing %s (epoch %d)", state.section.value, state.epoch)

    # ------------------------------------------------------------------
    def _handle_events(self) -> None:
        pygame.event.pump()
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.info("Received QUIT event")
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self.handle_key(pygame.key.name(event.key))

    def handle_key(self, key_name: str) -> None:
        """Apply one key press by name."""
        if key_name.lower() in QUIT_KEYS:
            logger.info("Received quit key")
            self.running = False
            return
        self.dispatcher.dispatch(key_name)

    def _render(self) -> None:
        if self.presenting:
            layout = self.layout_engine.process(
                self.controller.visible_content(), duration=self.timer.interval
            )
        else:
            layout = self.layout_engine.gate_layout(
                self.aggregator.state, loading=self.aggregator.loading
            )
        self._track_media(layout.media)
        self.renderer.render(layout)

    def _track_media(self, plan: Optional[MediaPlan]) -> None:
        """Start loading the media of a newly shown slide."""
        if plan is self._media_plan:
            return
        if self._media_task is not None and not self._media_task.done():
            self._media_task.cancel()
        self._media_plan = plan
        self._media_task = None
        if plan is not None and not plan.is_video and not plan.unavailable:
            self._media_task = asyncio.create_task(self._load_media(plan))

    async def _load_media(self, plan: MediaPlan) -> None:
        """Fetch the plan's sources in order until one decodes."""
        source = plan.source
        while source is not None:
            if self.renderer.has_media(source):
                return
            try:
                data = await self.api_client.fetch_media(source)
                self.renderer.add_media(source, data)
                return
            except (FetchError, pygame.error) as error:
                logger.info("Media source failed: %s", error)
                source = plan.fail()

    async def shutdown(self) -> None:
        """Graceful shutdown.

        Stops the rotation timer and closes the HTTP session. Renderer
        cleanup (pygame.quit) happens after run() returns, since the loop
        still pumps pygame events until then.
        """
        logger.info("Shutting down...")

        self.running = False
        self.timer.stop()
        await self.api_client.close()

        logger.info("Shutdown complete")


def setup_logging(config: Config) -> None:
    """Set up logging configuration.

    Args:
        config: Configuration instance
    """
    configure_logging(config.log_level, force_debug=config.debug or None)
    logger.info("Logging configured: level=%s", config.log_level)


async def main() -> None:
    """Main entry point."""
    config = Config.from_env()
    setup_logging(config)

    app = SignageKioskApp(config)

    loop = asyncio.get_running_loop()

    def signal_handler(sig: Any) -> None:
        logger.info("Received signal: %s", sig)
        app.running = False

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))  # type: ignore[misc]

    try:
        await app.run()
    except KeyboardInterrupt:
        logger.info("Received KeyboardInterrupt")
    finally:
        await app.shutdown()
        app.renderer.cleanup()


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    run()
