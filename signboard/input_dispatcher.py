"""Keyboard command dispatch for the signage board.

Maps key names (as reported by ``pygame.key.name``) to navigation commands.
Each key press is applied synchronously: the controller transitions, then
the rotation timer is reset so the next automatic tick is a full period
away. Nothing is queued; presses are handled one at a time in the order
they arrive.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Optional

from signboard.rotation import RotationController, RotationEvent, RotationState
from signboard.timer import RotationTimer

logger = logging.getLogger(__name__)


class Command(Enum):
    """Logical commands reachable from the keyboard."""

    NEXT = "next"
    PREV = "prev"
    RETRY = "retry"
    LAUNCH = "launch"


DEFAULT_BINDINGS: dict[str, Command] = {
    "n": Command.NEXT,
    "right": Command.NEXT,
    "p": Command.PREV,
    "left": Command.PREV,
    "r": Command.RETRY,
    "return": Command.LAUNCH,
    "enter": Command.LAUNCH,
}


class InputDispatcher:
    """Route key presses to the rotation controller and timer.

    Args:
        controller: Rotation state machine to drive
        timer: Rotation timer reset after every manual navigation
        is_open: Callable reporting whether the readiness gate is open;
            navigation keys are ignored while it is closed
        on_retry: Optional callable invoked for RETRY while the gate is closed
        on_launch: Optional callable invoked for LAUNCH while the gate is closed
        on_transition: Optional callable receiving each new rotation state
        bindings: Key name to command mapping (defaults to
            :data:`DEFAULT_BINDINGS`)
    """

    def __init__(
        self,
        controller: RotationController,
        timer: RotationTimer,
        *,
        is_open: Callable[[], bool] = lambda: True,
        on_retry: Optional[Callable[[], Any]] = None,
        on_launch: Optional[Callable[[], Any]] = None,
        on_transition: Optional[Callable[[RotationState], None]] = None,
        bindings: Optional[dict[str, Command]] = None,
    ):
        self._controller = controller
        self._timer = timer
        self._is_open = is_open
        self._on_retry = on_retry
        self._on_launch = on_launch
        self._on_transition = on_transition
        self._bindings = {k.lower(): v for k, v in (bindings or DEFAULT_BINDINGS).items()}

    def resolve(self, key_name: str) -> Optional[Command]:
        """Return the command bound to ``key_name`` (case-insensitive)."""
        return self._bindings.get(key_name.lower())

    def dispatch(self, key_name: str) -> Optional[RotationState]:
        """Handle one key press.

        Returns:
            The new rotation state, or None if the key caused no transition
        """
        command = self.resolve(key_name)
        if command is None:
            return None

        if command in (Command.RETRY, Command.LAUNCH):
            handler = self._on_retry if command is Command.RETRY else self._on_launch
            if not self._is_open() and handler is not None:
                logger.info("%s requested from keyboard", command.value.capitalize())
                handler()
            return None

        if not self._is_open():
            logger.debug("Ignoring %s while the display is gated", command.value)
            return None

        event = RotationEvent.FORWARD if command is Command.NEXT else RotationEvent.BACKWARD
        state = self._controller.transition(event)
        self._timer.reset()
        if self._on_transition is not None:
            self._on_transition(state)
        return state
