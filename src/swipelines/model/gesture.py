"""
Swipe Gesture State Machine
===========================
Turns a pointer drag on one card into an offset/rotation and decides, at
release, whether the card snaps back or leaves the stack.

Why is this file needed?
------------------------
1. Decoupling: The card widget only forwards pointer coordinates; every
   decision (threshold, excluded directions, exit target) lives here and is
   testable without a display.
2. Ordering: The resolver fires the outcome callback synchronously and the
   "left screen" callback after the settle delay, so state advancement never
   waits on an animation.

Classes:
    GestureState: Position/rotation/flags of one card.
    SwipeResolver: Exit target and callback sequencing for a committed swipe.
    GestureTracker: Pointer handlers (begin/update/end) and force_resolve.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from swipelines.config import (
    EXIT_ROTATION, FLY_DISTANCE, ROTATION_FACTOR, SETTLE_DELAY_MS, SWIPE_THRESHOLD
)
from swipelines.model.item import Direction
from swipelines.model.scheduling import Scheduler

logger = logging.getLogger(__name__)

StateCallback = Callable[["GestureState"], None]


@dataclass
class GestureState:
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    dragging: bool = False
    leaving: bool = False

    @property
    def offset(self) -> tuple[float, float]:
        return self.x, self.y

    @property
    def animated(self) -> bool:
        """Changes made outside a drag are transitioned rather than jumped."""
        return not self.dragging

    @property
    def opacity(self) -> float:
        return 0.0 if self.leaving else 1.0

    def reset(self) -> None:
        self.x = 0.0
        self.y = 0.0
        self.rotation = 0.0


class SwipeResolver:
    """
    Plays out a committed swipe.

    1. Moves the target far off-stage, tilts it and marks the card as leaving.
    2. Calls `on_swipe(direction)` immediately.
    3. Calls `on_left_screen()` once the settle delay has elapsed.
    """
    def __init__(
        self,
        scheduler: Scheduler,
        on_swipe: Callable[[Direction], None],
        on_left_screen: Optional[Callable[[], None]] = None,
        fly_distance: float = FLY_DISTANCE,
        exit_rotation: float = EXIT_ROTATION,
        settle_delay_ms: int = SETTLE_DELAY_MS,
    ) -> None:
        self.scheduler = scheduler
        self.on_swipe = on_swipe
        self.on_left_screen = on_left_screen
        self.fly_distance = fly_distance
        self.exit_rotation = exit_rotation
        self.settle_delay_ms = settle_delay_ms

    def resolve(self, state: GestureState, direction: Direction, started: Optional[StateCallback] = None) -> None:
        # 1. Exit target
        if direction.is_horizontal:
            state.x = direction.sign * self.fly_distance
            state.y = 0.0
            state.rotation = direction.sign * self.exit_rotation
        else:
            state.x = 0.0
            state.y = direction.sign * self.fly_distance
            state.rotation = 0.0
        state.dragging = False
        state.leaving = True
        if started is not None:
            started(state)

        # 2. Outcome, never deferred behind the animation
        self.on_swipe(direction)

        # 3. Cleanup
        self.scheduler.call_later(self.settle_delay_ms, self._settled)

    def _settled(self) -> None:
        if self.on_left_screen is not None:
            self.on_left_screen()


class GestureTracker:
    """
    Per-card drag state machine.

    Coordinates are in any consistent space (scene or widget pixels); only
    differences matter. Implements the SwipeHandle protocol via
    `force_resolve`, which is what the card stack calls for buttons and keys.
    """
    def __init__(
        self,
        resolver: SwipeResolver,
        excluded: Iterable[Direction] = (),
        threshold: float = SWIPE_THRESHOLD,
        rotation_factor: float = ROTATION_FACTOR,
        on_change: Optional[StateCallback] = None,
    ) -> None:
        self.resolver = resolver
        self.excluded: frozenset[Direction] = frozenset(excluded)
        self.threshold = threshold
        self.rotation_factor = rotation_factor
        self.on_change = on_change

        self.state = GestureState()
        self._origin: tuple[float, float] = (0.0, 0.0)

    # --- DERIVED VIEW VALUES ---

    @property
    def swipe_ratio(self) -> float:
        return min(abs(self.state.x) / self.threshold, 1.0)

    @property
    def like_opacity(self) -> float:
        return self.swipe_ratio if self.state.x > 0 else 0.0

    @property
    def nope_opacity(self) -> float:
        return self.swipe_ratio if self.state.x < 0 else 0.0

    @property
    def locks_vertical(self) -> bool:
        # Only a full UP+DOWN exclusion pins the card vertically
        return Direction.UP in self.excluded and Direction.DOWN in self.excluded

    # --- POINTER HANDLERS ---

    def begin(self, x: float, y: float) -> None:
        if self.state.dragging or self.state.leaving:
            return
        self._origin = (self.state.x - x, self.state.y - y)
        self.state.dragging = True
        self._notify()

    def update(self, x: float, y: float) -> None:
        if not self.state.dragging:
            return
        new_x = x + self._origin[0]
        new_y = y + self._origin[1]
        self.state.x = new_x
        self.state.y = 0.0 if self.locks_vertical else new_y
        self.state.rotation = new_x * self.rotation_factor
        self._notify()

    def end(self) -> Optional[Direction]:
        """
        Release the drag.

        Returns:
            The committed direction, or None if the card snapped back.
        """
        if not self.state.dragging:
            return None
        self.state.dragging = False

        if abs(self.state.x) < self.threshold:
            self._snap_back()
            return None

        direction = Direction.RIGHT if self.state.x > 0 else Direction.LEFT
        if direction in self.excluded:
            logger.debug(f"Drag towards excluded direction '{direction}' absorbed.")
            self._snap_back()
            return None

        self._commit(direction)
        return direction

    def force_resolve(self, direction: Direction) -> bool:
        """
        Commit without pointer input. Explicit actions ignore `excluded`.

        Returns:
            False if the card is already leaving.
        """
        if self.state.leaving:
            return False
        self._commit(Direction(direction))
        return True

    # --- INTERNALS ---

    def _commit(self, direction: Direction) -> None:
        logger.debug(f"Swipe committed: {direction}")
        self.resolver.resolve(self.state, direction, started=self._emit)

    def _snap_back(self) -> None:
        self.state.reset()
        self._notify()

    def _notify(self) -> None:
        self._emit(self.state)

    def _emit(self, state: GestureState) -> None:
        if self.on_change is not None:
            self.on_change(state)
