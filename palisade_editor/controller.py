"""
Revalidation Controller
=======================

Turns a live stream of boundary edits into a throttled stream of
validation results.

State machine:
    IDLE --on_boundary_changed--> PENDING   (timer armed)
    PENDING --on_boundary_changed--> PENDING (cancel and re-arm)
    PENDING --quiet period elapses--> IDLE  (validate + publish)
    any --close()--> CLOSED                 (terminal)

Guarantees:
- At most one timer armed per controller (no process-wide timer)
- One validation pass per burst of edits, on the final boundary only
- A cancelled (stale) timer never validates or publishes
- Result published before an edit stays current until the timer fires
"""

import threading
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from palisade_zone import Point, ValidationResult, validate_boundary
from palisade_mqtt.logging import StructuredLogger, LogEvent, create_logger
from palisade_editor.scheduling import Scheduler, ThreadingScheduler, TimerHandle

DEFAULT_QUIET_PERIOD_MS = 300.0

# Subscriber signature: (boundary, result) -> None
ResultCallback = Callable[[Tuple[Point, ...], ValidationResult], None]


class ControllerState(str, Enum):
    """Controller lifecycle state."""
    IDLE = "idle"
    PENDING = "pending"
    CLOSED = "closed"


class RevalidationController:
    """
    Debounced revalidation of the candidate boundary of one editing session.

    Design:
    - Owns its timer handle (one controller per editing session)
    - Scheduler injected (threading, asyncio or manual clock)
    - Generation counter fences stale timers: a timer only publishes if no
      edit arrived after it was armed
    - State guarded by a re-entrant lock; subscribers notified outside it

    Usage:
        controller = RevalidationController(quiet_period_ms=300)
        controller.subscribe(lambda boundary, result: render(result))

        # From the drawing surface, on every add/move/delete
        controller.on_boundary_changed(points)

        # From the error panel / submit gate
        is_valid, errors, warnings = controller.current_state().as_tuple()

        # On submit: never trust a possibly stale debounced result
        result = controller.validate_now()
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        quiet_period_ms: float = DEFAULT_QUIET_PERIOD_MS,
        logger: Optional[StructuredLogger] = None,
        validator: Callable[[Sequence[Point]], ValidationResult] = validate_boundary
    ):
        """
        Args:
            scheduler: Delayed-callback substrate (default: ThreadingScheduler)
            quiet_period_ms: Debounce window in milliseconds (> 0)
            logger: Structured logger (default: "controller" component)
            validator: Validation function (default: validate_boundary)

        Raises:
            ValueError: If quiet_period_ms <= 0
        """
        if quiet_period_ms <= 0:
            raise ValueError(f"quiet_period_ms must be > 0, got {quiet_period_ms}")

        self.quiet_period_ms = quiet_period_ms
        self._scheduler = scheduler or ThreadingScheduler()
        self._logger = logger or create_logger("controller")
        self._validator = validator

        self._lock = threading.RLock()
        self._boundary: Tuple[Point, ...] = ()
        self._result = ValidationResult.provisional()
        self._timer: Optional[TimerHandle] = None
        self._generation = 0
        self._closed = False
        self._validation_count = 0
        self._subscribers: List[ResultCallback] = []

    # ===== Inbound (drawing surface) =====

    def on_boundary_changed(self, new_boundary: Sequence[Point]) -> None:
        """
        Replace the candidate boundary and (re)arm the debounce timer.

        Does not validate synchronously.

        Raises:
            TypeError: If new_boundary is None
            RuntimeError: If the controller was closed
        """
        if new_boundary is None:
            raise TypeError("new_boundary must be a sequence of Point, got None")

        with self._lock:
            if self._closed:
                raise RuntimeError("RevalidationController is closed")

            boundary = tuple(new_boundary)
            generation = self._generation + 1
            # Arm first: if the scheduler fails, the previous edit stays pending
            timer = self._scheduler.call_later(
                self.quiet_period_ms / 1000.0,
                lambda: self._on_timer(generation)
            )
            self._cancel_pending_locked()
            self._boundary = boundary
            self._generation = generation
            self._timer = timer
            point_count = len(boundary)

        self._logger.debug(
            event=LogEvent.VALIDATION_SCHEDULED,
            message="Boundary changed, validation scheduled",
            metadata={
                'point_count': point_count,
                'generation': generation,
                'quiet_period_ms': self.quiet_period_ms
            }
        )

    def _on_timer(self, generation: int) -> None:
        self._fire(generation)

    def on_timer_fire(self) -> None:
        """
        Quiet period elapsed: validate the current boundary and publish.

        Invoked by the scheduler; no-op once closed.
        """
        self._fire(None)

    def _fire(self, generation: Optional[int]) -> None:
        with self._lock:
            if self._closed:
                return
            # Stale: a newer edit re-armed (or validate_now consumed) the timer
            if generation is None:
                self._cancel_pending_locked()
            elif generation != self._generation or self._timer is None:
                return
            self._timer = None
            boundary, result = self._run_validation_locked()

        self._logger.info(
            event=LogEvent.VALIDATION_PUBLISHED,
            message="Published validation result",
            metadata={
                'point_count': len(boundary),
                'is_valid': result.is_valid,
                'error_codes': [c.value for c in result.error_codes],
                'warning_codes': [c.value for c in result.warning_codes]
            }
        )
        self._notify(boundary, result)

    def validate_now(self) -> ValidationResult:
        """
        Validate the current boundary synchronously and publish.

        Cancels any pending timer (the result is fresh, the timer would
        only repeat it). Use on submission.

        Raises:
            RuntimeError: If the controller was closed
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("RevalidationController is closed")
            self._cancel_pending_locked()
            boundary, result = self._run_validation_locked()

        self._logger.info(
            event=LogEvent.VALIDATION_FORCED,
            message="Forced synchronous validation",
            metadata={'point_count': len(boundary), 'is_valid': result.is_valid}
        )
        self._notify(boundary, result)
        return result

    def _run_validation_locked(self) -> Tuple[Tuple[Point, ...], ValidationResult]:
        boundary = self._boundary
        result = self._validator(boundary)
        self._result = result
        self._validation_count += 1
        return boundary, result

    def _cancel_pending_locked(self) -> None:
        if self._timer is None:
            return
        self._timer.cancel()
        self._timer = None
        self._logger.debug(
            event=LogEvent.VALIDATION_CANCELLED,
            message="Pending validation cancelled",
            metadata={'generation': self._generation}
        )

    # ===== Outbound (UI, submit gate) =====

    def current_state(self) -> ValidationResult:
        """Latest published result. Never blocks on validation."""
        with self._lock:
            return self._result

    @property
    def current_boundary(self) -> Tuple[Point, ...]:
        with self._lock:
            return self._boundary

    @property
    def state(self) -> ControllerState:
        with self._lock:
            if self._closed:
                return ControllerState.CLOSED
            if self._timer is not None:
                return ControllerState.PENDING
            return ControllerState.IDLE

    @property
    def validation_count(self) -> int:
        """Number of validation passes run so far."""
        with self._lock:
            return self._validation_count

    def subscribe(self, callback: ResultCallback) -> Callable[[], None]:
        """
        Register a callback for every published result.

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, boundary: Tuple[Point, ...], result: ValidationResult) -> None:
        with self._lock:
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(boundary, result)
            except Exception as e:
                self._logger.error(
                    event=LogEvent.SUBSCRIBER_ERROR,
                    message="Validation subscriber failed",
                    exc_info=e,
                    metadata={'subscriber': getattr(callback, '__name__', repr(callback))}
                )

    # ===== Lifecycle =====

    def close(self) -> None:
        """
        End of editing session: cancel the timer, drop subscribers.

        Safe to call multiple times.
        """
        with self._lock:
            if self._closed:
                return
            self._cancel_pending_locked()
            self._closed = True
            self._subscribers.clear()

    def __enter__(self) -> 'RevalidationController':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"RevalidationController(state={self.state.value}, "
            f"points={len(self.current_boundary)}, "
            f"validations={self.validation_count})"
        )
