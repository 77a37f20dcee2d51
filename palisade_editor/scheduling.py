"""
Delayed Callback Schedulers
===========================

The only asynchronous primitive the controller needs: a cancellable
delayed callback.

Implementations:
- ThreadingScheduler: threading.Timer (callback runs on a timer thread)
- AsyncioScheduler: loop.call_later (callback runs on the event loop)
- ManualScheduler: virtual clock advanced explicitly (host UI loops, tests)
"""

import asyncio
import heapq
import itertools
import threading
from typing import Callable, List, Optional, Protocol, Tuple


class TimerHandle(Protocol):
    """Handle returned by Scheduler.call_later."""

    def cancel(self) -> None:
        """Cancel the callback. Safe to call after it ran or twice."""
        ...


class Scheduler(Protocol):
    """Protocol for delayed-callback substrates (interface)."""

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback once, delay_s seconds from now, unless cancelled."""
        ...


class ThreadingScheduler:
    """
    Scheduler backed by threading.Timer.

    Callbacks run on a daemon timer thread. The controller guards its
    state with a lock, so no marshalling is needed for it.
    """

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay_s, callback)
        timer.daemon = True
        timer.start()
        return timer


class AsyncioScheduler:
    """
    Scheduler backed by an asyncio event loop.

    Single-threaded cooperative: callbacks run on the loop thread.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_s, callback)


class ManualTimer:
    """Timer entry of a ManualScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self) -> str:
        return f"ManualTimer(due={self.due}, cancelled={self.cancelled}, fired={self.fired})"


class ManualScheduler:
    """
    Deterministic scheduler driven by a virtual clock.

    Nothing fires until advance() moves the clock past a timer's due time.
    Timers fire in due order, ties in scheduling order.

    Usage:
        scheduler = ManualScheduler()
        controller = RevalidationController(scheduler=scheduler)
        controller.on_boundary_changed(points)
        scheduler.advance(0.3)   # quiet period elapses, validation runs
    """

    def __init__(self):
        self._now = 0.0
        self._queue: List[Tuple[float, int, ManualTimer]] = []
        self._sequence = itertools.count()

    @property
    def now(self) -> float:
        """Current virtual time in seconds."""
        return self._now

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self._now + delay_s, callback)
        heapq.heappush(self._queue, (timer.due, next(self._sequence), timer))
        return timer

    @property
    def pending(self) -> int:
        """Number of armed, not cancelled timers."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward, firing every timer that comes due.

        Args:
            seconds: Amount of virtual time to elapse (>= 0)

        Returns:
            Number of callbacks fired

        Raises:
            ValueError: If seconds is negative
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance by negative time: {seconds}")

        target = self._now + seconds
        fired = 0

        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            self._now = max(self._now, due)
            if timer.cancelled:
                continue
            timer.fired = True
            timer.callback()
            fired += 1

        self._now = target
        return fired
