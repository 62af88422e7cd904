"""
scheduler.py — Tick Schedulers
===============================
The playback controller never sleeps or spawns threads. It asks a
scheduler to call it back later and keeps the returned handle so the
call can be cancelled.

    handle = scheduler.call_later(600, controller_tick)
    handle.cancel()          # idempotent

Two implementations:
  • PollingScheduler – deadlines on a monotonic clock, fired when the
                       owner calls pump() (from a request handler, a
                       game loop, a test). Inject `clock` for tests.
  • AsyncioScheduler – hands the callback to an asyncio event loop.

Both are single-threaded: callbacks run on the caller's thread.
"""

import asyncio
import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple


class ScheduledCall:
    """Handle for one pending PollingScheduler callback."""

    __slots__ = ("deadline", "callback", "cancelled")

    def __init__(self, deadline: float, callback: Callable[[], None]):
        self.deadline  = deadline
        self.callback  = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class PollingScheduler:
    """
    Attributes:
        clock : Zero-arg callable returning seconds (default time.monotonic).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._seq   = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self.clock() + delay_ms / 1000.0, callback)
        heapq.heappush(self._queue, (call.deadline, next(self._seq), call))
        return call

    def pump(self) -> int:
        """Fire every callback whose deadline has passed. Returns how many fired."""
        now   = self.clock()
        fired = 0
        while self._queue:
            deadline, _, call = self._queue[0]
            if call.cancelled:
                heapq.heappop(self._queue)
                continue
            if deadline > now:
                break
            heapq.heappop(self._queue)
            call.cancel()
            call.callback()
            fired += 1
        return fired

    @property
    def pending(self) -> int:
        return sum(1 for _, _, c in self._queue if not c.cancelled)

    def next_deadline(self) -> Optional[float]:
        live = [d for d, _, c in self._queue if not c.cancelled]
        return min(live) if live else None


class AsyncioScheduler:
    """Schedules on `loop`, or on the running loop at call time."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, callback)
