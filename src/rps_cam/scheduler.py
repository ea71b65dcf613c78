"""
Cooperative timer queue.

Callbacks are queued with ``call_later`` and run from whatever loop owns the
scheduler by calling ``run_pending``. Nothing runs on another thread, and the
clock is injectable so timing can be driven by hand.
"""
import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple


class ScheduledTask:
    """Handle for a queued callback."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """Runs due callbacks in due-time order, FIFO for equal due times."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._queue: List[Tuple[float, int, ScheduledTask]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(self.clock() + max(0.0, delay), callback)
        heapq.heappush(self._queue, (task.due, next(self._counter), task))
        return task

    def run_pending(self) -> int:
        """Run every callback that is due now. Returns how many ran."""
        ran = 0
        while self._queue and self._queue[0][0] <= self.clock():
            _, _, task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            task.callback()
            ran += 1
        return ran

    def pending(self) -> int:
        return sum(1 for _, _, task in self._queue if not task.cancelled)

    def next_due(self) -> Optional[float]:
        due = [task.due for _, _, task in self._queue if not task.cancelled]
        return min(due) if due else None
