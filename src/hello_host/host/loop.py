# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Job queue driving deferred host callbacks.

Jobs run in FIFO order before any timer. Timers run in due order, ties
broken by scheduling order. The loop ends when nothing is pending.
"""

import heapq
import itertools
import logging
import time
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

Job = Tuple[Callable[..., Any], Tuple[Any, ...]]


class JobQueue:
    """Pending jobs and timers for one runtime."""

    def __init__(
        self,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep
        self._jobs: Deque[Job] = deque()
        self._timers: List[Tuple[float, int, int]] = []
        self._timer_jobs: Dict[int, Job] = {}
        self._seq = itertools.count()
        self._handles = itertools.count(1)

    @property
    def pending(self) -> int:
        return len(self._jobs) + len(self._timer_jobs)

    def enqueue(self, fn: Callable[..., Any], *args: Any) -> None:
        """Schedule ``fn(*args)`` for the next loop turn."""
        self._jobs.append((fn, args))

    def call_later(self, delay_ms: float, fn: Callable[..., Any], *args: Any) -> int:
        """Schedule ``fn(*args)`` after ``delay_ms`` milliseconds.

        Returns:
            Handle accepted by :meth:`cancel`.
        """
        handle = next(self._handles)
        due = self._clock() + max(delay_ms, 0) / 1000.0
        heapq.heappush(self._timers, (due, next(self._seq), handle))
        self._timer_jobs[handle] = (fn, args)
        logger.debug(f"Timer {handle} scheduled in {delay_ms} ms")
        return handle

    def cancel(self, handle: int) -> None:
        """Cancel a timer. Unknown or fired handles are ignored."""
        if self._timer_jobs.pop(handle, None) is not None:
            logger.debug(f"Timer {handle} cancelled")

    def _run_jobs(self) -> None:
        while self._jobs:
            fn, args = self._jobs.popleft()
            fn(*args)

    def _next_timer(self) -> Optional[Tuple[float, int]]:
        # Cancelled timers stay in the heap until they surface
        while self._timers:
            due, _, handle = self._timers[0]
            if handle in self._timer_jobs:
                return due, handle
            heapq.heappop(self._timers)
        return None

    def run(self) -> None:
        """Run until no jobs or timers remain.

        Exceptions raised by a job propagate; remaining work stays queued.
        """
        while True:
            self._run_jobs()
            nxt = self._next_timer()
            if nxt is None:
                return
            due, handle = nxt
            delay = due - self._clock()
            if delay > 0:
                self._sleep(delay)
            heapq.heappop(self._timers)
            fn, args = self._timer_jobs.pop(handle)
            fn(*args)
