# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Memory usage reporting for script runs, backed by tracemalloc."""

import tracemalloc
from typing import Dict, TextIO

TOP_SITES = 10


class MemoryTracker:
    """Tracks allocations between :meth:`start` and :meth:`stop`.

    With ``trace=True`` the dump also lists the top allocation sites.
    """

    def __init__(self, trace: bool = False):
        self.trace = trace
        self._started_here = False
        self._snapshot = None
        self._usage = {"current": 0, "peak": 0}

    def start(self) -> None:
        if not tracemalloc.is_tracing():
            tracemalloc.start(25 if self.trace else 1)
            self._started_here = True
        tracemalloc.reset_peak()

    def stop(self) -> None:
        if not tracemalloc.is_tracing():
            return
        current, peak = tracemalloc.get_traced_memory()
        self._usage = {"current": current, "peak": peak}
        if self.trace:
            self._snapshot = tracemalloc.take_snapshot()
        if self._started_here:
            tracemalloc.stop()
            self._started_here = False

    def usage(self) -> Dict[str, int]:
        if tracemalloc.is_tracing():
            current, peak = tracemalloc.get_traced_memory()
            return {"current": current, "peak": peak}
        return dict(self._usage)

    def dump(self, stream: TextIO) -> None:
        usage = self.usage()
        stream.write("MEMORY USAGE\n")
        stream.write(f"  current: {usage['current']} bytes\n")
        stream.write(f"  peak:    {usage['peak']} bytes\n")
        if self.trace and self._snapshot is not None:
            stream.write(f"TOP {TOP_SITES} ALLOCATION SITES\n")
            for stat in self._snapshot.statistics("lineno")[:TOP_SITES]:
                stream.write(f"  {stat}\n")
