import heapq
import itertools
from collections import deque
from typing import Callable, Deque, List, Tuple

from PyQt5.QtCore import QTimer


class QtClock:
    """Schedules continuations on the Qt event loop."""

    def call_later(self, delay_ms, callback: Callable[[], None]):
        QTimer.singleShot(max(0, int(delay_ms)), callback)


class ManualClock:
    """
    Virtual clock for headless runs. Callbacks only fire when ``step`` or
    ``run_all`` is called, in due-time order; ``now`` is the virtual time in ms.
    """

    def __init__(self):
        self.now = 0
        self._queue: List[Tuple[float, int, Callable[[], None]]] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms, callback):
        heapq.heappush(self._queue, (self.now + delay_ms, next(self._seq), callback))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def step(self) -> bool:
        if not self._queue:
            return False
        due, _, callback = heapq.heappop(self._queue)
        self.now = max(self.now, due)
        callback()
        return True

    def run_all(self, limit=100000):
        steps = 0
        while self.step():
            steps += 1
            if steps >= limit:
                raise RuntimeError("clock did not settle")


class ImmediateClock:
    """
    Runs every callback as soon as it is scheduled while still accounting
    virtual time. Nested scheduling is queued instead of recursing.
    """

    def __init__(self):
        self.now = 0
        self._pending: Deque[Tuple[float, Callable[[], None]]] = deque()
        self._draining = False

    def call_later(self, delay_ms, callback):
        self._pending.append((delay_ms, callback))
        if self._draining:
            return
        self._draining = True
        try:
            while self._pending:
                delay, pending_cb = self._pending.popleft()
                self.now += delay
                pending_cb()
        finally:
            self._draining = False
