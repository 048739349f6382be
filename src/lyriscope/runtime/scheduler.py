"""
Cooperative frame scheduler.

Callbacks requested before a tick run exactly once on that tick; callbacks
requested while a tick is running wait for the next one. Everything happens
on the caller's thread.
"""

import itertools
from typing import Callable

FrameCallback = Callable[[float], None]


class FrameScheduler:
    """Request/cancel queue for per-frame callbacks."""

    def __init__(self):
        self._pending: dict[int, FrameCallback] = {}
        self._running: dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)
        self.frame_count = 0

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule ``callback(now_ms)`` for the next tick and return its handle."""
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int | None):
        if handle is None:
            return
        self._pending.pop(handle, None)
        # also covers callbacks cancelled by an earlier callback in this tick
        self._running.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_frame(self, now_ms: float):
        """Run every callback that was pending when the tick started."""
        self._running = self._pending
        self._pending = {}
        self.frame_count += 1
        try:
            while self._running:
                handle = next(iter(self._running))
                callback = self._running.pop(handle)
                callback(now_ms)
        finally:
            self._running = {}

    def clear(self):
        self._pending.clear()
        self._running.clear()
