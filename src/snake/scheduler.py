# scheduler.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List, Optional
import heapq
import itertools


@dataclass(eq=False)
class Timer:
    """Handle for a pending callback. Cancel it to stop it from firing (again)."""
    due_ms: int
    callback: Callable[[], None]
    interval_ms: Optional[int] = None   # None -> one-shot
    cancelled: bool = False
    fired: bool = False

    @property
    def active(self) -> bool:
        return not self.cancelled and not (self.fired and self.interval_ms is None)

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class Scheduler:
    """
    Millisecond timer queue for a single-threaded game.

    Nothing runs by itself: the owner moves the clock forward with
    advance_to()/advance(), and every due callback runs to completion in
    due-time order (ties in creation order). In the pygame front end the
    clock is pygame.time.get_ticks(); in tests it is advanced by hand.
    """
    now_ms: int = 0
    _queue: List[tuple] = field(default_factory=list, repr=False)
    _seq: itertools.count = field(default_factory=itertools.count, repr=False)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Timer:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        timer = Timer(due_ms=self.now_ms + int(delay_ms), callback=callback)
        self._push(timer)
        return timer

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> Timer:
        """First call happens interval_ms from now, then every interval_ms."""
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be > 0, got {interval_ms}")
        timer = Timer(
            due_ms=self.now_ms + int(interval_ms),
            callback=callback,
            interval_ms=int(interval_ms),
        )
        self._push(timer)
        return timer

    @staticmethod
    def cancel(timer: Optional[Timer]) -> None:
        if timer is not None:
            timer.cancel()

    def _push(self, timer: Timer) -> None:
        heapq.heappush(self._queue, (timer.due_ms, next(self._seq), timer))

    def pending(self) -> int:
        """Number of timers that will still fire."""
        return sum(1 for _, _, t in self._queue if not t.cancelled)

    def advance_to(self, now_ms: int) -> int:
        """Run every callback due at or before now_ms. Returns how many ran."""
        ran = 0
        while self._queue and self._queue[0][0] <= now_ms:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            # Callbacks see the clock at their own due time
            self.now_ms = max(self.now_ms, due)
            timer.fired = True
            timer.callback()
            ran += 1
            if timer.interval_ms is not None and not timer.cancelled:
                timer.due_ms = due + timer.interval_ms
                self._push(timer)
        self.now_ms = max(self.now_ms, now_ms)
        return ran

    def advance(self, delta_ms: int) -> int:
        return self.advance_to(self.now_ms + delta_ms)

    def clear(self) -> None:
        for _, _, timer in self._queue:
            timer.cancel()
        self._queue.clear()
