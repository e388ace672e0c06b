# pacing.py
from __future__ import annotations
from typing import Callable, Optional
import logging
import math

from .config import (
    MIN_SPEED, MAX_SPEED,
    MIN_MAINLOOP_INTERVAL_MS, MAX_MAINLOOP_INTERVAL_MS,
    K,
)
from .scheduler import Scheduler, Timer

logger = logging.getLogger(__name__)


def clamp_speed(speed: float) -> int:
    """Force speed into [MIN_SPEED, MAX_SPEED]; in-range values are floored."""
    if speed < MIN_SPEED:
        return MIN_SPEED
    if speed > MAX_SPEED:
        return MAX_SPEED
    return math.floor(speed)


def interval_for_speed(speed: float) -> int:
    """Tick interval in ms: linear, strictly decreasing in speed."""
    interval = math.floor(MAX_MAINLOOP_INTERVAL_MS - K * clamp_speed(speed))
    return min(MAX_MAINLOOP_INTERVAL_MS, max(MIN_MAINLOOP_INTERVAL_MS, interval))


class PacingController:
    """
    Owns the recurring tick timer. Changing the speed cancels the running
    timer and starts a new one, which is also how the first tick gets going.
    """

    def __init__(self, scheduler: Scheduler, on_tick: Callable[[], None]):
        self.scheduler = scheduler
        self.on_tick = on_tick
        self.speed = MIN_SPEED
        self.interval_ms = interval_for_speed(MIN_SPEED)
        self._timer: Optional[Timer] = None

    @property
    def running(self) -> bool:
        return self._timer is not None and self._timer.active

    def adjust(self, speed: float) -> int:
        self.speed = clamp_speed(speed)
        self.interval_ms = interval_for_speed(self.speed)
        self.scheduler.cancel(self._timer)
        self._timer = self.scheduler.call_every(self.interval_ms, self.on_tick)
        logger.debug(f"Speed {self.speed} -> tick every {self.interval_ms} ms")
        return self.speed

    def stop(self) -> None:
        self.scheduler.cancel(self._timer)
        self._timer = None
