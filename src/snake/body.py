# body.py
from __future__ import annotations
from collections import deque
from typing import Deque, Iterator, List
import math

from .config import Direction
from .grid import Grid, Position


def normalize_length(new_length: float) -> int:
    """Lengths below 1 become 1, fractional lengths are floored."""
    return max(1, math.floor(new_length))


class Snake:
    """
    The moving body and its steering state.

    Attributes:
        positions: deque of Position from head (index 0) to tail
        direction: direction applied on the next advance() if nothing is queued
        next_directions: queued turns, needed because input can arrive
            faster than ticks
    """

    def __init__(self, positions: List[Position], direction: Direction = Direction.DOWN):
        if not positions:
            raise ValueError("A snake needs at least one segment")
        self.positions: Deque[Position] = deque(Position(*p) for p in positions)
        self.direction = direction
        self.next_directions: Deque[Direction] = deque()

    @property
    def head(self) -> Position:
        return self.positions[0]

    @property
    def tail(self) -> Position:
        return self.positions[-1]

    @property
    def body(self) -> List[Position]:
        return list(self.positions)

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.positions)

    # ---------- Steering ----------
    def push_direction(self, direction: Direction) -> bool:
        """
        Queue a turn unless it is on the same axis as the last queued
        direction (or the current one when nothing is queued). This rejects
        reversals into the neck as well as no-op turns. Returns True if queued.
        """
        last = self.next_directions[-1] if self.next_directions else self.direction
        if direction.axis == last.axis:
            return False
        self.next_directions.append(direction)
        return True

    # ---------- Movement ----------
    def advance(self, grid: Grid) -> Position:
        """Move one cell. The tail segment is recycled as the new head."""
        if self.next_directions:
            self.direction = self.next_directions.popleft()

        head = self.positions[0]
        self.positions.pop()
        new_head = grid.step(head, self.direction)
        self.positions.appendleft(new_head)
        return new_head

    # ---------- Growth / shrink ----------
    def resize(self, new_length: float) -> List[Position]:
        """
        Grow by stacking copies of the tail (the body trails into them on
        later ticks) or shrink by dropping tail segments. Returns the dropped
        positions, tail first.
        """
        target = normalize_length(new_length)
        tail = self.positions[-1]
        while len(self.positions) < target:
            self.positions.append(tail)

        removed = []
        while len(self.positions) > target:
            removed.append(self.positions.pop())
        return removed

    def is_growing(self) -> bool:
        """True while the tail still sits on the segment before it (pending growth)."""
        return len(self.positions) > 1 and self.positions[-1] == self.positions[-2]

    def __repr__(self):
        return f"<Snake head={self.head}, length={len(self)}, direction={self.direction.name}>"
