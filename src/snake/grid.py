# grid.py
from __future__ import annotations
from dataclasses import dataclass
from typing import NamedTuple

from .config import Direction


class Position(NamedTuple):
    x: int
    y: int


# Sentinel for food that is not currently on the field
OFF_GRID = Position(-1, -1)


@dataclass(frozen=True)
class Grid:
    """
    Fixed-size playing field. Coordinates wrap around both axes, so every
    position produced by `step` is inside the grid.
    """
    width: int
    height: int

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {self.width}x{self.height}")

    @classmethod
    def from_pixels(cls, width_px: int, height_px: int, block_size: int) -> Grid:
        """Derive the grid from a drawing surface, one cell per block."""
        return cls(
            width=max(1, round(width_px / block_size)),
            height=max(1, round(height_px / block_size)),
        )

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def contains(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    @staticmethod
    def wrap(coord: int, delta: int, length: int) -> int:
        """Apply a step along one axis, re-entering from the opposite edge."""
        return (coord + delta) % length

    def step(self, pos: Position, direction: Direction) -> Position:
        return Position(
            self.wrap(pos.x, direction.dx, self.width),
            self.wrap(pos.y, direction.dy, self.height),
        )
