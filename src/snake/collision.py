# collision.py
from __future__ import annotations
from typing import TYPE_CHECKING, Iterable, Optional
import logging
import random

import numpy as np  # type: ignore

from .config import MAX_FREE_POSITION_ATTEMPTS
from .grid import Grid, Position

if TYPE_CHECKING:
    from .body import Snake
    from .food import Food

logger = logging.getLogger(__name__)


def collides_with_body(snake: Optional[Snake], pos: Position, ignore_head: bool = False) -> bool:
    """True if any body segment (optionally skipping the head) is on pos."""
    if snake is None:
        return False
    segments = iter(snake)
    if ignore_head:
        next(segments, None)
    return any(segment == pos for segment in segments)


def food_at(foods: Iterable[Food], pos: Position) -> Optional[Food]:
    """The active food on pos, or None."""
    for food in foods:
        if food.is_active and food.position == pos:
            return food
    return None


def collides_with_food(foods: Iterable[Food], pos: Position) -> bool:
    return food_at(foods, pos) is not None


def occupancy_grid(grid: Grid, snake: Optional[Snake], foods: Iterable[Food]) -> np.ndarray:
    """
    Boolean (height, width) array, True where a body segment or an active
    food sits. Indexed [y, x] like an image.
    """
    occupied = np.zeros((grid.height, grid.width), dtype=bool)
    if snake is not None:
        for x, y in snake:
            occupied[y, x] = True
    for food in foods:
        if food.is_active:
            occupied[food.position.y, food.position.x] = True
    return occupied


def random_free_position(
    grid: Grid,
    rng: random.Random,
    snake: Optional[Snake],
    foods: Iterable[Food],
    max_attempts: int = MAX_FREE_POSITION_ATTEMPTS,
) -> Optional[Position]:
    """
    Sample uniformly random cells until one is neither body nor food.

    After max_attempts misses the board is assumed crowded: pick uniformly
    among the free cells of the occupancy grid instead. Returns None only if
    no free cell exists.
    """
    foods = list(foods)
    for _ in range(max_attempts):
        pos = Position(rng.randrange(grid.width), rng.randrange(grid.height))
        if not collides_with_body(snake, pos) and not collides_with_food(foods, pos):
            return pos

    free = np.argwhere(~occupancy_grid(grid, snake, foods))  # rows of (y, x)
    if len(free) == 0:
        logger.warning(f"No free cell left on {grid.width}x{grid.height} grid")
        return None

    logger.warning(
        f"Random sampling missed {max_attempts} times, "
        f"choosing among {len(free)} free cells"
    )
    y, x = free[rng.randrange(len(free))]
    return Position(int(x), int(y))
