# food.py
"""
Food items and their spawn/remove lifecycle.

Each food cycles forever between off-grid and on-grid on its own randomized
timers, independently of the tick loop:

    inactive --(0..spawn_in s)--> active --(0..remove_in s or eaten)--> inactive

A food holds at most one pending timer at any time; game over must call
delete() on every food to break the cycle.

What eating a food does is described by an effect value, interpreted by
GameSession.apply_effect().
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple, Union
import logging

from .grid import OFF_GRID, Position
from .scheduler import Timer

if TYPE_CHECKING:
    from .game import GameSession

logger = logging.getLogger(__name__)


# ---------- Effects ----------
@dataclass(frozen=True)
class ScoreAndGrow:
    """
    Score `score + score_per_length * length`, then resize the body to
    `length * length_factor + length_delta`, then change speed by speed_delta.
    """
    score: float = 0
    score_per_length: float = 0
    length_factor: float = 1
    length_delta: float = 0
    speed_delta: int = 0


@dataclass(frozen=True)
class ScoreAndShrink:
    """Same arithmetic as ScoreAndGrow, with factor/delta that shrink the body."""
    score: float = 0
    score_per_length: float = 0
    length_factor: float = 1
    length_delta: float = 0
    speed_delta: int = 0


@dataclass(frozen=True)
class ResetAll:
    """Score score_factor times the current score, then back to length 1 and speed 1."""
    score_factor: float = 1


@dataclass(frozen=True)
class InstantGameOver:
    pass


FoodEffect = Union[ScoreAndGrow, ScoreAndShrink, ResetAll, InstantGameOver]


# ---------- Food kinds ----------
@dataclass(frozen=True)
class FoodKind:
    name: str
    color: Tuple[int, int, int]
    spawn_in: float     # max seconds before appearing
    remove_in: float    # max seconds on the field if not eaten
    effect: FoodEffect

    def __post_init__(self):
        if self.spawn_in <= 0 or self.remove_in <= 0:
            raise ValueError(
                f"{self.name}: spawn_in and remove_in must be > 0, "
                f"got {self.spawn_in} and {self.remove_in}"
            )


YELLOW = (255, 255, 0)
RED    = (255, 0, 0)
BLUE   = (0, 0, 255)
PURPLE = (128, 0, 128)
BLACK  = (0, 0, 0)

DEFAULT_FOODS = (
    FoodKind("yellow", YELLOW, spawn_in=10, remove_in=30,
             effect=ScoreAndGrow(score=1, length_delta=3, speed_delta=1)),
    FoodKind("red", RED, spawn_in=30, remove_in=15,
             effect=ScoreAndGrow(score_per_length=2, length_factor=2, speed_delta=1)),
    FoodKind("blue", BLUE, spawn_in=30, remove_in=15,
             effect=ScoreAndShrink(score_per_length=2, length_factor=0.5)),
    FoodKind("purple", PURPLE, spawn_in=180, remove_in=10,
             effect=ResetAll(score_factor=1)),
    FoodKind("black", BLACK, spawn_in=120, remove_in=30,
             effect=InstantGameOver()),
)


# ---------- Lifecycle ----------
class Food:
    """A food item on (or off) the field of one game session."""

    def __init__(self, game: GameSession, kind: FoodKind):
        self.game = game
        self.kind = kind
        self.position: Position = OFF_GRID
        self._spawn_timer: Optional[Timer] = None
        self._remove_timer: Optional[Timer] = None

    @property
    def name(self) -> str:
        return self.kind.name

    @property
    def color(self):
        return self.kind.color

    @property
    def effect(self) -> FoodEffect:
        return self.kind.effect

    @property
    def is_active(self) -> bool:
        return self.position != OFF_GRID

    @property
    def pending_timers(self) -> int:
        """How many of this food's timers are live (never more than one)."""
        return sum(1 for t in (self._spawn_timer, self._remove_timer) if t is not None and t.active)

    def _random_delay_ms(self, max_seconds: float) -> int:
        # at least 1 ms, so spawn and remove never chain inside one advance
        return max(1, int(self.game.rng.random() * max_seconds * 1000))

    def _cancel_timers(self) -> None:
        self.game.scheduler.cancel(self._spawn_timer)
        self.game.scheduler.cancel(self._remove_timer)
        self._spawn_timer = None
        self._remove_timer = None

    def draw(self) -> None:
        self.game.renderer.draw_cell(self.position, self.game.block_size, self.color)

    def clear(self) -> None:
        self.game.renderer.clear_cell(self.position, self.game.block_size)

    def schedule_spawn(self) -> None:
        """Go off-grid now and reappear at a free cell within spawn_in seconds."""
        self._cancel_timers()
        self.position = OFF_GRID
        delay = self._random_delay_ms(self.kind.spawn_in)
        self._spawn_timer = self.game.scheduler.call_later(delay, self._spawn)

    def _spawn(self) -> None:
        self._spawn_timer = None
        pos = self.game.random_free_position()
        if pos is None:
            logger.debug(f"No room for {self.name} food, skipping this cycle")
            delay = self._random_delay_ms(self.kind.spawn_in)
            self._spawn_timer = self.game.scheduler.call_later(delay, self._spawn)
            return
        self.position = pos
        self.draw()
        logger.debug(f"{self.name} food spawned at {pos}")
        self.schedule_remove()

    def schedule_remove(self) -> None:
        """Leave the field within remove_in seconds unless eaten first."""
        self.game.scheduler.cancel(self._spawn_timer)
        self._spawn_timer = None
        delay = self._random_delay_ms(self.kind.remove_in)
        self._remove_timer = self.game.scheduler.call_later(delay, self._remove)

    def _remove(self) -> None:
        self._remove_timer = None
        self.clear()
        logger.debug(f"{self.name} food expired at {self.position}")
        self.position = OFF_GRID
        self.schedule_spawn()

    def delete(self) -> None:
        """Stop the cycle: cancel both timers and take the food off the field."""
        self._cancel_timers()
        if self.is_active:
            self.clear()
        self.position = OFF_GRID

    def __repr__(self):
        return f"<Food {self.name} at {self.position}>"
