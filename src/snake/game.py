# game.py
from __future__ import annotations
from enum import Enum
from typing import Iterable, List, Optional
import logging
import math
import random

from .body import Snake
from .collision import collides_with_body, collides_with_food, food_at, random_free_position
from .config import CFG, Config, Direction, ELAPSED_TIME_INTERVAL_MS, GREEN, MIN_SPEED
from .food import (
    DEFAULT_FOODS, Food, FoodEffect, FoodKind,
    InstantGameOver, ResetAll, ScoreAndGrow, ScoreAndShrink,
)
from .grid import Grid, Position
from .pacing import PacingController
from .scheduler import Scheduler, Timer
from .sinks import DisplaySink, NullDisplay, NullRenderer, Renderer

logger = logging.getLogger(__name__)

START_MESSAGE = "Press N to start"
GAME_OVER_MESSAGE = "GAME OVER! Press N to play again"


class SessionState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    GAME_OVER = "game_over"


def format_hms(seconds: int) -> str:
    h = seconds // 3600
    m = seconds // 60 % 60
    s = seconds % 60
    return f"{h:02d}:{m:02d}:{s:02d}"


class GameSession:
    """
    Owns everything mutable about a play-through and is the only thing that
    changes it. All timers (tick loop, elapsed-time ticker, food
    spawn/remove) run on one Scheduler, so callbacks never interleave
    mid-update.

    Lifecycle: IDLE -> start() -> PLAYING -> game_over() -> GAME_OVER -> start() ...
    """

    def __init__(
        self,
        grid: Grid,
        scheduler: Optional[Scheduler] = None,
        renderer: Optional[Renderer] = None,
        display: Optional[DisplaySink] = None,
        food_kinds: Iterable[FoodKind] = DEFAULT_FOODS,
        config: Config = CFG,
        rng: Optional[random.Random] = None,
    ):
        self.grid = grid
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.renderer = renderer if renderer is not None else NullRenderer()
        self.display = display if display is not None else NullDisplay()
        self.config = config
        self.block_size = config.block_size
        self.rng = rng if rng is not None else random.Random(config.seed)

        self.state = SessionState.IDLE
        self.elapsed_time = 0                   # seconds since start
        self.score = 0
        self.snake: Optional[Snake] = None
        self.foods: List[Food] = [Food(self, kind) for kind in food_kinds]
        self.pacing = PacingController(self.scheduler, self.main_loop)
        self._elapsed_timer: Optional[Timer] = None

        self.display.update_message(START_MESSAGE)

    # ---------- Read-only views ----------
    @property
    def playing(self) -> bool:
        return self.state is SessionState.PLAYING

    @property
    def speed(self) -> int:
        return self.pacing.speed

    @property
    def direction(self) -> Optional[Direction]:
        return self.snake.direction if self.snake is not None else None

    @property
    def body(self) -> List[Position]:
        return self.snake.body if self.snake is not None else []

    # ---------- Lifecycle ----------
    def start(self) -> None:
        """Reset the session and start a new game."""
        if self.playing:
            logger.info("Restart requested while playing, ending current game")
            self._stop()

        self.renderer.clear_all()
        self.state = SessionState.PLAYING
        self.elapsed_time = 0
        self.score = 0

        self.snake = None
        for food in self.foods:
            food.delete()
        head = self.random_free_position()
        if head is None:
            # empty board with every food off-grid always has room
            raise RuntimeError(f"No free cell to start on {self.grid.width}x{self.grid.height} grid")
        self.snake = Snake([head], direction=Direction.DOWN)

        for food in self.foods:
            food.schedule_spawn()

        self._draw_head()
        self.adjust_speed(MIN_SPEED)
        self._elapsed_timer = self.scheduler.call_every(
            ELAPSED_TIME_INTERVAL_MS,
            lambda: self.update_elapsed_time(ELAPSED_TIME_INTERVAL_MS // 1000),
        )

        self.update_infos()
        self.display.update_elapsed_time(self.elapsed_hms())
        self.display.update_message("")
        logger.info(f"Game started on {self.grid.width}x{self.grid.height} grid at {head}")

    def _stop(self) -> None:
        self.pacing.stop()
        self.scheduler.cancel(self._elapsed_timer)
        self._elapsed_timer = None
        for food in self.foods:
            food.delete()

    def game_over(self) -> None:
        """Stop every timer and take all food off the field."""
        if not self.playing:
            return
        self.state = SessionState.GAME_OVER
        self._stop()
        self.display.update_message(GAME_OVER_MESSAGE)
        logger.info(
            f"Game over: score={self.score} length={len(self.snake)} "
            f"speed={self.speed} time={self.elapsed_hms()}"
        )

    # ---------- Tick ----------
    def main_loop(self) -> None:
        """One tick: move, then resolve self-collision and food."""
        if not self.playing:
            return

        self._clear_tail()
        self.snake.advance(self.grid)
        self._draw_head()

        head = self.snake.head
        if collides_with_body(self.snake, head, ignore_head=True):
            logger.debug(f"Self-collision at {head}")
            self.game_over()
            return

        food = food_at(self.foods, head)
        if food is not None:
            logger.debug(f"Ate {food.name} food at {head}")
            # respawn first: the effect may end the game
            food.schedule_spawn()
            self.apply_effect(food.effect)
            self.update_infos()

    # ---------- Input ----------
    def push_direction(self, direction: Direction) -> bool:
        if self.snake is None:
            return False
        return self.snake.push_direction(direction)

    # ---------- Mutations ----------
    def apply_effect(self, effect: FoodEffect) -> None:
        if isinstance(effect, (ScoreAndGrow, ScoreAndShrink)):
            length = len(self.snake)
            self.increase_score(effect.score + effect.score_per_length * length)
            self.resize_body(length * effect.length_factor + effect.length_delta)
            if effect.speed_delta:
                self.adjust_speed(self.speed + effect.speed_delta)
        elif isinstance(effect, ResetAll):
            self.increase_score(self.score * effect.score_factor)
            self.resize_body(1)
            self.adjust_speed(MIN_SPEED)
        elif isinstance(effect, InstantGameOver):
            self.game_over()
        else:
            raise TypeError(f"Unknown food effect: {effect!r}")

    def increase_score(self, increment: float) -> None:
        self.score += math.floor(self.speed * increment + len(self.snake))

    def resize_body(self, new_length: float) -> None:
        for pos in self.snake.resize(new_length):
            # a dropped segment may share its cell with a remaining one
            if not collides_with_body(self.snake, pos):
                self.renderer.clear_cell(pos, self.block_size)

    def adjust_speed(self, speed: float) -> int:
        """Clamp speed and re-pace the tick loop. Also starts the loop."""
        return self.pacing.adjust(speed)

    def update_elapsed_time(self, secs: int) -> None:
        self.elapsed_time += secs
        self.display.update_elapsed_time(self.elapsed_hms())

    def elapsed_hms(self) -> str:
        return format_hms(self.elapsed_time)

    def update_infos(self) -> None:
        self.display.update_infos(len(self.snake), self.speed, self.score)

    # ---------- Occupancy ----------
    def random_free_position(self) -> Optional[Position]:
        return random_free_position(
            self.grid, self.rng, self.snake, self.foods,
            max_attempts=self.config.max_free_position_attempts,
        )

    def collides_with_body(self, pos: Position, ignore_head: bool = False) -> bool:
        return collides_with_body(self.snake, pos, ignore_head)

    def collides_with_food(self, pos: Position) -> bool:
        return collides_with_food(self.foods, pos)

    def food_at(self, pos: Position) -> Optional[Food]:
        return food_at(self.foods, pos)

    # ---------- Drawing ----------
    def _draw_head(self) -> None:
        self.renderer.draw_cell(self.snake.head, self.block_size, GREEN)

    def _clear_tail(self) -> None:
        # a growing tail still has another segment on its cell
        if not self.snake.is_growing():
            self.renderer.clear_cell(self.snake.tail, self.block_size)

    def __repr__(self):
        return (
            f"<GameSession state={self.state.value}, score={self.score}, "
            f"speed={self.speed}, length={len(self.body)}>"
        )
