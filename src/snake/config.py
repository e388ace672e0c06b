from dataclasses import dataclass
from enum import Enum

# ----- Window & grid -----
WIDTH, HEIGHT = 1050, 700
BLOCK_SIZE = 35
BORDER_SIZE = 2
HUD_HEIGHT = 32

# ----- Colors -----
BG    = (79, 79, 79)
HUD_BG = (20, 20, 24)
GREEN = (0, 128, 0)
TEXT  = (220, 220, 230)

# ----- Pacing -----
MIN_MAINLOOP_INTERVAL_MS = 20
MAX_MAINLOOP_INTERVAL_MS = 120
MIN_SPEED, MAX_SPEED = 1, 20
# ms of interval shaved off per speed level
K = (MAX_MAINLOOP_INTERVAL_MS - MIN_MAINLOOP_INTERVAL_MS) / MAX_SPEED

ELAPSED_TIME_INTERVAL_MS = 1000

# ----- Free-position sampling -----
MAX_FREE_POSITION_ATTEMPTS = 100


# ----- Directions (dx, dy) -----
class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def axis(self) -> str:
        """'x' for LEFT/RIGHT, 'y' for UP/DOWN; opposing pairs share an axis."""
        return "x" if self.dx else "y"

    def is_opposite(self, other: "Direction") -> bool:
        return self.dx == -other.dx and self.dy == -other.dy


# ----- Tunables -----
@dataclass
class Config:
    seed: int | None = None
    block_size: int = BLOCK_SIZE
    border_size: int = BORDER_SIZE
    width_px: int = WIDTH
    height_px: int = HEIGHT
    fps: int = 120
    max_free_position_attempts: int = MAX_FREE_POSITION_ATTEMPTS


CFG = Config()
