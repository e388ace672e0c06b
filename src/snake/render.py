# render.py
from typing import Tuple
import pygame # type: ignore

from .config import BG, HUD_BG, HUD_HEIGHT, TEXT
from .grid import Position


class PygameRenderer:
    """
    Draws cells straight onto a persistent surface; nothing is redrawn from
    scratch per frame, the engine tells us exactly which cells changed.
    """

    def __init__(self, surface: pygame.Surface, border_size: int = 0, background=BG):
        self.surface = surface
        self.border_size = border_size
        self.background = background

    def _rect(self, pos: Position, size: int) -> pygame.Rect:
        inner = size - self.border_size
        return pygame.Rect(pos.x * size, pos.y * size, inner, inner)

    def draw_cell(self, pos: Position, size: int, color: Tuple[int, int, int]) -> None:
        pygame.draw.rect(self.surface, color, self._rect(pos, size))

    def clear_cell(self, pos: Position, size: int) -> None:
        pygame.draw.rect(self.surface, self.background, self._rect(pos, size))

    def clear_all(self) -> None:
        self.surface.fill(self.background)


class PygameDisplay:
    """HUD strip under the field: length, speed, score, time and a status message."""

    def __init__(self, surface: pygame.Surface, font: pygame.font.Font, top: int):
        self.surface = surface
        self.font = font
        self.rect = pygame.Rect(0, top, surface.get_width(), HUD_HEIGHT)
        self.length = 0
        self.speed = 0
        self.score = 0
        self.elapsed = "00:00:00"
        self.message = ""

    def update_infos(self, length: int, speed: int, score: int) -> None:
        self.length, self.speed, self.score = length, speed, score
        self._redraw()

    def update_elapsed_time(self, hms: str) -> None:
        self.elapsed = hms
        self._redraw()

    def update_message(self, message: str) -> None:
        self.message = message
        self._redraw()

    def _redraw(self) -> None:
        self.surface.fill(HUD_BG, self.rect)
        stats = (
            f"Length: {self.length}   Speed: {self.speed}   "
            f"Score: {self.score}   Time: {self.elapsed}"
        )
        txt = self.font.render(stats, True, TEXT)
        self.surface.blit(txt, (8, self.rect.top + 8))
        if self.message:
            msg = self.font.render(self.message, True, TEXT)
            self.surface.blit(msg, msg.get_rect(topright=(self.rect.right - 8, self.rect.top + 8)))
