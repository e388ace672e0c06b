# sinks.py
"""
Output collaborators of the game engine.

The engine only ever writes to these; it never reads state back. The pygame
implementations live in render.py, the null ones below keep the engine
usable headless.
"""
from __future__ import annotations
from typing import Protocol, Tuple

from .grid import Position

Color = Tuple[int, int, int]


class Renderer(Protocol):
    def draw_cell(self, pos: Position, size: int, color: Color) -> None: ...

    def clear_cell(self, pos: Position, size: int) -> None: ...

    def clear_all(self) -> None: ...


class DisplaySink(Protocol):
    def update_infos(self, length: int, speed: int, score: int) -> None: ...

    def update_elapsed_time(self, hms: str) -> None: ...

    def update_message(self, message: str) -> None: ...


class NullRenderer:
    def draw_cell(self, pos: Position, size: int, color: Color) -> None:
        pass

    def clear_cell(self, pos: Position, size: int) -> None:
        pass

    def clear_all(self) -> None:
        pass


class NullDisplay:
    def update_infos(self, length: int, speed: int, score: int) -> None:
        pass

    def update_elapsed_time(self, hms: str) -> None:
        pass

    def update_message(self, message: str) -> None:
        pass
