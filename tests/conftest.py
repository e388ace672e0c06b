"""
Shared fixtures: headless recording collaborators and a session factory
whose clock only moves when a test advances it.
"""

import random

import pytest

from src.snake.config import Config
from src.snake.game import GameSession
from src.snake.grid import Grid
from src.snake.scheduler import Scheduler


class RecordingRenderer:
    """Keeps every call so tests can assert on what was drawn/cleared."""

    def __init__(self):
        self.calls = []

    def draw_cell(self, pos, size, color):
        self.calls.append(("draw", pos, color))

    def clear_cell(self, pos, size):
        self.calls.append(("clear", pos))

    def clear_all(self):
        self.calls.append(("clear_all",))

    def cleared(self):
        return [c[1] for c in self.calls if c[0] == "clear"]

    def drawn(self):
        return [c[1] for c in self.calls if c[0] == "draw"]


class RecordingDisplay:
    def __init__(self):
        self.infos = []
        self.times = []
        self.messages = []

    def update_infos(self, length, speed, score):
        self.infos.append((length, speed, score))

    def update_elapsed_time(self, hms):
        self.times.append(hms)

    def update_message(self, message):
        self.messages.append(message)


class FixedDelayRandom(random.Random):
    """
    random() always returns `fraction`, so food delays are exact
    (fraction * max seconds); randrange() stays properly random.
    """

    def __init__(self, fraction=0.5, seed=0):
        super().__init__(seed)
        self.fraction = fraction

    def random(self):
        return self.fraction

    # Defining random() alone would make randrange() derive from it (see
    # Random.__init_subclass__); keeping getrandbits here preserves real cells.
    def getrandbits(self, k):
        return super().getrandbits(k)


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def display():
    return RecordingDisplay()


@pytest.fixture
def scheduler():
    return Scheduler()


@pytest.fixture
def fixed_delay_rng():
    def _make(fraction=0.5):
        return FixedDelayRandom(fraction)
    return _make


@pytest.fixture
def make_session(scheduler, renderer, display):
    def _make(width=10, height=10, food_kinds=(), rng=None, **config):
        return GameSession(
            Grid(width, height),
            scheduler=scheduler,
            renderer=renderer,
            display=display,
            food_kinds=food_kinds,
            config=Config(seed=0, **config),
            rng=rng if rng is not None else FixedDelayRandom(),
        )
    return _make
