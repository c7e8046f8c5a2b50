"""Shared fixtures for the asteroids tests. No display required."""
import itertools

import pytest

from game.asteroids.engine import AsteroidsEngine, StepInput
from game.asteroids.entities import Obstacle


class FakeRng:
    """
    Stand-in random source that cycles through fixed fractions in [0, 1).

    random() returns the next fraction, uniform(lo, hi) maps it onto [lo, hi).
    """

    def __init__(self, fractions):
        self._fractions = itertools.cycle(fractions)
        self.calls = 0

    def random(self):
        self.calls += 1
        return next(self._fractions)

    def uniform(self, lo, hi):
        return lo + self.random() * (hi - lo)


# Draw order per spawn: item roll, x, y, dx, dy, radius (regular only)
# -> regular obstacle at (40, 30), standing still, radius 30
CORNER_ROCK = [0.9, 0.05, 0.05, 0.5, 0.5, 0.0]
# -> item at (40, 30), standing still
CORNER_ITEM = [0.0, 0.05, 0.05, 0.5, 0.5]

IDLE = StepInput()
FIRE = StepInput(fire=True)


@pytest.fixture
def engine():
    """800x600 engine whose spawns land still in the top-left corner."""
    return AsteroidsEngine(width=800, height=600, rng=FakeRng(CORNER_ROCK))


def make_rock(x, y, radius=40.0, health=5, dx=0.0, dy=0.0):
    return Obstacle(x=x, y=y, dx=dx, dy=dy, radius=radius, health=health)


def make_item(x, y, dx=0.0, dy=0.0):
    return Obstacle(x=x, y=y, dx=dx, dy=dy, radius=20.0, health=1, is_item=True)


def run(engine, ticks, action=IDLE):
    for _ in range(ticks):
        engine.step(action)
