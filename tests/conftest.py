"""Shared fixtures: a hand-driven clock, a key state stub, and a small world."""
import os
import random

# Set headless mode for tests
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')

import pytest

from space_duel import config as cfg
from space_duel.world import World


class ManualClock:
    """Game clock that only moves when a test says so."""
    def __init__(self, start=0):
        self.time = start

    def now(self):
        return self.time

    def advance(self, ms):
        self.time += ms


class KeyState:
    """Stands in for pygame.key.get_pressed: call it to poll, index it by key."""
    def __init__(self):
        self.pressed = set()

    def __call__(self):
        return self

    def __getitem__(self, key):
        return key in self.pressed


class FixedRandom:
    """randint() hands out queued values, for predictable respawn placement."""
    def __init__(self, *values):
        self.values = list(values)

    def randint(self, low, high):
        value = self.values.pop(0)
        assert low <= value <= high
        return value


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def keys():
    return KeyState()


@pytest.fixture
def make_world(clock, keys):
    """Returns build(*respawn_values): an 800x600 world on the manual clock.

    With respawn_values the World draws respawn positions and rotations from
    them in order, otherwise from a seeded Random.
    """
    def build(*respawn_values):
        rng = FixedRandom(*respawn_values) if respawn_values else random.Random(1234)
        w = World(800, 600, clock=clock, rng=rng)
        w.install_default_systems(get_pressed=keys)
        return w
    return build


@pytest.fixture
def world(make_world):
    return make_world()


@pytest.fixture
def step(clock):
    """Returns run(world, frames=1, ms=FRAME_TIME_MS): advance the clock and run whole frames."""
    def run(world, frames=1, ms=cfg.FRAME_TIME_MS):
        for _ in range(frames):
            clock.advance(ms)
            world.update(ms)
    return run
