import itertools
import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from particle import Bounds
from tunables import Tunables


class SequenceRandom:
    """Deterministic stand-in for the uniform generator. Cycles its values."""
    def __init__(self, *values):
        self._values = itertools.cycle(values)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return next(self._values)


class RecordingSurface:
    """Records every drawing call instead of drawing."""
    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        def record(*args):
            self.calls.append((name,) + args)
        return record

    def names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def bounds():
    return Bounds(800, 600)


@pytest.fixture
def still_air():
    """Gravity only: no wind, no turbulence, no drag, no quantum jitter."""
    return Tunables(gravity=30.0, wind_strength=0.0, quantum_factor=0.0, drag=0.0, turbulence=0.0)


@pytest.fixture
def recording_surface():
    return RecordingSurface()
