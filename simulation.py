# simulation.py
"""
Handles the particle field and the frame loop that drives it.

This module defines the ParticleField class, which owns the fixed set of
snowflakes and advances and draws them as a whole, and the FrameScheduler,
which turns wall-clock frame timestamps into sanitized time steps.
"""
import logging
import math
from typing import Callable, List, Optional, TYPE_CHECKING

import numpy as np

from constants import DEFAULT_MAX_DELTA_TIME
from particle import Bounds, Particle

if TYPE_CHECKING:
    from canvas import RenderSurface
    from tunables import Tunables

# --- Data Contracts ---
#
# class ParticleField:
#   - __init__(self, count: int, bounds_source: Callable[[], Bounds],
#              tunables: Tunables, random: Optional[Callable[[], float]],
#              quantum_enabled: bool):
#     - Inputs:
#       - count: Number of particles, fixed for the lifetime of the field.
#       - bounds_source: Returns the live surface dimensions. Re-read on
#         every update and render.
#       - random: Uniform [0, 1) generator. Defaults to a NumPy Generator.
#     - Side Effects: Builds `count` particles placed anywhere on screen.
#
#   - update(self, dt: float, clock_ms: float) -> None:
#     - Side Effects: Updates every particle. No particle is created or
#       destroyed.
#
#   - render(self, surface: RenderSurface) -> None:
#     - Side Effects: Clears the whole surface, then draws every particle in
#       field order.
#
# class FrameScheduler:
#   - tick(self, now_ms: float) -> float:
#     - Outputs: The time step actually applied, in seconds (0 if skipped).
#     - Side Effects: Updates then renders the field.
#     - Invariants: The step is always finite and within
#       [0, max_delta_time].


class ParticleField:
    """
    A fixed-size collection of independent snowflakes.
    """
    def __init__(
        self,
        count: int,
        bounds_source: Callable[[], Bounds],
        tunables: "Tunables",
        random: Optional[Callable[[], float]] = None,
        quantum_enabled: bool = False
    ):
        """
        Initializes the field and scatters its particles over the surface.

        Args:
            count (int): Number of particles.
            bounds_source (Callable[[], Bounds]): Live surface dimensions.
            tunables (Tunables): Parameter source shared with the particles.
            random (Optional[Callable[[], float]]): Uniform [0, 1) generator.
            quantum_enabled (bool): Enables quantum jitter and tunneling.
        """
        if random is None:
            random = np.random.default_rng().random
        self.bounds_source = bounds_source
        self.tunables = tunables
        self.quantum_enabled = quantum_enabled

        bounds = bounds_source()
        self.particles: List[Particle] = [
            Particle(bounds, tunables, random, quantum_enabled) for _ in range(count)
        ]

        logging.info(
            f"ParticleField initialized with {count} particles "
            f"on a {bounds.width}x{bounds.height} surface "
            f"(quantum {'enabled' if quantum_enabled else 'disabled'})."
        )

    def __len__(self) -> int:
        return len(self.particles)

    def update(self, dt: float, clock_ms: float) -> None:
        """Advances every particle by one time step."""
        bounds = self.bounds_source()
        for particle in self.particles:
            particle.update(dt, clock_ms, bounds)

    def render(self, surface: "RenderSurface") -> None:
        """Clears the surface and draws every particle on it."""
        bounds = self.bounds_source()
        surface.clear_rect(0, 0, bounds.width, bounds.height)
        for particle in self.particles:
            particle.render(surface)

    def scatter(self) -> None:
        """Re-seeds every particle anywhere on the surface."""
        bounds = self.bounds_source()
        for particle in self.particles:
            particle.reset(bounds, initial=True)
        logging.info("Particle field scattered by user.")


class FrameScheduler:
    """
    Drives a ParticleField from a stream of frame timestamps.
    """
    def __init__(
        self,
        field: ParticleField,
        surface: "RenderSurface",
        max_delta_time: float = DEFAULT_MAX_DELTA_TIME
    ):
        if not math.isfinite(max_delta_time) or max_delta_time <= 0:
            msg = f"Configuration error: 'max_delta_time' must be positive, got {max_delta_time!r}."
            logging.critical(msg)
            raise ValueError(msg)
        self.field = field
        self.surface = surface
        self.max_delta_time = max_delta_time
        self.last_ms: Optional[float] = None
        self.frames = 0
        self.clamped_frames = 0

    def _delta_time(self, now_ms: float) -> float:
        if self.last_ms is None:
            return 0.0
        dt = (now_ms - self.last_ms) / 1000
        if not math.isfinite(dt) or dt <= 0:
            return 0.0
        if dt > self.max_delta_time:
            self.clamped_frames += 1
            return self.max_delta_time
        return dt

    def tick(self, now_ms: float) -> float:
        """Runs one frame: update with the measured step, then render."""
        if not math.isfinite(now_ms):
            logging.warning(f"Ignoring non-finite frame timestamp {now_ms!r}.")
            self.field.render(self.surface)
            self.frames += 1
            return 0.0

        dt = self._delta_time(now_ms)
        self.last_ms = now_ms
        if dt > 0:
            self.field.update(dt, now_ms)
        self.field.render(self.surface)
        self.frames += 1
        return dt
