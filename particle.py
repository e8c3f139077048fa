# particle.py
"""
State and physics of a single snowflake.

This module defines the Particle class, which owns one flake's position,
velocity, size and orientation, advances them under wind, gravity, drag,
turbulence and the optional quantum perturbation, and draws the flake as a
six-branched star on a rendering surface.
"""
import math
from typing import Callable, NamedTuple, TYPE_CHECKING

from numba import jit

from constants import (
    ALIGNMENT_RATE, BOTTOM_MARGIN, BRANCH_LENGTH, BRANCH_ROTATION,
    HORIZONTAL_MARGIN, QUANTUM_SCALE, RESPAWN_Y, SIDE_BRANCH_ROOT,
    SIDE_BRANCH_TIP, SIZE_MAX, SIZE_MIN, SNOWFLAKE_ALPHA, SNOWFLAKE_BRANCHES,
    SNOWFLAKE_COLOR, SNOWFLAKE_LINE_WIDTH, SPIN_MAX, TUNNEL_BAND,
    TUNNEL_PROBABILITY
)

if TYPE_CHECKING:
    from canvas import RenderSurface
    from tunables import Tunables

# --- Data Contracts ---
#
# lerp_angle(a: float, b: float, t: float) -> float:
#   - Interpolates angle a towards angle b by fraction t along the shortest
#     arc. The difference b - a is wrapped into [-pi, pi] by repeated
#     addition/subtraction of 2*pi before scaling.
#   - Invariants: t=0 returns a; t=1 returns b modulo 2*pi.
#
# class Particle:
#   - __init__(self, bounds: Bounds, tunables: Tunables,
#              random: Callable[[], float], quantum_enabled: bool):
#     - Side Effects: Calls reset(bounds, initial=True).
#
#   - reset(self, bounds: Bounds, initial: bool) -> None:
#     - Draws x in [0, W), y in [0, H) if initial else RESPAWN_Y, size in
#       [SIZE_MIN, SIZE_MAX), angle in [0, 2*pi), angular_velocity in
#       [-SPIN_MAX, SPIN_MAX). Velocity is zeroed.
#
#   - update(self, dt: float, clock_ms: float, bounds: Bounds) -> None:
#     - Side Effects: Integrates one step, turns the flake, then tunnels or
#       recycles it if it has left the visible area.
#     - Invariants: Never raises for finite input. dt <= 0 or non-finite dt
#       leaves the particle untouched.
#
#   - render(self, surface: RenderSurface) -> None:
#     - Side Effects: Draw calls on surface only. The transform is saved
#       before and restored after drawing.


class Bounds(NamedTuple):
    """Current width and height of the drawing surface."""
    width: float
    height: float


@jit(nopython=True)
def lerp_angle(a, b, t):
    """
    Moves angle `a` towards angle `b` by fraction `t`, the short way round.
    """
    diff = float(b) - float(a)
    if not math.isfinite(diff):
        return float(a)
    while diff > 3 * math.pi or diff < -3 * math.pi:
        # Fold far-apart angles towards [-pi, pi) a whole number of turns at a time.
        diff -= 2 * math.pi * math.floor((diff + math.pi) / (2 * math.pi))
        if not math.isfinite(diff):
            return float(a)
    while diff > math.pi:
        diff -= 2 * math.pi
    while diff < -math.pi:
        diff += 2 * math.pi
    return float(a) + diff * t


@jit(nopython=True)
def _integrate(x, y, vx, vy, ax, ay, dt):
    """
    Semi-implicit Euler step: velocity first, then position from the new
    velocity.
    """
    vx += ax * dt
    vy += ay * dt
    x += vx * dt
    y += vy * dt
    return x, y, vx, vy


class Particle:
    """
    A single snowflake with independent kinematic and orientation state.
    """
    def __init__(
        self,
        bounds: Bounds,
        tunables: "Tunables",
        random: Callable[[], float],
        quantum_enabled: bool = False
    ):
        """
        Initializes the flake somewhere inside the visible area.

        Args:
            bounds (Bounds): Surface dimensions used for the initial placement.
            tunables (Tunables): Shared parameter source, read on every update.
            random (Callable[[], float]): Uniform [0, 1) generator.
            quantum_enabled (bool): Adds the quantum jitter and tunneling.
        """
        self.tunables = tunables
        self.random = random
        self.quantum_enabled = quantum_enabled

        self.x = 0.0
        self.y = 0.0
        self.vx = 0.0
        self.vy = 0.0
        self.size = SIZE_MIN
        self.angle = 0.0
        self.angular_velocity = 0.0

        self.reset(bounds, initial=True)

    def reset(self, bounds: Bounds, initial: bool = False) -> None:
        """Replaces the whole state with a fresh flake."""
        rand = self.random
        self.x = rand() * bounds.width
        self.y = rand() * bounds.height if initial else RESPAWN_Y
        self.vx = 0.0
        self.vy = 0.0
        self.size = SIZE_MIN + rand() * (SIZE_MAX - SIZE_MIN)
        self.angle = rand() * 2 * math.pi
        self.angular_velocity = (rand() - 0.5) * 2 * SPIN_MAX

    def update(self, dt: float, clock_ms: float, bounds: Bounds) -> None:
        """
        Advances the flake by `dt` seconds at wall-clock time `clock_ms`.
        """
        if not math.isfinite(dt) or dt <= 0:
            return
        if not math.isfinite(clock_ms):
            clock_ms = 0.0

        params = self.tunables
        rand = self.random

        # Wind is a wave travelling across the screen over time.
        wind_acc = params.wind_strength * math.sin(clock_ms / 1000 + self.x / 100)
        turbulence_acc = (rand() - 0.5) * params.turbulence

        ax = wind_acc + turbulence_acc - params.drag * self.vx
        ay = params.gravity - params.drag * self.vy

        quantum = self.quantum_enabled and params.quantum_factor != 0
        if quantum:
            ax += params.quantum_factor * (rand() - 0.5) * QUANTUM_SCALE
            ay += params.quantum_factor * (rand() - 0.5) * QUANTUM_SCALE

        self.x, self.y, self.vx, self.vy = _integrate(
            self.x, self.y, self.vx, self.vy, ax, ay, dt
        )

        desired_angle = math.atan2(self.vy, self.vx)
        angle = lerp_angle(
            self.angle + self.angular_velocity * dt,
            desired_angle,
            ALIGNMENT_RATE * dt
        )
        self.angle = angle if math.isfinite(angle) else desired_angle

        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            self.reset(bounds, initial=False)
            return

        # Tunneling runs before the regular recycle and replaces it this tick.
        if self.quantum_enabled:
            if self.y > bounds.height - TUNNEL_BAND and rand() < TUNNEL_PROBABILITY:
                self.y = RESPAWN_Y
                return

        if (self.y > bounds.height + BOTTOM_MARGIN
                or self.x < -HORIZONTAL_MARGIN
                or self.x > bounds.width + HORIZONTAL_MARGIN):
            self.reset(bounds, initial=False)

    def render(self, surface: "RenderSurface") -> None:
        """Strokes the six branches of the flake as a single path."""
        size = self.size
        surface.save()
        surface.translate(self.x, self.y)
        surface.rotate(self.angle)
        surface.begin_path()
        for _ in range(SNOWFLAKE_BRANCHES):
            surface.move_to(0.0, 0.0)
            surface.line_to(size * BRANCH_LENGTH, 0.0)
            surface.move_to(size * SIDE_BRANCH_ROOT, 0.0)
            surface.line_to(size * SIDE_BRANCH_TIP, size)
            surface.move_to(size * SIDE_BRANCH_ROOT, 0.0)
            surface.line_to(size * SIDE_BRANCH_TIP, -size)
            surface.rotate(BRANCH_ROTATION)
        surface.stroke(SNOWFLAKE_COLOR, SNOWFLAKE_ALPHA, SNOWFLAKE_LINE_WIDTH)
        surface.restore()
