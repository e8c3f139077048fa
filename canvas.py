# canvas.py
"""
The rendering capability the snowflakes draw on.

RenderSurface is the small, canvas-like drawing interface the particles need.
CanvasSurface implements it on top of a transparent Pygame surface, keeping
its own affine transform so that rotated paths can be stroked with plain
pygame.draw calls.
"""
import logging
import math
from typing import List, Protocol, Tuple

import numpy as np
import pygame

from particle import Bounds

# --- Data Contracts ---
#
# class RenderSurface(Protocol):
#   - clear_rect(x, y, width, height): Clears a device-space rectangle.
#   - save() / restore(): Push / pop the current transform.
#   - translate(dx, dy) / rotate(angle): Post-multiply the current transform.
#   - begin_path(): Discards any pending path.
#   - move_to(x, y) / line_to(x, y): Add points, transformed by the transform
#     current at the time of the call.
#   - stroke(color, alpha, width): Draws the pending path.
#
# class CanvasSurface:
#   - __init__(self, width: int, height: int):
#     - Side Effects: Allocates a per-pixel alpha layer of that size.
#   - Invariants:
#     - The transform stack never underflows; an unmatched restore() is
#       logged and ignored.
#     - bounds() always reflects the most recent resize().

Point = Tuple[float, float]


class RenderSurface(Protocol):
    def clear_rect(self, x: float, y: float, width: float, height: float) -> None: ...
    def save(self) -> None: ...
    def restore(self) -> None: ...
    def translate(self, dx: float, dy: float) -> None: ...
    def rotate(self, angle: float) -> None: ...
    def begin_path(self) -> None: ...
    def move_to(self, x: float, y: float) -> None: ...
    def line_to(self, x: float, y: float) -> None: ...
    def stroke(self, color: Tuple[int, int, int], alpha: float, width: int) -> None: ...


class CanvasSurface:
    """
    A RenderSurface backed by a Pygame SRCALPHA surface.
    """
    def __init__(self, width: int, height: int):
        self.layer = pygame.Surface((max(width, 1), max(height, 1)), pygame.SRCALPHA)
        self.width = width
        self.height = height
        self.matrix = np.identity(3)
        self._stack: List[np.ndarray] = []
        self._subpaths: List[List[Point]] = []

    def bounds(self) -> Bounds:
        return Bounds(self.width, self.height)

    def resize(self, width: int, height: int) -> None:
        """Reallocates the layer for a new window size."""
        self.layer = pygame.Surface((max(width, 1), max(height, 1)), pygame.SRCALPHA)
        self.width = width
        self.height = height
        logging.debug(f"Canvas layer resized to {width}x{height}.")

    # --- Transform ---

    def save(self) -> None:
        self._stack.append(self.matrix.copy())

    def restore(self) -> None:
        if not self._stack:
            logging.warning("restore() called without a matching save(); ignored.")
            return
        self.matrix = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        self.matrix = self.matrix @ np.array([
            [1.0, 0.0, dx],
            [0.0, 1.0, dy],
            [0.0, 0.0, 1.0],
        ])

    def rotate(self, angle: float) -> None:
        c, s = math.cos(angle), math.sin(angle)
        self.matrix = self.matrix @ np.array([
            [c, -s, 0.0],
            [s, c, 0.0],
            [0.0, 0.0, 1.0],
        ])

    def _apply(self, x: float, y: float) -> Point:
        m = self.matrix
        return (
            m[0, 0] * x + m[0, 1] * y + m[0, 2],
            m[1, 0] * x + m[1, 1] * y + m[1, 2],
        )

    # --- Paths ---

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([self._apply(x, y)])

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            # Canvas semantics: a line_to with no current point starts one.
            self.move_to(x, y)
            return
        self._subpaths[-1].append(self._apply(x, y))

    def stroke(self, color: Tuple[int, int, int], alpha: float, width: int) -> None:
        """Draws every sub-path with at least one segment."""
        rgba = (color[0], color[1], color[2], round(min(max(alpha, 0.0), 1.0) * 255))
        for points in self._subpaths:
            if len(points) >= 2:
                pygame.draw.lines(self.layer, rgba, False, points, width)

    # --- Clearing ---

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        """Clears a rectangle in device space, ignoring the transform."""
        self.layer.fill((0, 0, 0, 0), pygame.Rect(int(x), int(y), int(math.ceil(width)), int(math.ceil(height))))
