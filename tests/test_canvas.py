import math

import numpy as np
import pygame
import pytest

from canvas import CanvasSurface
from conftest import SequenceRandom
from particle import Bounds, Particle
from tunables import Tunables


@pytest.fixture(scope="module", autouse=True)
def pygame_session():
    pygame.init()
    yield
    pygame.quit()


def painted(surface):
    return pygame.mask.from_surface(surface.layer).count()


def test_save_and_restore_round_trip_the_transform():
    canvas = CanvasSurface(100, 100)
    canvas.save()
    canvas.translate(10, 20)
    canvas.rotate(1.2)
    canvas.restore()
    assert np.allclose(canvas.matrix, np.identity(3))


def test_unmatched_restore_is_ignored():
    canvas = CanvasSurface(100, 100)
    canvas.restore()
    assert np.allclose(canvas.matrix, np.identity(3))


def test_points_use_the_transform_at_the_time_they_are_added():
    canvas = CanvasSurface(100, 100)
    canvas.translate(10, 20)
    canvas.rotate(math.pi / 2)
    canvas.begin_path()
    canvas.move_to(0, 0)
    canvas.line_to(5, 0)
    canvas.stroke((255, 255, 255), 0.8, 1)
    assert canvas.layer.get_at((10, 22)) == pygame.Color(255, 255, 255, 204)
    assert canvas.layer.get_at((12, 20)).a == 0


def test_begin_path_discards_pending_segments():
    canvas = CanvasSurface(50, 50)
    canvas.move_to(0, 0)
    canvas.line_to(40, 40)
    canvas.begin_path()
    canvas.stroke((255, 255, 255), 1.0, 1)
    assert painted(canvas) == 0


def test_clear_rect_erases_the_layer():
    canvas = CanvasSurface(50, 50)
    canvas.move_to(0, 10)
    canvas.line_to(49, 10)
    canvas.stroke((255, 255, 255), 1.0, 1)
    assert painted(canvas) > 0
    canvas.clear_rect(0, 0, 50, 50)
    assert painted(canvas) == 0


def test_resize_changes_the_live_bounds():
    canvas = CanvasSurface(640, 480)
    assert canvas.bounds() == Bounds(640, 480)
    canvas.resize(320, 200)
    assert canvas.bounds() == Bounds(320, 200)
    assert canvas.layer.get_size() == (320, 200)


def test_empty_canvas_is_usable():
    canvas = CanvasSurface(0, 0)
    assert canvas.bounds() == Bounds(0, 0)
    canvas.clear_rect(0, 0, 0, 0)


def test_particle_draws_on_the_canvas_without_leaking_transform():
    canvas = CanvasSurface(200, 200)
    particle = Particle(canvas.bounds(), Tunables(), SequenceRandom(0.5))
    particle.render(canvas)
    assert painted(canvas) > 0
    assert np.allclose(canvas.matrix, np.identity(3))
    # Main branches reach size * 5 = 15 px from the center at (100, 100).
    assert canvas.layer.get_at((100, 100)).a == 204
    assert canvas.layer.get_at((100, 130)).a == 0
