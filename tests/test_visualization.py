import pygame
import pytest

from conftest import SequenceRandom
from particle import Bounds
from simulation import ParticleField
from tunables import Tunables, default_controls
from visualization import Visualizer


@pytest.fixture
def visualizer():
    vis = Visualizer(default_controls(quantum_enabled=True), window_size=(640, 480))
    pygame.event.clear()
    yield vis
    vis.close()


@pytest.fixture
def tunables():
    return Tunables()


@pytest.fixture
def field(visualizer, tunables):
    return ParticleField(4, visualizer.bounds, tunables, SequenceRandom(0.25), quantum_enabled=True)


def post(event_type, **attributes):
    pygame.event.post(pygame.event.Event(event_type, **attributes))


def control_rect(visualizer, name):
    for control, rect in visualizer.control_rects:
        if control.name == name:
            return rect
    raise KeyError(name)


def test_window_starts_at_requested_size(visualizer):
    assert visualizer.bounds() == Bounds(640, 480)


def test_resize_event_updates_live_bounds(visualizer, field, tunables):
    post(pygame.VIDEORESIZE, w=400, h=300, size=(400, 300))
    assert visualizer.draw(field, tunables)
    assert visualizer.bounds() == Bounds(400, 300)
    assert visualizer.canvas.layer.get_size() == (400, 300)
    assert visualizer.panel_rect.right <= 400
    assert field.bounds_source() == Bounds(400, 300)


def test_reset_button_restores_defaults(visualizer, field, tunables):
    tunables.gravity = 80.0
    tunables.wind_strength = 0.0
    post(pygame.MOUSEBUTTONDOWN, button=1, pos=visualizer.reset_button_rect.center)
    assert visualizer.draw(field, tunables)
    assert tunables.gravity == 30.0
    assert tunables.wind_strength == 10.0


def test_scatter_button_reseeds_the_field(visualizer, field, tunables):
    for particle in field.particles:
        particle.y = -10.0
        particle.vy = 40.0
    post(pygame.MOUSEBUTTONDOWN, button=1, pos=visualizer.scatter_button_rect.center)
    assert visualizer.draw(field, tunables)
    for particle in field.particles:
        assert particle.y == pytest.approx(120.0)
        assert particle.vy == 0.0


def test_right_click_does_nothing(visualizer, field, tunables):
    tunables.gravity = 80.0
    post(pygame.MOUSEBUTTONDOWN, button=3, pos=visualizer.reset_button_rect.center)
    assert visualizer.draw(field, tunables)
    assert tunables.gravity == 80.0


def test_mouse_wheel_nudges_hovered_control(visualizer, field, tunables):
    post(pygame.MOUSEWHEEL, x=0, y=1)
    post(pygame.MOUSEWHEEL, x=0, y=1)
    assert visualizer._handle_events(field, tunables, control_rect(visualizer, 'gravity').center)
    assert tunables.gravity == 32.0

    post(pygame.MOUSEWHEEL, x=0, y=-1)
    assert visualizer._handle_events(field, tunables, control_rect(visualizer, 'quantum_factor').center)
    assert tunables.quantum_factor == pytest.approx(0.4)


def test_mouse_wheel_away_from_panel_is_ignored(visualizer, field, tunables):
    post(pygame.MOUSEWHEEL, x=0, y=1)
    assert visualizer._handle_events(field, tunables, (5, 470))
    assert tunables.as_dict() == Tunables().as_dict()


def test_quit_and_escape_stop_the_loop(visualizer, field, tunables):
    post(pygame.QUIT)
    assert visualizer.draw(field, tunables) is False
    post(pygame.KEYDOWN, key=pygame.K_ESCAPE, mod=0, unicode="\x1b", scancode=41)
    assert visualizer.draw(field, tunables) is False


def test_panel_input_is_ignored_without_interactive_controls(tunables):
    vis = Visualizer(default_controls(quantum_enabled=False), window_size=(640, 480), interactive_controls=False)
    try:
        pygame.event.clear()
        field = ParticleField(2, vis.bounds, tunables, SequenceRandom(0.25))
        tunables.gravity = 80.0
        post(pygame.MOUSEBUTTONDOWN, button=1, pos=vis.reset_button_rect.center)
        post(pygame.MOUSEWHEEL, x=0, y=1)
        assert vis._handle_events(field, tunables, control_rect(vis, 'gravity').center)
        assert tunables.gravity == 80.0
    finally:
        vis.close()
