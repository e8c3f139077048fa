# visualization.py
"""
Handles the snowfall window and its control panel using Pygame.
"""
import logging
from typing import List, Optional, Tuple, TYPE_CHECKING

import pygame

from canvas import CanvasSurface
from constants import (
    BACKGROUND_COLOR, DEFAULT_WINDOW_SIZE, UI_BACKGROUND_ALPHA,
    UI_PANEL_MARGIN, UI_PANEL_WIDTH, WINDOW_TITLE
)
from particle import Bounds
from tunables import ParameterControl, Tunables

if TYPE_CHECKING:
    from simulation import ParticleField


# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, controls: List[ParameterControl], fullscreen: bool,
#              window_size: Tuple[int, int], interactive_controls: bool):
#     - Side Effects: Initializes Pygame, opens a resizable window (or a
#       borderless fullscreen one) and allocates the snow canvas.
#
#   - bounds(self) -> Bounds:
#     - Outputs: The live size of the snow canvas. Suitable as the
#       ParticleField bounds source.
#
#   - draw(self, field: ParticleField, tunables: Tunables) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Handles events (quit, resize, panel input), composes
#       the background, the snow layer and the panel, and flips the display.

class Visualizer:
    """
    Presents the snow canvas and, optionally, the tunable control panel.
    """
    def __init__(
        self,
        controls: List[ParameterControl],
        fullscreen: bool = False,
        window_size: Tuple[int, int] = DEFAULT_WINDOW_SIZE,
        interactive_controls: bool = True
    ):
        """
        Initializes Pygame and the display window.
        """
        pygame.init()
        pygame.font.init()

        self.fullscreen = fullscreen
        if fullscreen:
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width, height = window_size
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()

        # Snow is drawn on its own transparent layer.
        self.canvas = CanvasSurface(width, height)

        self.controls = controls
        self.interactive_controls = interactive_controls

        try:
            self.font_title = pygame.font.SysFont("Segoe UI", 16, bold=True)
            self.font_main = pygame.font.SysFont("Segoe UI", 14)
            self.font_main_bold = pygame.font.SysFont("Segoe UI", 14, bold=True)
        except pygame.error:
            logging.warning("Segoe UI font not found, falling back to default sans-serif.")
            self.font_title = pygame.font.SysFont(None, 20, bold=True)
            self.font_main = pygame.font.SysFont(None, 18)
            self.font_main_bold = pygame.font.SysFont(None, 18, bold=True)

        # --- UI Color Palette ---
        self.button_color = (80, 80, 80)
        self.button_hover_color = (110, 110, 110)
        self.text_color_title = (255, 255, 255)
        self.text_color_key = (200, 200, 200)
        self.text_color_value = (255, 255, 255)
        self.param_box_color = (60, 60, 60, 160)
        self.param_box_hover_color = (90, 90, 90, 200)
        self.param_box_height = 34
        self.param_box_spacing = 4
        self.button_height = 30

        self.hovered_control: Optional[ParameterControl] = None
        self._layout_panel()

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def bounds(self) -> Bounds:
        return self.canvas.bounds()

    def _layout_panel(self):
        """Places the panel in the top-right corner of the current window."""
        width = self.canvas.width
        panel_x = max(width - UI_PANEL_WIDTH - UI_PANEL_MARGIN, 0)
        inner_x = panel_x + UI_PANEL_MARGIN
        inner_width = UI_PANEL_WIDTH - 2 * UI_PANEL_MARGIN

        current_y = UI_PANEL_MARGIN * 2 + self.font_title.get_linesize()
        self.control_rects = []
        for control in self.controls:
            rect = pygame.Rect(inner_x, current_y, inner_width, self.param_box_height)
            self.control_rects.append((control, rect))
            current_y = rect.bottom + self.param_box_spacing

        current_y += UI_PANEL_MARGIN // 2
        self.reset_button_rect = pygame.Rect(inner_x, current_y, inner_width, self.button_height)
        self.scatter_button_rect = pygame.Rect(
            inner_x, self.reset_button_rect.bottom + 5, inner_width, self.button_height
        )

        panel_height = self.scatter_button_rect.bottom + UI_PANEL_MARGIN
        self.panel_rect = pygame.Rect(panel_x, UI_PANEL_MARGIN, UI_PANEL_WIDTH, panel_height - UI_PANEL_MARGIN)
        self.ui_panel_surface = pygame.Surface(self.panel_rect.size, pygame.SRCALPHA)
        self.ui_panel_surface.fill((40, 40, 40, UI_BACKGROUND_ALPHA))

    def _get_control_from_pos(self, pos: Tuple[int, int]) -> Optional[ParameterControl]:
        for control, rect in self.control_rects:
            if rect.collidepoint(pos):
                return control
        return None

    def _handle_resize(self, width: int, height: int):
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.canvas.resize(width, height)
        self._layout_panel()
        logging.info(f"Window resized to {width}x{height}.")

    def _draw_button(self, rect: pygame.Rect, label: str, mouse_pos: Tuple[int, int]):
        """Draws a button and handles its hover state."""
        is_hovered = rect.collidepoint(mouse_pos)
        color = self.button_hover_color if is_hovered else self.button_color

        pygame.draw.rect(self.screen, color, rect, border_radius=5)

        text_surf = self.font_main.render(label, True, self.text_color_title)
        text_rect = text_surf.get_rect(center=rect.center)
        self.screen.blit(text_surf, text_rect)

    def _draw_controls(self, tunables: Tunables):
        """Renders one box per tunable with its label, value and range."""
        title_surf = self.font_title.render("Snowfall", True, self.text_color_title)
        self.screen.blit(title_surf, (self.panel_rect.x + UI_PANEL_MARGIN, self.panel_rect.y + UI_PANEL_MARGIN // 2))

        for control, rect in self.control_rects:
            box_color = self.param_box_hover_color if control is self.hovered_control else self.param_box_color
            box_surf = pygame.Surface(rect.size, pygame.SRCALPHA)
            pygame.draw.rect(box_surf, box_color, box_surf.get_rect(), border_radius=6)
            self.screen.blit(box_surf, rect.topleft)

            key_surf = self.font_main_bold.render(control.label, True, self.text_color_key)
            self.screen.blit(key_surf, key_surf.get_rect(midleft=(rect.x + 8, rect.centery)))

            value = control.value(tunables)
            value_text = f"{value:.1f}  [{control.minimum:g}-{control.maximum:g}]"
            value_surf = self.font_main.render(value_text, True, self.text_color_value)
            self.screen.blit(value_surf, value_surf.get_rect(midright=(rect.right - 8, rect.centery)))

    def _handle_events(self, field: "ParticleField", tunables: Tunables, mouse_pos: Tuple[int, int]) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down visualizer.")
                return False

            if event.type == pygame.VIDEORESIZE and not self.fullscreen:
                self._handle_resize(event.w, event.h)

            if not self.interactive_controls:
                continue

            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self.reset_button_rect.collidepoint(event.pos):
                    tunables.restore_defaults()
                elif self.scatter_button_rect.collidepoint(event.pos):
                    field.scatter()

            if event.type == pygame.MOUSEWHEEL:
                control = self._get_control_from_pos(mouse_pos)
                if control is not None:
                    # event.y is 1 for scroll up, -1 for scroll down
                    control.nudge(tunables, event.y)
        return True

    def draw(self, field: "ParticleField", tunables: Tunables) -> bool:
        """
        Composes the frame from the already-rendered snow canvas.

        Returns:
            bool: False if the application should exit, True otherwise.
        """
        mouse_pos = pygame.mouse.get_pos()
        self.hovered_control = self._get_control_from_pos(mouse_pos) if self.interactive_controls else None

        if not self._handle_events(field, tunables, mouse_pos):
            return False

        self.screen.fill(BACKGROUND_COLOR)
        self.screen.blit(self.canvas.layer, (0, 0))

        if self.interactive_controls:
            self.screen.blit(self.ui_panel_surface, self.panel_rect.topleft)
            self._draw_controls(tunables)
            self._draw_button(self.reset_button_rect, "Reset", mouse_pos)
            self._draw_button(self.scatter_button_rect, "Scatter", mouse_pos)

        pygame.display.flip()
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()
