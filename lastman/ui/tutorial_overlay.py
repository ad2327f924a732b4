"""
tutorial_overlay.py
-------------------
Instruction panel shown while the tutorial runs.

Holds the visible flag, the current message and the skip button area.
Rendering is multi-line text centered on screen, rebuilt only when the
message changes.
"""

import pygame

from lastman.core.debug.debug_logger import DebugLogger
from lastman.core.runtime.game_settings import Display, Fonts, Layers


TEXT_COLOR = (255, 255, 255)
PANEL_COLOR = (0, 0, 0, 160)
PANEL_PADDING = 24
SKIP_BUTTON_SIZE = (140, 44)
SKIP_BUTTON_MARGIN = 20


class TutorialOverlay:
    """Tutorial panel state and drawing."""

    def __init__(self, font_size: int = Fonts.SIZE, skip_corner: str = "bottom_right"):
        self.visible = False
        self.text = ""
        self.font_size = font_size
        self.skip_button_rect = pygame.Rect((0, 0), SKIP_BUTTON_SIZE)
        self.move_skip_button(skip_corner)
        self._surface = None
        self._dirty = True

    # ===========================================================
    # State
    # ===========================================================

    def set_visible(self, visible: bool):
        self.visible = bool(visible)
        DebugLogger.state(f"Tutorial overlay {'shown' if visible else 'hidden'}", category="ui")

    def set_text(self, text: str):
        if text != self.text:
            self.text = text
            self._dirty = True

    def move_skip_button(self, corner: str):
        """Anchor the skip button to a screen corner ("top_left", "bottom_right", ...)."""
        vertical, _, horizontal = corner.partition("_")
        rect = self.skip_button_rect
        if horizontal == "left":
            rect.left = SKIP_BUTTON_MARGIN
        else:
            rect.right = Display.WIDTH - SKIP_BUTTON_MARGIN
        if vertical == "top":
            rect.top = SKIP_BUTTON_MARGIN
        else:
            rect.bottom = Display.HEIGHT - SKIP_BUTTON_MARGIN

    def hit_skip_button(self, pos) -> bool:
        return self.visible and self.skip_button_rect.collidepoint(pos)

    # ===========================================================
    # Rendering
    # ===========================================================

    def draw(self, draw_manager):
        if not self.visible or not self.text:
            return
        if self._dirty:
            self._surface = self._render_panel()
            self._dirty = False
        rect = self._surface.get_rect(center=(Display.WIDTH // 2, Display.HEIGHT // 3))
        draw_manager.queue_draw(self._surface, rect, layer=Layers.OVERLAY)

    def _render_panel(self):
        font = pygame.font.Font(Fonts.DEFAULT, self.font_size)
        lines = [font.render(line, True, TEXT_COLOR) for line in self.text.split("\n")]

        width = max(s.get_width() for s in lines) + PANEL_PADDING * 2
        height = (sum(s.get_height() for s in lines)
                  + Fonts.LINE_SPACING * (len(lines) - 1)
                  + PANEL_PADDING * 2)

        panel = pygame.Surface((width, height), pygame.SRCALPHA)
        panel.fill(PANEL_COLOR)

        y = PANEL_PADDING
        for surf in lines:
            panel.blit(surf, ((width - surf.get_width()) // 2, y))
            y += surf.get_height() + Fonts.LINE_SPACING
        return panel
