"""
scene_controller.py
-------------------
Base class for the pieces a gameplay scene delegates its frame loop to.

A scene calls enter() when it becomes current, then update/draw/
handle_event every frame while `enabled`, and exit() when it leaves.
"""

from abc import ABC


class SceneController(ABC):
    """One slice of a scene's logic; every hook is optional."""

    def __init__(self, scene):
        """
        Args:
            scene: Owning scene, or None when driven directly (tests, tools)
        """
        self.scene = scene
        self.enabled = True

    def enter(self):
        pass

    def exit(self):
        pass

    def update(self, dt: float):
        pass

    def draw(self, draw_manager):
        """Queue visuals on the draw manager (queue_draw(surface, rect, layer=...))."""
        pass

    def handle_event(self, event):
        pass
