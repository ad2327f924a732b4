"""
tutorial_controller.py
----------------------
Wires the tutorial sequencer into a gameplay scene.

Per frame: poll input, honor a skip request, tick the sequencer (which
advances its timers), tick the survival countdown, draw the overlay.
"""

import pygame

from lastman.core.debug.debug_logger import DebugLogger
from lastman.core.runtime.scene_controller import SceneController
from lastman.core.services.event_manager import get_events
from lastman.core.services.input_manager import InputManager
from lastman.systems.game_timer import GameTimer
from lastman.tutorial.gates import GameGates
from lastman.tutorial.sequencer import TutorialSequencer
from lastman.tutorial.settings import load_tutorial
from lastman.ui.tutorial_overlay import TutorialOverlay


class TutorialController(SceneController):
    """Drives a TutorialSequencer from the scene's frame loop."""

    def __init__(self, scene, sequencer: TutorialSequencer, input_manager,
                 game_timer=None, overlay=None):
        super().__init__(scene)
        self.sequencer = sequencer
        self.input_manager = input_manager
        self.game_timer = game_timer
        self.overlay = overlay

    @classmethod
    def create(cls, scene=None, player=None, bullet_manager=None,
               input_manager=None, on_complete=None, config="tutorial.json"):
        """Build the tutorial stack for a scene from tutorial.json."""
        settings, catalog = load_tutorial(config)
        events = get_events()

        overlay = TutorialOverlay()
        game_timer = GameTimer(events=events)
        gates = GameGates(
            player=player,
            game_timer=game_timer,
            overlay=overlay,
            bullet_manager=bullet_manager,
        )
        sequencer = TutorialSequencer(
            gates=gates,
            catalog=catalog,
            settings=settings,
            events=events,
            on_complete=on_complete,
        )
        return cls(scene, sequencer, input_manager or InputManager(),
                   game_timer=game_timer, overlay=overlay)

    def enter(self):
        """Reset the countdown and begin the tutorial."""
        if self.game_timer:
            self.game_timer.reset()
        self.sequencer.start()

    def exit(self):
        """Leaving the scene mid-tutorial releases the player and the timer."""
        self.sequencer.skip()

    # ===========================================================
    # Frame Cycle
    # ===========================================================

    def update(self, dt: float):
        if not self.enabled:
            return
        self.input_manager.update()
        snapshot = self.input_manager.snapshot()

        if snapshot.skip_pressed and self.sequencer.is_active():
            self.sequencer.skip()

        self.sequencer.update(dt, snapshot)

        if self.game_timer:
            self.game_timer.update(dt)

    def draw(self, draw_manager):
        if self.overlay:
            self.overlay.draw(draw_manager)

    def handle_event(self, event):
        if not self.enabled or self.overlay is None:
            return
        if event.type != pygame.MOUSEBUTTONDOWN:
            return
        if self.overlay.hit_skip_button(event.pos):
            DebugLogger.action("Skip button pressed", category="ui")
            self.sequencer.skip()
