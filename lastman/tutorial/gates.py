"""
gates.py
--------
Boundary between the tutorial and the game systems it switches.

The sequencer only ever talks to ExternalGates: it never looks up the
player, the game timer or the overlay itself, and never reads state
back from them.
"""

from abc import ABC, abstractmethod

from lastman.core.debug.debug_logger import DebugLogger
from lastman.core.runtime.game_settings import TutorialTiming
from lastman.scenes.cutscenes.cutscene_action import MoveEntityAction


class ExternalGates(ABC):
    """Switches and demonstrations the tutorial needs from the game."""

    @abstractmethod
    def set_player_control_enabled(self, enabled: bool):
        """Honor or ignore the player's own movement/shooting input."""

    @abstractmethod
    def set_game_timer_enabled(self, enabled: bool):
        """Run or freeze the survival countdown."""

    @abstractmethod
    def perform_bounded_move(self, direction, distance: float, duration: float):
        """
        Build a scripted move of the player.

        Returns:
            CutsceneAction to be driven by the caller's scheduler, or
            None when there is nothing to move. Must work while player
            control is disabled.
        """

    @abstractmethod
    def fire_demo_shot(self):
        """Fire exactly one shot, regardless of player control."""

    @abstractmethod
    def show_overlay(self, visible: bool):
        pass

    @abstractmethod
    def set_overlay_text(self, text: str):
        pass


class GameGates(ExternalGates):
    """
    ExternalGates over the game's own objects.

    Any collaborator may be None; the matching call is then skipped
    with a warning so the tutorial keeps its timing.

    Args:
        player: Entity with `rect`, `virtual_pos` and `input_locked`
        game_timer: GameTimer (or anything with `enabled`)
        overlay: TutorialOverlay
        bullet_manager: Anything with spawn(pos=..., vel=..., owner=...)
    """

    def __init__(self, player=None, game_timer=None, overlay=None, bullet_manager=None,
                 bullet_speed: float = TutorialTiming.DEMO_BULLET_SPEED):
        self.player = player
        self.game_timer = game_timer
        self.overlay = overlay
        self.bullet_manager = bullet_manager
        self.bullet_speed = bullet_speed

    # ===========================================================
    # Control Switches
    # ===========================================================

    def set_player_control_enabled(self, enabled: bool):
        if self.player is None:
            DebugLogger.warn("No player; skipping control toggle", category="gates")
            return
        self.player.input_locked = not enabled
        DebugLogger.state(f"Player control {'ON' if enabled else 'OFF'}", category="gates")

    def set_game_timer_enabled(self, enabled: bool):
        if self.game_timer is None:
            DebugLogger.warn("No game timer; skipping timer toggle", category="gates")
            return
        self.game_timer.enabled = enabled
        DebugLogger.state(f"Game timer {'running' if enabled else 'paused'}", category="gates")

    # ===========================================================
    # Demonstrations
    # ===========================================================

    def perform_bounded_move(self, direction, distance: float, duration: float):
        if self.player is None:
            DebugLogger.warn("No player; skipping demo move", category="gates")
            return None
        dx, dy = direction.vector
        DebugLogger.action(f"Demo move {direction.name} ({distance:g}px)", category="gates")
        return MoveEntityAction.nudge(self.player, (dx * distance, dy * distance), duration)

    def fire_demo_shot(self):
        if self.bullet_manager is None or self.player is None:
            DebugLogger.warn("No bullet manager or player; skipping demo shot", category="gates")
            return
        self.bullet_manager.spawn(
            pos=self.player.rect.center,
            vel=(0, -self.bullet_speed),
            owner="player",
        )
        DebugLogger.action("Demo shot fired", category="gates")

    # ===========================================================
    # Overlay
    # ===========================================================

    def show_overlay(self, visible: bool):
        if self.overlay is None:
            DebugLogger.warn("No tutorial overlay; skipping visibility", category="gates")
            return
        self.overlay.set_visible(visible)

    def set_overlay_text(self, text: str):
        if self.overlay is None:
            DebugLogger.warn("No tutorial overlay; skipping text", category="gates")
            return
        self.overlay.set_text(text)
